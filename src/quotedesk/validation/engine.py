"""Census validation pipeline.

``validate`` runs column resolution, row classification, issue aggregation and
scoring over an in-memory census. It is a pure function of its inputs apart
from the ``validated_at`` timestamp, so concurrent calls need no locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, Union

from quotedesk.core.exceptions import CensusInputError
from quotedesk.models.census import CensusRow
from quotedesk.models.validation import ValidationResult
from quotedesk.validation.aggregator import aggregate_issues
from quotedesk.validation.fields import FIELD_TABLE, FieldRequirement
from quotedesk.validation.resolver import resolve_columns
from quotedesk.validation.row_validator import validate_rows
from quotedesk.validation.scoring import calculate_scores

logger = logging.getLogger(__name__)

RowInput = Union[CensusRow, Mapping[str, Any]]


def _check_columns(columns: Any) -> list[str]:
    if isinstance(columns, (str, bytes)) or not isinstance(columns, Sequence):
        raise CensusInputError(
            f"columns must be a sequence of header strings, got {type(columns).__name__}"
        )
    for position, column in enumerate(columns):
        if not isinstance(column, str):
            raise CensusInputError(
                f"column {position} must be a string, got {type(column).__name__}"
            )
    return list(columns)


def _index_rows(rows: Any) -> list[tuple[int, Mapping[str, Any]]]:
    if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
        raise CensusInputError(
            f"rows must be a collection of row mappings, got {type(rows).__name__}"
        )
    indexed: list[tuple[int, Mapping[str, Any]]] = []
    seen: set[int] = set()
    for position, row in enumerate(rows):
        if isinstance(row, CensusRow):
            row_index, data = row.row_index, row.data
        elif isinstance(row, Mapping):
            row_index, data = position, row
        else:
            raise CensusInputError(
                f"row {position} must be a mapping or CensusRow, got {type(row).__name__}"
            )
        if row_index < 0:
            raise CensusInputError(f"row index must be non-negative, got {row_index}")
        if row_index in seen:
            raise CensusInputError(f"duplicate row index {row_index}")
        seen.add(row_index)
        indexed.append((row_index, data))
    return indexed


def validate(
    columns: Sequence[str],
    rows: Iterable[RowInput],
    *,
    fields: tuple[FieldRequirement, ...] = FIELD_TABLE,
) -> ValidationResult:
    """Validate a census and score it for the PEO and ACA programs.

    Args:
        columns: Raw header strings in upload order.
        rows: Row mappings keyed by raw header. Plain mappings are indexed by
            position; ``CensusRow`` objects keep their own ``row_index``.
        fields: Field requirement table to apply.

    Raises:
        CensusInputError: If ``columns`` or ``rows`` are not well-formed
            collections. Bad cell data never raises.
    """
    header_list = _check_columns(columns)
    indexed = _index_rows(rows)

    resolution = resolve_columns(header_list, fields)
    outcomes = validate_rows(resolution, indexed, fields)
    issues = aggregate_issues(outcomes, (row_index for row_index, _ in indexed))
    scores = calculate_scores(len(indexed), issues)

    logger.info(
        "Validated census: rows=%d peo=%d%% aca=%d%% issues=%d",
        len(indexed),
        scores.peo_score,
        scores.aca_score,
        len(issues),
    )
    return ValidationResult(
        peo_score=scores.peo_score,
        aca_score=scores.aca_score,
        total_rows=len(indexed),
        peo_valid_rows=scores.peo_valid_rows,
        aca_valid_rows=scores.aca_valid_rows,
        issues=issues,
        validated_at=datetime.now(timezone.utc),
    )
