"""Classify every required cell of a census as ok, missing or invalid.

Each (field, row) pair lands in exactly one ``CellStatus``. A field whose
column is absent is reported once at column level and its cells are not
inspected.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Mapping, Sequence

from pydantic import BaseModel, Field

from quotedesk.validation import predicates
from quotedesk.validation.fields import FieldRequirement


class CellStatus(StrEnum):
    VALID = "valid"
    MISSING = "missing"
    INVALID = "invalid"


class FieldOutcome(BaseModel):
    """Per-field classification of all rows of one upload."""

    requirement: FieldRequirement
    column: str | None = None
    column_missing: bool = False
    missing_rows: list[int] = Field(default_factory=list)
    invalid_rows: list[int] = Field(default_factory=list)

    @property
    def failing_rows(self) -> set[int]:
        return set(self.missing_rows) | set(self.invalid_rows)


def classify_cell(requirement: FieldRequirement, value: Any) -> CellStatus:
    if predicates.is_absent(value):
        return CellStatus.MISSING
    if not requirement.predicate(value):
        return CellStatus.INVALID
    return CellStatus.VALID


def validate_rows(
    resolution: Mapping[str, str | None],
    rows: Sequence[tuple[int, Mapping[str, Any]]],
    fields: tuple[FieldRequirement, ...],
) -> list[FieldOutcome]:
    """Classify ``(row_index, data)`` rows against every required field."""
    ordered = sorted(rows, key=lambda item: item[0])
    outcomes: list[FieldOutcome] = []
    for requirement in fields:
        if not requirement.is_required:
            continue
        column = resolution.get(requirement.key)
        if column is None:
            outcomes.append(FieldOutcome(requirement=requirement, column_missing=True))
            continue

        outcome = FieldOutcome(requirement=requirement, column=column)
        for row_index, data in ordered:
            status = classify_cell(requirement, data.get(column))
            if status is CellStatus.MISSING:
                outcome.missing_rows.append(row_index)
            elif status is CellStatus.INVALID:
                outcome.invalid_rows.append(row_index)
        outcomes.append(outcome)
    return outcomes
