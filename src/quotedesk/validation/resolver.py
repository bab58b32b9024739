"""Map raw census headers onto canonical field keys."""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Sequence

from quotedesk.validation.fields import FIELD_TABLE, FieldRequirement

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\s_\-]+")


def normalize_header(raw: str) -> str:
    """Lower-case, strip accents, trim and collapse whitespace/underscore/hyphen runs."""
    decomposed = unicodedata.normalize("NFKD", raw)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _SEPARATORS.sub(" ", stripped.lower().strip()).strip()


def resolve_columns(
    columns: Sequence[str],
    fields: tuple[FieldRequirement, ...] = FIELD_TABLE,
) -> dict[str, str | None]:
    """Return ``{field key: raw header or None}`` for every field in ``fields``.

    Candidates are tried in priority order, the field key first and then its
    aliases. The first uploaded header matching the earliest candidate wins.
    ``None`` marks a field absent from the upload.
    """
    normalized = [normalize_header(column) for column in columns]
    resolution: dict[str, str | None] = {}
    for requirement in fields:
        chosen = _match(requirement, normalized)
        resolution[requirement.key] = None if chosen is None else columns[chosen]
        if chosen is None:
            continue
        accepted = {normalize_header(candidate) for candidate in requirement.candidates}
        ignored = [columns[i] for i, header in enumerate(normalized)
                   if header in accepted and i != chosen]
        if ignored:
            logger.debug(
                "Field %s matched %d headers, using %r and ignoring %r",
                requirement.key, len(ignored) + 1, columns[chosen], ignored,
            )
    return resolution


def _match(requirement: FieldRequirement, normalized: Sequence[str]) -> int | None:
    for candidate in requirement.candidates:
        target = normalize_header(candidate)
        for i, header in enumerate(normalized):
            if header == target:
                return i
    return None
