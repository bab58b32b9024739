"""Census validation engine."""

from __future__ import annotations

from quotedesk.validation.engine import validate
from quotedesk.validation.fields import FIELD_TABLE, FIELDS_BY_KEY, FieldRequirement, fields_for
from quotedesk.validation.resolver import normalize_header, resolve_columns

__all__ = [
    "FIELD_TABLE",
    "FIELDS_BY_KEY",
    "FieldRequirement",
    "fields_for",
    "normalize_header",
    "resolve_columns",
    "validate",
]
