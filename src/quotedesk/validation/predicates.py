"""Cell validity predicates for the field requirement table.

Every predicate accepts any raw cell value, treats ``None`` and blank strings
as absent (never valid), and returns ``False`` instead of raising on malformed
input.
"""

from __future__ import annotations

import math
import re
from datetime import date
from decimal import Decimal
from typing import Any

_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_ZIP = re.compile(r"^[0-9]{5}$")

# (pattern, group order) pairs; group order names which capture is y/m/d
_DATE_FORMATS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^(\d{4})-(\d{2})-(\d{2})$"), "ymd"),  # YYYY-MM-DD
    (re.compile(r"^(\d{2})/(\d{2})/(\d{4})$"), "mdy"),  # MM/DD/YYYY
    (re.compile(r"^(\d{2})-(\d{2})-(\d{4})$"), "mdy"),  # MM-DD-YYYY
    (re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2,4})$"), "mdy"),  # M/D/YY or M/D/YYYY
)

HOURS_PER_WEEK_MIN = 0
HOURS_PER_WEEK_MAX = 168


def as_text(value: Any) -> str | None:
    """Render a raw cell as text, or None when there is no cell."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def is_absent(value: Any) -> bool:
    text = as_text(value)
    return text is None or not text.strip()


def is_non_empty(value: Any) -> bool:
    return not is_absent(value)


def _expand_year(raw: str) -> int:
    year = int(raw)
    if len(raw) == 2:
        return 2000 + year if year < 50 else 1900 + year
    return year


def parse_date(value: Any) -> date | None:
    """Parse a census date cell, returning None when it is not a real date."""
    if isinstance(value, date):
        return value
    if is_absent(value):
        return None
    text = as_text(value).strip()
    for pattern, order in _DATE_FORMATS:
        match = pattern.match(text)
        if match is None:
            continue
        parts = dict(zip(order, match.groups()))
        try:
            return date(_expand_year(parts["y"]), int(parts["m"]), int(parts["d"]))
        except ValueError:
            return None
    return None


def is_valid_date(value: Any) -> bool:
    return parse_date(value) is not None


def parse_number(value: Any, *, strip_currency: bool = False) -> float | None:
    """Parse a numeric cell into a finite float, or None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    text = as_text(value).strip()
    if strip_currency:
        text = text.replace("$", "").replace(",", "")
    if not _NUMBER.match(text):
        return None
    number = float(text)
    return number if math.isfinite(number) else None


def is_positive_number(value: Any) -> bool:
    number = parse_number(value, strip_currency=True)
    return number is not None and number > 0


def is_valid_hours_per_week(value: Any) -> bool:
    number = parse_number(value)
    return number is not None and HOURS_PER_WEEK_MIN <= number <= HOURS_PER_WEEK_MAX


def is_valid_zip(value: Any) -> bool:
    if is_absent(value):
        return False
    return _ZIP.match(as_text(value).strip()) is not None
