"""Field requirement table: the canonical census fields and their rules.

Each entry names a canonical employee attribute, the header spellings accepted
for it, which quoting program(s) require it, and the predicate a present cell
must satisfy. The table is built once at import and never mutated.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Optional

from pydantic import BaseModel

from quotedesk.models.validation import Program, RequiredFor
from quotedesk.validation import predicates

DATE_FORMATS_TEXT = "a date (YYYY-MM-DD, MM/DD/YYYY, MM-DD-YYYY or M/D/YY)"


class FieldRequirement(BaseModel):
    """Declarative rule for one canonical census field."""

    key: str
    label: str
    aliases: tuple[str, ...] = ()
    required_for: Optional[RequiredFor] = None  # None = informational only
    predicate: Callable[[Any], bool] = predicates.is_non_empty
    expected: str = "a non-empty value"

    model_config = {"frozen": True}

    @property
    def candidates(self) -> tuple[str, ...]:
        """Header spellings that resolve to this field, key first."""
        return (self.key, *self.aliases)

    @property
    def is_required(self) -> bool:
        return self.required_for is not None

    def required_by(self, program: Program) -> bool:
        return self.required_for is not None and self.required_for.covers(program)

    def is_valid(self, value: Any) -> bool:
        if predicates.is_absent(value):
            return False
        return self.predicate(value)


FIELD_TABLE: tuple[FieldRequirement, ...] = (
    FieldRequirement(
        key="employee_name",
        label="Employee Name",
        aliases=("name", "employee", "full name", "first name", "employee name"),
        required_for=RequiredFor.BOTH,
    ),
    FieldRequirement(
        key="date_of_birth",
        label="Date of Birth",
        aliases=("dob", "birth date", "birthdate", "date of birth"),
        required_for=RequiredFor.BOTH,
        predicate=predicates.is_valid_date,
        expected=DATE_FORMATS_TEXT,
    ),
    FieldRequirement(
        key="zip_code",
        label="ZIP Code",
        aliases=("zip", "postal code", "zipcode", "zip code"),
        required_for=RequiredFor.PEO,
        predicate=predicates.is_valid_zip,
        expected="a 5-digit ZIP code",
    ),
    FieldRequirement(
        key="salary",
        label="Salary",
        aliases=("annual salary", "compensation", "pay", "wage", "salary"),
        required_for=RequiredFor.BOTH,
        predicate=predicates.is_positive_number,
        expected="a number greater than 0",
    ),
    FieldRequirement(
        key="coverage_tier",
        label="Coverage Tier",
        aliases=("tier", "coverage", "plan tier", "ee/es/ec/fam", "coverage tier"),
        required_for=RequiredFor.BOTH,
    ),
    FieldRequirement(
        key="gender",
        label="Gender",
        aliases=("sex", "gender"),
    ),
    FieldRequirement(
        key="hours_per_week",
        label="Hours per Week",
        aliases=("hours", "weekly hours", "hrs/wk", "hours per week"),
        required_for=RequiredFor.ACA,
        predicate=predicates.is_valid_hours_per_week,
        expected=(
            f"a number between {predicates.HOURS_PER_WEEK_MIN} "
            f"and {predicates.HOURS_PER_WEEK_MAX}"
        ),
    ),
    FieldRequirement(
        key="hire_date",
        label="Hire Date",
        aliases=("start date", "date of hire", "employment date", "hire date"),
        required_for=RequiredFor.ACA,
        predicate=predicates.is_valid_date,
        expected=DATE_FORMATS_TEXT,
    ),
)

FIELDS_BY_KEY: MappingProxyType[str, FieldRequirement] = MappingProxyType(
    {requirement.key: requirement for requirement in FIELD_TABLE}
)


def required_fields(
    fields: tuple[FieldRequirement, ...] = FIELD_TABLE,
) -> tuple[FieldRequirement, ...]:
    return tuple(f for f in fields if f.is_required)


def fields_for(
    program: Program, fields: tuple[FieldRequirement, ...] = FIELD_TABLE
) -> tuple[FieldRequirement, ...]:
    """Fields a row must pass to count as valid for ``program``."""
    return tuple(f for f in fields if f.required_by(program))
