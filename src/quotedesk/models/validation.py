"""Census validation result models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class Program(StrEnum):
    """Quoting programs with their own minimum census requirements."""

    PEO = "PEO"
    ACA = "ACA"


class RequiredFor(StrEnum):
    PEO = "PEO"
    ACA = "ACA"
    BOTH = "both"

    def covers(self, program: Program) -> bool:
        """True if a field with this requirement counts against ``program``."""
        return self is RequiredFor.BOTH or self.value == program.value


class IssueType(StrEnum):
    MISSING_COLUMN = "missing_column"
    MISSING_VALUE = "missing_value"
    INVALID_VALUE = "invalid_value"


class ValidationIssue(BaseModel):
    """All rows sharing one problem with one canonical field."""

    field: str
    issue_type: IssueType
    affected_rows: list[int] = Field(default_factory=list)
    message: str
    required_for: RequiredFor

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}


class ValidationResult(BaseModel):
    """Outcome of validating one census upload.

    Scores are integer percentages of rows that satisfy every field the
    program requires.
    """

    peo_score: int = Field(ge=0, le=100)
    aca_score: int = Field(ge=0, le=100)
    total_rows: int = Field(ge=0)
    peo_valid_rows: int = Field(ge=0)
    aca_valid_rows: int = Field(ge=0)
    issues: list[ValidationIssue] = Field(default_factory=list)
    validated_at: datetime

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    def issues_for(self, field: str) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.field == field]
