"""Collapse per-field outcomes into UI-facing validation issues."""

from __future__ import annotations

from typing import Iterable

from quotedesk.models.validation import IssueType, ValidationIssue
from quotedesk.validation.row_validator import FieldOutcome


def aggregate_issues(
    outcomes: Iterable[FieldOutcome], row_indices: Iterable[int]
) -> list[ValidationIssue]:
    """One issue per (field, issue type) that affects at least one row.

    A missing column affects every row of the upload, even when it has none.
    """
    all_rows = sorted(row_indices)
    issues: list[ValidationIssue] = []
    for outcome in outcomes:
        requirement = outcome.requirement
        if outcome.column_missing:
            issues.append(
                ValidationIssue(
                    field=requirement.key,
                    issue_type=IssueType.MISSING_COLUMN,
                    affected_rows=list(all_rows),
                    message=f'Required column "{requirement.label}" not found',
                    required_for=requirement.required_for,
                )
            )
            continue
        if outcome.missing_rows:
            issues.append(
                ValidationIssue(
                    field=requirement.key,
                    issue_type=IssueType.MISSING_VALUE,
                    affected_rows=sorted(set(outcome.missing_rows)),
                    message=f"Missing {requirement.label} value",
                    required_for=requirement.required_for,
                )
            )
        if outcome.invalid_rows:
            issues.append(
                ValidationIssue(
                    field=requirement.key,
                    issue_type=IssueType.INVALID_VALUE,
                    affected_rows=sorted(set(outcome.invalid_rows)),
                    message=f"Invalid {requirement.label} value, expected {requirement.expected}",
                    required_for=requirement.required_for,
                )
            )
    return issues
