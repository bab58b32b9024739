"""Per-program census quality scores."""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel

from quotedesk.models.validation import Program, ValidationIssue


class ProgramScores(BaseModel):
    peo_score: int
    aca_score: int
    peo_valid_rows: int
    aca_valid_rows: int


def percent(part: int, whole: int) -> int:
    """``part / whole * 100`` rounded half up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def failing_rows(issues: Iterable[ValidationIssue], program: Program) -> set[int]:
    rows: set[int] = set()
    for issue in issues:
        if issue.required_for.covers(program):
            rows.update(issue.affected_rows)
    return rows


def calculate_scores(total_rows: int, issues: list[ValidationIssue]) -> ProgramScores:
    """Score each program by the share of rows with no issue it cares about.

    An upload without rows scores 0 for both programs.
    """
    peo_valid = total_rows - len(failing_rows(issues, Program.PEO))
    aca_valid = total_rows - len(failing_rows(issues, Program.ACA))
    return ProgramScores(
        peo_score=percent(peo_valid, total_rows),
        aca_score=percent(aca_valid, total_rows),
        peo_valid_rows=peo_valid,
        aca_valid_rows=aca_valid,
    )
