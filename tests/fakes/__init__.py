"""Shared test doubles: memory backends and census builders."""

from __future__ import annotations

from typing import Any

from quotedesk.persistence.memory_backend import (
    MemoryCacheBackend,
    MemoryCensusStore,
    MemoryFileStore,
)

VALID_ROW: dict[str, Any] = {
    "employee_name": "Jane Doe",
    "date_of_birth": "1980-01-15",
    "zip_code": "30301",
    "salary": "55000",
    "coverage_tier": "EE",
    "hours_per_week": "40",
    "hire_date": "2015-06-01",
}
VALID_COLUMNS: list[str] = list(VALID_ROW)


def census(n: int = 1, *, drop: tuple[str, ...] = (), **columns: list[Any]) -> tuple[list[str], list[dict[str, Any]]]:
    """Build ``n`` valid rows, dropping columns and overriding per-row values.

    ``census(3, salary=[1, 2, 3])`` sets the salary cell of each row in turn.
    """
    header = [c for c in VALID_COLUMNS if c not in drop]
    rows = []
    for i in range(n):
        row = {c: VALID_ROW[c] for c in header}
        for column, values in columns.items():
            row[column] = values[i]
        rows.append(row)
    return header, rows


__all__ = [
    "MemoryCacheBackend",
    "MemoryCensusStore",
    "MemoryFileStore",
    "VALID_COLUMNS",
    "VALID_ROW",
    "census",
]
