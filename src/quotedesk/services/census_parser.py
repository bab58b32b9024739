"""Read uploaded census spreadsheets into a column list and row mappings."""

from __future__ import annotations

import csv
import io
import zipfile
from datetime import date, datetime
from pathlib import PurePath
from typing import Any

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from quotedesk.core.exceptions import CensusParseError

SUPPORTED_SUFFIXES = frozenset({".csv", ".xlsx"})


def _read_csv(data: bytes) -> list[list[Any]]:
    text = data.decode("utf-8-sig")
    return list(csv.reader(io.StringIO(text, newline="")))


def _read_xlsx(data: bytes) -> list[list[Any]]:
    workbook = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    try:
        sheet = workbook.active
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def _cell(value: Any) -> Any:
    """Render spreadsheet date cells as ISO date text; other values pass through."""
    if isinstance(value, datetime):
        # census dates carry no meaningful time of day
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_census(file_name: str, data: bytes) -> tuple[list[str], list[dict[str, Any]]]:
    """Return ``(columns, rows)`` from a CSV or XLSX census file.

    The first row is the header. Blank header cells are dropped along with
    their column, a repeated header keeps only its first column, and rows
    with no non-blank cell are skipped. Date cells become ISO date text so
    rows read back the same from every store.
    """
    suffix = PurePath(file_name).suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise CensusParseError(file_name, f"unsupported file type {suffix or '(none)'!r}")

    try:
        table = _read_csv(data) if suffix == ".csv" else _read_xlsx(data)
    except (UnicodeDecodeError, csv.Error, zipfile.BadZipFile, InvalidFileException,
            OSError, ValueError, KeyError) as exc:
        raise CensusParseError(file_name, str(exc)) from exc

    if not table:
        raise CensusParseError(file_name, "file is empty")

    header, *body = table
    positions: list[tuple[int, str]] = []
    seen: set[str] = set()
    for i, cell in enumerate(header):
        if _is_blank(cell):
            continue
        name = str(cell).strip()
        if name in seen:
            continue
        seen.add(name)
        positions.append((i, name))
    if not positions:
        raise CensusParseError(file_name, "header row is blank")

    columns = [name for _, name in positions]
    rows: list[dict[str, Any]] = []
    for raw in body:
        if all(_is_blank(cell) for cell in raw):
            continue
        rows.append({
            name: (_cell(raw[i]) if i < len(raw) else None)
            for i, name in positions
        })
    return columns, rows
