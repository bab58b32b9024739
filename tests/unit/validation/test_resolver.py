"""Tests for header normalization and column resolution."""

from __future__ import annotations

import pytest

from quotedesk.validation.fields import FIELD_TABLE
from quotedesk.validation.resolver import normalize_header, resolve_columns


class TestNormalizeHeader:
    @pytest.mark.parametrize("raw,expected", [
        ("  Date-Of_Birth ", "date of birth"),
        ("HOURS   PER\tWEEK", "hours per week"),
        ("zip__-__code", "zip code"),
        ("Émployee Name", "employee name"),
        ("Hrs/Wk", "hrs/wk"),
        ("-salary-", "salary"),
    ])
    def test_normalizes(self, raw, expected):
        assert normalize_header(raw) == expected


class TestResolveColumns:
    def test_every_field_is_reported(self):
        resolution = resolve_columns([])
        assert set(resolution) == {f.key for f in FIELD_TABLE}
        assert all(header is None for header in resolution.values())

    def test_maps_aliases_to_raw_headers(self):
        columns = ["Full Name", "DOB", "Zíp Code", "Annual_Salary", "EE/ES/EC/FAM",
                   "Sex", "Hrs/Wk", "Start Date"]
        assert resolve_columns(columns) == {
            "employee_name": "Full Name",
            "date_of_birth": "DOB",
            "zip_code": "Zíp Code",
            "salary": "Annual_Salary",
            "coverage_tier": "EE/ES/EC/FAM",
            "gender": "Sex",
            "hours_per_week": "Hrs/Wk",
            "hire_date": "Start Date",
        }

    def test_canonical_key_is_accepted_as_header(self):
        resolution = resolve_columns(["hours_per_week", "HIRE-DATE"])
        assert resolution["hours_per_week"] == "hours_per_week"
        assert resolution["hire_date"] == "HIRE-DATE"

    def test_field_key_outranks_earlier_alias(self):
        resolution = resolve_columns(["Zip", "ZIP Code", "zip"])
        assert resolution["zip_code"] == "ZIP Code"

    @pytest.mark.parametrize("columns,field,expected", [
        (["First Name", "Last Name", "Employee Name"], "employee_name", "Employee Name"),
        (["Name", "Employee Name"], "employee_name", "Employee Name"),
        (["Coverage", "Coverage Tier"], "coverage_tier", "Coverage Tier"),
        (["Wage", "Pay", "Annual Salary"], "salary", "Annual Salary"),
    ])
    def test_candidates_are_tried_in_priority_order(self, columns, field, expected):
        assert resolve_columns(columns)[field] == expected

    def test_first_header_wins_for_the_same_candidate(self):
        resolution = resolve_columns(["Zip", "zip", "ZIP"])
        assert resolution["zip_code"] == "Zip"

    @pytest.mark.parametrize("header", ["Salry", "Sallary", "Hours/Week", "Birthday", "Zip+4"])
    def test_no_fuzzy_matching(self, header):
        resolution = resolve_columns([header])
        assert all(value is None for value in resolution.values())

    def test_restricted_field_table(self):
        salary_only = tuple(f for f in FIELD_TABLE if f.key == "salary")
        assert resolve_columns(["Wage", "DOB"], salary_only) == {"salary": "Wage"}
