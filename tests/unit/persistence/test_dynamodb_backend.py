"""Unit tests for DynamoDBCensusStore using moto."""

from __future__ import annotations

import io
from datetime import date, datetime, timedelta, timezone

import boto3
import openpyxl
import pytest
from moto import mock_aws

from quotedesk.core.config import AppSettings
from quotedesk.core.exceptions import StorageError
from quotedesk.models.census import CensusRow, CensusUpload
from quotedesk.persistence.dynamodb_backend import TABLE_NAMES, DynamoDBCensusStore
from quotedesk.persistence.memory_backend import MemoryCacheBackend, MemoryCensusStore
from quotedesk.services.census_service import CensusService
from quotedesk.validation import validate
from tests.fakes import census

TABLE_SUFFIX = "-test"
REGION = "us-east-1"
T0 = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)

# ---------- helpers ----------

def _create_table(client, name: str, pk: str = "PK", sk: str = "SK"):
    """Create a DynamoDB table with PK/SK key schema."""
    client.create_table(
        TableName=name,
        KeySchema=[
            {"AttributeName": pk, "KeyType": "HASH"},
            {"AttributeName": sk, "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": pk, "AttributeType": "S"},
            {"AttributeName": sk, "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )


def _upload(upload_id: str, client_id: str = "acme", minutes: int = 0) -> CensusUpload:
    return CensusUpload(
        id=upload_id,
        client_id=client_id,
        file_name=f"{upload_id}.csv",
        uploaded_at=T0 + timedelta(minutes=minutes),
        columns=["Name", "Salary"],
        row_count=2,
    )


# ---------- fixtures ----------

@pytest.fixture
def aws():
    with mock_aws():
        ddb = boto3.resource("dynamodb", region_name=REGION)
        client = boto3.client("dynamodb", region_name=REGION)
        for name in TABLE_NAMES:
            _create_table(client, f"{name}{TABLE_SUFFIX}")
        yield ddb


@pytest.fixture
def store(aws):
    return DynamoDBCensusStore(table_suffix=TABLE_SUFFIX, region=REGION)


@pytest.fixture
def cached_store(aws):
    cache = MemoryCacheBackend()
    return DynamoDBCensusStore(table_suffix=TABLE_SUFFIX, region=REGION, cache=cache), cache


# ---------- uploads ----------

class TestUploads:
    def test_round_trips_upload(self, store):
        store.create_upload(_upload("u1"))
        loaded = store.get_upload("u1")
        assert loaded == _upload("u1")

    def test_unknown_upload_is_none(self, store):
        assert store.get_upload("ghost") is None

    def test_lists_client_uploads_oldest_first(self, store):
        store.create_upload(_upload("late", minutes=10))
        store.create_upload(_upload("early", minutes=1))
        store.create_upload(_upload("elsewhere", client_id="other"))
        assert [u.id for u in store.list_uploads("acme")] == ["early", "late"]
        assert store.list_uploads("nobody") == []


# ---------- rows ----------

class TestRows:
    def test_rows_come_back_in_index_order(self, store):
        rows = [CensusRow(census_upload_id="u1", row_index=i, data={"Salary": s})
                for i, s in [(10, "3"), (2, 1.5), (0, None)]]
        store.insert_rows("u1", rows)
        loaded = store.get_rows("u1")
        assert [r.row_index for r in loaded] == [0, 2, 10]
        assert loaded[1].data == {"Salary": 1.5}
        assert loaded[0].data == {"Salary": None}

    def test_date_cells_are_stored_as_iso_dates(self, store):
        rows = [CensusRow(row_index=0, data={"DOB": datetime(1980, 1, 15), "Hire Date": date(2019, 3, 1)})]
        store.insert_rows("u1", rows)
        assert store.get_rows("u1")[0].data == {"DOB": "1980-01-15", "Hire Date": "2019-03-01"}

    def test_paginates_large_uploads(self, store):
        wide = "x" * 2000
        rows = [CensusRow(row_index=i, data={"Notes": wide}) for i in range(700)]
        store.insert_rows("big", rows)
        assert len(store.get_rows("big")) == 700


# ---------- validations ----------

class TestValidations:
    def test_replace_keeps_single_result(self, store, aws):
        columns, rows = census(2, salary=["0", "1"])
        store.replace_validation("u1", validate(columns, rows))
        newer = validate(*census(2))
        store.replace_validation("u1", newer)

        tbl = aws.Table(f"quotedesk-census-validations{TABLE_SUFFIX}")
        assert tbl.scan()["Count"] == 1
        assert store.get_validation("u1") == newer

    def test_missing_validation_is_none(self, store):
        assert store.get_validation("nothing") is None

    def test_caches_on_read_and_invalidates_on_replace(self, cached_store):
        store, cache = cached_store
        first = validate(*census(1, salary=["0"]))
        store.replace_validation("u1", first)
        assert cache.get("validation:u1") is None

        store.get_validation("u1")
        assert cache.get("validation:u1") is not None

        second = validate(*census(1))
        store.replace_validation("u1", second)
        assert cache.get("validation:u1") is None
        assert store.get_validation("u1").peo_score == 100


# ---------- clients ----------

class TestActiveCensus:
    def test_set_and_get(self, store):
        assert store.get_active_census_id("acme") is None
        store.set_active_census_id("acme", "u1")
        store.set_active_census_id("acme", "u2")
        assert store.get_active_census_id("acme") == "u2"


def test_missing_table_raises_storage_error():
    with mock_aws():
        store = DynamoDBCensusStore(table_suffix="-absent", region=REGION)
        with pytest.raises(StorageError):
            store.get_upload("u1")


# ---------- xlsx import ----------

def _xlsx_with_dates() -> bytes:
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.append(["Employee Name", "DOB", "Zip", "Salary", "Tier", "Hours", "Hire Date"])
    sheet.append(["Ada Park", datetime(1980, 1, 15), "30301", 72000, "EE", 40, datetime(2019, 3, 1)])
    sheet.append(["Luis Ortega", datetime(1992, 7, 4), "30302", 58000, "ES", 32, datetime(2021, 11, 8)])
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


class TestXlsxImport:
    def test_date_cells_score_the_same_as_in_memory(self, store):
        data = _xlsx_with_dates()
        settings = AppSettings()
        dynamo = CensusService(settings=settings, store=store)
        memory = CensusService(settings=settings, store=MemoryCensusStore())

        _, stored = dynamo.import_census_file("acme", "census.xlsx", data)
        _, local = memory.import_census_file("acme", "census.xlsx", data)

        assert stored.issues == []
        assert (stored.peo_score, stored.aca_score) == (100, 100)
        assert (stored.peo_score, stored.aca_score) == (local.peo_score, local.aca_score)

    def test_revalidation_reads_dates_back_from_the_table(self, store):
        service = CensusService(settings=AppSettings(), store=store)
        upload, _ = service.import_census_file("acme", "census.xlsx", _xlsx_with_dates())

        rows = store.get_rows(upload.id)
        assert rows[0].data["DOB"] == "1980-01-15"
        assert service.validate_census(upload.id).issues == []
