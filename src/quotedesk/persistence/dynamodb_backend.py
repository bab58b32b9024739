"""DynamoDB backend implementing ICensusStore with optional Redis caching."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from typing import Any

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from quotedesk.core.exceptions import StorageError
from quotedesk.models.census import CensusRow, CensusUpload
from quotedesk.models.validation import ValidationResult

logger = logging.getLogger(__name__)

UPLOADS_TABLE = "quotedesk-census-uploads"
ROWS_TABLE = "quotedesk-census-rows"
VALIDATIONS_TABLE = "quotedesk-census-validations"
CLIENTS_TABLE = "quotedesk-clients"

TABLE_NAMES: tuple[str, ...] = (UPLOADS_TABLE, ROWS_TABLE, VALIDATIONS_TABLE, CLIENTS_TABLE)


def _row_sk(row_index: int) -> str:
    return f"ROW#{row_index:09d}"


def _encode_cell(value: Any) -> Any:
    """JSON fallback for row cells: dates as ISO date text, anything else as str."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


class DynamoDBCensusStore:
    """Production ICensusStore backed by DynamoDB + optional Redis cache.

    Row cells and validation results are stored as JSON strings so that
    spreadsheet floats never have to round-trip through ``Decimal``.
    """

    CACHE_TTL = 300  # 5 minutes

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None, cache: Any = None,
                 cache_ttl: int | None = None) -> None:
        self._table_suffix = table_suffix
        self._region = region
        self._endpoint_url = endpoint_url
        self._cache = cache
        self._cache_ttl = cache_ttl or self.CACHE_TTL
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)

    def _table(self, base: str):
        return self._ddb.Table(f"{base}{self._table_suffix}")

    def _query_pk(self, table_base: str, pk: str) -> list[dict[str, Any]]:
        """Query all items with a given partition key, following pagination."""
        tbl = self._table(table_base)
        items: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {"KeyConditionExpression": Key("PK").eq(pk)}
        try:
            while True:
                resp = tbl.query(**kwargs)
                items.extend(resp.get("Items", []))
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    return items
                kwargs["ExclusiveStartKey"] = last_key
        except ClientError as exc:
            raise StorageError(f"DynamoDB query failed for {table_base} PK={pk!r}: {exc}") from exc

    def _get_item(self, table_base: str, pk: str, sk: str) -> dict[str, Any] | None:
        """Get a single item by PK + SK. Returns None if not found."""
        try:
            resp = self._table(table_base).get_item(Key={"PK": pk, "SK": sk})
        except ClientError as exc:
            raise StorageError(f"DynamoDB get failed for {table_base} PK={pk!r}: {exc}") from exc
        return resp.get("Item")

    def _put_item(self, table_base: str, item: dict[str, Any]) -> None:
        try:
            self._table(table_base).put_item(Item=item)
        except ClientError as exc:
            raise StorageError(f"DynamoDB put failed for {table_base} PK={item['PK']!r}: {exc}") from exc

    # ---- uploads ----

    def create_upload(self, upload: CensusUpload) -> None:
        payload = upload.model_dump_json()
        self._put_item(UPLOADS_TABLE, {"PK": f"UPLOAD#{upload.id}", "SK": "META", "payload": payload})
        self._put_item(
            UPLOADS_TABLE,
            {
                "PK": f"CLIENT#{upload.client_id}",
                "SK": f"UPLOAD#{upload.uploaded_at.isoformat()}#{upload.id}",
                "payload": payload,
            },
        )

    def get_upload(self, upload_id: str) -> CensusUpload | None:
        item = self._get_item(UPLOADS_TABLE, f"UPLOAD#{upload_id}", "META")
        return CensusUpload.model_validate_json(item["payload"]) if item else None

    def list_uploads(self, client_id: str) -> list[CensusUpload]:
        items = self._query_pk(UPLOADS_TABLE, f"CLIENT#{client_id}")
        return [CensusUpload.model_validate_json(item["payload"]) for item in items]

    # ---- rows ----

    def insert_rows(self, upload_id: str, rows: list[CensusRow]) -> None:
        try:
            with self._table(ROWS_TABLE).batch_writer() as batch:
                for row in rows:
                    batch.put_item(Item={
                        "PK": f"UPLOAD#{upload_id}",
                        "SK": _row_sk(row.row_index),
                        "rowIndex": row.row_index,
                        "data": json.dumps(row.data, default=_encode_cell),
                    })
        except ClientError as exc:
            raise StorageError(f"DynamoDB row insert failed for upload {upload_id!r}: {exc}") from exc

    def get_rows(self, upload_id: str) -> list[CensusRow]:
        items = self._query_pk(ROWS_TABLE, f"UPLOAD#{upload_id}")
        return [
            CensusRow(
                census_upload_id=upload_id,
                row_index=int(item["rowIndex"]),
                data=json.loads(item["data"]),
            )
            for item in items
        ]

    # ---- validations ----

    def get_validation(self, upload_id: str) -> ValidationResult | None:
        cache_key = f"validation:{upload_id}"

        if self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                return ValidationResult.model_validate_json(cached)

        item = self._get_item(VALIDATIONS_TABLE, f"UPLOAD#{upload_id}", "RESULT")
        if item is None:
            return None

        if self._cache is not None:
            self._cache.setex(cache_key, self._cache_ttl, item["payload"])

        return ValidationResult.model_validate_json(item["payload"])

    def replace_validation(self, upload_id: str, result: ValidationResult) -> None:
        # Single key per upload: put_item overwrites the previous result atomically.
        self._put_item(
            VALIDATIONS_TABLE,
            {"PK": f"UPLOAD#{upload_id}", "SK": "RESULT", "payload": result.model_dump_json()},
        )
        if self._cache is not None:
            self._cache.delete(f"validation:{upload_id}")
        logger.debug("Replaced validation result for upload %s", upload_id)

    # ---- clients ----

    def get_active_census_id(self, client_id: str) -> str | None:
        item = self._get_item(CLIENTS_TABLE, f"CLIENT#{client_id}", "ACTIVE_CENSUS")
        return item["uploadId"] if item else None

    def set_active_census_id(self, client_id: str, upload_id: str) -> None:
        self._put_item(
            CLIENTS_TABLE,
            {"PK": f"CLIENT#{client_id}", "SK": "ACTIVE_CENSUS", "uploadId": upload_id},
        )
