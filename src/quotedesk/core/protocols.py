"""Protocol interfaces for all QuoteDesk abstractions.

All inter-layer communication uses these Protocols: structural typing,
no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from quotedesk.models.census import CensusRow, CensusUpload
from quotedesk.models.validation import ValidationResult


# ---------------------------------------------------------------------------
# Persistence: Census Store
# ---------------------------------------------------------------------------

@runtime_checkable
class ICensusStore(Protocol):
    """Record store for census uploads, their rows, and validation results."""

    def create_upload(self, upload: CensusUpload) -> None: ...

    def get_upload(self, upload_id: str) -> CensusUpload | None: ...

    def list_uploads(self, client_id: str) -> list[CensusUpload]: ...

    def insert_rows(self, upload_id: str, rows: list[CensusRow]) -> None: ...

    def get_rows(self, upload_id: str) -> list[CensusRow]: ...

    def get_validation(self, upload_id: str) -> ValidationResult | None: ...

    def replace_validation(self, upload_id: str, result: ValidationResult) -> None: ...

    def get_active_census_id(self, client_id: str) -> str | None: ...

    def set_active_census_id(self, client_id: str, upload_id: str) -> None: ...


# ---------------------------------------------------------------------------
# Persistence: Cache Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface."""

    def get(self, key: str) -> str | bytes | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


# ---------------------------------------------------------------------------
# Persistence: File Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IFileStore(Protocol):
    """S3-compatible file storage interface."""

    def read(self, path: str) -> bytes: ...

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str: ...

    def delete(self, path: str) -> None: ...

    def list_files(self, prefix: str) -> list[str]: ...
