"""Dict-backed in-memory backends for unit tests and local development."""

from __future__ import annotations

from quotedesk.models.census import CensusRow, CensusUpload
from quotedesk.models.validation import ValidationResult


class MemoryCensusStore:
    """Dict-backed ICensusStore."""

    def __init__(self) -> None:
        self._uploads: dict[str, CensusUpload] = {}
        self._rows: dict[str, dict[int, CensusRow]] = {}
        self._validations: dict[str, ValidationResult] = {}
        self._active: dict[str, str] = {}

    def create_upload(self, upload: CensusUpload) -> None:
        self._uploads[upload.id] = upload
        self._rows.setdefault(upload.id, {})

    def get_upload(self, upload_id: str) -> CensusUpload | None:
        return self._uploads.get(upload_id)

    def list_uploads(self, client_id: str) -> list[CensusUpload]:
        uploads = [u for u in self._uploads.values() if u.client_id == client_id]
        return sorted(uploads, key=lambda u: (u.uploaded_at, u.id))

    def insert_rows(self, upload_id: str, rows: list[CensusRow]) -> None:
        bucket = self._rows.setdefault(upload_id, {})
        for row in rows:
            bucket[row.row_index] = row

    def get_rows(self, upload_id: str) -> list[CensusRow]:
        bucket = self._rows.get(upload_id, {})
        return [bucket[i] for i in sorted(bucket)]

    def get_validation(self, upload_id: str) -> ValidationResult | None:
        return self._validations.get(upload_id)

    def replace_validation(self, upload_id: str, result: ValidationResult) -> None:
        self._validations.pop(upload_id, None)
        self._validations[upload_id] = result

    def get_active_census_id(self, client_id: str) -> str | None:
        return self._active.get(client_id)

    def set_active_census_id(self, client_id: str, upload_id: str) -> None:
        self._active[client_id] = upload_id


class MemoryCacheBackend:
    """Dict-backed ICacheBackend for unit tests."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)


class MemoryFileStore:
    """Dict-backed IFileStore for unit tests."""

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}

    def read(self, path: str) -> bytes:
        return self._files[path]

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        self._files[path] = data
        return path

    def delete(self, path: str) -> None:
        self._files.pop(path, None)

    def list_files(self, prefix: str) -> list[str]:
        return [k for k in self._files if k.startswith(prefix)]
