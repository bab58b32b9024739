"""Census intake service that saves uploads and keeps their validation current.

The service owns the persistence side of validation: each upload has at most
one stored ``ValidationResult``, and every re-validation replaces it.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Sequence

from quotedesk.core.config import AppSettings
from quotedesk.core.exceptions import CensusNotFoundError
from quotedesk.core.protocols import ICensusStore, IFileStore
from quotedesk.models.census import (
    CensusRow,
    CensusUpload,
    CensusWithRows,
    QualityHistoryEntry,
)
from quotedesk.models.validation import ValidationResult
from quotedesk.services.census_parser import parse_census
from quotedesk.validation import validate

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CensusService:
    """Census intake, validation, and history for clients."""

    def __init__(
        self,
        *,
        settings: AppSettings,
        store: ICensusStore,
        file_store: IFileStore | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._settings = settings
        self._store = store
        self._files = file_store
        self._clock = clock

    # ---- intake ----

    def save_census(
        self,
        client_id: str,
        file_name: str,
        columns: Sequence[str],
        rows: Sequence[Mapping[str, Any]],
        file_id: str | None = None,
    ) -> tuple[CensusUpload, ValidationResult]:
        """Store a new census, make it the client's active one, and validate it."""
        upload = CensusUpload(
            id=uuid.uuid4().hex,
            client_id=client_id,
            file_id=file_id,
            file_name=file_name,
            uploaded_at=self._clock(),
            columns=list(columns),
            row_count=len(rows),
        )
        self._store.create_upload(upload)
        self._store.set_active_census_id(client_id, upload.id)

        batch_size = max(1, self._settings.census.batch_size)
        for start in range(0, len(rows), batch_size):
            batch = [
                CensusRow(census_upload_id=upload.id, row_index=start + offset, data=dict(data))
                for offset, data in enumerate(rows[start:start + batch_size])
            ]
            self._store.insert_rows(upload.id, batch)

        logger.info(
            "Saved census %s for client %s: %s (%d rows, %d columns)",
            upload.id, client_id, file_name, len(rows), len(upload.columns),
        )
        return upload, self.validate_census(upload.id)

    def import_census_file(
        self, client_id: str, file_name: str, data: bytes
    ) -> tuple[CensusUpload, ValidationResult]:
        """Parse a CSV/XLSX census, keep the raw file, and save it."""
        columns, rows = parse_census(file_name, data)
        file_id = None
        if self._files is not None:
            file_id = self._files.write(
                f"census/{client_id}/{uuid.uuid4().hex}-{file_name}", data,
            )
        return self.save_census(client_id, file_name, columns, rows, file_id=file_id)

    # ---- validation ----

    def validate_census(self, upload_id: str) -> ValidationResult:
        """Validate a stored census and replace any previous result for it."""
        upload = self._store.get_upload(upload_id)
        if upload is None:
            raise CensusNotFoundError(upload_id)

        rows = self._store.get_rows(upload_id)
        result = validate(upload.columns, rows)
        self._store.replace_validation(upload_id, result)
        return result

    def get_validation(self, upload_id: str) -> ValidationResult | None:
        return self._store.get_validation(upload_id)

    def get_quality_history(self, client_id: str) -> list[QualityHistoryEntry]:
        """Scores of every validated upload of a client, oldest first."""
        history: list[QualityHistoryEntry] = []
        for upload in self._store.list_uploads(client_id):
            result = self._store.get_validation(upload.id)
            if result is None:
                continue
            history.append(
                QualityHistoryEntry(
                    census_upload_id=upload.id,
                    file_name=upload.file_name,
                    uploaded_at=upload.uploaded_at,
                    validated_at=result.validated_at,
                    peo_score=result.peo_score,
                    aca_score=result.aca_score,
                    total_rows=result.total_rows,
                )
            )
        return history

    # ---- lookup ----

    def get_census(self, upload_id: str) -> CensusWithRows:
        upload = self._store.get_upload(upload_id)
        if upload is None:
            raise CensusNotFoundError(upload_id)
        return CensusWithRows(upload=upload, rows=self._store.get_rows(upload_id))

    def get_census_history(self, client_id: str) -> list[CensusUpload]:
        """All uploads of a client, newest first."""
        return list(reversed(self._store.list_uploads(client_id)))

    def get_latest_census(self, client_id: str) -> CensusUpload | None:
        uploads = self._store.list_uploads(client_id)
        return uploads[-1] if uploads else None

    def set_active_census(self, client_id: str, upload_id: str) -> None:
        upload = self._store.get_upload(upload_id)
        if upload is None:
            raise CensusNotFoundError(upload_id)
        self._store.set_active_census_id(client_id, upload_id)

    def get_active_census(self, client_id: str) -> CensusUpload | None:
        """The client's selected census, falling back to the latest upload."""
        active_id = self._store.get_active_census_id(client_id)
        if active_id is not None:
            upload = self._store.get_upload(active_id)
            if upload is not None:
                return upload
        return self.get_latest_census(client_id)
