"""QuoteDesk exception hierarchy."""

from __future__ import annotations


class QuoteDeskError(Exception):
    """Base exception for all QuoteDesk errors."""


class CensusInputError(QuoteDeskError, TypeError):
    """Caller passed columns or rows that are not well-formed collections.

    This is a programming error in the caller, never a data-quality finding.
    """


class CensusNotFoundError(QuoteDeskError):
    """No census upload exists for the given id."""

    def __init__(self, upload_id: str) -> None:
        self.upload_id = upload_id
        super().__init__(f"Census upload not found: {upload_id}")


class CensusParseError(QuoteDeskError):
    """An uploaded census file could not be read as a spreadsheet."""

    def __init__(self, file_name: str, message: str) -> None:
        self.file_name = file_name
        super().__init__(f"Failed to parse census file {file_name!r}: {message}")


class CacheError(QuoteDeskError):
    """Redis cache operation failed."""


class StorageError(QuoteDeskError):
    """Backing record or file store operation failed."""
