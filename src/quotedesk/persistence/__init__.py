"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from quotedesk.core.config import AppSettings
from quotedesk.persistence.dynamodb_backend import DynamoDBCensusStore
from quotedesk.persistence.memory_backend import (
    MemoryCacheBackend,
    MemoryCensusStore,
    MemoryFileStore,
)
from quotedesk.persistence.redis_backend import RedisCacheBackend
from quotedesk.persistence.s3_backend import S3FileStore


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (census_store, cache, file_store).
    """
    if settings is None:
        settings = AppSettings()

    if settings.backend == "memory":
        return MemoryCensusStore(), MemoryCacheBackend(), MemoryFileStore()

    cache = RedisCacheBackend.from_config(settings.redis)

    census_store = DynamoDBCensusStore(
        table_suffix=settings.dynamodb.table_suffix,
        region=settings.dynamodb.region,
        endpoint_url=settings.dynamodb.endpoint_url,
        cache=cache,
        cache_ttl=settings.census.validation_cache_ttl,
    )

    file_store = S3FileStore(
        bucket=settings.s3.bucket,
        region=settings.s3.region,
        endpoint_url=settings.s3.endpoint_url,
    )

    return census_store, cache, file_store
