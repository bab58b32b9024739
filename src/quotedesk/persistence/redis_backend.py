"""Redis cache backend implementing ICacheBackend."""

from __future__ import annotations

import redis

from quotedesk.core.config import RedisConfig
from quotedesk.core.exceptions import CacheError


class RedisCacheBackend:
    """Production ICacheBackend backed by Redis.

    Every key is namespaced with ``key_prefix`` so that several environments
    can share one Redis database. With ``decode_responses`` off, ``get``
    returns raw bytes, which pydantic's ``model_validate_json`` accepts as-is.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        *,
        decode_responses: bool = True,
        key_prefix: str = "quotedesk:",
    ) -> None:
        self._key_prefix = key_prefix
        self._client = redis.Redis(
            host=host, port=port, db=db, decode_responses=decode_responses,
        )

    @classmethod
    def from_config(cls, config: RedisConfig) -> RedisCacheBackend:
        return cls(
            host=config.host,
            port=config.port,
            db=config.db,
            decode_responses=config.decode_responses,
            key_prefix=config.key_prefix,
        )

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    def get(self, key: str) -> str | bytes | None:
        try:
            return self._client.get(self._key(key))
        except redis.RedisError as exc:
            raise CacheError(f"Redis GET failed for key={key!r}: {exc}") from exc

    def setex(self, key: str, ttl: int, value: str) -> None:
        try:
            self._client.setex(self._key(key), ttl, value)
        except redis.RedisError as exc:
            raise CacheError(f"Redis SETEX failed for key={key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except redis.RedisError as exc:
            raise CacheError(f"Redis DELETE failed for key={key!r}: {exc}") from exc
