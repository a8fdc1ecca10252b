"""Redis backend implementing IRateLimitStore."""

from __future__ import annotations

import redis

from taskdesk.core.exceptions import CacheError
from taskdesk.models.rate_limit import RateLimitRecord


class RedisRateLimitStore:
    """Shared IRateLimitStore backed by Redis, for multi-instance deployments."""

    KEY_PREFIX = "ratelimit:"

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0) -> None:
        self._host = host
        self._port = port
        self._db = db
        self._client = redis.Redis(
            host=host, port=port, db=db, decode_responses=True,
        )

    def get(self, key: str) -> RateLimitRecord | None:
        try:
            raw = self._client.get(f"{self.KEY_PREFIX}{key}")
        except Exception as exc:
            raise CacheError(f"Redis GET failed for key={key!r}: {exc}") from exc
        return RateLimitRecord.model_validate_json(raw) if raw else None

    def put(self, record: RateLimitRecord, ttl: int) -> None:
        try:
            self._client.setex(f"{self.KEY_PREFIX}{record.key}", ttl, record.model_dump_json())
        except Exception as exc:
            raise CacheError(f"Redis SETEX failed for key={record.key!r}: {exc}") from exc
