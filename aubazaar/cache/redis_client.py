"""
Redis cache for derived aggregates (category counts).
Fails gracefully: a cache outage degrades to a store query, never to an error.
"""

import json
import logging
from typing import Any

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class Cache:
    """Thin JSON cache over redis-py's asyncio client. Disabled when url is empty."""

    def __init__(self, url: str | None, default_ttl: int = 60):
        self.url = url
        self.default_ttl = default_ttl
        self._redis: Redis | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    def _client(self) -> Redis:
        # Connection pool is created lazily and managed by redis-py
        if self._redis is None:
            self._redis = Redis.from_url(self.url, encoding="utf-8", decode_responses=True)
        return self._redis

    async def get_json(self, key: str) -> Any | None:
        """Return the decoded value, or None on miss or error."""
        if not self.enabled:
            return None
        try:
            raw = await self._client().get(key)
            return json.loads(raw) if raw else None
        except Exception as e:
            # Unreachable server or a corrupt value both count as a miss
            logger.warning("cache get failed: key=%s error=%s", key, e)
            return None

    async def set_json(self, key: str, value: Any, ttl_seconds: int | None = None) -> bool:
        if not self.enabled:
            return False
        try:
            await self._client().setex(key, ttl_seconds or self.default_ttl, json.dumps(value))
            return True
        except Exception as e:
            logger.warning("cache set failed: key=%s error=%s", key, e)
            return False

    async def delete(self, key: str) -> bool:
        """Invalidate a key (e.g. after a listing changes category counts)."""
        if not self.enabled:
            return False
        try:
            await self._client().delete(key)
            return True
        except Exception as e:
            logger.warning("cache delete failed: key=%s error=%s", key, e)
            return False

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
