# openclass/core/cache.py
"""Redis caching implementation."""
import json
import logging
from typing import Any, Optional, Union
from datetime import timedelta
import redis.asyncio as redis

logger = logging.getLogger(__name__)


class CacheManager:
    """Optional server-side response cache.

    With no ``redis_url`` the manager stays disabled and every lookup is a
    miss, so the API behaves the same with or without Redis.
    """

    def __init__(self, redis_url: Optional[str] = None, namespace: str = "openclass"):
        self.redis_url = redis_url
        self.namespace = namespace
        self.redis: Optional[redis.Redis] = None

    @property
    def enabled(self) -> bool:
        return self.redis is not None

    async def initialize(self):
        """Initialize Redis connection."""
        if self.redis_url and not self.redis:
            self.redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True
            )
            logger.info("Redis cache connected")

    async def close(self):
        """Close Redis connection."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None

    def make_key(self, *parts: Any) -> str:
        return ":".join([self.namespace, *(str(part) for part in parts)])

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache."""
        if not self.redis:
            return None
        try:
            value = await self.redis.get(key)
            if value is not None:
                return json.loads(value)
        except Exception as e:
            logger.error(f"Cache get error: {e}")
        return None

    async def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[Union[int, timedelta]] = None
    ) -> bool:
        """Set value in cache."""
        if not self.redis:
            return False
        try:
            serialized = json.dumps(value, default=str)
            if ttl:
                if isinstance(ttl, timedelta):
                    ttl = int(ttl.total_seconds())
                return bool(await self.redis.setex(key, ttl, serialized))
            return bool(await self.redis.set(key, serialized))
        except Exception as e:
            logger.error(f"Cache set error: {e}")
            return False

    async def delete(self, key: str) -> bool:
        """Delete key from cache."""
        if not self.redis:
            return False
        try:
            return bool(await self.redis.delete(key))
        except Exception as e:
            logger.error(f"Cache delete error: {e}")
            return False

    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob pattern."""
        if not self.redis:
            return 0
        deleted = 0
        try:
            async for key in self.redis.scan_iter(match=pattern):
                deleted += await self.redis.delete(key)
        except Exception as e:
            logger.error(f"Cache pattern delete error: {e}")
        return deleted
