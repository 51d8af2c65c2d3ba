import json
from typing import Any, Optional
import redis.asyncio as redis

from common.core.config import settings
from .interface import CacheInterface
from common.core.otel_axiom_exporter import get_logger, trace_span

logger = get_logger(__name__)


class RedisCache(CacheInterface):
    """Redis-backed cache storing JSON values, shared across API pods."""

    def __init__(self, url: Optional[str] = None):
        self.url = url or settings.redis_connection_url
        self._client: Optional[redis.Redis] = None

    def _get_client(self) -> redis.Redis:
        # from_url connects lazily on first command
        if self._client is None:
            self._client = redis.Redis.from_url(self.url, decode_responses=True)
        return self._client

    async def disconnect(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Redis cache provider disconnected")

    @trace_span
    async def get(self, key: str) -> Optional[Any]:
        try:
            value = await self._get_client().get(key)
            if value is None:
                return None
            return json.loads(value)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to deserialize cached value for key {key}: {e}")
            return None
        except Exception as e:
            logger.error(f"Error getting cache key {key}: {e}")
            return None

    @trace_span
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        try:
            serialized = json.dumps(value, default=str)
            if ttl:
                result = await self._get_client().setex(key, ttl, serialized)
            else:
                result = await self._get_client().set(key, serialized)
            return bool(result)
        except Exception as e:
            logger.error(f"Error setting cache key {key}: {e}")
            return False

    @trace_span
    async def delete(self, key: str) -> bool:
        try:
            return bool(await self._get_client().delete(key))
        except Exception as e:
            logger.error(f"Error deleting cache key {key}: {e}")
            return False

    @trace_span
    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching a pattern using SCAN (never KEYS)."""
        try:
            client = self._get_client()
            deleted = 0
            async for key in client.scan_iter(match=pattern, count=500):
                deleted += await client.delete(key)
            logger.info(f"Deleted {deleted} cache keys matching pattern {pattern}")
            return deleted
        except Exception as e:
            logger.error(f"Error deleting cache pattern {pattern}: {e}")
            return 0

    @trace_span
    async def exists(self, key: str) -> bool:
        try:
            return bool(await self._get_client().exists(key))
        except Exception as e:
            logger.error(f"Error checking if cache key {key} exists: {e}")
            return False
