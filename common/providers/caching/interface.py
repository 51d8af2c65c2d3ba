from abc import ABC, abstractmethod
from typing import Any, Optional


class CacheInterface(ABC):
    """
    Key/value cache used for non-authoritative views (e.g. subscription status).

    Implementations never raise on backend errors: reads degrade to a miss and
    writes report False, so callers can always fall back to the source of truth.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Args:
            key: The cache key

        Returns:
            The cached value if present and unexpired, None otherwise
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Store a JSON-serialisable value.

        Args:
            key: The cache key
            value: The value to cache
            ttl: Time to live in seconds, None for no expiry

        Returns:
            True if stored
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Invalidate a key.

        Returns:
            True if a value was removed
        """
        pass

    @abstractmethod
    async def delete_pattern(self, pattern: str) -> int:
        """
        Invalidate every key matching a glob pattern (e.g. "user:*:subscription").

        Returns:
            Number of keys removed
        """
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        pass
