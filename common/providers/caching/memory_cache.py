import fnmatch
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .interface import CacheInterface
from common.core.otel_axiom_exporter import get_logger

logger = get_logger(__name__)


@dataclass
class CacheEntry:
    """Cached value with an optional monotonic expiry."""

    value: Any
    expires_at: Optional[float] = None

    def is_expired(self, now: Optional[float] = None) -> bool:
        if self.expires_at is None:
            return False
        return (now if now is not None else time.monotonic()) >= self.expires_at


class MemoryCache(CacheInterface):
    """Process-local cache. Entries expire lazily on access."""

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}
        logger.info("Memory cache provider initialized")

    def _live_entry(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired():
            self._entries.pop(key, None)
            return None
        return entry

    async def get(self, key: str) -> Optional[Any]:
        entry = self._live_entry(key)
        return entry.value if entry else None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        expires_at = time.monotonic() + ttl if ttl else None
        self._entries[key] = CacheEntry(value=value, expires_at=expires_at)
        logger.debug(f"Cached key {key} with TTL {ttl}")
        return True

    async def delete(self, key: str) -> bool:
        removed = self._entries.pop(key, None) is not None
        if removed:
            logger.debug(f"Deleted cache key {key}")
        return removed

    async def delete_pattern(self, pattern: str) -> int:
        matching = [key for key in self._entries if fnmatch.fnmatch(key, pattern)]
        for key in matching:
            del self._entries[key]
        logger.info(f"Deleted {len(matching)} cache keys matching pattern {pattern}")
        return len(matching)

    async def exists(self, key: str) -> bool:
        return self._live_entry(key) is not None
