"""
In-memory TTL cache for built results.

Holds the aggregated monthly table between requests.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import structlog

logger = structlog.get_logger(__name__)


@dataclass
class CacheEntry:
    """Cached value with its storage time."""
    value: Any
    timestamp: float
    ttl: float

    def expired(self, now: float) -> bool:
        return self.ttl <= 0 or now - self.timestamp > self.ttl


class TTLCache:
    """
    Key/value cache with a default time-to-live.

    Usage:
        cache = TTLCache(ttl=6 * 60 * 60)
        cache.set("matriculas", monthly)
        cached = cache.get("matriculas")
    """

    def __init__(self, ttl: float = 6 * 60 * 60, clock: Callable[[], float] = time.monotonic):
        """
        Initialize cache.

        Args:
            ttl: Default time-to-live in seconds
            clock: Time source, injectable for tests
        """
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.expired(self._clock()):
            del self._entries[key]
            logger.debug("cache_expired", key=key)
            return None

        return entry.value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store a value, optionally overriding the default TTL."""
        self._entries[key] = CacheEntry(
            value=value,
            timestamp=self._clock(),
            ttl=self.ttl if ttl is None else ttl,
        )

    def delete(self, key: str) -> None:
        """Remove an entry if present."""
        self._entries.pop(key, None)

    def clear(self) -> None:
        """Clear all entries."""
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
