"""Thread-safe in-memory resolution cache.

Entries carry the time they were fetched and become invisible once
``now - fetched_at`` exceeds the TTL. Expiry is lazy: an expired entry is
only evicted by the read that notices it. There is no size bound; the
cache assumes lookups are rare enough that it stays small for the
lifetime of the process.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, NamedTuple, Optional, TypeVar

T = TypeVar("T")

ONE_YEAR_SECONDS = 365 * 24 * 3600


class CacheEntry(NamedTuple):
    value: Any
    fetched_at: float


@dataclass
class InMemoryCache(Generic[T]):
    """Resolution cache with lazy TTL expiry, implementing CachePort.

    Reads and writes come from the caller's thread and from HTTP
    completion callbacks at the same time; every access holds one lock.

    Attributes:
        ttl_seconds: Lifetime of an entry (None = never expires)
        name: Cache name for logging
        clock: Time source returning seconds, replaceable in tests

    Example:
        cache = InMemoryCache[ProviderResponse](name="geo", ttl_seconds=3600)
        cache.set("ip:8.8.8.8", response)
    """

    ttl_seconds: Optional[float] = ONE_YEAR_SECONDS
    name: str = "cache"
    clock: Callable[[], float] = field(default=time.time, repr=False)

    _entries: Dict[str, CacheEntry] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)
    _hits: int = field(default=0, repr=False)
    _misses: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"cache.{self.name}")

    def _is_expired(self, entry: CacheEntry) -> bool:
        if self.ttl_seconds is None:
            return False
        return self.clock() - entry.fetched_at > self.ttl_seconds

    def get(self, key: str) -> Optional[T]:
        """Return the live value for key, or None.

        An expired entry is evicted here and counts as a miss.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._is_expired(entry):
                del self._entries[key]
                self._logger.debug(
                    "Cache entry expired",
                    extra={"key": key, "age": self.clock() - entry.fetched_at},
                )
                entry = None

            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    def set(self, key: str, value: T) -> None:
        """Store value under key, stamped with the current time."""
        with self._lock:
            self._entries[key] = CacheEntry(value, self.clock())
        self._logger.debug("Cache entry stored", extra={"key": key})

    def invalidate(self, key: str) -> bool:
        with self._lock:
            removed = self._entries.pop(key, None) is not None
        if removed:
            self._logger.debug("Cache entry invalidated", extra={"key": key})
        return removed

    def clear(self) -> int:
        """Drop every entry and reset the counters.

        Returns:
            Number of entries dropped.
        """
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
            self._hits = self._misses = 0
        self._logger.info("Cache cleared", extra={"entries_cleared": dropped})
        return dropped

    def size(self) -> int:
        """Number of stored entries, expired ones included."""
        with self._lock:
            return len(self._entries)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def stats(self) -> Dict[str, Any]:
        """Hit/miss counters and current size."""
        with self._lock:
            lookups = self._hits + self._misses
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate_percent": (
                    round(100.0 * self._hits / lookups, 1) if lookups else 0.0
                ),
            }
