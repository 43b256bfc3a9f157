"""Cache port for resolved provider responses.

The cache is owned by the lookup orchestrator and passed in at
construction. Keys are tagged strings (``ip:<address>``,
``place:<query key>``); values are opaque to the cache.
"""

from __future__ import annotations

from typing import Optional, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol[T]):
    """Key/value store with per-entry expiry.

    Implementations:
    - adapters/cache/memory_cache.py (InMemoryCache) - Production
    - adapters/cache/null_cache.py (NullCache) - Caching switched off

    Implementations must be safe to call from HTTP worker threads.
    """

    def get(self, key: str) -> Optional[T]:
        """Return the stored value, or None when absent or expired."""
        ...

    def set(self, key: str, value: T) -> None:
        """Store value under key, replacing and re-stamping any old entry."""
        ...

    def invalidate(self, key: str) -> bool:
        """Remove one entry.

        Returns:
            True if the key was present.
        """
        ...

    def clear(self) -> int:
        """Remove every entry and return how many there were."""
        ...

    def size(self) -> int:
        ...
