"""Cache that never stores anything.

Every lookup goes to the provider. Useful in tests that count requests
and for running with caching switched off:

    orchestrator = LookupOrchestrator(..., cache=NullCache())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class NullCache(Generic[T]):
    """CachePort implementation where every get() misses."""

    name: str = "null"

    def get(self, key: str) -> Optional[T]:
        return None

    def set(self, key: str, value: T) -> None:
        pass

    def invalidate(self, key: str) -> bool:
        return False

    def clear(self) -> int:
        return 0

    def size(self) -> int:
        return 0

    def stats(self) -> Dict[str, float]:
        return dict.fromkeys(("size", "hits", "misses", "hit_rate_percent"), 0)
