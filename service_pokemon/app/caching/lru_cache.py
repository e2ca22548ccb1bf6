"""
Bounded in-memory LRU cache for resolved descriptions.
"""

import threading
from collections import OrderedDict
from typing import Any, Dict, Generic, Hashable, Optional, TypeVar

from shared.logging import get_logger

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_CAPACITY = 100


class BoundedCache(Generic[K, V]):
    """Fixed-capacity key/value store with least-recently-used eviction.

    Recency is kept by the insertion order of an ``OrderedDict``: the front
    holds the least recently used entry, the back the most recent one. Every
    operation runs under a single lock, so lookup, promotion, insertion and
    eviction are atomic with respect to each other.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Cache capacity must be a positive integer, got {capacity}")

        self._capacity = capacity
        self._entries: "OrderedDict[K, V]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self.logger = get_logger("pokemon.cache")

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: K) -> Optional[V]:
        """Return the cached value and mark it most recently used."""
        with self._lock:
            if key not in self._entries:
                self._misses += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return self._entries[key]

    def put(self, key: K, value: V) -> None:
        """Insert or replace ``key``, evicting the LRU entry if full."""
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self._entries[key] = value
                return

            if len(self._entries) >= self._capacity:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                self.logger.debug("Evicted cache entry", key=str(evicted))

            self._entries[key] = value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> Dict[str, Any]:
        """Snapshot of occupancy and hit counters."""
        with self._lock:
            return {
                "size": len(self._entries),
                "capacity": self._capacity,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    def __contains__(self, key: object) -> bool:
        # Membership checks do not count as a use
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
