"""
Unit tests for the bounded LRU cache.
"""

import pytest
import threading

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_pokemon.app.caching.lru_cache import BoundedCache


class TestBoundedCache:
    """Test cases for BoundedCache."""

    @pytest.fixture
    def cache(self):
        """Create a cache with room for three entries."""
        return BoundedCache(3)

    def test_get_missing_key(self, cache):
        """A miss returns None and leaves the cache untouched."""
        assert cache.get("pikachu") is None
        assert len(cache) == 0

    def test_put_and_get(self, cache):
        cache.put("pikachu", "electric mouse")

        assert cache.get("pikachu") == "electric mouse"
        assert len(cache) == 1

    def test_overflow_evicts_first_inserted(self, cache):
        """Inserting capacity + 1 keys drops only the oldest one."""
        keys = ["bulbasaur", "ivysaur", "venusaur", "charmander"]
        for key in keys:
            cache.put(key, key.upper())

        assert len(cache) == 3
        assert "bulbasaur" not in cache
        for key in keys[1:]:
            assert cache.get(key) == key.upper()

    def test_get_promotes_entry(self, cache):
        """A read entry survives the next eviction."""
        cache.put("a", 1)
        cache.put("b", 2)
        cache.put("c", 3)

        assert cache.get("a") == 1
        cache.put("d", 4)

        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache
        assert "d" in cache

    def test_overwrite_keeps_size_and_promotes(self, cache):
        cache.put("a", 1)
        cache.put("b", 2)
        cache.put("c", 3)

        cache.put("a", 10)
        assert len(cache) == 3
        assert cache.get("a") == 10

        cache.put("d", 4)
        assert "a" in cache
        assert "b" not in cache

    def test_overwrite_when_full_does_not_evict(self, cache):
        for key in ("a", "b", "c"):
            cache.put(key, key)

        cache.put("b", "updated")

        assert len(cache) == 3
        assert all(key in cache for key in ("a", "b", "c"))

    def test_contains_does_not_promote(self, cache):
        cache.put("a", 1)
        cache.put("b", 2)
        cache.put("c", 3)

        assert "a" in cache
        cache.put("d", 4)

        assert "a" not in cache

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_non_positive_capacity_rejected(self, capacity):
        with pytest.raises(ValueError):
            BoundedCache(capacity)

    def test_capacity_one(self):
        """Every new distinct key replaces the sole entry."""
        cache = BoundedCache(1)

        cache.put("a", 1)
        cache.put("b", 2)
        assert len(cache) == 1
        assert cache.get("a") is None
        assert cache.get("b") == 2

        cache.put("b", 3)
        assert len(cache) == 1
        assert cache.get("b") == 3

        cache.put("c", 4)
        assert len(cache) == 1
        assert cache.get("c") == 4
        assert "b" not in cache

    def test_stats(self, cache):
        cache.put("a", 1)
        cache.get("a")
        cache.get("missing")
        for key in ("b", "c", "d"):
            cache.put(key, key)

        assert cache.stats() == {
            "size": 3,
            "capacity": 3,
            "hits": 1,
            "misses": 1,
            "evictions": 1,
        }

    def test_clear(self, cache):
        cache.put("a", 1)
        cache.clear()

        assert len(cache) == 0
        assert cache.get("a") is None

    def test_concurrent_writers_respect_capacity(self):
        """Parallel puts and gets never push the cache past its capacity."""
        cache = BoundedCache(10)
        errors = []

        def worker(offset: int):
            try:
                for i in range(200):
                    key = f"key-{(offset * 7 + i) % 40}"
                    cache.put(key, i)
                    cache.get(key)
                    assert len(cache) <= 10
            except AssertionError as exc:
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert not errors
        assert len(cache) == 10
