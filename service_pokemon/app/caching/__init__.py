"""
Pokemon caching package.

Holds the bounded LRU cache of resolved descriptions. Entries never expire;
eviction is driven by capacity alone.
"""

from .lru_cache import BoundedCache

__all__ = ["BoundedCache"]
