"""Infrastructure layer implementations for syncql."""

from syncql.infrastructure.cache_adapter import CacheAdapter
from syncql.infrastructure.stores import InMemoryCacheStore

__all__ = [
    "CacheAdapter",
    "InMemoryCacheStore",
]
