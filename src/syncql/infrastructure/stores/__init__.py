"""Cache store implementations."""

from syncql.infrastructure.stores.memory import InMemoryCacheStore, MissingFieldError

__all__ = ["InMemoryCacheStore", "MissingFieldError"]
