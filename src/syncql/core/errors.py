"""Error taxonomy for syncql.

Only :class:`InvalidConfiguration` and :class:`MissingUpdateFunction` are
ever raised to callers. Store failures are captured at the cache adapter
boundary and reported as values (see ``syncql.core.entities.store_result``).
"""

from typing import Any


class SyncQLError(Exception):
    """Base class for all syncql errors."""


class InvalidConfiguration(SyncQLError, ValueError):
    """Raised at construction when the cache or registry config is unusable."""


class MissingUpdateFunction(SyncQLError, KeyError):
    """Raised when an unregistered (mutation, query) update function is requested."""

    def __init__(self, mutation_name: str, query_name: str) -> None:
        super().__init__(
            f"No update function registered for mutation {mutation_name!r} "
            f"and query {query_name!r}"
        )
        self.mutation_name = mutation_name
        self.query_name = query_name

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class CacheStoreFailure(SyncQLError):
    """A cache store call failed; recovered locally, never propagated."""

    action = "access"

    def __init__(self, key: Any, error: BaseException) -> None:
        super().__init__(f"Unable to {self.action} cache for {key!r}: {error}")
        self.key = key
        self.error = error


class CacheReadFailure(CacheStoreFailure):
    action = "read from"


class CacheWriteFailure(CacheStoreFailure):
    action = "write to"


class CacheEvictFailure(CacheStoreFailure):
    action = "evict from"


class CacheGcFailure(CacheStoreFailure):
    action = "garbage collect"
