"""Runtime tracker of cached query instances."""

import logging

from syncql.core.entities.cache_key import CacheKey

logger = logging.getLogger(__name__)


class QueryKeyTracker:
    """Tracks which (query, variables) instances exist in the cache.

    Instances are discovered as queries succeed at runtime, because the
    variables a query is called with are only known at call time. Each
    distinct variable set is tracked as its own key so that update
    transforms run once per cached instance.

    Keys are kept per query name in insertion order. Structurally equal
    keys are never stored twice.
    """

    def __init__(self, debug: bool = False) -> None:
        self._debug = debug
        self._queries: dict[str, dict[CacheKey, None]] = {}

    def add_query(self, query_name: str, key: CacheKey) -> None:
        """Start tracking a query instance.

        Args:
            query_name: Name of the query.
            key: Cache key of the instance; ignored if already tracked.
        """
        tracked = self._queries.setdefault(query_name, {})
        if key in tracked:
            return
        tracked[key] = None
        if self._debug:
            logger.debug(
                "Tracking a new query instance: query=%s key=%r tracked=%d",
                query_name,
                key,
                len(tracked),
            )

    def remove_query(self, query_name: str, key: CacheKey) -> None:
        """Stop tracking a query instance; no-op if it is not tracked."""
        tracked = self._queries.get(query_name)
        if not tracked or key not in tracked:
            return
        del tracked[key]
        if self._debug:
            logger.debug(
                "Removed a tracked query instance: query=%s key=%r tracked=%d",
                query_name,
                key,
                len(tracked),
            )

    def get_query_keys_to_update(self, query_name: str) -> list[CacheKey]:
        return list(self._queries.get(query_name, ()))

    def has_query_to_update(self, query_name: str) -> bool:
        return bool(self._queries.get(query_name))

    def __len__(self) -> int:
        """Total number of tracked query instances."""
        return sum(len(keys) for keys in self._queries.values())
