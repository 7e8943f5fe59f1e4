"""Snapshots of cache values taken before optimistic writes."""

from typing import Any

from syncql.core.entities.cache_key import CacheKey


class OptimisticSnapshotStore:
    """Pre-mutation cache values, kept until an optimistic mutation resolves.

    ``None`` means both "there was nothing cached" and "cleared": either
    way nothing is written back on revert, so storing ``None`` simply
    drops the entry.

    Note:
        Concurrent optimistic mutations affecting the same key overwrite
        each other's snapshot. The last one taken wins.
    """

    def __init__(self) -> None:
        self._snapshots: dict[CacheKey, Any] = {}

    def set(self, key: CacheKey, before_state: Any) -> None:
        """Record (or clear, with ``None``) the snapshot for a key."""
        if before_state is None:
            self._snapshots.pop(key, None)
        else:
            self._snapshots[key] = before_state

    def get_before_state(self, key: CacheKey) -> Any:
        return self._snapshots.get(key)

    def clear(self, key: CacheKey) -> None:
        self.set(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._snapshots

    def __len__(self) -> int:
        return len(self._snapshots)
