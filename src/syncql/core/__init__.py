"""Core domain layer for syncql."""

from syncql.core.entities import CacheKey, Operation, OperationResult, SyncConfig
from syncql.core.interfaces import ICacheStore, IForward
from syncql.core.services import (
    MutationRegistry,
    OptimisticSnapshotStore,
    QueryKeyTracker,
    SyncOrchestrator,
)

__all__ = [
    # Entities
    "CacheKey",
    "Operation",
    "OperationResult",
    "SyncConfig",
    # Interfaces
    "ICacheStore",
    "IForward",
    # Services
    "MutationRegistry",
    "QueryKeyTracker",
    "OptimisticSnapshotStore",
    "SyncOrchestrator",
]
