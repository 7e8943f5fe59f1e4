"""Domain services for syncql."""

from syncql.core.services.mutation_registry import MutationRegistry
from syncql.core.services.query_key_tracker import QueryKeyTracker
from syncql.core.services.snapshot_store import OptimisticSnapshotStore
from syncql.core.services.sync_orchestrator import SyncOrchestrator

__all__ = [
    "MutationRegistry",
    "QueryKeyTracker",
    "OptimisticSnapshotStore",
    "SyncOrchestrator",
]
