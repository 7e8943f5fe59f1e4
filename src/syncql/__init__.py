"""syncql - Keep a client-side GraphQL cache in sync with mutations.

Declare once which cached queries each mutation can affect and how to
transform their data; syncql discovers at runtime which query instances
(query + variables) are cached, and rewrites them whenever a watched
mutation succeeds, or is optimistically predicted to succeed. Failed
optimistic predictions are rolled back.

Example:
    from syncql import (
        InMemoryCacheStore,
        Operation,
        SyncConfig,
        SyncOrchestrator,
    )
    from syncql.adapters.ariadne import AriadneTransport

    def append_item(update):
        items = update.query.result["items"]
        new_item = update.mutation.result.data["addItem"]
        return {"items": [*items, new_item]}

    store = InMemoryCacheStore()
    orchestrator = SyncOrchestrator(
        cache=store,
        mutations={"AddItem": {"ListItems": append_item}},
        config=SyncConfig(debug=True),
    )
    transport = AriadneTransport(schema)

    # Successful queries are tracked as they come back
    await orchestrator.execute(
        Operation("query ListItems { items { id name } }"),
        transport,
    )

    # Optimistic mutations update the cache before the server answers
    await orchestrator.execute(
        Operation(
            "mutation AddItem($name: String!) { addItem(name: $name) { id name } }",
            variables={"name": "B"},
            context={"optimistic_response": {"addItem": {"id": "tmp", "name": "B"}}},
        ),
        transport,
    )
"""

from syncql.core.entities import (
    EVICT,
    CacheKey,
    MutationInfo,
    NotFound,
    Ok,
    Operation,
    OperationKind,
    OperationResult,
    QueryInfo,
    ReadResult,
    StoreError,
    SyncConfig,
    UpdateContext,
    UpdateTransform,
)
from syncql.core.errors import (
    CacheEvictFailure,
    CacheGcFailure,
    CacheReadFailure,
    CacheStoreFailure,
    CacheWriteFailure,
    InvalidConfiguration,
    MissingUpdateFunction,
    SyncQLError,
)
from syncql.core.interfaces import ICacheStore, IForward
from syncql.core.services import (
    MutationRegistry,
    OptimisticSnapshotStore,
    QueryKeyTracker,
    SyncOrchestrator,
)
from syncql.infrastructure import CacheAdapter, InMemoryCacheStore

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheKey",
    "Operation",
    "OperationKind",
    "OperationResult",
    "SyncConfig",
    # Update transforms
    "EVICT",
    "MutationInfo",
    "QueryInfo",
    "UpdateContext",
    "UpdateTransform",
    # Store results
    "Ok",
    "NotFound",
    "StoreError",
    "ReadResult",
    # Errors
    "SyncQLError",
    "InvalidConfiguration",
    "MissingUpdateFunction",
    "CacheStoreFailure",
    "CacheReadFailure",
    "CacheWriteFailure",
    "CacheEvictFailure",
    "CacheGcFailure",
    # Core interfaces
    "ICacheStore",
    "IForward",
    # Core services
    "MutationRegistry",
    "QueryKeyTracker",
    "OptimisticSnapshotStore",
    "SyncOrchestrator",
    # Infrastructure implementations
    "CacheAdapter",
    "InMemoryCacheStore",
]
