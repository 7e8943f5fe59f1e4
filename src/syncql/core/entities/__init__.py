"""Domain entities for syncql."""

from syncql.core.entities.cache_key import CacheKey
from syncql.core.entities.operation import (
    Operation,
    OperationKind,
    OperationResult,
)
from syncql.core.entities.store_result import NotFound, Ok, ReadResult, StoreError
from syncql.core.entities.sync_config import SyncConfig
from syncql.core.entities.update import (
    EVICT,
    MutationInfo,
    QueryInfo,
    UpdateContext,
    UpdateTransform,
)

__all__ = [
    "CacheKey",
    "Operation",
    "OperationKind",
    "OperationResult",
    "Ok",
    "NotFound",
    "StoreError",
    "ReadResult",
    "SyncConfig",
    "EVICT",
    "MutationInfo",
    "QueryInfo",
    "UpdateContext",
    "UpdateTransform",
]
