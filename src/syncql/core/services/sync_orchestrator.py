"""Synchronization orchestrator - keeps cached queries in step with mutations."""

import copy
import logging
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from syncql.core.entities.cache_key import CacheKey
from syncql.core.entities.operation import Operation, OperationKind, OperationResult
from syncql.core.entities.store_result import Ok
from syncql.core.entities.sync_config import SyncConfig
from syncql.core.entities.update import (
    EVICT,
    MutationInfo,
    QueryInfo,
    UpdateContext,
    UpdateTransform,
)
from syncql.core.interfaces.cache_store import ICacheStore
from syncql.core.interfaces.transport import IForward
from syncql.core.services.mutation_registry import MutationRegistry
from syncql.core.services.query_key_tracker import QueryKeyTracker
from syncql.core.services.snapshot_store import OptimisticSnapshotStore
from syncql.infrastructure.cache_adapter import CacheAdapter

logger = logging.getLogger(__name__)


@dataclass
class _InFlight:
    """Classification of one operation, derived once when it enters."""

    operation: Operation
    kind: OperationKind
    name: str
    optimistic: bool
    watched: bool
    # keys snapshotted for this operation's optimistic prediction
    snapshot_keys: list[CacheKey] = field(default_factory=list)

    @property
    def is_watched_mutation(self) -> bool:
        return self.kind is OperationKind.MUTATION and self.watched

    @property
    def is_optimistic_mutation(self) -> bool:
        return self.is_watched_mutation and self.optimistic


class SyncOrchestrator:
    """Intercepts operations and keeps the cache in sync with mutations.

    For every operation passing through :meth:`request`:

    - a successful query that some watched mutation declares as affected
      is tracked under its name, keyed by query and variables;
    - an optimistic watched mutation snapshots the cached data of every
      affected query instance and writes the predicted update right away;
    - a successful watched mutation rewrites every affected instance from
      the real result, in one cache transaction. When the mutation was
      optimistic the prediction already stands, so its snapshots are only
      cleared;
    - a failed optimistic watched mutation restores every snapshot.

    Results are always passed back unmodified; cache updates are a side
    effect. Cache store faults are swallowed by the adapter, whereas
    exceptions raised by update transforms propagate to the caller.

    Example:
        store = InMemoryCacheStore()
        orchestrator = SyncOrchestrator(
            cache=store,
            mutations={"AddItem": {"ListItems": append_item}},
            config=SyncConfig(debug=True),
        )
        result = await orchestrator.execute(operation, transport)
    """

    def __init__(
        self,
        cache: ICacheStore,
        mutations: Mapping[str, Mapping[str, UpdateTransform]],
        config: SyncConfig | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            cache: The cache store to keep in sync.
            mutations: Mutation name -> query name -> update transform.
            config: Optional configuration. Uses defaults if not provided.

        Raises:
            InvalidConfiguration: If the cache or the mutation map is unusable.
        """
        self._config = config or SyncConfig()
        self._cache = CacheAdapter(
            cache,
            debug=self._config.debug,
            read_only=self._config.read_only,
        )
        self._registry = MutationRegistry(mutations)
        self._tracker = QueryKeyTracker(debug=self._config.debug)
        self._snapshots = OptimisticSnapshotStore()

        self._debug_log(
            "Constructed synchronization orchestrator",
            watched_mutations=self._registry.get_mutation_names(),
        )

    @property
    def config(self) -> SyncConfig:
        return self._config

    @property
    def cache(self) -> CacheAdapter:
        return self._cache

    @property
    def registry(self) -> MutationRegistry:
        return self._registry

    @property
    def tracker(self) -> QueryKeyTracker:
        return self._tracker

    @property
    def snapshots(self) -> OptimisticSnapshotStore:
        return self._snapshots

    def request(
        self,
        operation: Operation,
        forward: IForward,
    ) -> AsyncIterator[OperationResult]:
        """Send an operation through the transport, syncing the cache.

        The optimistic prediction (if any) is applied before this method
        returns; everything else happens as results arrive.

        Args:
            operation: The operation to execute.
            forward: The next hop, producing the operation's results.

        Returns:
            An async iterator over the transport's results, unmodified.
        """
        results = forward(operation)
        inflight = self._classify(operation)

        if inflight.is_optimistic_mutation:
            self._add_optimistic_request(inflight)
            try:
                self._update_queries_after_mutation(
                    inflight, OperationResult(data=operation.optimistic_response)
                )
            except BaseException:
                # transforms run before any write, so the cache is untouched
                self._clear_optimistic_request(inflight)
                raise

        return self._process_results(inflight, results)

    async def execute(
        self,
        operation: Operation,
        forward: IForward,
    ) -> OperationResult | None:
        """Run an operation to completion and return its final result.

        Args:
            operation: The operation to execute.
            forward: The next hop, producing the operation's results.

        Returns:
            The last result produced, or None if the stream was empty.
        """
        last: OperationResult | None = None
        async for result in self.request(operation, forward):
            last = result
        return last

    def _classify(self, operation: Operation) -> _InFlight:
        kind = operation.kind
        name = operation.name
        watched = kind is OperationKind.MUTATION and self._registry.is_watched(name)
        return _InFlight(
            operation=operation,
            kind=kind,
            name=name,
            optimistic=operation.is_optimistic,
            watched=watched,
        )

    async def _process_results(
        self,
        inflight: _InFlight,
        results: AsyncIterator[OperationResult],
    ) -> AsyncIterator[OperationResult]:
        awaiting_prediction = inflight.is_optimistic_mutation
        try:
            async for result in results:
                awaiting_prediction = False
                self._handle_result(inflight, result)
                yield result
        except Exception:
            if awaiting_prediction:
                # the transport failed before confirming the prediction
                self._revert_optimistic_request(inflight)
            raise

    def _handle_result(self, inflight: _InFlight, result: OperationResult) -> None:
        if (
            inflight.kind is OperationKind.QUERY
            and result.succeeded
            and self._registry.is_query_related(inflight.name)
        ):
            self._debug_log(
                "Found a successful query related to a watched mutation",
                query_name=inflight.name,
            )
            self._tracker.add_query(
                inflight.name, self._cache.derive_key(inflight.operation)
            )
        elif inflight.is_watched_mutation and result.succeeded:
            if inflight.optimistic:
                self._clear_optimistic_request(inflight)
            else:
                self._update_queries_after_mutation(inflight, result)
        elif inflight.is_optimistic_mutation and result.failed:
            self._revert_optimistic_request(inflight)

    def _get_cached_query_keys_to_update(
        self, mutation_name: str
    ) -> list[tuple[str, CacheKey]]:
        """Every tracked (query name, key) pair a mutation can affect."""
        return [
            (query_name, key)
            for query_name in self._registry.get_registered_query_names(mutation_name)
            for key in self._tracker.get_query_keys_to_update(query_name)
        ]

    def _get_update_after_mutation(
        self,
        inflight: _InFlight,
        mutation_result: OperationResult,
        query_name: str,
        key: CacheKey,
    ) -> Any:
        cached = self._cache.read(key)
        if not isinstance(cached, Ok):
            # invalidated outside of this orchestrator; nothing to update
            self._tracker.remove_query(query_name, key)
            return None

        update_fn = self._registry.get_update_fn(inflight.name, query_name)
        return update_fn(
            UpdateContext(
                mutation=MutationInfo(
                    name=inflight.name,
                    variables=copy.deepcopy(inflight.operation.variables or {}),
                    result=mutation_result,
                ),
                query=QueryInfo(
                    name=query_name,
                    variables=copy.deepcopy(key.variables),
                    result=cached.value,
                ),
            )
        )

    def _update_queries_after_mutation(
        self,
        inflight: _InFlight,
        mutation_result: OperationResult,
    ) -> None:
        writes: list[tuple[CacheKey, Any]] = []
        evictions: list[tuple[str, CacheKey]] = []

        for query_name, key in self._get_cached_query_keys_to_update(inflight.name):
            self._debug_log(
                "Found a cached query related to this mutation, invoking its update",
                mutation_name=inflight.name,
                query_name=query_name,
            )
            updated = self._get_update_after_mutation(
                inflight, mutation_result, query_name, key
            )
            if updated is None:
                self._debug_log("Nothing new to write for this query", key=key)
            elif updated is EVICT:
                evictions.append((query_name, key))
            else:
                writes.append((key, updated))

        def apply() -> None:
            for key, data in writes:
                self._cache.write(key, data)
            for _, key in evictions:
                self._cache.evict(key)

        self._cache.transaction(apply)

        if evictions:
            for query_name, key in evictions:
                self._tracker.remove_query(query_name, key)
            self._cache.gc()

    def _add_optimistic_request(self, inflight: _InFlight) -> None:
        for _, key in self._get_cached_query_keys_to_update(inflight.name):
            cached = self._cache.read(key)
            self._snapshots.set(key, cached.value if isinstance(cached, Ok) else None)
            inflight.snapshot_keys.append(key)
            self._debug_log(
                "Saved cached data in case the optimistic mutation fails",
                mutation_name=inflight.name,
                key=key,
            )

    def _clear_optimistic_request(self, inflight: _InFlight) -> None:
        for key in inflight.snapshot_keys:
            self._snapshots.clear(key)
        self._debug_log(
            "Cleared optimistic snapshots",
            mutation_name=inflight.name,
            count=len(inflight.snapshot_keys),
        )
        inflight.snapshot_keys.clear()

    def _revert_optimistic_request(self, inflight: _InFlight) -> None:
        def restore() -> None:
            for key in inflight.snapshot_keys:
                before_state = self._snapshots.get_before_state(key)
                if before_state is not None:
                    self._cache.write(key, before_state)
                    self._debug_log(
                        "Reverted an optimistic update after an error",
                        mutation_name=inflight.name,
                        key=key,
                    )

        self._cache.transaction(restore)
        self._clear_optimistic_request(inflight)

    def _debug_log(self, message: str, **fields: Any) -> None:
        if self._config.debug:
            logger.debug("%s %s", message, fields)
