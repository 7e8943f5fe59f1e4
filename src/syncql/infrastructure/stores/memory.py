"""In-memory normalizing cache store implementation."""

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from cachetools import LRUCache  # type: ignore[import-untyped]
from graphql import OperationDefinitionNode, OperationType

from syncql.core.entities.cache_key import CacheKey
from syncql.utils.documents import (
    as_document,
    get_main_definition,
    resolve_arguments,
    response_key,
    root_fields,
)
from syncql.utils.hashing import canonical_json

ROOT_QUERY = "ROOT_QUERY"
ROOT_MUTATION = "ROOT_MUTATION"
ROOT_SUBSCRIPTION = "ROOT_SUBSCRIPTION"
REF_KEY = "__ref"

R = TypeVar("R")


class MissingFieldError(KeyError):
    """Raised when a read cannot be satisfied from the store."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "missing field"


class InMemoryCacheStore:
    """Normalizing client cache kept in process memory.

    Objects carrying both ``__typename`` and ``id`` are stored once as
    entities under ``"<typename>:<id>"`` and referenced from wherever they
    appear, so writing a fresh copy of an entity updates every cached
    result that contains it. Root fields are keyed by their store field
    name (field name plus sorted JSON arguments).

    Entities are held in an LRU bounded ``cachetools`` cache; entries
    pushed out by the bound simply read as misses afterwards.

    Watchers registered with :meth:`watch` receive the set of changed
    entity ids. Inside :meth:`perform_transaction` notifications are
    batched and delivered once, when the outermost transaction finishes.
    """

    def __init__(
        self,
        maxsize: int = 1000,
        root_query_typename: str = "Query",
        root_mutation_typename: str = "Mutation",
        root_subscription_typename: str = "Subscription",
    ) -> None:
        """Initialize the store.

        Args:
            maxsize: Maximum number of entities (root objects included).
            root_query_typename: Schema name of the query root type.
            root_mutation_typename: Schema name of the mutation root type.
            root_subscription_typename: Schema name of the subscription
                root type.
        """
        self._maxsize = maxsize
        self._entities: LRUCache[str, dict[str, Any]] = LRUCache(maxsize=maxsize)
        self._roots = {
            OperationType.QUERY: (ROOT_QUERY, root_query_typename),
            OperationType.MUTATION: (ROOT_MUTATION, root_mutation_typename),
            OperationType.SUBSCRIPTION: (ROOT_SUBSCRIPTION, root_subscription_typename),
        }
        self._watchers: list[Callable[[frozenset[str]], None]] = []
        self._dirty: set[str] = set()
        self._transaction_depth = 0

    @property
    def root_query_typename(self) -> str:
        return self._roots[OperationType.QUERY][1]

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def store_field_name(
        self,
        typename: str,
        field_name: str,
        arguments: dict[str, Any],
    ) -> str:
        """Compute the identifier a field is stored under.

        The default policy keys fields by name and arguments only, so
        ``typename`` does not change the result.
        """
        if not arguments:
            return field_name
        return f"{field_name}({canonical_json(arguments)})"

    def read_query(self, key: CacheKey) -> dict[str, Any]:
        """Read a query instance's result.

        Args:
            key: The query instance to read.

        Returns:
            A freshly built copy of the cached data.

        Raises:
            MissingFieldError: If any root field or referenced entity is
                missing from the store.
        """
        definition = get_main_definition(
            as_document(key.query), key.operation_name or None
        )
        root_id, typename = self._root_for(definition)
        root = self._entities.get(root_id)
        if root is None:
            raise MissingFieldError(f"Nothing cached under {root_id}")

        data: dict[str, Any] = {}
        for field in root_fields(definition):
            store_name = self.store_field_name(
                typename, field.name.value, resolve_arguments(field, key.variables)
            )
            if store_name not in root:
                raise MissingFieldError(f"Missing field {store_name!r} on {root_id}")
            data[response_key(field)] = self._denormalize(root[store_name], ())
        return data

    def write_query(self, key: CacheKey, data: Any) -> None:
        """Write a query instance's result, normalizing entities.

        Args:
            key: The query instance to write.
            data: Response data containing every root field of the query.

        Raises:
            TypeError: If data is not a mapping.
            MissingFieldError: If a root field is absent from the data.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Query data must be a mapping, got {type(data).__name__}")

        definition = get_main_definition(
            as_document(key.query), key.operation_name or None
        )
        root_id, typename = self._root_for(definition)
        fields = root_fields(definition)
        for field in fields:
            if response_key(field) not in data:
                raise MissingFieldError(
                    f"Missing field {response_key(field)!r} in data for "
                    f"{key.operation_name or root_id}"
                )

        root_values = {
            self.store_field_name(
                typename, field.name.value, resolve_arguments(field, key.variables)
            ): self._normalize(data[response_key(field)])
            for field in fields
        }
        self._merge_entity(root_id, root_values)

    def evict(self, field_name: str, entity_id: str = ROOT_QUERY) -> bool:
        """Remove one stored field of an entity (the query root by default).

        Args:
            field_name: Store field name to remove.
            entity_id: Entity holding the field.

        Returns:
            True if the field was present.
        """
        entity = self._entities.get(entity_id)
        if entity is None or field_name not in entity:
            return False
        remaining = dict(entity)
        del remaining[field_name]
        self._entities[entity_id] = remaining
        self._mark_dirty(entity_id)
        return True

    def gc(self) -> list[str]:
        """Drop every entity no longer reachable from a root object.

        Returns:
            Sorted ids of the removed entities.
        """
        reachable: set[str] = set()
        pending = [
            root_id for root_id, _ in self._roots.values() if root_id in self._entities
        ]
        while pending:
            entity_id = pending.pop()
            if entity_id in reachable:
                continue
            reachable.add(entity_id)
            entity = self._entities.get(entity_id)
            if entity is not None:
                pending.extend(_collect_refs(entity))

        removed = sorted(eid for eid in list(self._entities) if eid not in reachable)
        for entity_id in removed:
            del self._entities[entity_id]
        return removed

    def perform_transaction(self, update: Callable[["InMemoryCacheStore"], R]) -> R:
        """Run ``update`` with watcher notifications batched until it returns.

        Args:
            update: Receives this store and issues any number of writes.

        Returns:
            Whatever ``update`` returns.
        """
        self._transaction_depth += 1
        try:
            return update(self)
        finally:
            self._transaction_depth -= 1
            if self._transaction_depth == 0:
                self._broadcast()

    def watch(self, callback: Callable[[frozenset[str]], None]) -> Callable[[], None]:
        """Register a change listener.

        Args:
            callback: Receives the ids of the entities that changed.

        Returns:
            A function that unregisters the listener.
        """
        self._watchers.append(callback)

        def unwatch() -> None:
            if callback in self._watchers:
                self._watchers.remove(callback)

        return unwatch

    def extract(self) -> dict[str, dict[str, Any]]:
        """Snapshot of the normalized store contents."""
        return {eid: dict(entity) for eid, entity in self._entities.items()}

    def clear(self) -> None:
        self._entities.clear()
        self._dirty.clear()

    def __len__(self) -> int:
        return len(self._entities)

    def _root_for(self, definition: OperationDefinitionNode) -> tuple[str, str]:
        return self._roots[definition.operation]

    def _normalize(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            fields = {k: self._normalize(v) for k, v in value.items()}
            entity_id = _entity_id(value)
            if entity_id is None:
                return fields
            self._merge_entity(entity_id, fields)
            return {REF_KEY: entity_id}
        if isinstance(value, (list, tuple)):
            return [self._normalize(v) for v in value]
        return value

    def _denormalize(self, value: Any, path: tuple[str, ...]) -> Any:
        if isinstance(value, Mapping):
            ref = value.get(REF_KEY)
            if ref is None:
                return {k: self._denormalize(v, path) for k, v in value.items()}
            entity = self._entities.get(ref)
            if entity is None:
                raise MissingFieldError(f"Dangling reference to {ref!r}")
            if ref in path:
                # cyclic reference; stop at the entity's identity
                return {k: entity[k] for k in ("__typename", "id") if k in entity}
            return {k: self._denormalize(v, path + (ref,)) for k, v in entity.items()}
        if isinstance(value, list):
            return [self._denormalize(v, path) for v in value]
        return value

    def _merge_entity(self, entity_id: str, fields: dict[str, Any]) -> None:
        existing = self._entities.get(entity_id)
        merged = {**existing, **fields} if existing else dict(fields)
        self._entities[entity_id] = merged
        self._mark_dirty(entity_id)

    def _mark_dirty(self, entity_id: str) -> None:
        self._dirty.add(entity_id)
        if self._transaction_depth == 0:
            self._broadcast()

    def _broadcast(self) -> None:
        if not self._dirty:
            return
        changed = frozenset(self._dirty)
        self._dirty.clear()
        for watcher in list(self._watchers):
            watcher(changed)


def _entity_id(value: Mapping[str, Any]) -> str | None:
    typename = value.get("__typename")
    identifier = value.get("id")
    if typename is None or identifier is None:
        return None
    return f"{typename}:{identifier}"


def _collect_refs(value: Any) -> list[str]:
    if isinstance(value, Mapping):
        ref = value.get(REF_KEY)
        if ref is not None:
            return [ref]
        return [r for v in value.values() for r in _collect_refs(v)]
    if isinstance(value, list):
        return [r for v in value for r in _collect_refs(v)]
    return []
