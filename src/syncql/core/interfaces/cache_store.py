"""Cache store interface."""

from typing import Any, Protocol

from syncql.core.entities.cache_key import CacheKey

# Methods a cache store must provide; checked at construction time.
REQUIRED_STORE_METHODS = (
    "read_query",
    "write_query",
    "evict",
    "gc",
    "store_field_name",
)


class ICacheStore(Protocol):
    """Contract for the client-side cache the engine keeps in sync.

    The store owns normalization and garbage collection; the engine only
    reads and writes whole query results through it. Methods are
    synchronous: the engine's handling before and after a transport round
    trip never suspends.

    A store may additionally provide ``perform_transaction(update)``,
    which runs ``update(store)`` so that the writes it issues become
    visible to watchers together. Stores without it have their writes
    applied one at a time.
    """

    root_query_typename: str

    def read_query(self, key: CacheKey) -> Any:
        """Read the cached result for a query instance.

        Args:
            key: The query instance to read.

        Returns:
            The cached data.

        Raises:
            KeyError: If the store has no complete result for the key.
        """
        ...

    def write_query(self, key: CacheKey, data: Any) -> None:
        """Write a result for a query instance.

        Args:
            key: The query instance to write.
            data: The result data, shaped like the query's response.
        """
        ...

    def evict(self, field_name: str) -> bool:
        """Evict a root query field by its store field name.

        Args:
            field_name: Store-level identifier of the root field.

        Returns:
            True if the field was present and removed.
        """
        ...

    def gc(self) -> list[str]:
        """Remove unreachable entries.

        Returns:
            Identifiers of the removed entries.
        """
        ...

    def store_field_name(
        self,
        typename: str,
        field_name: str,
        arguments: dict[str, Any],
    ) -> str:
        """Compute the store-level identifier of a field.

        Args:
            typename: Type the field is selected on.
            field_name: Schema name of the field.
            arguments: Field arguments, already resolved against variables.

        Returns:
            The identifier the store keys this field by.
        """
        ...
