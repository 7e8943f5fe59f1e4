"""Fault-tolerant adapter over the client cache store."""

import copy
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from syncql.core.entities.cache_key import CacheKey
from syncql.core.entities.operation import Operation
from syncql.core.entities.store_result import NotFound, Ok, ReadResult, StoreError
from syncql.core.errors import (
    CacheEvictFailure,
    CacheGcFailure,
    CacheReadFailure,
    CacheStoreFailure,
    CacheWriteFailure,
    InvalidConfiguration,
)
from syncql.core.interfaces.cache_store import REQUIRED_STORE_METHODS, ICacheStore
from syncql.utils.documents import (
    as_document,
    canonical_source,
    get_main_definition,
    resolve_arguments,
    root_fields,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


class CacheAdapter:
    """Wraps a cache store so that cache faults never fail an operation.

    Reads report their outcome as a value (:class:`Ok`, :class:`NotFound`
    or :class:`StoreError`); writes, evictions and garbage collection
    swallow store exceptions after logging them. In read-only mode every
    call that would mutate the store is skipped.
    """

    def __init__(
        self,
        cache: ICacheStore,
        debug: bool = False,
        read_only: bool = False,
    ) -> None:
        """Initialize the adapter.

        Args:
            cache: The cache store to wrap.
            debug: Log diagnostics for every cache interaction.
            read_only: Never write to or evict from the store.

        Raises:
            InvalidConfiguration: If the cache is missing or incomplete.
        """
        if cache is None:
            raise InvalidConfiguration("A cache store is required")
        missing = [
            name
            for name in REQUIRED_STORE_METHODS
            if not callable(getattr(cache, name, None))
        ]
        if missing:
            raise InvalidConfiguration(
                f"Cache store {type(cache).__name__} is missing required "
                f"methods: {', '.join(missing)}"
            )
        self._cache = cache
        self._debug = debug
        self._read_only = read_only

    @property
    def store(self) -> ICacheStore:
        return self._cache

    @property
    def read_only(self) -> bool:
        return self._read_only

    def derive_key(self, operation: Operation) -> CacheKey:
        """Build the canonical cache key of an operation.

        Args:
            operation: The operation.

        Returns:
            A key made of the canonically printed document and a private
            copy of the variables.
        """
        return CacheKey(
            query=canonical_source(operation.document),
            variables=copy.deepcopy(operation.variables or {}),
            operation_name=operation.name,
        )

    def transaction(self, body: Callable[[], R]) -> R:
        """Run ``body`` inside the store's batching mechanism, if any."""
        perform = getattr(self._cache, "perform_transaction", None)
        if callable(perform):
            return perform(lambda _cache: body())
        return body()

    def read(self, key: CacheKey) -> ReadResult:
        """Read the cached result of a query instance.

        Args:
            key: The query instance.

        Returns:
            ``Ok(data)`` on a hit, ``NotFound`` on a miss and
            ``StoreError`` when the store failed.
        """
        try:
            data = self._cache.read_query(key)
        except KeyError as e:
            self._log_failure(CacheReadFailure(key, e))
            return NotFound(key)
        except Exception as e:
            failure = CacheReadFailure(key, e)
            self._log_failure(failure)
            return StoreError(failure)
        if data is None:
            return NotFound(key)
        return Ok(data)

    def write(self, key: CacheKey, data: Any) -> bool:
        """Write a query instance's result.

        Args:
            key: The query instance.
            data: The data to store.

        Returns:
            True if the store accepted the write.
        """
        if self._read_only:
            self._log(
                "ReadOnly: skipped a cache write that would have been attempted",
                key,
            )
            return False
        try:
            self._cache.write_query(key, data)
        except Exception as e:
            self._log_failure(CacheWriteFailure(key, e))
            return False
        self._log("Updated the cache upon a mutation", key)
        return True

    def evict(self, key: CacheKey) -> bool:
        """Evict every root field selected by a query instance.

        Only top-level fields are considered; arguments on nested fields do
        not contribute to the evicted identifiers.

        Args:
            key: The query instance.

        Returns:
            True if at least one root field was evicted.
        """
        if self._read_only:
            self._log(
                "ReadOnly: skipped a cache eviction that would have been attempted",
                key,
            )
            return False
        try:
            definition = get_main_definition(
                as_document(key.query), key.operation_name or None
            )
            typename = self._cache.root_query_typename
            field_ids = [
                self._cache.store_field_name(
                    typename,
                    field.name.value,
                    resolve_arguments(field, key.variables),
                )
                for field in root_fields(definition)
            ]
            evicted = False
            for field_id in field_ids:
                # every field is evicted, even after the first success
                evicted = self._cache.evict(field_id) or evicted
        except Exception as e:
            self._log_failure(CacheEvictFailure(key, e))
            return False
        self._log(f"Evicted a query from the cache (evicted={evicted})", key)
        return evicted

    def gc(self) -> None:
        """Run the store's garbage collection."""
        if self._read_only:
            return
        try:
            removed = self._cache.gc()
        except Exception as e:
            self._log_failure(CacheGcFailure(None, e))
            return
        if self._debug:
            logger.debug("Garbage collected %d cache entries", len(removed or ()))

    def _log(self, message: str, key: CacheKey) -> None:
        if self._debug:
            logger.debug("%s: key=%r", message, key)

    def _log_failure(self, failure: CacheStoreFailure) -> None:
        if self._debug:
            logger.warning("%s", failure)
