"""Pytest configuration for syncql tests."""

from collections.abc import AsyncIterator
from typing import Any

import pytest

from syncql import (
    InMemoryCacheStore,
    Operation,
    OperationResult,
    SyncOrchestrator,
    UpdateContext,
)

LIST_ITEMS = """
    query ListItems($filter: String) {
        items(filter: $filter) { id name }
    }
"""

ADD_ITEM = """
    mutation AddItem($name: String!) {
        addItem(name: $name) { id name }
    }
"""


def item(id: str, name: str) -> dict[str, Any]:
    return {"__typename": "Item", "id": id, "name": name}


def append_item(update: UpdateContext) -> dict[str, Any]:
    """Append the mutation's new item to a cached item list."""
    new_item = update.mutation.result.data["addItem"]
    return {
        **update.query.result,
        "items": [*update.query.result["items"], new_item],
    }


class StubTransport:
    """Forward function replaying canned results and recording operations."""

    def __init__(
        self,
        *results: OperationResult,
        error: Exception | None = None,
    ) -> None:
        self.results = list(results)
        self.error = error
        self.operations: list[Operation] = []

    def __call__(self, operation: Operation) -> AsyncIterator[OperationResult]:
        self.operations.append(operation)
        return self._stream()

    async def _stream(self) -> AsyncIterator[OperationResult]:
        if self.error is not None:
            raise self.error
        for result in self.results:
            yield result


@pytest.fixture
def store() -> InMemoryCacheStore:
    """Create an empty cache store for testing."""
    return InMemoryCacheStore(maxsize=100)


@pytest.fixture
def orchestrator(store: InMemoryCacheStore) -> SyncOrchestrator:
    """Create an orchestrator watching AddItem -> ListItems."""
    return SyncOrchestrator(
        cache=store,
        mutations={"AddItem": {"ListItems": append_item}},
    )


@pytest.fixture
def seed_query():
    """Cache a query result and run the query so that it gets tracked."""

    async def seed(
        orchestrator: SyncOrchestrator,
        operation: Operation,
        data: dict[str, Any],
    ) -> None:
        key = orchestrator.cache.derive_key(operation)
        orchestrator.cache.store.write_query(key, data)
        await orchestrator.execute(operation, StubTransport(OperationResult(data=data)))

    return seed
