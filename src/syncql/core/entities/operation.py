"""Operation and operation result entities."""

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Any

from graphql import DocumentNode, OperationDefinitionNode

from syncql.utils.documents import (
    as_document,
    get_main_definition,
    get_operation_name,
)

# Context keys read from an operation's per-call context
OPTIMISTIC_CONTEXT_KEY = "optimistic"
OPTIMISTIC_RESPONSE_CONTEXT_KEY = "optimistic_response"


class OperationKind(Enum):
    """Kind of a GraphQL operation, derived once from its document."""

    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"


@dataclass
class Operation:
    """A single query or mutation request travelling through the transport.

    The document is parsed lazily and only once; the operation's name and
    kind are cached on the instance so that classification is never
    re-derived while the operation is in flight.

    Attributes:
        query: GraphQL source text or an already parsed document.
        variables: Variables for the operation.
        operation_name: Selects the operation in multi-operation documents.
        context: Per-call context. ``optimistic`` and ``optimistic_response``
            are the keys the synchronization engine reads.
    """

    query: str | DocumentNode
    variables: dict[str, Any] = field(default_factory=dict)
    operation_name: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def get_context(self) -> dict[str, Any]:
        return self.context

    def set_context(self, **values: Any) -> None:
        self.context.update(values)

    @cached_property
    def document(self) -> DocumentNode:
        return as_document(self.query)

    @cached_property
    def definition(self) -> OperationDefinitionNode:
        return get_main_definition(self.document, self.operation_name)

    @cached_property
    def kind(self) -> OperationKind:
        return OperationKind(self.definition.operation.value)

    @cached_property
    def name(self) -> str:
        return get_operation_name(self.definition)

    @property
    def is_optimistic(self) -> bool:
        """Whether the caller supplied a locally predicted result."""
        context = self.get_context()
        return bool(context.get(OPTIMISTIC_CONTEXT_KEY)) or (
            context.get(OPTIMISTIC_RESPONSE_CONTEXT_KEY) is not None
        )

    @property
    def optimistic_response(self) -> Any:
        return self.get_context().get(OPTIMISTIC_RESPONSE_CONTEXT_KEY)


@dataclass
class OperationResult:
    """One result produced by the transport for an operation.

    The synchronization engine never alters a result; it is passed back
    to the caller exactly as the transport produced it.
    """

    data: dict[str, Any] | None = None
    errors: list[Any] = field(default_factory=list)
    extensions: dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return not self.errors and self.data is not None

    @property
    def failed(self) -> bool:
        return not self.succeeded

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "OperationResult":
        """Create a result from a GraphQL response mapping.

        Args:
            response: A ``{"data": ..., "errors": ..., "extensions": ...}``
                mapping as produced by a GraphQL server.

        Returns:
            A new OperationResult instance.
        """
        return cls(
            data=response.get("data"),
            errors=list(response.get("errors") or []),
            extensions=dict(response.get("extensions") or {}),
        )
