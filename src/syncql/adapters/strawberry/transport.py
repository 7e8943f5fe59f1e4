"""In-process transport executing operations against a Strawberry schema."""

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

from graphql import print_ast

from syncql.core.entities.operation import Operation, OperationResult

if TYPE_CHECKING:
    from strawberry import Schema


class StrawberryTransport:
    """Forward function that runs operations on a Strawberry schema.

    Usage:
        import strawberry
        from syncql.adapters.strawberry import StrawberryTransport

        schema = strawberry.Schema(query=Query, mutation=Mutation)
        transport = StrawberryTransport(schema)

        result = await orchestrator.execute(operation, transport)
    """

    def __init__(
        self,
        schema: "Schema",
        context_value: Any = None,
        root_value: Any = None,
    ) -> None:
        """Initialize the transport.

        Args:
            schema: The Strawberry schema.
            context_value: Context passed to resolvers.
            root_value: Root value passed to root resolvers.
        """
        self._schema = schema
        self._context_value = context_value
        self._root_value = root_value

    def __call__(self, operation: Operation) -> AsyncIterator[OperationResult]:
        return self._execute(operation)

    async def _execute(self, operation: Operation) -> AsyncIterator[OperationResult]:
        source = (
            operation.query
            if isinstance(operation.query, str)
            else print_ast(operation.query)
        )
        result = await self._schema.execute(
            source,
            variable_values=operation.variables or None,
            context_value=self._context_value,
            root_value=self._root_value,
            operation_name=operation.operation_name,
        )
        yield OperationResult(
            data=result.data,
            errors=[error.formatted for error in result.errors or []],
            extensions=dict(result.extensions or {}),
        )
