"""In-process transport executing operations against an Ariadne schema."""

import logging
from collections.abc import AsyncIterator, Callable
from typing import Any

from ariadne import graphql
from graphql import GraphQLSchema, print_ast

from syncql.core.entities.operation import Operation, OperationResult

logger = logging.getLogger(__name__)


class AriadneTransport:
    """Forward function that runs operations on an Ariadne executable schema.

    Usable as the ``forward`` argument of ``SyncOrchestrator.request``,
    for server-side rendering, tests, or any client living in the same
    process as its schema.

    Usage:
        from ariadne import make_executable_schema
        from syncql.adapters.ariadne import AriadneTransport

        schema = make_executable_schema(type_defs, query, mutation)
        transport = AriadneTransport(schema)

        result = await orchestrator.execute(operation, transport)
    """

    def __init__(
        self,
        schema: GraphQLSchema,
        context_value: Any | Callable[[Operation], Any] = None,
        root_value: Any = None,
        debug: bool = False,
    ) -> None:
        """Initialize the transport.

        Args:
            schema: The executable schema.
            context_value: Resolver context, or a callable building it from
                the operation being executed.
            root_value: Root value passed to root resolvers.
            debug: Include tracebacks in error extensions.
        """
        self._schema = schema
        self._context_value = context_value
        self._root_value = root_value
        self._debug = debug

    def __call__(self, operation: Operation) -> AsyncIterator[OperationResult]:
        return self._execute(operation)

    async def _execute(self, operation: Operation) -> AsyncIterator[OperationResult]:
        source = (
            operation.query
            if isinstance(operation.query, str)
            else print_ast(operation.query)
        )
        data = {
            "query": source,
            "variables": operation.variables or None,
            "operationName": operation.operation_name,
        }
        success, response = await graphql(
            self._schema,
            data,
            context_value=self._resolve_context(operation),
            root_value=self._root_value,
            debug=self._debug,
        )
        if not success:
            logger.debug("Operation %r returned errors", operation.name)
        yield OperationResult.from_response(response)

    def _resolve_context(self, operation: Operation) -> Any:
        if callable(self._context_value):
            return self._context_value(operation)
        return self._context_value
