"""Transport interface."""

from collections.abc import AsyncIterator
from typing import Protocol

from syncql.core.entities.operation import Operation, OperationResult


class IForward(Protocol):
    """Contract for the next hop that executes an operation.

    Calling a forward function must not start any work until the returned
    stream is iterated. The stream is finite and, for queries and
    mutations, yields exactly one result. Transport level timeouts and
    retries are the forward function's own responsibility.
    """

    def __call__(self, operation: Operation) -> AsyncIterator[OperationResult]:
        """Execute an operation.

        Args:
            operation: The operation to execute.

        Returns:
            An async iterator over the operation's results.
        """
        ...
