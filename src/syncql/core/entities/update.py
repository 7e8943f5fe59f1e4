"""Update transform payload entities."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from syncql.core.entities.operation import OperationResult


class _EvictSentinel:
    def __repr__(self) -> str:
        return "EVICT"


# Returned by an update transform to drop the cached entry instead of
# rewriting it.
EVICT: Any = _EvictSentinel()


@dataclass(frozen=True)
class MutationInfo:
    """The mutation side of an update.

    Attributes:
        name: Mutation operation name.
        variables: Variables the mutation ran with.
        result: The mutation result. For optimistic updates this wraps the
            caller's optimistic response as ``data``.
    """

    name: str
    variables: dict[str, Any]
    result: OperationResult


@dataclass(frozen=True)
class QueryInfo:
    """The cached query side of an update.

    Attributes:
        name: Query operation name.
        variables: Variables identifying this cached instance.
        result: The data currently cached for this query instance.
    """

    name: str
    variables: dict[str, Any]
    result: Any


@dataclass(frozen=True)
class UpdateContext:
    """Everything an update transform receives."""

    mutation: MutationInfo
    query: QueryInfo


# Returns the new cached data, ``None`` for "no change", or ``EVICT``.
UpdateTransform = Callable[[UpdateContext], Any]
