"""Cache key value object."""

from dataclasses import dataclass, field
from typing import Any

from syncql.utils.hashing import freeze_value, hash_value


@dataclass(frozen=True, eq=False)
class CacheKey:
    """Immutable identity of one cached query result.

    Two keys are equal when their canonical query source, their selected
    operation and their variables are structurally equal. Variables are
    compared through a frozen canonical form, so keys built from distinct
    (but equal) dicts, or from dicts with a different insertion order,
    collide as expected. The operation name only matters for documents
    holding several operations; otherwise it is implied by the query.
    """

    query: str
    variables: dict[str, Any] = field(default_factory=dict)
    operation_name: str = ""

    @property
    def identity(self) -> tuple[str, str, Any]:
        return (self.query, self.operation_name, freeze_value(self.variables))

    @property
    def digest(self) -> str:
        """Short stable hash, handy for log lines."""
        return hash_value(
            {
                "query": self.query,
                "operation_name": self.operation_name,
                "variables": self.variables,
            }
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CacheKey):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    def __repr__(self) -> str:
        return (
            f"CacheKey(operation_name={self.operation_name!r}, "
            f"variables={self.variables!r}, digest={self.digest!r})"
        )
