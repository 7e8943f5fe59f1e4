"""Mutation registry - static map of watched mutations to affected queries."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from syncql.core.entities.update import UpdateTransform
from syncql.core.errors import InvalidConfiguration, MissingUpdateFunction


class MutationRegistry:
    """Declares which cached queries each watched mutation can affect.

    Built once from a configuration of the shape::

        {
            "AddItem": {
                "ListItems": append_item,
                "CountItems": increment_count,
            },
        }

    The registry is read-only after construction: the set of query names
    registered for a mutation never changes.
    """

    def __init__(self, config: Mapping[str, Mapping[str, UpdateTransform]]) -> None:
        """Initialize the registry.

        Args:
            config: Mutation name -> query name -> update transform.

        Raises:
            InvalidConfiguration: If the configuration is malformed.
        """
        self._registrations = _validate(config)
        self._all_query_names = frozenset(
            query_name
            for transforms in self._registrations.values()
            for query_name in transforms
        )

    def is_watched(self, mutation_name: str) -> bool:
        return mutation_name in self._registrations

    def is_query_related(self, query_name: str) -> bool:
        """Check if any watched mutation declares this query as affected."""
        return query_name in self._all_query_names

    def get_registered_query_names(self, mutation_name: str) -> list[str]:
        """Query names a mutation can affect, in registration order.

        Args:
            mutation_name: The mutation name.

        Returns:
            The affected query names; empty if the mutation is not watched.
        """
        transforms = self._registrations.get(mutation_name)
        if transforms is None:
            return []
        return list(transforms)

    def get_update_fn(self, mutation_name: str, query_name: str) -> UpdateTransform:
        """Get the update transform registered for a (mutation, query) pair.

        Args:
            mutation_name: The mutation name.
            query_name: The query name.

        Returns:
            The registered update transform.

        Raises:
            MissingUpdateFunction: If the pair was never registered.
        """
        try:
            return self._registrations[mutation_name][query_name]
        except KeyError:
            raise MissingUpdateFunction(mutation_name, query_name) from None

    def get_all_registered_query_names(self) -> frozenset[str]:
        return self._all_query_names

    def get_mutation_names(self) -> list[str]:
        return list(self._registrations)


def _validate(
    config: Any,
) -> Mapping[str, Mapping[str, UpdateTransform]]:
    """Validate the registry configuration and freeze a copy of it."""
    if not isinstance(config, Mapping):
        raise InvalidConfiguration(
            "Mutation registry configuration must be a mapping of "
            f"mutation names to query transforms, got {type(config).__name__}"
        )

    registrations: dict[str, Mapping[str, UpdateTransform]] = {}
    for mutation_name, transforms in config.items():
        if not isinstance(mutation_name, str) or not mutation_name:
            raise InvalidConfiguration(
                f"Mutation names must be non-empty strings, got {mutation_name!r}"
            )
        if not isinstance(transforms, Mapping):
            raise InvalidConfiguration(
                f"Mutation {mutation_name!r} must map query names to update "
                f"functions, got {type(transforms).__name__}"
            )
        for query_name, transform in transforms.items():
            if not isinstance(query_name, str) or not query_name:
                raise InvalidConfiguration(
                    f"Query names for mutation {mutation_name!r} must be "
                    f"non-empty strings, got {query_name!r}"
                )
            if not callable(transform):
                raise InvalidConfiguration(
                    f"Update function for {mutation_name!r} -> {query_name!r} "
                    "is not callable"
                )
        registrations[mutation_name] = MappingProxyType(dict(transforms))

    return MappingProxyType(registrations)
