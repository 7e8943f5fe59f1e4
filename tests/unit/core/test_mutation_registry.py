"""Tests for MutationRegistry."""

import pytest

from syncql import InvalidConfiguration, MissingUpdateFunction, MutationRegistry


def noop(update):
    return None


class TestMutationRegistry:
    """Tests for MutationRegistry lookups."""

    @pytest.fixture
    def registry(self) -> MutationRegistry:
        return MutationRegistry(
            {
                "AddItem": {"ListItems": noop, "CountItems": noop},
                "RemoveItem": {"ListItems": noop},
            }
        )

    def test_is_watched(self, registry: MutationRegistry) -> None:
        assert registry.is_watched("AddItem")
        assert not registry.is_watched("RenameItem")

    def test_registered_query_names_keep_order(self, registry: MutationRegistry) -> None:
        """Query names come back in registration order."""
        assert registry.get_registered_query_names("AddItem") == [
            "ListItems",
            "CountItems",
        ]

    def test_unwatched_mutation_has_no_queries(self, registry: MutationRegistry) -> None:
        assert registry.get_registered_query_names("RenameItem") == []

    def test_get_update_fn(self, registry: MutationRegistry) -> None:
        assert registry.get_update_fn("AddItem", "CountItems") is noop

    def test_missing_update_fn(self, registry: MutationRegistry) -> None:
        """Unregistered pairs raise MissingUpdateFunction."""
        with pytest.raises(MissingUpdateFunction) as exc_info:
            registry.get_update_fn("RemoveItem", "CountItems")

        assert exc_info.value.mutation_name == "RemoveItem"
        assert exc_info.value.query_name == "CountItems"
        assert "RemoveItem" in str(exc_info.value)

    def test_all_registered_query_names(self, registry: MutationRegistry) -> None:
        assert registry.get_all_registered_query_names() == frozenset(
            {"ListItems", "CountItems"}
        )
        assert registry.is_query_related("CountItems")
        assert not registry.is_query_related("GetUser")

    def test_mutation_names(self, registry: MutationRegistry) -> None:
        assert registry.get_mutation_names() == ["AddItem", "RemoveItem"]

    def test_configuration_is_copied(self) -> None:
        """Changing the source config after construction has no effect."""
        config = {"AddItem": {"ListItems": noop}}
        registry = MutationRegistry(config)

        config["AddItem"]["CountItems"] = noop
        config["RemoveItem"] = {"ListItems": noop}

        assert registry.get_registered_query_names("AddItem") == ["ListItems"]
        assert not registry.is_watched("RemoveItem")

    def test_empty_configuration(self) -> None:
        """An empty registry watches nothing."""
        registry = MutationRegistry({})

        assert registry.get_mutation_names() == []
        assert registry.get_all_registered_query_names() == frozenset()


class TestMutationRegistryValidation:
    """Tests for configuration validation."""

    @pytest.mark.parametrize(
        "config",
        [
            None,
            ["AddItem"],
            {"AddItem": ["ListItems"]},
            {"AddItem": {"ListItems": "not callable"}},
            {"": {"ListItems": noop}},
            {"AddItem": {"": noop}},
            {1: {"ListItems": noop}},
        ],
    )
    def test_malformed_configuration(self, config) -> None:
        with pytest.raises(InvalidConfiguration):
            MutationRegistry(config)
