"""Tests for core entities."""

import pytest
from graphql import GraphQLSyntaxError, parse

from syncql import CacheKey, Operation, OperationKind, OperationResult, SyncConfig


class TestCacheKey:
    """Tests for CacheKey value object."""

    def test_structural_equality(self) -> None:
        """Keys built from distinct but equal variables are equal."""
        first = CacheKey(query="{ items }", variables={"a": 1, "b": [1, 2]})
        second = CacheKey(query="{ items }", variables={"b": [1, 2], "a": 1})

        assert first == second
        assert hash(first) == hash(second)
        assert first is not second

    def test_different_variables(self) -> None:
        """Different variables make different keys."""
        first = CacheKey(query="{ items }", variables={"filter": "x"})
        second = CacheKey(query="{ items }", variables={"filter": "y"})

        assert first != second

    def test_variables_of_different_types(self) -> None:
        """Booleans and numbers are never conflated."""
        assert CacheKey(query="{ items }", variables={"flag": True}) != CacheKey(
            query="{ items }", variables={"flag": 1}
        )

    def test_different_query(self) -> None:
        """Different documents make different keys."""
        assert CacheKey(query="{ items }") != CacheKey(query="{ other }")

    def test_operation_name_is_identity(self) -> None:
        """Operations selected from one document get distinct keys."""
        document = "query A { items } query B { items }"
        first = CacheKey(query=document, operation_name="A")
        second = CacheKey(query=document, operation_name="B")

        assert first != second
        assert first == CacheKey(query=document, operation_name="A")
        assert first.digest != second.digest

    def test_immutable(self) -> None:
        """CacheKey fields cannot be reassigned."""
        key = CacheKey(query="{ items }")

        with pytest.raises(AttributeError):
            key.query = "{ other }"  # type: ignore[misc]

    def test_not_equal_to_other_types(self) -> None:
        assert CacheKey(query="{ items }") != "{ items }"


class TestOperation:
    """Tests for Operation entity."""

    def test_query_classification(self) -> None:
        """Query documents are classified as queries."""
        operation = Operation("query ListItems { items { id } }")

        assert operation.kind is OperationKind.QUERY
        assert operation.name == "ListItems"

    def test_mutation_classification(self) -> None:
        """Mutation documents are classified as mutations."""
        operation = Operation("mutation AddItem { addItem { id } }")

        assert operation.kind is OperationKind.MUTATION
        assert operation.name == "AddItem"

    def test_anonymous_operation(self) -> None:
        """Anonymous operations have an empty name."""
        operation = Operation("{ items { id } }")

        assert operation.kind is OperationKind.QUERY
        assert operation.name == ""

    def test_parsed_document(self) -> None:
        """An already parsed document is accepted."""
        operation = Operation(parse("subscription OnItem { itemAdded { id } }"))

        assert operation.kind is OperationKind.SUBSCRIPTION
        assert operation.name == "OnItem"

    def test_operation_name_selects_definition(self) -> None:
        """operation_name picks the operation in multi-operation documents."""
        operation = Operation(
            "query A { a } mutation B { b }",
            operation_name="B",
        )

        assert operation.kind is OperationKind.MUTATION
        assert operation.name == "B"

    def test_ambiguous_document(self) -> None:
        """Multi-operation documents without a name cannot be classified."""
        operation = Operation("query A { a } query B { b }")

        with pytest.raises(ValueError):
            _ = operation.kind

    def test_invalid_syntax(self) -> None:
        """Syntax errors surface from graphql-core."""
        with pytest.raises(GraphQLSyntaxError):
            _ = Operation("query {").kind

    def test_classification_is_cached(self) -> None:
        """The document is parsed once per operation."""
        operation = Operation("query ListItems { items }")

        assert operation.definition is operation.definition

    def test_optimistic_flags(self) -> None:
        """Either context key marks the operation as optimistic."""
        assert not Operation("mutation M { m }").is_optimistic
        assert Operation("mutation M { m }", context={"optimistic": True}).is_optimistic

        operation = Operation(
            "mutation M { m }",
            context={"optimistic_response": {"m": 1}},
        )
        assert operation.is_optimistic
        assert operation.optimistic_response == {"m": 1}

    def test_set_context(self) -> None:
        """set_context merges values into the per-call context."""
        operation = Operation("mutation M { m }", context={"a": 1})
        operation.set_context(optimistic=True)

        assert operation.get_context() == {"a": 1, "optimistic": True}


class TestOperationResult:
    """Tests for OperationResult entity."""

    def test_success(self) -> None:
        result = OperationResult(data={"items": []})

        assert result.succeeded
        assert not result.failed

    def test_errors_mean_failure(self) -> None:
        """Any error makes the result a failure, even with partial data."""
        result = OperationResult(data={"items": []}, errors=[{"message": "x"}])

        assert result.failed

    def test_missing_data_means_failure(self) -> None:
        assert OperationResult().failed

    def test_from_response(self) -> None:
        """Responses are converted from their GraphQL mapping form."""
        result = OperationResult.from_response(
            {"data": None, "errors": [{"message": "boom"}]}
        )

        assert result.data is None
        assert result.errors == [{"message": "boom"}]
        assert result.extensions == {}


class TestSyncConfig:
    """Tests for SyncConfig entity."""

    def test_defaults(self) -> None:
        config = SyncConfig()

        assert config.debug is False
        assert config.read_only is False
