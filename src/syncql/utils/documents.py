"""GraphQL document helpers built on graphql-core.

Only the pieces the synchronization engine consumes are exposed here:
the main operation definition, its name and kind, the canonical printed
source, and the root-level fields with their resolved arguments.
"""

from functools import lru_cache
from typing import Any

from graphql import (
    DocumentNode,
    FieldNode,
    OperationDefinitionNode,
    Undefined,
    parse,
    print_ast,
)
from graphql.utilities import get_operation_ast, value_from_ast_untyped


@lru_cache(maxsize=256)
def parse_document(source: str) -> DocumentNode:
    """Parse a GraphQL source string, memoizing the resulting AST."""
    return parse(source)


def as_document(query: str | DocumentNode) -> DocumentNode:
    if isinstance(query, DocumentNode):
        return query
    return parse_document(query)


def get_main_definition(
    document: DocumentNode,
    operation_name: str | None = None,
) -> OperationDefinitionNode:
    """Return the operation definition the document executes.

    Args:
        document: The parsed document.
        operation_name: Selects the operation when the document holds several.

    Returns:
        The matching operation definition.

    Raises:
        ValueError: If no single operation can be selected.
    """
    definition = get_operation_ast(document, operation_name)
    if definition is None:
        raise ValueError(
            f"Document has no operation matching name {operation_name!r}"
        )
    return definition


def get_operation_name(definition: OperationDefinitionNode) -> str:
    return definition.name.value if definition.name else ""


def canonical_source(document: DocumentNode) -> str:
    """Print the document in canonical form (whitespace and commas normalized)."""
    return print_ast(document)


def root_fields(definition: OperationDefinitionNode) -> list[FieldNode]:
    """Top-level field selections of an operation.

    Fragment spreads and inline fragments are skipped, so only fields
    selected directly on the root type are returned.
    """
    return [
        selection
        for selection in definition.selection_set.selections
        if isinstance(selection, FieldNode)
    ]


def response_key(field: FieldNode) -> str:
    """Key under which a field appears in the response data (alias wins)."""
    return field.alias.value if field.alias else field.name.value


def resolve_arguments(
    field: FieldNode,
    variables: dict[str, Any] | None,
) -> dict[str, Any]:
    """Resolve a field's argument values against the operation variables.

    Arguments bound to variables that were not provided are left out.
    """
    resolved = {}
    for argument in field.arguments or ():
        value = value_from_ast_untyped(argument.value, variables)
        if value is not Undefined:
            resolved[argument.name.value] = value
    return resolved
