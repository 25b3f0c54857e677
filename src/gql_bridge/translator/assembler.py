"""Assembles the root types and component types into one GraphQL schema."""

import logging
from pathlib import Path

from graphql import (
    GraphQLError,
    GraphQLField,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    print_schema,
    validate_schema,
)

from gql_bridge.errors import SpecMalformed

logger = logging.getLogger(__name__)


def assemble(
    query_fields: dict[str, GraphQLField],
    mutation_fields: dict[str, GraphQLField],
    all_types: list[GraphQLNamedType],
) -> GraphQLSchema:
    """Build the schema. The Mutation root is omitted when there are no mutation fields.

    Every component type is registered, even those no operation reaches.
    """
    try:
        query = GraphQLObjectType("Query", fields=query_fields)
        mutation = GraphQLObjectType("Mutation", fields=mutation_fields) if mutation_fields else None
        return GraphQLSchema(query=query, mutation=mutation, types=all_types)
    except (GraphQLError, TypeError) as e:
        raise SpecMalformed(f"Cannot assemble schema: {e}") from e


def render_schema(schema: GraphQLSchema) -> str:
    """Render the schema as SDL text."""
    return print_schema(schema) + "\n"


def check_schema(schema: GraphQLSchema) -> list[str]:
    """Return the validation problems of an assembled schema, if any."""
    return [error.message for error in validate_schema(schema)]


def write_schema(sdl: str, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(sdl, encoding="utf-8")
    logger.info("Wrote schema to %s", path)
