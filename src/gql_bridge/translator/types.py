"""Type registry and the resolver mapping JSON-schema declarations to GraphQL types."""

import logging

from graphql import (
    GraphQLBoolean,
    GraphQLFloat,
    GraphQLInt,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLString,
    GraphQLType,
)

from gql_bridge.errors import SpecMalformed

logger = logging.getLogger(__name__)

SCALARS = {
    "string": GraphQLString,
    "boolean": GraphQLBoolean,
    "integer": GraphQLInt,
    "number": GraphQLFloat,
}


class TypeRegistry:
    """Named GraphQL types built from the document's component schemas.

    Registering an existing name replaces the previous entry.
    """

    def __init__(self):
        self._types: dict[str, GraphQLNamedType] = {}

    def register(self, name: str, gql_type: GraphQLNamedType) -> None:
        if name in self._types:
            logger.debug("Type %s registered twice; keeping the latest", name)
        self._types[name] = gql_type

    def lookup(self, name: str) -> GraphQLNamedType:
        try:
            return self._types[name]
        except KeyError:
            raise SpecMalformed(f"Reference to undeclared type '{name}'") from None

    def types(self) -> list[GraphQLNamedType]:
        return list(self._types.values())

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)


def wrap_required(gql_type: GraphQLType, is_required: bool) -> GraphQLType:
    """Wrap in NonNull when required. Never double-wraps."""
    if is_required and not isinstance(gql_type, GraphQLNonNull):
        return GraphQLNonNull(gql_type)
    return gql_type


class TypeResolver:
    """Converts one schema declaration into a GraphQL type.

    References are looked up by the last segment of their ``$ref`` path in
    the registry handed to the constructor.
    """

    def __init__(self, registry: TypeRegistry):
        self.registry = registry

    def resolve(self, declaration: dict, is_required: bool) -> GraphQLType:
        kind = declaration.get("type")
        if isinstance(kind, list):
            # OpenAPI 3.1 nullable form, e.g. ["string", "null"]
            kind = next((k for k in kind if k != "null"), None)

        if kind in SCALARS:
            return wrap_required(SCALARS[kind], is_required)

        if kind == "array":
            # Elements inherit the array's required flag.
            return GraphQLList(self.resolve(declaration.get("items") or {}, is_required))

        if kind == "object":
            # Inline objects are not expanded into composite types.
            return wrap_required(GraphQLString, is_required)

        ref = declaration.get("$ref")
        if not ref:
            return GraphQLString
        return self.registry.lookup(ref.rsplit("/", 1)[-1])
