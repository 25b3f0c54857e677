"""Builds named GraphQL object and input types from component schemas."""

import logging

from graphql import (
    GraphQLError,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLNamedType,
    GraphQLObjectType,
)

from gql_bridge.config import DEFAULT_INPUT_MARKER
from gql_bridge.errors import SpecMalformed
from gql_bridge.parser.base import SourceDocument
from .classifier import classify_names
from .types import TypeRegistry, TypeResolver

logger = logging.getLogger(__name__)


class SchemaTranslator:
    """Translates every component schema of a document into a registered type.

    Construction happens in two phases: each name is first registered as a
    type whose fields are read lazily, then every field map is built. Any
    type can therefore reference any other, including itself.
    """

    def __init__(self, input_marker: str = DEFAULT_INPUT_MARKER):
        self.input_marker = input_marker

    def translate(self, document: SourceDocument) -> tuple[TypeRegistry, list[GraphQLNamedType]]:
        """Return the populated registry and the constructed types in build order."""
        registry = TypeRegistry()
        resolver = TypeResolver(registry)
        input_names, output_names = classify_names(document.schemas, self.input_marker)

        field_maps: dict[str, dict] = {}
        built = []
        for name in input_names + output_names:
            type_cls = GraphQLInputObjectType if name in input_names else GraphQLObjectType
            try:
                gql_type = type_cls(name, fields=lambda n=name: field_maps[n])
            except GraphQLError as e:
                raise SpecMalformed(f"Cannot declare type '{name}': {e.message}") from e
            registry.register(name, gql_type)
            built.append(gql_type)

        for name in input_names:
            field_maps[name] = self._build_fields(document.schemas[name], resolver, GraphQLInputField)
        for name in output_names:
            field_maps[name] = self._build_fields(document.schemas[name], resolver, GraphQLField)

        logger.info(
            "Translated %d input and %d output types", len(input_names), len(output_names)
        )
        return registry, built

    def _build_fields(self, declaration: dict, resolver: TypeResolver, field_cls) -> dict:
        required = set(declaration.get("required") or [])
        fields = {}
        for prop_name, prop in (declaration.get("properties") or {}).items():
            fields[prop_name] = field_cls(
                resolver.resolve(prop, prop_name in required),
                description=prop.get("description"),
            )
        return fields
