"""End-to-end construction: description -> types -> fields -> resolvers -> schema."""

import logging
from dataclasses import dataclass

from graphql import GraphQLField, GraphQLSchema

from gql_bridge.config import BridgeConfig
from gql_bridge.parser.base import SourceDocument
from gql_bridge.proxy import bind_fields
from gql_bridge.translator.assembler import assemble, render_schema
from gql_bridge.translator.operations import OperationSynthesizer
from gql_bridge.translator.schema import SchemaTranslator
from gql_bridge.translator.types import TypeRegistry, TypeResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bridge:
    schema: GraphQLSchema
    sdl: str
    registry: TypeRegistry
    query_fields: dict[str, GraphQLField]
    mutation_fields: dict[str, GraphQLField]


def build_bridge(document: SourceDocument, config: BridgeConfig | None = None) -> Bridge:
    """Translate a description into an executable, proxying schema.

    Raises SpecMalformed if the description cannot be translated.
    """
    config = config or BridgeConfig.for_document(document)

    registry, types = SchemaTranslator(config.input_marker).translate(document)
    synthesizer = OperationSynthesizer(TypeResolver(registry))
    query_fields = bind_fields(synthesizer.synthesize_queries(document.paths), config)
    mutation_fields = bind_fields(synthesizer.synthesize_mutations(document.paths), config)

    schema = assemble(query_fields, mutation_fields, types)
    logger.info(
        "Built schema with %d queries, %d mutations and %d types (upstream %s)",
        len(query_fields),
        len(mutation_fields),
        len(types),
        config.upstream_url,
    )
    return Bridge(
        schema=schema,
        sdl=render_schema(schema),
        registry=registry,
        query_fields=query_fields,
        mutation_fields=mutation_fields,
    )
