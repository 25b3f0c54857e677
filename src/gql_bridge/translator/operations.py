"""Synthesizes query and mutation field definitions from path operations."""

import logging
from dataclasses import dataclass, field

from graphql import GraphQLArgument, GraphQLOutputType, get_nullable_type, is_named_type

from gql_bridge.errors import SpecMalformed
from gql_bridge.parser.base import Operation, Param, PathEntry
from .types import TypeResolver

logger = logging.getLogger(__name__)

QUERY_METHODS = ("get", "delete")
MUTATION_METHODS = ("post", "patch", "put")
BODY_FALLBACK_NAME = "body"


@dataclass(frozen=True)
class OperationField:
    """A synthesized field, not yet bound to a resolver."""

    name: str
    method: str
    path: str
    result_type: GraphQLOutputType
    args: dict[str, GraphQLArgument]
    query_args: tuple[tuple[str, str], ...] = ()  # (parameter name, argument name)
    has_body: bool = False
    description: str | None = field(default=None, compare=False)


def rename_argument(name: str) -> str:
    """Make a parameter name usable as a GraphQL argument (first hyphen only)."""
    return name.replace("-", "_", 1)


class OperationSynthesizer:
    """Turns the path table into query and mutation field sets.

    Fields are keyed by operation id. Operations without an id share the
    empty-string key; the last one wins.
    """

    def __init__(self, resolver: TypeResolver):
        self.resolver = resolver

    def synthesize_queries(self, paths: dict[str, PathEntry]) -> dict[str, OperationField]:
        fields = {}
        for path, entry in paths.items():
            operation = next((entry.get(m) for m in QUERY_METHODS if entry.get(m)), None)
            if operation is None:
                continue
            args, query_args = self._parameter_args(operation.parameters, rename=False)
            fields[operation.operation_id] = OperationField(
                name=operation.operation_id,
                method=operation.method,
                path=path,
                result_type=self._result_type(operation),
                args=args,
                query_args=query_args,
                description=operation.summary or None,
            )
            logger.debug("Query %r -> %s %s", operation.operation_id, operation.method.upper(), path)
        return fields

    def synthesize_mutations(self, paths: dict[str, PathEntry]) -> dict[str, OperationField]:
        fields = {}
        for path, entry in paths.items():
            for method in MUTATION_METHODS:
                operation = entry.get(method)
                if operation is None:
                    continue
                args, query_args = self._parameter_args(operation.parameters, rename=True)
                body_name, body_arg = self._body_arg(operation)
                args[rename_argument(body_name)] = body_arg
                fields[operation.operation_id] = OperationField(
                    name=operation.operation_id,
                    method=method,
                    path=path,
                    result_type=self._result_type(operation),
                    args=args,
                    query_args=query_args,
                    has_body=True,
                    description=operation.summary or None,
                )
                logger.debug("Mutation %r -> %s %s", operation.operation_id, method.upper(), path)
        return fields

    def _parameter_args(self, params: list[Param], rename: bool):
        args = {}
        query_args = []
        for p in params:
            arg_name = rename_argument(p.name) if rename else p.name
            args[arg_name] = GraphQLArgument(
                self.resolver.resolve(p.shape, p.required),
                description=p.description or None,
            )
            if p.location == "query":
                query_args.append((p.name, arg_name))
        return args, tuple(query_args)

    def _body_arg(self, operation: Operation) -> tuple[str, GraphQLArgument]:
        body = operation.request_body
        if body is None:
            raise SpecMalformed(
                f"{operation.method.upper()} {operation.path} "
                f"({operation.operation_id or 'no operationId'}) declares no request body"
            )
        body_type = self.resolver.resolve(body.shape, body.required)
        name = body_type.name if is_named_type(body_type) else BODY_FALLBACK_NAME
        return name, GraphQLArgument(body_type)

    def _result_type(self, operation: Operation) -> GraphQLOutputType:
        # List elements are non-null; the field itself stays nullable.
        shape = operation.response_shape("200")
        return get_nullable_type(self.resolver.resolve(shape or {}, True))
