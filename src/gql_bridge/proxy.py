"""Binds synthesized fields to resolvers that forward each call to the REST upstream."""

import logging
import re
from dataclasses import dataclass
from functools import partial

import requests
from graphql import GraphQLField, GraphQLResolveInfo

from gql_bridge.config import BridgeConfig, DEFAULT_INPUT_MARKER
from gql_bridge.errors import InvocationError, UpstreamFailure
from gql_bridge.translator.operations import OperationField, rename_argument

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


@dataclass(frozen=True)
class InvocationContext:
    """Per-request context handed to resolvers by the server."""

    authorization: str | None = None


@dataclass(frozen=True)
class ProxyRoute:
    """Everything needed to forward one field invocation upstream."""

    method: str
    path: str
    base_url: str
    query_args: tuple[tuple[str, str], ...] = ()
    body_marker: str | None = None  # set for mutations only
    timeout: float | None = None


def substitute_path(template: str, args: dict) -> str:
    """Fill ``{name}`` placeholders from ``args``.

    Only the first occurrence of each distinct placeholder is replaced.
    """
    path = template
    for name in dict.fromkeys(PLACEHOLDER.findall(template)):
        if name in args:
            value = args[name]
        elif rename_argument(name) in args:
            value = args[rename_argument(name)]
        else:
            raise InvocationError(f"No argument supplies path placeholder '{{{name}}}' in {template}")
        path = path.replace(f"{{{name}}}", str(value), 1)
    return path


def find_body(args: dict, marker: str = DEFAULT_INPUT_MARKER):
    """Return the first argument whose name contains the input marker."""
    for name, value in args.items():
        if marker.lower() in name.lower():
            return value
    raise InvocationError(f"No argument name contains '{marker}'; cannot build request body")


def invoke(route: ProxyRoute, args: dict, authorization: str | None = None):
    """Perform the upstream request for one field invocation and return its JSON payload."""
    url = route.base_url + substitute_path(route.path, args)
    headers = {"authorization": authorization} if authorization else {}
    params = {
        param: args[arg] for param, arg in route.query_args if args.get(arg) is not None
    }
    kwargs = {"headers": headers, "timeout": route.timeout}
    if params:
        kwargs["params"] = params
    if route.body_marker is not None:
        kwargs["json"] = find_body(args, route.body_marker)

    logger.debug("Forwarding %s %s", route.method.upper(), url)
    try:
        response = requests.request(route.method.upper(), url, **kwargs)
    except requests.RequestException as e:
        raise UpstreamFailure(f"{route.method.upper()} {url} failed: {e}") from e

    if not response.ok:
        raise UpstreamFailure(
            f"{route.method.upper()} {url} returned {response.status_code}",
            status_code=response.status_code,
            payload=_payload_or_text(response),
        )
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise UpstreamFailure(
            f"{route.method.upper()} {url} returned a non-JSON body",
            status_code=response.status_code,
            payload=response.text,
        ) from e


def _payload_or_text(response: requests.Response):
    try:
        return response.json()
    except ValueError:
        return response.text


def _authorization(context) -> str | None:
    if isinstance(context, dict):
        return context.get("authorization")
    return getattr(context, "authorization", None)


def resolve_field(route: ProxyRoute, _source, info: GraphQLResolveInfo, /, **args):
    return invoke(route, args, _authorization(info.context))


def bind_fields(fields: dict[str, OperationField], config: BridgeConfig) -> dict[str, GraphQLField]:
    """Attach a proxying resolver to every synthesized field."""
    bound = {}
    for key, op_field in fields.items():
        route = ProxyRoute(
            method=op_field.method,
            path=op_field.path,
            base_url=config.upstream_url,
            query_args=op_field.query_args,
            body_marker=config.input_marker if op_field.has_body else None,
            timeout=config.timeout,
        )
        bound[key] = GraphQLField(
            op_field.result_type,
            args=op_field.args,
            resolve=partial(resolve_field, route),
            description=op_field.description,
        )
    return bound
