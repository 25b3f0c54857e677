"""CLI entry point for gql-bridge."""

import logging
from pathlib import Path

import click

from gql_bridge.bridge import Bridge, build_bridge
from gql_bridge.config import DEFAULT_SCHEMA_PATH, BridgeConfig
from gql_bridge.errors import BridgeError
from gql_bridge.fetch import DEFAULT_OUTPUT, DEFAULT_URL, fetch_description
from gql_bridge.parser.openapi import load_document
from gql_bridge.translator.assembler import check_schema, write_schema

logger = logging.getLogger(__name__)


def _build(doc_path: Path, upstream: str | None, timeout: float | None) -> Bridge:
    """Parse and translate the document, turning bridge errors into CLI errors."""
    click.echo(f"Parsing {doc_path}...")
    try:
        document = load_document(doc_path)
        config = BridgeConfig.for_document(document, upstream_url=upstream, timeout=timeout)
        bridge = build_bridge(document, config)
    except BridgeError as e:
        raise click.ClickException(str(e)) from e
    click.echo(
        f"Found {len(bridge.query_fields)} queries, {len(bridge.mutation_fields)} mutations "
        f"and {len(bridge.registry)} types (upstream: {config.upstream_url})."
    )
    return bridge


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """gql-bridge: serve a REST API described by OpenAPI as a GraphQL schema."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("url", default=DEFAULT_URL, envvar="GQL_BRIDGE_SOURCE_URL")
@click.option("-o", "--output", default=DEFAULT_OUTPUT, type=click.Path(path_type=Path), help="Where to write the description.")
def fetch(url: str, output: Path):
    """Download an OpenAPI description to a local file."""
    click.echo(f"Fetching {url}...")
    try:
        fetch_description(url, output)
    except BridgeError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"API description saved to {output}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", default=DEFAULT_SCHEMA_PATH, type=click.Path(path_type=Path), help="Output file for the GraphQL SDL.")
@click.option("--upstream", default=None, envvar="GQL_BRIDGE_UPSTREAM", help="Base URL of the REST API.")
def build(doc_path: Path, output: Path, upstream: str | None):
    """Translate an OpenAPI description and write the GraphQL SDL."""
    bridge = _build(doc_path, upstream, None)
    for problem in check_schema(bridge.schema):
        logger.warning("Schema problem: %s", problem)
    write_schema(bridge.sdl, output)
    click.echo(f"Schema saved to {output}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path), envvar="GQL_BRIDGE_DOC")
@click.option("--upstream", default=None, envvar="GQL_BRIDGE_UPSTREAM", help="Base URL of the REST API.")
@click.option("--timeout", default=None, type=float, envvar="GQL_BRIDGE_TIMEOUT", help="Upstream request timeout in seconds.")
@click.option("--host", default="127.0.0.1", envvar="GQL_BRIDGE_HOST", help="Interface to listen on.")
@click.option("--port", default=3001, type=int, envvar="GQL_BRIDGE_PORT", help="Port to listen on.")
@click.option("--schema-out", default=DEFAULT_SCHEMA_PATH, type=click.Path(path_type=Path), help="Where to write the GraphQL SDL.")
def serve(doc_path: Path, upstream: str | None, timeout: float | None, host: str, port: int, schema_out: Path):
    """Translate the description and serve it as a GraphQL endpoint."""
    import uvicorn

    from gql_bridge.server import create_app

    bridge = _build(doc_path, upstream, timeout)
    problems = check_schema(bridge.schema)
    if problems:
        raise click.ClickException("Schema is inconsistent: " + "; ".join(problems))
    write_schema(bridge.sdl, schema_out)
    click.echo(f"Schema saved to {schema_out}")

    click.echo(f"Serving GraphQL on http://{host}:{port}/graphql")
    uvicorn.run(create_app(bridge.schema), host=host, port=port)
