"""Runtime configuration for the bridge."""

from pathlib import Path
from urllib.parse import urlsplit

from pydantic import BaseModel

from gql_bridge.parser.base import SourceDocument

DEFAULT_UPSTREAM_URL = "http://localhost:3000"
DEFAULT_INPUT_MARKER = "dto"
DEFAULT_SCHEMA_PATH = Path("schema.gql")


class BridgeConfig(BaseModel):
    """Settings shared by the translator, the proxy resolvers and the CLI."""

    upstream_url: str = DEFAULT_UPSTREAM_URL
    timeout: float | None = None  # seconds; None waits indefinitely
    input_marker: str = DEFAULT_INPUT_MARKER
    schema_path: Path = DEFAULT_SCHEMA_PATH

    @classmethod
    def for_document(
        cls, document: SourceDocument, upstream_url: str | None = None, **overrides
    ) -> "BridgeConfig":
        """Build a config, defaulting the upstream address to the document's first server.

        Relative server URLs are joined onto the default upstream; templated or
        non-HTTP ones are ignored.
        """
        if upstream_url is None and document.servers:
            upstream_url = _server_base(document.servers[0])
        if upstream_url is not None:
            overrides["upstream_url"] = upstream_url.rstrip("/")
        return cls(**overrides)


def _server_base(url: str) -> str | None:
    if "{" in url:
        return None
    if url.startswith("/"):
        return DEFAULT_UPSTREAM_URL + url
    if urlsplit(url).scheme in ("http", "https"):
        return url
    return None
