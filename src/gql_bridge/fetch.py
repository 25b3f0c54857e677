"""Downloads an API description and stores it as the bridge's input file."""

import json
import logging
from pathlib import Path

import requests

from gql_bridge.errors import UpstreamFailure

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://localhost:3000/auth/openapi-json"
DEFAULT_OUTPUT = Path("openapi.json")


def fetch_description(
    url: str = DEFAULT_URL, output: Path = DEFAULT_OUTPUT, timeout: float | None = 30
) -> dict:
    """Fetch the description at ``url`` and write it to ``output`` as indented JSON."""
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as e:
        raise UpstreamFailure(f"Could not fetch API description from {url}: {e}") from e
    except ValueError as e:
        raise UpstreamFailure(f"{url} did not return JSON") from e

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(data, indent=2), encoding="utf-8")
    logger.info("Saved API description from %s to %s", url, output)
    return data
