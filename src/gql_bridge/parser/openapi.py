"""OpenAPI document parser.

Parses OpenAPI 3.x documents (JSON or YAML) into a SourceDocument.
"""

import logging
from pathlib import Path

import yaml

from gql_bridge.errors import SpecMalformed
from .base import HTTP_METHODS, Operation, Param, PathEntry, RequestBody, SourceDocument

logger = logging.getLogger(__name__)


def load_document(file_path: Path) -> SourceDocument:
    """Read an OpenAPI file from disk and parse it."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SpecMalformed(f"{file_path} is not valid JSON or YAML: {e}") from e
    return parse_document(doc)


def parse_document(doc) -> SourceDocument:
    """Parse an already-decoded OpenAPI document."""
    if not isinstance(doc, dict) or not ("openapi" in doc or "swagger" in doc):
        raise SpecMalformed("Document is not an OpenAPI description")

    info = doc.get("info") or {}
    paths = {}
    for path, item in (doc.get("paths") or {}).items():
        paths[path] = _parse_path_item(path, item or {})

    schemas = (doc.get("components") or {}).get("schemas") or {}
    servers = [s["url"] for s in doc.get("servers") or [] if s.get("url")]

    logger.debug("Parsed %d paths and %d component schemas", len(paths), len(schemas))
    return SourceDocument(
        title=info.get("title", ""),
        version=str(info.get("version", "")),
        servers=servers,
        paths=paths,
        schemas=schemas,
    )


def _parse_path_item(path: str, item: dict) -> PathEntry:
    shared = _parse_parameters(item.get("parameters", []))
    operations = {}
    for method, operation in item.items():
        if method not in HTTP_METHODS or not isinstance(operation, dict):
            continue

        params = _merge_parameters(shared, _parse_parameters(operation.get("parameters", [])))
        operations[method] = Operation(
            method=method,
            path=path,
            operation_id=operation.get("operationId") or "",
            summary=operation.get("summary", ""),
            parameters=params,
            request_body=_parse_request_body(operation.get("requestBody")),
            responses=_parse_responses(operation.get("responses") or {}),
        )
    return PathEntry(path=path, operations=operations)


def _parse_parameters(params: list[dict]) -> list[Param]:
    result = []
    for p in params:
        if "$ref" in p:
            logger.warning("Skipping referenced parameter %s", p["$ref"])
            continue
        result.append(
            Param(
                name=p["name"],
                location=p.get("in", "query"),
                required=p.get("required", False),
                shape=p.get("schema") or {},
                description=p.get("description", ""),
            )
        )
    return result


def _merge_parameters(shared: list[Param], own: list[Param]) -> list[Param]:
    overridden = {(p.name, p.location) for p in own}
    return [p for p in shared if (p.name, p.location) not in overridden] + own


def _parse_request_body(body: dict | None) -> RequestBody | None:
    if not body:
        return None
    content = body.get("content") or {}
    required = body.get("required", False)
    for content_type in ("application/json", "multipart/form-data"):
        if content_type in content:
            return RequestBody(
                shape=(content[content_type] or {}).get("schema") or {},
                required=required,
                content_type=content_type,
            )
    # Fallback: first available media type
    for content_type, ct_data in content.items():
        return RequestBody(
            shape=(ct_data or {}).get("schema") or {},
            required=required,
            content_type=content_type,
        )
    return RequestBody(required=required)


def _parse_responses(responses: dict) -> dict[str, dict | None]:
    result = {}
    for status_code, resp in responses.items():
        content = (resp or {}).get("content") or {}
        result[str(status_code)] = (content.get("application/json") or {}).get("schema")
    return result
