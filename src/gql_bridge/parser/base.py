"""Data models for a parsed REST API description.

Schema declarations are kept as the raw JSON-schema mappings from the
document; the translator interprets them.
"""

from pydantic import BaseModel, ConfigDict

HTTP_METHODS = ("get", "put", "post", "delete", "patch", "head", "options", "trace")


class Param(BaseModel):
    """A single operation parameter (query, path, header, or cookie)."""

    name: str
    location: str  # query / path / header / cookie
    required: bool = False
    shape: dict = {}
    description: str = ""


class RequestBody(BaseModel):
    """The request body an operation accepts."""

    shape: dict = {}
    required: bool = False
    content_type: str = "application/json"


class Operation(BaseModel):
    """One HTTP method declared on one path."""

    method: str  # lowercase: get / post / ...
    path: str  # /users/{id}
    operation_id: str = ""
    summary: str = ""
    parameters: list[Param] = []
    request_body: RequestBody | None = None
    responses: dict[str, dict | None] = {}  # {status_code: json schema or None}

    def response_shape(self, status_code: str = "200") -> dict | None:
        return self.responses.get(status_code)


class PathEntry(BaseModel):
    """All operations declared on one REST path, keyed by lowercase method."""

    path: str
    operations: dict[str, Operation] = {}

    def get(self, method: str) -> Operation | None:
        return self.operations.get(method)


class SourceDocument(BaseModel):
    """The parsed API description. Read-only throughout translation."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    version: str = ""
    servers: list[str] = []
    paths: dict[str, PathEntry] = {}
    schemas: dict[str, dict] = {}
