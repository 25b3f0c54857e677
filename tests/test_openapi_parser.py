from pathlib import Path

import pytest

from gql_bridge.errors import SpecMalformed
from gql_bridge.parser.openapi import load_document, parse_document

FIXTURES = Path(__file__).parent / "fixtures"


class TestLoadDocument:
    def test_load_json(self):
        doc = load_document(FIXTURES / "users.json")
        assert doc.title == "Users API"
        assert set(doc.schemas) == {"User", "Address", "CreateUserDto", "UpdateUserDto"}
        assert doc.servers == ["http://users.example.test/"]

    def test_load_yaml(self):
        doc = load_document(FIXTURES / "petstore.yaml")
        assert set(doc.paths) == {"/pets", "/pets/{petId}"}

    def test_not_openapi(self, tmp_path):
        f = tmp_path / "doc.md"
        f.write_text("# API Docs\nSome text")
        with pytest.raises(SpecMalformed):
            load_document(f)

    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "doc.yaml"
        f.write_text("openapi: [unclosed")
        with pytest.raises(SpecMalformed):
            load_document(f)


class TestParseDocument:
    def test_only_http_methods_are_operations(self):
        doc = parse_document({
            "openapi": "3.0.0",
            "paths": {"/a": {"summary": "x", "get": {"responses": {}}, "head": {"responses": {}}}},
        })
        assert set(doc.paths["/a"].operations) == {"get", "head"}

    def test_missing_operation_id_is_empty(self):
        doc = parse_document({"openapi": "3.0.0", "paths": {"/a": {"get": {"responses": {}}}}})
        assert doc.paths["/a"].get("get").operation_id == ""

    def test_missing_components(self):
        doc = parse_document({"openapi": "3.0.0", "paths": {}})
        assert doc.schemas == {}
        assert doc.paths == {}

    def test_yaml_int_status_codes_normalized(self):
        doc = load_document(FIXTURES / "petstore.yaml")
        list_pets = doc.paths["/pets"].get("get")
        assert list_pets.response_shape("200")["type"] == "array"
        create_pet = doc.paths["/pets"].get("post")
        assert "201" in create_pet.responses
        assert create_pet.response_shape("201") is None

    def test_path_level_parameters_merged(self):
        doc = load_document(FIXTURES / "users.json")
        get_user = doc.paths["/users/{id}"].get("get")
        assert [p.name for p in get_user.parameters] == ["id"]
        assert get_user.parameters[0].location == "path"
        assert get_user.parameters[0].required is True

    def test_operation_parameter_overrides_path_parameter(self):
        doc = parse_document({
            "openapi": "3.0.0",
            "paths": {
                "/a/{id}": {
                    "parameters": [{"name": "id", "in": "path", "schema": {"type": "string"}}],
                    "get": {
                        "parameters": [{"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}}],
                        "responses": {},
                    },
                }
            },
        })
        params = doc.paths["/a/{id}"].get("get").parameters
        assert len(params) == 1
        assert params[0].shape == {"type": "integer"}

    def test_request_body(self):
        doc = load_document(FIXTURES / "users.json")
        body = doc.paths["/users"].get("post").request_body
        assert body.required is True
        assert body.shape == {"$ref": "#/components/schemas/CreateUserDto"}
        assert body.content_type == "application/json"

    def test_request_body_falls_back_to_first_media_type(self):
        doc = parse_document({
            "openapi": "3.0.0",
            "paths": {"/a": {"post": {
                "requestBody": {"content": {"text/plain": {"schema": {"type": "string"}}}},
                "responses": {},
            }}},
        })
        body = doc.paths["/a"].get("post").request_body
        assert body.content_type == "text/plain"
        assert body.required is False

    def test_referenced_parameters_are_skipped(self):
        doc = parse_document({
            "openapi": "3.0.0",
            "paths": {"/a": {"get": {
                "parameters": [{"$ref": "#/components/parameters/Limit"}],
                "responses": {},
            }}},
        })
        assert doc.paths["/a"].get("get").parameters == []
