from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from gql_bridge.bridge import build_bridge
from gql_bridge.config import BridgeConfig
from gql_bridge.parser.openapi import load_document
from gql_bridge.server import create_app

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def client():
    doc = load_document(FIXTURES / "users.json")
    bridge = build_bridge(doc, BridgeConfig(upstream_url="http://upstream"))
    return TestClient(create_app(bridge.schema))


class TestGraphQLEndpoint:
    @patch("gql_bridge.proxy.requests.request")
    def test_forwards_authorization_header(self, mock_request, client):
        mock_resp = MagicMock()
        mock_resp.ok = True
        mock_resp.content = b"[]"
        mock_resp.json.return_value = ["a", "b"]
        mock_request.return_value = mock_resp

        resp = client.post(
            "/graphql",
            json={"query": "query Items($id: String!) { listItems(id: $id) }", "variables": {"id": "3"}},
            headers={"Authorization": "Bearer token"},
        )

        assert resp.status_code == 200
        assert resp.json() == {"data": {"listItems": ["a", "b"]}}
        args, kwargs = mock_request.call_args
        assert args == ("GET", "http://upstream/items")
        assert kwargs["headers"] == {"authorization": "Bearer token"}
        assert kwargs["params"] == {"id": "3"}

    def test_invalid_query(self, client):
        resp = client.post("/graphql", json={"query": "{ nope }"})
        assert resp.status_code == 400
        assert "nope" in resp.json()["errors"][0]["message"]

    def test_schema_sdl(self, client):
        resp = client.get("/graphql/schema")
        assert resp.status_code == 200
        assert "type Query" in resp.text
