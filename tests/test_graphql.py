"""Tests for the backboard GraphQL client."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from railway_cli.client.graphql import PROJECT_ACCESS_TOKEN_HEADER, GQLClient
from railway_cli.client.queries import PROJECT_TOKEN_QUERY, ProjectTokenResponse
from railway_cli.errors import GraphQLError, UnauthorizedError


def _client_returning(payload, status_code: int = 200) -> GQLClient:
    mock_resp = MagicMock()
    mock_resp.status_code = status_code
    mock_resp.raise_for_status = MagicMock()
    mock_resp.json.return_value = payload

    mock_httpx_client = AsyncMock()
    mock_httpx_client.post = AsyncMock(return_value=mock_resp)

    client = GQLClient("https://backboard.railway.com/graphql/v2")
    client._client = mock_httpx_client
    return client


# ── new_authorized ───────────────────────────────────────────────────────


class TestNewAuthorized:
    def test_project_token_header(self, make_configs) -> None:
        configs = make_configs(project_token="proj-tok", api_token="api-tok")
        client = GQLClient.new_authorized(configs)
        assert client._headers[PROJECT_ACCESS_TOKEN_HEADER] == "proj-tok"
        assert "Authorization" not in client._headers
        assert client.url == "https://backboard.railway.com/graphql/v2"

    def test_bearer_token(self, make_configs) -> None:
        configs = make_configs(environment="staging")
        configs.root_config.user.token = "user-tok"
        client = GQLClient.new_authorized(configs)
        assert client._headers["Authorization"] == "Bearer user-tok"
        assert client.url == "https://backboard.railway-staging.com/graphql/v2"

    def test_unauthenticated(self, make_configs) -> None:
        with pytest.raises(UnauthorizedError):
            GQLClient.new_authorized(make_configs())


# ── post_graphql ─────────────────────────────────────────────────────────


class TestPostGraphql:
    @pytest.mark.anyio
    async def test_returns_data(self) -> None:
        client = _client_returning({"data": {"ok": True}})
        data = await client.post_graphql("query { ok }", {"a": 1})
        assert data == {"ok": True}
        client._client.post.assert_awaited_once_with(
            "https://backboard.railway.com/graphql/v2",
            json={"query": "query { ok }", "variables": {"a": 1}},
        )

    @pytest.mark.anyio
    async def test_errors_raise(self) -> None:
        client = _client_returning({"errors": [{"message": "Project not found"}], "data": None})
        with pytest.raises(GraphQLError, match="Project not found"):
            await client.post_graphql("query { x }")

    @pytest.mark.anyio
    async def test_not_authorized_message(self) -> None:
        client = _client_returning({"errors": [{"message": "Not Authorized"}]})
        with pytest.raises(UnauthorizedError):
            await client.post_graphql("query { x }")

    @pytest.mark.anyio
    async def test_unauthorized_status(self) -> None:
        client = _client_returning({}, status_code=401)
        with pytest.raises(UnauthorizedError):
            await client.post_graphql("query { x }")

    @pytest.mark.anyio
    async def test_missing_data(self) -> None:
        client = _client_returning({})
        with pytest.raises(GraphQLError):
            await client.post_graphql("query { x }")

    @pytest.mark.anyio
    async def test_non_json_body(self) -> None:
        client = _client_returning(None)
        client._client.post.return_value.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
        with pytest.raises(GraphQLError, match="invalid JSON"):
            await client.post_graphql("query { x }")

    @pytest.mark.anyio
    async def test_non_object_body(self) -> None:
        client = _client_returning(["x"])
        with pytest.raises(GraphQLError, match="unexpected response shape"):
            await client.post_graphql("query { x }")

    @pytest.mark.anyio
    async def test_close(self) -> None:
        client = _client_returning({})
        mock_httpx_client = client._client
        await client.close()
        mock_httpx_client.aclose.assert_awaited_once()
        assert client._client is None


class TestProjectTokenQuery:
    def test_query_selects_identity(self) -> None:
        assert "projectToken" in PROJECT_TOKEN_QUERY
        assert "environment" in PROJECT_TOKEN_QUERY

    def test_response_model(self) -> None:
        parsed = ProjectTokenResponse.model_validate(
            {
                "projectToken": {
                    "project": {"id": "p", "name": "App"},
                    "environment": {"id": "e", "name": "production"},
                }
            }
        )
        assert parsed.project_token.project.id == "p"
        assert parsed.project_token.environment.name == "production"
