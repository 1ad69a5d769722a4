"""Async GraphQL client for the Railway backboard API.

Only what the config layer needs: an authorized client factory and a
helper that posts a query and returns its ``data`` object.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

from railway_cli.constants import CLI_VERSION, HTTP_TIMEOUT
from railway_cli.errors import GraphQLError, UnauthorizedError

if TYPE_CHECKING:
    from railway_cli.configs import Configs

logger = logging.getLogger(__name__)

# Header carrying a project-scoped token (RAILWAY_TOKEN).
PROJECT_ACCESS_TOKEN_HEADER = "project-access-token"


class GQLClient:
    """Thin wrapper around ``httpx.AsyncClient`` posting GraphQL documents.

    Parameters
    ----------
    url:
        Full GraphQL endpoint, e.g. ``https://backboard.railway.com/graphql/v2``.
    headers:
        Headers applied to every request (authorization etc.).
    timeout:
        HTTP request timeout in seconds.
    """

    def __init__(
        self,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = HTTP_TIMEOUT,
    ) -> None:
        self.url = url
        self._headers = headers or {}
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def new_authorized(cls, configs: "Configs") -> "GQLClient":
        """Build a client authorized from *configs*.

        A project token (``RAILWAY_TOKEN``) takes precedence over the
        account token. Raises :class:`UnauthorizedError` if neither exists.
        """
        headers = {
            "x-source": "railway-cli",
            "User-Agent": f"CLI {CLI_VERSION}",
        }
        project_token = configs.get_railway_token()
        if project_token is not None:
            headers[PROJECT_ACCESS_TOKEN_HEADER] = project_token
        else:
            token = configs.get_railway_auth_token()
            if token is None:
                raise UnauthorizedError()
            headers["Authorization"] = f"Bearer {token}"
        return cls(configs.get_backboard(), headers=headers)

    # ── lifecycle ───────────────────────────────────────────────────

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(headers=self._headers, timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ── requests ────────────────────────────────────────────────────

    async def post_graphql(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Post *query* and return the response's ``data`` object.

        Raises :class:`UnauthorizedError` when the API reports missing
        authorization and :class:`GraphQLError` for any other error payload.
        """
        client = self._ensure_client()
        resp = await client.post(self.url, json={"query": query, "variables": variables or {}})
        if resp.status_code in (401, 403):
            raise UnauthorizedError()
        resp.raise_for_status()

        try:
            body = resp.json()
        except ValueError as exc:
            raise GraphQLError(f"invalid JSON response from {self.url}") from exc
        if not isinstance(body, dict):
            raise GraphQLError(f"unexpected response shape from {self.url}")

        errors = body.get("errors") or []
        if errors:
            message = errors[0].get("message", "unknown error")
            logger.debug("GraphQL errors from %s: %s", self.url, errors)
            if message == "Not Authorized":
                raise UnauthorizedError()
            raise GraphQLError(message, errors)

        data = body.get("data")
        if data is None:
            raise GraphQLError("response contained no data")
        return data
