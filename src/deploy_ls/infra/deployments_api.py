"""httpx backed implementation of :class:`~deploy_ls.core.protocols.DeploymentsProvider`.

This module is the **only** place in the codebase that talks to the
remote API.  All httpx exceptions are caught here and re-raised as typed
:class:`~deploy_ls.exceptions.DeployLsError` subclasses — nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from deploy_ls.config import Settings
from deploy_ls.core.models import DeploymentPage, ListingQuery, Project
from deploy_ls.core.parsing import parse_page, parse_project
from deploy_ls.exceptions import (
    ApiError,
    AuthenticationError,
    ProjectNotFoundError,
    TransportError,
)
from deploy_ls.infra.http_client import build_async_client

logger = logging.getLogger(__name__)

DEPLOYMENTS_PATH: str = "/v6/deployments"
PROJECTS_PATH: str = "/v9/projects"


class ApiDeploymentsProvider:
    """Concrete :class:`DeploymentsProvider` backed by the REST API.

    Usage::

        async with ApiDeploymentsProvider(settings) as provider:
            page = await provider.fetch_page(ListingQuery(limit=20))

    This class satisfies the :class:`~deploy_ls.core.protocols.DeploymentsProvider`
    protocol structurally — no explicit inheritance required.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings: Settings = settings
        self._client: httpx.AsyncClient = client or build_async_client(settings)

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ApiDeploymentsProvider:
        return self

    async def __aexit__(self, *_args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def build_params(self, query: ListingQuery) -> list[tuple[str, str]]:
        """Translate *query* into listing query-string parameters."""
        params: list[tuple[str, str]] = [("limit", str(query.limit))]
        if query.until is not None:
            params.append(("until", str(query.until)))
        if query.project_id:
            params.append(("projectId", query.project_id))
        if query.target:
            params.append(("target", query.target))
        for key, value in query.meta.items():
            params.append((f"meta-{key}", value))
        if self._settings.team_id:
            params.append(("teamId", self._settings.team_id))
        return params

    async def fetch_page(self, query: ListingQuery) -> DeploymentPage:
        """Fetch one page of deployments.

        Raises
        ------
        AuthenticationError
            On 401/403.
        ApiError
            On any other error status or an unreadable body.
        TransportError
            When the request did not complete.
        """
        payload = await self._get_json(DEPLOYMENTS_PATH, params=self.build_params(query))
        return parse_page(payload)

    async def get_project(self, name_or_id: str) -> Project:
        """Look up a project by name or id.

        Raises
        ------
        ProjectNotFoundError
            When the API answers 404.
        """
        params: list[tuple[str, str]] = []
        if self._settings.team_id:
            params.append(("teamId", self._settings.team_id))
        path = f"{PROJECTS_PATH}/{quote(name_or_id, safe='')}"
        try:
            payload = await self._get_json(path, params=params)
        except ApiError as exc:
            if exc.status_code == 404:
                raise ProjectNotFoundError(name_or_id) from exc
            raise
        return parse_project(payload)

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    async def _get_json(
        self,
        path: str,
        *,
        params: list[tuple[str, str]],
    ) -> dict[str, Any]:
        logger.debug("GET %s %s", path, params)
        try:
            response = await self._client.get(path, params=params)
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Request to {path} timed out.",
                hint="Raise DEPLOY_LS_HTTP_TIMEOUT_SECONDS or retry later.",
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Could not reach the API: {exc}",
                hint="Check your network connection and DEPLOY_LS_API_URL.",
            ) from exc

        if response.is_error:
            self._raise_mapped(response)

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise ApiError(
                "The API returned a response that is not valid JSON.",
                status_code=response.status_code,
            ) from exc

        if not isinstance(payload, dict):
            raise ApiError(
                "The API returned an unexpected data structure.",
                status_code=response.status_code,
            )
        return payload

    # ------------------------------------------------------------------
    # Error mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _raise_mapped(response: httpx.Response) -> None:
        """Translate an error response into a domain exception.

        Always raises.
        """
        code: str | None = None
        message = f"API request failed with status {response.status_code}"
        try:
            body: Any = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            error = body["error"]
            if isinstance(error.get("code"), str):
                code = error["code"]
            if isinstance(error.get("message"), str):
                message = error["message"]

        if response.status_code in (401, 403):
            raise AuthenticationError(
                message,
                status_code=response.status_code,
                code=code,
                hint="Set DEPLOY_LS_TOKEN to a valid access token.",
            )
        raise ApiError(message, status_code=response.status_code, code=code)
