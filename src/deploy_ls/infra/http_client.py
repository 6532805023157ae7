"""httpx client construction.

Centralises base URL, timeouts and headers so every request made by
the infra layer behaves the same way.
"""

from __future__ import annotations

import httpx

from deploy_ls.config import Settings


def build_headers(settings: Settings) -> dict[str, str]:
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if settings.token:
        headers["Authorization"] = f"Bearer {settings.token}"
    return headers


def build_async_client(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an :class:`httpx.AsyncClient` bound to the configured API.

    *transport* lets tests substitute an :class:`httpx.MockTransport`.
    """
    settings = settings or Settings()
    return httpx.AsyncClient(
        base_url=settings.api_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=build_headers(settings),
        transport=transport,
    )
