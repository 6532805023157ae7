"""Shared pytest fixtures and configuration for the deploy-ls test suite.

Guidelines
----------
* No internet access in any test.
* The HTTP API is faked at the provider boundary, or with
  ``httpx.MockTransport`` for the infra adapter itself.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state or the user's configuration.
"""

from __future__ import annotations

from pathlib import Path

import pytest

_ENV_VARS: tuple[str, ...] = (
    "DEPLOY_LS_API_URL",
    "DEPLOY_LS_TOKEN",
    "DEPLOY_LS_TEAM_ID",
    "DEPLOY_LS_SCOPE",
    "DEPLOY_LS_HTTP_TIMEOUT_SECONDS",
    "DEPLOY_LS_USER_AGENT",
    "DEPLOY_LS_LOG_LEVEL",
    "FORCE_COLOR",
)


@pytest.fixture(autouse=True)
def isolated_environment(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Run every test in an empty directory with a clean environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    # No width override: Rich uses the attached terminal, else 80 columns.
    monkeypatch.delenv("COLUMNS", raising=False)
