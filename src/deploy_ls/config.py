"""Runtime configuration.

Settings come from ``DEPLOY_LS_*`` environment variables, a project
``.env`` file, and the per-user ``.env`` under the config directory, in
that order of precedence.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import pydantic
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from deploy_ls.exceptions import ValidationError
from deploy_ls.version import __version__

LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform)."""
    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "deploy-ls"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "deploy-ls"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "deploy-ls"
    return Path.home() / ".config" / "deploy-ls"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class Settings(BaseSettings):
    """Central application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DEPLOY_LS_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_url: str = Field(
        default="https://api.vercel.com",
        min_length=8,
        description="Base URL of the deployments API.",
    )
    token: str | None = Field(
        default=None,
        description="Bearer token forwarded with every request.",
    )
    team_id: str | None = Field(
        default=None,
        description="Team whose deployments are listed; personal account when unset.",
    )
    scope: str | None = Field(
        default=None,
        description="Display name of the scope shown in output.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default=f"deploy-ls/{__version__}",
        min_length=1,
    )
    log_level: str = Field(
        default="WARNING",
        description="Root log level (DEBUG, INFO, WARNING, ERROR).",
    )

    @property
    def scope_name(self) -> str:
        return self.scope or self.team_id or "your account"

    def setup_logging(self, *, debug: bool = False) -> None:
        """Configure stderr logging; ``debug`` overrides ``log_level``."""
        level = logging.DEBUG if debug else getattr(logging, self.log_level.upper(), logging.WARNING)
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
            stream=sys.stderr,
        )
        logging.getLogger("deploy_ls").setLevel(level)

        # Request-level chatter from the HTTP stack is rarely useful.
        for noisy in ("httpx", "httpcore"):
            logging.getLogger(noisy).setLevel(max(level, logging.INFO))


def get_settings() -> Settings:
    """Load :class:`Settings`, mapping validation failures to our hierarchy."""
    try:
        return Settings()
    except pydantic.ValidationError as exc:
        raise ValidationError(
            f"Invalid configuration: {exc.errors()[0].get('msg', exc)}",
            hint="Check the DEPLOY_LS_* environment variables and your .env files.",
        ) from exc
