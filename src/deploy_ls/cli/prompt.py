"""Interactive confirmation prompts for the CLI layer."""

from __future__ import annotations

import sys
from typing import Any

from deploy_ls.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def is_interactive() -> bool:
    """Whether both stdin and stdout are attached to a terminal."""
    return sys.stdin.isatty() and sys.stdout.isatty()


def confirm(message: str, *, default: bool = True) -> bool:
    """Ask a yes/no question; Ctrl+C or Esc counts as "no"."""
    questionary = _import_questionary()
    answer: bool | None = questionary.confirm(message, default=default).ask()
    return bool(answer)
