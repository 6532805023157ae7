"""Validation and normalisation of parsed flag values.

All checks run before any network call.  Failures raise
:class:`~deploy_ls.exceptions.ValidationError` with a user-facing
message.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from deploy_ls.core.models import DEFAULT_LIMIT, MAX_LIMIT, DeploymentTarget
from deploy_ls.exceptions import ValidationError

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,100}$")


def is_valid_name(name: str) -> bool:
    """Return whether *name* is an acceptable project name or id."""
    if name in (".", ".."):
        return False
    return _NAME_PATTERN.match(name) is not None


def validate_project_name(name: str) -> str:
    if not is_valid_name(name):
        raise ValidationError(
            f'The provided argument "{name}" is not a valid project name',
            hint="Project names may contain letters, digits, '.', '_' and '-'.",
        )
    return name


def parse_limit(value: object) -> int:
    """Return the page size for a ``--limit`` value (``None`` → default)."""
    if value is None:
        return DEFAULT_LIMIT
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Please provide a whole number for flag `--limit`, got {value}")
    if not 1 <= value <= MAX_LIMIT:
        raise ValidationError(
            f"The value of `--limit` must be between 1 and {MAX_LIMIT}, got {value}",
        )
    return value


def parse_next_timestamp(value: str | None) -> int | None:
    """Return the pagination cursor given by ``--next``, if any.

    ``0`` means "no cursor", the same as omitting the flag.
    """
    if value is None:
        return None
    try:
        timestamp = int(value.strip())
    except ValueError:
        raise ValidationError(
            "Please provide a number for flag `--next`",
            hint="The cursor is a time in milliseconds since the UNIX epoch.",
        ) from None
    if timestamp < 0:
        raise ValidationError("Please provide a number for flag `--next`")
    return timestamp or None


def parse_meta(values: Iterable[str] | None) -> dict[str, str]:
    """Turn repeated ``KEY=value`` strings into a dict; later keys win."""
    meta: dict[str, str] = {}
    for item in values or ():
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValidationError(
                f"Invalid metadata filter {item!r}",
                hint="Use the form `--meta KEY=value`.",
            )
        meta[key] = value
    return meta


@dataclass(frozen=True, slots=True)
class TargetSelection:
    target: str | None
    warning: str | None = None


def parse_target(
    *,
    environment: str | None,
    prod: bool | None,
    flag_name: str = "environment",
) -> TargetSelection:
    """Reconcile ``--environment`` and ``--prod`` into one target name.

    An explicit environment wins over ``--prod``; the caller shows the
    returned warning in that case.
    """
    if environment is not None:
        environment = environment.strip() or None

    warning: str | None = None
    if prod:
        if environment is None:
            return TargetSelection(DeploymentTarget.PRODUCTION.value)
        warning = f"Both `--prod` and `--{flag_name}` detected. Ignoring `--prod`."

    if environment is None:
        return TargetSelection(None, warning)

    lowered = environment.lower()
    if lowered in ("prod", "production"):
        return TargetSelection(DeploymentTarget.PRODUCTION.value, warning)
    if lowered == "preview":
        return TargetSelection(DeploymentTarget.PREVIEW.value, warning)
    return TargetSelection(environment, warning)
