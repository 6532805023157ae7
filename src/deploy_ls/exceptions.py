"""Custom exception hierarchy for deploy-ls.

All exceptions that cross layer boundaries must inherit from
:class:`DeployLsError`.  Raw third-party exceptions (e.g. from httpx)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
DeployLsError
├── ValidationError
│   └── ArgumentParseError
├── DuplicateFlagError
├── NotFoundError
│   └── ProjectNotFoundError
├── ApiError
│   └── AuthenticationError
├── TransportError
├── FetchFailedError
└── EnvironmentError
"""

from __future__ import annotations


class DeployLsError(Exception):
    """Base exception for all deploy-ls errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Input validation ------------------------------------------------------

class ValidationError(DeployLsError):
    """Raised when user input is rejected before any network call."""


class ArgumentParseError(ValidationError):
    """Raised when ``argv`` does not match the compiled flag specification."""


# --- Flag specification ----------------------------------------------------

class DuplicateFlagError(DeployLsError):
    """Raised when two option descriptors claim the same flag token."""

    def __init__(self, token: str, *, first: str, second: str) -> None:
        super().__init__(
            f"Flag {token} is declared by both '{first}' and '{second}'.",
        )
        self.token: str = token


# --- Lookup ----------------------------------------------------------------

class NotFoundError(DeployLsError):
    """Raised when a requested remote resource does not exist."""


class ProjectNotFoundError(NotFoundError):
    """Raised when the project given on the command line cannot be found."""

    def __init__(self, project: str) -> None:
        super().__init__(
            f'The provided argument "{project}" is not a valid project name',
            hint="Check the spelling, or pass the project id instead.",
        )
        self.project: str = project


# --- Remote API ------------------------------------------------------------

class ApiError(DeployLsError):
    """Raised when the API answers with an error status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        code: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code: int = status_code
        self.code: str | None = code


class AuthenticationError(ApiError):
    """Raised on 401/403 responses."""


class TransportError(DeployLsError):
    """Raised when the request never produced a response (network, timeout)."""


class FetchFailedError(DeployLsError):
    """Raised when a page provider fails with an unexpected exception."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(DeployLsError):
    """Raised when a required runtime dependency is not available."""
