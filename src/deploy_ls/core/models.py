"""Domain models for deploy-ls.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and light invariant checks.  They carry
zero I/O and no dependencies on external packages.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType

from deploy_ls.exceptions import ValidationError

DEFAULT_LIMIT: int = 20
MAX_LIMIT: int = 100


# ---------------------------------------------------------------------------
# Flag metadata
# ---------------------------------------------------------------------------

class ValueKind(Enum):
    """Closed set of value kinds a command-line flag may carry."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING_LIST = "string[]"

    @property
    def repeatable(self) -> bool:
        """Whether repeated occurrences accumulate into an ordered list."""
        return self is ValueKind.STRING_LIST


@dataclass(frozen=True, slots=True)
class OptionDescriptor:
    """Static declaration of one flag accepted by a command."""

    name: str
    """Canonical flag name without dashes (``limit`` for ``--limit``)."""

    value_kind: ValueKind

    shorthand: str | None = None
    """Single-character alias without the dash, or ``None``."""

    deprecated: bool = False
    """Deprecated flags still parse; the caller emits a warning."""

    description: str = ""
    argument: str | None = None
    """Metavar shown in help output (e.g. ``KEY=value``)."""

    def __post_init__(self) -> None:
        if not self.name or self.name.startswith("-"):
            raise ValueError(f"Invalid option name: {self.name!r}")
        if self.shorthand is not None and len(self.shorthand) != 1:
            raise ValueError(
                f"Shorthand for --{self.name} must be a single character, "
                f"got {self.shorthand!r}",
            )


@dataclass(frozen=True, slots=True)
class FlagSpecification:
    """Compiled flag table consumed by the argument parser.

    ``kinds`` maps canonical tokens (``--name``) to their value kind;
    ``aliases`` maps shorthand tokens (``-x``) to the canonical token
    they stand for.
    """

    kinds: Mapping[str, ValueKind]
    aliases: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "kinds", MappingProxyType(dict(self.kinds)))
        object.__setattr__(self, "aliases", MappingProxyType(dict(self.aliases)))
        for alias, canonical in self.aliases.items():
            if canonical not in self.kinds:
                raise ValueError(f"Alias {alias} points at unknown flag {canonical}")

    def resolve(self, token: str) -> str | None:
        """Return the canonical token for *token*, or ``None`` if unknown."""
        if token in self.kinds:
            return token
        return self.aliases.get(token)

    def aliases_for(self, canonical: str) -> tuple[str, ...]:
        """Return every alias token that resolves to *canonical*."""
        return tuple(
            alias for alias, target in self.aliases.items() if target == canonical
        )

    def __len__(self) -> int:
        return len(self.kinds) + len(self.aliases)


FlagValue = str | int | float | bool | list[str]


@dataclass(frozen=True, slots=True)
class ParsedArguments:
    """Result of parsing ``argv`` against a :class:`FlagSpecification`.

    ``flags`` is keyed by canonical token (``--limit``); flags absent
    from ``argv`` are absent from the mapping.
    """

    flags: Mapping[str, FlagValue]
    args: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", MappingProxyType(dict(self.flags)))
        object.__setattr__(self, "args", tuple(self.args))

    def get(self, token: str, default: FlagValue | None = None) -> FlagValue | None:
        return self.flags.get(token, default)

    def __contains__(self, token: object) -> bool:
        return token in self.flags


@dataclass(frozen=True, slots=True)
class CommandArgument:
    """A positional argument of a command (presentation only)."""

    name: str
    required: bool = False


@dataclass(frozen=True, slots=True)
class CommandExample:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class Command:
    """Declarative description of a CLI command."""

    name: str
    description: str
    arguments: tuple[CommandArgument, ...]
    options: tuple[OptionDescriptor, ...]
    examples: tuple[CommandExample, ...] = ()


# ---------------------------------------------------------------------------
# Deployments
# ---------------------------------------------------------------------------

class DeploymentTarget(Enum):
    PRODUCTION = "production"
    PREVIEW = "preview"


@dataclass(frozen=True, slots=True)
class Deployment:
    """One deployment record as returned by the listing endpoint.

    Timestamps are milliseconds since the UNIX epoch.
    """

    id: str
    url: str
    created_at: int
    state: str
    target: DeploymentTarget
    owner_app: str
    """Name of the project the deployment belongs to."""

    building_at: int | None = None
    ready: int | None = None
    creator_name: str | None = None


@dataclass(frozen=True, slots=True)
class Project:
    id: str
    name: str


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ListingQuery:
    """Query sent to the listing endpoint for one page.

    ``until`` is the pagination cursor: only deployments created before
    that timestamp are returned.
    """

    limit: int = DEFAULT_LIMIT
    until: int | None = None
    project_id: str | None = None
    target: str | None = None
    meta: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise ValidationError(f"Page limit must be an integer, got {self.limit!r}")
        if not 1 <= self.limit <= MAX_LIMIT:
            raise ValidationError(
                f"Page limit must be between 1 and {MAX_LIMIT}, got {self.limit}",
            )
        object.__setattr__(self, "meta", MappingProxyType(dict(self.meta)))

    def with_cursor(self, until: int | None) -> ListingQuery:
        """Return a copy of this query positioned at *until*."""
        return replace(self, until=until, meta=dict(self.meta))


@dataclass(frozen=True, slots=True)
class DeploymentPage:
    """One page of the listing response."""

    deployments: tuple[Deployment, ...]
    next_cursor: int | None
    count: int
    """Number of records the server reports for this page."""

    def __len__(self) -> int:
        return len(self.deployments)


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Concatenation of every page fetched during one pagination run."""

    deployments: tuple[Deployment, ...]
    next_cursor: int | None
    last_page_count: int
    pages: int
    limit: int

    @property
    def is_full(self) -> bool:
        """``True`` when the last page was full, i.e. more may exist."""
        return self.last_page_count >= self.limit

    def __len__(self) -> int:
        return len(self.deployments)

    def __bool__(self) -> bool:
        return len(self.deployments) > 0


# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------

class StatusClass(Enum):
    IN_PROGRESS = "in-progress"
    ERROR = "error"
    SUCCESS = "success"
    NEUTRAL = "neutral"
    MUTED = "muted"


@dataclass(frozen=True, slots=True)
class StatusLabel:
    text: str
    status_class: StatusClass
    marker: bool = True
    """Whether a coloured status glyph precedes the text."""


@dataclass(frozen=True, slots=True)
class RenderedRow:
    """Display strings for one table row, in header order."""

    age: str
    deployment: str
    status: StatusLabel
    environment: str
    duration: str
    username: str

    def cells(self) -> tuple[str, str, str, str, str, str]:
        """Return the six plain-text cells (status without colour)."""
        return (
            self.age,
            self.deployment,
            self.status.text,
            self.environment,
            self.duration,
            self.username,
        )
