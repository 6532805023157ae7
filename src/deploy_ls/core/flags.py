"""Compile option descriptors into a flag specification.

The compiled :class:`~deploy_ls.core.models.FlagSpecification` is the
only thing the argument parser needs to know about a command's flags:
which canonical tokens exist, what kind of value each carries, and
which shorthand tokens alias them.
"""

from __future__ import annotations

from collections.abc import Iterable

from deploy_ls.core.models import FlagSpecification, OptionDescriptor, ValueKind
from deploy_ls.exceptions import DuplicateFlagError


def canonical_token(name: str) -> str:
    return f"--{name}"


def shorthand_token(shorthand: str) -> str:
    return f"-{shorthand}"


def compile_flags_specification(
    options: Iterable[OptionDescriptor],
) -> FlagSpecification:
    """Build a :class:`FlagSpecification` from *options*.

    Every descriptor yields a ``--name`` entry mapped to its value kind,
    and descriptors with a shorthand additionally yield a ``-x`` alias
    mapped to ``--name``.  Deprecated descriptors are compiled like any
    other.

    Raises
    ------
    DuplicateFlagError
        If two descriptors share a name or a shorthand.
    """
    kinds: dict[str, ValueKind] = {}
    aliases: dict[str, str] = {}
    owners: dict[str, str] = {}

    for option in options:
        token = canonical_token(option.name)
        if token in owners:
            raise DuplicateFlagError(token, first=owners[token], second=option.name)
        owners[token] = option.name
        kinds[token] = option.value_kind

        if option.shorthand:
            alias = shorthand_token(option.shorthand)
            if alias in owners:
                raise DuplicateFlagError(alias, first=owners[alias], second=option.name)
            owners[alias] = option.name
            aliases[alias] = token

    return FlagSpecification(kinds=kinds, aliases=aliases)


def deprecated_tokens(options: Iterable[OptionDescriptor]) -> frozenset[str]:
    """Return the canonical tokens of every deprecated descriptor."""
    return frozenset(
        canonical_token(option.name) for option in options if option.deprecated
    )
