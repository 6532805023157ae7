"""argparse-backed token parser driven by a compiled flag specification.

:func:`parse_arguments` turns ``argv`` into
:class:`~deploy_ls.core.models.ParsedArguments`.  Shorthand tokens are
registered as extra option strings of their canonical flag, so values
given through an alias land under the canonical ``--name`` key.
"""

from __future__ import annotations

import argparse
import math
from collections.abc import Sequence

from deploy_ls.core.flags import canonical_token
from deploy_ls.core.models import (
    Command,
    FlagSpecification,
    OptionDescriptor,
    ParsedArguments,
    ValueKind,
)
from deploy_ls.exceptions import ArgumentParseError


class _RaisingArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that raises instead of exiting the process."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise ArgumentParseError(
            message,
            hint=f"Run `{self.prog} --help` for usage.",
        )


def _to_number(value: str) -> int | float:
    """argparse ``type`` callable for :attr:`ValueKind.NUMBER` flags."""
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number") from None
    if math.isnan(number) or math.isinf(number):
        raise argparse.ArgumentTypeError(f"{value!r} is not a number")
    return number


def _format_examples(command: Command) -> str | None:
    if not command.examples:
        return None
    lines = ["examples:"]
    for example in command.examples:
        lines.append(f"  – {example.name}")
        lines.append(f"    $ {example.value}")
        lines.append("")
    return "\n".join(lines).rstrip()


def build_parser(
    spec: FlagSpecification,
    *,
    command: Command | None = None,
) -> argparse.ArgumentParser:
    """Construct a parser accepting exactly the flags in *spec*.

    *command* only contributes help text: descriptions, metavars and
    examples.  Deprecated flags are accepted but hidden from help.
    """
    descriptors: dict[str, OptionDescriptor] = {}
    if command is not None:
        descriptors = {canonical_token(option.name): option for option in command.options}

    parser = _RaisingArgumentParser(
        prog=command.name if command is not None else None,
        description=command.description if command is not None else None,
        epilog=_format_examples(command) if command is not None else None,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )

    positional_names = (
        " ".join(arg.name for arg in command.arguments) if command is not None else "args"
    )
    parser.add_argument("args", nargs="*", metavar=positional_names)

    for token, kind in spec.kinds.items():
        option_strings = [*spec.aliases_for(token), token]
        kwargs: dict[str, object] = {"dest": token, "default": argparse.SUPPRESS}
        if kind is ValueKind.BOOLEAN:
            kwargs["action"] = "store_true"
        elif kind is ValueKind.STRING_LIST:
            kwargs["action"] = "append"
        elif kind is ValueKind.NUMBER:
            kwargs["type"] = _to_number

        descriptor = descriptors.get(token)
        if descriptor is not None:
            kwargs["help"] = (
                argparse.SUPPRESS if descriptor.deprecated else descriptor.description
            )
            if descriptor.argument and kind is not ValueKind.BOOLEAN:
                kwargs["metavar"] = descriptor.argument

        parser.add_argument(*option_strings, **kwargs)  # type: ignore[arg-type]

    return parser


def parse_arguments(
    argv: Sequence[str],
    spec: FlagSpecification,
) -> ParsedArguments:
    """Parse *argv* against *spec*.

    Flags and positional arguments may be freely interleaved.

    Raises
    ------
    ArgumentParseError
        For unknown flags, missing values or non-numeric numbers.
    """
    parser = build_parser(spec)
    namespace = parser.parse_intermixed_args(list(argv))
    values = vars(namespace)
    positionals = values.pop("args", None) or []
    return ParsedArguments(flags=values, args=tuple(positionals))


def format_help(spec: FlagSpecification, command: Command) -> str:
    return build_parser(spec, command=command).format_help()
