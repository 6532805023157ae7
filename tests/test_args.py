"""Tests for the argparse-backed token parser (cli/args.py)."""

from __future__ import annotations

import pytest

from deploy_ls.cli.args import format_help, parse_arguments
from deploy_ls.cli.options import LIST_COMMAND
from deploy_ls.core.flags import compile_flags_specification
from deploy_ls.exceptions import ArgumentParseError

SPEC = compile_flags_specification(LIST_COMMAND.options)


class TestParseArguments:
    def test_absent_flags_are_absent_keys(self) -> None:
        parsed = parse_arguments([], SPEC)
        assert dict(parsed.flags) == {}
        assert parsed.args == ()

    def test_positional_collected(self) -> None:
        parsed = parse_arguments(["my-app"], SPEC)
        assert parsed.args == ("my-app",)

    def test_flags_and_positionals_interleave(self) -> None:
        parsed = parse_arguments(["--limit", "5", "my-app", "--prod"], SPEC)
        assert parsed.args == ("my-app",)
        assert parsed.flags["--limit"] == 5
        assert parsed.flags["--prod"] is True

    def test_alias_lands_under_canonical_key(self) -> None:
        parsed = parse_arguments(["-n", "1584722256178", "-y"], SPEC)
        assert parsed.flags["--next"] == "1584722256178"
        assert parsed.flags["--yes"] is True
        assert "-n" not in parsed

    def test_string_list_accumulates_in_order(self) -> None:
        parsed = parse_arguments(["--meta", "a=1", "--meta", "b=2"], SPEC)
        assert parsed.flags["--meta"] == ["a=1", "b=2"]

    def test_equals_syntax(self) -> None:
        parsed = parse_arguments(["--environment=preview"], SPEC)
        assert parsed.flags["--environment"] == "preview"

    def test_number_keeps_fraction(self) -> None:
        parsed = parse_arguments(["--limit", "2.5"], SPEC)
        assert parsed.flags["--limit"] == 2.5

    def test_non_numeric_number_rejected(self) -> None:
        with pytest.raises(ArgumentParseError):
            parse_arguments(["--limit", "lots"], SPEC)

    def test_nan_rejected(self) -> None:
        with pytest.raises(ArgumentParseError):
            parse_arguments(["--limit", "nan"], SPEC)

    def test_unknown_flag_rejected(self) -> None:
        with pytest.raises(ArgumentParseError, match="unrecognized"):
            parse_arguments(["--bogus"], SPEC)

    def test_abbreviations_not_accepted(self) -> None:
        with pytest.raises(ArgumentParseError):
            parse_arguments(["--lim", "5"], SPEC)

    def test_missing_value_rejected(self) -> None:
        with pytest.raises(ArgumentParseError):
            parse_arguments(["--next"], SPEC)

    def test_deprecated_flag_still_parses(self) -> None:
        parsed = parse_arguments(["--confirm"], SPEC)
        assert parsed.flags["--confirm"] is True

    def test_parsed_flags_are_read_only(self) -> None:
        parsed = parse_arguments(["--prod"], SPEC)
        with pytest.raises(TypeError):
            parsed.flags["--prod"] = False  # type: ignore[index]


class TestFormatHelp:
    def test_lists_examples(self) -> None:
        text = format_help(SPEC, LIST_COMMAND)
        assert "examples:" in text
        assert "deploy-ls my-app --next 1584722256178" in text

    def test_shows_metavars(self) -> None:
        text = format_help(SPEC, LIST_COMMAND)
        assert "--meta KEY=value" in text
        assert "-n MS, --next MS" in text
