"""Declarative description of the ``deploy-ls`` command and its flags."""

from __future__ import annotations

from deploy_ls.core.models import (
    Command,
    CommandArgument,
    CommandExample,
    OptionDescriptor,
    ValueKind,
)

PROG: str = "deploy-ls"

GLOBAL_OPTIONS: tuple[OptionDescriptor, ...] = (
    OptionDescriptor(
        name="help",
        shorthand="h",
        value_kind=ValueKind.BOOLEAN,
        description="Output usage information",
    ),
    OptionDescriptor(
        name="debug",
        shorthand="d",
        value_kind=ValueKind.BOOLEAN,
        description="Debug mode (default off)",
    ),
    OptionDescriptor(
        name="version",
        shorthand="V",
        value_kind=ValueKind.BOOLEAN,
        description="Output the version number",
    ),
)

DEPRECATED_REPLACEMENTS: dict[str, str] = {
    "--confirm": "--yes",
}

LIST_OPTIONS: tuple[OptionDescriptor, ...] = (
    OptionDescriptor(
        name="meta",
        value_kind=ValueKind.STRING_LIST,
        argument="KEY=value",
        description=(
            "Filter deployments by metadata (e.g.: `--meta KEY=value`). "
            "Can appear many times"
        ),
    ),
    OptionDescriptor(
        name="environment",
        value_kind=ValueKind.STRING,
        argument="TARGET",
        description="Specify the target deployment environment to filter by",
    ),
    OptionDescriptor(
        name="next",
        shorthand="n",
        value_kind=ValueKind.STRING,
        argument="MS",
        description="Show next page of results",
    ),
    OptionDescriptor(
        name="limit",
        value_kind=ValueKind.NUMBER,
        argument="NUMBER",
        description="Number of results to return per page (default: 20, max: 100)",
    ),
    OptionDescriptor(
        name="prod",
        value_kind=ValueKind.BOOLEAN,
        description=(
            "List only Production deployments "
            "(shorthand for `--environment=production`)"
        ),
    ),
    OptionDescriptor(
        name="yes",
        shorthand="y",
        value_kind=ValueKind.BOOLEAN,
        description="Use default options to skip all prompts",
    ),
    OptionDescriptor(
        name="confirm",
        shorthand="c",
        value_kind=ValueKind.BOOLEAN,
        deprecated=True,
        description="Use default options to skip all prompts",
    ),
)

LIST_COMMAND = Command(
    name=PROG,
    description="List deployments for a project.",
    arguments=(CommandArgument(name="project", required=False),),
    options=LIST_OPTIONS + GLOBAL_OPTIONS,
    examples=(
        CommandExample(
            name="List the latest deployment of every project in the current scope",
            value=f"{PROG}",
        ),
        CommandExample(
            name="List all deployments for the project `my-app`",
            value=f"{PROG} my-app",
        ),
        CommandExample(
            name="Filter deployments by metadata",
            value=f"{PROG} --meta key1=value1 --meta key2=value2",
        ),
        CommandExample(
            name=(
                "Paginate deployments for a project, where `1584722256178` is "
                "the time in milliseconds since the UNIX epoch"
            ),
            value=f"{PROG} my-app --next 1584722256178",
        ),
    ),
)
