"""CLI application entry point for deploy-ls.

This module is the **sole error boundary** for the entire application.
It catches :class:`~deploy_ls.exceptions.DeployLsError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — flag compilation, pagination,
  reduction and formatting are delegated to the core layer, HTTP to the
  infrastructure layer.
* Every validation step runs before the HTTP client is opened.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import time
from dataclasses import dataclass, field

from deploy_ls.cli import exit_codes
from deploy_ls.cli.args import format_help, parse_arguments
from deploy_ls.cli.console import console, escape
from deploy_ls.cli.options import DEPRECATED_REPLACEMENTS, LIST_COMMAND, PROG
from deploy_ls.config import Settings, get_settings
from deploy_ls.core.flags import compile_flags_specification, deprecated_tokens
from deploy_ls.core.models import ListingQuery, ParsedArguments, Project
from deploy_ls.core.pagination import PaginationFetcher
from deploy_ls.core.presentation import format_rows
from deploy_ls.core.reducer import ReductionPolicy, reduce_listing
from deploy_ls.core.validation import (
    parse_limit,
    parse_meta,
    parse_next_timestamp,
    parse_target,
    validate_project_name,
)
from deploy_ls.exceptions import DeployLsError, ValidationError
from deploy_ls.infra.deployments_api import ApiDeploymentsProvider
from deploy_ls.utils.durations import elapsed
from deploy_ls.version import __version__

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ListingOptions:
    """Validated inputs of one listing run."""

    project: str | None
    limit: int
    until: int | None
    target: str | None
    meta: dict[str, str] = field(default_factory=dict)
    auto_confirm: bool = False


# ---------------------------------------------------------------------------
# Flag handling
# ---------------------------------------------------------------------------

def _apply_deprecations(parsed: ParsedArguments) -> ParsedArguments:
    """Warn about deprecated flags and fold them into their replacements."""
    flags = dict(parsed.flags)
    for token in sorted(deprecated_tokens(LIST_COMMAND.options)):
        if token not in flags:
            continue
        replacement = DEPRECATED_REPLACEMENTS.get(token)
        if replacement is None:
            console.warn(f"`{token}` is deprecated")
            continue
        console.warn(f"`{token}` is deprecated, please use `{replacement}` instead")
        flags.setdefault(replacement, flags[token])
    return ParsedArguments(flags=flags, args=parsed.args)


def _resolve_options(parsed: ParsedArguments) -> ListingOptions:
    """Validate parsed flags and positionals.

    Raises
    ------
    ValidationError
        On any invalid value; nothing has touched the network yet.
    """
    project: str | None = None
    if parsed.args:
        project = validate_project_name(parsed.args[0])

    environment = parsed.get("--environment")
    selection = parse_target(
        environment=str(environment) if environment is not None else None,
        prod=bool(parsed.get("--prod", False)),
    )
    if selection.warning:
        console.warn(selection.warning)

    raw_next = parsed.get("--next")
    raw_meta = parsed.get("--meta")
    return ListingOptions(
        project=project,
        limit=parse_limit(parsed.get("--limit")),
        until=parse_next_timestamp(str(raw_next) if raw_next is not None else None),
        target=selection.target,
        meta=parse_meta(raw_meta if isinstance(raw_meta, list) else None),
        auto_confirm=bool(parsed.get("--yes", False)),
    )


# ---------------------------------------------------------------------------
# Listing pipeline
# ---------------------------------------------------------------------------

def _build_provider(settings: Settings) -> ApiDeploymentsProvider:
    return ApiDeploymentsProvider(settings)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _confirm_scope_wide_listing(settings: Settings) -> bool:
    """Ask before listing every project when no project was named."""
    from deploy_ls.cli.prompt import confirm, is_interactive

    if not is_interactive():
        return True
    return confirm(
        f"List the latest deployment of every project under {settings.scope_name}?",
    )


async def _run_listing(
    options: ListingOptions,
    parsed: ParsedArguments,
    settings: Settings,
) -> int:
    """Fetch one page, reduce it and render it.

    Flow:
    1. Resolve the project (when one was named).
    2. Fetch a single page starting at ``--next``.
    3. Sort, and keep one deployment per project for scope-wide listings.
    4. Render the table, URLs and the continuation hint.
    """
    from deploy_ls.cli.render import continuation_hint, print_table, write_urls
    from deploy_ls.cli.spinner import FetchSpinner

    start = time.monotonic()
    project: Project | None = None

    async with _build_provider(settings) as provider:
        with FetchSpinner(f"Fetching deployments in [bold]{escape(settings.scope_name)}[/bold]"):
            if options.project is not None:
                project = await provider.get_project(options.project)
            query = ListingQuery(
                limit=options.limit,
                until=options.until,
                project_id=project.id if project is not None else None,
                target=options.target,
                meta=options.meta,
            )
            result = await PaginationFetcher(provider).fetch(query)

    took = elapsed((time.monotonic() - start) * 1000)

    if not result:
        console.log("No deployments found.")
        return exit_codes.SUCCESS

    deployments = reduce_listing(
        result.deployments,
        ReductionPolicy(group_by_owner_app=project is None),
    )
    logger.debug("Reduced %d deployments to %d rows", len(result), len(deployments))
    rows = format_rows(deployments, now_ms=_now_ms())

    title = "Production deployments" if options.target == "production" else "Deployments"
    if project is not None:
        console.log(
            f"{title} for [bold]{escape(project.name)}[/bold] under "
            f"[bold]{escape(settings.scope_name)}[/bold] [dim]{took}[/dim]",
        )
    else:
        console.log(f"{title} under [bold]{escape(settings.scope_name)}[/bold] [dim]{took}[/dim]")
        console.log(
            f"To list deployments for a project, run `{PROG} \\[project]`.",
            soft_wrap=True,
        )

    print_table(rows)

    if not sys.stdout.isatty():
        write_urls(rows)

    if result.is_full and result.next_cursor is not None:
        command = continuation_hint(
            prog=PROG,
            project=project.name if project is not None else None,
            parsed=parsed,
            next_cursor=result.next_cursor,
            exclude=set(DEPRECATED_REPLACEMENTS),
        )
        console.log(f"To display the next page, run `{escape(command)}`", soft_wrap=True)

    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the deploy-ls CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    spec = compile_flags_specification(LIST_COMMAND.options)
    parsed = parse_arguments(sys.argv[1:] if argv is None else argv, spec)

    if parsed.get("--version"):
        print(f"{PROG} {__version__}")
        return exit_codes.SUCCESS

    parsed = _apply_deprecations(parsed)

    if len(parsed.args) > 1:
        raise ValidationError(
            f"`{PROG} [project]` accepts at most one argument",
            hint=f"Run `{PROG} --help` for usage.",
        )

    if parsed.get("--help"):
        print(format_help(spec, LIST_COMMAND), file=sys.stderr)
        return exit_codes.HELP_REQUESTED

    settings = get_settings()
    settings.setup_logging(debug=bool(parsed.get("--debug", False)))

    options = _resolve_options(parsed)
    logger.debug("Listing options: %s", options)

    if options.project is None and not options.auto_confirm:
        if not _confirm_scope_wide_listing(settings):
            console.log("Canceled.")
            return exit_codes.SUCCESS

    return asyncio.run(_run_listing(options, parsed, settings))


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except DeployLsError as exc:
        console.error(str(exc), hint=exc.hint)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
