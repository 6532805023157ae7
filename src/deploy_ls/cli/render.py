"""Rich rendering of the deployments table and follow-up hints.

All display-related logic lives here — no fetching, no sorting.  Rows
arrive already formatted by :mod:`deploy_ls.core.presentation`.
"""

from __future__ import annotations

import shlex
import sys
from collections.abc import Collection, Sequence
from typing import Any

from deploy_ls.cli.console import get_rich_console
from deploy_ls.core.models import ParsedArguments, RenderedRow, StatusClass, StatusLabel
from deploy_ls.core.presentation import HEADERS
from deploy_ls.exceptions import EnvironmentError

CIRCLE: str = "● "

_STATUS_STYLES: dict[StatusClass, str] = {
    StatusClass.IN_PROGRESS: "yellow",
    StatusClass.ERROR: "red",
    StatusClass.SUCCESS: "green",
    StatusClass.NEUTRAL: "white",
    StatusClass.MUTED: "grey50",
}


def _import_rich_table() -> tuple[type[Any], type[Any]]:
    """Import rich ``Table`` and ``Text`` lazily for table rendering."""
    try:
        from rich.table import Table
        from rich.text import Text
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table, Text


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------

def status_cell(label: StatusLabel) -> Any:
    """Build the coloured status cell: a marker glyph, then the text."""
    _, text_class = _import_rich_table()
    style = _STATUS_STYLES[label.status_class]
    if not label.marker:
        return text_class(label.text, style=style)
    cell = text_class()
    cell.append(CIRCLE, style=style)
    cell.append(label.text)
    return cell


def build_table(rows: Sequence[RenderedRow]) -> Any:
    """Return a borderless Rich table with one row per deployment."""
    table_class, text_class = _import_rich_table()
    table = table_class(
        box=None,
        show_header=True,
        header_style="bold cyan",
        show_edge=False,
        pad_edge=False,
        padding=(0, 1),
    )
    # URLs stay whole; narrow terminals shrink the other columns first.
    for header in HEADERS:
        if header == "Deployment":
            table.add_column(header, no_wrap=True)
        else:
            table.add_column(header, overflow="fold")

    for row in rows:
        table.add_row(
            text_class(row.age, style="grey50"),
            row.deployment,
            status_cell(row.status),
            row.environment,
            text_class(row.duration, style="grey50"),
            text_class(row.username, style="grey50"),
        )
    return table


def print_table(rows: Sequence[RenderedRow]) -> None:
    rich_console = get_rich_console()
    rich_console.print()
    rich_console.print(build_table(rows))
    rich_console.print()


def write_urls(rows: Sequence[RenderedRow]) -> None:
    """Write deployment URLs to stdout, one per line, for piping."""
    sys.stdout.write("\n".join(row.deployment for row in rows))
    sys.stdout.write("\n")
    sys.stdout.flush()


# ---------------------------------------------------------------------------
# Continuation hint
# ---------------------------------------------------------------------------

def format_flags(parsed: ParsedArguments, *, exclude: Collection[str] = ()) -> str:
    """Re-serialise parsed flags as a command-line fragment.

    Returns ``""`` when nothing is left after *exclude*, otherwise a
    string with a leading space (``" --limit 2 --prod"``).
    """
    parts: list[str] = []
    for token, value in parsed.flags.items():
        if token in exclude:
            continue
        if isinstance(value, bool):
            if value:
                parts.append(token)
        elif isinstance(value, list):
            for item in value:
                parts.extend((token, shlex.quote(item)))
        else:
            parts.extend((token, shlex.quote(str(value))))
    return f" {' '.join(parts)}" if parts else ""


def continuation_hint(
    *,
    prog: str,
    project: str | None,
    parsed: ParsedArguments,
    next_cursor: int,
    exclude: Collection[str] = (),
) -> str:
    """Build the command line that shows the next page."""
    flags = format_flags(parsed, exclude={"--next", *exclude})
    target = f" {project}" if project else ""
    return f"{prog}{target}{flags} --next {next_cursor}"
