"""Rich-based spinner shown on stderr while pages are being fetched.

Design
------
* :class:`FetchSpinner` wraps a Rich :class:`~rich.status.Status`.
* Usable as a context manager; :meth:`stop` is idempotent so the
  spinner can be cleared before the table is printed.
* No ``print()`` — Rich handles all rendering.
"""

from __future__ import annotations

from typing import Any

from deploy_ls.cli.console import get_rich_console


class FetchSpinner:
    """Transient spinner for the fetch phase.

    Usage::

        with FetchSpinner("Fetching deployments in my-team"):
            result = await fetcher.fetch(query)
    """

    def __init__(self, message: str) -> None:
        self._status: Any = get_rich_console().status(message, spinner="dots")
        self._started: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> FetchSpinner:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        if not self._started:
            self._status.start()
            self._started = True

    def stop(self) -> None:
        """Stop and erase the spinner (idempotent)."""
        if self._started:
            self._status.stop()
            self._started = False
