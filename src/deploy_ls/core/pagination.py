"""Cursor-based pagination over the deployments listing.

:class:`PaginationFetcher` depends on a
:class:`~deploy_ls.core.protocols.DeploymentsProvider` injected at
construction time and awaits one page at a time, so records always come
back in fetch order.

Termination
-----------
* ``SINGLE_PAGE`` — stop after the first page.  The caller surfaces the
  page's ``next_cursor`` so the user can ask for the next page on a
  later invocation.
* ``EXHAUSTIVE`` — keep following ``next_cursor`` until a page comes
  back with fewer records than the query's ``limit``.
"""

from __future__ import annotations

import logging
from enum import Enum

from deploy_ls.core.models import Deployment, DeploymentPage, FetchResult, ListingQuery
from deploy_ls.core.protocols import DeploymentsProvider
from deploy_ls.exceptions import DeployLsError, FetchFailedError

logger = logging.getLogger(__name__)


class PaginationMode(Enum):
    SINGLE_PAGE = "single"
    EXHAUSTIVE = "all"


class PaginationFetcher:
    """Drives the page-by-page fetch loop.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`DeploymentsProvider` protocol.
    """

    def __init__(self, provider: DeploymentsProvider) -> None:
        self._provider: DeploymentsProvider = provider

    async def fetch(
        self,
        query: ListingQuery,
        *,
        mode: PaginationMode = PaginationMode.SINGLE_PAGE,
    ) -> FetchResult:
        """Fetch pages starting at ``query.until`` and concatenate them.

        Raises
        ------
        DeployLsError
            Whatever the provider raised, unchanged.
        FetchFailedError
            If the provider failed with a non-``DeployLsError`` exception.
        """
        deployments: list[Deployment] = []
        current = query
        pages = 0

        while True:
            page = await self._fetch_page(current)
            pages += 1
            deployments.extend(page.deployments)
            logger.debug(
                "Fetched page %d: %d deployments (until=%s, next=%s)",
                pages,
                len(page),
                current.until,
                page.next_cursor,
            )

            if mode is PaginationMode.SINGLE_PAGE:
                break
            if len(page) < query.limit:
                break
            if page.next_cursor is None or page.next_cursor == current.until:
                logger.debug("Cursor did not advance; stopping after %d pages", pages)
                break
            current = current.with_cursor(page.next_cursor)

        return FetchResult(
            deployments=tuple(deployments),
            next_cursor=page.next_cursor,
            last_page_count=page.count,
            pages=pages,
            limit=query.limit,
        )

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    async def _fetch_page(self, query: ListingQuery) -> DeploymentPage:
        """Call the provider and ensure only our exceptions escape."""
        try:
            return await self._provider.fetch_page(query)
        except DeployLsError:
            raise
        except Exception as exc:
            raise FetchFailedError(
                f"Unexpected error while fetching deployments: {exc}",
            ) from exc
