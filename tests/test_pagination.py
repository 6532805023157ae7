"""Tests for PaginationFetcher (core/pagination.py).

The :class:`DeploymentsProvider` dependency is faked — no network.
These tests verify:

* Single-page mode fetches exactly one page
* Exhaustive mode follows ``next_cursor`` until a short page
* Cursor threading from page to page
* Exception propagation and wrapping
"""

from __future__ import annotations

import asyncio

import pytest

from deploy_ls.core.models import (
    Deployment,
    DeploymentPage,
    DeploymentTarget,
    ListingQuery,
    Project,
)
from deploy_ls.core.pagination import PaginationFetcher, PaginationMode
from deploy_ls.exceptions import ApiError, FetchFailedError, TransportError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _dep(created_at: int, *, owner: str = "app") -> Deployment:
    return Deployment(
        id=f"dpl_{created_at}",
        url=f"{owner}-{created_at}.example.app",
        created_at=created_at,
        state="READY",
        target=DeploymentTarget.PREVIEW,
        owner_app=owner,
    )


def _page(created: list[int], next_cursor: int | None) -> DeploymentPage:
    deployments = tuple(_dep(ts) for ts in created)
    return DeploymentPage(
        deployments=deployments,
        next_cursor=next_cursor,
        count=len(deployments),
    )


class _FakeProvider:
    """Returns scripted pages (or raises scripted errors) in order."""

    def __init__(self, pages: list[DeploymentPage | Exception]) -> None:
        self._pages = list(pages)
        self.queries: list[ListingQuery] = []

    async def fetch_page(self, query: ListingQuery) -> DeploymentPage:
        self.queries.append(query)
        item = self._pages.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def get_project(self, name_or_id: str) -> Project:  # pragma: no cover
        return Project(id=name_or_id, name=name_or_id)


def _fetch(
    provider: _FakeProvider,
    query: ListingQuery,
    mode: PaginationMode = PaginationMode.SINGLE_PAGE,
):
    return asyncio.run(PaginationFetcher(provider).fetch(query, mode=mode))


# ---------------------------------------------------------------------------
# Single page
# ---------------------------------------------------------------------------

class TestSinglePage:
    def test_fetches_exactly_one_page(self) -> None:
        provider = _FakeProvider([_page([5, 4], 4), _page([3], None)])
        result = _fetch(provider, ListingQuery(limit=2))
        assert len(provider.queries) == 1
        assert [d.created_at for d in result.deployments] == [5, 4]
        assert result.pages == 1

    def test_full_page_reports_continuation(self) -> None:
        provider = _FakeProvider([_page([5, 4], 4)])
        result = _fetch(provider, ListingQuery(limit=2))
        assert result.is_full
        assert result.next_cursor == 4

    def test_short_page_is_not_full(self) -> None:
        provider = _FakeProvider([_page([5], None)])
        result = _fetch(provider, ListingQuery(limit=2))
        assert not result.is_full

    def test_first_request_omits_until(self) -> None:
        provider = _FakeProvider([_page([], None)])
        _fetch(provider, ListingQuery(limit=20))
        assert provider.queries[0].until is None

    def test_explicit_starting_cursor_is_sent(self) -> None:
        provider = _FakeProvider([_page([], None)])
        _fetch(provider, ListingQuery(limit=20, until=1584722256178))
        assert provider.queries[0].until == 1584722256178

    def test_empty_page_is_not_an_error(self) -> None:
        provider = _FakeProvider([_page([], None)])
        result = _fetch(provider, ListingQuery())
        assert len(result) == 0
        assert not result


# ---------------------------------------------------------------------------
# Exhaustive
# ---------------------------------------------------------------------------

class TestExhaustive:
    def test_accumulates_full_pages_then_short_page(self) -> None:
        provider = _FakeProvider(
            [_page([9, 8], 8), _page([7, 6], 6), _page([5], None)],
        )
        result = _fetch(provider, ListingQuery(limit=2), PaginationMode.EXHAUSTIVE)
        assert [d.created_at for d in result.deployments] == [9, 8, 7, 6, 5]
        assert result.pages == 3

    def test_each_request_uses_previous_next_cursor(self) -> None:
        provider = _FakeProvider(
            [_page([9, 8], 8), _page([7, 6], 6), _page([], None)],
        )
        _fetch(provider, ListingQuery(limit=2), PaginationMode.EXHAUSTIVE)
        assert [q.until for q in provider.queries] == [None, 8, 6]

    def test_stops_after_first_short_page(self) -> None:
        provider = _FakeProvider([_page([9], None), _page([8], None)])
        result = _fetch(provider, ListingQuery(limit=2), PaginationMode.EXHAUSTIVE)
        assert len(provider.queries) == 1
        assert result.pages == 1

    def test_stops_when_cursor_missing(self) -> None:
        provider = _FakeProvider([_page([9, 8], None), _page([7], None)])
        result = _fetch(provider, ListingQuery(limit=2), PaginationMode.EXHAUSTIVE)
        assert len(provider.queries) == 1
        assert len(result) == 2

    def test_stops_when_cursor_does_not_advance(self) -> None:
        provider = _FakeProvider([_page([9, 8], 100), _page([9, 8], 100)])
        _fetch(provider, ListingQuery(limit=2, until=100), PaginationMode.EXHAUSTIVE)
        assert len(provider.queries) == 1

    def test_filters_carried_to_every_page(self) -> None:
        provider = _FakeProvider([_page([9, 8], 8), _page([], None)])
        query = ListingQuery(limit=2, project_id="prj_1", target="production", meta={"k": "v"})
        _fetch(provider, query, PaginationMode.EXHAUSTIVE)
        second = provider.queries[1]
        assert second.project_id == "prj_1"
        assert second.target == "production"
        assert dict(second.meta) == {"k": "v"}


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TestErrors:
    def test_typed_error_propagates_unchanged(self) -> None:
        error = ApiError("boom", status_code=500)
        provider = _FakeProvider([error])
        with pytest.raises(ApiError) as exc_info:
            _fetch(provider, ListingQuery())
        assert exc_info.value is error

    def test_error_on_later_page_discards_partial_results(self) -> None:
        provider = _FakeProvider([_page([9, 8], 8), TransportError("offline")])
        with pytest.raises(TransportError):
            _fetch(provider, ListingQuery(limit=2), PaginationMode.EXHAUSTIVE)

    def test_unexpected_error_wrapped(self) -> None:
        provider = _FakeProvider([RuntimeError("socket closed")])
        with pytest.raises(FetchFailedError, match="socket closed") as exc_info:
            _fetch(provider, ListingQuery())
        assert isinstance(exc_info.value.__cause__, RuntimeError)
