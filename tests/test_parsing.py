"""Tests for raw payload parsing (core/parsing.py)."""

from __future__ import annotations

from typing import Any

from deploy_ls.core.models import DeploymentTarget
from deploy_ls.core.parsing import parse_deployment, parse_page, parse_project


def _raw_deployment(**overrides: Any) -> dict[str, Any]:
    """Factory for a raw deployment dict matching the API shape."""
    raw: dict[str, Any] = {
        "uid": "dpl_abc",
        "name": "my-app",
        "url": "my-app-abc.example.app",
        "created": 1_700_000_000_000,
        "createdAt": 1_700_000_000_001,
        "buildingAt": 1_700_000_001_000,
        "ready": 1_700_000_031_000,
        "state": "READY",
        "target": "production",
        "creator": {"uid": "u_1", "username": "octocat"},
    }
    raw.update(overrides)
    return raw


class TestParseDeployment:
    def test_parses_all_fields(self) -> None:
        dep = parse_deployment(_raw_deployment())
        assert dep.id == "dpl_abc"
        assert dep.owner_app == "my-app"
        assert dep.url == "my-app-abc.example.app"
        assert dep.created_at == 1_700_000_000_001
        assert dep.building_at == 1_700_000_001_000
        assert dep.ready == 1_700_000_031_000
        assert dep.state == "READY"
        assert dep.target is DeploymentTarget.PRODUCTION
        assert dep.creator_name == "octocat"

    def test_null_target_is_preview(self) -> None:
        assert parse_deployment(_raw_deployment(target=None)).target is DeploymentTarget.PREVIEW

    def test_created_fallback(self) -> None:
        raw = _raw_deployment()
        del raw["createdAt"]
        assert parse_deployment(raw).created_at == 1_700_000_000_000

    def test_ready_state_fallback(self) -> None:
        raw = _raw_deployment(readyState="BUILDING")
        del raw["state"]
        assert parse_deployment(raw).state == "BUILDING"

    def test_missing_optional_fields(self) -> None:
        raw = _raw_deployment()
        for key in ("buildingAt", "ready", "creator"):
            del raw[key]
        dep = parse_deployment(raw)
        assert dep.building_at is None
        assert dep.ready is None
        assert dep.creator_name is None

    def test_malformed_creator_ignored(self) -> None:
        assert parse_deployment(_raw_deployment(creator="octocat")).creator_name is None


class TestParsePage:
    def test_page_with_pagination(self) -> None:
        page = parse_page(
            {
                "deployments": [_raw_deployment(), _raw_deployment(uid="dpl_2")],
                "pagination": {"count": 2, "next": 1_699_999_999_999, "prev": None},
            },
        )
        assert [d.id for d in page.deployments] == ["dpl_abc", "dpl_2"]
        assert page.count == 2
        assert page.next_cursor == 1_699_999_999_999

    def test_missing_pagination_counts_records(self) -> None:
        page = parse_page({"deployments": [_raw_deployment()]})
        assert page.count == 1
        assert page.next_cursor is None

    def test_skips_malformed_entries(self) -> None:
        page = parse_page({"deployments": [_raw_deployment(), "junk", 3]})
        assert len(page) == 1

    def test_missing_deployments(self) -> None:
        page = parse_page({})
        assert len(page) == 0
        assert page.count == 0


class TestParseProject:
    def test_fields(self) -> None:
        project = parse_project({"id": "prj_1", "name": "my-app", "framework": "nextjs"})
        assert project.id == "prj_1"
        assert project.name == "my-app"
