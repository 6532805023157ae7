"""Raw API payload → domain-model parsers (pure).

The listing endpoint returns loosely typed JSON.  Only the fields this
tool consumes are read; anything else is ignored.
"""

from __future__ import annotations

from typing import Any

from deploy_ls.core.models import Deployment, DeploymentPage, DeploymentTarget, Project


def _optional_int(value: object) -> int | None:
    """Convert a JSON number to ``int``; ``None`` for anything else."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    return None


def parse_target(raw: object) -> DeploymentTarget:
    # The API reports ``null`` for preview deployments.
    if raw == DeploymentTarget.PRODUCTION.value:
        return DeploymentTarget.PRODUCTION
    return DeploymentTarget.PREVIEW


def parse_deployment(raw: dict[str, Any]) -> Deployment:
    """Convert one raw deployment dict into a :class:`Deployment`."""
    created_at = _optional_int(raw.get("createdAt"))
    if created_at is None:
        created_at = _optional_int(raw.get("created")) or 0

    creator = raw.get("creator")
    creator_name: str | None = None
    if isinstance(creator, dict) and isinstance(creator.get("username"), str):
        creator_name = creator["username"]

    return Deployment(
        id=str(raw.get("uid") or raw.get("id") or ""),
        url=str(raw.get("url", "")),
        created_at=created_at,
        state=str(raw.get("state") or raw.get("readyState") or ""),
        target=parse_target(raw.get("target")),
        owner_app=str(raw.get("name", "")),
        building_at=_optional_int(raw.get("buildingAt")),
        ready=_optional_int(raw.get("ready")),
        creator_name=creator_name,
    )


def parse_page(payload: dict[str, Any]) -> DeploymentPage:
    """Convert a listing response body into a :class:`DeploymentPage`."""
    raw_deployments: object = payload.get("deployments")
    if not isinstance(raw_deployments, list):
        raw_deployments = []
    deployments = tuple(
        parse_deployment(entry) for entry in raw_deployments if isinstance(entry, dict)
    )

    pagination = payload.get("pagination")
    if not isinstance(pagination, dict):
        pagination = {}
    count = _optional_int(pagination.get("count"))

    return DeploymentPage(
        deployments=deployments,
        next_cursor=_optional_int(pagination.get("next")),
        count=count if count is not None else len(deployments),
    )


def parse_project(payload: dict[str, Any]) -> Project:
    return Project(id=str(payload.get("id", "")), name=str(payload.get("name", "")))
