"""Pure sorting and deduplication of fetched deployments.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic.

Pipeline order (enforced by :func:`reduce_listing`):

1. **Sort** — most recent ``created_at`` first, stable on ties.
2. **Deduplicate** — optionally keep one deployment per owner app.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from deploy_ls.core.models import Deployment


@dataclass(frozen=True, slots=True)
class ReductionPolicy:
    group_by_owner_app: bool = False
    """Keep only the most recent deployment of each project."""


def sort_by_created_at(deployments: Sequence[Deployment]) -> list[Deployment]:
    """Sort most recent first; equal timestamps keep their fetch order."""
    return sorted(deployments, key=lambda dep: dep.created_at, reverse=True)


def filter_unique_apps(deployments: Sequence[Deployment]) -> list[Deployment]:
    """Keep the first deployment seen for every ``owner_app``."""
    seen: set[str] = set()
    result: list[Deployment] = []
    for dep in deployments:
        if dep.owner_app in seen:
            continue
        seen.add(dep.owner_app)
        result.append(dep)
    return result


def reduce_listing(
    deployments: Sequence[Deployment],
    policy: ReductionPolicy,
) -> list[Deployment]:
    """Run the sort → deduplicate pipeline and return a new list."""
    ordered = sort_by_created_at(deployments)
    if policy.group_by_owner_app:
        return filter_unique_apps(ordered)
    return ordered
