"""Map deployments to display strings.

Pure transforms only: colours are expressed as a
:class:`~deploy_ls.core.models.StatusClass` and turned into terminal
styles by the CLI renderer.
"""

from __future__ import annotations

from collections.abc import Sequence

from deploy_ls.core.models import (
    Deployment,
    DeploymentTarget,
    RenderedRow,
    StatusClass,
    StatusLabel,
)
from deploy_ls.utils.durations import format_ms

HEADERS: tuple[str, ...] = (
    "Age",
    "Deployment",
    "Status",
    "Environment",
    "Duration",
    "Username",
)

_STATE_CLASSES: dict[str, StatusClass] = {
    "INITIALIZING": StatusClass.IN_PROGRESS,
    "BUILDING": StatusClass.IN_PROGRESS,
    "DEPLOYING": StatusClass.IN_PROGRESS,
    "ANALYZING": StatusClass.IN_PROGRESS,
    "ERROR": StatusClass.ERROR,
    "READY": StatusClass.SUCCESS,
    "QUEUED": StatusClass.NEUTRAL,
    "CANCELED": StatusClass.MUTED,
}

UNKNOWN_STATUS = StatusLabel("UNKNOWN", StatusClass.MUTED, marker=False)


def status_label(state: str) -> StatusLabel:
    """Return the label for a deployment *state*.

    Unrecognised states render as ``UNKNOWN`` whatever their text.
    Canceled deployments are shown without a status marker.
    """
    status_class = _STATE_CLASSES.get(state)
    if status_class is None:
        return UNKNOWN_STATUS
    return StatusLabel(
        text=state.title(),
        status_class=status_class,
        marker=state != "CANCELED",
    )


def environment_label(target: DeploymentTarget) -> str:
    return "Production" if target is DeploymentTarget.PRODUCTION else "Preview"


def deployment_duration(dep: Deployment) -> str:
    """Build time between ``building_at`` and ``ready``.

    ``"?"`` when either timestamp is missing, ``"--"`` when both are
    present but equal.
    """
    if dep.ready is None or dep.building_at is None:
        return "?"
    span = dep.ready - dep.building_at
    if span == 0:
        return "--"
    return format_ms(span)


def deployment_age(dep: Deployment, *, now_ms: int) -> str:
    return format_ms(now_ms - dep.created_at)


def deployment_url(dep: Deployment) -> str:
    return f"https://{dep.url}"


def format_row(dep: Deployment, *, now_ms: int) -> RenderedRow:
    return RenderedRow(
        age=deployment_age(dep, now_ms=now_ms),
        deployment=deployment_url(dep),
        status=status_label(dep.state),
        environment=environment_label(dep.target),
        duration=deployment_duration(dep),
        username=dep.creator_name or "",
    )


def format_rows(
    deployments: Sequence[Deployment],
    *,
    now_ms: int,
) -> list[RenderedRow]:
    """Format every deployment against the same *now_ms* reference."""
    return [format_row(dep, now_ms=now_ms) for dep in deployments]
