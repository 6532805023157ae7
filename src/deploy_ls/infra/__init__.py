"""Infrastructure layer — external system integration.

This layer wraps all interaction with the remote deployments API.
Every raw httpx exception must be caught here and re-raised as a
:class:`~deploy_ls.exceptions.DeployLsError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from deploy_ls.infra.deployments_api import ApiDeploymentsProvider
from deploy_ls.infra.http_client import build_async_client

__all__: list[str] = [
    "ApiDeploymentsProvider",
    "build_async_client",
]
