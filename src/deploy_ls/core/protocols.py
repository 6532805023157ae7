"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Protocol

from deploy_ls.core.models import DeploymentPage, ListingQuery, Project


class DeploymentsProvider(Protocol):
    """Contract for deployment listing backends.

    Any object that implements the coroutines below with the correct
    signatures satisfies this protocol structurally (no explicit
    inheritance required).
    """

    async def fetch_page(self, query: ListingQuery) -> DeploymentPage:
        """Fetch the single page of deployments described by *query*.

        Implementations must map all backend-specific exceptions to
        :class:`~deploy_ls.exceptions.DeployLsError` subclasses.

        Raises
        ------
        AuthenticationError
            When the backend rejects the credentials.
        ApiError
            For any other error status.
        TransportError
            When no response was received (network failure, timeout).
        """
        ...  # pragma: no cover

    async def get_project(self, name_or_id: str) -> Project:
        """Look up a project by name or id.

        Raises
        ------
        ProjectNotFoundError
            When no such project exists.
        """
        ...  # pragma: no cover
