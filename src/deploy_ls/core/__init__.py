"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O of its own; the network is reached only
  through an injected :class:`DeploymentsProvider`.
* No imports from ``cli`` or ``infra``.
"""

from deploy_ls.core.flags import compile_flags_specification
from deploy_ls.core.models import (
    Deployment,
    DeploymentPage,
    FetchResult,
    FlagSpecification,
    ListingQuery,
    OptionDescriptor,
    RenderedRow,
    ValueKind,
)
from deploy_ls.core.pagination import PaginationFetcher, PaginationMode
from deploy_ls.core.protocols import DeploymentsProvider
from deploy_ls.core.reducer import ReductionPolicy, reduce_listing

__all__: list[str] = [
    "Deployment",
    "DeploymentPage",
    "DeploymentsProvider",
    "FetchResult",
    "FlagSpecification",
    "ListingQuery",
    "OptionDescriptor",
    "PaginationFetcher",
    "PaginationMode",
    "ReductionPolicy",
    "RenderedRow",
    "ValueKind",
    "compile_flags_specification",
    "reduce_listing",
]
