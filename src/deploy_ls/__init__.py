"""deploy-ls — list deployments for a project from the command line.

Compiles declarative flag metadata, pages through the remote deployments
listing and renders one deduplicated table per invocation.
"""

from deploy_ls.version import __version__

__all__: list[str] = ["__version__"]
