"""Allow ``python -m deploy_ls`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m deploy_ls`` behaves identically to the ``deploy-ls``
console script.
"""

from __future__ import annotations

from deploy_ls.cli.app import cli

if __name__ == "__main__":
    cli()
