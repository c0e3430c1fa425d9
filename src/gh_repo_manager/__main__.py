"""Allow ``python -m gh_repo_manager`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m gh_repo_manager`` behaves identically to the
``gh-repo-manager`` console script.
"""

from __future__ import annotations

from gh_repo_manager.cli.app import cli

if __name__ == "__main__":
    cli()
