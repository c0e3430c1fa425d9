"""gh-repo-manager — manage your GitHub repositories from the terminal.

Built on the GitHub REST API (via PyGithub) with a strict layered
architecture.
"""

from gh_repo_manager.version import __version__

__all__: list[str] = ["__version__"]
