"""Adapters to the outside world; today only the GitHub REST API.

PyGithub and requests are imported here and nowhere else.  Their
exceptions never cross this package: each is translated into a
:class:`~gh_repo_manager.exceptions.GhRepoManagerError` subclass.
Nothing in this package prints.
"""

from gh_repo_manager.infra.github_provider import GitHubProvider

__all__: list[str] = [
    "GitHubProvider",
]
