"""Protocols (interfaces) consumed by the core layer.

These define the contract that the infrastructure adapter must satisfy.
Core code depends ONLY on these protocols, never on the concrete
PyGithub-backed implementation.
"""

from __future__ import annotations

from typing import Any, Protocol


class RepositoryProvider(Protocol):
    """Contract for GitHub API backends.

    Repository payloads are plain dicts keyed by GitHub REST field names
    (``id``, ``name``, ``full_name``, ``private``, ``archived``, ``fork``,
    ``stargazers_count``, ``forks_count``, ``created_at``, ``updated_at``
    as ISO 8601 strings, ``description``, ``language``, ``topics``,
    ``html_url``, ``clone_url`` and, for single fetches,
    ``default_branch``, ``size`` and ``open_issues_count``).

    Implementations must map all backend-specific exceptions to
    :class:`~gh_repo_manager.exceptions.GhRepoManagerError` subclasses.
    """

    def authenticated_login(self) -> str:
        """Return the login of the token owner.

        Raises
        ------
        AuthenticationError
            When the token is invalid or expired.
        """
        ...  # pragma: no cover

    def list_repositories(self, *, visibility: str = "all") -> list[dict[str, Any]]:
        """Return every repository of the authenticated user, all pages.

        *visibility* is ``"all"``, ``"public"`` or ``"private"`` and is
        applied server-side.
        """
        ...  # pragma: no cover

    def search_repositories(self, query: str) -> list[dict[str, Any]]:
        """Run a repository search with a fully-qualified *query* string."""
        ...  # pragma: no cover

    def get_repository(self, owner: str, name: str) -> dict[str, Any]:
        """Fetch one repository including detail fields.

        Raises
        ------
        NotFoundError
            When the repository does not exist or is not visible.
        """
        ...  # pragma: no cover

    def delete_repository(self, owner: str, name: str) -> None:
        """Permanently delete a repository."""
        ...  # pragma: no cover

    def update_repository(self, owner: str, name: str, **fields: Any) -> dict[str, Any]:
        """Patch repository *fields* (``private``, ``archived``) and return it."""
        ...  # pragma: no cover

    def list_contributors(self, owner: str, name: str) -> list[dict[str, Any]]:
        """Return contributor payloads (``login``, ``contributions``)."""
        ...  # pragma: no cover

    def list_languages(self, owner: str, name: str) -> dict[str, int]:
        """Return a language → bytes mapping."""
        ...  # pragma: no cover

    def latest_commit(self, owner: str, name: str) -> dict[str, Any] | None:
        """Return the newest commit payload, or ``None`` for an empty history.

        The payload carries ``sha``, ``message``, ``author`` and ``date``
        (ISO 8601 string).
        """
        ...  # pragma: no cover
