"""PyGithub backed implementation of :class:`~gh_repo_manager.core.protocols.RepositoryProvider`.

This module is the **only** place in the codebase that imports
``github`` (PyGithub).  All PyGithub and requests exceptions are caught
here and re-raised as typed
:class:`~gh_repo_manager.exceptions.GhRepoManagerError` subclasses —
nothing raw escapes the infrastructure boundary.

Pagination is delegated to PyGithub's ``PaginatedList``: iterating one
follows every page, so listings are always complete.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from gh_repo_manager.exceptions import (
    TOKEN_SCOPES_HINT,
    AuthenticationError,
    EnvironmentError,
    GhRepoManagerError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    RemoteError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _import_github() -> Any:
    """Import PyGithub lazily so ``help``/``--version`` work without it."""
    try:
        import github
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "PyGithub is not installed. Install with: pip install PyGithub",
        ) from exc
    return github


class GitHubProvider:
    """Concrete :class:`RepositoryProvider` backed by PyGithub.

    Usage::

        provider = GitHubProvider(token="ghp_...")
        login = provider.authenticated_login()

    Parameters
    ----------
    token:
        Personal access token.
    per_page:
        Page size used for every paginated listing.
    client:
        Pre-built ``github.Github`` instance (tests inject a mock here).
    """

    def __init__(self, token: str, *, per_page: int = 100, client: Any = None) -> None:
        self._token: str = token
        self._per_page: int = per_page
        self._client: Any = client

    @property
    def _gh(self) -> Any:
        if self._client is None:
            github = _import_github()
            self._client = github.Github(
                auth=github.Auth.Token(self._token),
                per_page=self._per_page,
            )
        return self._client

    def close(self) -> None:
        """Release the underlying HTTP session (idempotent)."""
        if self._client is not None:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def authenticated_login(self) -> str:
        with self._translate("resolve the authenticated user"):
            return str(self._gh.get_user().login)

    def list_repositories(self, *, visibility: str = "all") -> list[dict[str, Any]]:
        with self._translate("list repositories"):
            repos = self._gh.get_user().get_repos(
                visibility=visibility,
                sort="updated",
                direction="desc",
            )
            payloads = [_repository_payload(repo) for repo in repos]
        logger.debug("Fetched %d repositories (visibility=%s)", len(payloads), visibility)
        return payloads

    def search_repositories(self, query: str) -> list[dict[str, Any]]:
        with self._translate("search repositories"):
            results = self._gh.search_repositories(query=query, sort="updated")
            return [_repository_payload(repo) for repo in results]

    def get_repository(self, owner: str, name: str) -> dict[str, Any]:
        with self._translate(f"get repository {owner}/{name}"):
            repo = self._gh.get_repo(f"{owner}/{name}")
            return _repository_payload(repo, detailed=True)

    def delete_repository(self, owner: str, name: str) -> None:
        with self._translate(f"delete repository {owner}/{name}"):
            self._gh.get_repo(f"{owner}/{name}", lazy=True).delete()

    def update_repository(self, owner: str, name: str, **fields: Any) -> dict[str, Any]:
        with self._translate(f"update repository {owner}/{name}"):
            repo = self._gh.get_repo(f"{owner}/{name}")
            repo.edit(**fields)
            return _repository_payload(repo, detailed=True)

    def list_contributors(self, owner: str, name: str) -> list[dict[str, Any]]:
        with self._translate(f"list contributors of {owner}/{name}"):
            repo = self._gh.get_repo(f"{owner}/{name}", lazy=True)
            return [
                {"login": user.login, "contributions": user.contributions}
                for user in repo.get_contributors()
            ]

    def list_languages(self, owner: str, name: str) -> dict[str, int]:
        with self._translate(f"list languages of {owner}/{name}"):
            repo = self._gh.get_repo(f"{owner}/{name}", lazy=True)
            return dict(repo.get_languages())

    def latest_commit(self, owner: str, name: str) -> dict[str, Any] | None:
        """Head commit of the default branch, ``None`` for an empty repository."""
        github = _import_github()
        with self._translate(f"get latest commit of {owner}/{name}"):
            repo = self._gh.get_repo(f"{owner}/{name}")
            try:
                commit = repo.get_branch(repo.default_branch).commit
            except github.UnknownObjectException:
                return None
            author = commit.commit.author
            return {
                "sha": commit.sha,
                "message": commit.commit.message,
                "author": author.name if author is not None else None,
                "date": _isoformat(author.date) if author is not None else None,
            }

    # ------------------------------------------------------------------
    # Exception mapping
    # ------------------------------------------------------------------

    @contextmanager
    def _translate(self, action: str) -> Iterator[None]:
        """Re-raise library exceptions raised inside the block as our own."""
        github = _import_github()
        import requests

        try:
            yield
        except GhRepoManagerError:
            raise
        except github.GithubException as exc:
            raise _map_github_exception(github, exc, action) from exc
        except requests.exceptions.RequestException as exc:
            raise NetworkError(
                f"Failed to {action}: {exc}",
                hint="Check your network connection and try again.",
            ) from exc


def _map_github_exception(github: Any, exc: Any, action: str) -> GhRepoManagerError:
    """Translate a ``GithubException`` by type first, then HTTP status."""
    status: int | None = getattr(exc, "status", None)
    detail = _error_detail(exc)
    message = f"Failed to {action}: {detail}"

    if isinstance(exc, github.BadCredentialsException) or status == 401:
        return AuthenticationError(
            message,
            hint="Your token is invalid or expired. " + TOKEN_SCOPES_HINT,
            status=status,
        )
    if isinstance(exc, github.RateLimitExceededException):
        return RateLimitError(
            message,
            hint="API rate limit exhausted. Wait for the quota to reset.",
            status=status,
        )
    if isinstance(exc, github.UnknownObjectException) or status == 404:
        return NotFoundError(message, status=status)
    if status == 403:
        return PermissionDeniedError(
            message,
            hint=TOKEN_SCOPES_HINT,
            status=status,
        )
    if status == 422:
        return ValidationError(message)
    if status is not None and status >= 500:
        return NetworkError(message, status=status)
    return RemoteError(message, status=status)


def _error_detail(exc: Any) -> str:
    data = getattr(exc, "data", None)
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    status = getattr(exc, "status", None)
    return f"HTTP {status}" if status is not None else str(exc)


# ---------------------------------------------------------------------------
# PyGithub object → payload dict
# ---------------------------------------------------------------------------

def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _repository_payload(repo: Any, *, detailed: bool = False) -> dict[str, Any]:
    """Copy the fields this tool uses out of a PyGithub ``Repository``.

    Only attributes present in listing responses are read, so no lazy
    completion request is triggered per item.
    """
    payload: dict[str, Any] = {
        "id": repo.id,
        "name": repo.name,
        "full_name": repo.full_name,
        "description": repo.description,
        "private": repo.private,
        "archived": repo.archived,
        "fork": repo.fork,
        "language": repo.language,
        "stargazers_count": repo.stargazers_count,
        "forks_count": repo.forks_count,
        "created_at": _isoformat(repo.created_at),
        "updated_at": _isoformat(repo.updated_at),
        "html_url": repo.html_url,
        "clone_url": repo.clone_url,
    }
    if detailed:
        payload.update(
            default_branch=repo.default_branch,
            size=repo.size,
            open_issues_count=repo.open_issues_count,
            topics=list(repo.topics or []),
        )
    return payload
