"""Core repository service — the typed boundary around the GitHub API.

This is the central service class consumed by the CLI layer.  It
depends on a :class:`~gh_repo_manager.core.protocols.RepositoryProvider`
and a :class:`~gh_repo_manager.core.session.Session` injected at
construction time, keeping the core free of any client-library import.

Guarantees
----------
* No ``print()``, no filesystem access.
* Only :class:`~gh_repo_manager.exceptions.GhRepoManagerError`
  subclasses escape.
* Provider payloads are mapped into the fixed :class:`Repository`
  schema here; unknown fields are dropped, mistyped ones defaulted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any, TypeVar

from gh_repo_manager.core import filters
from gh_repo_manager.core.bulk import OutcomeCallback, apply_to_all
from gh_repo_manager.core.models import (
    AccountSummary,
    BulkResult,
    CommitSummary,
    Repository,
    RepositoryFilter,
    RepositoryStatistics,
)
from gh_repo_manager.core.protocols import RepositoryProvider
from gh_repo_manager.core.session import Session
from gh_repo_manager.exceptions import GhRepoManagerError, RemoteError, ValidationError

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class RepositoryService:
    """Stateless façade over the provider; the session is the only state.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`RepositoryProvider` protocol.
    session:
        Holds the lazily resolved username.  A fresh one is created when
        omitted.
    """

    def __init__(self, provider: RepositoryProvider, session: Session | None = None) -> None:
        self._provider: RepositoryProvider = provider
        self._session: Session = session if session is not None else Session()

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def resolve_username(self) -> str:
        """Return the token owner's login, fetching it at most once.

        Raises
        ------
        AuthenticationError
            If the token is invalid or expired.
        """
        return self._session.resolve_username(
            lambda: self._call(self._provider.authenticated_login),
        )

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def list_repositories(
        self,
        repo_filter: RepositoryFilter = RepositoryFilter.ALL,
    ) -> list[Repository]:
        """List every repository of the authenticated user.

        Visibility filters are applied by the API; lifecycle filters
        (active/archived) are applied locally over the full listing.
        """
        visibility = filters.SERVER_SIDE_VISIBILITY.get(repo_filter)
        if visibility is not None:
            logger.debug("Listing repositories (visibility=%s)", visibility)
            raw = self._call(self._provider.list_repositories, visibility=visibility)
            return self._parse_many(raw)

        logger.debug("Listing repositories, filtering %s locally", repo_filter.value)
        raw = self._call(self._provider.list_repositories, visibility="all")
        return filters.apply_filter(self._parse_many(raw), repo_filter)

    def search_repositories(self, query: str) -> list[Repository]:
        """Search repositories owned by the authenticated user.

        Raises
        ------
        ValidationError
            If *query* is empty after trimming.  No request is made.
        """
        stripped = query.strip()
        if not stripped:
            raise ValidationError("Search query cannot be empty.")
        username = self.resolve_username()
        logger.debug("Searching %r for user %s", stripped, username)
        raw = self._call(self._provider.search_repositories, f"{stripped} user:{username}")
        return self._parse_many(raw)

    def get_repository(self, owner: str, name: str) -> Repository:
        """Fetch one repository with its detail fields.

        Raises
        ------
        NotFoundError
            If the repository does not exist or is not accessible.
        """
        owner, name = self._validate_target(owner, name)
        return self.parse_repository(self._call(self._provider.get_repository, owner, name))

    def get_own_repository(self, name: str) -> Repository:
        """Shortcut for :meth:`get_repository` scoped to the resolved user."""
        return self.get_repository(self.resolve_username(), name)

    def get_repository_statistics(self, owner: str, name: str) -> RepositoryStatistics:
        """Aggregate contributors, languages and the latest commit.

        The three sub-fetches run concurrently.  Any that fails degrades
        to its empty value instead of failing the whole call; an empty
        repository simply has no last commit.
        """
        owner, name = self._validate_target(owner, name)

        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="repo-stats") as pool:
            contributors_future = pool.submit(
                self._tolerant, "contributors", [],
                self._provider.list_contributors, owner, name,
            )
            languages_future = pool.submit(
                self._tolerant, "languages", {},
                self._provider.list_languages, owner, name,
            )
            commit_future = pool.submit(
                self._tolerant, "latest commit", None,
                self._provider.latest_commit, owner, name,
            )
            contributors = contributors_future.result()
            languages = languages_future.result()
            commit = commit_future.result()

        return RepositoryStatistics(
            contributors_count=len(contributors),
            languages=self._parse_languages(languages),
            last_commit=self._parse_commit(commit),
        )

    def account_summary(self) -> AccountSummary:
        """Username plus visibility/lifecycle counts over the full listing."""
        username = self.resolve_username()
        return filters.summarize(username, self.list_repositories())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def delete_repository(self, owner: str, name: str) -> None:
        """Permanently delete a repository.  Irreversible.

        Raises
        ------
        PermissionDeniedError
            If the token lacks the ``delete_repo`` scope.
        NotFoundError
            If the repository does not exist.
        """
        owner, name = self._validate_target(owner, name)
        logger.debug("Deleting %s/%s", owner, name)
        self._call(self._provider.delete_repository, owner, name)

    def update_visibility(self, owner: str, name: str, make_private: bool) -> Repository:
        """Set the private flag.  Setting the current value still round-trips."""
        owner, name = self._validate_target(owner, name)
        logger.debug("Setting %s/%s private=%s", owner, name, make_private)
        raw = self._call(self._provider.update_repository, owner, name, private=make_private)
        return self.parse_repository(raw)

    def set_archived(self, owner: str, name: str, archived: bool) -> Repository:
        """Set the archived flag.  Setting the current value still round-trips."""
        owner, name = self._validate_target(owner, name)
        logger.debug("Setting %s/%s archived=%s", owner, name, archived)
        raw = self._call(self._provider.update_repository, owner, name, archived=archived)
        return self.parse_repository(raw)

    # ------------------------------------------------------------------
    # Bulk mutations
    # ------------------------------------------------------------------
    #
    # Targets are ``owner/name`` or a bare ``name`` owned by the resolved
    # user.  Each target is attempted exactly once, in order.

    def bulk_delete(
        self,
        targets: Iterable[str],
        *,
        on_outcome: OutcomeCallback | None = None,
    ) -> BulkResult[str]:
        """Delete each target; failures are collected, not raised."""

        def _delete(target: str) -> str:
            self.delete_repository(*self._split_target(target))
            return target

        return apply_to_all(targets, _delete, on_outcome=on_outcome)

    def bulk_set_archived(
        self,
        targets: Iterable[str],
        archived: bool,
        *,
        on_outcome: OutcomeCallback | None = None,
    ) -> BulkResult[Repository]:
        return apply_to_all(
            targets,
            lambda target: self.set_archived(*self._split_target(target), archived),
            on_outcome=on_outcome,
        )

    def bulk_update_visibility(
        self,
        targets: Iterable[str],
        make_private: bool,
        *,
        on_outcome: OutcomeCallback | None = None,
    ) -> BulkResult[Repository]:
        return apply_to_all(
            targets,
            lambda target: self.update_visibility(*self._split_target(target), make_private),
            on_outcome=on_outcome,
        )

    def _split_target(self, target: str) -> tuple[str, str]:
        owner, sep, name = target.strip().partition("/")
        if sep:
            return owner, name
        return self.resolve_username(), owner

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _call(func: Callable[..., _T], *args: Any, **kwargs: Any) -> _T:
        """Call the provider and ensure only our exceptions escape."""
        try:
            return func(*args, **kwargs)
        except GhRepoManagerError:
            # Already typed; propagate unchanged.
            raise
        except Exception as exc:
            raise RemoteError(f"Unexpected provider error: {exc}") from exc

    def _tolerant(
        self,
        label: str,
        fallback: _T,
        func: Callable[..., _T],
        *args: Any,
    ) -> _T:
        """Run one statistics sub-fetch, degrading to *fallback* on error."""
        try:
            return self._call(func, *args)
        except GhRepoManagerError as exc:
            logger.debug("Statistics sub-fetch %r failed: %s", label, exc)
            return fallback

    @staticmethod
    def _validate_target(owner: str, name: str) -> tuple[str, str]:
        owner = owner.strip()
        name = name.strip()
        if not owner:
            raise ValidationError("Repository owner must not be empty.")
        if not name:
            raise ValidationError("Repository name must not be empty.")
        return owner, name

    # ------------------------------------------------------------------
    # Raw-dict → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @classmethod
    def _parse_many(cls, raw: Sequence[Any]) -> list[Repository]:
        # Skip malformed entries rather than failing the whole listing.
        return [cls.parse_repository(entry) for entry in raw if isinstance(entry, dict)]

    @staticmethod
    def parse_repository(raw: dict[str, Any]) -> Repository:
        """Convert a provider payload into a :class:`Repository`."""
        raw_topics = raw.get("topics")
        topics: tuple[str, ...] = (
            tuple(str(topic) for topic in raw_topics) if isinstance(raw_topics, list) else ()
        )
        return Repository(
            id=_as_int(raw.get("id")) or 0,
            name=str(raw.get("name") or ""),
            full_name=str(raw.get("full_name") or ""),
            private=raw.get("private") is True,
            archived=raw.get("archived") is True,
            fork=raw.get("fork") is True,
            stargazers_count=_as_int(raw.get("stargazers_count")) or 0,
            forks_count=_as_int(raw.get("forks_count")) or 0,
            created_at=parse_timestamp(raw.get("created_at")),
            updated_at=parse_timestamp(raw.get("updated_at")),
            html_url=str(raw.get("html_url") or ""),
            clone_url=str(raw.get("clone_url") or ""),
            description=_as_text(raw.get("description")),
            language=_as_text(raw.get("language")),
            topics=topics,
            default_branch=_as_text(raw.get("default_branch")),
            size=_as_int(raw.get("size")),
            open_issues_count=_as_int(raw.get("open_issues_count")),
        )

    @staticmethod
    def _parse_languages(raw: object) -> dict[str, int]:
        if not isinstance(raw, dict):
            return {}
        counts = {str(lang): _as_int(size) or 0 for lang, size in raw.items()}
        return dict(sorted(counts.items(), key=lambda item: -item[1]))

    @staticmethod
    def _parse_commit(raw: object) -> CommitSummary | None:
        if not isinstance(raw, dict):
            return None
        message = str(raw.get("message") or "")
        return CommitSummary(
            sha=str(raw.get("sha") or ""),
            message=message.splitlines()[0] if message else "",
            author=_as_text(raw.get("author")),
            date=parse_timestamp(raw.get("date")),
        )


# ---------------------------------------------------------------------------
# Field coercion helpers
# ---------------------------------------------------------------------------

def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO 8601 timestamp (``Z`` suffix accepted), else ``None``."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _as_int(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _as_text(value: object) -> str | None:
    if not isinstance(value, str) or not value:
        return None
    return value
