"""Pure repository filtering, partitioning and summary logic.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic, and trivially unit-testable.
Input order is preserved by every filter.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from gh_repo_manager.core.models import AccountSummary, Repository, RepositoryFilter

Predicate = Callable[[Repository], bool]


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def is_archived(repo: Repository) -> bool:
    return repo.archived


def is_active(repo: Repository) -> bool:
    return not repo.archived


def is_private(repo: Repository) -> bool:
    return repo.private


def is_public(repo: Repository) -> bool:
    return not repo.private


_PREDICATES: dict[RepositoryFilter, Predicate] = {
    RepositoryFilter.ALL: lambda _repo: True,
    RepositoryFilter.ACTIVE: is_active,
    RepositoryFilter.ARCHIVED: is_archived,
    RepositoryFilter.PUBLIC: is_public,
    RepositoryFilter.PRIVATE: is_private,
}

SERVER_SIDE_VISIBILITY: dict[RepositoryFilter, str] = {
    RepositoryFilter.ALL: "all",
    RepositoryFilter.PUBLIC: "public",
    RepositoryFilter.PRIVATE: "private",
}
"""Filters the listing endpoint can apply itself, mapped to its
``visibility`` parameter.  Anything absent here is filtered locally."""


def predicate_for(repo_filter: RepositoryFilter) -> Predicate:
    """Return the client-side predicate equivalent to *repo_filter*."""
    return _PREDICATES[repo_filter]


# ---------------------------------------------------------------------------
# Filtering and partitioning
# ---------------------------------------------------------------------------

def apply_filter(
    repos: Iterable[Repository],
    repo_filter: RepositoryFilter,
) -> list[Repository]:
    """Client-side filtering of a full listing."""
    predicate = predicate_for(repo_filter)
    return [repo for repo in repos if predicate(repo)]


def partition(
    repos: Iterable[Repository],
    predicate: Predicate,
) -> tuple[list[Repository], list[Repository]]:
    """Split *repos* into ``(matching, not_matching)``."""
    matching: list[Repository] = []
    rest: list[Repository] = []
    for repo in repos:
        (matching if predicate(repo) else rest).append(repo)
    return matching, rest


def partition_by_archived(
    repos: Iterable[Repository],
) -> tuple[list[Repository], list[Repository]]:
    """Return ``(active, archived)``."""
    active, archived = partition(repos, is_active)
    return active, archived


def partition_by_visibility(
    repos: Iterable[Repository],
) -> tuple[list[Repository], list[Repository]]:
    """Return ``(public, private)``."""
    public, private = partition(repos, is_public)
    return public, private


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

def most_popular(repos: Sequence[Repository], limit: int = 5) -> list[Repository]:
    """Top *limit* repositories by stars; ties keep listing order."""
    return sorted(repos, key=lambda repo: -repo.stargazers_count)[:limit]


def summarize(username: str, repos: Sequence[Repository]) -> AccountSummary:
    """Compute the account-level counts shown by ``info``."""
    public, private = partition_by_visibility(repos)
    return AccountSummary(
        username=username,
        total=len(repos),
        public=len(public),
        private=len(private),
        archived=sum(1 for repo in repos if repo.archived),
        forks=sum(1 for repo in repos if repo.fork),
        total_stars=sum(repo.stargazers_count for repo in repos),
        total_forks=sum(repo.forks_count for repo in repos),
        most_popular=tuple(most_popular(repos)),
    )
