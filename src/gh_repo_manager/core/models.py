"""Domain models for gh-repo-manager.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and trivial derived properties.  They
carry zero I/O and no dependency on the GitHub client library.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Repository:
    """A GitHub repository as observed by this tool.

    Detail fields (``default_branch``, ``size``, ``open_issues_count``)
    are only populated by a single-item fetch; listings leave them
    ``None``.
    """

    id: int
    """Numeric repository id.  Immutable."""

    name: str
    """Short repository name (e.g. ``my-project``)."""

    full_name: str
    """``owner/name``.  Immutable."""

    private: bool
    archived: bool
    fork: bool

    stargazers_count: int
    forks_count: int

    created_at: datetime | None
    updated_at: datetime | None

    html_url: str
    clone_url: str

    description: str | None = None
    language: str | None = None
    topics: tuple[str, ...] = ()

    default_branch: str | None = None
    size: int | None = None
    """Repository size in kilobytes."""

    open_issues_count: int | None = None

    @property
    def owner(self) -> str:
        """Login of the owner, derived from :attr:`full_name`."""
        return self.full_name.split("/", 1)[0] if "/" in self.full_name else ""

    @property
    def visibility(self) -> str:
        return "Private" if self.private else "Public"


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommitSummary:
    """Most recent commit on the default branch."""

    sha: str
    message: str
    """First line of the commit message."""

    author: str | None
    date: datetime | None


@dataclass(frozen=True, slots=True)
class RepositoryStatistics:
    """Aggregated statistics for one repository.

    Each field comes from an independent sub-fetch; a failed sub-fetch
    leaves its field at the empty value.
    """

    contributors_count: int = 0
    languages: Mapping[str, int] = field(default_factory=dict)
    """Language name → bytes of code, largest first."""

    last_commit: CommitSummary | None = None


# ---------------------------------------------------------------------------
# Bulk results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BulkFailure:
    """One failed item of a bulk operation."""

    identifier: str
    message: str


@dataclass(frozen=True, slots=True)
class BulkResult(Generic[T]):
    """Partition of a bulk operation's targets into successes and failures.

    ``len(succeeded) + len(failed)`` always equals the number of
    targets; both tuples preserve input order.
    """

    succeeded: tuple[T, ...] = ()
    failed: tuple[BulkFailure, ...] = ()

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def success_rate(self) -> int:
        """Percentage of successful items, rounded; ``0`` when empty."""
        if self.total == 0:
            return 0
        return round(len(self.succeeded) / self.total * 100)


# ---------------------------------------------------------------------------
# Account summary
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AccountSummary:
    """Counts shown by the ``info`` command."""

    username: str
    total: int
    public: int
    private: int
    archived: int
    forks: int
    total_stars: int
    total_forks: int
    most_popular: tuple[Repository, ...] = ()


# ---------------------------------------------------------------------------
# Listing filter
# ---------------------------------------------------------------------------

class RepositoryFilter(enum.Enum):
    """Sub-collections that can be derived from a full listing."""

    ALL = "all"
    ACTIVE = "active"
    ARCHIVED = "archived"
    PUBLIC = "public"
    PRIVATE = "private"
