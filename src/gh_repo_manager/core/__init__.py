"""Repository domain: models, filtering, bulk execution and the service.

Everything remote goes through an injected
:class:`~gh_repo_manager.core.protocols.RepositoryProvider`; this package
never prints and never imports from ``cli`` or ``infra``.
"""

from gh_repo_manager.core.bulk import apply_to_all
from gh_repo_manager.core.models import (
    AccountSummary,
    BulkFailure,
    BulkResult,
    CommitSummary,
    Repository,
    RepositoryFilter,
    RepositoryStatistics,
)
from gh_repo_manager.core.protocols import RepositoryProvider
from gh_repo_manager.core.repository_service import RepositoryService
from gh_repo_manager.core.session import Session

__all__: list[str] = [
    "AccountSummary",
    "BulkFailure",
    "BulkResult",
    "CommitSummary",
    "Repository",
    "RepositoryFilter",
    "RepositoryProvider",
    "RepositoryService",
    "RepositoryStatistics",
    "Session",
    "apply_to_all",
]
