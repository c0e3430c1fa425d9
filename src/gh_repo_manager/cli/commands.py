"""User-facing commands: pre-fetch → select → confirm → call → render.

Every public method of :class:`RepositoryCommands` is a command
boundary.  Remote and input errors, an expired token included, are
rendered there and the command still returns
:data:`~gh_repo_manager.cli.exit_codes.SUCCESS`.  Only a missing UI
dependency escapes to the top-level boundary; credentials are checked
once at startup, before any command runs.

Commands hold no state of their own and can be re-entered freely from
the interactive menu.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from gh_repo_manager.cli import display, exit_codes, prompts
from gh_repo_manager.cli.console import console
from gh_repo_manager.cli.progress import BulkProgress
from gh_repo_manager.core import filters
from gh_repo_manager.core.bulk import OutcomeCallback
from gh_repo_manager.core.models import BulkResult, Repository, RepositoryFilter
from gh_repo_manager.core.repository_service import RepositoryService
from gh_repo_manager.exceptions import (
    EnvironmentError,
    GhRepoManagerError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_F = TypeVar("_F", bound=Callable[..., int])

BulkRunner = Callable[[list[str], OutcomeCallback], BulkResult[Any]]


def command_boundary(func: _F) -> _F:
    """Render recoverable errors instead of letting them escape."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> int:
        try:
            return func(*args, **kwargs)
        except EnvironmentError:
            raise
        except GhRepoManagerError as exc:
            logger.debug("%s failed: %s", func.__name__, exc)
            display.error(exc)
            return exit_codes.SUCCESS

    return wrapper  # type: ignore[return-value]


class RepositoryCommands:
    """Command implementations shared by the argument parser and the menu.

    Parameters
    ----------
    service:
        The repository service bound to the current session.
    """

    def __init__(self, service: RepositoryService) -> None:
        self._service: RepositoryService = service

    # ------------------------------------------------------------------
    # Read-only commands
    # ------------------------------------------------------------------

    @command_boundary
    def list_repositories(self, details: bool = False) -> int:
        with console.status("Fetching repositories..."):
            repos = self._service.list_repositories()
        display.render_repository_list(repos, details=details)
        return exit_codes.SUCCESS

    @command_boundary
    def search_repositories(self, query: str | None = None) -> int:
        """Search owned repositories, re-prompting on an empty query."""
        while True:
            if query is None:
                query = prompts.ask_search_query()
                if query is None:
                    display.info("Search cancelled.")
                    return exit_codes.SUCCESS
            try:
                with console.status(f'Searching for repositories matching "{query}"...'):
                    repos = self._service.search_repositories(query)
            except ValidationError as exc:
                display.error(exc)
                query = None
                continue
            break

        console.print(f'[green]Found {display.pluralize(len(repos))} matching "{query.strip()}"[/green]')
        display.render_repository_list(repos)
        return exit_codes.SUCCESS

    @command_boundary
    def view_repository_details(self, name: str | None = None) -> int:
        repo = self._pick_or_fetch(
            name,
            RepositoryFilter.ALL,
            "Select a repository to view details:",
            "No repositories found.",
        )
        if repo is None:
            return exit_codes.SUCCESS

        with console.status("Fetching repository details..."):
            detailed = self._service.get_repository(repo.owner, repo.name)
            stats = self._service.get_repository_statistics(repo.owner, repo.name)

        display.render_repository(detailed, details=True)
        display.render_statistics(stats)
        return exit_codes.SUCCESS

    @command_boundary
    def show_account_info(self) -> int:
        with console.status("Fetching user information..."):
            summary = self._service.account_summary()
        display.render_account_summary(summary)
        return exit_codes.SUCCESS

    @command_boundary
    def show_archive_status(self) -> int:
        with console.status("Fetching all repositories..."):
            repos = self._service.list_repositories()
        active, archived = filters.partition_by_archived(repos)
        display.render_archive_status(active, archived)
        return exit_codes.SUCCESS

    # ------------------------------------------------------------------
    # Single-item mutations
    # ------------------------------------------------------------------

    @command_boundary
    def change_visibility(self, name: str | None = None) -> int:
        repo = self._pick_or_fetch(
            name,
            RepositoryFilter.ALL,
            "Select a repository to change visibility:",
            "No repositories found.",
        )
        if repo is None:
            return exit_codes.SUCCESS

        display.render_repository(repo, details=True)
        current = repo.visibility
        new = "Public" if repo.private else "Private"
        if not prompts.confirm(
            f'Are you sure you want to change "{repo.name}" from {current} to {new}?'
        ):
            display.info("Visibility change cancelled.")
            return exit_codes.SUCCESS

        with console.status(f'Changing "{repo.name}" to {new}...'):
            updated = self._service.update_visibility(repo.owner, repo.name, not repo.private)

        display.success(f'Repository "{repo.name}" visibility changed to {new}.')
        display.render_updated_repository("Updated Repository", updated)
        return exit_codes.SUCCESS

    @command_boundary
    def archive_repository(self, name: str | None = None) -> int:
        return self._toggle_archived(name, archive=True)

    @command_boundary
    def unarchive_repository(self, name: str | None = None) -> int:
        return self._toggle_archived(name, archive=False)

    def _toggle_archived(self, name: str | None, *, archive: bool) -> int:
        verb = "archive" if archive else "unarchive"
        repo = self._pick_or_fetch(
            name,
            RepositoryFilter.ACTIVE if archive else RepositoryFilter.ARCHIVED,
            f"Select a repository to {verb}:",
            "No active repositories found to archive." if archive else "No archived repositories found.",
        )
        if repo is None:
            return exit_codes.SUCCESS

        if repo.archived == archive:
            state = "already archived" if archive else "not archived"
            display.warning(f'Repository "{repo.name}" is {state}.')
            return exit_codes.SUCCESS

        display.render_repository(repo, details=True)
        effect = "This will make it read-only." if archive else "This will make it editable again."
        if not prompts.confirm(
            f'Are you sure you want to {verb} the repository "{repo.name}"? {effect}'
        ):
            display.info(f"Repository {verb}ing cancelled.")
            return exit_codes.SUCCESS

        with console.status(f'{verb.capitalize()}ing repository "{repo.name}"...'):
            updated = self._service.set_archived(repo.owner, repo.name, archive)

        if archive:
            display.success(f'Repository "{repo.name}" has been archived and is now read-only.')
            display.render_updated_repository("Archived Repository", updated)
        else:
            display.success(f'Repository "{repo.name}" has been unarchived and is now editable.')
            display.render_updated_repository("Unarchived Repository", updated)
        return exit_codes.SUCCESS

    @command_boundary
    def delete_repository(self, name: str | None = None) -> int:
        repo = self._pick_or_fetch(
            name,
            RepositoryFilter.ALL,
            "Select a repository to delete:",
            "No repositories found.",
        )
        if repo is None:
            return exit_codes.SUCCESS

        display.render_repository(repo, details=True)
        if not prompts.confirm(
            f'Are you sure you want to delete the repository "{repo.name}"? '
            "This action cannot be undone."
        ):
            display.info("Repository deletion cancelled.")
            return exit_codes.SUCCESS

        with console.status(f'Deleting repository "{repo.name}"...'):
            self._service.delete_repository(repo.owner, repo.name)
        display.success(f'Repository "{repo.name}" has been permanently deleted.')
        return exit_codes.SUCCESS

    # ------------------------------------------------------------------
    # Bulk mutations
    # ------------------------------------------------------------------

    @command_boundary
    def bulk_delete(self) -> int:
        """Selected → reviewed → confirmed twice → executed → reported.

        Declining at any step ends the flow without touching GitHub.
        """
        with console.status("Fetching repositories..."):
            repos = self._service.list_repositories()
        if not repos:
            display.warning("No repositories found.")
            return exit_codes.SUCCESS

        console.print("\n[bold red]⚠️  WARNING: Bulk Repository Deletion[/bold red]")
        console.print("[red]This action will permanently delete multiple repositories.[/red]")
        console.print("[red]This action cannot be undone![/red]")
        console.print("[dim]Make sure you have backups if needed.[/dim]")

        selected = self._select_many(repos, "Select repositories to delete (PERMANENT):")
        if not selected:
            return exit_codes.SUCCESS

        display.render_bulk_review(selected, "PERMANENTLY DELETE", "DELETED (PERMANENT)")
        if not prompts.confirm(
            f"Are you sure you want to PERMANENTLY DELETE {display.pluralize(len(selected))}?"
        ):
            display.info("Bulk deletion cancelled.")
            return exit_codes.SUCCESS

        if not prompts.confirm(
            "⚠️  FINAL WARNING: Are you absolutely sure you want to permanently delete "
            f"{display.pluralize(len(selected))}? This action cannot be undone!"
        ):
            display.info("Bulk deletion cancelled at final confirmation.")
            return exit_codes.SUCCESS

        result = self._execute_bulk(
            "Deleting",
            selected,
            lambda targets, on_outcome: self._service.bulk_delete(targets, on_outcome=on_outcome),
        )
        display.render_bulk_result(result, "deletion", "DELETED")
        if result.succeeded:
            display.warning(
                f"{display.pluralize(len(result.succeeded))} permanently deleted!"
            )
        return exit_codes.SUCCESS

    @command_boundary
    def bulk_archive(self) -> int:
        return self._bulk_set_archived(archive=True)

    @command_boundary
    def bulk_unarchive(self) -> int:
        return self._bulk_set_archived(archive=False)

    def _bulk_set_archived(self, *, archive: bool) -> int:
        verb = "archive" if archive else "unarchive"
        target_state = "Archived (read-only)" if archive else "Active (editable)"
        with console.status("Fetching repositories..."):
            repos = self._service.list_repositories(
                RepositoryFilter.ACTIVE if archive else RepositoryFilter.ARCHIVED
            )
        if not repos:
            display.warning(
                "No active repositories found to archive." if archive
                else "No archived repositories found."
            )
            return exit_codes.SUCCESS

        selected = self._select_many(repos, f"Select repositories to {verb}:")
        if not selected:
            return exit_codes.SUCCESS

        display.render_bulk_review(selected, verb, target_state)
        if not prompts.confirm(f"Are you sure you want to {verb} {display.pluralize(len(selected))}?"):
            display.info(f"Bulk {verb}ing cancelled.")
            return exit_codes.SUCCESS

        result = self._execute_bulk(
            f"{verb.capitalize()}ing",
            selected,
            lambda targets, on_outcome: self._service.bulk_set_archived(
                targets, archive, on_outcome=on_outcome,
            ),
        )
        display.render_bulk_result(result, f"{verb}ing", "Archived" if archive else "Active")
        return exit_codes.SUCCESS

    @command_boundary
    def bulk_change_visibility(self) -> int:
        """Change visibility of several repositories.

        Only repositories currently in the opposite state are offered;
        they are fetched with the API's own visibility filter.
        """
        make_private = prompts.select_target_visibility()
        if make_private is None:
            return exit_codes.SUCCESS
        target = "Private" if make_private else "Public"

        with console.status("Fetching repositories..."):
            eligible = self._service.list_repositories(
                RepositoryFilter.PUBLIC if make_private else RepositoryFilter.PRIVATE
            )
        if not eligible:
            display.info(f"All repositories are already {target.lower()}.")
            return exit_codes.SUCCESS

        selected = self._select_many(eligible, f"Select repositories to change to {target}:")
        if not selected:
            return exit_codes.SUCCESS

        display.render_bulk_review(selected, f"change visibility to {target}", target)
        if not prompts.confirm(
            f"Are you sure you want to change visibility to {target} for "
            f"{display.pluralize(len(selected))}?"
        ):
            display.info("Bulk visibility change cancelled.")
            return exit_codes.SUCCESS

        result = self._execute_bulk(
            "Changing visibility",
            selected,
            lambda targets, on_outcome: self._service.bulk_update_visibility(
                targets, make_private, on_outcome=on_outcome,
            ),
        )
        display.render_bulk_result(result, "visibility change", target)
        return exit_codes.SUCCESS

    # ------------------------------------------------------------------
    # Shared steps
    # ------------------------------------------------------------------

    def _pick_or_fetch(
        self,
        name: str | None,
        repo_filter: RepositoryFilter,
        message: str,
        empty_message: str,
    ) -> Repository | None:
        """Fetch *name* directly, or let the user pick from a listing."""
        if name is not None:
            with console.status(f'Verifying repository "{name}"...'):
                return self._service.get_own_repository(name)

        with console.status("Fetching repositories..."):
            repos = self._service.list_repositories(repo_filter)
        if not repos:
            display.warning(empty_message)
            return None
        return prompts.select_repository(repos, message)

    @staticmethod
    def _select_many(repos: Sequence[Repository], message: str) -> list[Repository]:
        selected = prompts.select_repositories(repos, message)
        if selected is None:
            return []
        if not selected:
            display.info("No repositories selected.")
        return selected

    @staticmethod
    def _execute_bulk(
        description: str,
        repos: Sequence[Repository],
        run: BulkRunner,
    ) -> BulkResult[Any]:
        targets = [repo.full_name for repo in repos]
        logger.debug("%s %d repositories", description, len(targets))
        with BulkProgress(f"{description} {display.pluralize(len(targets))}", total=len(targets)) as progress:
            return run(targets, progress)
