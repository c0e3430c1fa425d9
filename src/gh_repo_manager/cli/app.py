"""CLI application entry point and command routing for gh-repo-manager.

This module is the **top-level error boundary** for the application.
Individual commands render their own recoverable errors; whatever
escapes them (bad credentials, configuration problems, missing UI
dependencies, ``KeyboardInterrupt``, unexpected exceptions) is caught
in :func:`cli` and turned into a well-defined exit code.

Architecture notes
------------------
* No business logic lives here; work is delegated to
  :class:`~gh_repo_manager.cli.commands.RepositoryCommands`.
* Heavy imports (PyGithub, questionary, python-dotenv) happen inside
  :func:`_build_commands` so ``--help`` and ``--version`` work without
  credentials or optional dependencies.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from gh_repo_manager.cli import exit_codes
from gh_repo_manager.cli.console import console
from gh_repo_manager.exceptions import GhRepoManagerError
from gh_repo_manager.utils.log_setup import configure_logging
from gh_repo_manager.version import __version__

if TYPE_CHECKING:
    from gh_repo_manager.cli.commands import RepositoryCommands

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Without a sub-command the interactive menu is started.
    """
    parser = argparse.ArgumentParser(
        prog="gh-repo-manager",
        description="Interactive management of your GitHub repositories.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )
    parser.add_argument(
        "--env-file",
        metavar="PATH",
        default=None,
        help="Read credentials from this .env file instead of searching for one.",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    list_parser = sub.add_parser("list", help="List all repositories.")
    list_parser.add_argument(
        "--details",
        action="store_true",
        help="Show a detailed card per repository instead of a table.",
    )

    search_parser = sub.add_parser("search", help="Search your repositories.")
    search_parser.add_argument("query", nargs="?", default=None)

    for command, help_text in (
        ("details", "Show repository details and statistics."),
        ("visibility", "Toggle repository visibility."),
        ("archive", "Archive a repository."),
        ("unarchive", "Unarchive a repository."),
        ("delete", "Delete a repository."),
    ):
        named = sub.add_parser(command, help=help_text)
        named.add_argument(
            "name",
            nargs="?",
            default=None,
            help="Repository name; prompts for a selection when omitted.",
        )

    sub.add_parser("bulk-visibility", help="Change visibility of several repositories.")
    sub.add_parser("bulk-archive", help="Archive several repositories.")
    sub.add_parser("bulk-unarchive", help="Unarchive several repositories.")
    sub.add_parser("bulk-delete", help="Permanently delete several repositories.")
    sub.add_parser("info", help="Show account information.")
    sub.add_parser("archive-status", help="Show active and archived repositories.")
    sub.add_parser("help", help="Show this help message.")
    return parser


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

@contextmanager
def _build_commands(env_file: str | None) -> Iterator[RepositoryCommands]:
    """Load settings, verify the token and yield ready-to-use commands.

    Raises
    ------
    ConfigurationError
        If no token is configured.
    AuthenticationError
        If GitHub rejects the token.
    """
    from gh_repo_manager.cli.commands import RepositoryCommands
    from gh_repo_manager.config import load_settings
    from gh_repo_manager.core.repository_service import RepositoryService
    from gh_repo_manager.core.session import Session
    from gh_repo_manager.infra.github_provider import GitHubProvider

    settings = load_settings(env_file)
    provider = GitHubProvider(settings.token, per_page=settings.per_page)
    try:
        service = RepositoryService(provider, Session(settings.username))
        with console.status("Verifying credentials..."):
            username = service.resolve_username()
        logger.debug("Authenticated as %s", username)
        yield RepositoryCommands(service)
    finally:
        provider.close()


def _dispatch(commands: RepositoryCommands, args: argparse.Namespace) -> int:
    """Route parsed arguments to a command method."""
    if args.command is None:
        from gh_repo_manager.cli.menu import run_menu

        return run_menu(commands)

    routes: dict[str, Callable[[], int]] = {
        "list": lambda: commands.list_repositories(details=args.details),
        "search": lambda: commands.search_repositories(args.query),
        "details": lambda: commands.view_repository_details(args.name),
        "visibility": lambda: commands.change_visibility(args.name),
        "archive": lambda: commands.archive_repository(args.name),
        "unarchive": lambda: commands.unarchive_repository(args.name),
        "delete": lambda: commands.delete_repository(args.name),
        "bulk-visibility": commands.bulk_change_visibility,
        "bulk-archive": commands.bulk_archive,
        "bulk-unarchive": commands.bulk_unarchive,
        "bulk-delete": commands.bulk_delete,
        "info": commands.show_account_info,
        "archive-status": commands.show_archive_status,
    }
    return routes[args.command]()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the gh-repo-manager CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    # argparse exits 0 for --help/--version and 2 for bad usage.
    args = parser.parse_args(argv)

    if args.command == "help":
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(verbose=args.verbose)

    with _build_commands(args.env_file) as commands:
        return _dispatch(commands, args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except GhRepoManagerError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Unexpected error", exc_info=True)
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
