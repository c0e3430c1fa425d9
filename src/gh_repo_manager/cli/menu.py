"""Interactive main menu shown when no sub-command is given."""

from __future__ import annotations

from collections.abc import Callable

from gh_repo_manager.cli import display, exit_codes, prompts
from gh_repo_manager.cli.commands import RepositoryCommands
from gh_repo_manager.cli.console import console

EXIT: str = "exit"


def _delete_by_name(commands: RepositoryCommands) -> int:
    name = prompts.ask_repository_name("delete")
    if name is None:
        return exit_codes.SUCCESS
    return commands.delete_repository(name)


def menu_actions(commands: RepositoryCommands) -> list[tuple[str, str, Callable[[], int]]]:
    """``(key, title, action)`` triples in display order."""
    return [
        ("list", "📋 List all repositories", commands.list_repositories),
        ("search", "🔍 Search repositories", commands.search_repositories),
        ("details", "📊 View repository details", commands.view_repository_details),
        ("visibility", "🔄 Change repository visibility", commands.change_visibility),
        ("bulk-visibility", "🔄 Bulk change visibility", commands.bulk_change_visibility),
        ("archive", "📦 Archive a repository", commands.archive_repository),
        ("unarchive", "📂 Unarchive a repository", commands.unarchive_repository),
        ("bulk-archive", "📦 Bulk archive repositories", commands.bulk_archive),
        ("bulk-unarchive", "📂 Bulk unarchive repositories", commands.bulk_unarchive),
        ("archive-status", "🔍 Show archive status", commands.show_archive_status),
        ("delete", "🗑️  Delete a repository", commands.delete_repository),
        ("delete-by-name", "🗑️  Delete a repository by name", lambda: _delete_by_name(commands)),
        ("bulk-delete", "🗑️  Bulk delete repositories", commands.bulk_delete),
        ("info", "👤 Show account information", commands.show_account_info),
    ]


def run_menu(commands: RepositoryCommands) -> int:
    """Loop until the user picks Exit or cancels the prompt."""
    actions = menu_actions(commands)
    by_key = {key: action for key, _title, action in actions}
    options = [(key, title) for key, title, _action in actions]

    console.print("\n[bold cyan]🐙 GitHub Repository Manager[/bold cyan]")
    while True:
        choice = prompts.select_menu_action(options, (EXIT, "🚪 Exit"))
        if choice is None or choice == EXIT:
            display.info("Goodbye!")
            return exit_codes.SUCCESS
        by_key[choice]()
