"""Terminal rendering of repositories, statistics and bulk results.

All display-related logic lives here; it makes no API calls and never prompts.
Pure formatting helpers come first; the ``render_*`` functions print
through the shared console proxy.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from gh_repo_manager.cli.console import console
from gh_repo_manager.core.models import (
    AccountSummary,
    BulkResult,
    Repository,
    RepositoryStatistics,
)
from gh_repo_manager.exceptions import EnvironmentError, GhRepoManagerError


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for list rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Presentation helpers (pure, no I/O)
# ---------------------------------------------------------------------------

_SIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB")


def format_size(num_bytes: int) -> str:
    """Render a byte count with a binary unit, e.g. ``"1.5 KB"``."""
    if num_bytes <= 0:
        return "0 B"
    exponent = 0
    while num_bytes >= 1024 ** (exponent + 1) and exponent < len(_SIZE_UNITS) - 1:
        exponent += 1
    value = num_bytes / 1024 ** exponent
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[exponent]}"


def format_date(value: datetime | None) -> str:
    """Render a timestamp as ``"Mar 04, 2024 13:05"`` or ``"Unknown"``."""
    if value is None:
        return "Unknown"
    return value.strftime("%b %d, %Y %H:%M")


def truncate(text: str | None, max_length: int = 50) -> str:
    """Cut *text* to *max_length* characters, appending ``"..."``."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def pluralize(count: int, singular: str = "repository", plural: str = "repositories") -> str:
    """``"1 repository"`` / ``"3 repositories"``."""
    return f"{count} {singular if count == 1 else plural}"


def visibility_label(private: bool) -> str:
    return "[red]🔒 Private[/red]" if private else "[green]🌐 Public[/green]"


def status_label(archived: bool) -> str:
    return "[dim]📦 Archived (read-only)[/dim]" if archived else "[green]✅ Active (editable)[/green]"


def choice_label(repo: Repository) -> str:
    """Single-line label for selection prompts."""
    description = truncate(repo.description, 40)
    return f"{repo.name} - {description}" if description else repo.name


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

def success(message: str) -> None:
    console.print(f"\n[green]✅ {message}[/green]")


def warning(message: str) -> None:
    console.print(f"\n[yellow]⚠️  {message}[/yellow]")


def info(message: str) -> None:
    console.print(f"\n[blue]ℹ️  {message}[/blue]")


def error(exc: GhRepoManagerError | str) -> None:
    """Render an error message plus its hint and HTTP status, if any."""
    console.print(f"\n[bold red]❌ Error:[/bold red] {exc}")
    if isinstance(exc, GhRepoManagerError):
        status = getattr(exc, "status", None)
        if status is not None:
            console.print(f"[dim]Status: {status}[/dim]")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------

def render_repository(repo: Repository, details: bool = False) -> None:
    """Print a repository card; *details* adds the extended fields."""
    badges = [visibility_label(repo.private)]
    if repo.fork:
        badges.append("[yellow]🔀 Fork[/yellow]")
    if repo.language:
        badges.append(f"[blue]📝 {repo.language}[/blue]")
    if repo.archived:
        badges.append("[dim]📦 Archived[/dim]")

    console.print(f"\n[bold cyan]📦 {repo.name}[/bold cyan]")
    console.print(f"   [dim]{repo.full_name}[/dim]")
    if repo.description:
        console.print(f"   {truncate(repo.description, 80)}")
    console.print("   " + " ".join(badges))
    console.print(f"   ⭐ {repo.stargazers_count} | 🔀 {repo.forks_count}")
    console.print(f"   📅 Updated: {format_date(repo.updated_at)}")
    console.print(f"   🔗 [underline blue]{repo.html_url}[/underline blue]")

    if not details:
        return
    console.print(f"   📅 Created: {format_date(repo.created_at)}")
    if repo.default_branch:
        console.print(f"   🎯 Default branch: {repo.default_branch}")
    if repo.size is not None:
        console.print(f"   📊 Size: {format_size(repo.size * 1024)}")
    if repo.open_issues_count is not None:
        console.print(f"   🐛 Open issues: {repo.open_issues_count}")
    if repo.topics:
        console.print(f"   🏷️  Topics: {', '.join(repo.topics)}")


def render_repository_list(repos: Sequence[Repository], details: bool = False) -> None:
    """Print a table of repositories, or cards when *details* is set."""
    if not repos:
        console.print("[yellow]No repositories found.[/yellow]")
        return

    console.print(f"\n[bold green]📋 Found {pluralize(len(repos))}:[/bold green]")

    if details:
        for index, repo in enumerate(repos, start=1):
            console.print(f"\n[dim]{index}.[/dim]")
            render_repository(repo, details=True)
        return

    table_class = _import_rich_table()
    table = table_class(show_header=True, header_style="bold magenta", border_style="dim")
    table.add_column("#", justify="right", style="dim", width=4)
    table.add_column("Name", style="bold cyan", min_width=16)
    table.add_column("Visibility", min_width=10)
    table.add_column("Language", min_width=8)
    table.add_column("⭐", justify="right")
    table.add_column("Updated", min_width=12)
    table.add_column("Description")

    for index, repo in enumerate(repos, start=1):
        name = f"{repo.name} [dim](archived)[/dim]" if repo.archived else repo.name
        table.add_row(
            str(index),
            name,
            visibility_label(repo.private),
            repo.language or "—",
            str(repo.stargazers_count),
            format_date(repo.updated_at),
            truncate(repo.description, 40),
        )
    console.print(table)


def render_updated_repository(title: str, repo: Repository) -> None:
    """Short summary printed after a visibility or archive change."""
    console.print(f"\n[bold cyan]📦 {title}:[/bold cyan]")
    console.print(f"   Name: [cyan]{repo.name}[/cyan]")
    console.print(f"   Full name: [dim]{repo.full_name}[/dim]")
    console.print(f"   Visibility: {visibility_label(repo.private)}")
    console.print(f"   Status: {status_label(repo.archived)}")
    console.print(f"   URL: [underline blue]{repo.html_url}[/underline blue]")


def render_statistics(stats: RepositoryStatistics) -> None:
    console.print("\n[bold cyan]📊 Repository Statistics:[/bold cyan]")
    console.print(f"   👥 Contributors: {stats.contributors_count}")
    if stats.languages:
        top = list(stats.languages.items())[:5]
        rendered = ", ".join(f"{lang} ({format_size(size)})" for lang, size in top)
        console.print(f"   📝 Languages: {rendered}")
    if stats.last_commit is not None:
        console.print(f"   🚀 Last commit: {stats.last_commit.message}")
        console.print(f"   📅 Commit date: {format_date(stats.last_commit.date)}")


# ---------------------------------------------------------------------------
# Bulk flows
# ---------------------------------------------------------------------------

def render_bulk_review(repos: Sequence[Repository], action: str, target_state: str) -> None:
    """Summarise a pending bulk action before asking for confirmation."""
    console.print("\n[bold yellow]⚠️  Bulk Action Confirmation[/bold yellow]")
    console.print(f"[dim]Action: {action}[/dim]")
    console.print(f"[dim]Target State: {target_state}[/dim]")
    console.print(f"[dim]Repositories to process: {len(repos)}[/dim]")
    console.print("\n[cyan]Selected repositories:[/cyan]")

    shown = repos if len(repos) <= 5 else repos[:3]
    for index, repo in enumerate(shown, start=1):
        console.print(f"   {index}. [cyan]{repo.name}[/cyan]")
    if len(shown) < len(repos):
        console.print(f"[dim]   ... and {len(repos) - len(shown)} more[/dim]")


def render_bulk_result(result: BulkResult[Any], action: str, target_state: str) -> None:
    """Print the succeeded/failed partition and a summary block."""
    console.print(f"\n[bold green]✅ Bulk {action} Results[/bold green]")
    console.print(f"[dim]Target State: {target_state}[/dim]")

    if result.succeeded:
        console.print(f"\n[green]✅ Successfully processed {pluralize(len(result.succeeded))}:[/green]")
        for index, item in enumerate(result.succeeded, start=1):
            name = item.name if isinstance(item, Repository) else str(item)
            console.print(f"   {index}. [cyan]{name}[/cyan]")

    if result.failed:
        console.print(f"\n[red]❌ Failed to process {pluralize(len(result.failed))}:[/red]")
        for index, failure in enumerate(result.failed, start=1):
            console.print(
                f"   {index}. [cyan]{failure.identifier}[/cyan] - [red]{failure.message}[/red]"
            )

    console.print("\n[bold cyan]📊 Summary:[/bold cyan]")
    console.print(f"   Total processed: {result.total}")
    console.print(f"   Successful: {len(result.succeeded)}")
    console.print(f"   Failed: {len(result.failed)}")
    console.print(f"   Success rate: {result.success_rate}%")


# ---------------------------------------------------------------------------
# Account views
# ---------------------------------------------------------------------------

def render_account_summary(summary: AccountSummary) -> None:
    console.print("\n[bold green]👤 User Information:[/bold green]")
    console.print(f"   Username: [cyan]{summary.username}[/cyan]")
    console.print(f"   Total repositories: [cyan]{summary.total}[/cyan]")
    console.print(f"   Public repositories: [green]{summary.public}[/green]")
    console.print(f"   Private repositories: [red]{summary.private}[/red]")
    console.print(f"   Archived repositories: [dim]{summary.archived}[/dim]")
    console.print(f"   Forks: [yellow]{summary.forks}[/yellow]")
    console.print(f"   Total stars received: [yellow]{summary.total_stars}[/yellow]")
    console.print(f"   Total forks received: [blue]{summary.total_forks}[/blue]")

    if summary.most_popular:
        console.print("\n[bold green]⭐ Most Popular Repositories:[/bold green]")
        for index, repo in enumerate(summary.most_popular, start=1):
            console.print(f"   {index}. [cyan]{repo.name}[/cyan] - {repo.stargazers_count} stars")


def render_archive_status(
    active: Sequence[Repository],
    archived: Sequence[Repository],
) -> None:
    """Active/archived breakdown with troubleshooting tips."""
    console.print("\n[bold cyan]🔍 Repository Archive Status[/bold cyan]")
    console.print(f"[dim]Total repositories found: {len(active) + len(archived)}[/dim]")

    console.print(f"\n[green]✅ Active repositories: {len(active)}[/green]")
    for index, repo in enumerate(active, start=1):
        console.print(f"   {index}. [cyan]{repo.name}[/cyan] ({repo.visibility})")

    console.print(f"\n[dim]📦 Archived repositories: {len(archived)}[/dim]")
    if archived:
        for index, repo in enumerate(archived, start=1):
            console.print(f"   {index}. [cyan]{repo.name}[/cyan] ({repo.visibility}) - [dim]Archived[/dim]")
        return

    console.print("[yellow]   No archived repositories found.[/yellow]")
    console.print("\n[bold yellow]🔧 Troubleshooting Tips:[/bold yellow]")
    console.print("[dim]1. Check that the repository appears on your GitHub profile[/dim]")
    console.print("[dim]2. Verify your token has the 'repo' scope[/dim]")
    console.print("[dim]3. Repositories archived moments ago may take a while to show up[/dim]")
