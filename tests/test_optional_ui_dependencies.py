"""Regression tests for optional CLI UI dependencies (rich/questionary).

Bootstrap commands must keep working when the UI packages are missing;
interactive flows must fail with a clean ``EnvironmentError`` only once
a UI path is actually exercised.
"""

from __future__ import annotations

import logging
import sys
from unittest.mock import MagicMock

import pytest

from gh_repo_manager.cli import exit_codes, prompts
from gh_repo_manager.cli.app import main
from gh_repo_manager.cli.commands import RepositoryCommands
from gh_repo_manager.cli.console import console
from gh_repo_manager.cli.progress import BulkProgress
from gh_repo_manager.core.models import Repository
from gh_repo_manager.core.repository_service import RepositoryService
from gh_repo_manager.exceptions import EnvironmentError
from gh_repo_manager.utils.log_setup import _build_handler


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    for module in ("rich", "rich.console", "rich.table", "rich.progress", "rich.logging"):
        monkeypatch.setitem(sys.modules, module, None)


def _hide_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "questionary", None)


def _repo() -> Repository:
    return Repository(
        id=1,
        name="demo",
        full_name="octocat/demo",
        private=False,
        archived=False,
        fork=False,
        stargazers_count=0,
        forks_count=0,
        created_at=None,
        updated_at=None,
        html_url="https://github.com/octocat/demo",
        clone_url="https://github.com/octocat/demo.git",
    )


def test_help_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_help_command_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    assert main(["help"]) == exit_codes.SUCCESS


def test_version_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_console_falls_back_to_plain_print(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    console.print("[bold red]Error:[/bold red] boom")
    with console.status("[dim]Working...[/dim]"):
        pass
    assert capsys.readouterr().out == "Error: boom\nWorking...\n"


def test_log_handler_falls_back_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    assert type(_build_handler()) is logging.StreamHandler


def test_progress_errors_cleanly_when_rich_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(EnvironmentError, match="rich is not installed"):
        BulkProgress("Deleting", total=1)


def test_selection_errors_cleanly_when_questionary_missing(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _hide_questionary(monkeypatch)

    with pytest.raises(EnvironmentError, match="questionary is not installed"):
        prompts.select_repository([_repo()])


def test_command_reraises_missing_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_questionary(monkeypatch)
    service = MagicMock(spec=RepositoryService)
    service.list_repositories.return_value = [_repo()]

    with pytest.raises(EnvironmentError):
        RepositoryCommands(service).delete_repository()
    service.delete_repository.assert_not_called()
