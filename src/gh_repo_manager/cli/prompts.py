"""Interactive prompts for the CLI layer, built on questionary.

This module is responsible for:

* Picking one repository (arrow-key list with a Back entry) or a menu action.
* Picking several repositories (checkbox list with select all/none).
* Yes/no confirmations, which default to *No*.
* Free-text input for search queries and repository names.

A ``None`` answer from questionary (Esc / Ctrl+C inside the prompt) is
always surfaced as "cancelled", never as an empty selection.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from gh_repo_manager.cli.display import choice_label
from gh_repo_manager.core.models import Repository
from gh_repo_manager.exceptions import EnvironmentError

BACK: str = "__back__"
SELECT_ALL: str = "__select_all__"
SELECT_NONE: str = "__select_none__"


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def select_repository(
    repos: Sequence[Repository],
    message: str = "Select a repository:",
) -> Repository | None:
    """Return the chosen repository, or ``None`` for Back / cancel."""
    questionary = _import_questionary()

    choices = [questionary.Choice(title=choice_label(repo), value=repo) for repo in repos]
    choices.append(questionary.Separator())
    choices.append(questionary.Choice(title="← Back", value=BACK))

    selected = questionary.select(
        message,
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()

    if selected is None or selected == BACK:
        return None
    return selected


def _validate_selection(selected: list[Any]) -> bool | str:
    if not selected:
        return "Please select at least one repository"
    return True


def resolve_multi_selection(
    repos: Sequence[Repository],
    selected: Sequence[Any],
) -> list[Repository]:
    """Expand the select-all/none markers of a checkbox answer.

    Explicit picks keep listing order regardless of tick order.
    """
    if SELECT_ALL in selected:
        return list(repos)
    if SELECT_NONE in selected:
        return []
    picked = {repo.full_name for repo in selected if isinstance(repo, Repository)}
    return [repo for repo in repos if repo.full_name in picked]


def select_repositories(
    repos: Sequence[Repository],
    message: str = "Select repositories:",
) -> list[Repository] | None:
    """Multi-select; ``None`` when the prompt was cancelled."""
    questionary = _import_questionary()

    choices: list[Any] = [
        questionary.Choice(title="✅ Select All", value=SELECT_ALL),
        questionary.Choice(title="❌ Select None", value=SELECT_NONE),
        questionary.Separator(),
    ]
    choices.extend(
        questionary.Choice(title=choice_label(repo), value=repo, checked=False)
        for repo in repos
    )

    selected = questionary.checkbox(
        message,
        choices=choices,
        validate=_validate_selection,
    ).ask()

    if selected is None:
        return None
    return resolve_multi_selection(repos, selected)


def select_menu_action(
    options: Sequence[tuple[str, str]],
    exit_option: tuple[str, str],
    message: str = "What would you like to do?",
) -> str | None:
    """Pick a ``(key, title)`` option; ``None`` when the prompt was cancelled.

    *exit_option* is listed last, below a separator.
    """
    questionary = _import_questionary()

    choices: list[Any] = [questionary.Choice(title=title, value=key) for key, title in options]
    choices.append(questionary.Separator())
    choices.append(questionary.Choice(title=exit_option[1], value=exit_option[0]))

    return questionary.select(
        message,
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()


def select_target_visibility() -> bool | None:
    """Ask which visibility to apply; ``True`` means private."""
    questionary = _import_questionary()
    answer = questionary.select(
        "What visibility do you want to set for the selected repositories?",
        choices=[
            questionary.Choice(title="🌐 Public", value="public"),
            questionary.Choice(title="🔒 Private", value="private"),
        ],
    ).ask()
    if answer is None:
        return None
    return answer == "private"


# ---------------------------------------------------------------------------
# Confirmation and text input
# ---------------------------------------------------------------------------

def confirm(message: str) -> bool:
    """Yes/no question defaulting to *No*; cancel counts as *No*."""
    questionary = _import_questionary()
    return bool(questionary.confirm(message, default=False).ask())


def _ask_text(message: str, empty_message: str) -> str | None:
    questionary = _import_questionary()
    answer = questionary.text(
        message,
        validate=lambda text: True if text.strip() else empty_message,
    ).ask()
    if answer is None:
        return None
    return answer.strip() or None


def ask_search_query() -> str | None:
    return _ask_text("Enter search query:", "Search query cannot be empty")


def ask_repository_name(action: str = "delete") -> str | None:
    return _ask_text(
        f"Enter the repository name to {action}:",
        "Repository name cannot be empty",
    )
