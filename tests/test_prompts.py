"""Tests for questionary-based prompts (cli/prompts.py).

``questionary`` prompt constructors are patched; no terminal
interaction happens.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import questionary

from gh_repo_manager.cli import prompts
from gh_repo_manager.core.models import Repository


def _repo(name: str) -> Repository:
    return Repository(
        id=hash(name),
        name=name,
        full_name=f"octocat/{name}",
        private=False,
        archived=False,
        fork=False,
        stargazers_count=0,
        forks_count=0,
        created_at=None,
        updated_at=None,
        html_url=f"https://github.com/octocat/{name}",
        clone_url=f"https://github.com/octocat/{name}.git",
    )


def _answer(value: Any) -> MagicMock:
    question = MagicMock()
    question.ask.return_value = value
    return question


class TestSelectRepository:
    def test_returns_choice(self) -> None:
        repos = [_repo("a"), _repo("b")]
        with patch("questionary.select", return_value=_answer(repos[1])) as select:
            assert prompts.select_repository(repos) is repos[1]
        choices = select.call_args.kwargs["choices"]
        assert choices[-1].value == prompts.BACK

    @pytest.mark.parametrize("answer", [None, prompts.BACK])
    def test_back_or_cancel(self, answer: Any) -> None:
        with patch("questionary.select", return_value=_answer(answer)):
            assert prompts.select_repository([_repo("a")]) is None


class TestMultiSelection:
    def test_select_all(self) -> None:
        repos = [_repo("a"), _repo("b")]
        assert prompts.resolve_multi_selection(repos, [prompts.SELECT_ALL]) == repos

    def test_select_none(self) -> None:
        repos = [_repo("a")]
        assert prompts.resolve_multi_selection(repos, [prompts.SELECT_NONE, repos[0]]) == []

    def test_listing_order_kept(self) -> None:
        repos = [_repo("a"), _repo("b"), _repo("c")]
        assert prompts.resolve_multi_selection(repos, [repos[2], repos[0]]) == [repos[0], repos[2]]

    def test_validation(self) -> None:
        assert prompts._validate_selection([]) == "Please select at least one repository"
        assert prompts._validate_selection(["x"]) is True

    def test_cancel_is_none(self) -> None:
        with patch("questionary.checkbox", return_value=_answer(None)):
            assert prompts.select_repositories([_repo("a")]) is None

    def test_checkbox_answer_resolved(self) -> None:
        repos = [_repo("a"), _repo("b")]
        with patch("questionary.checkbox", return_value=_answer([repos[1]])):
            assert prompts.select_repositories(repos) == [repos[1]]


class TestConfirmAndText:
    def test_confirm_defaults_to_no(self) -> None:
        with patch("questionary.confirm", return_value=_answer(True)) as confirm:
            assert prompts.confirm("Sure?") is True
        assert confirm.call_args.kwargs["default"] is False

    def test_confirm_cancel_is_no(self) -> None:
        with patch("questionary.confirm", return_value=_answer(None)):
            assert prompts.confirm("Sure?") is False

    @pytest.mark.parametrize(("answer", "expected"), [(" cli ", "cli"), (None, None)])
    def test_search_query(self, answer: str | None, expected: str | None) -> None:
        with patch("questionary.text", return_value=_answer(answer)):
            assert prompts.ask_search_query() == expected

    def test_text_validator_rejects_blank(self) -> None:
        with patch("questionary.text", return_value=_answer("x")) as text:
            prompts.ask_repository_name()
        validate = text.call_args.kwargs["validate"]
        assert validate("  ") == "Repository name cannot be empty"
        assert validate("demo") is True

    @pytest.mark.parametrize(("answer", "expected"), [("private", True), ("public", False), (None, None)])
    def test_target_visibility(self, answer: str | None, expected: bool | None) -> None:
        with patch("questionary.select", return_value=_answer(answer)):
            assert prompts.select_target_visibility() is expected


class TestMenuAction:
    def test_exit_listed_last(self) -> None:
        with patch("questionary.select", return_value=_answer("list")) as select:
            answer = prompts.select_menu_action([("list", "List"), ("info", "Info")], ("exit", "Exit"))
        assert answer == "list"
        choices = select.call_args.kwargs["choices"]
        assert [c.value for c in choices[:2]] == ["list", "info"]
        assert isinstance(choices[2], questionary.Separator)
        assert choices[3].value == "exit"

    def test_cancel_is_none(self) -> None:
        with patch("questionary.select", return_value=_answer(None)):
            assert prompts.select_menu_action([("list", "List")], ("exit", "Exit")) is None
