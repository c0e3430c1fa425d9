"""Tests for the per-process session (core/session.py)."""

from __future__ import annotations

from unittest.mock import MagicMock

from gh_repo_manager.core.session import Session


class TestSession:
    def test_fetches_once(self) -> None:
        fetch = MagicMock(return_value="octocat")
        session = Session()
        assert session.resolve_username(fetch) == "octocat"
        assert session.resolve_username(fetch) == "octocat"
        fetch.assert_called_once()

    def test_preseeded_username_skips_fetch(self) -> None:
        fetch = MagicMock()
        session = Session("hubot")
        assert session.resolve_username(fetch) == "hubot"
        fetch.assert_not_called()

    def test_blank_preseed_is_ignored(self) -> None:
        fetch = MagicMock(return_value="octocat")
        assert Session("").resolve_username(fetch) == "octocat"
        fetch.assert_called_once()
