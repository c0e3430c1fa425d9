"""Tests for the PyGithub adapter (infra/github_provider.py).

A mocked ``github.Github`` client is injected — no network access.
Real PyGithub and requests exception classes are raised from the mock
to verify they are mapped onto our hierarchy.
"""

from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import github
import pytest
import requests

from gh_repo_manager.exceptions import (
    AuthenticationError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    RemoteError,
    ValidationError,
)
from gh_repo_manager.infra.github_provider import GitHubProvider


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _gh_repo(name: str = "demo", **overrides: Any) -> SimpleNamespace:
    """Stand-in for a ``github.Repository.Repository``."""
    attrs: dict[str, Any] = {
        "id": 7,
        "name": name,
        "full_name": f"octocat/{name}",
        "description": None,
        "private": True,
        "archived": False,
        "fork": False,
        "language": "Rust",
        "stargazers_count": 5,
        "forks_count": 0,
        "created_at": datetime(2023, 1, 1, tzinfo=timezone.utc),
        "updated_at": None,
        "html_url": f"https://github.com/octocat/{name}",
        "clone_url": f"https://github.com/octocat/{name}.git",
        "default_branch": "main",
        "size": 64,
        "open_issues_count": 1,
        "topics": ["rust"],
    }
    attrs.update(overrides)
    return SimpleNamespace(**attrs)


def _provider(client: MagicMock | None = None) -> tuple[GitHubProvider, MagicMock]:
    client = client or MagicMock()
    return GitHubProvider("ghp_test", client=client), client


# ---------------------------------------------------------------------------
# Successful calls
# ---------------------------------------------------------------------------

class TestCalls:
    def test_authenticated_login(self) -> None:
        provider, client = _provider()
        client.get_user.return_value.login = "octocat"
        assert provider.authenticated_login() == "octocat"

    def test_list_repositories_passes_visibility(self) -> None:
        provider, client = _provider()
        client.get_user.return_value.get_repos.return_value = [_gh_repo("a"), _gh_repo("b")]
        payloads = provider.list_repositories(visibility="private")
        client.get_user.return_value.get_repos.assert_called_once_with(
            visibility="private", sort="updated", direction="desc",
        )
        assert [p["name"] for p in payloads] == ["a", "b"]
        assert payloads[0]["created_at"] == "2023-01-01T00:00:00+00:00"
        assert payloads[0]["updated_at"] is None
        assert "default_branch" not in payloads[0]

    def test_get_repository_is_detailed(self) -> None:
        provider, client = _provider()
        client.get_repo.return_value = _gh_repo()
        payload = provider.get_repository("octocat", "demo")
        client.get_repo.assert_called_once_with("octocat/demo")
        assert payload["default_branch"] == "main"
        assert payload["topics"] == ["rust"]

    def test_search(self) -> None:
        provider, client = _provider()
        client.search_repositories.return_value = [_gh_repo("x")]
        payloads = provider.search_repositories("x user:octocat")
        client.search_repositories.assert_called_once_with(query="x user:octocat", sort="updated")
        assert payloads[0]["name"] == "x"

    def test_delete_uses_lazy_repo(self) -> None:
        provider, client = _provider()
        provider.delete_repository("octocat", "demo")
        client.get_repo.assert_called_once_with("octocat/demo", lazy=True)
        client.get_repo.return_value.delete.assert_called_once_with()

    def test_update_edits_fields(self) -> None:
        provider, client = _provider()
        repo = MagicMock()
        for key, value in vars(_gh_repo()).items():
            setattr(repo, key, value)
        client.get_repo.return_value = repo
        provider.update_repository("octocat", "demo", archived=True)
        repo.edit.assert_called_once_with(archived=True)

    def test_latest_commit_empty_history(self) -> None:
        provider, client = _provider()
        client.get_repo.return_value.get_branch.side_effect = github.UnknownObjectException(
            404, {"message": "Branch not found"}, None
        )
        assert provider.latest_commit("octocat", "empty") is None

    def test_latest_commit(self) -> None:
        provider, client = _provider()
        author = SimpleNamespace(name="Octo", date=datetime(2024, 3, 1, tzinfo=timezone.utc))
        commit = SimpleNamespace(sha="abc", commit=SimpleNamespace(message="Init", author=author))
        repo = client.get_repo.return_value
        repo.default_branch = "main"
        repo.get_branch.return_value.commit = commit
        assert provider.latest_commit("octocat", "demo") == {
            "sha": "abc",
            "message": "Init",
            "author": "Octo",
            "date": "2024-03-01T00:00:00+00:00",
        }
        repo.get_branch.assert_called_once_with("main")
        repo.get_commits.assert_not_called()

    def test_languages(self) -> None:
        provider, client = _provider()
        client.get_repo.return_value.get_languages.return_value = {"Go": 10}
        assert provider.list_languages("octocat", "demo") == {"Go": 10}

    def test_close_is_idempotent(self) -> None:
        provider, client = _provider()
        provider.close()
        provider.close()
        client.close.assert_called_once_with()


# ---------------------------------------------------------------------------
# Exception mapping
# ---------------------------------------------------------------------------

class TestExceptionMapping:
    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (github.BadCredentialsException(401, {"message": "Bad credentials"}, None), AuthenticationError),
            (github.RateLimitExceededException(403, {"message": "rate limit"}, None), RateLimitError),
            (github.UnknownObjectException(404, {"message": "Not Found"}, None), NotFoundError),
            (github.GithubException(403, {"message": "Must have admin rights"}, None), PermissionDeniedError),
            (github.GithubException(422, {"message": "Validation Failed"}, None), ValidationError),
            (github.GithubException(502, {"message": "Bad Gateway"}, None), NetworkError),
            (github.GithubException(409, {"message": "Conflict"}, None), RemoteError),
        ],
    )
    def test_github_exceptions(self, exc: Exception, expected: type[Exception]) -> None:
        provider, client = _provider()
        client.get_repo.side_effect = exc
        with pytest.raises(expected) as exc_info:
            provider.get_repository("octocat", "demo")
        assert type(exc_info.value) is expected
        assert exc_info.value.__cause__ is exc

    def test_message_uses_api_detail(self) -> None:
        provider, client = _provider()
        client.get_repo.side_effect = github.UnknownObjectException(404, {"message": "Not Found"}, None)
        with pytest.raises(NotFoundError, match="Failed to get repository octocat/demo: Not Found") as exc_info:
            provider.get_repository("octocat", "demo")
        assert exc_info.value.status == 404

    def test_permission_error_has_scope_hint(self) -> None:
        provider, client = _provider()
        client.get_repo.return_value.delete.side_effect = github.GithubException(
            403, {"message": "Must have admin rights to Repository."}, None,
        )
        with pytest.raises(PermissionDeniedError) as exc_info:
            provider.delete_repository("octocat", "demo")
        assert exc_info.value.hint is not None
        assert "delete_repo" in exc_info.value.hint

    def test_connection_error(self) -> None:
        provider, client = _provider()
        client.get_user.side_effect = requests.exceptions.ConnectionError("offline")
        with pytest.raises(NetworkError):
            provider.authenticated_login()

    def test_other_exceptions_untouched(self) -> None:
        provider, client = _provider()
        client.get_user.side_effect = KeyError("bug")
        with pytest.raises(KeyError):
            provider.authenticated_login()
