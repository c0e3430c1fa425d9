"""Shared pytest fixtures and configuration for the gh-repo-manager test suite.

Guidelines
----------
* No internet access in any test.
* PyGithub must be mocked at the infra boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on the developer's own credentials.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from gh_repo_manager.config import PER_PAGE_VAR, TOKEN_VAR, USERNAME_VAR

_GITHUB_VARS = (TOKEN_VAR, USERNAME_VAR, PER_PAGE_VAR)


@pytest.fixture(autouse=True)
def _clean_github_env() -> Iterator[None]:
    """Hide real credentials and undo anything a loaded ``.env`` file set."""
    saved = {var: os.environ.pop(var) for var in _GITHUB_VARS if var in os.environ}
    yield
    for var in _GITHUB_VARS:
        os.environ.pop(var, None)
    os.environ.update(saved)
