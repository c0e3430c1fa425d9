"""Runtime configuration loaded from the environment and ``.env`` files.

Credentials are read once at startup.  A ``.env`` file is loaded with
python-dotenv first; variables already present in the process
environment take precedence over the file.

Recognised variables
--------------------
``GITHUB_TOKEN``
    Personal access token (required).
``GITHUB_USERNAME``
    Login of the token owner (optional, skips one identity lookup).
``GH_REPO_MANAGER_PER_PAGE``
    Page size for listing calls, 1-100 (optional, default 100).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from gh_repo_manager.exceptions import TOKEN_SCOPES_HINT, ConfigurationError

logger = logging.getLogger(__name__)

TOKEN_VAR: str = "GITHUB_TOKEN"
USERNAME_VAR: str = "GITHUB_USERNAME"
PER_PAGE_VAR: str = "GH_REPO_MANAGER_PER_PAGE"

DEFAULT_PER_PAGE: int = 100
MAX_PER_PAGE: int = 100


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved settings for a single process invocation."""

    token: str = field(repr=False)
    username: str | None = None
    per_page: int = DEFAULT_PER_PAGE


def load_settings(env_file: str | Path | None = None) -> Settings:
    """Load a ``.env`` file (if any) and build :class:`Settings`.

    Parameters
    ----------
    env_file:
        Explicit path to a dotenv file.  When ``None``, the nearest
        ``.env`` found from the current working directory upwards is
        used, if one exists.

    Raises
    ------
    ConfigurationError
        If an explicit *env_file* does not exist, the token is missing,
        or the page size is not an integer between 1 and 100.
    """
    if env_file is not None:
        path = Path(env_file)
        if not path.is_file():
            raise ConfigurationError(f"Env file not found: {path}")
        load_dotenv(path, override=False)
        logger.debug("Loaded settings file %s", path)
    else:
        discovered = find_dotenv(usecwd=True)
        if discovered:
            load_dotenv(discovered, override=False)
            logger.debug("Loaded settings file %s", discovered)

    return settings_from_mapping(os.environ)


def settings_from_mapping(env: Mapping[str, str]) -> Settings:
    """Build :class:`Settings` from an environment-like mapping."""
    token = env.get(TOKEN_VAR, "").strip()
    if not token:
        raise ConfigurationError(
            f"GitHub token not found. Set {TOKEN_VAR} in your environment or .env file.",
            hint=TOKEN_SCOPES_HINT,
        )

    username = env.get(USERNAME_VAR, "").strip() or None

    raw_per_page = env.get(PER_PAGE_VAR, "").strip()
    per_page = DEFAULT_PER_PAGE
    if raw_per_page:
        try:
            per_page = int(raw_per_page)
        except ValueError as exc:
            raise ConfigurationError(
                f"{PER_PAGE_VAR} must be an integer, got {raw_per_page!r}.",
            ) from exc
        if not 1 <= per_page <= MAX_PER_PAGE:
            raise ConfigurationError(
                f"{PER_PAGE_VAR} must be between 1 and {MAX_PER_PAGE}, got {per_page}.",
            )

    return Settings(token=token, username=username, per_page=per_page)
