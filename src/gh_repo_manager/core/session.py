"""Per-process session state.

The only state that survives across commands is the login of the token
owner.  It is resolved lazily, at most once, and never changes
afterwards, so no locking is needed.
"""

from __future__ import annotations

from collections.abc import Callable


class Session:
    """Holds the resolved username for one process invocation.

    Parameters
    ----------
    username:
        Pre-seeded login (e.g. from ``GITHUB_USERNAME``).  When ``None``
        the first call to :meth:`resolve_username` fetches it.
    """

    def __init__(self, username: str | None = None) -> None:
        self._username: str | None = username or None

    def resolve_username(self, fetch: Callable[[], str]) -> str:
        """Return the cached username, calling *fetch* only on first use."""
        if self._username is None:
            self._username = fetch()
        return self._username
