"""Custom exception hierarchy for gh-repo-manager.

All exceptions that cross layer boundaries must inherit from
:class:`GhRepoManagerError`.  Raw third-party exceptions (e.g. from
PyGithub or requests) must NEVER propagate beyond the infrastructure
layer — they are caught there and re-raised as a typed subclass
defined here.  Nothing downstream inspects error message strings.

Hierarchy
---------
GhRepoManagerError
├── ConfigurationError
├── EnvironmentError
├── ValidationError
└── RemoteError
    ├── AuthenticationError
    ├── NotFoundError
    ├── PermissionDeniedError
    ├── NetworkError
    └── RateLimitError
"""

from __future__ import annotations


class GhRepoManagerError(Exception):
    """Base exception for all gh-repo-manager errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI boundaries can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Local setup -----------------------------------------------------------

class ConfigurationError(GhRepoManagerError):
    """Raised when credentials or settings are missing or malformed."""


class EnvironmentError(GhRepoManagerError):
    """Raised when a required runtime dependency is not available."""


# --- User input ------------------------------------------------------------

class ValidationError(GhRepoManagerError):
    """Raised when user input is rejected before any remote call."""


# --- Remote API ------------------------------------------------------------

class RemoteError(GhRepoManagerError):
    """Raised when the GitHub API rejects or fails a request.

    Used directly for HTTP statuses without a more specific mapping.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status: int | None = status
        """HTTP status reported by the API, when there was one."""


class AuthenticationError(RemoteError):
    """Raised when the access token is missing, invalid or expired."""


class NotFoundError(RemoteError):
    """Raised when the target repository does not exist or is hidden."""


class PermissionDeniedError(RemoteError):
    """Raised when the token lacks the scope needed for an operation."""


class NetworkError(RemoteError):
    """Raised on connection failures, timeouts and server-side errors."""


class RateLimitError(RemoteError):
    """Raised when the API quota for the token is exhausted."""


TOKEN_SCOPES_HINT: str = (
    "Create a token at https://github.com/settings/tokens with the "
    "'repo' and 'delete_repo' scopes."
)
