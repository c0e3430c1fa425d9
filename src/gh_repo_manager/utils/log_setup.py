"""Logging configuration for the CLI process.

Modules log through ``logging.getLogger(__name__)``; this module only
installs the handler.  Log records go to stderr through Rich's
``RichHandler`` when Rich is installed, mirroring the console helper's
plain-stderr fallback otherwise.
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER: str = "gh_repo_manager"


def _build_handler() -> logging.Handler:
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        return handler

    from rich.console import Console

    return RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
        markup=False,
    )


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    ``WARNING`` by default, ``DEBUG`` with *verbose*.  Calling it again
    replaces the previous handler instead of stacking a new one.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(_build_handler())
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False

    if verbose:
        # PyGithub logs every request at DEBUG; keep it at INFO.
        logging.getLogger("github").setLevel(logging.INFO)
    return logger
