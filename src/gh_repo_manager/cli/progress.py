"""Rich-based progress display driven by bulk-runner outcome callbacks.

This module bridges the ``on_outcome`` callback of
:func:`~gh_repo_manager.core.bulk.apply_to_all` with a Rich
:class:`~rich.progress.Progress` bar.  The core layer only invokes the
callback; all rendering happens here.

Design
------
* :class:`BulkProgress` manages a Rich Progress context.
* :meth:`__call__` is the callback passed to the service's bulk methods.
* Shutdown-safe: if the progress bar is already stopped, calls are
  silently ignored.
"""

from __future__ import annotations

from typing import Any

from gh_repo_manager.cli.console import get_rich_console
from gh_repo_manager.core.models import BulkFailure
from gh_repo_manager.exceptions import EnvironmentError


class BulkProgress:
    """Callable outcome-callback adapter for Rich.

    Usage::

        with BulkProgress("Deleting", total=len(names)) as progress:
            service.bulk_delete(names, on_outcome=progress)
    """

    def __init__(self, description: str, total: int) -> None:
        try:
            from rich.progress import (
                BarColumn,
                MofNCompleteColumn,
                Progress,
                SpinnerColumn,
                TextColumn,
            )
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._progress: Any = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TextColumn("{task.fields[current]}"),
            console=get_rich_console(),
            transient=True,
        )
        self._description: str = description
        self._total: int = total
        self._task_id: Any = None
        self._started: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> BulkProgress:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the Rich progress display."""
        if not self._started:
            self._progress.start()
            self._task_id = self._progress.add_task(
                self._description,
                total=self._total,
                current="",
            )
            self._started = True

    def stop(self) -> None:
        """Stop the Rich progress display (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False

    # ------------------------------------------------------------------
    # Outcome callback
    # ------------------------------------------------------------------

    def __call__(self, identifier: str, failure: BulkFailure | None) -> None:
        """Advance the bar by one finished item."""
        if not self._started:
            return
        self._progress.update(self._task_id, advance=1, current=identifier)
