"""Tests for the bulk progress adapter (cli/progress.py)."""

from __future__ import annotations

from unittest.mock import MagicMock

from gh_repo_manager.cli.progress import BulkProgress
from gh_repo_manager.core.bulk import apply_to_all
from gh_repo_manager.exceptions import NotFoundError


def _delete(name: str) -> str:
    if name == "b":
        raise NotFoundError("gone")
    return name


class TestBulkProgress:
    def test_advances_once_per_item(self) -> None:
        with BulkProgress("Deleting", total=3) as progress:
            progress._progress = MagicMock(wraps=progress._progress)
            result = apply_to_all(["a", "b", "c"], _delete, on_outcome=progress)
        assert result.total == 3
        currents = [call.kwargs["current"] for call in progress._progress.update.call_args_list]
        assert currents == ["a", "b", "c"]

    def test_calls_after_stop_are_ignored(self) -> None:
        progress = BulkProgress("Deleting", total=1)
        progress.start()
        progress.stop()
        progress.stop()
        progress._progress = MagicMock()
        progress("late", None)
        progress._progress.update.assert_not_called()
