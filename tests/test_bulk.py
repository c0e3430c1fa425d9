"""Tests for the sequential bulk runner (core/bulk.py)."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from gh_repo_manager.core.bulk import apply_to_all
from gh_repo_manager.core.models import BulkFailure
from gh_repo_manager.exceptions import AuthenticationError, NotFoundError


def _failing_on(*names: str):
    attempted: list[str] = []

    def operation(name: str) -> str:
        attempted.append(name)
        if name in names:
            raise NotFoundError(f"{name} not found")
        return name.upper()

    return operation, attempted


class TestApplyToAll:
    def test_all_succeed(self) -> None:
        operation, attempted = _failing_on()
        result = apply_to_all(["a", "b", "c"], operation)
        assert result.succeeded == ("A", "B", "C")
        assert result.failed == ()
        assert attempted == ["a", "b", "c"]

    def test_failure_does_not_stop_later_items(self) -> None:
        operation, attempted = _failing_on("a", "c")
        result = apply_to_all(["a", "b", "c", "d"], operation)
        assert attempted == ["a", "b", "c", "d"]
        assert result.succeeded == ("B", "D")
        assert [f.identifier for f in result.failed] == ["a", "c"]
        assert len(result.succeeded) + len(result.failed) == 4

    def test_failure_message_comes_from_error(self) -> None:
        operation, _attempted = _failing_on("x")
        result = apply_to_all(["x"], operation)
        assert result.failed == (BulkFailure(identifier="x", message="x not found"),)

    def test_authentication_error_is_captured_per_item(self) -> None:
        def operation(name: str) -> str:
            raise AuthenticationError("bad token")

        result = apply_to_all(["a", "b"], operation)
        assert len(result.failed) == 2

    def test_unexpected_exception_propagates(self) -> None:
        def operation(name: str) -> str:
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError):
            apply_to_all(["a"], operation)

    def test_custom_identifier(self) -> None:
        def operation(item: dict[str, str]) -> str:
            raise NotFoundError("gone")

        result = apply_to_all([{"n": "one"}], operation, identify=lambda item: item["n"])
        assert result.failed[0].identifier == "one"

    def test_empty_input(self) -> None:
        operation, attempted = _failing_on()
        result = apply_to_all([], operation)
        assert result.total == 0
        assert attempted == []

    def test_on_outcome_called_once_per_item_in_order(self) -> None:
        operation, _attempted = _failing_on("b")
        outcomes: list[tuple[str, bool]] = []
        apply_to_all(
            ["a", "b", "c"],
            operation,
            on_outcome=lambda name, failure: outcomes.append((name, failure is None)),
        )
        assert outcomes == [("a", True), ("b", False), ("c", True)]

    def test_item_failures_logged_at_debug_only(self) -> None:
        operation, _attempted = _failing_on("b")
        with patch("gh_repo_manager.core.bulk.logger") as logger:
            apply_to_all(["a", "b"], operation)
        logger.warning.assert_not_called()
        assert any("b" in call.args for call in logger.debug.call_args_list)
