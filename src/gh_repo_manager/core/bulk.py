"""Sequential bulk runner with per-item failure isolation.

:func:`apply_to_all` applies one operation to every target in input
order, exactly once each.  A failure on one item never stops the
following items; it is recorded as a :class:`BulkFailure` carrying the
item's identifier and the error's user-facing message.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from gh_repo_manager.core.models import BulkFailure, BulkResult
from gh_repo_manager.exceptions import GhRepoManagerError

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")

OutcomeCallback = Callable[[str, BulkFailure | None], None]
"""Called after each item with its identifier and failure (``None`` on success)."""


def apply_to_all(
    items: Iterable[ItemT],
    operation: Callable[[ItemT], ResultT],
    *,
    identify: Callable[[ItemT], str] = str,
    on_outcome: OutcomeCallback | None = None,
) -> BulkResult[ResultT]:
    """Run *operation* over *items* and partition the outcomes.

    Parameters
    ----------
    items:
        Targets, processed strictly in order.
    operation:
        Single-item operation.  Its return value is collected into
        ``succeeded``.
    identify:
        Maps an item to the identifier reported on failure.
    on_outcome:
        Optional progress callback.

    Only :class:`~gh_repo_manager.exceptions.GhRepoManagerError`
    subclasses are captured; anything else is a programming error and
    propagates.
    """
    succeeded: list[ResultT] = []
    failed: list[BulkFailure] = []

    for item in items:
        identifier = identify(item)
        failure: BulkFailure | None = None
        try:
            succeeded.append(operation(item))
        except GhRepoManagerError as exc:
            failure = BulkFailure(identifier=identifier, message=str(exc))
            failed.append(failure)
            logger.debug("Bulk item %s failed: %s", identifier, exc)
        if on_outcome is not None:
            on_outcome(identifier, failure)

    logger.debug("Bulk run finished: %d succeeded, %d failed", len(succeeded), len(failed))
    return BulkResult(succeeded=tuple(succeeded), failed=tuple(failed))
