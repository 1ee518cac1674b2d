"""Ordered execution of multi-record updates."""

from __future__ import annotations

import logging
from typing import Callable, List, TypeVar

from pyleague.errors import PartialFailure


logger = logging.getLogger(__name__)

T = TypeVar("T")


class StepRunner:
    """Run store mutations in a fixed order, reporting the first failure.

    Steps that already ran are left in place; the raised ``PartialFailure``
    lists them so the caller can re-drive or compensate.
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.completed: List[str] = []

    def run(self, step: str, action: Callable[[], T]) -> T:
        try:
            result = action()
        except Exception as exc:
            logger.error(
                "%s failed at step %r after %d completed step(s): %s",
                self.operation,
                step,
                len(self.completed),
                exc,
            )
            raise PartialFailure(step, self.completed, exc) from exc
        self.completed.append(step)
        return result
