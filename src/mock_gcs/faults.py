"""
Per-operation fault injection queues.

Each MockFile owns one FaultQueues table. A test enqueues errors against a
named operation; the operation pops the head of its own queue before doing
anything else and raises the popped error if there was one.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Literal, Optional, get_args

from .errors import NotMockable

__all__ = ["MockableMethod", "MOCKABLE_METHODS", "MockError", "FaultQueues"]

logger = logging.getLogger(__name__)

MockableMethod = Literal[
    "exists",
    "delete",
    "download",
    "save",
    "get_signed_url",
    "set_metadata",
    "get_metadata",
]

MOCKABLE_METHODS: tuple[str, ...] = get_args(MockableMethod)


@dataclass(frozen=True)
class MockError:
    """A queued synthetic failure."""
    error: BaseException
    type: Literal["error"] = "error"


class FaultQueues:
    """
    FIFO queues of pending synthetic outcomes, one per mockable method.
    """

    def __init__(self) -> None:
        self._queues: Dict[str, Deque[MockError]] = {m: deque() for m in MOCKABLE_METHODS}

    def _check(self, method: str) -> None:
        if method not in self._queues:
            raise NotMockable(method, MOCKABLE_METHODS)

    def push_error(self, method: str, error: BaseException) -> None:
        self._check(method)
        self._queues[method].append(MockError(error=error))

    def reset(self, method: Optional[str] = None) -> None:
        if method is None:
            for queue in self._queues.values():
                queue.clear()
            return
        self._check(method)
        self._queues[method].clear()

    def pending(self, method: str) -> int:
        self._check(method)
        return len(self._queues[method])

    def raise_next(self, method: str) -> None:
        """
        Consume the head of the queue for ``method``.

        Raises:
            The enqueued exception object, unchanged, if one was pending
        """
        queue = self._queues[method]
        if not queue:
            return
        mock_value = queue.popleft()
        if mock_value.type == "error":
            logger.debug(f"Raising injected {type(mock_value.error).__name__} for {method}()")
            raise mock_value.error
