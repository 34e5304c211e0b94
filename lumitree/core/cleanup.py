"""
CleanupStack — ordered, best-effort release of independently acquired
resources.

A failure in one action is logged and collected; the remaining actions
still run.
"""
from __future__ import annotations
import logging
from typing import Callable, List, Tuple

from lumitree.domain.errors import ResourceReleaseFailure

logger = logging.getLogger(__name__)


class CleanupStack:
    """
    Usage
    -----
    stack = CleanupStack()
    stack.push("camera", camera.release)
    stack.push("tracker", tracker.close)
    failures = stack.close()
    """

    def __init__(self) -> None:
        self._actions: List[Tuple[str, Callable[[], None]]] = []

    def push(self, name: str, action: Callable[[], None]) -> None:
        self._actions.append((name, action))

    def close(self) -> List[ResourceReleaseFailure]:
        """Run every registered action once, in registration order."""
        actions, self._actions = self._actions, []
        failures: List[ResourceReleaseFailure] = []
        for name, action in actions:
            try:
                action()
            except Exception as exc:
                failure = ResourceReleaseFailure(name, exc)
                logger.warning("%s", failure)
                failures.append(failure)
        return failures

    def __len__(self) -> int:
        return len(self._actions)

    def __enter__(self) -> "CleanupStack":
        return self

    def __exit__(self, *_) -> None:
        self.close()
