"""
ModeState — holds the current interaction mode and fans updates out to
subscribers.

Single writer (the poll loop), any number of readers. Created by the host
application and injected; there is no module-level instance.
"""
from __future__ import annotations
from typing import Callable, List

from lumitree.domain.enums import InteractionMode

ModeCallback = Callable[[InteractionMode], None]


class ModeState:
    """
    Parameters
    ----------
    initial : InteractionMode
        Mode reported before the first processed frame.
    """

    def __init__(self, initial: InteractionMode = InteractionMode.NORMAL) -> None:
        self._current = InteractionMode(initial)
        self._subscribers: List[ModeCallback] = []

    # ------------------------------------------------------------------
    @property
    def current(self) -> InteractionMode:
        """The mode of the most recently processed frame."""
        return self._current

    def set(self, mode: InteractionMode) -> None:
        """
        Store `mode` and notify every subscriber.

        Subscribers are called on every set, including repeats of the
        current mode; they must tolerate identical updates.
        """
        self._current = InteractionMode(mode)
        for callback in list(self._subscribers):
            callback(self._current)

    # ------------------------------------------------------------------
    def subscribe(self, callback: ModeCallback) -> Callable[[], None]:
        """Register `callback`; returns a function that unsubscribes it."""
        self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: ModeCallback) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def __repr__(self) -> str:
        return f"<ModeState current={self._current.value!r} subscribers={len(self._subscribers)}>"
