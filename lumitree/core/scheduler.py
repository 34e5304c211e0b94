"""
Host tick providers.

The poll loop never sleeps or spins: it asks the host scheduler to call it
back later. Hosts plug in their own provider (a Qt event loop, a plain
OpenCV window loop, or a test that feeds synthetic ticks).
"""
from __future__ import annotations
import heapq
import itertools
import threading
import time
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Deque, List, Optional, Tuple

Callback = Callable[[], None]


class TickHandle:
    """A scheduled callback that can be cancelled before it fires."""

    __slots__ = ("_callback", "_cancelled", "_on_cancel")

    def __init__(self, callback: Callback, on_cancel: Optional[Callback] = None) -> None:
        self._callback: Optional[Callback] = callback
        self._cancelled = False
        self._on_cancel = on_cancel

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call repeatedly."""
        if self._cancelled:
            return
        self._cancelled = True
        self._callback = None
        if self._on_cancel is not None:
            on_cancel, self._on_cancel = self._on_cancel, None
            on_cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._callback is None

    def run(self) -> bool:
        """Fire the callback once. Returns False if cancelled or already run."""
        callback = self._callback
        if callback is None:
            return False
        self._callback = None
        self._on_cancel = None
        callback()
        return True

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else ("done" if self.done else "pending")
        return f"<TickHandle {state}>"


class TickScheduler(ABC):
    """Base class for all host tick providers."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callback) -> TickHandle:
        """
        Run `callback` on the host thread after at least `delay` seconds.

        Returns
        -------
        TickHandle
            Cancel it to drop the callback if it has not fired yet.
        """

    @abstractmethod
    def call_soon_threadsafe(self, callback: Callback) -> None:
        """
        Hand `callback` over from any thread; it runs on the host thread
        at the next opportunity.
        """


class ManualTickScheduler(TickScheduler):
    """
    Scheduler driven explicitly by its owner.

    The headless host calls run_pending() once per window refresh; tests
    call run_next() to feed one synthetic tick at a time.

    Parameters
    ----------
    clock : callable
        Returns the current time in seconds (default: time.monotonic).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._queue: List[Tuple[float, int, TickHandle]] = []
        self._seq = itertools.count()
        self._incoming: Deque[Callback] = deque()
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    def call_later(self, delay: float, callback: Callback) -> TickHandle:
        handle = TickHandle(callback)
        due = self._clock() + max(0.0, delay)
        heapq.heappush(self._queue, (due, next(self._seq), handle))
        return handle

    def call_soon_threadsafe(self, callback: Callback) -> None:
        with self._lock:
            self._incoming.append(callback)

    # ------------------------------------------------------------------
    def run_pending(self) -> int:
        """
        Run every callback that is due now. Callbacks scheduled while
        running wait for the next call. Returns how many callbacks ran.
        """
        ran = self._drain_incoming()
        now = self._clock()
        due: List[TickHandle] = []
        while self._queue and self._queue[0][0] <= now:
            due.append(heapq.heappop(self._queue)[2])
        for handle in due:
            if handle.run():
                ran += 1
        return ran

    def run_next(self) -> bool:
        """
        Run the earliest live callback regardless of its due time.
        Thread-safe hand-offs go first. Returns False if nothing was pending.
        """
        if self._drain_incoming(limit=1):
            return True
        while self._queue:
            _, _, handle = heapq.heappop(self._queue)
            if handle.run():
                return True
        return False

    @property
    def pending(self) -> int:
        with self._lock:
            incoming = len(self._incoming)
        return incoming + sum(1 for _, _, h in self._queue if not h.done)

    # ------------------------------------------------------------------
    def _drain_incoming(self, limit: Optional[int] = None) -> int:
        ran = 0
        while limit is None or ran < limit:
            with self._lock:
                if not self._incoming:
                    break
                callback = self._incoming.popleft()
            callback()
            ran += 1
        return ran
