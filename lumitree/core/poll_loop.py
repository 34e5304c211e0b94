"""
PollLoop — the acquisition & poll driver.

    VideoSource → LandmarkSource → classify → ModeState.set

Lifecycle:

    UNINITIALIZED ──start()/acquired──▶ ACTIVE ──stop()──▶ STOPPED
          │                               │
          └──acquisition failed──▶ FAILED ◀┘ (unexpected tick error)

Design decisions:
  - Acquisition (camera + model) runs once on an executor; the result is
    handed back to the host thread through the scheduler.
  - Every tick runs on the host thread and reschedules itself, so two
    ticks never overlap.
  - A frame whose timestamp is not newer than the last processed one is
    skipped, which keeps mode updates in capture order.
  - stop() never waits: whatever acquisition is still in flight is released
    as soon as it resolves, and a finished one still queued for the host
    thread is released on the spot.
"""
from __future__ import annotations
import functools
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple

from lumitree.core.base import LandmarkSource, VideoSource
from lumitree.core.cleanup import CleanupStack
from lumitree.core.gesture_classifier import classify
from lumitree.core.mode_state import ModeState
from lumitree.core.scheduler import TickHandle, TickScheduler
from lumitree.domain.enums import InteractionMode, LoopStatus
from lumitree.domain.errors import (
    InitializationFailure,
    InvalidInput,
    ResourceReleaseFailure,
)
from lumitree.domain.models import LandmarkSnapshot, VideoFrame

logger = logging.getLogger(__name__)

StatusCallback = Callable[[LoopStatus], None]
FrameCallback = Callable[[VideoFrame, Optional[LandmarkSnapshot], InteractionMode], None]
Sources = Tuple[VideoSource, LandmarkSource]


class PollLoop:
    """
    Parameters
    ----------
    video_factory : callable
        Opens the video source. May raise; called off the host thread.
    source_factory : callable
        Opens the landmark source. May raise; called off the host thread.
    mode_state : ModeState
        Written once per processed frame.
    scheduler : TickScheduler
        Host tick provider.
    tick_interval : float
        Seconds between polls (default: 60 Hz).
    executor : Executor, optional
        Runs the acquisition sequence. A private single-thread pool is
        created (and shut down on stop) when omitted.
    """

    def __init__(
        self,
        video_factory: Callable[[], VideoSource],
        source_factory: Callable[[], LandmarkSource],
        mode_state: ModeState,
        scheduler: TickScheduler,
        tick_interval: float = 1.0 / 60.0,
        executor: Optional[Executor] = None,
    ) -> None:
        self._video_factory  = video_factory
        self._source_factory = source_factory
        self._mode_state     = mode_state
        self._scheduler      = scheduler
        self._tick_interval  = tick_interval

        self._owns_executor = executor is None
        self._executor: Optional[Executor] = executor

        self._status = LoopStatus.UNINITIALIZED
        self._started = False
        self._stop_requested = False
        self._handoff_lock = threading.Lock()
        self._queued: Optional["Future[Sources]"] = None

        self._video:  Optional[VideoSource]    = None
        self._source: Optional[LandmarkSource] = None
        self._tick_handle: Optional[TickHandle] = None
        self._frame_cursor: Optional[float] = None
        self._last_mode: Optional[InteractionMode] = None

        self._frames_processed = 0
        self._frames_skipped = 0
        self._last_error: Optional[BaseException] = None
        self._release_failures: List[ResourceReleaseFailure] = []

        self._status_callbacks: List[StatusCallback] = []
        self._frame_callbacks: List[FrameCallback] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Begin acquisition. A loop can be started only once."""
        if self._started:
            raise RuntimeError("PollLoop already started; create a new instance to restart")
        self._started = True
        self._frame_cursor = None
        self._last_mode = None

        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="lumitree-acquire"
            )
        logger.info("Poll loop starting")
        future = self._executor.submit(self._acquire)
        future.add_done_callback(self._hand_off)

    def stop(self) -> None:
        """
        Cancel the pending tick and release the landmark source and the
        video source. Safe in any state and safe to call repeatedly.
        """
        with self._handoff_lock:
            self._stop_requested = True
            queued, self._queued = self._queued, None
        if queued is not None:
            # handed off but not yet picked up by the host thread
            self._discard_acquired(queued)

        stack = CleanupStack()
        stack.push("pending tick", self._cancel_tick)
        stack.push("landmark source", self._close_source)
        stack.push("video source", self._release_video)
        self._release_failures.extend(stack.close())

        if self._owns_executor and self._executor is not None:
            executor, self._executor = self._executor, None
            executor.shutdown(wait=False, cancel_futures=True)

        if not self._status.terminal:
            self._set_status(LoopStatus.STOPPED)

    # ---- observers ----------------------------------------------------
    def subscribe_status(self, callback: StatusCallback) -> Callable[[], None]:
        self._status_callbacks.append(callback)
        return lambda: _discard(self._status_callbacks, callback)

    def subscribe_frames(self, callback: FrameCallback) -> Callable[[], None]:
        """`callback(frame, snapshot, mode)` after every processed frame."""
        self._frame_callbacks.append(callback)
        return lambda: _discard(self._frame_callbacks, callback)

    # ---- read-only state ----------------------------------------------
    @property
    def status(self) -> LoopStatus:
        return self._status

    @property
    def last_error(self) -> Optional[BaseException]:
        return self._last_error

    @property
    def frame_cursor(self) -> Optional[float]:
        return self._frame_cursor

    @property
    def frames_processed(self) -> int:
        return self._frames_processed

    @property
    def frames_skipped(self) -> int:
        return self._frames_skipped

    @property
    def release_failures(self) -> List[ResourceReleaseFailure]:
        return list(self._release_failures)

    # ------------------------------------------------------------------
    # Acquisition (runs on the executor)
    # ------------------------------------------------------------------
    def _acquire(self) -> Sources:
        try:
            video = self._video_factory()
        except InitializationFailure:
            raise
        except Exception as exc:
            raise InitializationFailure(f"Video acquisition failed: {exc}") from exc

        try:
            source = self._source_factory()
        except Exception as exc:
            _release_quietly("video source", video.release)
            if isinstance(exc, InitializationFailure):
                raise
            raise InitializationFailure(f"Landmark source acquisition failed: {exc}") from exc

        return video, source

    def _hand_off(self, future: "Future[Sources]") -> None:
        """Done-callback; may run on the executor thread."""
        with self._handoff_lock:
            stopped = self._stop_requested
            if not stopped:
                self._queued = future
        if stopped:
            # stop() already ran: nobody will pick these up on the host thread
            self._discard_acquired(future)
            return
        self._scheduler.call_soon_threadsafe(functools.partial(self._on_acquired, future))

    def _on_acquired(self, future: "Future[Sources]") -> None:
        with self._handoff_lock:
            if self._queued is not future:
                return    # stop() already released it
            self._queued = None
        if future.cancelled():
            return

        exc = future.exception()
        if exc is not None:
            self._fail(exc)
            return

        self._video, self._source = future.result()
        self._set_status(LoopStatus.ACTIVE)
        self._schedule_tick()

    def _discard_acquired(self, future: "Future[Sources]") -> None:
        if future.cancelled() or future.exception() is not None:
            return
        video, source = future.result()
        logger.info("Acquisition finished after stop; releasing")
        stack = CleanupStack()
        stack.push("landmark source", source.close)
        stack.push("video source", video.release)
        self._release_failures.extend(stack.close())

    # ------------------------------------------------------------------
    # Ticks (host thread)
    # ------------------------------------------------------------------
    def _schedule_tick(self) -> None:
        self._tick_handle = self._scheduler.call_later(self._tick_interval, self._tick)

    def _tick(self) -> None:
        self._tick_handle = None
        if self._status is not LoopStatus.ACTIVE:
            return
        try:
            self._poll_once()
        except Exception as exc:
            logger.exception("Poll tick failed; stopping hand tracking")
            self._fail(exc)
            return
        if self._status is LoopStatus.ACTIVE:
            self._schedule_tick()

    def _poll_once(self) -> None:
        frame = self._video.read()
        if frame is None:
            return

        timestamp = frame.timestamp_ms
        if self._frame_cursor is not None and timestamp <= self._frame_cursor:
            self._frames_skipped += 1
            return
        self._frame_cursor = timestamp

        try:
            snapshot = self._source.detect(frame.image, timestamp)
            mode = classify(snapshot)
        except InvalidInput as exc:
            logger.warning("Ignoring malformed landmarks at %.1f ms: %s", timestamp, exc)
            snapshot = None
            mode = classify(None)

        if mode != self._last_mode:
            logger.debug("[MODE] %s → %s", self._last_mode, mode.value)
            self._last_mode = mode

        self._mode_state.set(mode)
        self._frames_processed += 1

        for callback in list(self._frame_callbacks):
            callback(frame, snapshot, mode)

    # ------------------------------------------------------------------
    # Teardown helpers
    # ------------------------------------------------------------------
    def _cancel_tick(self) -> None:
        handle, self._tick_handle = self._tick_handle, None
        if handle is not None:
            handle.cancel()

    def _close_source(self) -> None:
        source, self._source = self._source, None
        if source is not None:
            source.close()

    def _release_video(self) -> None:
        video, self._video = self._video, None
        if video is not None:
            video.release()

    def _fail(self, exc: BaseException) -> None:
        self._last_error = exc
        logger.error("Hand tracking unavailable: %s", exc)
        # every failure path leaves the scene in NORMAL, even if a consumer breaks
        try:
            self._mode_state.set(InteractionMode.NORMAL)
        except Exception:
            logger.exception("Mode consumer failed while falling back to NORMAL")
        self._set_status(LoopStatus.FAILED)
        self.stop()

    def _set_status(self, status: LoopStatus) -> None:
        if status is self._status:
            return
        logger.info("[STATUS] %s → %s", self._status.value, status.value)
        self._status = status
        for callback in list(self._status_callbacks):
            callback(status)

    def __repr__(self) -> str:
        return (
            f"<PollLoop status={self._status.value} "
            f"processed={self._frames_processed} skipped={self._frames_skipped}>"
        )


# ---- module helpers ----------------------------------------------------
def _discard(callbacks: list, callback) -> None:
    try:
        callbacks.remove(callback)
    except ValueError:
        pass


def _release_quietly(name: str, action: Callable[[], None]) -> None:
    stack = CleanupStack()
    stack.push(name, action)
    stack.close()
