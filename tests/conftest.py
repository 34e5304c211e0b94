"""Shared fakes and fixtures. Nothing here touches a camera, a model or a display."""

import math
from types import SimpleNamespace
from concurrent.futures import Executor, Future

import numpy as np
import pytest

from lumitree.core.base import LandmarkSource, VideoSource
from lumitree.core.mode_state import ModeState
from lumitree.core.poll_loop import PollLoop
from lumitree.core.scheduler import ManualTickScheduler
from lumitree.domain.models import LandmarkSnapshot, VideoFrame
from lumitree.utils.constants import FINGERTIPS


# ---- snapshots ---------------------------------------------------------
def build_snapshot(wrist=(0.5, 0.5), openness=0.05):
    """
    21 points with every fingertip `openness` away from the wrist, fanned
    upwards; the remaining joints sit halfway between wrist and tip.
    """
    wx, wy = wrist
    points = [(wx, wy)] * 21
    angles = (150.0, 120.0, 90.0, 60.0, 30.0)
    for tip, deg in zip(FINGERTIPS, angles):
        dx = openness * math.cos(math.radians(deg))
        dy = -openness * math.sin(math.radians(deg))
        points[tip] = (wx + dx, wy + dy)
        for joint in range(tip - 3, tip):
            k = (joint - (tip - 4)) / 4.0
            points[joint] = (wx + dx * k, wy + dy * k)
    return LandmarkSnapshot(tuple(points))


@pytest.fixture
def make_snapshot():
    return build_snapshot


# ---- fake collaborators ------------------------------------------------
class FakeVideo(VideoSource):
    """Returns scripted timestamps; the last one repeats once exhausted."""

    def __init__(self, timestamps=(), fail_release=False):
        self._timestamps = list(timestamps)
        self._index = 0
        self._image = np.zeros((4, 4, 3), dtype=np.uint8)
        self.fail_release = fail_release
        self.reads = 0
        self.release_calls = 0

    def read(self):
        self.reads += 1
        if not self._timestamps:
            return None
        ts = self._timestamps[min(self._index, len(self._timestamps) - 1)]
        self._index += 1
        return VideoFrame(image=self._image, timestamp_ms=ts)

    def release(self):
        self.release_calls += 1
        if self.fail_release:
            raise OSError("device busy")


class FakeLandmarks(LandmarkSource):
    """Returns scripted snapshots (None = no hand); the last one repeats."""

    def __init__(self, snapshots=(None,), error=None):
        self._snapshots = list(snapshots) or [None]
        self._index = 0
        self.error = error
        self.calls = []
        self.close_calls = 0

    def detect(self, image, timestamp_ms):
        self.calls.append(timestamp_ms)
        if self.error is not None:
            raise self.error
        snap = self._snapshots[min(self._index, len(self._snapshots) - 1)]
        self._index += 1
        return snap

    def close(self):
        self.close_calls += 1


# ---- executors ---------------------------------------------------------
class ImmediateExecutor(Executor):
    """Runs submitted work synchronously in the caller's thread."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


class DeferredExecutor(Executor):
    """Holds submitted work until finish() is called."""

    def __init__(self):
        self._work = []

    def submit(self, fn, *args, **kwargs):
        future = Future()
        self._work.append((future, fn, args, kwargs))
        return future

    def finish(self):
        work, self._work = self._work, []
        for future, fn, args, kwargs in work:
            try:
                future.set_result(fn(*args, **kwargs))
            except Exception as exc:
                future.set_exception(exc)


@pytest.fixture
def scheduler():
    return ManualTickScheduler()


@pytest.fixture
def mode_state():
    return ModeState()


@pytest.fixture
def recorded_modes(mode_state):
    modes = []
    mode_state.subscribe(modes.append)
    return modes


@pytest.fixture
def fakes():
    return SimpleNamespace(
        Video=FakeVideo,
        Landmarks=FakeLandmarks,
        ImmediateExecutor=ImmediateExecutor,
        DeferredExecutor=DeferredExecutor,
    )


@pytest.fixture
def make_loop(scheduler, mode_state):
    """Build a PollLoop over fake sources; acquisition runs synchronously."""

    def _make(video=None, landmarks=None, executor=None, tick_interval=0.0):
        video = video if video is not None else FakeVideo()
        landmarks = landmarks if landmarks is not None else FakeLandmarks()
        return PollLoop(
            video_factory=lambda: video,
            source_factory=lambda: landmarks,
            mode_state=mode_state,
            scheduler=scheduler,
            tick_interval=tick_interval,
            executor=executor if executor is not None else ImmediateExecutor(),
        )

    return _make


@pytest.fixture
def active_loop(make_loop, scheduler):
    """Start a loop and run the acquisition hand-off so it is ACTIVE."""

    def _start(**kwargs):
        loop = make_loop(**kwargs)
        loop.start()
        scheduler.run_next()
        return loop

    return _start
