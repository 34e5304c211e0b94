from lumitree.core.base import LandmarkSource, VideoSource
from lumitree.core.cleanup import CleanupStack
from lumitree.core.effect_mapper import effects_for
from lumitree.core.gesture_classifier import classify, openness
from lumitree.core.mode_state import ModeState
from lumitree.core.poll_loop import PollLoop
from lumitree.core.scheduler import ManualTickScheduler, TickHandle, TickScheduler

# Camera and HandTracker pull in OpenCV / MediaPipe; import them from
# lumitree.core.camera and lumitree.core.hand_tracker directly.

__all__ = [
    "LandmarkSource",
    "VideoSource",
    "CleanupStack",
    "effects_for",
    "classify",
    "openness",
    "ModeState",
    "PollLoop",
    "ManualTickScheduler",
    "TickHandle",
    "TickScheduler",
]
