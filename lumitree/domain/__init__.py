from lumitree.domain.enums import HandLandmark, InteractionMode, LoopStatus
from lumitree.domain.errors import (
    InitializationFailure,
    InvalidInput,
    LumitreeError,
    ResourceReleaseFailure,
)
from lumitree.domain.models import (
    NUM_LANDMARKS,
    EffectParameters,
    LandmarkSnapshot,
    Point2D,
    VideoFrame,
)

__all__ = [
    "HandLandmark",
    "InteractionMode",
    "LoopStatus",
    "LumitreeError",
    "InitializationFailure",
    "InvalidInput",
    "ResourceReleaseFailure",
    "NUM_LANDMARKS",
    "EffectParameters",
    "LandmarkSnapshot",
    "Point2D",
    "VideoFrame",
]
