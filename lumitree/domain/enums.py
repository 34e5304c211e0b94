from enum import Enum, IntEnum


class InteractionMode(str, Enum):
    """Interaction modes derived from the current hand pose."""
    NORMAL       = "normal"
    FROZEN       = "frozen"
    FAST         = "fast"
    ROTATE_LEFT  = "rotateLeft"
    ROTATE_RIGHT = "rotateRight"

    @property
    def label(self) -> str:
        return _MODE_LABELS[self]


_MODE_LABELS = {
    InteractionMode.NORMAL:       "NORMAL",
    InteractionMode.FROZEN:       "FREEZE",
    InteractionMode.FAST:         "FAST",
    InteractionMode.ROTATE_LEFT:  "ROTATE LEFT",
    InteractionMode.ROTATE_RIGHT: "ROTATE RIGHT",
}


class LoopStatus(str, Enum):
    """Lifecycle of the acquisition & poll loop."""
    UNINITIALIZED = "UNINITIALIZED"
    ACTIVE        = "ACTIVE"
    STOPPED       = "STOPPED"
    FAILED        = "FAILED"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def terminal(self) -> bool:
        return self in (LoopStatus.STOPPED, LoopStatus.FAILED)


_STATUS_LABELS = {
    LoopStatus.UNINITIALIZED: "Initializing...",
    LoopStatus.ACTIVE:        "Active",
    LoopStatus.STOPPED:       "Stopped",
    LoopStatus.FAILED:        "Camera Error",
}


class HandLandmark(IntEnum):
    """MediaPipe hand landmark indices (21 per hand)."""
    WRIST             = 0
    THUMB_CMC         = 1
    THUMB_MCP         = 2
    THUMB_IP          = 3
    THUMB_TIP         = 4
    INDEX_FINGER_MCP  = 5
    INDEX_FINGER_PIP  = 6
    INDEX_FINGER_DIP  = 7
    INDEX_FINGER_TIP  = 8
    MIDDLE_FINGER_MCP = 9
    MIDDLE_FINGER_PIP = 10
    MIDDLE_FINGER_DIP = 11
    MIDDLE_FINGER_TIP = 12
    RING_FINGER_MCP   = 13
    RING_FINGER_PIP   = 14
    RING_FINGER_DIP   = 15
    RING_FINGER_TIP   = 16
    PINKY_MCP         = 17
    PINKY_PIP         = 18
    PINKY_DIP         = 19
    PINKY_TIP         = 20
