"""
Gesture classifier — maps one landmark snapshot to one interaction mode.

Pure geometry, no buffer, no history: the same snapshot always yields the
same mode.
"""
from __future__ import annotations
from typing import Optional, Sequence, Union

from lumitree.domain.enums import InteractionMode
from lumitree.domain.models import LandmarkSnapshot, Point2D
from lumitree.utils.constants import (
    FINGERTIPS,
    LEFT_ZONE_X,
    LOW_ZONE_Y,
    OPENNESS_THRESHOLD,
    RIGHT_ZONE_X,
    WRIST,
)
from lumitree.utils.geometry import mean_distance

SnapshotLike = Union[LandmarkSnapshot, Sequence[Point2D]]


def _as_snapshot(snapshot: SnapshotLike) -> LandmarkSnapshot:
    if isinstance(snapshot, LandmarkSnapshot):
        return snapshot
    return LandmarkSnapshot.from_points(snapshot)


def openness(snapshot: SnapshotLike) -> float:
    """Mean wrist -> fingertip distance, in normalised frame units."""
    snap = _as_snapshot(snapshot)
    wrist = snap[WRIST]
    return mean_distance(wrist, [snap[i] for i in FINGERTIPS])


def classify(snapshot: Optional[SnapshotLike]) -> InteractionMode:
    """
    Parameters
    ----------
    snapshot : LandmarkSnapshot | sequence of (x, y) | None
        The hand seen in the current frame, or None when no hand was found.

    Returns
    -------
    InteractionMode

    Raises
    ------
    InvalidInput
        If a snapshot is given with anything other than 21 points.

    Rule order (first match wins):
    1. No hand         -> NORMAL
    2. Open hand       -> FROZEN (wins over every position rule)
    3. Hand low        -> FAST
    4. Hand left       -> ROTATE_LEFT
    5. Hand right      -> ROTATE_RIGHT
    6. Anything else   -> NORMAL
    """
    if snapshot is None:
        return InteractionMode.NORMAL

    snap = _as_snapshot(snapshot)
    wrist_x, wrist_y = snap.wrist

    if openness(snap) > OPENNESS_THRESHOLD:
        return InteractionMode.FROZEN
    if wrist_y > LOW_ZONE_Y:
        return InteractionMode.FAST
    # x follows the unmirrored video frame; the preview mirror is cosmetic
    if wrist_x < LEFT_ZONE_X:
        return InteractionMode.ROTATE_LEFT
    if wrist_x > RIGHT_ZONE_X:
        return InteractionMode.ROTATE_RIGHT
    return InteractionMode.NORMAL
