from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, Tuple

from lumitree.domain.enums import HandLandmark
from lumitree.domain.errors import InvalidInput

# Type aliases
Point2D = Tuple[float, float]
LandmarkPoints = Tuple[Point2D, ...]

NUM_LANDMARKS = 21


@dataclass(frozen=True)
class LandmarkSnapshot:
    """
    The 21 normalised landmarks of one hand in one processed frame.

    Coordinates are in [0, 1] with the origin at the top-left of the
    (unmirrored) video frame. Values slightly outside that range are kept
    as-is; the vision model reports them for partially visible hands.
    """
    points: LandmarkPoints

    def __post_init__(self) -> None:
        if len(self.points) != NUM_LANDMARKS:
            raise InvalidInput(
                f"Expected {NUM_LANDMARKS} landmarks, got {len(self.points)}"
            )

    @classmethod
    def from_points(cls, points: Iterable[Any]) -> "LandmarkSnapshot":
        """
        Build a snapshot from (x, y) pairs or objects exposing .x / .y
        (e.g. MediaPipe NormalizedLandmark).
        """
        coords = []
        for p in points:
            try:
                if hasattr(p, "x") and hasattr(p, "y"):
                    coords.append((float(p.x), float(p.y)))
                else:
                    x, y = p[0], p[1]
                    coords.append((float(x), float(y)))
            except (TypeError, IndexError, ValueError) as exc:
                raise InvalidInput(f"Malformed landmark {p!r}") from exc
        return cls(tuple(coords))

    # ---- convenience accessors ----------------------------------------
    @property
    def wrist(self) -> Point2D:
        return self.points[HandLandmark.WRIST]

    def __getitem__(self, index: int) -> Point2D:
        return self.points[index]

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class EffectParameters:
    """Animation parameters derived from an interaction mode."""
    rotation_speed: float
    sign: int
    snow_multiplier: float
    frozen: bool


@dataclass(frozen=True)
class VideoFrame:
    """One captured video frame (BGR) and its capture timestamp."""
    image: Any
    timestamp_ms: float
