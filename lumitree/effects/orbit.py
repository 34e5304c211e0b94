"""
OrbitController — auto-rotating camera orbit around the tree.

Follows the OrbitControls auto-rotate law: every second the azimuth moves
by -2π/60 · speed radians. Negative speeds therefore orbit the camera the
other way round, which makes the tree appear to turn left.
"""
from __future__ import annotations
import math
from typing import Tuple

from lumitree.domain.models import EffectParameters
from lumitree.effects.base import ModeConsumer
from lumitree.utils.constants import AUTO_ROTATE_RADIANS_PER_UNIT


class OrbitController(ModeConsumer):
    """
    Parameters
    ----------
    radius : float
        Horizontal distance from the camera to the tree axis.
    height : float
        Camera height above the tree base.
    """

    NAME = "orbit"

    def __init__(self, radius: float = 24.0, height: float = 8.0) -> None:
        super().__init__()
        self._radius = radius
        self._height = height
        self._azimuth = 0.0

    def apply(self, effects: EffectParameters) -> None:
        self._effects = effects

    def reset(self) -> None:
        self._azimuth = 0.0

    # ------------------------------------------------------------------
    def advance(self, dt: float) -> float:
        """Move the camera by `dt` seconds of auto-rotation; returns the azimuth."""
        if dt <= 0 or self._effects.frozen:
            return self._azimuth
        delta = AUTO_ROTATE_RADIANS_PER_UNIT * self._effects.rotation_speed * dt
        self._azimuth = math.remainder(self._azimuth - delta, 2.0 * math.pi)
        return self._azimuth

    @property
    def speed(self) -> float:
        return self._effects.rotation_speed

    @property
    def azimuth(self) -> float:
        """Camera azimuth in radians, measured from +z towards +x."""
        return self._azimuth

    @property
    def scene_angle(self) -> float:
        """Apparent rotation of the scene as seen through the camera."""
        return -self._azimuth

    @property
    def position(self) -> Tuple[float, float, float]:
        return (
            self._radius * math.sin(self._azimuth),
            self._height,
            self._radius * math.cos(self._azimuth),
        )
