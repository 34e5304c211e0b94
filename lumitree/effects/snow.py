"""
SnowController — particle field of falling snow.

Flakes fall at their own base speed scaled by the current snow multiplier,
wrap back to the top when they reach the floor, and hang still while the
scene is frozen.
"""
from __future__ import annotations
from typing import Optional

import numpy as np

from lumitree.domain.models import EffectParameters
from lumitree.effects.base import ModeConsumer


class SnowController(ModeConsumer):
    """
    Parameters
    ----------
    count : int
        Number of flakes.
    fall_speed : float
        Mean fall speed at multiplier 1.0, in scene units per second.
    half_width : float
        Flakes are spread over [-half_width, half_width] in x and z.
    floor, ceiling : float
        Vertical extent of the field.
    seed : int, optional
        Seed for reproducible layouts.
    """

    NAME = "snow"

    def __init__(
        self,
        count: int = 400,
        fall_speed: float = 0.25,
        half_width: float = 12.0,
        floor: float = -2.0,
        ceiling: float = 16.0,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__()
        if ceiling <= floor:
            raise ValueError("ceiling must be above floor")
        self._count = count
        self._fall_speed = fall_speed
        self._half_width = half_width
        self._floor = floor
        self._ceiling = ceiling
        self._seed = seed
        self.reset()

    def apply(self, effects: EffectParameters) -> None:
        self._effects = effects

    def reset(self) -> None:
        rng = np.random.default_rng(self._seed)
        n = self._count
        self._positions = np.empty((n, 3), dtype=np.float64)
        self._positions[:, 0] = rng.uniform(-self._half_width, self._half_width, n)
        self._positions[:, 1] = rng.uniform(self._floor, self._ceiling, n)
        self._positions[:, 2] = rng.uniform(-self._half_width, self._half_width, n)
        self._speeds = rng.uniform(0.5, 1.5, n) * self._fall_speed

    # ------------------------------------------------------------------
    def advance(self, dt: float) -> None:
        """Let `dt` seconds of snowfall happen."""
        if dt <= 0 or self._effects.frozen:
            return
        y = self._positions[:, 1]
        y -= self._speeds * self._effects.snow_multiplier * dt
        span = self._ceiling - self._floor
        below = y < self._floor
        if np.any(below):
            y[below] = self._floor + np.mod(y[below] - self._floor, span)

    @property
    def positions(self) -> np.ndarray:
        """(count, 3) array of flake positions; read-only view."""
        view = self._positions.view()
        view.flags.writeable = False
        return view

    @property
    def multiplier(self) -> float:
        return self._effects.snow_multiplier

    @property
    def frozen(self) -> bool:
        return self._effects.frozen

    @property
    def floor(self) -> float:
        return self._floor

    @property
    def ceiling(self) -> float:
        return self._ceiling
