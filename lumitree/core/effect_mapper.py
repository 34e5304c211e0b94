"""
Effect mapper — interaction mode -> animation parameters.
"""
from __future__ import annotations
from types import MappingProxyType
from typing import Mapping

from lumitree.domain.enums import InteractionMode
from lumitree.domain.models import EffectParameters
from lumitree.utils.constants import (
    FAST_ROTATION_SPEED,
    FAST_SNOW_MULTIPLIER,
    IDLE_ROTATION_SPEED,
    TURN_ROTATION_SPEED,
)


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _effects(rotation_speed: float, snow_multiplier: float, frozen: bool = False) -> EffectParameters:
    return EffectParameters(
        rotation_speed=rotation_speed,
        sign=_sign(rotation_speed),
        snow_multiplier=snow_multiplier,
        frozen=frozen,
    )


# Negative speed orbits the camera clockwise, so the tree appears to turn left.
EFFECT_TABLE: Mapping[InteractionMode, EffectParameters] = MappingProxyType({
    InteractionMode.NORMAL:       _effects(IDLE_ROTATION_SPEED, 1.0),
    InteractionMode.FROZEN:       _effects(0.0, 0.0, frozen=True),
    InteractionMode.FAST:         _effects(FAST_ROTATION_SPEED, FAST_SNOW_MULTIPLIER),
    InteractionMode.ROTATE_LEFT:  _effects(-TURN_ROTATION_SPEED, 1.0),
    InteractionMode.ROTATE_RIGHT: _effects(TURN_ROTATION_SPEED, 1.0),
})


def effects_for(mode: InteractionMode) -> EffectParameters:
    """Animation parameters for `mode`. Defined for every mode."""
    return EFFECT_TABLE[InteractionMode(mode)]
