"""
Shared constants and geometry helpers.
"""

from .constants import *
from .geometry import dist, mean_distance

__all__ = [
    'dist',
    'mean_distance',
    'WRIST',
    'FINGERTIPS',
    'OPENNESS_THRESHOLD',
    'LOW_ZONE_Y',
    'LEFT_ZONE_X',
    'RIGHT_ZONE_X',
    'IDLE_ROTATION_SPEED',
    'FAST_ROTATION_SPEED',
    'TURN_ROTATION_SPEED',
    'FAST_SNOW_MULTIPLIER',
    'AUTO_ROTATE_RADIANS_PER_UNIT',
    'HAND_LANDMARKER_URL',
]
