"""
Consumers of the interaction mode: camera orbit and snowfall.
"""

from .base import ModeConsumer
from .orbit import OrbitController
from .snow import SnowController

__all__ = [
    'ModeConsumer',
    'OrbitController',
    'SnowController',
]
