"""
Host applications: Qt window and headless OpenCV window.
"""

from .config import AppConfig, default_config

__all__ = [
    'AppConfig',
    'default_config',
]
