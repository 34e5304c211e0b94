"""
lumitree — a luminescent particle tree steered by hand gestures.
"""

__version__ = "0.1.0"
