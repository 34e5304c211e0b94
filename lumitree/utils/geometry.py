"""
Pure geometric utility functions.
No imports from the rest of the project — safe to use anywhere.
"""
from __future__ import annotations
import math
from typing import Sequence, Tuple

Point2D = Tuple[float, float]


def dist(a: Point2D, b: Point2D) -> float:
    """Euclidean distance between two 2D points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def mean_distance(origin: Point2D, points: Sequence[Point2D]) -> float:
    """
    Mean distance from `origin` to each of `points`.
    Uses fsum so N equal distances average back to exactly that distance.
    """
    if not points:
        return 0.0
    return math.fsum(dist(origin, p) for p in points) / len(points)
