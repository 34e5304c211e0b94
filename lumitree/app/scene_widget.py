"""
SceneWidget — paints the particle tree and the snow.

The widget owns no interaction logic: it advances the orbit and snow
controllers once per repaint and projects their state onto the screen.
"""
from __future__ import annotations
import math
import time

import numpy as np
from PyQt6.QtCore import QPointF, QTimer
from PyQt6.QtGui import QBrush, QColor, QPainter, QPen
from PyQt6.QtWidgets import QSizePolicy, QWidget

from lumitree.effects.orbit import OrbitController
from lumitree.effects.snow import SnowController

_BACKGROUND = QColor(0, 0, 0)
_TREE_COLOR = QColor(255, 120, 200)
_STAR_COLOR = QColor(255, 220, 120)
_SNOW_COLOR = QColor(235, 240, 255)

_TREE_HEIGHT = 10.0
_TREE_RADIUS = 4.0
_TARGET_Y = 4.0
_FOCAL = 1.4            # fraction of the widget height
_NEAR = 0.5


def _make_tree(count: int, seed: int = 7) -> np.ndarray:
    """Points scattered inside a cone standing on the origin."""
    rng = np.random.default_rng(seed)
    h = _TREE_HEIGHT * (1.0 - np.sqrt(rng.uniform(0.0, 1.0, count)))
    r = (1.0 - h / _TREE_HEIGHT) * _TREE_RADIUS * np.sqrt(rng.uniform(0.3, 1.0, count))
    a = rng.uniform(0.0, 2.0 * math.pi, count)
    return np.column_stack([r * np.sin(a), h, r * np.cos(a)])


class SceneWidget(QWidget):
    """
    Parameters
    ----------
    orbit : OrbitController
    snow : SnowController
    fps : int
        Repaint rate.
    """

    def __init__(
        self,
        orbit: OrbitController,
        snow: SnowController,
        fps: int = 60,
        tree_points: int = 1800,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._orbit = orbit
        self._snow = snow
        self._tree = _make_tree(tree_points)
        self._star = np.array([[0.0, _TREE_HEIGHT + 0.4, 0.0]])
        self._last = time.monotonic()

        self.setMinimumSize(480, 480)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._step)
        self._timer.start(max(1, int(1000 / fps)))

    # ------------------------------------------------------------------
    def _step(self) -> None:
        now = time.monotonic()
        dt, self._last = now - self._last, now
        self._orbit.advance(dt)
        self._snow.advance(dt)
        self.update()

    def stop(self) -> None:
        self._timer.stop()

    # ------------------------------------------------------------------
    def _project(self, points: np.ndarray):
        """World -> widget coordinates: the scene turned by the orbit, seen from the camera."""
        phi = self._orbit.scene_angle
        cam_x, _, cam_z = self._orbit.position
        radius = math.hypot(cam_x, cam_z)

        x, y, z = points[:, 0], points[:, 1], points[:, 2]
        xc = x * math.cos(phi) + z * math.sin(phi)
        zc = z * math.cos(phi) - x * math.sin(phi)
        depth = radius - zc

        visible = depth > _NEAR
        f = _FOCAL * self.height()
        sx = self.width() / 2.0 + f * xc[visible] / depth[visible]
        sy = self.height() / 2.0 - f * (y[visible] - _TARGET_Y) / depth[visible]
        return sx, sy

    def _draw_points(self, painter: QPainter, points: np.ndarray, color: QColor, size: float) -> None:
        pen = QPen(color)
        pen.setWidthF(size)
        painter.setPen(pen)
        sx, sy = self._project(points)
        for px, py in zip(sx, sy):
            painter.drawPoint(QPointF(float(px), float(py)))

    def paintEvent(self, _) -> None:
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)
        p.fillRect(self.rect(), QBrush(_BACKGROUND))

        self._draw_points(p, self._tree, _TREE_COLOR, 2.0)
        self._draw_points(p, self._star, _STAR_COLOR, 9.0)
        self._draw_points(p, self._snow.positions, _SNOW_COLOR, 2.5)

        p.setPen(QColor(120, 120, 140))
        p.drawText(10, self.height() - 12,
                   f"orbit {self._orbit.speed:+.1f}   snow x{self._snow.multiplier:.1f}"
                   + ("   (frozen)" if self._snow.frozen else ""))
        p.end()
