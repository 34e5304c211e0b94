"""
MainWindow — the particle scene plus a side panel with the camera
preview, the current mode, the gesture hints and a status log.
"""
from __future__ import annotations
from typing import Dict, Optional

import cv2
import numpy as np
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QImage, QPixmap
from PyQt6.QtWidgets import (
    QHBoxLayout, QLabel, QPushButton, QSizePolicy, QTextEdit, QVBoxLayout, QWidget,
)

from lumitree.app.scene_widget import SceneWidget
from lumitree.domain.enums import InteractionMode, LoopStatus
from lumitree.domain.models import LandmarkSnapshot, VideoFrame

_HINTS: Dict[InteractionMode, str] = {
    InteractionMode.FROZEN:       "• Open Hand: Freeze",
    InteractionMode.FAST:         "• Hand Down: Speed Up",
    InteractionMode.ROTATE_LEFT:  "• Hand Left: Rotate Left",
    InteractionMode.ROTATE_RIGHT: "• Hand Right: Rotate Right",
}
_ACTIVE = "#67e8f9"
_IDLE = "rgba(255,255,255,0.45)"


class MainWindow(QWidget):
    """
    Parameters
    ----------
    scene : SceneWidget
    mirror_preview : bool
        Flip the camera preview horizontally (selfie view). Display only.
    """

    def __init__(self, scene: SceneWidget, mirror_preview: bool = True, parent=None) -> None:
        super().__init__(parent)
        self._scene = scene
        self._mirror = mirror_preview
        self._mode = InteractionMode.NORMAL
        self._setup_ui()

    # ------------------------------------------------------------------
    # UI setup
    # ------------------------------------------------------------------
    def _setup_ui(self) -> None:
        self.setWindowTitle("Luminescent Tree")
        self.setMinimumSize(900, 560)
        self.setStyleSheet("""
            QWidget {
                background-color: #000000;
                color: #e0e0e0;
                font-family: Consolas, monospace;
            }
            QLabel#mode_label {
                font-size: 16px;
                font-weight: bold;
                padding: 6px 12px;
                border-radius: 6px;
                background: rgba(0,0,0,0.7);
            }
            QTextEdit#log {
                color: #7ec8a0;
                font-size: 11px;
                border: 1px solid #333;
                border-radius: 4px;
            }
            QPushButton {
                background-color: #1a1a2e;
                color: #a0c4ff;
                border: 1px solid #334;
                border-radius: 5px;
                padding: 6px 14px;
            }
        """)

        root = QHBoxLayout(self)
        root.setContentsMargins(0, 0, 10, 10)
        root.setSpacing(10)
        root.addWidget(self._scene, stretch=3)

        side = QVBoxLayout()
        side.setSpacing(6)

        self._preview = QLabel()
        self._preview.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preview.setFixedSize(192, 144)
        self._preview.setStyleSheet("background:#111; border-radius:10px; border:2px solid #333;")
        side.addWidget(self._preview)

        self._mode_label = QLabel(InteractionMode.NORMAL.label)
        self._mode_label.setObjectName("mode_label")
        self._mode_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        side.addWidget(self._mode_label)

        self._hint_labels: Dict[InteractionMode, QLabel] = {}
        for mode, text in _HINTS.items():
            lbl = QLabel(text)
            lbl.setStyleSheet(f"font-size:10px; color:{_IDLE};")
            side.addWidget(lbl)
            self._hint_labels[mode] = lbl

        self._status_label = QLabel(LoopStatus.UNINITIALIZED.label)
        self._status_label.setStyleSheet("font-size:11px; color:#888; padding-top:6px;")
        side.addWidget(self._status_label)

        self._log = QTextEdit()
        self._log.setObjectName("log")
        self._log.setReadOnly(True)
        self._log.setSizePolicy(QSizePolicy.Policy.Preferred, QSizePolicy.Policy.Expanding)
        side.addWidget(self._log, stretch=1)

        self.restart_button = QPushButton("Restart tracking")
        side.addWidget(self.restart_button)

        root.addLayout(side, stretch=1)

    # ------------------------------------------------------------------
    # Slots called from the poll loop (GUI thread)
    # ------------------------------------------------------------------
    def on_frame(
        self,
        frame: VideoFrame,
        snapshot: Optional[LandmarkSnapshot],
        mode: InteractionMode,
    ) -> None:
        image = cv2.cvtColor(frame.image, cv2.COLOR_BGR2RGB)
        if snapshot is not None:
            self._draw_landmarks(image, snapshot)
        if self._mirror:
            image = cv2.flip(image, 1)

        h, w, ch = image.shape
        image = np.ascontiguousarray(image)
        qimg = QImage(image.data, w, h, ch * w, QImage.Format.Format_RGB888)
        pix = QPixmap.fromImage(qimg).scaled(
            self._preview.size(),
            Qt.AspectRatioMode.KeepAspectRatioByExpanding,
            Qt.TransformationMode.SmoothTransformation,
        )
        self._preview.setPixmap(pix)

    def on_mode(self, mode: InteractionMode) -> None:
        if mode == self._mode:
            return
        self._mode = mode
        self._mode_label.setText(mode.label)
        active = mode is not InteractionMode.NORMAL
        self._mode_label.setStyleSheet(f"color:{_ACTIVE if active else '#cccccc'};")
        self._preview.setStyleSheet(
            "background:#111; border-radius:10px; border:2px solid "
            + ("#22d3ee;" if active else "#333;")
        )
        for hint_mode, lbl in self._hint_labels.items():
            color = _ACTIVE if hint_mode is mode else _IDLE
            lbl.setStyleSheet(f"font-size:10px; color:{color};")

    def on_status(self, status: LoopStatus) -> None:
        self._status_label.setText(status.label)
        color = "#ff6b6b" if status is LoopStatus.FAILED else "#555"
        self.log(f"[STATUS] {status.label}", color)

    def log(self, msg: str, color: str = "#555") -> None:
        self._log.append(f"<span style='color:{color}'>{msg}</span>")
        sb = self._log.verticalScrollBar()
        sb.setValue(sb.maximum())

    # ------------------------------------------------------------------
    @staticmethod
    def _draw_landmarks(image: np.ndarray, snapshot: LandmarkSnapshot) -> None:
        h, w = image.shape[:2]
        for x, y in snapshot.points:
            cv2.circle(image, (int(x * w), int(y * h)), 2, (103, 232, 249), -1)
