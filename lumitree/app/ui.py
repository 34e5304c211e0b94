"""
OpenCVUI — headless host rendering, isolated from detection and mode logic.

The poll loop never calls cv2 drawing functions directly; it delegates to
this class.
"""
from __future__ import annotations
from typing import Any, Optional

import cv2
import numpy as np

from lumitree.app.config import AppConfig
from lumitree.domain.enums import InteractionMode, LoopStatus
from lumitree.domain.models import EffectParameters, LandmarkSnapshot

_ACTIVE_COLOR = (249, 232, 103)     # BGR cyan
_IDLE_COLOR   = (150, 150, 150)
_ERROR_COLOR  = (80, 80, 255)

_HINTS = (
    (InteractionMode.FROZEN,       "Open Hand: Freeze"),
    (InteractionMode.FAST,         "Hand Down: Speed Up"),
    (InteractionMode.ROTATE_LEFT,  "Hand Left: Rotate Left"),
    (InteractionMode.ROTATE_RIGHT, "Hand Right: Rotate Right"),
)


class OpenCVUI:
    """Draws the HUD onto the camera frame and shows it in a window."""

    def __init__(self, config: AppConfig, window_name: str = "Luminescent Tree") -> None:
        self._cfg  = config
        self._name = window_name

    def render(
        self,
        frame: Optional[Any],
        mode: InteractionMode,
        effects: EffectParameters,
        status: LoopStatus,
        snapshot: Optional[LandmarkSnapshot] = None,
    ) -> None:
        """Mirror frame, draw overlays, show window."""
        if frame is None:
            frame = np.zeros((self._cfg.frame_height, self._cfg.frame_width, 3), dtype=np.uint8)
        else:
            frame = frame.copy()
        h, w = frame.shape[:2]

        if snapshot is not None:
            for x, y in snapshot.points:
                cv2.circle(frame, (int(x * w), int(y * h)), 2, _ACTIVE_COLOR, -1)
        if self._cfg.mirror_preview:
            frame = cv2.flip(frame, 1)

        active = mode is not InteractionMode.NORMAL
        cv2.putText(frame, mode.label, (10, 24),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, _ACTIVE_COLOR if active else (255, 255, 255), 2)

        y = 44
        for hint_mode, text in _HINTS:
            color = _ACTIVE_COLOR if hint_mode is mode else _IDLE_COLOR
            cv2.putText(frame, text, (10, y), cv2.FONT_HERSHEY_SIMPLEX, 0.4, color, 1)
            y += 16

        cv2.putText(frame, f"orbit {effects.rotation_speed:+.1f}  snow x{effects.snow_multiplier:.1f}",
                    (10, h - 28), cv2.FONT_HERSHEY_SIMPLEX, 0.4, _IDLE_COLOR, 1)
        status_color = _ERROR_COLOR if status is LoopStatus.FAILED else _IDLE_COLOR
        cv2.putText(frame, f"{status.label}  (ESC to quit)",
                    (10, h - 10), cv2.FONT_HERSHEY_SIMPLEX, 0.4, status_color, 1)

        cv2.imshow(self._name, frame)

    def should_quit(self) -> bool:
        """Returns True if the user pressed ESC."""
        return (cv2.waitKey(1) & 0xFF) == 27

    def close(self) -> None:
        cv2.destroyAllWindows()
