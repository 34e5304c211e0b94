"""
HandTracker — encapsulates all MediaPipe logic.
The rest of the application never imports mediapipe directly.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Optional

import cv2
import mediapipe as mp
from mediapipe.tasks import python as mp_tasks
from mediapipe.tasks.python import vision

from lumitree.core.base import LandmarkSource
from lumitree.domain.errors import InitializationFailure
from lumitree.domain.models import LandmarkSnapshot
from lumitree.utils.constants import HAND_LANDMARKER_URL

logger = logging.getLogger(__name__)


class HandTracker(LandmarkSource):
    """
    MediaPipe HandLandmarker running in VIDEO mode, one hand at most.

    Parameters
    ----------
    model_path : Path
        Path to the `hand_landmarker.task` bundle.
    min_hand_detection_confidence : float
    min_hand_presence_confidence : float
    min_tracking_confidence : float
    """

    NAME = "hand_landmarker"

    def __init__(
        self,
        model_path: Path,
        min_hand_detection_confidence: float = 0.5,
        min_hand_presence_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
    ) -> None:
        model_path = Path(model_path)
        if not model_path.is_file():
            raise InitializationFailure(
                f"Hand landmarker model not found at {model_path} "
                f"(download it from {HAND_LANDMARKER_URL})"
            )

        options = vision.HandLandmarkerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(model_path)),
            running_mode=vision.RunningMode.VIDEO,
            num_hands=1,
            min_hand_detection_confidence=min_hand_detection_confidence,
            min_hand_presence_confidence=min_hand_presence_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )
        try:
            self._landmarker: Optional[Any] = vision.HandLandmarker.create_from_options(options)
        except (RuntimeError, ValueError) as exc:
            raise InitializationFailure(f"Cannot load hand landmarker: {exc}") from exc
        self._last_ts = -1
        logger.info("Hand landmarker loaded from %s", model_path)

    # ------------------------------------------------------------------
    def detect(self, image: Any, timestamp_ms: float) -> Optional[LandmarkSnapshot]:
        """
        Parameters
        ----------
        image : np.ndarray
            BGR frame from OpenCV.
        timestamp_ms : float
            Frame capture time; MediaPipe requires it to increase strictly.
        """
        if self._landmarker is None:
            return None

        rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)
        # two frames inside the same millisecond would collide after truncation
        ts = max(int(timestamp_ms), self._last_ts + 1)
        self._last_ts = ts
        result = self._landmarker.detect_for_video(mp_image, ts)

        if not result.hand_landmarks:
            return None
        return LandmarkSnapshot.from_points(result.hand_landmarks[0])

    def close(self) -> None:
        landmarker, self._landmarker = self._landmarker, None
        if landmarker is not None:
            landmarker.close()
            logger.info("Hand landmarker closed")
