"""
Camera — thin wrapper around OpenCV VideoCapture.

A background reader thread keeps only the most recent frame, so read()
never blocks the host tick. No ML, no gesture logic.
"""
from __future__ import annotations
import logging
import threading
import time
from typing import Optional

import cv2

from lumitree.core.base import VideoSource
from lumitree.domain.errors import InitializationFailure
from lumitree.domain.models import VideoFrame

logger = logging.getLogger(__name__)


class Camera(VideoSource):
    """
    Parameters
    ----------
    device : int
        Camera index (0 = default webcam).
    width, height : int
        Requested capture resolution. The driver may pick the nearest
        supported mode.
    """

    NAME = "camera"

    def __init__(self, device: int = 0, width: int = 320, height: int = 240) -> None:
        self._device = device
        self._cap = cv2.VideoCapture(device)
        if not self._cap.isOpened():
            self._cap.release()
            raise InitializationFailure(f"Cannot open camera device {device}")

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)

        self._lock = threading.Lock()
        self._latest: Optional[VideoFrame] = None
        self._stop = threading.Event()
        self._released = False
        self._t0 = time.monotonic()

        self._thread = threading.Thread(
            target=self._reader, name=f"camera-{device}", daemon=True
        )
        self._thread.start()
        logger.info("Camera %s opened (%dx%d requested)", device, width, height)

    # ------------------------------------------------------------------
    def _reader(self) -> None:
        while not self._stop.is_set():
            ok, image = self._cap.read()
            if not ok:
                time.sleep(0.01)
                continue
            stamp = (time.monotonic() - self._t0) * 1000.0
            with self._lock:
                self._latest = VideoFrame(image=image, timestamp_ms=stamp)

    def read(self) -> Optional[VideoFrame]:
        with self._lock:
            return self._latest

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._stop.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=1.0)
        self._cap.release()
        logger.info("Camera %s released", self._device)
