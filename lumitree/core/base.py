"""
Contracts for the two external collaborators the poll loop consumes.

Every video source must:
  - implement read() → VideoFrame | None   (never blocks on the device)
  - implement release()                    (idempotent)

Every landmark source must:
  - implement detect(image, timestamp_ms) → LandmarkSnapshot | None
  - implement close()                      (idempotent)
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Optional

from lumitree.domain.models import LandmarkSnapshot, VideoFrame


class VideoSource(ABC):
    """Base class for frame providers."""

    NAME: str = "video"

    @abstractmethod
    def read(self) -> Optional[VideoFrame]:
        """
        Return the latest available frame.

        Returns
        -------
        VideoFrame | None
            None when no frame has arrived yet. Polling again before the
            device delivers a new frame returns the same timestamp.
        """

    @abstractmethod
    def release(self) -> None:
        """Release the device. Releasing twice is a no-op."""

    def __enter__(self) -> "VideoSource":
        return self

    def __exit__(self, *_) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.NAME!r}>"


class LandmarkSource(ABC):
    """Base class for hand landmark detectors."""

    NAME: str = "landmarks"

    @abstractmethod
    def detect(self, image: Any, timestamp_ms: float) -> Optional[LandmarkSnapshot]:
        """
        Parameters
        ----------
        image : np.ndarray
            BGR frame.
        timestamp_ms : float
            Capture time of the frame; strictly increasing between calls.

        Returns
        -------
        LandmarkSnapshot | None
            The first detected hand, or None when no hand is visible.

        Raises
        ------
        InvalidInput
            If the model returns a malformed landmark list.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the model session. Closing twice is a no-op."""

    def __enter__(self) -> "LandmarkSource":
        return self

    def __exit__(self, *_) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.NAME!r}>"
