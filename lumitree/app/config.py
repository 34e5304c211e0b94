from __future__ import annotations
import argparse
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Sequence


@dataclass
class AppConfig:
    """
    Central configuration injected into all components.

    Gesture thresholds are intentionally not here: they are build-time
    constants in lumitree.utils.constants.
    """
    # ---- paths ---------------------------------------------------------
    model_path: Path = Path("models/hand_landmarker.task")

    # ---- camera --------------------------------------------------------
    camera_device: int = 0
    frame_width: int = 320
    frame_height: int = 240
    mirror_preview: bool = True

    # ---- poll loop -----------------------------------------------------
    tick_rate: int = 60

    # ---- hand landmarker -----------------------------------------------
    min_hand_detection_confidence: float = 0.5
    min_hand_presence_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    # ---- scene ---------------------------------------------------------
    snow_count: int = 400
    snow_fall_speed: float = 0.25

    # ---- logging -------------------------------------------------------
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.model_path = Path(self.model_path)
        if self.tick_rate <= 0:
            raise ValueError("tick_rate must be positive")

    @property
    def tick_interval(self) -> float:
        """Seconds between two polls of the camera."""
        return 1.0 / self.tick_rate

    # ------------------------------------------------------------------
    @classmethod
    def from_args(cls, argv: Optional[Sequence[str]] = None) -> "AppConfig":
        """Build a config from command-line arguments (unset flags keep defaults)."""
        args = _build_parser().parse_args(argv)
        known = {f.name for f in fields(cls)}
        overrides = {k: v for k, v in vars(args).items() if k in known and v is not None}
        return cls(**overrides)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lumitree",
        description="Luminescent particle tree driven by hand gestures",
    )
    parser.add_argument("--camera", dest="camera_device", type=int,
                        help="Camera index (default: 0)")
    parser.add_argument("--model", dest="model_path", type=Path,
                        help="Path to hand_landmarker.task")
    parser.add_argument("--width", dest="frame_width", type=int,
                        help="Requested capture width (default: 320)")
    parser.add_argument("--height", dest="frame_height", type=int,
                        help="Requested capture height (default: 240)")
    parser.add_argument("--tick-rate", dest="tick_rate", type=int,
                        help="Camera polls per second (default: 60)")
    parser.add_argument("--no-mirror", dest="mirror_preview", action="store_const",
                        const=False, help="Show the camera preview unmirrored")
    parser.add_argument("--log-level", dest="log_level",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: INFO)")
    parser.add_argument("--headless", action="store_true",
                        help="Use a plain OpenCV window instead of the Qt scene")
    return parser


def wants_headless(argv: Optional[Sequence[str]] = None) -> bool:
    return bool(_build_parser().parse_args(argv).headless)


# Default instance: import and use directly, or override in tests.
default_config = AppConfig()
