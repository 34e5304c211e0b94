"""
main.py — Application entry point.

    Camera → HandTracker → classify → ModeState → OrbitController / SnowController

Two hosts share the same pipeline:
  - run()          Qt window, ticks driven by the Qt event loop.
  - run_headless() plain OpenCV window, ticks pumped by the window loop.
"""
from __future__ import annotations
import logging
import sys
from typing import Optional, Sequence

from lumitree.app.config import AppConfig, default_config, wants_headless
from lumitree.core.camera import Camera
from lumitree.core.effect_mapper import effects_for
from lumitree.core.hand_tracker import HandTracker
from lumitree.core.mode_state import ModeState
from lumitree.core.poll_loop import PollLoop
from lumitree.core.scheduler import ManualTickScheduler, TickScheduler
from lumitree.domain.enums import LoopStatus
from lumitree.effects.orbit import OrbitController
from lumitree.effects.snow import SnowController

logger = logging.getLogger(__name__)


def build_loop(config: AppConfig, mode_state: ModeState, scheduler: TickScheduler) -> PollLoop:
    """Wire the real camera and hand landmarker into a fresh poll loop."""
    return PollLoop(
        video_factory=lambda: Camera(
            config.camera_device, config.frame_width, config.frame_height
        ),
        source_factory=lambda: HandTracker(
            config.model_path,
            min_hand_detection_confidence=config.min_hand_detection_confidence,
            min_hand_presence_confidence=config.min_hand_presence_confidence,
            min_tracking_confidence=config.min_tracking_confidence,
        ),
        mode_state=mode_state,
        scheduler=scheduler,
        tick_interval=config.tick_interval,
    )


class LumitreeApp:
    """
    Qt application controller.

    Owns the mode state and its consumers, and connects the poll loop to
    the window. The poll loop is replaced (never restarted) on "Restart".
    """

    def __init__(self, config: AppConfig = default_config) -> None:
        from lumitree.app.main_window import MainWindow
        from lumitree.app.qt_scheduler import QtTickScheduler
        from lumitree.app.scene_widget import SceneWidget

        self._config = config
        self._mode_state = ModeState()

        self._orbit = OrbitController()
        self._snow = SnowController(count=config.snow_count, fall_speed=config.snow_fall_speed)
        self._orbit.attach(self._mode_state)
        self._snow.attach(self._mode_state)

        self._scheduler = QtTickScheduler()
        self._scene = SceneWidget(self._orbit, self._snow, fps=config.tick_rate)
        self._window = MainWindow(self._scene, mirror_preview=config.mirror_preview)
        self._window.restart_button.clicked.connect(self.restart)
        self._unsubscribe_window = self._mode_state.subscribe(self._window.on_mode)

        self._loop: Optional[PollLoop] = None

    # ------------------------------------------------------------------
    def start(self) -> None:
        self._start_loop()
        self._window.show()

    def stop(self) -> None:
        if self._loop is not None:
            self._loop.stop()
        self._scene.stop()
        self._unsubscribe_window()
        self._orbit.detach()
        self._snow.detach()

    def restart(self) -> None:
        if self._loop is not None:
            self._loop.stop()
        self._start_loop()
        self._window.log("[INFO] Hand tracking restarted", "#6699cc")

    # ------------------------------------------------------------------
    def _start_loop(self) -> None:
        self._loop = build_loop(self._config, self._mode_state, self._scheduler)
        self._loop.subscribe_status(self._on_status)
        self._loop.subscribe_frames(self._window.on_frame)
        self._loop.start()

    def _on_status(self, status: LoopStatus) -> None:
        self._window.on_status(status)
        if status is LoopStatus.FAILED and self._loop is not None and self._loop.last_error:
            self._window.log(f"[ERROR] {self._loop.last_error}", "#ff6b6b")


def run(config: AppConfig = default_config) -> int:
    from PyQt6.QtWidgets import QApplication

    qapp = QApplication.instance() or QApplication(sys.argv)
    app = LumitreeApp(config)
    qapp.aboutToQuit.connect(app.stop)
    app.start()
    return qapp.exec()


def run_headless(config: AppConfig = default_config) -> int:
    from lumitree.app.ui import OpenCVUI

    mode_state = ModeState()
    scheduler  = ManualTickScheduler()
    loop       = build_loop(config, mode_state, scheduler)
    ui         = OpenCVUI(config)

    latest = {"frame": None, "snapshot": None}

    def _on_frame(frame, snapshot, _mode) -> None:
        latest["frame"] = frame.image
        latest["snapshot"] = snapshot

    loop.subscribe_frames(_on_frame)
    loop.start()
    try:
        while True:
            scheduler.run_pending()
            mode = mode_state.current
            ui.render(
                frame=latest["frame"],
                mode=mode,
                effects=effects_for(mode),
                status=loop.status,
                snapshot=latest["snapshot"],
            )
            if ui.should_quit():
                break
    finally:
        loop.stop()
        ui.close()
        logger.info("Application closed cleanly")
    return 1 if loop.status is LoopStatus.FAILED else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    config = AppConfig.from_args(argv)
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    logger.info("Model   : %s", config.model_path)
    logger.info("Camera  : %d (%dx%d)", config.camera_device, config.frame_width, config.frame_height)
    logger.info("Tick    : %d Hz", config.tick_rate)

    if wants_headless(argv):
        return run_headless(config)
    return run(config)


if __name__ == "__main__":
    sys.exit(main())
