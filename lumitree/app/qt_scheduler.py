"""
QtTickScheduler — host tick provider backed by the Qt event loop.

Ticks are single-shot QTimers on the GUI thread; hand-offs from other
threads go through a queued signal so they also land on the GUI thread.
"""
from __future__ import annotations

from PyQt6.QtCore import QObject, Qt, QTimer, pyqtSignal

from lumitree.core.scheduler import Callback, TickHandle, TickScheduler


class _Invoker(QObject):
    """Lives on the GUI thread; runs callables emitted from any thread."""

    invoke = pyqtSignal(object)   # callable

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        # queued even when emitted from the GUI thread itself
        self.invoke.connect(self._run, Qt.ConnectionType.QueuedConnection)

    def _run(self, callback: Callback) -> None:
        callback()


class QtTickScheduler(TickScheduler):
    """Must be created on the GUI thread, after the QApplication."""

    def __init__(self, parent: QObject = None) -> None:
        self._invoker = _Invoker(parent)

    # ------------------------------------------------------------------
    def call_later(self, delay: float, callback: Callback) -> TickHandle:
        timer = QTimer(self._invoker)
        timer.setSingleShot(True)

        def _dispose() -> None:
            timer.stop()
            timer.deleteLater()

        handle = TickHandle(callback, on_cancel=_dispose)

        def _fire() -> None:
            timer.deleteLater()
            handle.run()

        timer.timeout.connect(_fire)
        timer.start(max(0, int(delay * 1000)))
        return handle

    def call_soon_threadsafe(self, callback: Callback) -> None:
        self._invoker.invoke.emit(callback)
