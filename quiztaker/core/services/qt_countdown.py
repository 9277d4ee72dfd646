"""Qt event-loop driver for a Countdown."""

from __future__ import annotations

from PySide6.QtCore import QObject, QTimer, Signal

from quiztaker.constants.quiz_constants import TICK_INTERVAL_MS
from quiztaker.core.services.countdown import Countdown


class QtCountdownDriver(QObject):
    """Ticks a Countdown from a QTimer on the owning thread's event loop.

    The QTimer is stopped synchronously as soon as the countdown is cancelled
    or expires, so a pending timeout never reaches a closed session.
    """

    ticked = Signal(int)
    expired = Signal()

    def __init__(
        self,
        countdown: Countdown,
        interval_ms: int = TICK_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._countdown = countdown
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._handle_timeout)

        countdown.add_tick_listener(self._handle_tick)
        countdown.add_expiry_listener(self._handle_expiry)
        countdown.add_cancel_listener(self.stop)

    def start(self) -> None:
        if self._countdown.is_running and not self._timer.isActive():
            self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def is_active(self) -> bool:
        return self._timer.isActive()

    def _handle_timeout(self) -> None:
        if not self._countdown.is_running:
            self._timer.stop()
            return
        self._countdown.tick()

    def _handle_tick(self, remaining_seconds: int) -> None:
        self.ticked.emit(remaining_seconds)

    def _handle_expiry(self) -> None:
        self._timer.stop()
        self.expired.emit()
