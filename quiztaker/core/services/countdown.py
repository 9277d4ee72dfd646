"""Countdown clock that drives automatic submission."""

from __future__ import annotations

from collections.abc import Callable
import logging

from quiztaker.core.errors import InvalidDurationError

logger = logging.getLogger(__name__)


class Countdown:
    """Counts whole seconds down to zero.

    The clock does not schedule itself; an owner (the Qt driver, or a test)
    calls :meth:`tick` once per second. Reaching zero fires the expiry
    listeners exactly once. After expiry or :meth:`cancel`, ticks are ignored.
    """

    def __init__(self, duration_seconds: int) -> None:
        if isinstance(duration_seconds, bool) or not isinstance(duration_seconds, int):
            raise InvalidDurationError("Countdown duration must be an integer number of seconds.")
        if duration_seconds <= 0:
            raise InvalidDurationError("Countdown duration must be positive.")
        self._duration_seconds = duration_seconds
        self._remaining_seconds = duration_seconds
        self._running: bool = True
        self._expired: bool = False
        self._cancelled: bool = False
        self._tick_listeners: list[Callable[[int], None]] = []
        self._expiry_listeners: list[Callable[[], None]] = []
        self._cancel_listeners: list[Callable[[], None]] = []

    @property
    def duration_seconds(self) -> int:
        return self._duration_seconds

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @property
    def elapsed_seconds(self) -> int:
        return self._duration_seconds - self._remaining_seconds

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_expired(self) -> bool:
        return self._expired

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def add_tick_listener(self, listener: Callable[[int], None]) -> None:
        self._tick_listeners.append(listener)

    def add_expiry_listener(self, listener: Callable[[], None]) -> None:
        self._expiry_listeners.append(listener)

    def add_cancel_listener(self, listener: Callable[[], None]) -> None:
        self._cancel_listeners.append(listener)

    def tick(self) -> int:
        """Advance one second and return the remaining seconds."""
        if not self._running:
            return self._remaining_seconds

        self._remaining_seconds = max(0, self._remaining_seconds - 1)
        if self._remaining_seconds == 0:
            self._running = False
        for listener in list(self._tick_listeners):
            listener(self._remaining_seconds)

        if self._remaining_seconds == 0 and not self._expired:
            self._expired = True
            logger.info("Countdown of %ss expired", self._duration_seconds)
            for listener in list(self._expiry_listeners):
                listener()
        return self._remaining_seconds

    def advance(self, seconds: int) -> int:
        """Tick ``seconds`` times, stopping early once the clock is no longer running."""
        for _ in range(max(0, seconds)):
            if not self._running:
                break
            self.tick()
        return self._remaining_seconds

    def cancel(self) -> None:
        """Stop the clock; no further tick reaches any listener."""
        if not self._running:
            return
        self._running = False
        self._cancelled = True
        for listener in list(self._cancel_listeners):
            listener()
