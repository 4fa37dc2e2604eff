"""
Timers for overlays.

Uses threading (not asyncio) because the host drives overlays
synchronously. Components take a Scheduler so tests can substitute a
manually advanced clock.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable

logger = logging.getLogger(__name__)


class TimerHandle(ABC):
    """Handle to a scheduled callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop the timer. Safe to call more than once."""


class Scheduler(ABC):
    """Schedules one-shot and periodic callbacks."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay`` seconds."""

    @abstractmethod
    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` every ``interval`` seconds until cancelled."""


class _OneShotTimer(TimerHandle):
    def __init__(self, delay: float, callback: Callable[[], None]):
        self._timer = threading.Timer(delay, callback)
        self._timer.daemon = True
        self._timer.start()

    def cancel(self) -> None:
        self._timer.cancel()


class _RepeatingTimer(TimerHandle):
    def __init__(self, interval: float, callback: Callable[[], None]):
        self._interval = interval
        self._callback = callback
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("Periodic timer callback failed")

    def cancel(self) -> None:
        self._stopped.set()


class ThreadingScheduler(Scheduler):
    """Scheduler backed by ``threading.Timer`` and a daemon ticker thread."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return _OneShotTimer(delay, callback)

    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        return _RepeatingTimer(interval, callback)
