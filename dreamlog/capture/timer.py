"""Cancellable repeating timer used for recording duration ticks."""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RepeatingTimer:
    """Calls `callback` every `interval` seconds on a daemon thread until cancelled.

    `cancel()` never blocks, so it is safe to call while holding a lock the
    callback also takes, and from inside the callback itself.
    """

    def __init__(self, interval: float, callback: Callable[[], None], name: str = "RepeatingTimer"):
        if interval <= 0:
            raise ValueError(f"Timer interval must be positive, got {interval}")
        self.interval = interval
        self.callback = callback
        self.name = name
        self.ticks = 0

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop_event.is_set()

    def start(self) -> None:
        if self._thread is not None:
            logger.warning(f"{self.name} already started")
            return
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.name = self.name
        self._thread.start()

    def cancel(self) -> None:
        self._stop_event.set()

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the timer thread to exit. Call `cancel()` first."""
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join(timeout=timeout)

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            self.ticks += 1
            try:
                self.callback()
            except Exception as e:
                logger.error(f"{self.name} callback failed, stopping timer: {e}")
                self._stop_event.set()
