"""Cancellable repeating task used for live position updates."""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class LiveHandle:
    """Handle to a running :class:`RepeatingTask`; the only way to stop it."""

    def __init__(self, thread: threading.Thread, stop: threading.Event) -> None:
        self._thread = thread
        self._stop = stop

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._stop.is_set()

    def cancel(self, timeout: float | None = None) -> None:
        """Stop the task and wait for its thread to exit."""
        self._stop.set()
        if self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the task stops. Returns False on timeout."""
        self._thread.join(timeout)
        return not self._thread.is_alive()


class RepeatingTask:
    """Calls ``callback`` every ``interval_seconds`` on a daemon thread.

    The first call happens one interval after :meth:`start`. An exception
    raised by the callback is logged and ends the task.

    Args:
        interval_seconds: Delay between calls.
        callback: Zero-argument function to run.
        name: Thread name, for logs.
    """

    def __init__(
        self,
        interval_seconds: float,
        callback: Callable[[], None],
        name: str = "skypass-live",
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        self.interval_seconds = interval_seconds
        self.callback = callback
        self.name = name

    def start(self) -> LiveHandle:
        stop = threading.Event()
        thread = threading.Thread(target=self._run, args=(stop,), name=self.name, daemon=True)
        handle = LiveHandle(thread, stop)
        thread.start()
        logger.debug("Started %s every %.2fs", self.name, self.interval_seconds)
        return handle

    def _run(self, stop: threading.Event) -> None:
        while not stop.wait(self.interval_seconds):
            try:
                self.callback()
            except Exception:
                logger.exception("%s callback failed; stopping", self.name)
                stop.set()
                break
        logger.debug("Stopped %s", self.name)
