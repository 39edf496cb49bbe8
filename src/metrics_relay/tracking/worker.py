"""
Flush Worker - Periodic Flushing in a Background Thread.

Runs are aligned to wall-clock multiples of the interval, so several
processes flushing every 60s all report at the top of the minute.

Design Notes:
    - Daemon thread; never keeps the host process alive
    - stop() wakes the thread immediately via an Event
    - A run that overran skips the missed slots instead of bursting
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class FlushWorker:
    """Calls a flush function every interval_seconds."""

    def __init__(
        self,
        flush: Callable[[], Any],
        interval_seconds: float,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize flush worker.

        Args:
            flush: Function to call each interval
            interval_seconds: Seconds between runs
            clock: Wall-clock source (for tests)
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._flush = flush
        self.interval_seconds = interval_seconds
        self._clock = clock
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        """Start the background thread."""
        if self.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="metrics-relay-flush", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Signal the thread to exit and wait for it."""
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)
        self._thread = None

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def next_run_after(self, now: float) -> float:
        """First interval boundary strictly after now."""
        return (now // self.interval_seconds + 1) * self.interval_seconds

    def _run(self) -> None:
        next_run = self.next_run_after(self._clock())
        while not self._stop_event.wait(max(0.0, next_run - self._clock())):
            try:
                self._flush()
            except Exception:
                logger.exception("Flush worker run failed")
            next_run = self.next_run_after(max(next_run, self._clock()))
