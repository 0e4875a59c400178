"""A pausable stopwatch that counts whole seconds for the status bar."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional


def format_elapsed(seconds: int) -> str:
    """Render a second count as ``MM:SS``; minutes may exceed two digits."""
    if seconds < 0:
        raise ValueError(f"seconds must not be negative, got {seconds}")
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class Stopwatch:
    """Accumulates whole seconds across start/stop runs until it is reset."""

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.monotonic
        self._lock = threading.Lock()
        self._running = False
        self._seconds = 0
        self._started_at = 0.0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Begin counting; does nothing if already running."""
        with self._lock:
            if not self._running:
                self._running = True
                self._started_at = self._clock()

    def stop(self) -> None:
        """Pause counting, keeping the whole seconds counted so far."""
        with self._lock:
            if self._running:
                self._running = False
                self._seconds += int(self._clock() - self._started_at)

    def reset(self) -> None:
        """Stop and return the count to zero."""
        with self._lock:
            self._running = False
            self._seconds = 0

    def elapsed(self) -> int:
        """Whole seconds counted, including the current run."""
        with self._lock:
            total = self._seconds
            if self._running:
                total += int(self._clock() - self._started_at)
            return total

    def text(self) -> str:
        """The elapsed time as shown on screen."""
        return format_elapsed(self.elapsed())