"""A thread-safe value holder that wakes waiters when it changes."""

from __future__ import annotations

import threading
from typing import Any, Optional


class Observable:
    """Holds one value; ``set`` wakes every thread waiting for a change."""

    def __init__(self, value: Any) -> None:
        self._value = value
        self._version = 0
        self._cond = threading.Condition()

    def set(self, value: Any) -> None:
        with self._cond:
            self._value = value
            self._version += 1
            self._cond.notify_all()

    def get(self) -> Any:
        with self._cond:
            return self._value

    def wait_for_change(self, timeout: Optional[float] = None) -> bool:
        """Block until the value is set again; False if ``timeout`` ran out first."""
        with self._cond:
            start = self._version
            return self._cond.wait_for(lambda: self._version != start, timeout)