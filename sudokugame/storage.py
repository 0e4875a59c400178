"""Shared key/value store whose entries can be observed."""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional

from .observable import Observable

SELECTED_NUM = "SelectedNum"
SELECTED_NUMBER_CELL = "SelectedNumberCell"


class DataStore:
    """Maps keys to observable values; updating a key keeps its observable."""

    def __init__(self) -> None:
        self._items: Dict[str, Observable] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, creating or updating its observable."""
        if value is None:
            raise ValueError("value must not be None")
        if not key.strip():
            raise ValueError("key must not be blank")
        with self._lock:
            existing = self._items.get(key)
            if existing is None:
                self._items[key] = Observable(value)
                return
        existing.set(value)

    def get(self, key: str) -> Any:
        """Return the value under ``key``, or None if there is none."""
        observable = self.observable(key)
        return None if observable is None else observable.get()

    def observable(self, key: str) -> Optional[Observable]:
        """Return the observable holding ``key``'s value, if any."""
        with self._lock:
            return self._items.get(key)