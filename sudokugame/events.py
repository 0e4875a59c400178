"""A small publish/subscribe event bus linking game state and views."""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

SELECTED_NUM_CHANGE = "selectedNum::change"
GAME_VICTORY = "game::victory"
GAME_REFRESH = "game::refresh"
GAME_UNDO_STEP = "gameUndoStep::undoStep"
TIME_START = "time::start"
TIME_STOP = "time::stop"
TIME_RESTART = "time::restart"
NUMBER_FILL_COMPLETED = "number::fillCompleted"
NUMBER_FILL_ROLLBACK = "number::fillRollback"
CANDIDATES_VIEW = "candidates::view"
CANDIDATES_HIDE = "candidates::hide"


@dataclass(frozen=True)
class Event:
    """Something that happened, identified by its type string."""

    type: str
    data: Any = None


Handler = Callable[[Event], None]
Dispatcher = Callable[[Handler, Event], None]

_subscription_ids = itertools.count(1)


def _call_directly(handler: Handler, event: Event) -> None:
    handler(event)


class EventBus:
    """Routes published events to the handlers subscribed to their type.

    ``dispatch`` decides how a handler is run; by default it is called
    directly in the publishing thread.
    """

    def __init__(self, dispatch: Optional[Dispatcher] = None) -> None:
        self._handlers: Dict[str, List[Tuple[int, Handler]]] = {}
        self._lock = threading.Lock()
        self._dispatch = dispatch or _call_directly

    def subscribe(self, event_type: str, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for ``event_type``; return a function that cancels it."""
        sub_id = next(_subscription_ids)
        with self._lock:
            self._handlers.setdefault(event_type, []).append((sub_id, handler))

        def cancel() -> None:
            with self._lock:
                entries = self._handlers.get(event_type)
                if entries is not None:
                    self._handlers[event_type] = [e for e in entries if e[0] != sub_id]

        return cancel

    def publish(self, event: Event) -> None:
        """Deliver ``event`` to every handler subscribed to its type."""
        with self._lock:
            entries = list(self._handlers.get(event.type, ()))
        for _, handler in entries:
            self._dispatch(handler, event)