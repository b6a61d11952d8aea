"""
In-process event bus standing in for the browser's window events.

The persistence managers and the auth wrapper announce changes here so that
observers (see `storefront.state`) can refresh their view.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

STORAGE = "storage"
CART_UPDATED = "cartUpdated"
WATCHLIST_UPDATED = "watchlistUpdated"
AUTH_STATE_CHANGED = "authStateChanged"


@dataclass
class Event:
    type: str
    detail: Any = None
    # Client namespace the event concerns; None means "everyone".
    target: Optional[str] = None


Listener = Callable[[Event], None]


class EventBus:
    def __init__(self):
        self._listeners: dict[str, list[Listener]] = defaultdict(list)
        self._lock = threading.Lock()

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        with self._lock:
            self._listeners[event_type].append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        with self._lock:
            listeners = self._listeners.get(event_type)
            if listeners and listener in listeners:
                listeners.remove(listener)

    def dispatch_event(self, event: Event) -> None:
        with self._lock:
            listeners = list(self._listeners.get(event.type, ()))
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Listener for %s failed", event.type)

    def listener_count(self, event_type: str) -> int:
        with self._lock:
            return len(self._listeners.get(event_type, ()))
