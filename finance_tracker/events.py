"""In-process publish/subscribe used by the store to notify live queries."""

import logging
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

__all__ = ["TRANSACTION_INSERTED", "CATEGORY_INSERTED", "Event", "EventBus"]

logger = logging.getLogger(__name__)

TRANSACTION_INSERTED = "TRANSACTION_INSERTED"
CATEGORY_INSERTED = "CATEGORY_INSERTED"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


class EventBus:
    """Synchronous bus; handlers run in subscription order on the publishing thread."""

    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[Event], None]]] = {}

    def subscribe(self, name: str, handler: Callable[[Event], None]) -> None:
        if name not in self._subscribers:
            self._subscribers[name] = []
        self._subscribers[name].append(handler)

    def unsubscribe(self, name: str, handler: Callable[[Event], None]) -> None:
        if name in self._subscribers:
            if handler in self._subscribers[name]:
                self._subscribers[name].remove(handler)

    def publish(self, name: str, payload: dict) -> Event:
        event = Event(
            name=name,
            ts=datetime.now().isoformat(),
            payload=payload,
        )
        logger.debug("Publishing %s at %s: %s", name, event.ts, payload)
        # Copy so handlers may unsubscribe while being notified
        for handler in list(self._subscribers.get(name, [])):
            handler(event)
        return event
