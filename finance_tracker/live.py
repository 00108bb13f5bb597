"""Observable values and live queries.

A ``LiveQuery`` re-runs its fetch function whenever the store publishes a
matching event and pushes the fresh snapshot to every subscriber. ``map``
derives a new observable by applying a pure function to each snapshot, so
subscribers of the derived value only ever see the latest result.
"""

import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from finance_tracker.database import StorageError
from finance_tracker.events import Event, EventBus

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

_UNSET: Any = object()


class Observable(Generic[T]):
    """Holds the latest value and pushes every new one to subscribers."""

    def __init__(self, initial: T = _UNSET):
        self._value = initial
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        if self._value is _UNSET:
            self._value = self._compute()
        return self._value

    def _compute(self) -> T:
        raise LookupError(f"{type(self).__name__} has no value yet")

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register ``callback``, deliver the current value and return an unsubscribe function."""
        self._subscribers.append(callback)
        callback(self.value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def has_subscribers(self) -> bool:
        return bool(self._subscribers)

    def _emit(self, value: T) -> None:
        self._value = value
        for callback in list(self._subscribers):
            callback(value)

    def map(self, fn: Callable[[T], U]) -> "Observable[U]":
        return MappedObservable(self, fn)


class MappedObservable(Observable[U]):
    """Observable derived from another one through a pure function."""

    def __init__(self, source: Observable[T], fn: Callable[[T], U]):
        super().__init__()
        self._source = source
        self._fn = fn
        self._unsubscribe_source = source.subscribe(self._on_source)

    def _on_source(self, value: T) -> None:
        self._emit(self._fn(value))

    def close(self) -> None:
        self._unsubscribe_source()


class LiveQuery(Observable[T]):
    """Observable result of a store query, refreshed on store events."""

    def __init__(
        self,
        bus: EventBus,
        event_name: str,
        fetch: Callable[[], T],
        affects: Optional[Callable[[dict], bool]] = None,
    ):
        super().__init__()
        self._bus = bus
        self._event_name = event_name
        self._fetch = fetch
        self._affects = affects
        bus.subscribe(event_name, self._on_event)

    def _compute(self) -> T:
        return self._fetch()

    def _on_event(self, event: Event) -> None:
        if self._affects is not None and not self._affects(event.payload):
            return
        if not self.has_subscribers:
            # Nobody is listening, fetch again on next read
            self._value = _UNSET
            return
        logger.debug("Refreshing live query for %s", event.name)
        try:
            value = self._fetch()
        except StorageError:
            # The insert is already committed, so the command itself succeeded
            logger.exception("Live query refresh after %s failed", event.name)
            self._value = _UNSET
            return
        self._emit(value)

    def close(self) -> None:
        self._bus.unsubscribe(self._event_name, self._on_event)


class Subscriptions:
    """Group of unsubscribe callables released together.

    Groups nest: adding ``other.close`` to a group releases ``other`` as well.
    """

    def __init__(self):
        self._unsubscribers: list[Callable[[], None]] = []

    def add(self, unsubscribe: Callable[[], None]) -> Callable[[], None]:
        self._unsubscribers.append(unsubscribe)
        return unsubscribe

    def discard(self, unsubscribe: Callable[[], None]) -> None:
        if unsubscribe in self._unsubscribers:
            self._unsubscribers.remove(unsubscribe)

    def close(self) -> None:
        while self._unsubscribers:
            self._unsubscribers.pop()()

    def __len__(self) -> int:
        return len(self._unsubscribers)
