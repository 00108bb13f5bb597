from finance_tracker.events import CATEGORY_INSERTED, TRANSACTION_INSERTED, EventBus
from finance_tracker.database import StorageError
from finance_tracker.live import LiveQuery, Observable, Subscriptions


def test_publish_calls_handlers_in_order():
    bus = EventBus()
    calls = []
    bus.subscribe(TRANSACTION_INSERTED, lambda e: calls.append(("first", e.payload)))
    bus.subscribe(TRANSACTION_INSERTED, lambda e: calls.append(("second", e.payload)))

    event = bus.publish(TRANSACTION_INSERTED, {"id": 1})

    assert event.name == TRANSACTION_INSERTED
    assert calls == [("first", {"id": 1}), ("second", {"id": 1})]


def test_publish_without_subscribers():
    bus = EventBus()

    event = bus.publish(CATEGORY_INSERTED, {})

    assert event.payload == {}


def test_unsubscribe_handler():
    bus = EventBus()
    calls = []

    def handler(event):
        calls.append(event)

    bus.subscribe(TRANSACTION_INSERTED, handler)
    bus.unsubscribe(TRANSACTION_INSERTED, handler)
    bus.publish(TRANSACTION_INSERTED, {})

    assert calls == []


def test_observable_delivers_current_value_on_subscribe():
    obs = Observable(3)
    received = []

    obs.subscribe(received.append)
    obs._emit(4)

    assert received == [3, 4]
    assert obs.value == 4


def test_map_only_keeps_latest_value():
    source = Observable([1, 2])
    total = source.map(sum)
    received = []
    total.subscribe(received.append)

    source._emit([1, 2, 3])
    source._emit([10])

    assert received == [3, 6, 10]
    assert total.value == 10


def test_live_query_refetches_on_event():
    bus = EventBus()
    rows = []
    live = LiveQuery(bus, TRANSACTION_INSERTED, lambda: list(rows))
    received = []
    live.subscribe(received.append)

    rows.append("a")
    bus.publish(TRANSACTION_INSERTED, {})
    bus.publish(CATEGORY_INSERTED, {})

    assert received == [[], ["a"]]


def test_live_query_affects_filter():
    bus = EventBus()
    fetches = []
    live = LiveQuery(
        bus,
        CATEGORY_INSERTED,
        lambda: fetches.append(1) or len(fetches),
        affects=lambda payload: payload.get("type") == "x",
    )
    received = []
    live.subscribe(received.append)

    bus.publish(CATEGORY_INSERTED, {"type": "y"})
    bus.publish(CATEGORY_INSERTED, {"type": "x"})

    assert received == [1, 2]


def test_live_query_refresh_failure_does_not_reach_publisher():
    bus = EventBus()
    rows = ["a"]
    broken = []

    def fetch():
        if broken:
            raise StorageError("disk gone")
        return list(rows)

    live = LiveQuery(bus, TRANSACTION_INSERTED, fetch)
    received = []
    live.subscribe(received.append)

    broken.append(True)
    rows.append("b")
    bus.publish(TRANSACTION_INSERTED, {})

    assert received == [["a"]]

    broken.clear()
    assert live.value == ["a", "b"]


def test_subscriptions_close_releases_all():
    obs = Observable(1)
    received = []
    group = Subscriptions()
    group.add(obs.subscribe(received.append))
    group.add(obs.subscribe(received.append))

    group.close()
    obs._emit(2)

    assert received == [1, 1]
    assert len(group) == 0


def test_nested_subscriptions_released_by_parent():
    obs = Observable("x")
    received = []
    page = Subscriptions()
    dialog = Subscriptions()
    dialog.add(obs.subscribe(received.append))
    page.add(dialog.close)

    page.close()
    obs._emit("y")

    assert received == ["x"]
    assert len(dialog) == 0


def test_discarded_group_is_not_closed_twice():
    calls = []
    page = Subscriptions()
    dialog = Subscriptions()
    dialog.add(lambda: calls.append("dialog"))
    page.add(dialog.close)

    dialog.close()
    page.discard(dialog.close)
    page.close()

    assert calls == ["dialog"]
    assert len(page) == 0
