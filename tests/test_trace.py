from fakes import ThreeMethodSource, listener_count
from pyee import EventEmitter

from eventjoin import Trace, once_all, once_any, remove_listeners
from eventjoin.combinators import SubscriptionSet


def test_once_any_records_subscribe_and_fire() -> None:
    emitter = EventEmitter()
    trace = Trace()

    once_any(emitter, ["one", "two"], lambda *args: None, trace=trace)
    emitter.emit("two")

    assert [ev.action for ev in trace.get_events()] == ["once_any.subscribe", "fire"]
    root, fire = trace.get_events()
    assert root.info == {"events": ["one", "two"]}
    assert fire.parent_id == root.id
    assert fire.info == {"event": "two"}


def test_once_all_records_each_capture() -> None:
    emitter = EventEmitter()
    trace = Trace()

    once_all(emitter, ["one", "two"], lambda *args: None, trace=trace)
    emitter.emit("two")
    emitter.emit("one")

    captures = trace.find("capture")
    assert [ev.info["event"] for ev in captures] == ["two", "one"]
    assert trace.find("fire")[0].info == {"events": ["two", "one"]}
    assert trace.as_tree() == {None: [0], 0: [1, 2, 3]}


def test_cancel_recorded_once() -> None:
    trace = Trace()

    unsubscribe = once_all(EventEmitter(), ["one"], lambda *args: None, trace=trace)
    unsubscribe()
    unsubscribe()

    assert len(trace.find("cancel")) == 1


def test_cancel_not_recorded_after_fire() -> None:
    emitter = EventEmitter()
    trace = Trace()

    unsubscribe = once_any(emitter, ["one"], lambda *args: None, trace=trace)
    emitter.emit("one")
    unsubscribe()

    assert trace.find("cancel") == []


def test_disabled_trace_records_nothing() -> None:
    emitter = EventEmitter()
    trace = Trace(enabled=False)

    once_any(emitter, ["one"], lambda *args: None, trace=trace)
    emitter.emit("one")

    assert len(trace) == 0


def test_clear_resets_ids() -> None:
    trace = Trace()
    trace.record("a")
    trace.clear()

    assert trace.record("b") == 0


def test_remove_listeners_is_idempotent() -> None:
    emitter = EventEmitter()
    subscriptions = SubscriptionSet()

    def listener(*args: object) -> None:
        pass

    subscriptions.add("one", listener)
    emitter.once("one", listener)

    remove_listeners(emitter, ["one", "two"], subscriptions)
    remove_listeners(emitter, ["one", "two"], subscriptions)

    assert subscriptions.closed
    assert len(subscriptions) == 0
    assert listener_count(emitter, "one") == 0


def test_remove_listeners_skips_discarded_listeners() -> None:
    source = ThreeMethodSource()
    subscriptions = SubscriptionSet()

    def fired(*args: object) -> None:
        pass

    def pending(*args: object) -> None:
        pass

    source.once("one", fired)
    source.once("two", pending)
    subscriptions.add("one", fired)
    subscriptions.add("two", pending)

    source.emit("one")
    subscriptions.discard("one")
    remove_listeners(source, ["one", "two"], subscriptions)

    assert source.count() == 0
    assert subscriptions.closed
