"""
Unit tests for eventrouter/engine/subscriptions.py
"""
import logging
from dataclasses import dataclass

import pytest

from eventrouter.engine.event import Event
from eventrouter.engine.subscriptions import SubscriptionRegistry


class Recorder:
    """Subscriber object exposing receive()."""

    def __init__(self, name, log):
        self.name = name
        self.log = log

    def receive(self, event):
        self.log.append((self.name, event.payload))


class TestSubscriptionRegistry:
    """Test suite for the SubscriptionRegistry class."""

    def test_initialization(self):
        registry = SubscriptionRegistry()
        assert registry._subscribers == ()
        assert len(registry) == 0

    def test_subscribe_adds_in_order(self):
        registry = SubscriptionRegistry()

        def handler1(_):
            pass

        def handler2(_):
            pass

        assert registry.subscribe(handler1) is True
        assert registry.subscribe(handler2) is True
        assert registry.subscribers() == [handler1, handler2]

    def test_subscribe_is_idempotent(self):
        """Test that subscribing twice leaves a single entry."""
        registry = SubscriptionRegistry()
        log = []
        recorder = Recorder("A", log)

        assert registry.subscribe(recorder) is True
        assert registry.subscribe(recorder) is False
        registry.publish(Event("news", 1))

        assert len(registry) == 1
        assert log == [("A", 1)]

    def test_subscribe_rejects_non_subscribers(self):
        registry = SubscriptionRegistry()
        with pytest.raises(ValueError):
            registry.subscribe(object())

    def test_unsubscribe_removes(self):
        registry = SubscriptionRegistry()
        log = []
        recorder = Recorder("A", log)
        registry.subscribe(recorder)

        assert registry.unsubscribe(recorder) is True
        registry.publish(Event("news", 1))

        assert recorder not in registry
        assert log == []

    def test_unsubscribe_absent_is_noop(self):
        """Test that removing an unknown subscriber leaves the registry unchanged."""
        registry = SubscriptionRegistry()
        log = []
        present = Recorder("A", log)
        registry.subscribe(present)
        before = registry.subscribers()

        assert registry.unsubscribe(Recorder("B", log)) is False
        assert registry.subscribers() == before

    def test_publish_calls_subscribers_in_order(self):
        registry = SubscriptionRegistry()
        call_order = []

        def make_handler(name):
            def handler(_):
                call_order.append(name)
            return handler

        for name in ("A", "B", "C"):
            registry.subscribe(make_handler(name))

        notified = registry.publish(Event("order_test"))

        assert call_order == ["A", "B", "C"]
        assert notified == 3

    def test_publish_accepts_callables_and_receivers(self):
        registry = SubscriptionRegistry()
        log = []
        registry.subscribe(Recorder("object", log))
        registry.subscribe(lambda e: log.append(("lambda", e.payload)))

        registry.publish(Event("mixed", "x"))

        assert log == [("object", "x"), ("lambda", "x")]

    def test_publish_with_no_subscribers(self):
        registry = SubscriptionRegistry()
        assert registry.publish(Event("nobody")) == 0

    def test_subscriber_added_during_publish_misses_inflight_event(self):
        """Test snapshot semantics for subscriptions made mid-publish."""
        registry = SubscriptionRegistry()
        log = []
        late = Recorder("late", log)

        def joiner(event):
            log.append(("joiner", event.payload))
            registry.subscribe(late)

        registry.subscribe(joiner)

        assert registry.publish(Event("news", 1)) == 1
        assert log == [("joiner", 1)]

        registry.publish(Event("news", 2))
        assert log == [("joiner", 1), ("joiner", 2), ("late", 2)]

    def test_subscriber_removed_during_publish_still_gets_inflight_event(self):
        registry = SubscriptionRegistry()
        log = []
        second = Recorder("second", log)

        def remover(event):
            log.append(("remover", event.payload))
            registry.unsubscribe(second)

        registry.subscribe(remover)
        registry.subscribe(second)

        registry.publish(Event("news", 1))
        registry.publish(Event("news", 2))

        assert log == [("remover", 1), ("second", 1), ("remover", 2)]

    def test_publish_stops_on_first_exception(self):
        registry = SubscriptionRegistry()
        call_log = []

        def handler1(_):
            call_log.append("handler1")
            raise RuntimeError("First handler failed")

        def handler2(_):
            call_log.append("handler2")

        registry.subscribe(handler1)
        registry.subscribe(handler2)

        with pytest.raises(RuntimeError, match="First handler failed"):
            registry.publish(Event("test"))

        assert call_log == ["handler1"]

    def test_equal_subscribers_are_tracked_separately(self):
        """Test that two equal but distinct subscribers are both registered."""

        @dataclass
        class NamedLogger:
            name: str

            def receive(self, event):
                pass

        registry = SubscriptionRegistry()
        first, second = NamedLogger("x"), NamedLogger("x")
        assert first == second and first is not second

        assert registry.subscribe(first) is True
        assert registry.subscribe(second) is True
        assert registry.unsubscribe(second) is True

        assert first in registry
        assert second not in registry
        assert len(registry) == 1
        assert registry.subscribers()[0] is first

    def test_unsubscribe_equal_but_distinct_is_noop(self):
        @dataclass
        class NamedLogger:
            name: str

            def receive(self, event):
                pass

        registry = SubscriptionRegistry()
        registered = NamedLogger("x")
        registry.subscribe(registered)

        assert registry.unsubscribe(NamedLogger("x")) is False
        assert len(registry) == 1
        assert registry.subscribers()[0] is registered

    def test_publish_logs_emitted_event(self, caplog):
        registry = SubscriptionRegistry()
        with caplog.at_level(logging.INFO, logger="eventrouter.engine.subscriptions"):
            registry.publish(Event("message", "FIRST event"))

        assert "Emitting event message: 'FIRST event'" in caplog.text


class TestFanOut:
    """Independent subscribers reacting to the same event."""

    def test_upper_and_lower_case_subscribers(self):
        registry = SubscriptionRegistry()
        observed = {}

        class Upper:
            def receive(self, event):
                observed["A_saw"] = event.payload
                observed["A"] = event.payload.upper()

        class Lower:
            def receive(self, event):
                observed["B_saw"] = event.payload
                observed["B"] = event.payload.lower()

        registry.subscribe(Upper())
        registry.subscribe(Lower())

        registry.publish(Event("X", "MiXeD"))

        assert observed == {
            "A_saw": "MiXeD",
            "A": "MIXED",
            "B_saw": "MiXeD",
            "B": "mixed",
        }
