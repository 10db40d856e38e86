"""
Subscription registry for push-style fan-out.

Subscribers are either objects exposing ``receive(event)`` or plain
callables taking the event. They are called synchronously, in the order
they subscribed. If a subscriber raises, delivery stops and the error is
surfaced to the caller.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, Protocol, Union, runtime_checkable

from eventrouter.engine.event import Event

logger = logging.getLogger(__name__)


@runtime_checkable
class Receiver(Protocol):
    def receive(self, event: Event) -> None: ...


Subscriber = Union[Receiver, Callable[[Event], Any]]


def _deliver(subscriber: Subscriber, event: Event) -> None:
    receive = getattr(subscriber, "receive", None)
    if callable(receive):
        receive(event)
    else:
        subscriber(event)


class SubscriptionRegistry:
    """
    Ordered set of subscribers.

    Subscribers are compared by identity. Subscribing twice is a no-op, as
    is unsubscribing something that was never subscribed. Publishing
    iterates over the tuple that was current when publish started, so
    subscribers added or removed mid-delivery only see the next event.
    """

    def __init__(self) -> None:
        self._subscribers: tuple[Subscriber, ...] = ()
        self._lock = threading.Lock()

    def subscribe(self, subscriber: Subscriber) -> bool:
        """
        Add a subscriber. Returns False if it was already present.
        """
        if not isinstance(subscriber, Receiver) and not callable(subscriber):
            raise ValueError("Subscriber must be callable or define receive(event)")

        with self._lock:
            if self._holds(subscriber):
                return False
            self._subscribers = self._subscribers + (subscriber,)
        return True

    def unsubscribe(self, subscriber: Subscriber) -> bool:
        """
        Remove a subscriber. Returns False if it was not present.
        """
        with self._lock:
            if not self._holds(subscriber):
                return False
            self._subscribers = tuple(s for s in self._subscribers if s is not subscriber)
        return True

    def publish(self, event: Event) -> int:
        """
        Deliver an event to every current subscriber.

        Returns the number of subscribers notified.
        """
        snapshot = self._subscribers
        logger.info("Emitting event %s: %r", event.name, event.payload)
        logger.debug("Publishing %s to %d subscriber(s)", event.name, len(snapshot))

        for subscriber in snapshot:
            _deliver(subscriber, event)

        return len(snapshot)

    def _holds(self, subscriber: object) -> bool:
        return any(s is subscriber for s in self._subscribers)

    def subscribers(self) -> list[Subscriber]:
        return list(self._subscribers)

    def __len__(self) -> int:
        return len(self._subscribers)

    def __contains__(self, subscriber: object) -> bool:
        return self._holds(subscriber)
