"""
Router facade over the three dispatch disciplines.

- notify: exactly one designated handler reacts (mediator style)
- publish: every subscriber receives the event (observer style)
- route: links process and forward in sequence (chain of responsibility)

The router never chooses a discipline for the caller. Each entry point
builds a fresh Event and hands it to the matching primitive.
"""

from __future__ import annotations

import logging
from typing import Any

from eventrouter.engine.chain import ChainLink, HandlerChain
from eventrouter.engine.event import ChainOutcome, Event, UnhandledEvent
from eventrouter.engine.event_bus import EventBus, Handler
from eventrouter.engine.subscriptions import Subscriber, SubscriptionRegistry

logger = logging.getLogger(__name__)


class Router:
    """
    Composes an EventBus, a SubscriptionRegistry and a HandlerChain.

    Built once by setup code and passed to whoever needs it. After
    close() no registrations or dispatches are permitted.
    """

    def __init__(
        self,
        bus: EventBus | None = None,
        subscriptions: SubscriptionRegistry | None = None,
        chain: HandlerChain | None = None,
    ) -> None:
        self._bus = bus if bus is not None else EventBus()
        self._subscriptions = subscriptions if subscriptions is not None else SubscriptionRegistry()
        self._chain = chain if chain is not None else HandlerChain()
        self._closed: bool = False

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def subscriptions(self) -> SubscriptionRegistry:
        return self._subscriptions

    @property
    def chain(self) -> HandlerChain:
        return self._chain

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self, action: str) -> None:
        if self._closed:
            raise RuntimeError(f"Cannot {action} a closed router")

    # Structure

    def register(self, name: str, handler: Handler) -> Handler | None:
        self._ensure_open("register on")
        return self._bus.register(name, handler)

    def unregister(self, name: str) -> bool:
        self._ensure_open("unregister from")
        return self._bus.unregister(name)

    def subscribe(self, subscriber: Subscriber) -> bool:
        self._ensure_open("subscribe to")
        return self._subscriptions.subscribe(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> bool:
        self._ensure_open("unsubscribe from")
        return self._subscriptions.unsubscribe(subscriber)

    def append(self, link: ChainLink) -> ChainLink:
        self._ensure_open("append to")
        return self._chain.append(link)

    # Dispatch

    def notify(self, name: str, payload: Any = None) -> Any:
        """
        Dispatch to the single handler registered for ``name``.

        Returns the handler's result, or UnhandledEvent.
        """
        self._ensure_open("notify through")
        result = self._bus.dispatch(Event(name, payload))
        if isinstance(result, UnhandledEvent):
            logger.info("Unhandled event: %s", name)
        return result

    def publish(self, name: str, payload: Any = None) -> int:
        """
        Fan an event out to every subscriber. Returns how many were notified.
        """
        self._ensure_open("publish to")
        return self._subscriptions.publish(Event(name, payload))

    def route(self, name: str, payload: Any = None, start: str | None = None) -> ChainOutcome:
        """
        Run an event through the handler chain.
        """
        self._ensure_open("route through")
        return self._chain.handle(Event(name, payload), start=start)

    def close(self) -> None:
        """
        Close the router.

        Registrations are kept; further mutation or dispatch raises
        RuntimeError.
        """
        self._closed = True


class Participant:
    """
    Base for components that talk to each other only through a router.

    A participant that was never attached simply sends nothing.
    """

    def __init__(self) -> None:
        self.router: Router | None = None

    def attach(self, router: Router) -> None:
        self.router = router

    def send(self, name: str, payload: Any = None) -> Any:
        if self.router is None:
            return None
        return self.router.notify(name, payload)
