"""
Event router core package.

The engine provides three dispatch disciplines behind one facade:
- EventBus: one designated handler per event name
- SubscriptionRegistry: ordered fan-out to every subscriber
- HandlerChain: sequential, predicate-gated forwarding
- Router: composes the three

ScenarioRunner replays YAML scripts of router calls; the bundled
scenarios wire up mediator, observer and chain-of-responsibility demos.
"""

from eventrouter.engine.chain import ChainLink, HandlerChain, LinkPolicy
from eventrouter.engine.event import ChainOutcome, ChainStatus, Event, UnhandledEvent
from eventrouter.engine.event_bus import EventBus
from eventrouter.engine.router import Participant, Router
from eventrouter.engine.scenario_runner import ScenarioRunner
from eventrouter.engine.subscriptions import SubscriptionRegistry

__all__ = [
    "ChainLink",
    "ChainOutcome",
    "ChainStatus",
    "Event",
    "EventBus",
    "HandlerChain",
    "LinkPolicy",
    "Participant",
    "Router",
    "ScenarioRunner",
    "SubscriptionRegistry",
    "UnhandledEvent",
]
