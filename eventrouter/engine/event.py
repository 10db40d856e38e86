"""
Event value and dispatch outcome types for the event router.

An event is nothing more than a name and an opaque payload. The name is
the dispatch key; the payload travels along untouched. Outcomes are plain
values returned to the caller: nothing in the routing core is reported by
raising.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Event:
    """
    Immutable (name, payload) pair.

    Names are case sensitive and must be non-empty strings.
    """

    name: str
    payload: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Event name must be a non-empty string")

    def clone(self) -> Event:
        """
        Return a copy of this event with a deep-copied payload.

        Mutating the clone's payload never affects the original.
        """
        return Event(self.name, copy.deepcopy(self.payload))


@dataclass(frozen=True)
class UnhandledEvent:
    """Returned by EventBus.dispatch when no handler is registered."""

    event: Event

    @property
    def name(self) -> str:
        return self.event.name


class ChainStatus(str, Enum):
    """How propagation through a handler chain ended."""

    HALTED = "halted"
    STOPPED = "stopped"
    EXHAUSTED = "exhausted"


@dataclass
class ChainOutcome:
    """
    Result of running an event through a handler chain.

    visited and processed hold link names in the order they were reached.
    """

    event: Event
    status: ChainStatus = ChainStatus.EXHAUSTED
    visited: list[str] = field(default_factory=list)
    processed: list[str] = field(default_factory=list)
    results: dict[str, Any] = field(default_factory=dict)

    @property
    def handled(self) -> bool:
        return self.status is not ChainStatus.HALTED and bool(self.processed)
