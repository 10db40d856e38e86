"""
Handler chain for sequential, predicate-gated forwarding.

Each link decides whether it processes an event and whether the event
moves on to its successor. Links keep a plain reference to the next link;
the chain owns the ordered sequence. A link works on its own too: its
accepts/process steps and its own propagation do not need a chain.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from eventrouter.engine.event import ChainOutcome, ChainStatus, Event

Predicate = Callable[[Event], bool]
Step = Callable[[Event], Any]

logger = logging.getLogger(__name__)


class LinkPolicy(str, Enum):
    """
    Wiring policy of a single link.

    GATE_THEN_FORWARD: process only when accepted, forward either way.
    ACCEPT_STOPS_CHAIN: a rejected event ends propagation unhandled.
    """

    GATE_THEN_FORWARD = "gate-then-forward"
    ACCEPT_STOPS_CHAIN = "accept-stops-chain"


@dataclass(frozen=True)
class LinkStep:
    """What one link did with an event."""

    processed: bool
    forward: bool
    halted: bool = False
    result: Any = None


def _always(_: Event) -> bool:
    return True


class ChainLink:
    """
    One stage of a handler chain.

    Args:
        name: identifies the link in outcomes and for ``start=`` lookups
        accepts: predicate deciding whether the link processes the event
        process: step run when the event is accepted
        policy: how a rejected event is treated
        forward: whether the link passes events on to its successor
    """

    def __init__(
        self,
        name: str,
        accepts: Predicate | None = None,
        process: Step | None = None,
        policy: LinkPolicy = LinkPolicy.GATE_THEN_FORWARD,
        forward: bool = True,
    ) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Link name must be a non-empty string")

        self.name = name
        self.policy = LinkPolicy(policy)
        self.forward = forward
        self.successor: ChainLink | None = None
        self._chain: HandlerChain | None = None
        self._accepts = accepts or _always
        self._process = process

    def __repr__(self) -> str:
        return f"ChainLink({self.name!r}, policy={self.policy.value!r})"

    def accepts(self, event: Event) -> bool:
        return bool(self._accepts(event))

    def process(self, event: Event) -> Any:
        if self._process is None:
            return None
        return self._process(event)

    def set_next(self, link: ChainLink) -> ChainLink:
        """
        Point this link at its successor and return the successor, so
        wiring reads ``auth.set_next(db).set_next(alert)``.
        """
        self.successor = link
        return link

    def step(self, event: Event) -> LinkStep:
        """
        Evaluate this link alone, without touching the successor.
        """
        if not self.accepts(event):
            if self.policy is LinkPolicy.ACCEPT_STOPS_CHAIN:
                logger.debug("%s rejected %s, stopping", self.name, event.name)
                return LinkStep(processed=False, forward=False, halted=True)
            return LinkStep(processed=False, forward=self.forward)

        result = self.process(event)
        return LinkStep(processed=True, forward=self.forward, result=result)

    def handle(self, event: Event) -> ChainOutcome:
        """
        Run the event through this link and whatever follows it.
        """
        return propagate(self, event)


def propagate(start: ChainLink | None, event: Event) -> ChainOutcome:
    """
    Walk successors from ``start`` until a link stops the event or the
    links run out. No link is visited twice in one walk.
    """
    outcome = ChainOutcome(event=event)
    seen: set[int] = set()
    link = start

    while link is not None and id(link) not in seen:
        seen.add(id(link))
        outcome.visited.append(link.name)

        step = link.step(event)
        if step.processed:
            outcome.processed.append(link.name)
            outcome.results[link.name] = step.result

        if step.halted:
            outcome.status = ChainStatus.HALTED
            return outcome
        if not step.forward:
            outcome.status = ChainStatus.STOPPED
            return outcome

        link = link.successor

    outcome.status = ChainStatus.EXHAUSTED
    return outcome


class HandlerChain:
    """
    Ordered sequence of links, wired strictly forward as they are appended.
    """

    def __init__(self) -> None:
        self._links: tuple[ChainLink, ...] = ()
        self._lock = threading.Lock()

    @property
    def head(self) -> ChainLink | None:
        return self._links[0] if self._links else None

    @property
    def tail(self) -> ChainLink | None:
        return self._links[-1] if self._links else None

    def append(self, link: ChainLink) -> ChainLink:
        """
        Add a link at the end of the chain and return it.

        A link can only belong to one chain, once, and must not already be
        wired to a successor.
        """
        with self._lock:
            if any(existing is link for existing in self._links):
                raise ValueError(f"Link '{link.name}' is already part of this chain")
            if any(existing.name == link.name for existing in self._links):
                raise ValueError(f"A link named '{link.name}' is already part of this chain")

            if link._chain is not None:
                raise ValueError(f"Link '{link.name}' already belongs to another chain")
            if link.successor is not None:
                raise ValueError(
                    f"Link '{link.name}' is already wired to '{link.successor.name}'"
                )

            link._chain = self
            if self._links:
                self._links[-1].set_next(link)
            self._links = self._links + (link,)
        return link

    def link(self, name: str) -> ChainLink:
        for candidate in self._links:
            if candidate.name == name:
                return candidate
        raise ValueError(f"No link named '{name}' in this chain")

    def handle(self, event: Event, start: str | None = None) -> ChainOutcome:
        """
        Run an event through the chain from its head, or from the link
        named ``start``.
        """
        first = self.link(start) if start is not None else self.head
        outcome = propagate(first, event)
        logger.debug(
            "Chain %s for %s after %s", outcome.status.value, event.name, outcome.visited
        )
        return outcome

    def names(self) -> list[str]:
        return [link.name for link in self._links]

    def __len__(self) -> int:
        return len(self._links)

    def __iter__(self):
        return iter(self._links)
