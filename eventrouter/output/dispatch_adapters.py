# eventrouter/output/dispatch_adapters.py
from __future__ import annotations

from typing import Iterable

from .base import Adapter


class NotifyAdapter(Adapter):
    """Single-handler dispatch: handled or not."""

    def transform(self, record: dict) -> Iterable[str]:
        state = "handled" if record.get("handled") else "unhandled"
        line = f"[notify] {record.get('event')} -> {state}"
        result = record.get("result")
        if record.get("handled") and result is not None:
            line += f" ({result})"
        yield line


class PublishAdapter(Adapter):
    """Fan-out: how many subscribers were reached."""

    def transform(self, record: dict) -> Iterable[str]:
        yield f"[publish] {record.get('event')} -> {record.get('notified', 0)} subscriber(s)"


class RouteAdapter(Adapter):
    """Chain handling: terminal status, path taken and who processed."""

    def transform(self, record: dict) -> Iterable[str]:
        visited = " > ".join(record.get("visited", [])) or "(empty chain)"
        processed = ", ".join(record.get("processed", [])) or "none"
        yield (
            f"[route] {record.get('event')} -> {record.get('status')} "
            f"via {visited} (processed: {processed})"
        )


class SubscriptionAdapter(Adapter):
    """Subscribe/unsubscribe steps."""

    _STATES = {
        ("subscribe", True): "added",
        ("subscribe", False): "already present",
        ("unsubscribe", True): "removed",
        ("unsubscribe", False): "not present",
    }

    def transform(self, record: dict) -> Iterable[str]:
        via = record.get("via")
        state = self._STATES.get((via, bool(record.get("changed"))), "?")
        yield f"[{via}] {record.get('subscriber')} -> {state}"
