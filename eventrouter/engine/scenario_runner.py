"""
Scenario runner for the event router.

Responsibilities:

- Load a scenario script from YAML
- Replay its timeline of router calls in order
- Record what each call did as a plain dict
- Remain agnostic about what participants do with the events
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from eventrouter.engine.event import UnhandledEvent
from eventrouter.engine.router import Router

DISPATCH_STEPS = ("notify", "publish", "route")
SUBSCRIPTION_STEPS = ("subscribe", "unsubscribe")
VALID_STEPS = DISPATCH_STEPS + SUBSCRIPTION_STEPS


class ScenarioRunner:
    """
    Replays a single scenario script against a router.
    """

    def __init__(self, scenario_path: Path, router: Router) -> None:
        self.scenario_path = scenario_path
        self.router = router
        self.scenario: Dict[str, Any] = {}
        self.participants: Dict[str, Any] = {}
        self.records: List[Dict[str, Any]] = []

    def load(self) -> None:
        """
        Load the scenario YAML from disk and validate structure.
        """
        with self.scenario_path.open("r", encoding="utf-8") as fh:
            self.scenario = yaml.safe_load(fh)

        if not isinstance(self.scenario, dict):
            raise ValueError("Scenario file must be a YAML mapping (dict)")

        if "timeline" not in self.scenario:
            raise ValueError("Scenario is missing a 'timeline' section")

        if not isinstance(self.scenario["timeline"], list):
            raise ValueError("'timeline' must be a list of steps")

        for index, entry in enumerate(self.scenario["timeline"]):
            self._validate_entry(index, entry)

    @staticmethod
    def _validate_entry(index: int, entry: Any) -> None:
        if not isinstance(entry, dict):
            raise ValueError(f"Step {index} must be a mapping")

        via = entry.get("via")
        if via not in VALID_STEPS:
            raise ValueError(
                f"Step {index} has invalid 'via' {via!r}. Allowed: {', '.join(VALID_STEPS)}"
            )

        if via in DISPATCH_STEPS and not entry.get("event"):
            raise ValueError(f"Step {index} ({via}) is missing an 'event' name")

        if via in SUBSCRIPTION_STEPS and not entry.get("subscriber"):
            raise ValueError(f"Step {index} ({via}) is missing a 'subscriber' key")

        if "start" in entry and via != "route":
            raise ValueError(f"Step {index}: 'start' only applies to route steps")

    def use_participants(self, participants: Mapping[str, Any] | None) -> None:
        """
        Make named participants available to subscribe/unsubscribe steps.
        """
        self.participants = dict(participants or {})

    def run(self, close_router: bool = False) -> List[Dict[str, Any]]:
        """
        Run every step of the timeline and return the step records.

        Args:
            close_router: whether to close the Router after execution
                          (use False if running multiple scenarios in one session)
        """
        for index, entry in enumerate(self.scenario.get("timeline", [])):
            record = {
                "step": index,
                "scenario_id": self.scenario.get("id"),
                "via": entry["via"],
            }
            record.update(self._execute(entry))
            self.records.append(record)

        if close_router:
            self.router.close()

        return self.records

    def _execute(self, entry: Dict[str, Any]) -> Dict[str, Any]:
        via = entry["via"]

        if via in SUBSCRIPTION_STEPS:
            key = entry["subscriber"]
            if key not in self.participants:
                raise ValueError(f"Unknown subscriber '{key}'")
            subscriber = self.participants[key]
            if via == "subscribe":
                changed = self.router.subscribe(subscriber)
            else:
                changed = self.router.unsubscribe(subscriber)
            return {"subscriber": key, "changed": changed}

        name = entry["event"]
        payload = entry.get("payload")
        record: Dict[str, Any] = {"event": name, "payload": payload}

        if via == "notify":
            result = self.router.notify(name, payload)
            handled = not isinstance(result, UnhandledEvent)
            record.update({"handled": handled, "result": result if handled else None})
        elif via == "publish":
            record["notified"] = self.router.publish(name, payload)
        else:
            outcome = self.router.route(name, payload, start=entry.get("start"))
            record.update(
                {
                    "status": outcome.status.value,
                    "handled": outcome.handled,
                    "visited": list(outcome.visited),
                    "processed": list(outcome.processed),
                }
            )
        return record

    def reset(self) -> None:
        """
        Forget recorded steps.
        """
        self.records = []
        # Router registrations are left alone; the caller owns them
