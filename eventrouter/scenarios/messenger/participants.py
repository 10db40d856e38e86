"""
Messenger: two loggers reacting to the same published events.
"""

import logging
from typing import Any

from eventrouter.engine.event import Event
from eventrouter.engine.router import Router

logger = logging.getLogger(__name__)


class UppercaseLogger:
    def __init__(self) -> None:
        self.received: list[str] = []

    def receive(self, event: Event) -> None:
        text = str(event.payload).upper()
        logger.info("UppercaseLogger reacting to event: %s", text)
        self.received.append(text)


class LowercaseLogger:
    def __init__(self) -> None:
        self.received: list[str] = []

    def receive(self, event: Event) -> None:
        text = str(event.payload).lower()
        logger.info("LowercaseLogger reacting to event: %s", text)
        self.received.append(text)


def register(router: Router, scenario_name: str) -> dict[str, Any]:
    """
    Create the loggers. Subscribing is left to the scenario script.
    """
    logger.debug("Preparing messenger loggers for %s", scenario_name)
    return {"uppercase": UppercaseLogger(), "lowercase": LowercaseLogger()}
