"""
Form mediator: a checkbox and a reset button that never talk directly.

Marking the checkbox enables the reset button; pressing the enabled
button clears the checkbox and disables itself again. Both go through the
router's single-handler dispatch.
"""

import logging
from typing import Any

from eventrouter.engine.event import Event
from eventrouter.engine.router import Participant, Router

logger = logging.getLogger(__name__)


class ResetButton(Participant):
    def __init__(self) -> None:
        super().__init__()
        self.disabled = True

    def enable(self) -> str:
        logger.info("Enabling reset button...")
        self.disabled = False
        return "reset button enabled"

    def click(self) -> Any:
        if self.disabled:
            return None
        result = self.send("Reset")
        self.disabled = True
        return result


class Checkbox(Participant):
    def __init__(self) -> None:
        super().__init__()
        self.marked = False

    def clear(self) -> str:
        logger.info("Clearing checkbox...")
        self.marked = False
        return "checkbox cleared"

    def click(self) -> Any:
        self.marked = True
        return self.send("CheckboxMarked")


def register(router: Router, scenario_name: str) -> dict[str, Any]:
    """
    Wire the form: user clicks come in as click.* events, and the two
    coordination events are each owned by exactly one handler.
    """
    button = ResetButton()
    checkbox = Checkbox()
    button.attach(router)
    checkbox.attach(router)

    def on_checkbox_marked(_: Event) -> str:
        logger.info("[%s] Mediator received CheckboxMarked event", scenario_name)
        return button.enable()

    def on_reset(_: Event) -> str:
        logger.info("[%s] Mediator received Reset event", scenario_name)
        return checkbox.clear()

    router.register("CheckboxMarked", on_checkbox_marked)
    router.register("Reset", on_reset)
    router.register("click.checkbox", lambda _: checkbox.click())
    router.register("click.reset", lambda _: button.click())

    return {"button": button, "checkbox": checkbox}
