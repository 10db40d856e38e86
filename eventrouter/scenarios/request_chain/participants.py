"""
Request chain: auth -> database -> alert.

The auth link stops unauthorized requests outright. The database and
alert links only act on requests that ask for them, and the alert link
is always the last stop.
"""

import logging
from typing import Any

from eventrouter.engine.chain import ChainLink, LinkPolicy
from eventrouter.engine.event import Event
from eventrouter.engine.router import Router

AUTHORIZED = "authorized"
UNAUTHORIZED = "unauthorized"
SAVE_TO_DATABASE = "save to database"
ALERT_USER = "alert user"

logger = logging.getLogger(__name__)


def has_param(event: Event, param: str) -> bool:
    """True when the request parameters include ``param`` exactly."""
    payload = event.payload
    if isinstance(payload, (list, tuple, set, frozenset)):
        return param in payload
    return payload == param


def _is_authorized(event: Event) -> bool:
    if has_param(event, AUTHORIZED):
        return True
    logger.info("User unauthorized, stopping process...")
    return False


def _authorize(_: Event) -> str:
    logger.info("Authorized user, forwarding...")
    return "authorized"


def _save(_: Event) -> str:
    logger.info("Saving request to database...")
    return "saved"


def _alert(_: Event) -> str:
    logger.info("Sending message to user...")
    return "alerted"


def build_links() -> list[ChainLink]:
    return [
        ChainLink(
            "auth",
            accepts=_is_authorized,
            process=_authorize,
            policy=LinkPolicy.ACCEPT_STOPS_CHAIN,
        ),
        ChainLink("database", accepts=lambda e: has_param(e, SAVE_TO_DATABASE), process=_save),
        ChainLink("alert", accepts=lambda e: has_param(e, ALERT_USER), process=_alert, forward=False),
    ]


def register(router: Router, scenario_name: str) -> dict[str, Any]:
    logger.debug("Building the chain for %s: auth -> database -> alert", scenario_name)
    links = {link.name: router.append(link) for link in build_links()}
    return links
