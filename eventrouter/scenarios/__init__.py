"""
Bundled demo scenarios.

Each scenario directory holds a ``scenario.yaml`` script and a
``participants.py`` module whose ``register(router, scenario_name)`` wires
participants into the router and returns them by name.
"""

from pathlib import Path

SCENARIO_ROOT = Path(__file__).parent


def bundled_scenarios() -> list[Path]:
    """Paths of the scenario scripts shipped with the package."""
    return sorted(SCENARIO_ROOT.glob("*/scenario.yaml"))
