# eventrouter/cli.py

from __future__ import annotations
import argparse
import importlib.util
import logging
import signal
import sys
from pathlib import Path
from typing import Any, List

from eventrouter.engine.router import Router
from eventrouter.engine.scenario_runner import ScenarioRunner
from eventrouter.output.trace_adapter import TraceAdapter, write_trace_json
from eventrouter.scenarios import bundled_scenarios
from eventrouter.utils.logger import LOG_LEVELS, default_log_level, setup_logging

logger = logging.getLogger(__name__)


def load_participants(participants_path: Path, router: Router, scenario_name: str) -> dict[str, Any]:
    """
    Import a scenario's participants module from disk and call its register().
    """
    spec = importlib.util.spec_from_file_location(
        f"{scenario_name}_participants", participants_path
    )
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load participants module from {participants_path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    if not hasattr(module, "register"):
        raise ImportError(f"{participants_path} does not define register()")
    return module.register(router=router, scenario_name=scenario_name) or {}


def main(argv: list[str] | None = None) -> int | None:
    parser = argparse.ArgumentParser(
        prog="eventrouter.cli",
        description="Replay an event router scenario and print what each call did",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "scenario",
        type=Path,
        nargs="?",
        help="Path to the scenario YAML file",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the bundled scenarios and exit",
    )
    parser.add_argument(
        "--output",
        choices=["cli", "json"],
        default="cli",
        help="Output mode: 'cli' prints trace lines to stdout; 'json' dumps step records to a JSON file",
    )
    parser.add_argument(
        "--json-file",
        type=Path,
        default=Path("router_trace.json"),
        help="Path to JSON output file if --output=json",
    )
    parser.add_argument(
        "--log-level",
        default=default_log_level(),
        choices=LOG_LEVELS,
        type=str.upper,
        help="Log level for participant and router messages (env: EVENTROUTER_LOG_LEVEL)",
    )

    args = parser.parse_args(argv)

    if args.list:
        for path in bundled_scenarios():
            print(path)
        return 0

    if args.scenario is None:
        parser.error("the following arguments are required: scenario")

    setup_logging(args.log_level)

    if not args.scenario.exists():
        print(f"Scenario file not found: {args.scenario}", file=sys.stderr)
        return 1

    # One router for the whole run, handed to everything that needs it
    router = Router()
    runner = ScenarioRunner(scenario_path=args.scenario, router=router)

    try:
        runner.load()
    except Exception as exc:
        print(f"Failed to load scenario: {exc}", file=sys.stderr)
        return 2

    scenario_name = runner.scenario.get("id") or args.scenario.stem

    participants_path = args.scenario.parent / "participants.py"
    if participants_path.exists():
        try:
            runner.use_participants(load_participants(participants_path, router, scenario_name))
        except Exception as exc:
            print(f"Failed to load participants: {exc}", file=sys.stderr)
            return 2

    try:
        records = runner.run(close_router=True)
    except Exception as exc:
        print(f"Scenario failed: {exc}", file=sys.stderr)
        return 3

    logger.debug("Scenario %s finished after %d step(s)", scenario_name, len(records))

    if args.output == "cli":
        adapter = TraceAdapter()
        lines: List[str] = []
        for record in records:
            lines.extend(line for line in adapter.transform(record) if line)
        for line in lines:
            print(line)
        return 0

    try:
        write_trace_json(records, args.json_file)
        print(f"Router trace JSON dumped to {args.json_file}")
    except Exception as exc:
        print(f"Failed to write JSON file: {exc}", file=sys.stderr)
        return 4

    return 0  # success


if __name__ == "__main__":

    signal.signal(signal.SIGPIPE, signal.SIG_DFL)  # Ignore broken pipe
    sys.exit(main())
