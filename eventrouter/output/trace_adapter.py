# eventrouter/output/trace_adapter.py
import json
import logging
from pathlib import Path
from typing import Any, Iterable

from .dispatch_adapters import NotifyAdapter, PublishAdapter, RouteAdapter, SubscriptionAdapter

logger = logging.getLogger(__name__)


class TraceAdapter:
    """Dispatch step records to the adapter for their router call."""

    def __init__(self):
        subscription = SubscriptionAdapter()
        self.adapters = {
            "notify": NotifyAdapter(),
            "publish": PublishAdapter(),
            "route": RouteAdapter(),
            "subscribe": subscription,
            "unsubscribe": subscription,
        }

    def transform(self, record: dict) -> list[str]:
        adapter = self.adapters.get(record.get("via"))
        if adapter:
            return list(adapter.transform(record))
        return []


def write_trace_lines(records: Iterable[dict], output_file_path: str | Path) -> None:
    adapter = TraceAdapter()
    output_file = Path(output_file_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with output_file.open("w", encoding="utf-8") as f:
        for record in records:
            for line in adapter.transform(record):
                if line:
                    f.write(line + "\n")


def write_trace_json(records: list[dict[str, Any]], output_file_path: str | Path) -> None:
    output_file = Path(output_file_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with output_file.open("w", encoding="utf-8") as f:
        # Handler results are opaque; anything JSON can't take is stringified
        json.dump(records, f, indent=2, default=str)
    logger.debug("Wrote %d step record(s) to %s", len(records), output_file)
