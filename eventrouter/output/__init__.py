# eventrouter/output/__init__.py
from .base import Adapter
from .dispatch_adapters import NotifyAdapter, PublishAdapter, RouteAdapter, SubscriptionAdapter
from .trace_adapter import TraceAdapter, write_trace_json, write_trace_lines

__all__ = [
    "Adapter",
    "NotifyAdapter",
    "PublishAdapter",
    "RouteAdapter",
    "SubscriptionAdapter",
    "TraceAdapter",
    "write_trace_json",
    "write_trace_lines",
]
