# eventrouter/output/base.py
from __future__ import annotations
from typing import Iterable


class Adapter:
    """Base adapter for transforming scenario step records into trace lines."""

    def transform(self, record: dict) -> Iterable[str]:
        """Override in subclasses."""
        return []
