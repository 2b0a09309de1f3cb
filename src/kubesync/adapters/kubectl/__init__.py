"""kubectl discovery adapter."""

from __future__ import annotations

from .client import KubectlExecutor
from .fetcher import discover_capability_candidates, discover_instances

__all__ = [
    "KubectlExecutor",
    "discover_capability_candidates",
    "discover_instances",
]
