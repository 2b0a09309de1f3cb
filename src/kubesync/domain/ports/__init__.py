"""Domain port definitions for adapters."""

from __future__ import annotations

from .commands import CommandExecutor, CommandResult
from .discovery import CandidateDiscoverer, CapabilityInferrer, InstanceDiscoverer
from .index import (
    DistanceMetric,
    IndexDocument,
    IndexStore,
    MetadataValue,
    SearchHit,
    WhereFilter,
)
from .inference import ChatMessage, StructuredModel
from .progress import ProgressSink, discard_progress

__all__ = [
    "CandidateDiscoverer",
    "CapabilityInferrer",
    "ChatMessage",
    "CommandExecutor",
    "CommandResult",
    "DistanceMetric",
    "IndexDocument",
    "IndexStore",
    "InstanceDiscoverer",
    "MetadataValue",
    "ProgressSink",
    "SearchHit",
    "StructuredModel",
    "WhereFilter",
    "discard_progress",
]
