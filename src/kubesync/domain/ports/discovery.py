"""Callable ports the sync orchestrators are wired with.

The application layer binds concrete collaborators (command executor, model)
into these callables; the orchestrators only forward the progress sink.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from kubesync.domain.model import CapabilityCandidate, CapabilityRecord, ResourceInstance

    from .progress import ProgressSink


@runtime_checkable
class CandidateDiscoverer(Protocol):
    """Enumerate resource types and return candidates with schema text."""

    def __call__(self, *, progress: ProgressSink) -> list[CapabilityCandidate]: ...


@runtime_checkable
class InstanceDiscoverer(Protocol):
    """Enumerate live objects of every listable resource type."""

    def __call__(self, *, progress: ProgressSink) -> list[ResourceInstance]: ...


@runtime_checkable
class CapabilityInferrer(Protocol):
    """Turn candidates into capability records, dropping failed candidates."""

    def __call__(
        self,
        candidates: Sequence[CapabilityCandidate],
        *,
        progress: ProgressSink,
    ) -> list[CapabilityRecord]: ...
