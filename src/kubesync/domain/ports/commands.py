"""Ports for running cluster commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(slots=True, frozen=True)
class CommandResult:
    """Captured output of one command; failures are flagged, never raised."""

    output: str
    is_error: bool = False


@runtime_checkable
class CommandExecutor(Protocol):
    """Callable port executing one cluster CLI invocation."""

    def __call__(self, args: Sequence[str]) -> CommandResult: ...


__all__ = ["CommandExecutor", "CommandResult"]
