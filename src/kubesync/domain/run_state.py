"""Lifecycle of a single sync run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import Final

log = getLogger(__name__)


class SyncState(StrEnum):
    IDLE = "idle"
    DISCOVERING = "discovering"
    INFERRING = "inferring"
    RECONCILING = "reconciling"
    STORING = "storing"
    COMPLETE = "complete"
    FAILED = "failed"


TERMINAL_STATES: Final[frozenset[SyncState]] = frozenset({SyncState.COMPLETE, SyncState.FAILED})

# INFERRING only occurs in the capability flow, RECONCILING only in the instance flow.
_TRANSITIONS: Final[dict[SyncState, frozenset[SyncState]]] = {
    SyncState.IDLE: frozenset({SyncState.DISCOVERING}),
    SyncState.DISCOVERING: frozenset(
        {SyncState.INFERRING, SyncState.RECONCILING, SyncState.STORING, SyncState.COMPLETE}
    ),
    SyncState.INFERRING: frozenset({SyncState.STORING, SyncState.COMPLETE}),
    SyncState.RECONCILING: frozenset({SyncState.STORING}),
    SyncState.STORING: frozenset({SyncState.COMPLETE}),
    SyncState.COMPLETE: frozenset(),
    SyncState.FAILED: frozenset(),
}


class InvalidTransitionError(RuntimeError):
    """Raised when a run is moved to a state its current state cannot reach."""


@dataclass(slots=True)
class SyncRun:
    """Tracks the state of one run and the path it took."""

    flow: str
    state: SyncState = SyncState.IDLE
    history: list[SyncState] = field(default_factory=lambda: [SyncState.IDLE])

    def advance(self, target: SyncState) -> None:
        if target is SyncState.FAILED:
            self.fail()
            return
        if target not in _TRANSITIONS[self.state]:
            raise InvalidTransitionError(
                f"{self.flow} sync cannot move from {self.state} to {target}"
            )
        self._enter(target)

    def fail(self) -> None:
        if self.state in TERMINAL_STATES:
            raise InvalidTransitionError(f"{self.flow} sync already finished as {self.state}")
        self._enter(SyncState.FAILED)

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def _enter(self, target: SyncState) -> None:
        log.debug("%s sync: %s -> %s", self.flow, self.state, target)
        self.state = target
        self.history.append(target)
