"""Tagged per-item results for loops that must continue past one bad item.

Stages record one ``Attempt`` per item, in order, and reduce the list once with
``partition_attempts``. Skipping a failed item is then a property of the
reduction rather than of scattered ``try`` blocks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Succeeded[T]:
    subject: str
    value: T


@dataclass(slots=True, frozen=True)
class Failed:
    subject: str
    reason: str


type Attempt[T] = Succeeded[T] | Failed


@dataclass(slots=True)
class Partitioned[T]:
    values: list[T] = field(default_factory=list)
    failures: list[Failed] = field(default_factory=list)


def partition_attempts[T](attempts: Iterable[Attempt[T]], *, stage: str) -> Partitioned[T]:
    """Split ``attempts`` into values and failures, logging one warning per failure."""

    result: Partitioned[T] = Partitioned()
    for attempt in attempts:
        if isinstance(attempt, Succeeded):
            result.values.append(attempt.value)
            continue
        log.warning("%s: skipping %s (%s)", stage, attempt.subject, attempt.reason)
        result.failures.append(attempt)
    return result
