"""Progress reporting port.

Every stage takes the sink explicitly; there is no implicit default channel.
"""

from __future__ import annotations

from collections.abc import Callable

type ProgressSink = Callable[[str], None]


def discard_progress(_message: str) -> None:
    """Progress sink that drops every message."""
