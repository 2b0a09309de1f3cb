"""Shared logging helpers for kubesync."""

from __future__ import annotations

import logging

# Client libraries that log every HTTP round-trip at INFO.
_CHATTY_LOGGERS = ("httpx", "chromadb", "groq")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with a terse CLI format.

    Parameters mirror ``logging.basicConfig``. Pass ``force=True`` to reconfigure
    during tests. Client libraries listed in ``_CHATTY_LOGGERS`` are held at
    WARNING unless ``level`` is DEBUG, so sync progress stays readable.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    if level > logging.DEBUG:
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
