"""Exclusive per-collection writer lock."""

from __future__ import annotations

import fcntl
import os
from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from kubesync.domain.errors import WriterLockError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

log = getLogger(__name__)


def lock_path(lock_dir: Path, collection: str) -> Path:
    return lock_dir / f"{collection}.lock"


@contextmanager
def exclusive_writer_lock(lock_dir: Path, collection: str) -> Iterator[Path]:
    """Hold a non-blocking exclusive lock on ``collection`` for the block.

    Raises ``WriterLockError`` immediately when another process holds it.
    """

    path = lock_path(lock_dir, collection)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
    try:
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError as exc:
            raise WriterLockError(
                f'Another sync is already writing to "{collection}" (lock: {path})',
                collection=collection,
            ) from exc
        log.debug("Acquired writer lock %s", path)
        try:
            yield path
        finally:
            fcntl.flock(fd, fcntl.LOCK_UN)
            log.debug("Released writer lock %s", path)
    finally:
        os.close(fd)
