"""Error types raised across the sync pipeline."""

from __future__ import annotations


class SyncError(RuntimeError):
    """Base class for errors raised by sync flows."""


class FatalEnumerationError(SyncError):
    """Raised when the resource type listing fails; nothing downstream can run."""

    def __init__(self, message: str, *, output: str = "") -> None:
        super().__init__(message)
        self.output = output


class MalformedInputError(SyncError):
    """Raised when a successful call returns a payload of an unexpected shape.

    This points at a tool/version mismatch rather than an operational failure,
    so it is never absorbed by the per-type skip logic.
    """

    def __init__(self, message: str, *, subject: str | None = None) -> None:
        super().__init__(message)
        self.subject = subject


class InferenceError(SyncError):
    """Raised when the language model fails for a single candidate."""

    def __init__(self, message: str, *, resource_name: str) -> None:
        super().__init__(message)
        self.resource_name = resource_name


class StorageError(SyncError):
    """Raised by index adapters when the backing store rejects an operation."""

    def __init__(self, message: str, *, collection: str) -> None:
        super().__init__(message)
        self.collection = collection


class WriterLockError(SyncError):
    """Raised when another sync run already holds a collection's writer lock."""

    def __init__(self, message: str, *, collection: str) -> None:
        super().__init__(message)
        self.collection = collection
