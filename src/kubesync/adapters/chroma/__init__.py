"""ChromaDB index adapter."""

from __future__ import annotations

from .store import ChromaIndexStore, build_chroma_client

__all__ = ["ChromaIndexStore", "build_chroma_client"]
