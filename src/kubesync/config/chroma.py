"""ChromaDB connection settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from .env import optional_env_var
from .errors import ConfigurationError
from .storage import StorageConfig, get_storage_config

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True, slots=True)
class ChromaServer:
    host: str
    port: int
    ssl: bool


@dataclass(frozen=True, slots=True)
class ChromaConfig:
    """Either a remote server (``server``) or an on-disk store (``path``)."""

    server: ChromaServer | None = None
    path: Path | None = None


def parse_chroma_url(url: str) -> ChromaServer:
    parsed = urlsplit(url)
    if parsed.scheme not in {"http", "https"} or not parsed.hostname:
        raise ConfigurationError(f"CHROMA_URL must be an http(s) URL, got {url!r}")
    ssl = parsed.scheme == "https"
    port = parsed.port or (443 if ssl else 8000)
    return ChromaServer(host=parsed.hostname, port=port, ssl=ssl)


def get_chroma_config(*, storage: StorageConfig | None = None) -> ChromaConfig:
    url = optional_env_var("CHROMA_URL")
    if url is not None:
        return ChromaConfig(server=parse_chroma_url(url))
    storage_config = storage or get_storage_config()
    return ChromaConfig(path=storage_config.chroma_path())
