"""Application configuration helpers."""

from __future__ import annotations

from .chroma import ChromaConfig, ChromaServer, get_chroma_config, parse_chroma_url
from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .inference import InferenceConfig, get_inference_config
from .kubectl import KubectlConfig, get_kubectl_config
from .logging import configure_logging
from .storage import StorageConfig, get_storage_config
from .sync import (
    CAPABILITIES_COLLECTION,
    INSTANCES_COLLECTION,
    SyncConfig,
    get_sync_config,
)

__all__ = [
    "CAPABILITIES_COLLECTION",
    "INSTANCES_COLLECTION",
    "ChromaConfig",
    "ChromaServer",
    "ConfigurationError",
    "InferenceConfig",
    "KubectlConfig",
    "MissingConfigurationError",
    "StorageConfig",
    "SyncConfig",
    "configure_logging",
    "get_chroma_config",
    "get_inference_config",
    "get_kubectl_config",
    "get_storage_config",
    "get_sync_config",
    "parse_chroma_url",
    "require_env_var",
    "require_env_vars",
]
