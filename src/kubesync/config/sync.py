"""Synchronization defaults for the capability and instance flows."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_int, optional_env_var

CAPABILITIES_COLLECTION = "capabilities"
INSTANCES_COLLECTION = "instances"
DEFAULT_MAX_INDEXED_IDS = 10_000


@dataclass(frozen=True, slots=True)
class SyncConfig:
    capabilities_collection: str = CAPABILITIES_COLLECTION
    instances_collection: str = INSTANCES_COLLECTION
    # Single-page cap on the indexed-id read used for stale cleanup.
    max_indexed_ids: int = DEFAULT_MAX_INDEXED_IDS


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        capabilities_collection=(
            optional_env_var("KUBESYNC_CAPABILITIES_COLLECTION") or CAPABILITIES_COLLECTION
        ),
        instances_collection=(
            optional_env_var("KUBESYNC_INSTANCES_COLLECTION") or INSTANCES_COLLECTION
        ),
        max_indexed_ids=env_int("KUBESYNC_MAX_INDEXED_IDS", DEFAULT_MAX_INDEXED_IDS),
    )
