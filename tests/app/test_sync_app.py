from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from kubesync.adapters.locking import exclusive_writer_lock
from kubesync.app import (
    log_progress,
    search_collection,
    sync_cluster_capabilities,
    sync_cluster_instances,
)
from kubesync.config import StorageConfig, SyncConfig
from kubesync.domain.documents import instance_to_document
from kubesync.domain.errors import WriterLockError
from kubesync.domain.model import ResourceInstance
from tests.helpers.kubectl import (
    CONFIGMAPS,
    DEPLOYMENTS,
    SQLS,
    api_resources_table,
    object_item,
    object_list,
)
from tests.support.fakes import FakeExecutor, FakeIndexStore, FakeModel, ProgressRecorder

if TYPE_CHECKING:
    from pathlib import Path

SQL_PAYLOAD = {
    "capabilities": ["database"],
    "providers": [],
    "complexity": "medium",
    "description": "Managed SQL database.",
    "useCase": "Deploy a database.",
    "confidence": 0.85,
}


def _executor() -> FakeExecutor:
    return FakeExecutor(
        {
            "api-resources -o wide": api_resources_table([CONFIGMAPS, DEPLOYMENTS, SQLS]),
            "get crd -o json": object_list(object_item("sqls.devopstoolkit.live")),
            "explain configmaps --recursive": "KIND: ConfigMap",
            "explain deployments.apps --recursive": "KIND: Deployment",
            "explain sqls.devopstoolkit.live --recursive": "KIND: SQL",
            "get configmaps -A -o json": object_list(object_item("app-config", namespace="prod")),
            "get deployments.apps -A -o json": object_list(object_item("web", namespace="prod")),
            "get sqls.devopstoolkit.live -A -o json": object_list(
                object_item("orders-db", namespace="prod")
            ),
        }
    )


@pytest.fixture
def storage(tmp_path: Path) -> StorageConfig:
    return StorageConfig(data_dir=tmp_path)


def test_sync_cluster_capabilities_wires_adapters(storage: StorageConfig) -> None:
    index = FakeIndexStore()
    progress = ProgressRecorder()

    outcome = sync_cluster_capabilities(
        execute=_executor(),
        model=FakeModel(default=SQL_PAYLOAD),
        index=index,
        progress=progress,
        sync_config=SyncConfig(capabilities_collection="caps"),
        storage=storage,
    )

    assert (outcome.discovered, outcome.inferred, outcome.stored) == (3, 3, 3)
    assert index.ids("caps") == {"configmaps", "deployments.apps", "sqls.devopstoolkit.live"}
    assert progress.messages[-1] == "Sync complete: 3 discovered, 3 inferred, 3 stored."


def test_sync_cluster_capabilities_dry_run_leaves_index_alone(storage: StorageConfig) -> None:
    index = FakeIndexStore()

    outcome = sync_cluster_capabilities(
        dry_run=True,
        execute=_executor(),
        model=FakeModel(default=SQL_PAYLOAD),
        index=index,
        progress=ProgressRecorder(),
        sync_config=SyncConfig(),
        storage=storage,
    )

    assert outcome.stored == 0
    assert index.calls == []


def test_sync_cluster_instances_respects_resource_types(storage: StorageConfig) -> None:
    executor = _executor()
    index = FakeIndexStore()
    stale = ResourceInstance(
        id="prod/v1/ConfigMap/old",
        namespace="prod",
        name="old",
        kind="ConfigMap",
        api_version="v1",
        api_group="",
    )
    index.seed("instances", [instance_to_document(stale)])

    outcome = sync_cluster_instances(
        resource_types=["deployments"],
        execute=executor,
        index=index,
        progress=ProgressRecorder(),
        sync_config=SyncConfig(max_indexed_ids=50),
        storage=storage,
    )

    assert (outcome.discovered, outcome.stored, outcome.deleted) == (1, 1, 1)
    assert index.ids("instances") == {"prod/apps/v1/Deployment/web"}
    assert "get configmaps -A -o json" not in executor.commands


def test_concurrent_writer_is_rejected(storage: StorageConfig) -> None:
    index = FakeIndexStore()

    with exclusive_writer_lock(storage.lock_dir(), "instances"), pytest.raises(WriterLockError):
        sync_cluster_instances(
            execute=_executor(),
            index=index,
            progress=ProgressRecorder(),
            sync_config=SyncConfig(),
            storage=storage,
        )

    assert index.calls == []


def test_dry_run_does_not_take_the_lock(storage: StorageConfig) -> None:
    with exclusive_writer_lock(storage.lock_dir(), "instances"):
        outcome = sync_cluster_instances(
            dry_run=True,
            execute=_executor(),
            index=FakeIndexStore(),
            progress=ProgressRecorder(),
            sync_config=SyncConfig(),
            storage=storage,
        )

    assert outcome.discovered == 3


def test_search_collection_semantic_and_filtered() -> None:
    index = FakeIndexStore()
    index.seed(
        "instances",
        [
            instance_to_document(
                ResourceInstance(
                    id=f"prod/apps/v1/Deployment/{name}",
                    namespace="prod",
                    name=name,
                    kind="Deployment",
                    api_version="apps/v1",
                    api_group="apps",
                )
            )
            for name in ("web", "worker")
        ],
    )

    semantic = search_collection("instances", "worker", n_results=1, index=index)
    filtered = search_collection("instances", kind="Deployment", namespace="prod", index=index)

    assert "1. prod/apps/v1/Deployment/worker" in semantic
    assert filtered.startswith('Found 2 results in "instances" collection:')


def test_search_collection_requires_query_or_filter() -> None:
    with pytest.raises(ValueError, match="query"):
        search_collection("instances", index=FakeIndexStore())


def test_log_progress_writes_to_progress_logger(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="kubesync.progress"):
        log_progress("Discovering API resources...")

    assert [(record.name, record.getMessage()) for record in caplog.records] == [
        ("kubesync.progress", "Discovering API resources...")
    ]
