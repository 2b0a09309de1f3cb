"""Application orchestration entry points."""

from __future__ import annotations

from contextlib import nullcontext
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from kubesync.adapters.chroma import ChromaIndexStore
from kubesync.adapters.kubectl import (
    KubectlExecutor,
    discover_capability_candidates,
    discover_instances,
)
from kubesync.adapters.llm import build_structured_model, infer_capabilities
from kubesync.adapters.locking import exclusive_writer_lock
from kubesync.config import (
    get_chroma_config,
    get_inference_config,
    get_kubectl_config,
    get_storage_config,
    get_sync_config,
)
from kubesync.domain.search import build_where_filter, format_search_results
from kubesync.domain.sync import DISTANCE_METRIC, sync_capabilities, sync_instances

if TYPE_CHECKING:
    from collections.abc import Sequence
    from contextlib import AbstractContextManager

    from kubesync.config import StorageConfig, SyncConfig
    from kubesync.domain.model import SyncOutcome
    from kubesync.domain.ports import (
        CommandExecutor,
        IndexStore,
        ProgressSink,
        StructuredModel,
    )

log = getLogger(__name__)
progress_log = getLogger("kubesync.progress")


def log_progress(message: str) -> None:
    """Progress sink writing each message to the ``kubesync.progress`` logger."""

    progress_log.info(message)


def sync_cluster_capabilities(
    *,
    dry_run: bool = False,
    execute: CommandExecutor | None = None,
    model: StructuredModel | None = None,
    index: IndexStore | None = None,
    progress: ProgressSink = log_progress,
    sync_config: SyncConfig | None = None,
    storage: StorageConfig | None = None,
) -> SyncOutcome:
    """Run the capability flow against the configured cluster and index."""

    config = sync_config or get_sync_config()
    storage_config = storage or get_storage_config()
    effective_execute = execute or KubectlExecutor(config=get_kubectl_config())
    effective_model = model or build_structured_model(get_inference_config())
    effective_index = index or ChromaIndexStore(config=get_chroma_config(storage=storage_config))
    collection = config.capabilities_collection
    log.info("Starting capability sync: collection=%s, dry_run=%s", collection, dry_run)

    with _writer_lock(storage_config, collection, dry_run=dry_run):
        outcome = sync_capabilities(
            discover=partial(discover_capability_candidates, execute=effective_execute),
            infer=partial(infer_capabilities, model=effective_model),
            index=effective_index,
            progress=progress,
            dry_run=dry_run,
            collection=collection,
        )

    log.info(
        "Finished capability sync: discovered=%s, inferred=%s, stored=%s",
        outcome.discovered,
        outcome.inferred,
        outcome.stored,
    )
    return outcome


def sync_cluster_instances(
    *,
    dry_run: bool = False,
    resource_types: Sequence[str] | None = None,
    execute: CommandExecutor | None = None,
    index: IndexStore | None = None,
    progress: ProgressSink = log_progress,
    sync_config: SyncConfig | None = None,
    storage: StorageConfig | None = None,
) -> SyncOutcome:
    """Run the instance flow, purging index entries for objects that are gone."""

    config = sync_config or get_sync_config()
    storage_config = storage or get_storage_config()
    effective_execute = execute or KubectlExecutor(config=get_kubectl_config())
    effective_index = index or ChromaIndexStore(config=get_chroma_config(storage=storage_config))
    collection = config.instances_collection
    log.info(
        "Starting instance sync: collection=%s, dry_run=%s, resource_types=%s",
        collection,
        dry_run,
        ",".join(resource_types) if resource_types else "all",
    )

    with _writer_lock(storage_config, collection, dry_run=dry_run):
        outcome = sync_instances(
            discover=partial(
                discover_instances,
                execute=effective_execute,
                resource_types=resource_types,
            ),
            index=effective_index,
            progress=progress,
            dry_run=dry_run,
            collection=collection,
            page_size=config.max_indexed_ids,
        )

    log.info(
        "Finished instance sync: discovered=%s, stored=%s, deleted=%s",
        outcome.discovered,
        outcome.stored,
        outcome.deleted,
    )
    return outcome


def search_collection(
    collection: str,
    query: str | None = None,
    *,
    kind: str | None = None,
    api_group: str | None = None,
    namespace: str | None = None,
    n_results: int = 10,
    index: IndexStore | None = None,
) -> str:
    """Search a synced collection and return the formatted results.

    A query runs a semantic search narrowed by any filters. Without a query the
    filters alone select documents.
    """

    where = build_where_filter(kind=kind, api_group=api_group, namespace=namespace)
    if not query and where is None:
        raise ValueError("Provide a query or at least one of --kind, --api-group, --namespace")

    effective_index = index or ChromaIndexStore(config=get_chroma_config())
    effective_index.initialize(collection, distance_metric=DISTANCE_METRIC)
    if query:
        hits = effective_index.search(collection, query, n_results=n_results, where=where)
    else:
        hits = effective_index.keyword_search(collection, None, n_results=n_results, where=where)
    return format_search_results(hits, collection)


def _writer_lock(
    storage: StorageConfig, collection: str, *, dry_run: bool
) -> AbstractContextManager[object]:
    if dry_run:
        return nullcontext()
    return exclusive_writer_lock(storage.lock_dir(), collection)
