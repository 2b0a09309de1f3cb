"""Sync orchestrators for the capability and instance flows.

Both flows run strictly sequentially: discovery, inference (capabilities only),
reconciliation (instances only) and storage never overlap. The caller's progress
sink is handed unchanged to every stage so all messages form one ordered stream.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from kubesync.config.sync import (
    CAPABILITIES_COLLECTION,
    DEFAULT_MAX_INDEXED_IDS,
    INSTANCES_COLLECTION,
)

from .documents import capability_to_document, instance_to_document
from .model import SyncOutcome
from .reconciliation import reconcile_instances
from .run_state import SyncRun, SyncState

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .ports.discovery import CandidateDiscoverer, CapabilityInferrer, InstanceDiscoverer
    from .ports.index import DistanceMetric, IndexDocument, IndexStore
    from .ports.progress import ProgressSink

log = getLogger(__name__)

DISTANCE_METRIC: DistanceMetric = "cosine"


def sync_capabilities(
    *,
    discover: CandidateDiscoverer,
    infer: CapabilityInferrer,
    index: IndexStore,
    progress: ProgressSink,
    dry_run: bool = False,
    collection: str = CAPABILITIES_COLLECTION,
    run: SyncRun | None = None,
) -> SyncOutcome:
    """Discover resource types, infer their capabilities and upsert them.

    There is no stale cleanup for capabilities. In dry-run mode the index is
    never touched and ``stored`` is 0; discovery and inference still run.
    """

    tracker = run or SyncRun(flow="capability")
    try:
        tracker.advance(SyncState.DISCOVERING)
        candidates = discover(progress=progress)

        tracker.advance(SyncState.INFERRING)
        records = infer(candidates, progress=progress)

        stored = 0
        if dry_run:
            progress("Dry run: skipping storage.")
        else:
            tracker.advance(SyncState.STORING)
            stored = _store_documents(
                index,
                collection,
                [capability_to_document(record) for record in records],
                noun="capabilities",
                progress=progress,
            )

        outcome = SyncOutcome(
            discovered=len(candidates),
            inferred=len(records),
            stored=stored,
        )
        tracker.advance(SyncState.COMPLETE)
    except Exception:
        tracker.fail()
        raise

    progress(
        f"Sync complete: {outcome.discovered} discovered, {outcome.inferred} inferred, "
        f"{outcome.stored} stored."
    )
    return outcome


def sync_instances(
    *,
    discover: InstanceDiscoverer,
    index: IndexStore,
    progress: ProgressSink,
    dry_run: bool = False,
    collection: str = INSTANCES_COLLECTION,
    page_size: int = DEFAULT_MAX_INDEXED_IDS,
    run: SyncRun | None = None,
) -> SyncOutcome:
    """Discover live instances, purge stale index entries, then upsert the snapshot.

    In dry-run mode neither the indexed-id read nor any write happens and both
    ``stored`` and ``deleted`` are 0.
    """

    tracker = run or SyncRun(flow="instance")
    try:
        tracker.advance(SyncState.DISCOVERING)
        instances = discover(progress=progress)

        stored = 0
        deleted = 0
        if dry_run:
            progress("Dry run: skipping storage and stale cleanup.")
        else:
            tracker.advance(SyncState.RECONCILING)
            index.initialize(collection, distance_metric=DISTANCE_METRIC)
            deleted = reconcile_instances(
                index=index,
                collection=collection,
                live_ids=[instance.id for instance in instances],
                page_size=page_size,
                progress=progress,
            )

            tracker.advance(SyncState.STORING)
            stored = _store_documents(
                index,
                collection,
                [instance_to_document(instance) for instance in instances],
                noun="instances",
                progress=progress,
            )

        outcome = SyncOutcome(discovered=len(instances), stored=stored, deleted=deleted)
        tracker.advance(SyncState.COMPLETE)
    except Exception:
        tracker.fail()
        raise

    progress(
        f"Sync complete: {outcome.discovered} discovered, {outcome.stored} stored, "
        f"{outcome.deleted} deleted."
    )
    return outcome


def _store_documents(
    index: IndexStore,
    collection: str,
    documents: Sequence[IndexDocument],
    *,
    noun: str,
    progress: ProgressSink,
) -> int:
    index.initialize(collection, distance_metric=DISTANCE_METRIC)
    if not documents:
        progress(f"No {noun} to store.")
        return 0

    progress(f"Storing {len(documents)} {noun} in the index...")
    index.store(collection, documents)
    progress(f'Storage complete: {len(documents)} {noun} stored in "{collection}" collection.')
    log.info("Stored %s %s in %r", len(documents), noun, collection)
    return len(documents)
