"""Stale-entry cleanup for the instance collection.

Only the instance flow reconciles; capability records are upserted and never
purged.

The indexed ids are read with one bulk listing capped at ``page_size``; there
is no pagination loop. The run assumes it is the only writer of the collection
between that read and the following delete/store.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .ports.index import IndexStore
    from .ports.progress import ProgressSink

log = getLogger(__name__)


def compute_stale_ids(indexed_ids: Iterable[str], live_ids: Iterable[str]) -> list[str]:
    """Return ``indexed_ids - live_ids``, keeping the index's order."""

    live = set(live_ids)
    seen: set[str] = set()
    stale: list[str] = []
    for doc_id in indexed_ids:
        if doc_id in live or doc_id in seen:
            continue
        seen.add(doc_id)
        stale.append(doc_id)
    return stale


def reconcile_instances(
    *,
    index: IndexStore,
    collection: str,
    live_ids: Iterable[str],
    page_size: int,
    progress: ProgressSink,
) -> int:
    """Delete indexed entries missing from the live snapshot; return how many."""

    existing = index.keyword_search(collection, None, n_results=page_size)
    if len(existing) >= page_size:
        log.warning(
            "Indexed id listing for %r hit the page size (%s); stale cleanup may be incomplete",
            collection,
            page_size,
        )

    stale_ids = compute_stale_ids((hit.id for hit in existing), live_ids)
    if not stale_ids:
        return 0

    progress(f"Removing {len(stale_ids)} stale instances from the index...")
    index.delete(collection, stale_ids)
    return len(stale_ids)
