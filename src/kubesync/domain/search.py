"""Helpers for querying the synced collections."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .ports.index import MetadataValue, SearchHit


def build_where_filter(
    *,
    kind: str | None = None,
    api_group: str | None = None,
    namespace: str | None = None,
) -> dict[str, object] | None:
    """Build an exact-match metadata filter; several conditions are AND-ed."""

    conditions: list[dict[str, object]] = []
    if kind:
        conditions.append({"kind": kind})
    if api_group:
        conditions.append({"apiGroup": api_group})
    if namespace:
        conditions.append({"namespace": namespace})

    if not conditions:
        return None
    if len(conditions) == 1:
        return conditions[0]
    return {"$and": conditions}


def describe_distance(score: float) -> str:
    if score < 0.3:
        return "very similar"
    if score < 0.6:
        return "similar"
    if score < 1.0:
        return "somewhat related"
    return "weak match"


def format_search_results(hits: Sequence[SearchHit], collection: str) -> str:
    if not hits:
        return f'No results found in "{collection}" collection.'

    plural = "" if len(hits) == 1 else "s"
    blocks: list[str] = []
    for position, hit in enumerate(hits, start=1):
        lines = [
            f"{position}. {hit.id} (distance: {hit.score:.2f}, {describe_distance(hit.score)})",
            f"   {hit.text}",
        ]
        metadata_line = _format_metadata(hit.metadata)
        if metadata_line:
            lines.append(f"   Metadata: {metadata_line}")
        blocks.append("\n".join(lines))

    header = f'Found {len(hits)} result{plural} in "{collection}" collection:\n'
    return header + "\n" + "\n\n".join(blocks)


def _format_metadata(metadata: dict[str, MetadataValue]) -> str:
    return ", ".join(f"{key}={value}" for key, value in metadata.items())
