"""Ports for the searchable index."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

type MetadataValue = str | int | float | bool
type WhereFilter = Mapping[str, object]
type DistanceMetric = Literal["cosine", "l2", "ip"]


@dataclass(slots=True, frozen=True)
class IndexDocument:
    """One document to upsert. Metadata values are flat scalars only."""

    id: str
    text: str
    metadata: dict[str, MetadataValue] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class SearchHit:
    id: str
    text: str
    metadata: dict[str, MetadataValue]
    score: float  # distance, lower is closer


@runtime_checkable
class IndexStore(Protocol):
    """Contract for the vector/keyword index.

    ``initialize`` is idempotent, ``store`` upserts by id. Calling
    ``keyword_search`` without a query enumerates the collection.
    """

    def initialize(self, collection: str, *, distance_metric: DistanceMetric) -> None: ...

    def store(self, collection: str, documents: Sequence[IndexDocument]) -> None: ...

    def search(
        self,
        collection: str,
        query: str,
        *,
        n_results: int = 10,
        where: WhereFilter | None = None,
    ) -> list[SearchHit]: ...

    def keyword_search(
        self,
        collection: str,
        query: str | None,
        *,
        n_results: int = 10,
        where: WhereFilter | None = None,
    ) -> list[SearchHit]: ...

    def delete(self, collection: str, ids: Sequence[str]) -> None: ...
