"""ChromaDB-backed implementation of the index port."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

import chromadb
from chromadb.errors import ChromaError

from kubesync.domain.errors import StorageError
from kubesync.domain.ports import SearchHit

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from chromadb.api import ClientAPI
    from chromadb.api.models.Collection import Collection

    from kubesync.config.chroma import ChromaConfig
    from kubesync.domain.ports import DistanceMetric, IndexDocument, MetadataValue, WhereFilter

log = getLogger(__name__)

_BACKEND_ERRORS = (ChromaError, ValueError)


def build_chroma_client(config: ChromaConfig) -> ClientAPI:
    if config.server is not None:
        server = config.server
        log.info("Connecting to Chroma at %s:%s", server.host, server.port)
        return chromadb.HttpClient(host=server.host, port=server.port, ssl=server.ssl)
    if config.path is None:
        raise ValueError("ChromaConfig needs either a server or a path")
    log.info("Using local Chroma store at %s", config.path)
    return chromadb.PersistentClient(path=str(config.path))


class ChromaIndexStore:
    """Index store over Chroma collections.

    Collections must be initialized before use; the distance metric is fixed
    when a collection is first created.
    """

    def __init__(
        self,
        *,
        config: ChromaConfig | None = None,
        client: ClientAPI | None = None,
        client_factory: Callable[[ChromaConfig], ClientAPI] = build_chroma_client,
    ) -> None:
        if client is None and config is None:
            raise ValueError("ChromaIndexStore needs a config or a client")
        self._config = config
        self._client = client
        self._client_factory = client_factory
        self._collections: dict[str, Collection] = {}

    @property
    def client(self) -> ClientAPI:
        """The Chroma client, connected on first use."""

        if self._client is None:
            self._client = self._client_factory(cast("ChromaConfig", self._config))
        return self._client

    def initialize(self, collection: str, *, distance_metric: DistanceMetric) -> None:
        if collection in self._collections:
            return
        try:
            self._collections[collection] = self.client.get_or_create_collection(
                name=collection,
                metadata={"hnsw:space": distance_metric},
            )
        except _BACKEND_ERRORS as exc:
            raise StorageError(
                f'Failed to initialize collection "{collection}": {exc}', collection=collection
            ) from exc

    def store(self, collection: str, documents: Sequence[IndexDocument]) -> None:
        target = self._collection(collection)
        if not documents:
            return
        try:
            target.upsert(
                ids=[document.id for document in documents],
                documents=[document.text for document in documents],
                metadatas=cast("Any", [dict(document.metadata) for document in documents]),
            )
        except _BACKEND_ERRORS as exc:
            raise StorageError(
                f'Failed to store {len(documents)} documents in "{collection}": {exc}',
                collection=collection,
            ) from exc
        log.debug("Upserted %d documents into %s", len(documents), collection)

    def search(
        self,
        collection: str,
        query: str,
        *,
        n_results: int = 10,
        where: WhereFilter | None = None,
    ) -> list[SearchHit]:
        target = self._collection(collection)
        kwargs: dict[str, Any] = {
            "query_texts": [query],
            "n_results": n_results,
            "include": ["documents", "metadatas", "distances"],
        }
        if where:
            kwargs["where"] = dict(where)
        try:
            result = target.query(**kwargs)
        except _BACKEND_ERRORS as exc:
            raise StorageError(
                f'Search in "{collection}" failed: {exc}', collection=collection
            ) from exc

        # One query text was sent, so every column holds a single row.
        ids = _first_row(result.get("ids"))
        documents = _first_row(result.get("documents"))
        metadatas = _first_row(result.get("metadatas"))
        distances = _first_row(result.get("distances"))
        return [
            SearchHit(
                id=doc_id,
                text=_at(documents, position) or "",
                metadata=_metadata(_at(metadatas, position)),
                score=float(_at(distances, position) or 0.0),
            )
            for position, doc_id in enumerate(ids)
        ]

    def keyword_search(
        self,
        collection: str,
        query: str | None,
        *,
        n_results: int = 10,
        where: WhereFilter | None = None,
    ) -> list[SearchHit]:
        """Substring match on document text, or every document when ``query`` is empty."""

        target = self._collection(collection)
        kwargs: dict[str, Any] = {"limit": n_results, "include": ["documents", "metadatas"]}
        if query:
            kwargs["where_document"] = {"$contains": query}
        if where:
            kwargs["where"] = dict(where)
        try:
            result = target.get(**kwargs)
        except _BACKEND_ERRORS as exc:
            raise StorageError(
                f'Keyword search in "{collection}" failed: {exc}', collection=collection
            ) from exc

        ids = list(result.get("ids") or [])
        documents = list(result.get("documents") or [])
        metadatas = list(result.get("metadatas") or [])
        return [
            SearchHit(
                id=doc_id,
                text=_at(documents, position) or "",
                metadata=_metadata(_at(metadatas, position)),
                score=0.0,
            )
            for position, doc_id in enumerate(ids)
        ]

    def delete(self, collection: str, ids: Sequence[str]) -> None:
        target = self._collection(collection)
        if not ids:
            return
        try:
            target.delete(ids=list(ids))
        except _BACKEND_ERRORS as exc:
            raise StorageError(
                f'Failed to delete {len(ids)} documents from "{collection}": {exc}',
                collection=collection,
            ) from exc

    def _collection(self, name: str) -> Collection:
        collection = self._collections.get(name)
        if collection is None:
            raise StorageError(
                f'Collection "{name}" has not been initialized. Call initialize("{name}") first.',
                collection=name,
            )
        return collection


def _first_row(column: Sequence[Any] | None) -> list[Any]:
    if not column:
        return []
    return list(column[0] or [])


def _at(values: Sequence[Any], position: int) -> Any:
    return values[position] if position < len(values) else None


def _metadata(raw: Mapping[str, Any] | None) -> dict[str, MetadataValue]:
    if not raw:
        return {}
    return {key: value for key, value in raw.items() if isinstance(value, str | int | float | bool)}
