"""MongoDB engine — Uses MongoDB collections as search indexes.

Each index is one collection. Documents are keyed by the record key
(``_id``) and hold the serialized searchable projection plus metadata.
Full-text search needs a text index on the collection, created with
``update_index_settings``.

Requires ``pymongo``::

    pip install scoutmongo
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from pymongo import MongoClient
from pymongo.database import Database

from scoutmongo.engines.base.engine import SearchEngine, UpdatesIndexSettings
from scoutmongo.engines.mongodb.index_settings import IndexSettingsApplier
from scoutmongo.engines.mongodb.mapper import ResultMapper
from scoutmongo.engines.mongodb.sync import BulkSynchronizer
from scoutmongo.engines.mongodb.translator import QueryTranslator
from scoutmongo.models.index import IndexSettings
from scoutmongo.models.query import SearchRequest
from scoutmongo.models.searchable import SOFT_DELETED_FIELD, Searchable, SoftDeletable


class MongoDBEngine(SearchEngine, UpdatesIndexSettings):
    """Search engine backed by a MongoDB database.

    Args:
        database: The database holding one collection per index.
        soft_delete: Keep soft-deleted records in the index, flagged with
            ``__soft_deleted``.
        client: The client that owns ``database``; closed by ``close()``
            when given.
    """

    def __init__(
        self,
        database: Database,
        soft_delete: bool = False,
        client: MongoClient | None = None,
    ) -> None:
        self._database = database
        self._soft_delete = soft_delete
        self._client = client
        self.synchronizer = BulkSynchronizer(database, soft_delete=soft_delete)
        self.translator = QueryTranslator(database)
        self.mapper = ResultMapper()
        self.index_settings = IndexSettingsApplier(database)

    @property
    def name(self) -> str:
        return "mongodb"

    @property
    def database(self) -> Database:
        return self._database

    @property
    def soft_delete(self) -> bool:
        return self._soft_delete

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    # ── Synchronization ──────────────────────────────────────────────────

    def update(self, records: Sequence[Searchable]) -> None:
        self.synchronizer.sync(records)

    def delete(self, records: Sequence[Searchable]) -> None:
        self.synchronizer.remove(records)

    def clear_index(self, name: str) -> None:
        self.synchronizer.clear(name)

    # ── Searching ────────────────────────────────────────────────────────

    def search(self, request: SearchRequest) -> list[dict[str, Any]]:
        return self.translator.execute(self._scoped(request))

    def paginate(self, request: SearchRequest, per_page: int, page: int) -> list[dict[str, Any]]:
        """Execute page ``page`` (1-based) of ``per_page`` results."""
        if not isinstance(per_page, int) or isinstance(per_page, bool):
            raise TypeError(f"per_page must be of type int, {type(per_page).__name__} given")
        if not isinstance(page, int) or isinstance(page, bool):
            raise TypeError(f"page must be of type int, {type(page).__name__} given")

        request = self._scoped(request).model_copy(update={"limit": per_page})
        return self.translator.execute(request, per_page * (page - 1))

    def map_ids(self, results: Sequence[dict[str, Any]]) -> list[Any]:
        return [result["_id"] for result in results]

    def map(self, request: SearchRequest, results: Sequence[dict[str, Any]], model: type[Searchable]) -> Any:
        return self.mapper.map(request, results, model)

    def lazy_map(
        self,
        request: SearchRequest,
        results: Sequence[dict[str, Any]],
        model: type[Searchable],
    ) -> Iterator[Searchable]:
        return self.mapper.map(request, results, model, lazy=True)

    def get_total_count(self, results: Sequence[dict[str, Any]]) -> int:
        return self.translator.get_total_count(results)

    # ── Administration ───────────────────────────────────────────────────

    def create_index(self, name: str, **options: Any) -> None:
        self._database.create_collection(name, **options)

    def delete_index(self, name: str) -> None:
        self._database.drop_collection(name)

    def update_index_settings(self, name: str, settings: IndexSettings | Mapping[str, Any]) -> None:
        self.index_settings.apply(name, settings)

    def configure_soft_delete_filter(self, settings: IndexSettings | Mapping[str, Any]) -> IndexSettings:
        return self.index_settings.with_soft_delete_filter(settings)

    # ── Helpers ──────────────────────────────────────────────────────────

    def _scoped(self, request: SearchRequest) -> SearchRequest:
        """Hide trashed records unless the request asked for them."""
        if not self._soft_delete or request.trashed != "default" or SOFT_DELETED_FIELD in request.wheres:
            return request
        if not (isinstance(request.model, type) and issubclass(request.model, SoftDeletable)):
            return request
        return request.model_copy(update={"wheres": {**request.wheres, SOFT_DELETED_FIELD: 0}})
