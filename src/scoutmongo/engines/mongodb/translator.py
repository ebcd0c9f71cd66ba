"""Query translation — Compiles a SearchRequest into an aggregation and runs it.

The compiled pipeline returns one document per paginated hit, each carrying
the total match count for the whole request under ``__count``:

  [$match] → [$sort] → $facet {results: [$skip] [$limit], count: $count}
           → $unwind results → $unwind count → $replaceRoot
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from bson.codec_options import CodecOptions
from pymongo.collection import Collection
from pymongo.command_cursor import CommandCursor
from pymongo.cursor import Cursor
from pymongo.database import Database

from scoutmongo.engines.base.exceptions import ContractViolationError
from scoutmongo.engines.mongodb.pipeline import (
    Count,
    Facet,
    Limit,
    Match,
    Pipeline,
    ReplaceRoot,
    Skip,
    Sort,
    Stage,
    Unwind,
)
from scoutmongo.models.query import SearchRequest
from scoutmongo.models.searchable import SOFT_DELETED_FIELD, soft_deleted_flag

logger = logging.getLogger(__name__)

COUNT_FIELD = "__count"

# Results decode as plain dicts with aware UTC datetimes, in both modes.
RESULT_CODEC_OPTIONS: CodecOptions = CodecOptions(document_class=dict, tz_aware=True)


class QueryTranslator:
    """Runs search requests against the index collections of ``database``."""

    def __init__(self, database: Database, codec_options: CodecOptions = RESULT_CODEC_OPTIONS) -> None:
        self._database = database
        self._codec_options = codec_options

    def execute(self, request: SearchRequest, offset: int | None = None) -> list[dict[str, Any]]:
        """Execute ``request`` and return the raw ranked documents.

        Args:
            request: The search request.
            offset: Number of matches to skip before the page starts.

        Returns:
            Raw documents in store-ranked order, each with ``__count``
            unless the request used a raw query override.

        Raises:
            ContractViolationError: If the override callback does not
                return a cursor.
        """
        collection = self._collection(request)

        if request.callback is not None:
            cursor = request.callback(collection, request.query, offset)
            if not isinstance(cursor, (Cursor, CommandCursor)):
                raise ContractViolationError(
                    f"The search callback must return a MongoDB cursor, {type(cursor).__name__} returned"
                )
            return list(cursor)

        pipeline = self.build_pipeline(request, offset)
        results = list(collection.aggregate(pipeline.to_list()))
        logger.debug(
            "Searched %s with %d pipeline stages: %d results",
            collection.name,
            len(pipeline),
            len(results),
        )
        return results

    def build_pipeline(self, request: SearchRequest, offset: int | None = None) -> Pipeline:
        """Compile ``request`` into an aggregation pipeline."""
        pipeline = Pipeline()

        clauses = self._match_clauses(request)
        if clauses:
            pipeline.add(Match(clauses))

        if request.orders:
            pipeline.add(Sort([(order.column, 1 if order.direction == "asc" else -1) for order in request.orders]))

        pagination: list[Stage] = []
        if offset:
            pagination.append(Skip(offset))
        if request.limit:
            pagination.append(Limit(request.limit))

        pipeline.add(Facet({"results": pagination, "count": [Count("count")]}))
        pipeline.add(Unwind("$results"))
        pipeline.add(Unwind("$count"))
        pipeline.add(ReplaceRoot({"$mergeObjects": ["$results", {COUNT_FIELD: "$count.count"}]}))
        return pipeline

    @staticmethod
    def get_total_count(results: Sequence[dict[str, Any]]) -> int:
        """Total matches of the request that produced ``results``."""
        if not results:
            return 0
        if COUNT_FIELD not in results[0]:
            raise ContractViolationError(
                f"Search results carry no {COUNT_FIELD!r} field; raw query callbacks must add it to be counted"
            )
        return int(results[0][COUNT_FIELD])

    # ── Helpers ──────────────────────────────────────────────────────────

    def _collection(self, request: SearchRequest) -> Collection:
        return self._database.get_collection(request.searchable_as(), codec_options=self._codec_options)

    @staticmethod
    def _match_clauses(request: SearchRequest) -> list[dict[str, Any]]:
        clauses: list[dict[str, Any]] = []
        if request.query:
            clauses.append({"$text": {"$search": request.query}})

        for field, value in request.wheres.items():
            if field == SOFT_DELETED_FIELD:
                value = soft_deleted_flag(value)
            clauses.append({field: value})

        for field, values in request.where_ins.items():
            clauses.append({field: {"$in": _coerce_values(field, values)}})

        for field, values in request.where_not_ins.items():
            clauses.append({field: {"$nin": _coerce_values(field, values)}})

        return clauses


def _coerce_values(field: str, values: Any) -> list[Any]:
    if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple, set, frozenset)):
        values = [values]
    if field == SOFT_DELETED_FIELD:
        return [soft_deleted_flag(value) for value in values]
    return list(values)
