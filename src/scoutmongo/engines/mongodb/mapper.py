"""Result mapping — Joins raw index hits back to canonical records.

Records are reloaded from the application's store by key. The store returns
them in any order, so the mapper restores the ranking order of the index
and annotates each record with the hit's ``_``-prefixed fields.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from scoutmongo.models.query import SearchRequest
from scoutmongo.models.searchable import Searchable


class ResultMapper:
    """Maps raw result documents to ordered, annotated records."""

    def map(
        self,
        request: SearchRequest,
        results: Sequence[dict[str, Any]],
        model: type[Searchable],
        lazy: bool = False,
    ) -> Any:
        """Map ``results`` to records of ``model``.

        Args:
            request: The request that produced ``results``.
            results: Raw documents in ranked order.
            model: The Searchable class to load.
            lazy: Stream records from ``model.cursor_searchable_by_keys``
                instead of loading them all at once.

        Returns:
            ``model.new_collection(...)`` in ranked order, or an iterator
            in ranked order when ``lazy`` is set.
        """
        if not results:
            empty = model.new_collection()
            return iter(empty) if lazy else empty

        keys = [result["_id"] for result in results]
        positions = {key: position for position, key in enumerate(keys)}

        if lazy:
            return self._stream(results, positions, model.cursor_searchable_by_keys(request, keys))

        records = [
            self._annotate(record, results[positions[record.search_key()]])
            for record in model.load_searchable_by_keys(request, keys)
            if record.search_key() in positions
        ]
        records.sort(key=lambda record: positions[record.search_key()])
        return model.new_collection(records)

    def _stream(
        self,
        results: Sequence[dict[str, Any]],
        positions: dict[Any, int],
        records: Iterable[Searchable],
    ) -> Iterator[Searchable]:
        # Records are released as soon as every earlier position has been
        # released; only out-of-order records wait in ``pending``. Repeated keys
        # keep their first occurrence.
        pending: dict[int, Searchable] = {}
        next_position = 0

        for record in records:
            position = positions.get(record.search_key())
            if position is None or position < next_position or position in pending:
                continue
            pending[position] = self._annotate(record, results[position])
            while next_position in pending:
                yield pending.pop(next_position)
                next_position += 1

        for position in sorted(pending):
            yield pending[position]

    @staticmethod
    def _annotate(record: Searchable, result: dict[str, Any]) -> Searchable:
        for key, value in result.items():
            if key.startswith("_") and key != "_id":
                record.with_search_metadata(key, value)
        return record
