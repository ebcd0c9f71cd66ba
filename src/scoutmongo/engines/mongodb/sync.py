"""Bulk synchronization of index documents with canonical records."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pymongo import DeleteOne, UpdateOne
from pymongo.database import Database

from scoutmongo.engines.base.exceptions import ContractViolationError
from scoutmongo.engines.mongodb.serializer import serialize
from scoutmongo.models.searchable import SOFT_DELETED_FIELD, Searchable, SoftDeletable, soft_deleted_flag

logger = logging.getLogger(__name__)


class BulkSynchronizer:
    """Writes record changes to the index collection.

    Each call issues at most one request to MongoDB. Driver errors
    (``pymongo.errors.BulkWriteError`` and friends) propagate unchanged.

    Args:
        database: The database holding the index collections.
        soft_delete: Whether soft-deleted records stay in the index,
            flagged with ``__soft_deleted``.
    """

    def __init__(self, database: Database, soft_delete: bool = False) -> None:
        self._database = database
        self._soft_delete = soft_delete

    def sync(self, records: Sequence[Searchable]) -> None:
        """Upsert each record's index document, or delete it when the record has nothing searchable."""
        if not records:
            return

        if self._soft_delete:
            for record in records:
                if isinstance(record, SoftDeletable):
                    record.push_soft_delete_metadata()

        operations: list[UpdateOne | DeleteOne] = []
        for record in records:
            _check_searchable(record)
            key = record.search_key()
            document = serialize(record.to_searchable_dict())

            if not document:
                operations.append(DeleteOne({"_id": key}))
                continue

            document.update(record.search_metadata())
            document.pop("_id", None)

            if SOFT_DELETED_FIELD in document:
                document[SOFT_DELETED_FIELD] = soft_deleted_flag(document[SOFT_DELETED_FIELD])

            operations.append(UpdateOne({"_id": key}, {"$set": document}, upsert=True))

        collection = self._database.get_collection(records[0].indexable_as())
        collection.bulk_write(operations)
        logger.debug("Synced %d records to index %s", len(operations), collection.name)

    def remove(self, records: Sequence[Searchable]) -> None:
        """Delete the index documents of ``records``."""
        if not records:
            return

        keys: list[Any] = []
        for record in records:
            _check_searchable(record)
            keys.append(record.search_key())

        collection = self._database.get_collection(records[0].indexable_as())
        collection.delete_many({"_id": {"$in": keys}})
        logger.debug("Removed %d records from index %s", len(keys), collection.name)

    def clear(self, index_name: str) -> None:
        """Delete every document in ``index_name``."""
        self._database.get_collection(index_name).delete_many({})
        logger.debug("Cleared index %s", index_name)


def _check_searchable(record: Any) -> None:
    if not isinstance(record, Searchable):
        raise ContractViolationError(
            f"Record of type {type(record).__name__!r} must subclass {Searchable.__name__}"
        )
