"""Index settings — Creates MongoDB indexes from declarative attribute lists."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pymongo import TEXT
from pymongo.database import Database

from scoutmongo.models.index import IndexSettings
from scoutmongo.models.searchable import SOFT_DELETED_FIELD

logger = logging.getLogger(__name__)


class IndexSettingsApplier:
    """Applies ``IndexSettings`` to the collections of ``database``."""

    def __init__(self, database: Database) -> None:
        self._database = database

    def apply(self, index_name: str, settings: IndexSettings | Mapping[str, Any]) -> None:
        """Create the text index and one index per filterable attribute entry.

        Store errors (e.g. ``pymongo.errors.OperationFailure`` for a second
        text index) propagate.
        """
        settings = _coerce(settings)
        collection = self._database.get_collection(index_name)

        if settings.searchable_attributes:
            collection.create_index([(field, TEXT) for field in settings.searchable_attributes])
            logger.debug("Created text index on %s: %s", index_name, settings.searchable_attributes)

        for fields in settings.filterable_attributes:
            collection.create_index(list(fields.items()))
            logger.debug("Created index on %s: %s", index_name, fields)

    @staticmethod
    def with_soft_delete_filter(settings: IndexSettings | Mapping[str, Any]) -> IndexSettings:
        """Return a copy of ``settings`` that also indexes ``__soft_deleted``."""
        settings = _coerce(settings)
        return settings.model_copy(
            update={"filterable_attributes": [*settings.filterable_attributes, {SOFT_DELETED_FIELD: 1}]}
        )


def _coerce(settings: IndexSettings | Mapping[str, Any]) -> IndexSettings:
    if isinstance(settings, IndexSettings):
        return settings
    return IndexSettings.model_validate(dict(settings))
