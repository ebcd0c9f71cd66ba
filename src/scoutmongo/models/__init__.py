"""Data models — Searchable records, search requests and result pages."""

from scoutmongo.models.index import IndexSettings
from scoutmongo.models.query import SearchRequest, SortSpec
from scoutmongo.models.result import Page
from scoutmongo.models.searchable import SOFT_DELETED_FIELD, Searchable, SoftDeletable

__all__ = ["SOFT_DELETED_FIELD", "IndexSettings", "Page", "SearchRequest", "Searchable", "SoftDeletable", "SortSpec"]
