"""Base search engine — Abstract interface for index backends.

Every index backend implements this interface. The engine is responsible for:
  1. Keeping index documents in sync with canonical records
  2. Executing search requests and paginating them
  3. Mapping raw results back to canonical records in ranked order
  4. Administering index collections
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from scoutmongo.models.index import IndexSettings
from scoutmongo.models.query import SearchRequest
from scoutmongo.models.result import Page
from scoutmongo.models.searchable import Searchable


class SearchEngine(ABC):
    """Abstract base class for search engines.

    All engines must implement:
      - update() / delete() / clear_index(): Index synchronization
      - search() / paginate(): Raw result retrieval
      - map_ids() / map() / lazy_map() / get_total_count(): Result mapping
      - create_index() / delete_index(): Index administration

    Engines hold no per-request state and may be shared between callers.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique engine name (e.g., 'mongodb')."""

    # ── Synchronization ──────────────────────────────────────────────────

    @abstractmethod
    def update(self, records: Sequence[Searchable]) -> None:
        """Add or refresh the index documents of ``records``."""

    @abstractmethod
    def delete(self, records: Sequence[Searchable]) -> None:
        """Remove the index documents of ``records``."""

    @abstractmethod
    def clear_index(self, name: str) -> None:
        """Remove every document from the index ``name``."""

    def flush(self, model: type[Searchable]) -> None:
        """Remove every index document of ``model``."""
        self.clear_index(model.indexable_as())

    # ── Searching ────────────────────────────────────────────────────────

    @abstractmethod
    def search(self, request: SearchRequest) -> list[Any]:
        """Execute ``request`` and return raw results."""

    @abstractmethod
    def paginate(self, request: SearchRequest, per_page: int, page: int) -> list[Any]:
        """Execute one page of ``request`` and return raw results."""

    @abstractmethod
    def map_ids(self, results: Sequence[Any]) -> list[Any]:
        """Return the record keys of ``results``, in ranked order."""

    @abstractmethod
    def map(self, request: SearchRequest, results: Sequence[Any], model: type[Searchable]) -> Any:
        """Map raw results to a collection of records."""

    @abstractmethod
    def lazy_map(self, request: SearchRequest, results: Sequence[Any], model: type[Searchable]) -> Iterator[Any]:
        """Map raw results to a lazily loaded iterator of records."""

    @abstractmethod
    def get_total_count(self, results: Sequence[Any]) -> int:
        """Return the total number of matches behind ``results``."""

    # ── Administration ───────────────────────────────────────────────────

    @abstractmethod
    def create_index(self, name: str, **options: Any) -> None:
        """Create an index."""

    @abstractmethod
    def delete_index(self, name: str) -> None:
        """Delete an index."""

    def close(self) -> None:
        """Release resources owned by the engine. No-op by default."""

    # ── Conveniences ─────────────────────────────────────────────────────

    def keys(self, request: SearchRequest) -> list[Any]:
        """Search and return only the matching record keys."""
        return self.map_ids(self.search(request))

    def get(self, request: SearchRequest) -> Any:
        """Search and return the mapped records."""
        return self.map(request, self.search(request), request.model)

    def cursor(self, request: SearchRequest) -> Iterator[Any]:
        """Search and stream the mapped records."""
        return self.lazy_map(request, self.search(request), request.model)

    def paginate_records(self, request: SearchRequest, per_page: int, page: int = 1) -> Page:
        """Search one page and return the mapped records with the total count."""
        results = self.paginate(request, per_page, page)
        return Page(
            items=list(self.map(request, results, request.model)),
            total=self.get_total_count(results),
            per_page=per_page,
            page=page,
        )


class UpdatesIndexSettings(ABC):
    """Engines that can apply declarative index settings."""

    @abstractmethod
    def update_index_settings(self, name: str, settings: IndexSettings | Mapping[str, Any]) -> None:
        """Apply ``settings`` to the index ``name``."""

    @abstractmethod
    def configure_soft_delete_filter(self, settings: IndexSettings | Mapping[str, Any]) -> IndexSettings:
        """Return ``settings`` extended to filter on the soft-delete flag."""
