"""Searchable record contract — What the engine needs from application records.

Application entities mix in ``Searchable`` to be indexed. The engine relies
on this contract only:
  1. A stable key (stored as ``_id`` in the index)
  2. A searchable projection (``to_searchable_dict``)
  3. Additive search metadata (keys starting with ``_``)
  4. Class-level loaders returning records for a list of keys
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from scoutmongo.models.query import SearchRequest

SOFT_DELETED_FIELD = "__soft_deleted"


def soft_deleted_flag(value: Any) -> bool:
    """Read a soft-delete flag value as a boolean.

    Strings follow form-input semantics: ``""`` and ``"0"`` are false,
    any other string is true.
    """
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


class Searchable(ABC):
    """Mixin for application records kept in a search index.

    Subclasses must implement ``to_searchable_dict()`` and
    ``load_searchable_by_keys()``. Everything else has a default.

    Example:
        >>> class Article(Searchable):
        ...     __search_index__ = "articles"
        ...
        ...     def to_searchable_dict(self):
        ...         return {"title": self.title}
        ...
        ...     @classmethod
        ...     def load_searchable_by_keys(cls, request, keys):
        ...         return repository.fetch_many(keys)
    """

    __search_index__: ClassVar[str | None] = None
    __search_key__: ClassVar[str] = "id"

    # ── Record contract ──────────────────────────────────────────────────

    def search_key(self) -> Any:
        """Return the key this record is indexed under."""
        return getattr(self, self.__search_key__)

    @abstractmethod
    def to_searchable_dict(self) -> Mapping[str, Any]:
        """Return the searchable projection of this record.

        An empty projection removes the record from the index.
        """

    def search_metadata(self) -> dict[str, Any]:
        """Return the metadata merged into the index document."""
        return dict(self.__dict__.get("_search_metadata", {}))

    def with_search_metadata(self, key: str, value: Any) -> Searchable:
        """Attach a metadata value to this record (not persisted)."""
        self.__dict__.setdefault("_search_metadata", {})[key] = value
        return self

    # ── Collection naming ────────────────────────────────────────────────

    @classmethod
    def searchable_as(cls) -> str:
        """Name of the collection searched for this model."""
        return cls.__search_index__ or cls.__name__.lower()

    @classmethod
    def indexable_as(cls) -> str:
        """Name of the collection written to for this model."""
        return cls.searchable_as()

    # ── Canonical-record loading ─────────────────────────────────────────

    @classmethod
    @abstractmethod
    def load_searchable_by_keys(cls, request: SearchRequest, keys: Sequence[Any]) -> Iterable[Searchable]:
        """Load the records matching ``keys``, in any order.

        Args:
            request: The search request, for loader constraints
                (``request.query_callback``).
            keys: Record keys in ranked order.
        """

    @classmethod
    def cursor_searchable_by_keys(cls, request: SearchRequest, keys: Sequence[Any]) -> Iterator[Searchable]:
        """Stream the records matching ``keys``.

        Override when the record store can stream results; the default
        iterates the eager load.
        """
        return iter(cls.load_searchable_by_keys(request, keys))

    @classmethod
    def new_collection(cls, items: Iterable[Searchable] = ()) -> Any:
        """Build the collection type mapped results are returned in."""
        return list(items)

    @classmethod
    def search(
        cls,
        query: str = "",
        callback: Any = None,
        soft_delete: bool = False,
    ) -> SearchRequest:
        """Start a search request for this model."""
        from scoutmongo.models.query import SearchRequest

        return SearchRequest.for_model(cls, query=query, callback=callback, soft_delete=soft_delete)


class SoftDeletable:
    """Optional capability for records deleted by flag rather than removal.

    Records expose ``deleted_at``; a non-null value marks them trashed.
    """

    deleted_at: Any = None

    def trashed(self) -> bool:
        return self.deleted_at is not None

    def push_soft_delete_metadata(self) -> SoftDeletable:
        """Record the current deleted state as search metadata."""
        self.with_search_metadata(SOFT_DELETED_FIELD, 1 if self.trashed() else 0)  # type: ignore[attr-defined]
        return self
