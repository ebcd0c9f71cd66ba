"""Search request model — Backend-agnostic description of a search."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from scoutmongo.models.searchable import SOFT_DELETED_FIELD


class SortSpec(BaseModel):
    """A single sort key."""

    column: str = Field(description="Field to sort on")
    direction: Literal["asc", "desc"] = Field(default="asc", description="Sort direction")


class SearchRequest(BaseModel):
    """A search against one model's index.

    Built fluently and handed to an engine::

        request = Article.search("solar").where("lang", "en").order_by("published_at", "desc").take(10)
        articles = engine.get(request)

    Engines never mutate a request; ``paginate`` works on a copy.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    model: Any = Field(description="The Searchable class being searched")
    query: str = Field(default="", description="Full-text query")
    callback: Callable[..., Any] | None = Field(
        default=None,
        description=(
            "Raw query override, called with (collection, query, offset); must return a cursor "
            "whose documents carry '__count' for pagination"
        ),
    )
    index: str | None = Field(default=None, description="Collection to search instead of the model's default")
    wheres: dict[str, Any] = Field(default_factory=dict, description="Equality filters")
    where_ins: dict[str, list[Any]] = Field(default_factory=dict, description="Inclusion filters")
    where_not_ins: dict[str, list[Any]] = Field(default_factory=dict, description="Exclusion filters")
    orders: list[SortSpec] = Field(default_factory=list, description="Sort keys, most significant first")
    limit: int | None = Field(default=None, ge=1, description="Maximum number of results")
    query_callback: Callable[..., Any] | None = Field(
        default=None,
        description="Constraint handed to the record loader when mapping results",
    )
    trashed: Literal["default", "with", "only"] = Field(
        default="default",
        description="Soft-deleted visibility; 'default' lets a soft-delete engine hide trashed records",
    )

    @classmethod
    def for_model(
        cls,
        model: Any,
        query: str = "",
        callback: Callable[..., Any] | None = None,
        soft_delete: bool = False,
    ) -> SearchRequest:
        """Create a request for ``model``; hides trashed records when soft delete is on."""
        request = cls(model=model, query=query, callback=callback)
        if soft_delete:
            request.wheres[SOFT_DELETED_FIELD] = 0
        return request

    # ── Filters ──────────────────────────────────────────────────────────

    def where(self, field: str, value: Any) -> SearchRequest:
        self.wheres[field] = value
        return self

    def where_in(self, field: str, values: Iterable[Any]) -> SearchRequest:
        self.where_ins[field] = list(values)
        return self

    def where_not_in(self, field: str, values: Iterable[Any]) -> SearchRequest:
        self.where_not_ins[field] = list(values)
        return self

    def with_trashed(self) -> SearchRequest:
        """Include soft-deleted records."""
        self.wheres.pop(SOFT_DELETED_FIELD, None)
        self.trashed = "with"
        return self

    def only_trashed(self) -> SearchRequest:
        """Restrict the search to soft-deleted records."""
        self.wheres[SOFT_DELETED_FIELD] = 1
        self.trashed = "only"
        return self

    # ── Ordering and limits ──────────────────────────────────────────────

    def order_by(self, column: str, direction: str = "asc") -> SearchRequest:
        self.orders.append(SortSpec(column=column, direction=direction.lower()))  # type: ignore[arg-type]
        return self

    def latest(self, column: str = "created_at") -> SearchRequest:
        return self.order_by(column, "desc")

    def oldest(self, column: str = "created_at") -> SearchRequest:
        return self.order_by(column, "asc")

    def take(self, limit: int) -> SearchRequest:
        self.limit = limit
        return self

    # ── Targeting ────────────────────────────────────────────────────────

    def within(self, index: str) -> SearchRequest:
        """Search a custom collection instead of the model's default."""
        self.index = index
        return self

    def constrain(self, callback: Callable[..., Any]) -> SearchRequest:
        """Set a constraint passed to the record loader when mapping results."""
        self.query_callback = callback
        return self

    def searchable_as(self) -> str:
        """Name of the collection this request runs against."""
        return self.index or self.model.searchable_as()
