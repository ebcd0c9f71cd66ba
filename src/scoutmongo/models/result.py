"""Paginated search result model."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Page(BaseModel):
    """One page of mapped search results."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    items: list[Any] = Field(default_factory=list, description="Mapped records, in ranked order")
    total: int = Field(default=0, ge=0, description="Total matches for the whole request")
    per_page: int = Field(ge=1, description="Page size")
    page: int = Field(default=1, ge=1, description="1-based page number")

    @property
    def last_page(self) -> int:
        return max(math.ceil(self.total / self.per_page), 1)

    @property
    def has_more_pages(self) -> bool:
        return self.page < self.last_page
