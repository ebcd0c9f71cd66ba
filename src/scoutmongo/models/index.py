"""Index settings model — Declarative attribute lists for an index."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class IndexSettings(BaseModel):
    """Attributes an index is searched and filtered on.

    Accepts both ``searchable_attributes`` and the camelCase
    ``searchableAttributes`` spelling used in engine configuration files.
    """

    model_config = ConfigDict(populate_by_name=True)

    searchable_attributes: list[str] = Field(
        default_factory=list,
        alias="searchableAttributes",
        description="Fields covered by the full-text index",
    )
    filterable_attributes: list[dict[str, Any]] = Field(
        default_factory=list,
        alias="filterableAttributes",
        description="Index key specs, e.g. {'status': 1, 'created_at': -1}",
    )
