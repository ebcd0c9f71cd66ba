"""Aggregation pipeline stages.

Stages are plain dataclasses assembled into a ``Pipeline`` and converted to
MongoDB's wire format only by ``Pipeline.to_list()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


class Stage(Protocol):
    def to_stage(self) -> dict[str, Any]: ...


@dataclass
class Match:
    """``$match`` on the conjunction of ``clauses``."""

    clauses: list[dict[str, Any]] = field(default_factory=list)

    def to_stage(self) -> dict[str, Any]:
        return {"$match": {"$and": list(self.clauses)}}


@dataclass
class Sort:
    """``$sort`` on ``(field, 1 | -1)`` keys, most significant first."""

    keys: list[tuple[str, int]] = field(default_factory=list)

    def to_stage(self) -> dict[str, Any]:
        return {"$sort": dict(self.keys)}


@dataclass
class Skip:
    count: int

    def to_stage(self) -> dict[str, Any]:
        return {"$skip": self.count}


@dataclass
class Limit:
    count: int

    def to_stage(self) -> dict[str, Any]:
        return {"$limit": self.count}


@dataclass
class Count:
    """``$count`` into ``output``."""

    output: str = "count"

    def to_stage(self) -> dict[str, Any]:
        return {"$count": self.output}


@dataclass
class Facet:
    """``$facet`` running each named sub-pipeline over the same input."""

    branches: dict[str, list[Stage]] = field(default_factory=dict)

    def to_stage(self) -> dict[str, Any]:
        return {"$facet": {name: [stage.to_stage() for stage in stages] for name, stages in self.branches.items()}}


@dataclass
class Unwind:
    path: str

    def to_stage(self) -> dict[str, Any]:
        return {"$unwind": {"path": self.path}}


@dataclass
class ReplaceRoot:
    new_root: Any

    def to_stage(self) -> dict[str, Any]:
        return {"$replaceRoot": {"newRoot": self.new_root}}


class Pipeline:
    """Ordered list of stages."""

    def __init__(self) -> None:
        self.stages: list[Stage] = []

    def add(self, stage: Stage) -> Pipeline:
        self.stages.append(stage)
        return self

    def to_list(self) -> list[dict[str, Any]]:
        return [stage.to_stage() for stage in self.stages]

    def __len__(self) -> int:
        return len(self.stages)
