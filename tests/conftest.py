"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, ClassVar
from unittest.mock import MagicMock

import pytest

from scoutmongo.config.settings import Settings
from scoutmongo.models.query import SearchRequest
from scoutmongo.models.searchable import Searchable, SoftDeletable

# ── Sample records ───────────────────────────────────────────────────────────


class Article(Searchable):
    """In-memory record whose store returns records in reverse key order."""

    __search_index__ = "articles"

    store: ClassVar[dict[Any, Article]] = {}
    loads: ClassVar[list[tuple[str, list[Any]]]] = []

    def __init__(self, id: Any, fields: dict[str, Any] | None = None) -> None:
        self.id = id
        self.fields = {"title": f"Article {id}"} if fields is None else fields

    def to_searchable_dict(self) -> dict[str, Any]:
        return self.fields

    @classmethod
    def load_searchable_by_keys(cls, request: SearchRequest, keys: Sequence[Any]) -> Iterable[Article]:
        cls.loads.append(("get", list(keys)))
        return [cls.store[key] for key in reversed(keys) if key in cls.store]

    @classmethod
    def cursor_searchable_by_keys(cls, request: SearchRequest, keys: Sequence[Any]) -> Iterator[Article]:
        cls.loads.append(("cursor", list(keys)))
        return (cls.store[key] for key in reversed(keys) if key in cls.store)

    def __repr__(self) -> str:
        return f"Article({self.id!r})"


class Post(SoftDeletable, Article):
    __search_index__ = "posts"

    def __init__(self, id: Any, fields: dict[str, Any] | None = None, deleted_at: Any = None) -> None:
        super().__init__(id, fields)
        self.deleted_at = deleted_at


@pytest.fixture(autouse=True)
def _reset_article_store() -> Iterator[None]:
    Article.store = {}
    Article.loads = []
    yield
    Article.store = {}
    Article.loads = []


@pytest.fixture
def articles() -> dict[Any, Article]:
    """Five articles registered in the in-memory store."""
    Article.store = {key: Article(key) for key in range(1, 6)}
    return Article.store


# ── MongoDB stand-ins ────────────────────────────────────────────────────────


@pytest.fixture
def collection() -> MagicMock:
    mock = MagicMock()
    mock.name = "articles"
    mock.aggregate.return_value = []
    return mock


@pytest.fixture
def database(collection: MagicMock) -> MagicMock:
    mock = MagicMock()
    mock.get_collection.return_value = collection
    return mock


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        mongodb={"uri": "mongodb://localhost:27017", "database": "scout_test"},
    )


@pytest.fixture
def article_model() -> type[Article]:
    return Article


@pytest.fixture
def post_model() -> type[Post]:
    return Post
