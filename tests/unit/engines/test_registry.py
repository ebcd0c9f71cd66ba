"""Tests for the engine registry."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from scoutmongo.engines.base.engine import SearchEngine
from scoutmongo.engines.base.registry import EngineNotFoundError, EngineRegistry


def _factory(engine: SearchEngine | None = None) -> MagicMock:
    return MagicMock(return_value=engine or MagicMock(spec=SearchEngine))


class TestEngineRegistry:
    def test_register_and_resolve(self, settings) -> None:
        registry = EngineRegistry()
        factory = _factory()
        registry.register("mongodb", factory)

        engine = registry.resolve("mongodb", settings)

        factory.assert_called_once_with(settings)
        assert engine is factory.return_value
        assert registry.registered_engines == ["mongodb"]
        assert registry.active_engines == ["mongodb"]

    def test_resolve_caches_instances(self, settings) -> None:
        registry = EngineRegistry()
        factory = _factory()
        registry.register("mongodb", factory)

        assert registry.resolve("mongodb", settings) is registry.resolve("mongodb", settings)
        factory.assert_called_once()

    def test_resolve_unknown_engine(self, settings) -> None:
        with pytest.raises(EngineNotFoundError, match="No engine registered with name 'solr'"):
            EngineRegistry().resolve("solr", settings)

    def test_get_default_uses_configured_driver(self, settings) -> None:
        registry = EngineRegistry()
        registry.register("mongodb", _factory())
        settings.driver = "mongodb"

        assert registry.get_default(settings) is registry.resolve("mongodb", settings)

    def test_close_all(self, settings) -> None:
        registry = EngineRegistry()
        engine = MagicMock(spec=SearchEngine)
        registry.register("mongodb", _factory(engine))
        registry.resolve("mongodb", settings)

        registry.close_all()

        engine.close.assert_called_once()
        assert registry.active_engines == []

    def test_close_all_continues_after_errors(self, settings) -> None:
        registry = EngineRegistry()
        failing = MagicMock(spec=SearchEngine)
        failing.close.side_effect = RuntimeError("boom")
        other = MagicMock(spec=SearchEngine)
        registry.register("a", _factory(failing))
        registry.register("b", _factory(other))
        registry.resolve("a", settings)
        registry.resolve("b", settings)

        registry.close_all()

        other.close.assert_called_once()
