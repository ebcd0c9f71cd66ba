"""Base engine interface — Abstract classes for search index backends."""

from scoutmongo.engines.base.engine import SearchEngine, UpdatesIndexSettings
from scoutmongo.engines.base.registry import EngineRegistry

__all__ = ["EngineRegistry", "SearchEngine", "UpdatesIndexSettings"]
