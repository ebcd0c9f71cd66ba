"""Engine Registry — Manages registration and retrieval of search engines.

The registry maps engine names to factories and caches the engines it
builds, so an application resolves its configured driver once and shares
the instance.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from scoutmongo.engines.base.engine import SearchEngine

if TYPE_CHECKING:
    from scoutmongo.config.settings import Settings

logger = logging.getLogger(__name__)

EngineFactory = Callable[["Settings"], SearchEngine]


class EngineNotFoundError(Exception):
    """Raised when a requested engine is not registered."""


class EngineRegistry:
    """Registry for search engine factories and instances.

    Example:
        >>> registry = EngineRegistry()
        >>> registry.register("mongodb", create_mongodb_engine)
        >>> engine = registry.resolve("mongodb", settings)
    """

    def __init__(self) -> None:
        self._factories: dict[str, EngineFactory] = {}
        self._instances: dict[str, SearchEngine] = {}

    def register(self, name: str, factory: EngineFactory) -> None:
        """Register an engine factory.

        Args:
            name: Unique engine name.
            factory: Callable building the engine from settings.
        """
        if name in self._factories:
            logger.warning("Overwriting existing engine registration: %s", name)
        self._factories[name] = factory
        logger.info("Registered engine: %s", name)

    def resolve(self, name: str, settings: Settings) -> SearchEngine:
        """Return the engine registered under ``name``, building it on first use.

        Raises:
            EngineNotFoundError: If no engine is registered under this name.
        """
        if name in self._instances:
            return self._instances[name]

        if name not in self._factories:
            raise EngineNotFoundError(
                f"No engine registered with name '{name}'. "
                f"Available engines: {list(self._factories.keys())}"
            )

        engine = self._factories[name](settings)
        self._instances[name] = engine
        logger.info("Initialized engine: %s", name)
        return engine

    def get_default(self, settings: Settings) -> SearchEngine:
        """Resolve the engine named by ``settings.driver``."""
        return self.resolve(settings.driver, settings)

    def close_all(self) -> None:
        """Close every engine built by this registry."""
        for name, engine in self._instances.items():
            try:
                engine.close()
                logger.info("Closed engine: %s", name)
            except Exception:
                logger.warning("Error closing engine: %s", name, exc_info=True)
        self._instances.clear()

    @property
    def registered_engines(self) -> list[str]:
        """List all registered engine names."""
        return list(self._factories.keys())

    @property
    def active_engines(self) -> list[str]:
        """List all built engine names."""
        return list(self._instances.keys())
