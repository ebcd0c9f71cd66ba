"""Engine wiring — Builds engines from settings.

``default_registry()`` is what applications normally use::

    registry = default_registry()
    engine = registry.get_default(settings)
"""

from __future__ import annotations

import logging

from pymongo import MongoClient

from scoutmongo.config.settings import Settings
from scoutmongo.engines.base.exceptions import ConfigurationError
from scoutmongo.engines.base.registry import EngineRegistry
from scoutmongo.engines.mongodb.engine import MongoDBEngine

logger = logging.getLogger(__name__)


def create_mongodb_engine(settings: Settings) -> MongoDBEngine:
    """Connect to the configured MongoDB database and build the engine.

    Raises:
        ConfigurationError: If no database name is configured.
    """
    config = settings.mongodb
    if not config.database:
        raise ConfigurationError("A MongoDB database name is required (SCOUTMONGO_MONGODB__DATABASE).")

    client: MongoClient = MongoClient(
        config.uri,
        connectTimeoutMS=config.connect_timeout_ms,
        serverSelectionTimeoutMS=config.server_selection_timeout_ms,
        appname=config.app_name,
        tz_aware=True,
    )
    logger.info("Using MongoDB database %s (soft delete: %s)", config.database, settings.soft_delete)
    return MongoDBEngine(client[config.database], soft_delete=settings.soft_delete, client=client)


def default_registry() -> EngineRegistry:
    """Return a registry with the built-in engines registered."""
    registry = EngineRegistry()
    registry.register("mongodb", create_mongodb_engine)
    return registry
