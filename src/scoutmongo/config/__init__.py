"""Configuration — Settings loaded from YAML and SCOUTMONGO_ environment variables."""

from scoutmongo.config.settings import MongoDBSettings, ObservabilitySettings, Settings

__all__ = ["MongoDBSettings", "ObservabilitySettings", "Settings"]
