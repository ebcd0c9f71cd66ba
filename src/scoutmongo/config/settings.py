"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (SCOUTMONGO_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from scoutmongo.models.index import IndexSettings


class MongoDBSettings(BaseModel):
    """MongoDB connection configuration."""

    uri: str = Field(default="mongodb://localhost:27017", description="MongoDB connection string")
    database: str = Field(default="scout", description="Database holding the index collections")
    connect_timeout_ms: int = Field(default=10_000, description="Connection timeout in milliseconds")
    server_selection_timeout_ms: int = Field(default=30_000, description="Server selection timeout in milliseconds")
    app_name: str | None = Field(default="scoutmongo", description="Application name reported to the server")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the SCOUTMONGO_ prefix.
    Nested settings use double underscores: SCOUTMONGO_MONGODB__DATABASE=search

    Example:
        SCOUTMONGO_MONGODB__URI=mongodb://db:27017
        SCOUTMONGO_SOFT_DELETE=true
        SCOUTMONGO_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "SCOUTMONGO_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    driver: str = Field(default="mongodb", description="Search engine to resolve from the registry")
    soft_delete: bool = Field(default=False, description="Keep soft-deleted records in the index, flagged")

    mongodb: MongoDBSettings = Field(default_factory=MongoDBSettings)
    index_settings: dict[str, IndexSettings] = Field(
        default_factory=dict,
        description="Index settings keyed by index name, applied by sync-index-settings",
    )
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file override environment variables; fields the
        file leaves out still come from the environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
