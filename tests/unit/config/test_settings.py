"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from scoutmongo.config.settings import Settings


class TestSettingsDefaults:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.driver == "mongodb"
        assert settings.soft_delete is False
        assert settings.mongodb.uri == "mongodb://localhost:27017"
        assert settings.mongodb.database == "scout"
        assert settings.index_settings == {}
        assert settings.observability.log_format == "json"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCOUTMONGO_SOFT_DELETE", "true")
        monkeypatch.setenv("SCOUTMONGO_MONGODB__DATABASE", "search")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.soft_delete is True
        assert settings.mongodb.database == "search"


class TestSettingsFromYaml:
    def test_loads_index_settings(self, tmp_path: Path) -> None:
        config = tmp_path / "scoutmongo.yaml"
        config.write_text(
            "soft_delete: true\n"
            "mongodb:\n"
            "  uri: mongodb://db:27017\n"
            "  database: app\n"
            "index_settings:\n"
            "  articles:\n"
            "    searchableAttributes: [title, body]\n"
            "    filterableAttributes:\n"
            "      - {status: 1}\n"
        )

        settings = Settings.from_yaml(config)

        assert settings.soft_delete is True
        assert settings.mongodb.uri == "mongodb://db:27017"
        articles = settings.index_settings["articles"]
        assert articles.searchable_attributes == ["title", "body"]
        assert articles.filterable_attributes == [{"status": 1}]

    def test_empty_file(self, tmp_path: Path) -> None:
        config = tmp_path / "empty.yaml"
        config.write_text("")
        assert Settings.from_yaml(config).driver == "mongodb"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            Settings.from_yaml(tmp_path / "missing.yaml")
