"""Tests for the index administration CLI."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from scoutmongo.cli import build_parser, main
from scoutmongo.engines.mongodb.engine import MongoDBEngine
from scoutmongo.models.index import IndexSettings


@pytest.fixture
def engine() -> MagicMock:
    return MagicMock(spec=MongoDBEngine)


@pytest.fixture
def registry(engine: MagicMock):
    registry = MagicMock()
    registry.get_default.return_value = engine
    with patch("scoutmongo.cli.default_registry", return_value=registry), patch("scoutmongo.cli.setup_logging"):
        yield registry


@pytest.fixture
def config(tmp_path: Path) -> Path:
    path = tmp_path / "scoutmongo.yaml"
    path.write_text(
        "soft_delete: true\n"
        "index_settings:\n"
        "  articles:\n"
        "    searchableAttributes: [title]\n"
    )
    return path


class TestParser:
    def test_requires_command(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_parses_global_options(self) -> None:
        args = build_parser().parse_args(["--config", "x.yaml", "--log-level", "debug", "flush", "articles"])
        assert args.config == "x.yaml"
        assert args.log_level == "debug"
        assert args.command == "flush"
        assert args.name == "articles"


class TestCommands:
    def test_create_index(self, registry, engine, capsys) -> None:
        main(["create-index", "articles"])

        engine.create_index.assert_called_once_with("articles")
        registry.close_all.assert_called_once()
        assert "Index [articles] created." in capsys.readouterr().out

    def test_delete_index(self, registry, engine) -> None:
        main(["delete-index", "articles"])
        engine.delete_index.assert_called_once_with("articles")

    def test_flush(self, registry, engine, capsys) -> None:
        main(["flush", "articles"])

        engine.clear_index.assert_called_once_with("articles")
        assert "flushed" in capsys.readouterr().out

    def test_sync_index_settings_adds_soft_delete_filter(self, registry, engine, config) -> None:
        extended = IndexSettings(searchable_attributes=["title"], filterable_attributes=[{"__soft_deleted": 1}])
        engine.configure_soft_delete_filter.return_value = extended

        main(["--config", str(config), "sync-index-settings"])

        engine.configure_soft_delete_filter.assert_called_once_with(IndexSettings(searchable_attributes=["title"]))
        engine.update_index_settings.assert_called_once_with("articles", extended)

    def test_sync_index_settings_without_config(self, registry, engine, capsys, monkeypatch) -> None:
        monkeypatch.chdir(Path(__file__).parent)
        main(["sync-index-settings"])

        engine.update_index_settings.assert_not_called()
        assert "No index settings found" in capsys.readouterr().out

    def test_closes_registry_on_failure(self, registry, engine) -> None:
        engine.create_index.side_effect = RuntimeError("collection exists")

        with pytest.raises(RuntimeError):
            main(["create-index", "articles"])

        registry.close_all.assert_called_once()

    def test_missing_config_exits(self, registry, tmp_path, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(tmp_path / "missing.yaml"), "flush", "articles"])

        assert exc_info.value.code == 1
        assert "Config file not found" in capsys.readouterr().err
