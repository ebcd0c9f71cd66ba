"""CLI entry point for index administration."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from scoutmongo.config.settings import Settings
from scoutmongo.engines.base.engine import SearchEngine, UpdatesIndexSettings
from scoutmongo.engines.base.exceptions import ConfigurationError
from scoutmongo.observability.logging import setup_logging
from scoutmongo.providers import default_registry


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scoutmongo",
        description="scoutmongo — Manage MongoDB search indexes",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"scoutmongo {_get_version()}",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("create-index", help="Create an index collection")
    create.add_argument("name", help="Index name")

    delete = commands.add_parser("delete-index", help="Drop an index collection")
    delete.add_argument("name", help="Index name")

    flush = commands.add_parser("flush", help="Remove every document from an index")
    flush.add_argument("name", help="Index name")

    commands.add_parser("sync-index-settings", help="Apply the configured index settings")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level

    setup_logging(settings.observability)

    registry = default_registry()
    engine = registry.get_default(settings)
    try:
        _run(args, settings, engine)
    finally:
        registry.close_all()


def _run(args: argparse.Namespace, settings: Settings, engine: SearchEngine) -> None:
    if args.command == "create-index":
        engine.create_index(args.name)
        print(f"Index [{args.name}] created.")
    elif args.command == "delete-index":
        engine.delete_index(args.name)
        print(f"Index [{args.name}] deleted.")
    elif args.command == "flush":
        engine.clear_index(args.name)
        print(f"All records in [{args.name}] have been flushed.")
    elif args.command == "sync-index-settings":
        _sync_index_settings(engine, settings)


def _sync_index_settings(engine: SearchEngine, settings: Settings) -> None:
    if not isinstance(engine, UpdatesIndexSettings):
        raise ConfigurationError(f"Engine '{engine.name}' does not support index settings.")

    if not settings.index_settings:
        print("No index settings found for the configured engine.")
        return

    for name, index_settings in settings.index_settings.items():
        if settings.soft_delete:
            index_settings = engine.configure_soft_delete_filter(index_settings)
        engine.update_index_settings(name, index_settings)
        print(f"Settings for the [{name}] index synced successfully.")


def _get_version() -> str:
    """Get the package version."""
    try:
        from scoutmongo import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
