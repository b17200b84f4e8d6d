"""CLI entry point for relaystore."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from loguru import logger

from .. import __version__
from ..core.config import Config
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="relaystore",
        description="SQLite event store with full-text search for a Nostr relay",
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument("--config", type=Path, help="TOML configuration file")
    parser.add_argument("--db", type=Path, help="Database path (overrides config)")

    subparsers = parser.add_subparsers(dest="command", required=False)

    subparsers.add_parser("init", help="Create or upgrade the event store schema")
    subparsers.add_parser("status", help="Show event store status")
    subparsers.add_parser("reindex", help="Rebuild the full-text search index")

    return parser


def configure_logging(level: str) -> None:
    """Send log records to stderr at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env_or_file(args.config)
        if args.db:
            config.db_path = args.db
        configure_logging(config.log_level)

        if args.command == "init":
            commands.handle_init(args, config)
        elif args.command == "status":
            commands.handle_status(args, config)
        elif args.command == "reindex":
            commands.handle_reindex(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
