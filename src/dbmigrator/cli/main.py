"""CLI entry point for dbmigrator."""

import argparse
import importlib
import sys
from typing import NoReturn

from loguru import logger

from ..core.config import DEFAULT_MIGRATIONS_ATTRIBUTE, MigratorConfig
from ..core.exceptions import ConfigurationError
from ..migrations import Migration
from . import commands

HANDLERS = {
    "migrate": commands.handle_migrate,
    "rollback": commands.handle_rollback,
    "revert": commands.handle_revert,
    "status": commands.handle_status,
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="dbmigrator",
        description="Batch tracked MySQL schema migrations",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument(
        "--database-url",
        help="SQLAlchemy database URL (default: $MIGRATOR_DATABASE_URL)",
    )
    parser.add_argument(
        "--table",
        help="Migration tracking table (default: $MIGRATOR_TABLE or migrations)",
    )
    parser.add_argument(
        "-m",
        "--module",
        help="Module holding the migrations, as MOD[:ATTR] (default: $MIGRATOR_MODULE)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every executed statement",
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    subparsers.add_parser("migrate", help="Apply pending migrations as a new batch")
    subparsers.add_parser("rollback", help="Revert the last batch")
    subparsers.add_parser("revert", help="Revert every executed migration")
    subparsers.add_parser("status", help="Show applied and pending migrations")

    return parser


def load_migrations(target: str) -> list[Migration]:
    """Import a migration pool from ``module[:attribute]``.

    The attribute defaults to ``MIGRATIONS`` and may hold a sequence of
    migrations or a zero-argument callable returning one.

    Raises:
        ConfigurationError: If the module or attribute cannot be loaded.
    """
    if not target:
        raise ConfigurationError("No migrations module given (use --module)")

    module_name, _, attribute = target.partition(":")
    attribute = attribute or DEFAULT_MIGRATIONS_ATTRIBUTE

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import {module_name}: {e}") from e

    try:
        pool = getattr(module, attribute)
    except AttributeError as e:
        raise ConfigurationError(f"{module_name} has no attribute {attribute}") from e

    if callable(pool):
        pool = pool()

    return list(pool)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def build_config(args: argparse.Namespace) -> MigratorConfig:
    """Merge command line flags over the environment configuration."""
    config = MigratorConfig.from_env()

    if args.database_url:
        config.database_url = args.database_url

    if args.table:
        config.table_name = args.table

    if args.module:
        config.migrations_module = args.module

    config.verbose = args.verbose
    return config


def main() -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()
    config = build_config(args)
    configure_logging(config.verbose)

    handler = HANDLERS.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(0)

    try:
        if not config.database_url:
            raise ConfigurationError("No database URL given (use --database-url)")

        pool = load_migrations(config.migrations_module)
        handler(args, config, pool)

        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
