"""Configuration management for dbmigrator."""

import os
from dataclasses import dataclass

# Table-level defaults used by CREATE TABLE
DEFAULT_ENGINE = "InnoDB"
DEFAULT_CHARSET = "utf8mb4"
DEFAULT_COLLATION = "utf8mb4_unicode_ci"

# Column rendered when a table declares no columns at all
FALLBACK_ID_COLUMN = "`id` bigint(20) unsigned NOT NULL AUTO_INCREMENT"

DEFAULT_MIGRATION_TABLE = "migrations"
DEFAULT_MIGRATIONS_ATTRIBUTE = "MIGRATIONS"


def infer_charset(collation: str) -> str:
    """Get the charset a collation belongs to.

    MySQL collations are named ``{charset}_{suffix}``, so the charset is
    everything before the first underscore.
    """
    return collation.split("_", 1)[0]


@dataclass
class MigratorConfig:
    """Runtime configuration for the command line runner."""

    database_url: str = ""
    table_name: str = DEFAULT_MIGRATION_TABLE
    migrations_module: str = ""
    verbose: bool = False

    @classmethod
    def from_env(cls) -> "MigratorConfig":
        """Load configuration from environment variables."""
        config = cls()

        if url := os.environ.get("MIGRATOR_DATABASE_URL"):
            config.database_url = url

        if table := os.environ.get("MIGRATOR_TABLE"):
            config.table_name = table

        if module := os.environ.get("MIGRATOR_MODULE"):
            config.migrations_module = module

        return config
