"""dbmigrator - batch tracked MySQL schema migrations.

Example:
    from dbmigrator import Database, Migration, Migrator, Schema, Table

    def up() -> Schema:
        s = Schema()
        posts = Table("posts")
        posts.id()
        posts.varchar("title", 64)
        posts.timestamps()
        s.create_table(posts)
        return s

    def down() -> Schema:
        s = Schema()
        s.drop_table_if_exists("posts")
        return s

    with Database("mysql+pymysql://root@localhost/blog") as db:
        Migrator([Migration("20190805170000_create_posts", up, down)]).migrate(db)
"""

from .core.exceptions import (
    ConfigurationError,
    DatabaseError,
    DuplicateMigrationError,
    EmptyRollbackStackError,
    MigrationTableError,
    MigratorError,
    MissingMigrationNameError,
    NoMigrationDefinedError,
    NoSQLCommandsToRunError,
    TableNotExistsError,
)
from .core.types import MigrationEntry, MigrationStatus
from .ddl import Schema, Table
from .migrations import Migration, Migrator
from .store import Database

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Database",
    "DatabaseError",
    "DuplicateMigrationError",
    "EmptyRollbackStackError",
    "Migration",
    "MigrationEntry",
    "MigrationStatus",
    "MigrationTableError",
    "Migrator",
    "MigratorError",
    "MissingMigrationNameError",
    "NoMigrationDefinedError",
    "NoSQLCommandsToRunError",
    "Schema",
    "TableNotExistsError",
]
