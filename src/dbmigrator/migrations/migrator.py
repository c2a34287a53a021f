"""Batch tracking migrator.

Applied migrations are recorded in a tracking table, one row per migration
with the batch number of the ``migrate`` call that applied it. The table is
the only source of truth for what has run; ``Migrator`` keeps no state
between calls.

The migrator takes no lock on the tracking table. Two processes migrating
the same database at once can compute the same batch number or apply a
migration twice.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from loguru import logger

from ..core.config import DEFAULT_MIGRATION_TABLE
from ..core.exceptions import (
    DatabaseError,
    DuplicateMigrationError,
    EmptyRollbackStackError,
    MigrationTableError,
    MissingMigrationNameError,
    NoMigrationDefinedError,
    NoSQLCommandsToRunError,
    TableNotExistsError,
)
from ..core.types import MigrationEntry, MigrationStatus
from ..ddl.columns import Integer, String, Timable
from ..ddl.commands import CreateTableCommand
from ..ddl.schema import Schema
from ..ddl.table import Table
from ..store.protocols import DatabaseProtocol
from .migration import Migration


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _parse_entry(row: Sequence[Any]) -> MigrationEntry:
    entry_id, name, batch, applied_at = row
    return MigrationEntry(
        id=int(entry_id),
        name=str(name),
        batch=int(batch),
        applied_at=_parse_timestamp(applied_at),
    )


class Migrator:
    """Applies and reverts a pool of migrations.

    Example:
        migrator = Migrator(MIGRATIONS)
        with Database(url) as db:
            applied = migrator.migrate(db)
            reverted = migrator.rollback(db)
    """

    def __init__(
        self,
        pool: Sequence[Migration],
        table_name: str = DEFAULT_MIGRATION_TABLE,
    ):
        """Initialize with a migration pool.

        Args:
            pool: Migrations in the order they must be applied.
            table_name: Name of the tracking table; empty means ``migrations``.
        """
        self.pool = list(pool)
        self.table_name = table_name or DEFAULT_MIGRATION_TABLE
        self.executed: list[MigrationEntry] = []

    # =========================================================================
    # Operations
    # =========================================================================

    def migrate(self, db: DatabaseProtocol) -> list[str]:
        """Apply every migration that is not executed yet, as a new batch.

        Migrations applied before a failure stay applied and recorded; their
        names are attached to the raised exception as ``applied``.

        Returns:
            Names of the applied migrations, in pool order.

        Raises:
            ConfigurationError: If the pool is empty or invalid.
            MigrationTableError: If the tracking table cannot be created.
            NoSQLCommandsToRunError: If a migration produces no commands.
            DatabaseError: If a statement fails.
        """
        self._check_pool()
        self.create_migration_table(db)
        self.fetch_executed(db)

        batch = self.batch() + 1
        migrated: list[str] = []

        for migration in self.pool:
            if self.is_executed(migration.name):
                continue

            try:
                self._apply(db, migration, migration.up)
                self._insert_entry(db, migration.name, batch)
            except Exception as e:
                logger.error(f"Migration {migration.name} failed")
                e.applied = migrated
                raise

            migrated.append(migration.name)
            logger.info(f"Migrated {migration.name} (batch {batch})")

        if migrated:
            logger.info(f"Applied {len(migrated)} migration(s) in batch {batch}")
        else:
            logger.debug("Nothing to migrate")

        return migrated

    def rollback(self, db: DatabaseProtocol) -> list[str]:
        """Revert the migrations of the last batch, newest first.

        On failure the names reverted so far are attached to the raised
        exception as ``reverted``.

        Returns:
            Names of the reverted migrations, in revert order.

        Raises:
            ConfigurationError: If the pool is empty or invalid.
            TableNotExistsError: If the tracking table is missing.
            EmptyRollbackStackError: If no migration was executed.
            NoSQLCommandsToRunError: If a migration produces no commands.
            DatabaseError: If a statement fails.
        """
        self._prepare_revert(db)
        return self._revert_entries(db, self.last_batch_executed())

    def revert(self, db: DatabaseProtocol) -> list[str]:
        """Revert every executed migration, newest first.

        Raises the same errors as ``rollback``.
        """
        self._prepare_revert(db)
        return self._revert_entries(db, self.executed)

    def status(self, db: DatabaseProtocol) -> list[MigrationStatus]:
        """Report the applied state of every pool migration, in pool order.

        Never creates the tracking table; without it every migration is
        pending.
        """
        self._check_pool()

        if self.has_table(db):
            self.fetch_executed(db)
        else:
            self.executed = []

        applied = {entry.name: entry for entry in self.executed}
        report = []

        for migration in self.pool:
            entry = applied.get(migration.name)
            if entry is None:
                report.append(MigrationStatus(migration.name))
            else:
                report.append(
                    MigrationStatus(migration.name, entry.batch, entry.applied_at)
                )

        return report

    # =========================================================================
    # Tracking table
    # =========================================================================

    @property
    def table(self) -> Table:
        """Definition of the tracking table."""
        table = Table(self.table_name)
        table.column("id", Integer(unsigned=True, precision=10, autoincrement=True))
        table.column("name", String(precision=255))
        table.column("batch", Integer(precision=11))
        table.column(
            "applied_at",
            Timable(precision=6, nullable=True, default="CURRENT_TIMESTAMP(6)"),
        )
        table.primary("id")
        return table

    def has_table(self, db: DatabaseProtocol) -> bool:
        """Probe the tracking table."""
        try:
            db.query(f"SELECT 1 FROM `{self.table_name}` LIMIT 1")
        except DatabaseError:
            return False
        return True

    def create_migration_table(self, db: DatabaseProtocol) -> None:
        """Create the tracking table unless it already exists.

        Raises:
            MigrationTableError: If the table cannot be created.
        """
        if self.has_table(db):
            return

        sql = CreateTableCommand(self.table).to_sql()
        if not sql:
            raise MigrationTableError(
                f"Migration table failed to be created: invalid table {self.table_name!r}"
            )

        try:
            db.execute(sql)
        except DatabaseError as e:
            raise MigrationTableError(
                f"Migration table failed to be created: {e}"
            ) from e

        logger.debug(f"Created migration table {self.table_name}")

    def fetch_executed(self, db: DatabaseProtocol) -> list[MigrationEntry]:
        """Load executed entries, oldest first, into ``executed``.

        If a row cannot be read, the entries read before it are kept.

        Raises:
            DatabaseError: If the query fails or a row is malformed.
        """
        self.executed = []

        rows = db.query(
            f"SELECT `id`, `name`, `batch`, `applied_at` FROM `{self.table_name}` "
            "ORDER BY `applied_at` ASC, `id` ASC"
        )

        for row in rows:
            try:
                entry = _parse_entry(row)
            except (TypeError, ValueError) as e:
                raise DatabaseError(f"Failed to read migration entry: {e}") from e
            self.executed.append(entry)

        logger.debug(f"Found {len(self.executed)} executed migration(s)")
        return self.executed

    def batch(self) -> int:
        """Get the highest batch number among executed entries, 0 if none."""
        return max((entry.batch for entry in self.executed), default=0)

    def is_executed(self, name: str) -> bool:
        return any(entry.name == name for entry in self.executed)

    def last_batch_executed(self) -> list[MigrationEntry]:
        """Get the entries of the highest batch, oldest first."""
        batch = self.batch()
        return [entry for entry in self.executed if entry.batch == batch]

    # =========================================================================
    # Internals
    # =========================================================================

    def _check_pool(self) -> None:
        if not self.pool:
            raise NoMigrationDefinedError()

        seen: set[str] = set()
        for migration in self.pool:
            if not migration.name:
                raise MissingMigrationNameError()
            if migration.name in seen:
                raise DuplicateMigrationError(migration.name)
            seen.add(migration.name)

    def _prepare_revert(self, db: DatabaseProtocol) -> None:
        self._check_pool()

        if not self.has_table(db):
            raise TableNotExistsError()

        if not self.fetch_executed(db):
            raise EmptyRollbackStackError()

    def _find(self, name: str) -> Optional[Migration]:
        for migration in reversed(self.pool):
            if migration.name == name:
                return migration
        return None

    def _apply(
        self,
        db: DatabaseProtocol,
        migration: Migration,
        producer: Callable[[], Schema],
    ) -> None:
        schema = producer()
        if schema is None or not schema.pool:
            raise NoSQLCommandsToRunError()

        migration.exec(db, schema.pool)

    def _revert_entries(
        self, db: DatabaseProtocol, entries: Sequence[MigrationEntry]
    ) -> list[str]:
        reverted: list[str] = []

        for entry in reversed(entries):
            migration = self._find(entry.name)
            if migration is None:
                logger.warning(
                    f"Migration {entry.name} is not in the pool, skipping"
                )
                continue

            try:
                self._apply(db, migration, migration.down)
                self._delete_entry(db, entry.id)
            except Exception as e:
                logger.error(f"Reverting {entry.name} failed")
                e.reverted = reverted
                raise

            reverted.append(entry.name)
            logger.info(f"Reverted {entry.name} (batch {entry.batch})")

        return reverted

    def _insert_entry(self, db: DatabaseProtocol, name: str, batch: int) -> None:
        db.execute(
            f"INSERT INTO `{self.table_name}` (`name`, `batch`) VALUES (:name, :batch)",
            {"name": name, "batch": batch},
        )

    def _delete_entry(self, db: DatabaseProtocol, entry_id: int) -> None:
        db.execute(
            f"DELETE FROM `{self.table_name}` WHERE `id` = :id",
            {"id": entry_id},
        )
