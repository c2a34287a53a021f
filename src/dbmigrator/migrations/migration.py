"""A single migration and the execution of its command pool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from loguru import logger

from ..core.exceptions import DatabaseError, NoSQLCommandsToRunError
from ..ddl.commands import Command
from ..ddl.schema import Schema
from ..store.protocols import DatabaseProtocol, Executor


@dataclass(frozen=True)
class Migration:
    """A named pair of schema producers.

    ``up`` and ``down`` are only called when the migration actually runs,
    never while the pool is validated.

    Attributes:
        name: Unique name, stored in the migration table.
        up: Builds the schema applied by ``migrate``.
        down: Builds the schema applied by ``rollback`` and ``revert``.
        transaction: Run the commands inside a single transaction.

    Example:
        def up() -> Schema:
            s = Schema()
            s.create_table(posts_table())
            return s

        def down() -> Schema:
            s = Schema()
            s.drop_table_if_exists("posts")
            return s

        Migration("20190805170000_create_posts", up, down)
    """

    name: str
    up: Callable[[], Schema]
    down: Callable[[], Schema]
    transaction: bool = False

    def __repr__(self) -> str:
        return f"Migration({self.name!r}, transaction={self.transaction})"

    def exec(self, db: DatabaseProtocol, commands: Iterable[Command]) -> None:
        """Run commands in the mode this migration declares."""
        if self.transaction:
            run_in_transaction(db, commands)
        else:
            run(db, commands)


def run(executor: Executor, commands: Iterable[Command]) -> None:
    """Render and execute commands one by one.

    Execution stops at the first failure; statements already executed stay
    applied.

    Raises:
        NoSQLCommandsToRunError: If a command renders no SQL.
        DatabaseError: If a statement fails.
    """
    for command in commands:
        sql = command.to_sql()
        if not sql:
            raise NoSQLCommandsToRunError()

        logger.debug(f"Executing: {sql}")
        executor.execute(sql)


def run_in_transaction(db: DatabaseProtocol, commands: Iterable[Command]) -> None:
    """Execute commands inside one transaction.

    Any failure while running rolls the transaction back and re-raises the
    original error. A failing commit is raised as is.
    """
    tx = db.begin()

    try:
        run(tx, commands)
    except Exception:
        try:
            tx.rollback()
        except DatabaseError as e:
            logger.error(f"Rollback failed: {e}")
        raise

    tx.commit()
