"""Protocol definitions for the database the migrator talks to.

The migrator only needs three capabilities: run a statement, run a
parameterized query that returns rows, and open a transaction that can
itself run statements. Anything implementing these protocols can be
migrated; ``dbmigrator.store.database.Database`` is the SQLAlchemy backed
implementation.

Example:
    class MyDatabase:
        def execute(self, sql, params=None) -> ExecResult: ...
        def query(self, sql, params=None) -> list[tuple]: ...
        def begin(self) -> Transaction: ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Sequence, runtime_checkable


@dataclass(frozen=True)
class ExecResult:
    """Metadata returned by a statement that produces no rows."""

    rowcount: int = 0
    lastrowid: Optional[int] = None


@runtime_checkable
class Executor(Protocol):
    """Runs a single SQL statement."""

    def execute(
        self, sql: str, params: Optional[Mapping[str, Any]] = None
    ) -> ExecResult:
        """Execute a statement.

        Raises:
            DatabaseError: If the statement fails.
        """
        ...


@runtime_checkable
class Transaction(Executor, Protocol):
    """An open transaction."""

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@runtime_checkable
class DatabaseProtocol(Executor, Protocol):
    """Database connection used by the migrator."""

    def query(
        self, sql: str, params: Optional[Mapping[str, Any]] = None
    ) -> list[Sequence[Any]]:
        """Run a query and return all rows.

        Raises:
            DatabaseError: If the query fails.
        """
        ...

    def begin(self) -> Transaction:
        """Start a transaction.

        Raises:
            DatabaseError: If the transaction cannot be started.
        """
        ...
