"""Database access for dbmigrator."""

from .database import Database, SQLAlchemyTransaction
from .protocols import DatabaseProtocol, ExecResult, Executor, Transaction

__all__ = [
    "Database",
    "DatabaseProtocol",
    "ExecResult",
    "Executor",
    "SQLAlchemyTransaction",
    "Transaction",
]
