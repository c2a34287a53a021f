"""Migration definitions and the migrator state machine."""

from .migration import Migration, run, run_in_transaction
from .migrator import Migrator

__all__ = [
    "Migration",
    "Migrator",
    "run",
    "run_in_transaction",
]
