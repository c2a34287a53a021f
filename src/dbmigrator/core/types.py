"""Type definitions for dbmigrator."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class MigrationEntry:
    """A row of the migration tracking table."""

    id: int
    name: str
    batch: int
    applied_at: Optional[datetime] = None


@dataclass(frozen=True)
class MigrationStatus:
    """Applied state of one pool migration."""

    name: str
    batch: Optional[int] = None
    applied_at: Optional[datetime] = None

    @property
    def applied(self) -> bool:
        """Check whether the migration has a tracking row."""
        return self.batch is not None
