"""Test fakes for testing without a MySQL server.

Example:
    from tests.fakes import FakeDatabase

    db = FakeDatabase()
    Migrator(pool).migrate(db)
    assert db.applied == [("m1", 1)]
"""

from .database import FakeDatabase, FakeTransaction

__all__ = [
    "FakeDatabase",
    "FakeTransaction",
]
