"""Pytest configuration and fixtures."""

from typing import Callable

import pytest

from dbmigrator.ddl import Schema, Table
from dbmigrator.migrations import Migration
from dbmigrator.store.database import Database
from tests.fakes import FakeDatabase


def create_table_migration(name: str, table: str, transaction: bool = False) -> Migration:
    """Build a migration creating ``table`` on up and dropping it on down."""

    def up() -> Schema:
        s = Schema()
        t = Table(table)
        t.id()
        s.create_table(t)
        return s

    def down() -> Schema:
        s = Schema()
        s.drop_table_if_exists(table)
        return s

    return Migration(name, up, down, transaction)


@pytest.fixture
def fake_db() -> FakeDatabase:
    """Provide an empty in-memory database fake."""
    return FakeDatabase()


@pytest.fixture
def make_migration() -> Callable[..., Migration]:
    """Provide the create-table migration factory."""
    return create_table_migration


@pytest.fixture
def posts_migration() -> Migration:
    """Create the posts table with a UUID primary key."""

    def up() -> Schema:
        s = Schema()
        posts = Table("posts")
        posts.unique_id("id")
        posts.varchar("title", 64)
        s.create_table(posts)
        return s

    def down() -> Schema:
        s = Schema()
        s.drop_table_if_exists("posts")
        return s

    return Migration("20190805170000_create_posts", up, down)


@pytest.fixture
def sqlite_db() -> Database:
    """Provide a connected in-memory SQLite database."""
    database = Database("sqlite://")
    database.connect()
    yield database
    database.close()
