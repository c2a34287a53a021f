"""Tests for the SQLAlchemy database adapter."""

import pytest

from dbmigrator.core.exceptions import DatabaseError
from dbmigrator.ddl.commands import CustomCommand
from dbmigrator.ddl.schema import Schema
from dbmigrator.migrations import Migration, Migrator
from dbmigrator.store.database import Database
from dbmigrator.store.protocols import DatabaseProtocol, ExecResult


class TestDatabaseConnection:
    """Tests for database connection lifecycle."""

    def test_implements_protocol(self, sqlite_db: Database):
        assert isinstance(sqlite_db, DatabaseProtocol)

    def test_close_without_connect(self):
        """Close should not raise if not connected."""
        Database("sqlite://").close()

    def test_double_connect(self):
        db = Database("sqlite://")
        db.connect()
        db.connect()
        db.close()

    def test_context_manager(self):
        with Database("sqlite://") as db:
            assert db.query("SELECT 1") == [(1,)]

        with pytest.raises(DatabaseError, match="Database not connected"):
            db.query("SELECT 1")

    @pytest.mark.parametrize("method", ["execute", "query"])
    def test_not_connected(self, method):
        with pytest.raises(DatabaseError, match="Database not connected"):
            getattr(Database("sqlite://"), method)("SELECT 1")

    def test_begin_not_connected(self):
        with pytest.raises(DatabaseError, match="Database not connected"):
            Database("sqlite://").begin()


class TestDatabaseExecute:
    """Tests for statements and queries."""

    def test_execute_and_query(self, sqlite_db: Database):
        sqlite_db.execute("CREATE TABLE `posts` (id INTEGER PRIMARY KEY, title TEXT)")
        result = sqlite_db.execute(
            "INSERT INTO `posts` (title) VALUES (:title)", {"title": "hello"}
        )

        assert result == ExecResult(rowcount=1, lastrowid=1)
        assert sqlite_db.query("SELECT id, title FROM `posts`") == [(1, "hello")]

    def test_query_with_params(self, sqlite_db: Database):
        sqlite_db.execute("CREATE TABLE t (a INTEGER)")
        sqlite_db.execute("INSERT INTO t (a) VALUES (1), (2), (3)")

        assert sqlite_db.query("SELECT a FROM t WHERE a > :min ORDER BY a", {"min": 1}) == [
            (2,),
            (3,),
        ]

    def test_ddl_is_not_parsed_for_binds(self, sqlite_db: Database):
        """Colons in DDL text are not bind parameters."""
        sqlite_db.execute("CREATE TABLE t (a TEXT DEFAULT 'x:y')")
        sqlite_db.execute("INSERT INTO t DEFAULT VALUES")

        assert sqlite_db.query("SELECT a FROM t") == [("x:y",)]

    def test_failure_is_wrapped(self, sqlite_db: Database):
        with pytest.raises(DatabaseError, match="Query execution failed"):
            sqlite_db.execute("DROP TABLE missing")

    def test_connection_usable_after_failure(self, sqlite_db: Database):
        with pytest.raises(DatabaseError):
            sqlite_db.query("SELECT * FROM missing")

        assert sqlite_db.query("SELECT 1") == [(1,)]


class TestDatabaseTransaction:
    """Tests for explicit transactions."""

    @pytest.fixture
    def table(self, sqlite_db: Database) -> Database:
        sqlite_db.execute("CREATE TABLE t (a INTEGER)")
        return sqlite_db

    def test_commit_persists(self, table: Database):
        tx = table.begin()
        tx.execute("INSERT INTO t (a) VALUES (:a)", {"a": 1})
        tx.commit()

        assert table.query("SELECT a FROM t") == [(1,)]

    def test_rollback_discards(self, table: Database):
        tx = table.begin()
        tx.execute("INSERT INTO t (a) VALUES (1)")
        tx.rollback()

        assert table.query("SELECT a FROM t") == []

    def test_failure_is_wrapped(self, table: Database):
        tx = table.begin()

        with pytest.raises(DatabaseError, match="Query execution failed"):
            tx.execute("INSERT INTO missing (a) VALUES (1)")

        tx.rollback()


class TestMigratorOnSQLite:
    """Migrator against a real connection with a pre-created tracking table."""

    def test_migrate_and_rollback(self, sqlite_db: Database):
        sqlite_db.execute(
            "CREATE TABLE `migrations` ("
            "id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "name TEXT NOT NULL, "
            "batch INTEGER NOT NULL, "
            "applied_at TEXT DEFAULT CURRENT_TIMESTAMP)"
        )

        def up() -> Schema:
            s = Schema()
            s.custom_command(CustomCommand("CREATE TABLE `posts` (id INTEGER)"))
            return s

        def down() -> Schema:
            s = Schema()
            s.custom_command("DROP TABLE `posts`")
            return s

        migrator = Migrator([Migration("create_posts", up, down, transaction=True)])

        assert migrator.migrate(sqlite_db) == ["create_posts"]
        assert sqlite_db.query("SELECT name, batch FROM `migrations`") == [
            ("create_posts", 1)
        ]
        assert migrator.status(sqlite_db)[0].applied

        assert migrator.rollback(sqlite_db) == ["create_posts"]
        assert sqlite_db.query("SELECT name FROM `migrations`") == []
        with pytest.raises(DatabaseError):
            sqlite_db.query("SELECT * FROM `posts`")
