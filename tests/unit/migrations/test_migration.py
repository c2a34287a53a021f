"""Tests for command execution."""

import pytest

from dbmigrator.core.exceptions import DatabaseError, NoSQLCommandsToRunError
from dbmigrator.ddl.commands import CustomCommand, DropTableCommand
from dbmigrator.ddl.schema import Schema
from dbmigrator.migrations.migration import Migration, run, run_in_transaction


def commands(*sql):
    return [CustomCommand(s) for s in sql]


class TestRun:
    """Tests for non-transactional execution."""

    def test_executes_in_order(self, fake_db):
        run(fake_db, commands("SELECT 1", "SELECT 2"))

        assert fake_db.statements == ["SELECT 1", "SELECT 2"]

    def test_unrenderable_command_stops_execution(self, fake_db):
        """Earlier statements stay executed."""
        with pytest.raises(NoSQLCommandsToRunError):
            run(fake_db, [CustomCommand("SELECT 1"), DropTableCommand(""), CustomCommand("SELECT 2")])

        assert fake_db.statements == ["SELECT 1"]

    def test_database_error_propagates_unchanged(self, fake_db):
        fake_db.fail_on("SELECT 2", "syntax error")

        with pytest.raises(DatabaseError, match="syntax error"):
            run(fake_db, commands("SELECT 1", "SELECT 2", "SELECT 3"))

        assert fake_db.statements == ["SELECT 1", "SELECT 2"]

    def test_empty_command_list_does_nothing(self, fake_db):
        run(fake_db, [])

        assert fake_db.statements == []


class TestRunInTransaction:
    """Tests for transactional execution."""

    def test_commits_on_success(self, fake_db):
        run_in_transaction(fake_db, commands("SELECT 1", "SELECT 2"))

        assert fake_db.statements == ["BEGIN", "SELECT 1", "SELECT 2", "COMMIT"]
        assert fake_db.transactions[0].committed

    def test_rolls_back_on_database_error(self, fake_db):
        fake_db.fail_on("SELECT 2")

        with pytest.raises(DatabaseError):
            run_in_transaction(fake_db, commands("SELECT 1", "SELECT 2"))

        assert fake_db.statements == ["BEGIN", "SELECT 1", "SELECT 2", "ROLLBACK"]
        assert not fake_db.transactions[0].committed

    def test_rolls_back_on_unrenderable_command(self, fake_db):
        with pytest.raises(NoSQLCommandsToRunError):
            run_in_transaction(fake_db, [CustomCommand("SELECT 1"), CustomCommand("")])

        assert fake_db.transactions[0].rolled_back

    def test_original_error_survives_failed_rollback(self, fake_db):
        fake_db.fail_on("SELECT 1", "statement failed")
        fake_db.fail_on("ROLLBACK", "rollback failed")

        with pytest.raises(DatabaseError, match="statement failed"):
            run_in_transaction(fake_db, commands("SELECT 1"))

    def test_commit_failure_is_raised_without_rollback(self, fake_db):
        fake_db.fail_on("COMMIT", "commit failed")

        with pytest.raises(DatabaseError, match="commit failed"):
            run_in_transaction(fake_db, commands("SELECT 1"))

        assert "ROLLBACK" not in fake_db.statements


class TestMigration:
    """Tests for Migration.exec mode selection."""

    def _migration(self, transaction):
        return Migration("m1", Schema, Schema, transaction)

    def test_exec_without_transaction(self, fake_db):
        self._migration(False).exec(fake_db, commands("SELECT 1"))

        assert fake_db.statements == ["SELECT 1"]

    def test_exec_with_transaction(self, fake_db):
        self._migration(True).exec(fake_db, commands("SELECT 1"))

        assert fake_db.statements == ["BEGIN", "SELECT 1", "COMMIT"]

    def test_producers_are_not_called_on_construction(self):
        calls = []

        def up():
            calls.append("up")
            return Schema()

        Migration("m1", up, up)

        assert calls == []
