"""SQL commands produced by a migration schema.

Every command renders one SQL statement (or one ALTER TABLE action) with
``to_sql()``. A command that misses a required identifier renders ``None``
instead of raising; the migration runner treats that as a fatal
"no SQL commands to run" condition when it executes the schema.

Statement-level commands are appended to a ``Schema``; the ``*Column*``,
``*Index*`` and ``*Foreign*`` commands are ALTER TABLE actions meant to be
wrapped by ``AlterTableCommand``.

Example:
    AlterTableCommand(
        "posts",
        [
            AddColumnCommand("slug", String(precision=64), after="title"),
            AddUniqueIndexCommand("posts_slug_unique", ["slug"]),
        ],
    ).to_sql()
    # ALTER TABLE `posts` ADD COLUMN `slug` varchar(64) ... AFTER title,
    #     ADD UNIQUE KEY `posts_slug_unique` (`slug`)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Union

from ..core.config import (
    DEFAULT_CHARSET,
    DEFAULT_COLLATION,
    DEFAULT_ENGINE,
    FALLBACK_ID_COLUMN,
    infer_charset,
)
from .columns import ColumnType, render_columns
from .keys import Foreign, render_foreigns, render_keys
from .table import Table

DROP_TABLE_OPTIONS = ("RESTRICT", "CASCADE")


class Command(ABC):
    """A renderable SQL statement or ALTER TABLE action."""

    @abstractmethod
    def to_sql(self) -> Optional[str]:
        """Render SQL text, or None if the command is incomplete."""


def _quote_columns(columns: Sequence[str]) -> str:
    return "(`" + "`, `".join(columns) + "`)"


def _render_definition(column: Optional[ColumnType]) -> Optional[str]:
    if column is None:
        return None
    return column.render() or None


# =============================================================================
# Table-level commands
# =============================================================================


@dataclass(frozen=True)
class CreateTableCommand(Command):
    """CREATE TABLE from a ``Table`` definition."""

    table: Table

    def to_sql(self) -> Optional[str]:
        table = self.table
        if not table.name:
            return None

        definitions = render_columns(table.columns) or FALLBACK_ID_COLUMN

        if keys := render_keys(table.indexes):
            definitions += ", " + keys

        if foreigns := render_foreigns(table.foreigns):
            definitions += ", " + foreigns

        charset, collation = self._charset_and_collation()

        sql = (
            f"CREATE TABLE `{table.name}` ({definitions}) "
            f"ENGINE={table.engine or DEFAULT_ENGINE} "
            f"DEFAULT CHARSET={charset} COLLATE={collation}"
        )

        if table.comment:
            sql += f" COMMENT='{table.comment}'"

        return sql

    def _charset_and_collation(self) -> tuple[str, str]:
        charset = self.table.charset
        collation = self.table.collation

        if not charset and not collation:
            return DEFAULT_CHARSET, DEFAULT_COLLATION

        if not charset:
            charset = infer_charset(collation)

        if not collation:
            collation = f"{charset}_unicode_ci"

        return charset, collation


@dataclass(frozen=True)
class DropTableCommand(Command):
    """DROP TABLE, optionally ``IF EXISTS`` and with RESTRICT or CASCADE."""

    table: str
    soft: bool = False
    option: str = ""

    def to_sql(self) -> Optional[str]:
        if not self.table:
            return None

        sql = "DROP TABLE"

        if self.soft:
            sql += " IF EXISTS"

        sql += f" `{self.table}`"

        if self.option.upper() in DROP_TABLE_OPTIONS:
            sql += " " + self.option.upper()

        return sql


@dataclass(frozen=True)
class RenameTableCommand(Command):
    old: str
    new: str

    def to_sql(self) -> Optional[str]:
        if not self.old or not self.new:
            return None

        return f"RENAME TABLE `{self.old}` TO `{self.new}`"


@dataclass(frozen=True)
class AlterTableCommand(Command):
    """ALTER TABLE applying a list of actions in order.

    Renders None if the table name or the action list is empty, or if any
    action is itself incomplete.
    """

    name: str
    commands: Sequence[Command] = field(default_factory=tuple)

    def to_sql(self) -> Optional[str]:
        if not self.name or not self.commands:
            return None

        actions = [command.to_sql() for command in self.commands]
        if not all(actions):
            return None

        return f"ALTER TABLE `{self.name}` " + ", ".join(actions)


@dataclass(frozen=True)
class CustomCommand(Command):
    """Caller supplied SQL, either literal or produced by a callable.

    Example:
        CustomCommand("DROP PROCEDURE abc")
        CustomCommand(lambda: f"DROP PROCEDURE {name}")
    """

    sql: Union[str, Callable[[], Optional[str]]]

    def to_sql(self) -> Optional[str]:
        sql = self.sql() if callable(self.sql) else self.sql
        return sql or None


# =============================================================================
# ALTER TABLE actions
# =============================================================================


@dataclass(frozen=True)
class AddColumnCommand(Command):
    """ADD COLUMN, optionally placed ``AFTER`` a column or ``FIRST``."""

    name: str = ""
    column: Optional[ColumnType] = None
    after: str = ""
    first: bool = False

    def to_sql(self) -> Optional[str]:
        definition = _render_definition(self.column)
        if not self.name or not definition:
            return None

        sql = f"ADD COLUMN `{self.name}` {definition}"

        if self.after:
            sql += f" AFTER {self.after}"
        elif self.first:
            sql += " FIRST"

        return sql


@dataclass(frozen=True)
class RenameColumnCommand(Command):
    old: str = ""
    new: str = ""

    def to_sql(self) -> Optional[str]:
        if not self.old or not self.new:
            return None

        return f"RENAME COLUMN `{self.old}` TO `{self.new}`"


@dataclass(frozen=True)
class ModifyColumnCommand(Command):
    """MODIFY a column definition in place."""

    name: str = ""
    column: Optional[ColumnType] = None

    def to_sql(self) -> Optional[str]:
        definition = _render_definition(self.column)
        if not self.name or not definition:
            return None

        return f"MODIFY `{self.name}` {definition}"


@dataclass(frozen=True)
class ChangeColumnCommand(Command):
    """CHANGE a column name and definition at once."""

    from_name: str = ""
    to_name: str = ""
    column: Optional[ColumnType] = None

    def to_sql(self) -> Optional[str]:
        definition = _render_definition(self.column)
        if not self.from_name or not self.to_name or not definition:
            return None

        return f"CHANGE `{self.from_name}` `{self.to_name}` {definition}"


@dataclass(frozen=True)
class DropColumnCommand(Command):
    name: str = ""

    def to_sql(self) -> Optional[str]:
        if not self.name:
            return None

        return f"DROP COLUMN `{self.name}`"


@dataclass(frozen=True)
class AddIndexCommand(Command):
    name: str = ""
    columns: Sequence[str] = ()

    def to_sql(self) -> Optional[str]:
        if not self.name or not self.columns:
            return None

        return f"ADD KEY `{self.name}` {_quote_columns(self.columns)}"


@dataclass(frozen=True)
class DropIndexCommand(Command):
    name: str = ""

    def to_sql(self) -> Optional[str]:
        if not self.name:
            return None

        return f"DROP KEY `{self.name}`"


@dataclass(frozen=True)
class AddForeignCommand(Command):
    foreign: Foreign = field(default_factory=Foreign)

    def to_sql(self) -> Optional[str]:
        constraint = self.foreign.render()
        if not constraint:
            return None

        return f"ADD {constraint}"


@dataclass(frozen=True)
class DropForeignCommand(Command):
    name: str = ""

    def to_sql(self) -> Optional[str]:
        if not self.name:
            return None

        return f"DROP FOREIGN KEY `{self.name}`"


@dataclass(frozen=True)
class AddUniqueIndexCommand(Command):
    key: str = ""
    columns: Sequence[str] = ()

    def to_sql(self) -> Optional[str]:
        if not self.key or not self.columns:
            return None

        return f"ADD UNIQUE KEY `{self.key}` {_quote_columns(self.columns)}"


@dataclass(frozen=True)
class AddPrimaryIndexCommand(Command):
    """ADD PRIMARY KEY over one column name or a list of columns."""

    columns: Union[str, Sequence[str]] = ()

    def to_sql(self) -> Optional[str]:
        if not self.columns:
            return None

        columns = [self.columns] if isinstance(self.columns, str) else self.columns
        return f"ADD PRIMARY KEY {_quote_columns(columns)}"


@dataclass(frozen=True)
class DropPrimaryIndexCommand(Command):
    def to_sql(self) -> Optional[str]:
        return "DROP PRIMARY KEY"
