"""Schema: the ordered pool of commands a migration runs."""

from __future__ import annotations

from typing import Iterator, Sequence, Union

from .commands import (
    AlterTableCommand,
    Command,
    CreateTableCommand,
    CustomCommand,
    DropTableCommand,
    RenameTableCommand,
)
from .table import Table


class Schema:
    """Collects commands for a migration's ``up`` or ``down`` step.

    Every method appends exactly one command; call order is execution order.

    Example:
        def up() -> Schema:
            s = Schema()
            posts = Table("posts")
            posts.id()
            posts.varchar("title", 64)
            s.create_table(posts)
            return s

        def down() -> Schema:
            s = Schema()
            s.drop_table_if_exists("posts")
            return s
    """

    def __init__(self) -> None:
        self.pool: list[Command] = []

    def __len__(self) -> int:
        return len(self.pool)

    def __iter__(self) -> Iterator[Command]:
        return iter(self.pool)

    def create_table(self, table: Table) -> None:
        self.pool.append(CreateTableCommand(table))

    def drop_table(self, name: str, soft: bool = False, option: str = "") -> None:
        """Drop a table.

        Args:
            name: Table name.
            soft: Add ``IF EXISTS``.
            option: ``RESTRICT`` or ``CASCADE``; anything else is ignored.
        """
        self.pool.append(DropTableCommand(name, soft, option))

    def drop_table_if_exists(self, name: str, option: str = "") -> None:
        self.drop_table(name, True, option)

    def rename_table(self, old: str, new: str) -> None:
        self.pool.append(RenameTableCommand(old, new))

    def alter_table(self, name: str, commands: Sequence[Command]) -> None:
        """Apply ALTER TABLE actions to a table, in order."""
        self.pool.append(AlterTableCommand(name, tuple(commands)))

    def custom_command(self, command: Union[Command, str]) -> None:
        """Add a caller defined command, or raw SQL text."""
        if isinstance(command, str):
            command = CustomCommand(command)
        self.pool.append(command)
