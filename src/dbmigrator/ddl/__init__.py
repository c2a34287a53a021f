"""MySQL DDL builder.

Column types, keys and tables describe schema objects; commands render
them into SQL statements; a ``Schema`` collects the commands of one
migration step.
"""

from .columns import (
    JSON,
    Binary,
    Bit,
    Column,
    ColumnType,
    Enum,
    Floatable,
    Integer,
    RawType,
    String,
    Text,
    Timable,
)
from .commands import (
    AddColumnCommand,
    AddForeignCommand,
    AddIndexCommand,
    AddPrimaryIndexCommand,
    AddUniqueIndexCommand,
    AlterTableCommand,
    ChangeColumnCommand,
    Command,
    CreateTableCommand,
    CustomCommand,
    DropColumnCommand,
    DropForeignCommand,
    DropIndexCommand,
    DropPrimaryIndexCommand,
    DropTableCommand,
    ModifyColumnCommand,
    RenameColumnCommand,
    RenameTableCommand,
)
from .keys import Foreign, Key, build_foreign_key_name, build_unique_key_name
from .schema import Schema
from .table import Table

__all__ = [
    "AddColumnCommand",
    "AddForeignCommand",
    "AddIndexCommand",
    "AddPrimaryIndexCommand",
    "AddUniqueIndexCommand",
    "AlterTableCommand",
    "Binary",
    "Bit",
    "ChangeColumnCommand",
    "Column",
    "ColumnType",
    "Command",
    "CreateTableCommand",
    "CustomCommand",
    "DropColumnCommand",
    "DropForeignCommand",
    "DropIndexCommand",
    "DropPrimaryIndexCommand",
    "DropTableCommand",
    "Enum",
    "Floatable",
    "Foreign",
    "Integer",
    "JSON",
    "Key",
    "ModifyColumnCommand",
    "RawType",
    "RenameColumnCommand",
    "RenameTableCommand",
    "Schema",
    "String",
    "Table",
    "Text",
    "Timable",
    "build_foreign_key_name",
    "build_unique_key_name",
]
