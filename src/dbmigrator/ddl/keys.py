"""Index and foreign key renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

KEY_TYPES = ("PRIMARY", "UNIQUE")
REFERENCE_OPTIONS = ("SET NULL", "CASCADE", "RESTRICT", "NO ACTION", "SET DEFAULT")


def _quote_columns(columns: Sequence[str]) -> str:
    return "(`" + "`, `".join(columns) + "`)"


def build_unique_key_name(table: str, *columns: str) -> str:
    """Build the default unique key name: ``{table}_{col1}_{col2}_unique``."""
    return f"{table}_{'_'.join(columns)}_unique"


def build_foreign_key_name(table: str, column: str) -> str:
    """Build the default foreign key name: ``{table}_{column}_foreign``."""
    return f"{table}_{column}_foreign"


@dataclass(frozen=True)
class Key:
    """Table index.

    Attributes:
        name: Optional index name.
        type: ``primary``, ``unique`` or empty for a plain key.
        columns: Indexed columns in order.
    """

    name: str = ""
    type: str = ""
    columns: Sequence[str] = ()

    def render(self) -> Optional[str]:
        if not self.columns:
            return None

        sql = ""
        if self.type.upper() in KEY_TYPES:
            sql += self.type.upper() + " "

        sql += "KEY"

        if self.name:
            sql += f" `{self.name}`"

        return f"{sql} {_quote_columns(self.columns)}"


@dataclass(frozen=True)
class Foreign:
    """Foreign key constraint.

    Attributes:
        key: Constraint name.
        column: Source column on the owning table.
        reference: Referenced column.
        on: Referenced table.
        on_update: ON UPDATE action; unknown actions are omitted.
        on_delete: ON DELETE action; unknown actions are omitted.
    """

    key: str = ""
    column: str = ""
    reference: str = ""
    on: str = ""
    on_update: str = ""
    on_delete: str = ""

    def render(self) -> Optional[str]:
        if not (self.key and self.column and self.on and self.reference):
            return None

        sql = (
            f"CONSTRAINT `{self.key}` FOREIGN KEY (`{self.column}`) "
            f"REFERENCES `{self.on}` (`{self.reference}`)"
        )

        if self.on_delete.upper() in REFERENCE_OPTIONS:
            sql += f" ON DELETE {self.on_delete.upper()}"

        if self.on_update.upper() in REFERENCE_OPTIONS:
            sql += f" ON UPDATE {self.on_update.upper()}"

        return sql


def render_keys(keys: Sequence[Key]) -> str:
    """Render indexes as a comma separated list, skipping unrenderable ones."""
    return ", ".join(sql for sql in (key.render() for key in keys) if sql)


def render_foreigns(foreigns: Sequence[Foreign]) -> str:
    """Render foreign keys as a comma separated list, skipping unrenderable ones."""
    return ", ".join(sql for sql in (foreign.render() for foreign in foreigns) if sql)
