"""Table definition used by CREATE TABLE."""

from __future__ import annotations

from dataclasses import dataclass, field

from .columns import (
    JSON,
    Binary,
    Column,
    ColumnType,
    Floatable,
    Integer,
    String,
    Text,
    Timable,
)
from .keys import Foreign, Key, build_foreign_key_name, build_unique_key_name


@dataclass
class Table:
    """A table to be created.

    Columns, indexes and foreign keys are accumulated through the builder
    methods, in call order.

    Attributes:
        name: Table name.
        engine: Storage engine, default InnoDB.
        charset: Default charset, or the prefix of ``collation`` if only that is set.
        collation: Default collation, or ``{charset}_unicode_ci`` if only charset is set.
        comment: Optional table comment.

    Example:
        posts = Table("posts")
        posts.unique_id("id")
        posts.varchar("title", 64)
        posts.text("content", False)
        posts.timestamps()
    """

    name: str = ""
    engine: str = ""
    charset: str = ""
    collation: str = ""
    comment: str = ""
    columns: list[Column] = field(default_factory=list)
    indexes: list[Key] = field(default_factory=list)
    foreigns: list[Foreign] = field(default_factory=list)

    def column(self, name: str, definition: ColumnType) -> None:
        """Add a column to the table."""
        self.columns.append(Column(name, definition))

    def id(self, name: str = "id") -> None:
        """Add an auto-increment ``bigint unsigned`` primary key."""
        self.column(name, Integer(prefix="big", unsigned=True, autoincrement=True))
        self.primary(name)

    def unique_id(self, name: str = "id") -> None:
        """Add a UUID primary key stored as ``char(36)``."""
        self.uuid(name, "(UUID())", False)
        self.primary(name)

    def binary_id(self, name: str = "id") -> None:
        """Add a UUID primary key stored as ``binary(16)``."""
        self.column(
            name,
            Binary(fixed=True, precision=16, default="(UUID_TO_BIN(UUID()))"),
        )
        self.primary(name)

    def boolean(self, name: str, default: str = "") -> None:
        """Add a boolean stored as ``tinyint(1) unsigned``."""
        self.column(
            name, Integer(prefix="tiny", unsigned=True, precision=1, default=default)
        )

    def uuid(self, name: str, default: str = "", nullable: bool = False) -> None:
        """Add a ``char(36)`` column."""
        self.column(
            name, String(fixed=True, precision=36, default=default, nullable=nullable)
        )

    def timestamps(self) -> None:
        """Add ``created_at`` and ``updated_at``, the latter refreshed on every update.

        Both are ``timestamp(6)`` defaulting to ``CURRENT_TIMESTAMP(6)``.
        """
        self.column(
            "created_at",
            Timable(type="timestamp", precision=6, default="CURRENT_TIMESTAMP(6)"),
        )
        self.column(
            "updated_at",
            Timable(
                type="timestamp",
                precision=6,
                default="CURRENT_TIMESTAMP(6)",
                on_update="CURRENT_TIMESTAMP(6)",
            ),
        )

    def integer(self, name: str, precision: int = 0, unsigned: bool = False) -> None:
        self.column(name, Integer(precision=precision, unsigned=unsigned))

    def big_integer(self, name: str, precision: int = 0, unsigned: bool = False) -> None:
        self.column(name, Integer(prefix="big", precision=precision, unsigned=unsigned))

    def float(self, name: str, precision: int = 0, scale: int = 0) -> None:
        self.column(name, Floatable(precision=precision, scale=scale))

    def fixed_float(self, name: str, precision: int = 0, scale: int = 0) -> None:
        """Add a float with exact precision, rendered as ``decimal``."""
        self.decimal(name, precision, scale)

    def decimal(self, name: str, precision: int = 0, scale: int = 0) -> None:
        self.column(name, Floatable(type="decimal", precision=precision, scale=scale))

    def varchar(self, name: str, length: int) -> None:
        self.column(name, String(precision=length))

    def char(self, name: str, length: int) -> None:
        self.column(name, String(fixed=True, precision=length))

    def text(self, name: str, nullable: bool = False) -> None:
        self.column(name, Text(nullable=nullable))

    def blob(self, name: str, nullable: bool = False) -> None:
        self.column(name, Text(blob=True, nullable=nullable))

    def json(self, name: str) -> None:
        self.column(name, JSON())

    def timestamp(self, name: str, nullable: bool = False, default: str = "") -> None:
        self.column(name, Timable(nullable=nullable, default=default))

    def precise_timestamp(
        self, name: str, precision: int, nullable: bool = False, default: str = ""
    ) -> None:
        """Add a timestamp with fractional seconds precision."""
        self.column(
            name, Timable(precision=precision, nullable=nullable, default=default)
        )

    def date(self, name: str, nullable: bool = False, default: str = "") -> None:
        self.column(name, Timable(type="date", nullable=nullable, default=default))

    def time(self, name: str, nullable: bool = False, default: str = "") -> None:
        self.column(name, Timable(type="time", nullable=nullable, default=default))

    def year(self, name: str, nullable: bool = False, default: str = "") -> None:
        self.column(name, Timable(type="year", nullable=nullable, default=default))

    def binary(self, name: str, length: int, nullable: bool = False) -> None:
        self.column(name, Binary(fixed=True, precision=length, nullable=nullable))

    def varbinary(self, name: str, length: int, nullable: bool = False) -> None:
        self.column(name, Binary(precision=length, nullable=nullable))

    def primary(self, *columns: str) -> None:
        """Add the primary key. No-op without columns."""
        if not columns:
            return

        self.indexes.append(Key(type="primary", columns=columns))

    def unique(self, *columns: str) -> None:
        """Add a unique key named ``{table}_{columns}_unique``. No-op without columns."""
        if not columns:
            return

        self.indexes.append(
            Key(
                name=build_unique_key_name(self.name, *columns),
                type="unique",
                columns=columns,
            )
        )

    def index(self, name: str, *columns: str) -> None:
        """Add a plain key. No-op without columns."""
        if not columns:
            return

        self.indexes.append(Key(name=name, columns=columns))

    def foreign(
        self,
        column: str,
        reference: str,
        on: str,
        on_update: str = "",
        on_delete: str = "",
    ) -> None:
        """Add a foreign key constraint together with its backing index.

        No-op without a column.

        Args:
            column: Column of this table.
            reference: Referenced column.
            on: Referenced table.
            on_update: ON UPDATE action.
            on_delete: ON DELETE action.
        """
        if not column:
            return

        name = build_foreign_key_name(self.name, column)
        self.indexes.append(Key(name=name, columns=(column,)))
        self.foreigns.append(
            Foreign(
                key=name,
                column=column,
                reference=reference,
                on=on,
                on_update=on_update,
                on_delete=on_delete,
            )
        )
