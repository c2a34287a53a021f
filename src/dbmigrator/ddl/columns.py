"""Column type renderers for MySQL DDL.

Each column type is an immutable value describing one column definition.
``render()`` turns it into the definition text that follows the column
name in ``CREATE TABLE`` and ``ALTER TABLE`` statements. Rendering never
validates: an implausible configuration renders implausible SQL.

Clause order is fixed for every type:

    {type}[(precision[,scale])] [unsigned] [CHARACTER SET x] [COLLATE y]
    {NULL|NOT NULL} [DEFAULT d] [AUTO_INCREMENT] [ON UPDATE u] [COMMENT 'c']

Example:
    from dbmigrator.ddl.columns import Integer, String

    Integer(prefix="big", unsigned=True, precision=20, autoincrement=True).render()
    # bigint(20) unsigned NOT NULL AUTO_INCREMENT

    String(precision=255, default="active").render()
    # varchar(255) COLLATE utf8mb4_unicode_ci NOT NULL DEFAULT 'active'
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from ..core.config import DEFAULT_COLLATION

# Sub-types of Timable that accept fractional seconds precision
PRECISION_TIME_TYPES = ("time", "datetime", "timestamp")
MAX_TIME_PRECISION = 6

# Placeholders a caller can use to ask for an explicit empty string default
EMPTY_DEFAULT_PLACEHOLDERS = ("<empty>", "<nil>")


def build_default_for_string(value: str) -> str:
    """Build the DEFAULT clause for string-like columns.

    Values wrapped in parentheses are SQL expressions and stay unquoted,
    anything else is single-quoted.

    Args:
        value: Default value as declared on the column.

    Returns:
        The clause with a leading space, or an empty string if no default.
    """
    if value == "":
        return ""

    if value.startswith("(") and value.endswith(")"):
        return f" DEFAULT {value}"

    if value in EMPTY_DEFAULT_PLACEHOLDERS:
        value = ""

    return f" DEFAULT '{value}'"


def _precision(precision: int) -> str:
    return f"({precision})" if precision > 0 else ""


def _charset_and_collation(charset: str, collate: str, fallback: bool = True) -> str:
    sql = ""

    if charset:
        sql += f" CHARACTER SET {charset}"

    if collate:
        sql += f" COLLATE {collate}"
    elif not charset and fallback:
        sql += f" COLLATE {DEFAULT_COLLATION}"

    return sql


@dataclass(frozen=True)
class ColumnType(ABC):
    """Base for all column definitions.

    Attributes:
        default: Default value; empty means no DEFAULT clause.
        nullable: Render NULL instead of NOT NULL.
        comment: Column comment.
        on_update: Raw ON UPDATE expression.
    """

    default: str = ""
    nullable: bool = False
    comment: str = ""
    on_update: str = ""

    @abstractmethod
    def render(self) -> str:
        """Render the column definition."""

    def _tail(self, default_clause: str, extra: str = "") -> str:
        sql = " NULL" if self.nullable else " NOT NULL"
        sql += default_clause
        sql += extra

        if self.on_update:
            sql += f" ON UPDATE {self.on_update}"

        if self.comment:
            sql += f" COMMENT '{self.comment}'"

        return sql

    def _raw_default(self) -> str:
        return f" DEFAULT {self.default}" if self.default else ""


@dataclass(frozen=True)
class Integer(ColumnType):
    """Integer column: ``{tiny,small,medium,big}int``.

    Examples:
        Integer(prefix="tiny", unsigned=True, precision=1, default="0")
            tinyint(1) unsigned NOT NULL DEFAULT 0
        Integer(nullable=True, on_update="set null", comment="nullable counter")
            int NULL ON UPDATE set null COMMENT 'nullable counter'
    """

    prefix: str = ""
    unsigned: bool = False
    precision: int = 0
    autoincrement: bool = False

    def render(self) -> str:
        sql = f"{self.prefix}int{_precision(self.precision)}"

        if self.unsigned:
            sql += " unsigned"

        extra = " AUTO_INCREMENT" if self.autoincrement else ""
        return sql + self._tail(self._raw_default(), extra)


@dataclass(frozen=True)
class Floatable(ColumnType):
    """Floating point column: ``float``, ``real``, ``double``, ``decimal``, ``numeric``.

    A scale renders ``(precision,scale)`` even when precision is zero.

    Examples:
        Floatable(type="decimal", precision=15, scale=2, comment="money")
            decimal(15,2) NOT NULL COMMENT 'money'
        Floatable(type="double", scale=2, unsigned=True)
            double(0,2) unsigned NOT NULL
    """

    type: str = "float"
    unsigned: bool = False
    precision: int = 0
    scale: int = 0

    def render(self) -> str:
        sql = self.type or "float"

        if self.scale > 0:
            sql += f"({self.precision},{self.scale})"
        else:
            sql += _precision(self.precision)

        if self.unsigned:
            sql += " unsigned"

        return sql + self._tail(self._raw_default())


@dataclass(frozen=True)
class Timable(ColumnType):
    """Date and time column: ``date``, ``datetime``, ``timestamp``, ``time``, ``year``.

    Precision 1-6 applies to ``time``, ``datetime`` and ``timestamp`` only;
    anything else is dropped.

    Examples:
        Timable(type="datetime", precision=3, default="CURRENT_TIMESTAMP")
            datetime(3) NOT NULL DEFAULT CURRENT_TIMESTAMP
        Timable(type="date", precision=3)
            date NOT NULL
    """

    type: str = "timestamp"
    precision: int = 0

    def render(self) -> str:
        sql = self.type or "timestamp"

        if (
            0 < self.precision <= MAX_TIME_PRECISION
            and sql.lower() in PRECISION_TIME_TYPES
        ):
            sql += f"({self.precision})"

        return sql + self._tail(self._raw_default())


@dataclass(frozen=True)
class String(ColumnType):
    """Character column: ``char`` when fixed, otherwise ``varchar``.

    Without charset and collation the default collation is appended.

    Examples:
        String(fixed=True, precision=36, nullable=True, comment="uuid")
            char(36) COLLATE utf8mb4_unicode_ci NULL COMMENT 'uuid'
        String(precision=255, default="active", charset="utf8mb4", collate="utf8mb4_general_ci")
            varchar(255) CHARACTER SET utf8mb4 COLLATE utf8mb4_general_ci NOT NULL DEFAULT 'active'
    """

    charset: str = ""
    collate: str = ""
    fixed: bool = False
    precision: int = 0

    def render(self) -> str:
        sql = ("char" if self.fixed else "varchar") + _precision(self.precision)
        sql += _charset_and_collation(self.charset, self.collate)
        return sql + self._tail(build_default_for_string(self.default))


@dataclass(frozen=True)
class Text(ColumnType):
    """Long text column: ``{tiny,medium,long}text`` or ``{tiny,medium,long}blob``.

    Blobs are binary, so they never get the default collation.

    Examples:
        Text(prefix="medium")
            mediumtext COLLATE utf8mb4_unicode_ci NOT NULL
        Text(prefix="tiny", blob=True)
            tinyblob NOT NULL
    """

    charset: str = ""
    collate: str = ""
    prefix: str = ""
    blob: bool = False

    def render(self) -> str:
        sql = self.prefix + ("blob" if self.blob else "text")
        sql += _charset_and_collation(self.charset, self.collate, fallback=not self.blob)
        return sql + self._tail(build_default_for_string(self.default))


@dataclass(frozen=True)
class JSON(ColumnType):
    """``json`` column.

    Example:
        JSON(default="{}")
            json NOT NULL DEFAULT '{}'
    """

    def render(self) -> str:
        return "json" + self._tail(build_default_for_string(self.default))


@dataclass(frozen=True)
class Enum(ColumnType):
    """Choice column: ``enum``, or ``set`` when multiple values are allowed.

    Examples:
        Enum(values=("on", "off"), default="off", nullable=True)
            enum('on', 'off') COLLATE utf8mb4_unicode_ci NULL DEFAULT 'off'
        Enum(values=("1", "2"), multiple=True, charset="utf8mb4")
            set('1', '2') CHARACTER SET utf8mb4 NOT NULL
    """

    values: Sequence[str] = ()
    multiple: bool = False
    charset: str = ""
    collate: str = ""

    def render(self) -> str:
        sql = "set" if self.multiple else "enum"
        sql += "('" + "', '".join(self.values) + "')"
        sql += _charset_and_collation(self.charset, self.collate)
        return sql + self._tail(build_default_for_string(self.default))


@dataclass(frozen=True)
class Bit(ColumnType):
    """``bit`` column.

    Example:
        Bit(precision=8, default="1", comment="flags")
            bit(8) NOT NULL DEFAULT 1 COMMENT 'flags'
    """

    precision: int = 0

    def render(self) -> str:
        return "bit" + _precision(self.precision) + self._tail(self._raw_default())


@dataclass(frozen=True)
class Binary(ColumnType):
    """Binary column: ``binary`` when fixed, otherwise ``varbinary``.

    Example:
        Binary(fixed=True, precision=16, default="(UUID_TO_BIN(UUID()))")
            binary(16) NOT NULL DEFAULT (UUID_TO_BIN(UUID()))
    """

    fixed: bool = False
    precision: int = 0

    def render(self) -> str:
        sql = ("binary" if self.fixed else "varbinary") + _precision(self.precision)
        return sql + self._tail(self._raw_default())


@dataclass(frozen=True, init=False)
class RawType(ColumnType):
    """Column definition supplied verbatim by the caller.

    Example:
        RawType("point NOT NULL SRID 4326")
    """

    definition: str = ""

    def __init__(self, definition: str):
        object.__setattr__(self, "definition", definition)

    def render(self) -> str:
        return self.definition


@dataclass(frozen=True)
class Column:
    """A named column of a table."""

    field: str
    definition: ColumnType

    def render(self) -> str:
        return f"`{self.field}` {self.definition.render()}"


def render_columns(columns: Sequence[Column]) -> str:
    """Render column definitions as a comma separated list."""
    return ", ".join(column.render() for column in columns)
