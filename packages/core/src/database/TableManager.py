"""Create tables and insert rows from structured definitions."""

import logging
import re
from dataclasses import dataclass, field

from database.ExecutionReporter import StatementExecutor
from database.SchemaProvider import SchemaProvider, quote_identifier
from database.errors import InvalidTableDefinition, SQLExecutionError

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_COLUMN_TYPE = re.compile(r"^[A-Za-z]+( [A-Za-z]+)?(\(\s*\d+\s*(,\s*\d+\s*)?\))?$")
_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")
_DEFAULT_KEYWORDS = {"NULL", "CURRENT_TIMESTAMP", "CURRENT_DATE", "CURRENT_TIME", "TRUE", "FALSE"}


@dataclass
class ColumnDefinition:
    name: str
    type: str
    primary_key: bool = False
    auto_increment: bool = False
    not_null: bool = False
    unique: bool = False
    default: str | None = None


@dataclass
class ForeignKeyDefinition:
    column: str
    reference_table: str
    reference_column: str


@dataclass
class TableDefinition:
    name: str
    columns: list[ColumnDefinition]
    foreign_keys: list[ForeignKeyDefinition] = field(default_factory=list)


def _identifier(name: str) -> str:
    if not name or not _IDENTIFIER.match(name):
        raise InvalidTableDefinition(f"Invalid identifier: '{name}'")
    return name


def _default_literal(value: str) -> str:
    if _NUMBER.match(value) or value.upper() in _DEFAULT_KEYWORDS:
        return value
    return "'" + value.replace("'", "''") + "'"


def build_create_table_sql(definition: TableDefinition) -> str:
    """Render a ``CREATE TABLE`` statement for ``definition``.

    Raises:
        InvalidTableDefinition: On an empty column list or any name or
            type that is not a plain identifier.
    """
    if not definition.columns:
        raise InvalidTableDefinition("Table name and columns are required")

    parts = []
    for col in definition.columns:
        if not _COLUMN_TYPE.match(col.type.strip()):
            raise InvalidTableDefinition(f"Invalid column type: '{col.type}'")
        part = f"{_identifier(col.name)} {col.type.strip().upper()}"
        if col.primary_key:
            part += " PRIMARY KEY"
        if col.auto_increment:
            part += " AUTOINCREMENT"
        if col.not_null:
            part += " NOT NULL"
        if col.unique:
            part += " UNIQUE"
        if col.default not in (None, ""):
            part += f" DEFAULT {_default_literal(col.default)}"
        parts.append(part)

    for fk in definition.foreign_keys:
        parts.append(
            f"FOREIGN KEY ({_identifier(fk.column)}) "
            f"REFERENCES {_identifier(fk.reference_table)}({_identifier(fk.reference_column)})"
        )

    return f"CREATE TABLE {_identifier(definition.name)} ({', '.join(parts)})"


class TableManager:
    """Structured DDL and inserts, bypassing free-form SQL."""

    def __init__(self, executor: StatementExecutor, schema: SchemaProvider) -> None:
        self._executor = executor
        self._schema = schema

    def create_table(self, definition: TableDefinition) -> str:
        """Create the table and return the statement that was run."""
        sql = build_create_table_sql(definition)
        try:
            self._executor.execute(sql)
        except RuntimeError as e:
            raise SQLExecutionError(str(e)) from e
        logger.info("Created table %s", definition.name)
        return sql

    def insert_row(self, table: str, data: dict) -> int | None:
        """Insert one row and return its row id.

        Raises:
            UnknownTableError: If ``table`` does not exist.
            InvalidTableDefinition: If ``data`` is empty or names a column
                the table does not have.
        """
        if not data:
            raise InvalidTableDefinition("Table name and data are required")

        known = {column.name for column in self._schema.describe_table(table)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidTableDefinition(
                f"Unknown columns for table '{table}': {', '.join(unknown)}"
            )

        columns = ", ".join(quote_identifier(name) for name in data)
        placeholders = ", ".join("?" for _ in data)
        sql = f"INSERT INTO {quote_identifier(table)} ({columns}) VALUES ({placeholders})"
        try:
            result = self._executor.execute(sql, tuple(data.values()))
        except RuntimeError as e:
            raise SQLExecutionError(str(e)) from e
        return getattr(result, "last_row_id", None)
