"""Schema introspection for SQLite.

Lists tables, describes their columns and renders the plain-text schema
block that is sent to the model as context.
"""

import math

from database.ExecutionReporter import StatementExecutor
from database.errors import SQLExecutionError, UnknownTableError
from database.models import AffectedRows, ColumnInfo


def quote_identifier(name: str) -> str:
    """Quote ``name`` for use as an SQLite identifier."""
    return '"' + name.replace('"', '""') + '"'


class SchemaProvider:
    """Read table and column metadata through a statement executor."""

    def __init__(self, executor: StatementExecutor) -> None:
        self._executor = executor

    def _query(self, sql: str, params: tuple = ()) -> list[dict]:
        try:
            result = self._executor.execute(sql, params)
        except RuntimeError as e:
            raise SQLExecutionError(str(e)) from e
        return [] if isinstance(result, AffectedRows) else result

    def list_tables(self) -> list[str]:
        """Return user table names in alphabetical order."""
        rows = self._query(
            "SELECT name FROM sqlite_master "
            "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )
        return [row["name"] for row in rows]

    def require_table(self, name: str) -> str:
        """Return ``name`` if it is an existing table.

        Raises:
            UnknownTableError: If no such table exists.
        """
        if name not in self.list_tables():
            raise UnknownTableError(f"Table '{name}' does not exist")
        return name

    def describe_table(self, name: str) -> list[ColumnInfo]:
        """Return the columns of ``name`` in declaration order."""
        self.require_table(name)
        rows = self._query(f"PRAGMA table_info({quote_identifier(name)})")
        return [
            ColumnInfo(
                name=row["name"],
                type=row["type"],
                key="PRI" if row["pk"] else "",
                not_null=bool(row["notnull"]),
                default=row["dflt_value"],
            )
            for row in rows
        ]

    def foreign_keys(self, name: str) -> list[dict]:
        self.require_table(name)
        rows = self._query(f"PRAGMA foreign_key_list({quote_identifier(name)})")
        return [
            {
                "column": row["from"],
                "referenced_table": row["table"],
                "referenced_column": row["to"],
            }
            for row in rows
        ]

    def get_schema(self) -> dict[str, list[dict]]:
        """Return every table mapped to its column descriptions."""
        return {
            table: [column.to_dict() for column in self.describe_table(table)]
            for table in self.list_tables()
        }

    def build_schema_context(self, tables: list[str] | None = None) -> str:
        """Render the schema as the text block used in prompts.

        Args:
            tables: Table names to include; all tables when omitted.
        """
        context = "Available tables:\n"
        for table in self.list_tables() if tables is None else tables:
            context += f"\n{table}:\n"
            for column in self.describe_table(table):
                suffix = " PRIMARY KEY" if column.is_primary_key else ""
                context += f"  - {column.name} ({column.type}){suffix}\n"
        return context

    def get_table_data(self, name: str, page: int = 1, limit: int = 50) -> dict:
        """Return one page of rows from ``name`` with pagination metadata."""
        self.require_table(name)
        page = max(page, 1)
        limit = max(limit, 1)
        table = quote_identifier(name)

        total = self._query(f"SELECT COUNT(*) AS total FROM {table}")[0]["total"]
        rows = self._query(
            f"SELECT * FROM {table} LIMIT ? OFFSET ?", (limit, (page - 1) * limit)
        )
        return {
            "rows": rows,
            "pagination": {
                "total": total,
                "page": page,
                "limit": limit,
                "total_pages": math.ceil(total / limit),
            },
        }
