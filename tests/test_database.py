"""
Tests against a real temporary SQLite database.
"""
import sqlite3
from dataclasses import fields

import pytest

from database.DatabaseProvider import DatabaseProvider
from database.ExecutionReporter import ExecutionReporter
from database.QueryExecutor import QueryExecutor
from database.QueryService import QueryService
from database.TableManager import (
    ColumnDefinition,
    ForeignKeyDefinition,
    TableDefinition,
    TableManager,
    build_create_table_sql,
)
from database.errors import InvalidTableDefinition, SQLExecutionError, UnknownTableError
from database.models import AffectedRows, ExecutionRequest, ExecutionResult

requires_returning = pytest.mark.skipif(
    sqlite3.sqlite_version_info < (3, 35, 0), reason="RETURNING needs SQLite 3.35"
)


class TestDatabaseProvider:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DatabaseProvider(str(tmp_path / "missing.sqlite"))

    def test_read_only_rejects_writes(self, sample_db):
        provider = DatabaseProvider(str(sample_db), read_only=True)
        try:
            executor = QueryExecutor(provider.get_connection())
            assert len(executor.execute("SELECT * FROM users")) == 3
            with pytest.raises(RuntimeError):
                executor.execute("DELETE FROM orders")
        finally:
            provider.close()

    def test_foreign_keys_enforced(self, executor):
        with pytest.raises(RuntimeError):
            executor.execute(
                "INSERT INTO orders (user_id, product_id, quantity, ordered_at) "
                "VALUES (99, 1, 1, '2024-02-01')"
            )


class TestQueryExecutor:

    def test_select_returns_dicts(self, executor):
        rows = executor.execute("SELECT id, name FROM users WHERE country = ? ORDER BY id", ("GB",))
        assert rows == [{"id": 1, "name": "Ada Lovelace"}, {"id": 2, "name": "Alan Turing"}]

    def test_write_returns_affected_rows(self, executor):
        result = executor.execute("UPDATE products SET stock = stock + 1")
        assert result == AffectedRows(count=2, last_row_id=result.last_row_id)

    def test_insert_reports_row_id(self, executor):
        result = executor.execute(
            "INSERT INTO users (name, email) VALUES ('Linus', 'linus@example.com')"
        )
        assert result.count == 1
        assert result.last_row_id == 4

    def test_failed_statement_is_rolled_back(self, executor):
        with pytest.raises(RuntimeError, match="UNIQUE"):
            executor.execute("INSERT INTO users (name, email) VALUES ('Dup', 'ada@example.com')")
        assert len(executor.execute("SELECT * FROM users")) == 3


class TestExecutionReporter:

    def test_rows_result(self, executor):
        result = ExecutionReporter(executor).run("SELECT * FROM orders")
        assert result.rows is not None
        assert result.row_count == 3
        assert result.affected_rows is None
        assert result.execution_time_ms >= 0
        assert result.is_modification is False

    def test_affected_result(self, executor):
        result = ExecutionReporter(executor).run("UPDATE orders SET status = 'cancelled'")
        assert result.rows is None
        assert result.affected_rows == 3
        assert result.is_modification is True

    def test_result_shape(self, executor):
        result = ExecutionReporter(executor).run(
            "INSERT INTO users (name, email) VALUES ('Linus', 'linus@example.com')"
        )
        assert result.affected_rows == 1
        assert result.is_modification is True
        assert [f.name for f in fields(result)] == [
            "rows", "affected_rows", "execution_time_ms", "is_modification",
        ]

    def test_failure(self, executor):
        with pytest.raises(SQLExecutionError) as exc_info:
            ExecutionReporter(executor).run("SELECT * FROM missing_table")
        assert "no such table" in exc_info.value.message


class TestEndToEnd:

    def test_confirmed_delete_removes_rows(self, executor):
        service = QueryService(executor)

        for level in (0, 1):
            service.execute(ExecutionRequest("DELETE FROM orders", confirmation_level=level))
        assert len(executor.execute("SELECT * FROM orders")) == 3

        result = service.execute(ExecutionRequest("DELETE FROM orders", confirmation_level=2))

        assert isinstance(result, ExecutionResult)
        assert result.affected_rows == 3
        assert executor.execute("SELECT * FROM orders") == []

    @requires_returning
    def test_confirmed_delete_returning_is_committed(self, executor, sample_db):
        service = QueryService(executor)

        result = service.execute(
            ExecutionRequest("DELETE FROM orders RETURNING id", confirmation_level=2)
        )

        assert sorted(row["id"] for row in result.rows) == [1, 2, 3]
        assert result.is_modification is True

        other = sqlite3.connect(str(sample_db), timeout=0)
        try:
            assert other.execute("SELECT COUNT(*) FROM orders").fetchone()[0] == 0
            other.execute("UPDATE products SET stock = 0")
            other.commit()
        finally:
            other.close()

    @requires_returning
    def test_insert_returning_is_committed(self, executor, sample_db):
        rows = executor.execute(
            "INSERT INTO users (name, email) VALUES ('Linus', 'linus@example.com') RETURNING id"
        )
        assert rows == [{"id": 4}]

        other = sqlite3.connect(str(sample_db), timeout=0)
        try:
            assert other.execute("SELECT COUNT(*) FROM users").fetchone()[0] == 4
        finally:
            other.close()

    def test_analyze_returns_plan(self, executor):
        plan = QueryService(executor).analyze("SELECT * FROM orders WHERE user_id = 1")
        assert plan
        assert "detail" in plan[0]


class TestSchemaProvider:

    def test_list_tables(self, schema):
        assert schema.list_tables() == ["orders", "products", "users"]

    def test_describe_table(self, schema):
        columns = {column.name: column for column in schema.describe_table("users")}
        assert columns["id"].is_primary_key
        assert columns["email"].not_null
        assert columns["country"].type == "TEXT"
        assert not columns["name"].is_primary_key

    def test_unknown_table(self, schema):
        with pytest.raises(UnknownTableError):
            schema.describe_table("invoices")

    def test_foreign_keys(self, schema):
        keys = schema.foreign_keys("orders")
        assert {"column": "user_id", "referenced_table": "users", "referenced_column": "id"} in keys

    def test_get_schema(self, schema):
        result = schema.get_schema()
        assert set(result) == {"orders", "products", "users"}
        assert result["users"][0]["field"] == "id"
        assert result["users"][0]["key"] == "PRI"

    def test_schema_context(self, schema):
        context = schema.build_schema_context()
        assert context.startswith("Available tables:\n")
        assert "\nusers:\n" in context
        assert "  - id (INTEGER) PRIMARY KEY\n" in context
        assert "  - email (TEXT)\n" in context

    def test_schema_context_for_subset(self, schema):
        context = schema.build_schema_context(["products"])
        assert "products:" in context
        assert "users:" not in context

    def test_table_data_pagination(self, schema):
        page = schema.get_table_data("users", page=2, limit=2)
        assert [row["id"] for row in page["rows"]] == [3]
        assert page["pagination"] == {"total": 3, "page": 2, "limit": 2, "total_pages": 2}

    def test_empty_table_data(self, schema, executor):
        executor.execute("DELETE FROM orders")
        page = schema.get_table_data("orders")
        assert page["rows"] == []
        assert page["pagination"]["total_pages"] == 0


class TestTableManager:

    def test_build_create_table_sql(self):
        definition = TableDefinition(
            name="reviews",
            columns=[
                ColumnDefinition("id", "integer", primary_key=True, auto_increment=True),
                ColumnDefinition("user_id", "INTEGER", not_null=True),
                ColumnDefinition("body", "TEXT", default="n/a"),
                ColumnDefinition("rating", "INTEGER", default="5"),
            ],
            foreign_keys=[ForeignKeyDefinition("user_id", "users", "id")],
        )
        assert build_create_table_sql(definition) == (
            "CREATE TABLE reviews ("
            "id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "user_id INTEGER NOT NULL, "
            "body TEXT DEFAULT 'n/a', "
            "rating INTEGER DEFAULT 5, "
            "FOREIGN KEY (user_id) REFERENCES users(id))"
        )

    @pytest.mark.parametrize(
        "definition",
        [
            TableDefinition("t", []),
            TableDefinition("bad name", [ColumnDefinition("id", "INTEGER")]),
            TableDefinition("t", [ColumnDefinition("id;--", "INTEGER")]),
            TableDefinition("t", [ColumnDefinition("id", "INTEGER); DROP TABLE users")]),
        ],
    )
    def test_invalid_definitions(self, definition):
        with pytest.raises(InvalidTableDefinition):
            build_create_table_sql(definition)

    def test_create_and_insert(self, executor, schema):
        manager = TableManager(executor, schema)
        manager.create_table(
            TableDefinition(
                "notes",
                [
                    ColumnDefinition("id", "INTEGER", primary_key=True, auto_increment=True),
                    ColumnDefinition("text", "TEXT", not_null=True),
                ],
            )
        )
        assert "notes" in schema.list_tables()

        row_id = manager.insert_row("notes", {"text": "hello"})

        assert row_id == 1
        assert executor.execute("SELECT text FROM notes") == [{"text": "hello"}]

    def test_create_existing_table(self, executor, schema):
        manager = TableManager(executor, schema)
        with pytest.raises(SQLExecutionError):
            manager.create_table(TableDefinition("users", [ColumnDefinition("id", "INTEGER")]))

    def test_insert_unknown_column(self, executor, schema):
        with pytest.raises(InvalidTableDefinition):
            TableManager(executor, schema).insert_row("users", {"nickname": "x"})

    def test_insert_unknown_table(self, executor, schema):
        with pytest.raises(UnknownTableError):
            TableManager(executor, schema).insert_row("invoices", {"id": 1})

    def test_insert_empty_data(self, executor, schema):
        with pytest.raises(InvalidTableDefinition):
            TableManager(executor, schema).insert_row("users", {})
