"""
Pytest configuration and shared fixtures.
"""
import sqlite3

import pytest

from database.DatabaseProvider import DatabaseProvider
from database.QueryExecutor import QueryExecutor
from database.SchemaProvider import SchemaProvider
from database.models import AffectedRows
from database.schema import SCHEMA_SQL


@pytest.fixture
def sample_db(tmp_path):
    """
    Create a temporary shop database with a few rows per table.
    """
    db_path = tmp_path / "shop.sqlite"
    conn = sqlite3.connect(str(db_path))
    conn.executescript(SCHEMA_SQL)

    conn.executemany(
        "INSERT INTO users (name, email, country) VALUES (?, ?, ?)",
        [
            ("Ada Lovelace", "ada@example.com", "GB"),
            ("Alan Turing", "alan@example.com", "GB"),
            ("Grace Hopper", "grace@example.com", "US"),
        ],
    )
    conn.executemany(
        "INSERT INTO products (name, category, price, stock) VALUES (?, ?, ?, ?)",
        [
            ("Keyboard", "Peripherals", 89.99, 10),
            ("Monitor", "Displays", 229.00, 3),
        ],
    )
    conn.executemany(
        "INSERT INTO orders (user_id, product_id, quantity, status, ordered_at) "
        "VALUES (?, ?, ?, ?, ?)",
        [
            (1, 1, 1, "shipped", "2024-01-10 10:00:00"),
            (1, 2, 2, "pending", "2024-01-11 12:30:00"),
            (3, 1, 1, "delivered", "2024-01-12 09:15:00"),
        ],
    )
    conn.commit()
    conn.close()
    return db_path


@pytest.fixture
def db_provider(sample_db):
    provider = DatabaseProvider(str(sample_db))
    yield provider
    provider.close()


@pytest.fixture
def executor(db_provider):
    return QueryExecutor(db_provider.get_connection())


@pytest.fixture
def schema(executor):
    return SchemaProvider(executor)


class RecordingExecutor:
    """Statement executor that records calls instead of touching a database."""

    def __init__(self, result=None, error=None):
        self.result = [] if result is None else result
        self.error = error
        self.calls = []

    def execute(self, sql, params=()):
        self.calls.append(sql)
        if self.error is not None:
            raise self.error
        return self.result


class ScriptedLLM:
    """Generative text client returning a fixed response (or raising)."""

    def __init__(self, response="", error=None):
        self.response = response
        self.error = error
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


class StaticSchema:
    """Schema source with a fixed table list."""

    def __init__(self, tables=("users", "orders"), error=None):
        self.tables = list(tables)
        self.error = error
        self.list_calls = 0

    def list_tables(self):
        self.list_calls += 1
        if self.error is not None:
            raise self.error
        return self.tables

    def build_schema_context(self, tables=None):
        names = self.tables if tables is None else tables
        return "Available tables:\n" + "".join(f"\n{name}:\n  - id (INTEGER) PRIMARY KEY\n" for name in names)


@pytest.fixture
def recording_executor():
    return RecordingExecutor(result=AffectedRows(count=1))
