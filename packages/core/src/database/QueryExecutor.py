"""SQLite statement executor.

Runs exactly one already-vetted statement and hands back either the
returned rows or the affected-row count. Safety decisions are made
upstream (see ``validation`` and ``ConfirmationGate``); this class only
talks to the driver.
"""

import sqlite3
import threading
from collections.abc import Sequence
from typing import Any

from database.models import AffectedRows


class QueryExecutor:
    """Executes single SQL statements against an SQLite connection.

    Writes are committed immediately; a failing statement is rolled back
    and never retried, since it may not be idempotent.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._lock = threading.Lock()

    def execute(
        self, sql: str, params: Sequence[Any] = ()
    ) -> list[dict] | AffectedRows:
        """Execute a statement and return its result.

        Args:
            sql: A single SQL statement.
            params: Values bound to ``?`` placeholders.

        Returns:
            A list of row dicts when the statement produces a result set,
            otherwise an ``AffectedRows`` with the modified-row count.

        Raises:
            RuntimeError: If the database returns an error. The message is
                the driver's own.
        """
        with self._lock:
            cursor = self._connection.cursor()
            try:
                cursor.execute(sql, params)
                if cursor.description is not None:
                    columns = [col[0] for col in cursor.description]
                    rows = [dict(zip(columns, row)) for row in cursor.fetchall()]
                    # Writes with RETURNING also produce rows
                    if self._connection.in_transaction:
                        self._connection.commit()
                    return rows

                self._connection.commit()
                # rowcount is -1 for DDL statements
                return AffectedRows(
                    count=max(cursor.rowcount, 0), last_row_id=cursor.lastrowid
                )
            except sqlite3.Error as e:
                self._connection.rollback()
                raise RuntimeError(str(e)) from e
            finally:
                cursor.close()
