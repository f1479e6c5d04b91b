"""SQLite database connection provider.

Opens the database file the statement pipeline runs against. The
connection is read-write by default because confirmed destructive
statements must be able to run; ``read_only=True`` restores a
driver-level ``?mode=ro`` guard for deployments that only query.
"""

import sqlite3
from pathlib import Path


class DatabaseProvider:
    """Manage a single SQLite connection shared by the services."""

    def __init__(self, db_path: str, read_only: bool = False) -> None:
        """Open a connection to the given database file.

        Args:
            db_path: Filesystem path to the SQLite database.
            read_only: Open the file with ``mode=ro`` so every write is
                rejected by the driver.

        Raises:
            FileNotFoundError: If the path cannot be resolved.
            ConnectionError: If SQLite cannot open the file.
        """
        try:
            resolved = Path(db_path).resolve(strict=True)
        except OSError as e:
            raise FileNotFoundError(
                f"Could not resolve database path '{db_path}': {e}"
            ) from e

        mode = "ro" if read_only else "rw"
        try:
            # The executor serializes access, so the connection may be
            # used from the server's worker threads.
            self._connection = sqlite3.connect(
                f"file:{resolved}?mode={mode}", uri=True, check_same_thread=False
            )
            self._connection.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as e:
            raise ConnectionError(
                f"Failed to connect to database at '{resolved}': {e}"
            ) from e

        self.path = resolved
        self.read_only = read_only

    def get_connection(self) -> sqlite3.Connection:
        """Return the underlying SQLite connection."""
        return self._connection

    def close(self) -> None:
        self._connection.close()
