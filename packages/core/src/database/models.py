"""Data models for statement classification and execution."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExecutionRequest:
    """A single request to run a SQL statement.

    The server keeps no session: the caller sends its current
    ``confirmation_level`` on every round trip for the same statement.

    Attributes:
        sql: The raw statement as submitted.
        analyst_mode: When true only read-only statements may run.
        confirmation_level: 0, 1 or 2 (see ``ConfirmationLevel``).
    """

    sql: str
    analyst_mode: bool = False
    confirmation_level: int = 0

    def __post_init__(self) -> None:
        if self.confirmation_level not in (0, 1, 2):
            raise ValueError(
                f"confirmation_level must be 0, 1 or 2, got {self.confirmation_level!r}"
            )


@dataclass(frozen=True)
class Classification:
    """Destructiveness and read-only status of a statement.

    Both flags may be false (``SET``, ``INSERT``...), which means the
    statement is allowed without a warning.
    """

    is_dangerous: bool
    is_read_only: bool


@dataclass(frozen=True)
class AffectedRows:
    """Result of a statement that returns no rows."""

    count: int
    last_row_id: int | None = None


@dataclass(frozen=True)
class ColumnInfo:
    """One column as reported by schema introspection."""

    name: str
    type: str
    key: str = ""
    not_null: bool = False
    default: str | None = None

    @property
    def is_primary_key(self) -> bool:
        return self.key == "PRI"

    def to_dict(self) -> dict:
        return {
            "field": self.name,
            "type": self.type,
            "key": self.key,
            "not_null": self.not_null,
            "default": self.default,
        }


@dataclass
class ExecutionResult:
    """Outcome of one authorized execution.

    Attributes:
        rows: Row mappings for statements that return rows, else None.
        affected_rows: Affected-row count for writes, else None.
        execution_time_ms: Wall-clock duration of the database call.
        is_modification: Whether the statement starts with a data or
            schema modifying keyword.
    """

    rows: list[dict] | None = None
    affected_rows: int | None = None
    execution_time_ms: int = 0
    is_modification: bool = False

    @property
    def row_count(self) -> int:
        """Number of returned rows, or the affected-row count for writes."""
        if self.rows is not None:
            return len(self.rows)
        return self.affected_rows or 0
