"""Errors raised by the statement safety and execution pipeline.

Each error carries the HTTP status the API layer should answer with.
Confirmation warnings are not errors and never appear here.
"""


class QueryError(Exception):
    """Base class for all statement pipeline errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EmptyQueryError(QueryError):
    """No SQL was supplied."""

    status_code = 400


class MultiStatementError(QueryError):
    """The input held more than one statement."""

    status_code = 400


class AnalystModeViolation(QueryError):
    """A non read-only statement was submitted in analyst mode."""

    status_code = 403


class SQLExecutionError(QueryError):
    """The database rejected or failed to run the statement.

    The message is the backend's own, so callers can tell an invalid
    query apart from an internal failure.
    """

    status_code = 500


class UnknownTableError(QueryError):
    """A table name did not match any table in the database."""

    status_code = 404


class InvalidTableDefinition(QueryError):
    """A create-table or insert payload could not be turned into SQL."""

    status_code = 400
