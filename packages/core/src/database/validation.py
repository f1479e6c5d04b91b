"""Statement classification and sanitization.

Pure predicates over raw SQL text. Nothing here parses SQL grammar: a
statement is judged only by keyword patterns, which is enough to decide
whether it needs confirmation or may run in analyst mode.
"""

import logging
import re

from database.errors import AnalystModeViolation, EmptyQueryError, MultiStatementError
from database.models import Classification

logger = logging.getLogger(__name__)

# Destructive clauses. Matched anywhere in the text so a clause after a
# comment or on a later line still counts.
DANGEROUS_PATTERNS = [
    re.compile(r"\bDROP\s+TABLE\b", re.IGNORECASE),
    re.compile(r"\bDROP\s+DATABASE\b", re.IGNORECASE),
    re.compile(r"\bTRUNCATE\b", re.IGNORECASE),
    re.compile(r"\bDELETE\s+FROM\b", re.IGNORECASE),
    re.compile(r"\bALTER\s+TABLE\b", re.IGNORECASE),
    re.compile(r"\bDROP\s+COLUMN\b", re.IGNORECASE),
    re.compile(r"\bDROP\s+INDEX\b", re.IGNORECASE),
]

# Leading keyword of statements that only read.
READ_ONLY_PATTERN = re.compile(r"^\s*(SELECT|SHOW|DESCRIBE|EXPLAIN)\b", re.IGNORECASE)

# Leading keyword of statements reported as modifications. Broader than
# the dangerous set: INSERT, UPDATE and CREATE are labelled but not gated.
MODIFICATION_PATTERN = re.compile(
    r"^\s*(INSERT|UPDATE|DELETE|CREATE|DROP|ALTER|TRUNCATE)\b", re.IGNORECASE
)

STATEMENT_TERMINATOR = ";"

ANALYST_MODE_MESSAGE = "Analyst mode only allows SELECT queries"


def is_dangerous(sql: str) -> bool:
    """Return True if the statement contains a destructive clause."""
    return any(pattern.search(sql or "") for pattern in DANGEROUS_PATTERNS)


def is_read_only(sql: str) -> bool:
    """Return True if the statement starts with a read-only keyword."""
    return READ_ONLY_PATTERN.match(sql or "") is not None


def is_modification(sql: str) -> bool:
    """Return True if the statement starts with a modifying keyword."""
    return MODIFICATION_PATTERN.match(sql or "") is not None


def classify(sql: str) -> Classification:
    return Classification(is_dangerous=is_dangerous(sql), is_read_only=is_read_only(sql))


def sanitize(sql: str) -> str:
    """Reduce the input to exactly one trimmed statement.

    Splits on the statement terminator and drops blank fragments. More
    than one remaining fragment means a batched payload.

    Args:
        sql: Raw SQL text, possibly ending with a terminator.

    Returns:
        The single statement, trimmed, without its terminator.

    Raises:
        EmptyQueryError: If nothing but whitespace and terminators remain.
        MultiStatementError: If more than one statement is present.
    """
    if not isinstance(sql, str):
        raise EmptyQueryError("SQL query is required")

    statements = [s.strip() for s in sql.split(STATEMENT_TERMINATOR) if s.strip()]

    if not statements:
        raise EmptyQueryError("SQL query is required")
    if len(statements) > 1:
        logger.warning("Rejected input with %d statements", len(statements))
        raise MultiStatementError("Multiple SQL statements are not allowed")

    return statements[0]


def enforce_analyst_mode(sql: str, analyst_mode: bool) -> None:
    """Reject any non read-only statement when analyst mode is on.

    Raises:
        AnalystModeViolation: Regardless of the confirmation level.
    """
    if analyst_mode and not is_read_only(sql):
        logger.warning("Analyst mode rejected statement: %.100s", sql)
        raise AnalystModeViolation(ANALYST_MODE_MESSAGE)
