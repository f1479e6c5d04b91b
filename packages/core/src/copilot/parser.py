"""Extraction of SQL and explanation from free-form model output.

Models are asked for ``SQL: ...`` / ``EXPLANATION: ...`` but often wrap
the statement in a fenced block or backticks, or drop the label. The
statement is extracted by an ordered list of matchers; the first one
that yields a non-empty statement wins.
"""

import logging
import re
from dataclasses import dataclass

from copilot.errors import ParseError
from copilot.models import DEFAULT_EXPLANATION, GeneratedQuery

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```(?:sql)?[ \t]*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?```$")

_EXPLANATION = re.compile(
    r"EXPLANATION:\s*([^\n]+(?:\n(?!SQL:)[^\n]+)*)", re.IGNORECASE
)


def clean_sql(sql: str) -> str:
    """Strip leftover fence markers and backtick wrapping."""
    sql = sql.strip()
    sql = _LEADING_FENCE.sub("", sql)
    sql = _TRAILING_FENCE.sub("", sql)
    return sql.strip().strip("`").strip()


@dataclass(frozen=True)
class SQLMatcher:
    """One extraction strategy: a pattern whose first group is the SQL."""

    name: str
    pattern: re.Pattern

    def match(self, text: str) -> str | None:
        found = self.pattern.search(text)
        if not found:
            return None
        return clean_sql(found.group(1)) or None


# Tried in order; first non-empty match wins.
SQL_MATCHERS = [
    SQLMatcher(
        "labelled fenced block",
        re.compile(r"SQL:\s*```sql\s*([\s\S]*?)\s*```", re.IGNORECASE),
    ),
    SQLMatcher(
        "labelled backticks",
        re.compile(r"SQL:\s*`([^`]+)`", re.IGNORECASE),
    ),
    SQLMatcher(
        "labelled line",
        re.compile(r"SQL:\s*([^\n]+)", re.IGNORECASE),
    ),
    SQLMatcher(
        "bare fenced block",
        re.compile(r"```sql\s*([\s\S]*?)\s*```", re.IGNORECASE),
    ),
]


def extract_sql(text: str) -> str | None:
    """Return the first statement any matcher finds, or None."""
    for matcher in SQL_MATCHERS:
        sql = matcher.match(text)
        if sql:
            logger.debug("SQL extracted with matcher '%s'", matcher.name)
            return sql
    return None


def extract_explanation(text: str) -> str:
    """Return the labelled explanation, or a generic sentence."""
    found = _EXPLANATION.search(text)
    if found and found.group(1).strip():
        return found.group(1).strip()
    return DEFAULT_EXPLANATION


def parse_response(text: str) -> GeneratedQuery:
    """Turn a raw model response into a ``GeneratedQuery``.

    Raises:
        ParseError: If no matcher yields a non-empty statement.
    """
    logger.debug("Model response: %s", text)

    sql = extract_sql(text or "")
    if not sql:
        logger.warning("Could not extract SQL from model response")
        raise ParseError("Could not extract SQL from AI response")

    return GeneratedQuery(sql=sql, explanation=extract_explanation(text))
