"""Data models for SQL generation requests and results."""

from dataclasses import dataclass

DEFAULT_EXPLANATION = "This query will retrieve data from the database."


@dataclass(frozen=True)
class GenerationRequest:
    """A natural-language request for a SQL statement.

    Attributes:
        natural_language: What the user asked for.
        previous_query: SQL from an earlier turn, shown to the model as
            context only.
        feedback: Extra guidance appended to the request when the user
            asks for a regeneration.
    """

    natural_language: str
    previous_query: str | None = None
    feedback: str | None = None

    def __post_init__(self) -> None:
        if not self.natural_language or not self.natural_language.strip():
            raise ValueError("Natural language query is required")


@dataclass(frozen=True)
class GeneratedQuery:
    """A statement and its explanation.

    ``sql`` is None when nothing could be generated; callers must treat
    that as a failure, not as an empty statement.
    """

    sql: str | None
    explanation: str = DEFAULT_EXPLANATION
    is_fallback: bool = False
