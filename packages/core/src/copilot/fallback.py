"""Rule-based SQL generation used when the model path fails.

A deliberately narrow safety net: it only understands "show all <table>"
and "get all <table>" requests.
"""

from copilot.models import GeneratedQuery

FALLBACK_ROW_LIMIT = 100

TRIGGER_PHRASES = ("show all", "get all")

NO_RESULT_EXPLANATION = (
    "Could not generate SQL query. Please try rephrasing your request."
)


def generate_fallback(natural_language: str, tables: list[str]) -> GeneratedQuery:
    """Build a full-table SELECT if the request names a known table.

    Args:
        natural_language: The user's request.
        tables: Known table names, checked in order.

    Returns:
        A fallback ``GeneratedQuery``; its ``sql`` is None when no rule
        applies.
    """
    lower_query = (natural_language or "").lower()

    if any(phrase in lower_query for phrase in TRIGGER_PHRASES):
        table = next((t for t in tables if t.lower() in lower_query), None)
        if table:
            return GeneratedQuery(
                sql=f"SELECT * FROM {table} LIMIT {FALLBACK_ROW_LIMIT};",
                explanation=(
                    f"This will retrieve all records from the {table} table "
                    f"(limited to {FALLBACK_ROW_LIMIT} rows)."
                ),
                is_fallback=True,
            )

    return GeneratedQuery(sql=None, explanation=NO_RESULT_EXPLANATION, is_fallback=True)
