"""Prompts for the SQL Copilot generator.

The model is asked to answer in a fixed two-line shape so the response
parser can pull the statement and explanation back out:

    SQL: <statement>
    EXPLANATION: <one line>
"""


def get_instructions() -> str:
    """Return the fixed instruction preamble for SQL generation."""
    return (
        "You are an expert SQLite query generator. "
        "Your task is to convert natural language questions into valid SQLite queries.\n\n"
    )


def get_format_rules() -> str:
    """Return the rules block, including the required response shape."""
    return (
        "IMPORTANT INSTRUCTIONS:\n"
        "1. Generate ONLY valid SQLite syntax\n"
        "2. Use proper JOIN syntax when joining tables\n"
        "3. Use table aliases for better readability\n"
        "4. Always include a semicolon at the end of the query\n"
        "5. For aggregate functions, use proper GROUP BY clauses\n"
        "6. Generate exactly one statement\n"
        "7. RESPOND IN THIS EXACT FORMAT (no extra text):\n\n"
        "SQL: <the sqlite query>\n"
        "EXPLANATION: <one line explanation of what the query does>\n\n"
    )


def apply_feedback(natural_language: str, feedback: str | None) -> str:
    """Append user feedback to the request as a labelled addendum."""
    if not feedback:
        return natural_language
    return f"{natural_language}\nUser feedback: {feedback}"


def build_prompt(
    natural_language: str,
    schema_context: str,
    previous_query: str | None = None,
) -> str:
    """Assemble the full prompt sent to the generative text service.

    Args:
        natural_language: The user's request, already feedback-augmented.
        schema_context: Schema text block, included verbatim.
        previous_query: Optional earlier SQL shown for context.
    """
    prompt = get_instructions()
    prompt += f"DATABASE SCHEMA:\n{schema_context}\n\n"
    prompt += get_format_rules()

    if previous_query:
        prompt += f"PREVIOUS QUERY FOR CONTEXT:\n{previous_query}\n\n"

    prompt += f"USER QUESTION: {natural_language}\n\n"
    prompt += "Now generate the SQLite query and explanation:"
    return prompt
