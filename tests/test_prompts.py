"""
Tests for prompt assembly.
"""
from copilot.prompts import apply_feedback, build_prompt

SCHEMA = "Available tables:\n\nusers:\n  - id (INTEGER) PRIMARY KEY\n"


def test_contains_response_format_contract():
    prompt = build_prompt("list users", SCHEMA)
    assert "SQL: <the sqlite query>" in prompt
    assert "EXPLANATION: <one line explanation" in prompt
    assert "SQLite" in prompt


def test_schema_included_verbatim():
    assert SCHEMA in build_prompt("list users", SCHEMA)


def test_question_comes_last():
    prompt = build_prompt("list users", SCHEMA, previous_query="SELECT 1")
    assert prompt.index("USER QUESTION: list users") > prompt.index("PREVIOUS QUERY FOR CONTEXT")
    assert prompt.index("USER QUESTION: list users") > prompt.index(SCHEMA)


def test_previous_query_only_when_present():
    assert "PREVIOUS QUERY" not in build_prompt("list users", SCHEMA)
    prompt = build_prompt("now only GB", SCHEMA, previous_query="SELECT * FROM users")
    assert "PREVIOUS QUERY FOR CONTEXT:\nSELECT * FROM users" in prompt


def test_apply_feedback():
    assert apply_feedback("list users", "only active ones") == "list users\nUser feedback: only active ones"


def test_apply_feedback_without_feedback():
    assert apply_feedback("list users", None) == "list users"
    assert apply_feedback("list users", "") == "list users"
