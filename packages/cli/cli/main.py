"""Interactive command-line interface for SQL Copilot."""

from copilot.LLMClient import OpenAIClient
from copilot.SQLGenerator import SQLGenerator
from copilot.errors import GenerationFailedError
from copilot.models import GenerationRequest
from copilot.settings import Settings, configure_logging
from database.ConfirmationGate import ConfirmationLevel, ConfirmationOutcome
from database.DatabaseProvider import DatabaseProvider
from database.QueryExecutor import QueryExecutor
from database.QueryService import QueryService
from database.SchemaProvider import SchemaProvider
from database.errors import QueryError
from database.models import ExecutionRequest, ExecutionResult

MAX_PRINTED_ROWS = 20

HELP = """\
Type a question in plain English, or:
  :sql <statement>   run a SQL statement directly
  :analyst           toggle analyst mode (read-only statements only)
  :tables            list tables
  quit / exit        leave"""


def _confirm(prompt: str) -> bool:
    try:
        return input(f"{prompt} [y/N]: ").strip().lower() in ("y", "yes")
    except (KeyboardInterrupt, EOFError):
        return False


def print_result(result: ExecutionResult) -> None:
    """Print rows (up to a cap) or the affected-row count."""
    if result.rows is not None:
        for row in result.rows[:MAX_PRINTED_ROWS]:
            print("  " + " | ".join(f"{k}={v}" for k, v in row.items()))
        if result.row_count > MAX_PRINTED_ROWS:
            print(f"  ... {result.row_count - MAX_PRINTED_ROWS} more rows")
        print(f"{result.row_count} rows in {result.execution_time_ms}ms")
    else:
        print(f"{result.affected_rows} rows affected in {result.execution_time_ms}ms")
    if result.is_modification:
        print("(data was modified)")


def run_statement(service: QueryService, sql: str, analyst_mode: bool) -> None:
    """Execute ``sql``, walking the user through any confirmation rounds."""
    level = ConfirmationLevel.UNCONFIRMED
    while True:
        try:
            outcome = service.execute(
                ExecutionRequest(sql=sql, analyst_mode=analyst_mode, confirmation_level=level)
            )
        except QueryError as e:
            print(f"Error: {e.message}")
            return

        if isinstance(outcome, ConfirmationOutcome):
            print(f"\n{outcome.warning}")
            if not _confirm("Continue?"):
                print("Cancelled.")
                return
            level = outcome.next_level
            continue

        print_result(outcome)
        return


def main():
    """Run the interactive REPL.

    Loads environment configuration, opens the database and builds the
    generator and execution services, then reads requests until the user
    quits.
    """
    settings = Settings.from_env()
    configure_logging("WARNING")

    db_provider = DatabaseProvider(settings.db_path, read_only=settings.db_read_only)
    executor = QueryExecutor(db_provider.get_connection())
    schema = SchemaProvider(executor)
    service = QueryService(executor)
    generator = SQLGenerator(
        schema,
        OpenAIClient(
            settings.openai_api_key,
            model=settings.openai_model,
            max_prompt_tokens=settings.max_prompt_tokens,
        ),
    )

    print("SQL Copilot (type 'quit' or 'exit' to stop, ':help' for commands)")
    print("-" * 48)

    analyst_mode = False
    previous_query = None

    while True:
        try:
            user_input = input("\nYou: ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            break

        if not user_input:
            continue
        if user_input.lower() in ("quit", "exit"):
            print("Goodbye!")
            break
        if user_input == ":help":
            print(HELP)
            continue
        if user_input == ":analyst":
            analyst_mode = not analyst_mode
            print(f"Analyst mode {'on' if analyst_mode else 'off'}")
            continue
        if user_input == ":tables":
            print(", ".join(schema.list_tables()) or "(no tables)")
            continue
        if user_input.startswith(":sql "):
            run_statement(service, user_input[5:], analyst_mode)
            continue

        print("\nThinking...")
        try:
            generated = generator.generate(
                GenerationRequest(natural_language=user_input, previous_query=previous_query)
            )
        except GenerationFailedError as e:
            print(f"\n{e.message}")
            continue

        label = "Generated SQL (fallback)" if generated.is_fallback else "Generated SQL"
        print(f"\n{label}: {generated.sql}")
        print(f"Explanation: {generated.explanation}")
        previous_query = generated.sql

        if _confirm("Execute?"):
            run_statement(service, generated.sql, analyst_mode)

    db_provider.close()


if __name__ == "__main__":
    main()
