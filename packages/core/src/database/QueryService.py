"""Execution pipeline: sanitize, check analyst mode, confirm, execute.

Every submission runs the same steps in the same order, and nothing is
executed until all of them pass:

1. ``sanitize`` reduces the input to one statement (or rejects it).
2. ``enforce_analyst_mode`` rejects writes when analyst mode is on.
3. ``ConfirmationGate`` holds dangerous statements until level 2.
4. ``ExecutionReporter`` runs the statement once and times it.
"""

import logging
from dataclasses import dataclass

from database.ConfirmationGate import ConfirmationGate, ConfirmationOutcome
from database.ExecutionReporter import ExecutionReporter, StatementExecutor
from database.errors import SQLExecutionError
from database.models import AffectedRows, ExecutionRequest, ExecutionResult
from database.validation import classify, enforce_analyst_mode, sanitize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedStatement:
    """A sanitized statement together with its confirmation outcome."""

    sql: str
    outcome: ConfirmationOutcome

    @property
    def authorized(self) -> bool:
        return self.outcome.authorized


class QueryService:
    """Top-level execute-SQL flow used by the API and the CLI."""

    def __init__(
        self,
        executor: StatementExecutor,
        gate: ConfirmationGate | None = None,
    ) -> None:
        self._executor = executor
        self._reporter = ExecutionReporter(executor)
        self._gate = gate or ConfirmationGate()

    def prepare_execution(self, request: ExecutionRequest) -> PreparedStatement:
        """Decide whether ``request`` may run now.

        Has no side effects: the same request always yields the same
        outcome.

        Raises:
            EmptyQueryError: If no statement was supplied.
            MultiStatementError: If the input holds several statements.
            AnalystModeViolation: If analyst mode forbids the statement.
        """
        sql = sanitize(request.sql)
        enforce_analyst_mode(sql, request.analyst_mode)
        outcome = self._gate.evaluate(classify(sql), request.confirmation_level)
        return PreparedStatement(sql=sql, outcome=outcome)

    def execute_authorized(self, sql: str) -> ExecutionResult:
        """Run a statement that has already passed ``prepare_execution``.

        Raises:
            SQLExecutionError: If the database reports a failure.
        """
        return self._reporter.run(sql)

    def execute(
        self, request: ExecutionRequest
    ) -> ExecutionResult | ConfirmationOutcome:
        """Prepare ``request`` and run it if authorized.

        Returns:
            The ``ExecutionResult`` when the statement ran, or the
            ``ConfirmationOutcome`` carrying the next required level and
            its warning when it did not.
        """
        prepared = self.prepare_execution(request)
        if not prepared.authorized:
            return prepared.outcome

        if prepared.outcome.is_dangerous:
            logger.info("Executing confirmed dangerous statement: %.100s", prepared.sql)
        return self.execute_authorized(prepared.sql)

    def analyze(self, sql: str) -> list[dict]:
        """Return the query plan for ``sql`` without executing it.

        Raises:
            MultiStatementError: If the input holds several statements.
            SQLExecutionError: If SQLite cannot plan the statement.
        """
        statement = sanitize(sql)
        try:
            plan = self._executor.execute(f"EXPLAIN QUERY PLAN {statement}")
        except RuntimeError as e:
            raise SQLExecutionError(str(e)) from e
        if isinstance(plan, AffectedRows):
            return []
        return plan
