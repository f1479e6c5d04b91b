"""Timing and result-shape reporting around a single execution."""

import logging
import time
from collections.abc import Sequence
from typing import Any, Protocol

from database.errors import SQLExecutionError
from database.models import AffectedRows, ExecutionResult
from database.validation import is_modification

logger = logging.getLogger(__name__)


class StatementExecutor(Protocol):
    """Anything that runs one SQL statement.

    Returns row dicts or an ``AffectedRows``; reports backend failures
    as ``RuntimeError``.
    """

    def execute(
        self, sql: str, params: Sequence[Any] = ()
    ) -> list[dict] | AffectedRows: ...


class ExecutionReporter:
    """Run an authorized statement once and describe what happened."""

    def __init__(self, executor: StatementExecutor) -> None:
        self._executor = executor

    def run(self, sql: str) -> ExecutionResult:
        """Execute ``sql`` and wrap the outcome in an ``ExecutionResult``.

        Only the executor call itself is timed. ``is_modification`` is
        derived from the leading keyword, independently of the dangerous
        classification that gated the call.

        Raises:
            SQLExecutionError: If the executor reports a failure.
        """
        start = time.perf_counter()
        try:
            outcome = self._executor.execute(sql)
        except RuntimeError as e:
            logger.info("Statement failed: %s", e)
            raise SQLExecutionError(str(e)) from e
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        result = ExecutionResult(
            execution_time_ms=elapsed_ms,
            is_modification=is_modification(sql),
        )
        if isinstance(outcome, AffectedRows):
            result.affected_rows = outcome.count
        else:
            result.rows = list(outcome)

        logger.info(
            "Executed statement in %dms (%d rows)", elapsed_ms, result.row_count
        )
        return result
