"""Multi-level confirmation for destructive statements.

The gate holds no state. Each call receives the statement's
classification and the level the caller has reached, and either
authorizes execution or names the next level the caller must confirm.

    dangerous, level 0  ->  warn, next level 1
    dangerous, level 1  ->  final warning, next level 2
    dangerous, level 2  ->  execute
    not dangerous       ->  execute at any level
"""

import logging
from dataclasses import dataclass
from enum import IntEnum

from database.models import Classification

logger = logging.getLogger(__name__)


class ConfirmationLevel(IntEnum):
    UNCONFIRMED = 0
    FIRST_WARNING = 1
    FINAL_WARNING = 2


FIRST_WARNING_MESSAGE = (
    "⚠️ This query will modify or delete data permanently. "
    "Are you sure you want to proceed?"
)

FINAL_WARNING_MESSAGE = (
    "🚨 FINAL WARNING: This operation cannot be undone. "
    "This is your last chance to cancel before the data is permanently changed."
)

_WARNINGS = {
    ConfirmationLevel.FIRST_WARNING: FIRST_WARNING_MESSAGE,
    ConfirmationLevel.FINAL_WARNING: FINAL_WARNING_MESSAGE,
}


@dataclass(frozen=True)
class ConfirmationOutcome:
    """Result of evaluating a statement against the confirmation protocol.

    Attributes:
        authorized: True when the statement may be executed now.
        next_level: Level the caller must send back to continue, or None
            when authorized.
        warning: Message to show before re-submitting, or None.
        is_dangerous: Whether the statement matched a destructive pattern.
    """

    authorized: bool
    next_level: ConfirmationLevel | None = None
    warning: str | None = None
    is_dangerous: bool = False

    @classmethod
    def execute(cls, is_dangerous: bool = False) -> "ConfirmationOutcome":
        return cls(authorized=True, is_dangerous=is_dangerous)

    @classmethod
    def warn(cls, level: ConfirmationLevel) -> "ConfirmationOutcome":
        return cls(
            authorized=False,
            next_level=level,
            warning=_WARNINGS[level],
            is_dangerous=True,
        )


class ConfirmationGate:
    """Decide whether a classified statement may run at a given level."""

    def evaluate(
        self, classification: Classification, level: int
    ) -> ConfirmationOutcome:
        """Return the outcome for ``classification`` at ``level``.

        Args:
            classification: Result of ``validation.classify``.
            level: The caller's current confirmation level (0, 1 or 2).

        Raises:
            ValueError: If ``level`` is not a known confirmation level.
        """
        current = ConfirmationLevel(level)

        if not classification.is_dangerous:
            return ConfirmationOutcome.execute()

        if current is ConfirmationLevel.FINAL_WARNING:
            return ConfirmationOutcome.execute(is_dangerous=True)

        next_level = ConfirmationLevel(current + 1)
        logger.info(
            "Dangerous statement held at level %d, asking for level %d",
            current,
            next_level,
        )
        return ConfirmationOutcome.warn(next_level)
