"""
Tests for the confirmation gate state machine.
"""
import pytest

from database.ConfirmationGate import (
    FINAL_WARNING_MESSAGE,
    FIRST_WARNING_MESSAGE,
    ConfirmationGate,
    ConfirmationLevel,
)
from database.models import Classification

DANGEROUS = Classification(is_dangerous=True, is_read_only=False)
SAFE_WRITE = Classification(is_dangerous=False, is_read_only=False)
READ = Classification(is_dangerous=False, is_read_only=True)


@pytest.fixture
def gate():
    return ConfirmationGate()


class TestDangerousStatements:

    def test_level_zero_asks_for_first_confirmation(self, gate):
        outcome = gate.evaluate(DANGEROUS, 0)
        assert outcome.authorized is False
        assert outcome.next_level == ConfirmationLevel.FIRST_WARNING
        assert outcome.warning == FIRST_WARNING_MESSAGE

    def test_level_one_gives_final_warning(self, gate):
        outcome = gate.evaluate(DANGEROUS, 1)
        assert outcome.authorized is False
        assert outcome.next_level == ConfirmationLevel.FINAL_WARNING
        assert outcome.warning == FINAL_WARNING_MESSAGE
        assert "cannot be undone" in outcome.warning.lower()
        assert "last chance" in outcome.warning.lower()

    def test_level_two_authorizes(self, gate):
        outcome = gate.evaluate(DANGEROUS, 2)
        assert outcome.authorized is True
        assert outcome.next_level is None
        assert outcome.warning is None
        assert outcome.is_dangerous is True

    def test_warnings_differ(self):
        assert FIRST_WARNING_MESSAGE != FINAL_WARNING_MESSAGE


class TestSafeStatements:

    @pytest.mark.parametrize("level", [0, 1, 2])
    @pytest.mark.parametrize("classification", [SAFE_WRITE, READ])
    def test_authorized_at_every_level(self, gate, classification, level):
        outcome = gate.evaluate(classification, level)
        assert outcome.authorized is True
        assert outcome.warning is None


class TestProtocol:

    def test_unknown_level_is_rejected(self, gate):
        with pytest.raises(ValueError):
            gate.evaluate(DANGEROUS, 3)

    def test_evaluation_is_idempotent(self, gate):
        assert gate.evaluate(DANGEROUS, 0) == gate.evaluate(DANGEROUS, 0)
        assert gate.evaluate(DANGEROUS, 1) == gate.evaluate(DANGEROUS, 1)

    def test_separate_gates_agree(self):
        assert ConfirmationGate().evaluate(DANGEROUS, 1) == ConfirmationGate().evaluate(DANGEROUS, 1)

    def test_walking_the_levels(self, gate):
        level = 0
        seen = []
        while True:
            outcome = gate.evaluate(DANGEROUS, level)
            if outcome.authorized:
                break
            seen.append(int(outcome.next_level))
            level = outcome.next_level
        assert seen == [1, 2]
        assert level == 2
