"""Unit tests for the run state machine."""
import pytest

from scrape_orchestrator.domain.enums.run_status import RunStatus
from scrape_orchestrator.domain.state_machine.run_state_machine import (
    InvalidRunTransitionError,
    RunStateMachine,
)


@pytest.fixture
def machine() -> RunStateMachine:
    return RunStateMachine()


class TestClassify:
    @pytest.mark.parametrize(
        "remote,expected",
        [
            ("SUCCEEDED", RunStatus.SUCCEEDED),
            ("succeeded", RunStatus.SUCCEEDED),
            (" Failed ", RunStatus.FAILED),
            ("RUNNING", RunStatus.PENDING),
            ("READY", RunStatus.PENDING),
            ("ABORTED", RunStatus.PENDING),
            ("", RunStatus.PENDING),
            (None, RunStatus.PENDING),
        ],
    )
    def test_maps_remote_status(
        self, machine: RunStateMachine, remote: str | None, expected: RunStatus
    ) -> None:
        assert machine.classify(remote) is expected


class TestTransitions:
    def test_pending_can_move_anywhere(self, machine: RunStateMachine) -> None:
        for to_state in RunStatus:
            assert machine.can_transition(RunStatus.PENDING, to_state)

    @pytest.mark.parametrize("terminal", [RunStatus.SUCCEEDED, RunStatus.FAILED])
    def test_terminal_states_are_final(self, machine: RunStateMachine, terminal: RunStatus) -> None:
        assert terminal.is_terminal
        for to_state in RunStatus:
            assert not machine.can_transition(terminal, to_state)

    def test_advance_returns_new_state(self, machine: RunStateMachine) -> None:
        assert machine.advance(RunStatus.PENDING, "RUNNING") is RunStatus.PENDING
        assert machine.advance(RunStatus.PENDING, "SUCCEEDED") is RunStatus.SUCCEEDED

    def test_advance_out_of_terminal_raises(self, machine: RunStateMachine) -> None:
        with pytest.raises(InvalidRunTransitionError) as exc_info:
            machine.advance(RunStatus.FAILED, "SUCCEEDED")
        assert exc_info.value.from_state is RunStatus.FAILED
        assert exc_info.value.to_state is RunStatus.SUCCEEDED
