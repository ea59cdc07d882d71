from scrape_orchestrator.domain.enums.run_status import RunStatus


# Mapping of valid transitions: from_state -> set of allowed to_states
VALID_TRANSITIONS: dict[RunStatus, frozenset[RunStatus]] = {
    RunStatus.PENDING: frozenset({RunStatus.PENDING, RunStatus.SUCCEEDED, RunStatus.FAILED}),
    # Terminal states have no outgoing transitions
    RunStatus.SUCCEEDED: frozenset(),
    RunStatus.FAILED: frozenset(),
}

# Remote statuses that end a run; anything else keeps it pending
_TERMINAL_REMOTE_STATUSES: dict[str, RunStatus] = {
    "SUCCEEDED": RunStatus.SUCCEEDED,
    "FAILED": RunStatus.FAILED,
}


class InvalidRunTransitionError(Exception):
    """Raised when a run is moved out of a terminal state."""

    def __init__(self, from_state: RunStatus, to_state: RunStatus) -> None:
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid transition from {from_state.value} to {to_state.value}. "
            f"Allowed transitions: {sorted(s.value for s in VALID_TRANSITIONS.get(from_state, frozenset()))}"
        )


class RunStateMachine:
    """
    Maps remote run statuses onto PENDING/SUCCEEDED/FAILED and guards
    transitions between them.

    Stateless. The poller owns the current state of each run.
    """

    def classify(self, remote_status: str | None) -> RunStatus:
        """Unrecognized or missing statuses count as still pending."""
        if not remote_status:
            return RunStatus.PENDING
        return _TERMINAL_REMOTE_STATUSES.get(remote_status.strip().upper(), RunStatus.PENDING)

    def can_transition(self, from_state: RunStatus, to_state: RunStatus) -> bool:
        if from_state.is_terminal:
            return False
        return to_state in VALID_TRANSITIONS.get(from_state, frozenset())

    def advance(self, from_state: RunStatus, remote_status: str | None) -> RunStatus:
        """Return the state after observing ``remote_status``."""
        to_state = self.classify(remote_status)
        if not self.can_transition(from_state, to_state):
            raise InvalidRunTransitionError(from_state, to_state)
        return to_state
