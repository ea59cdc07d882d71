from enum import Enum


class RunStatus(str, Enum):
    """States of a remote scrape run as seen by the poller."""

    PENDING = "PENDING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        """Terminal states cannot be transitioned out of."""
        return self in (RunStatus.SUCCEEDED, RunStatus.FAILED)
