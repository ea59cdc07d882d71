class ScrapeOrchestrationError(Exception):
    """Base class for failures that abort a scrape invocation."""


class ConfigurationError(ScrapeOrchestrationError):
    """Raised for invalid batch sizes or missing required identifiers."""


class LaunchError(ScrapeOrchestrationError):
    """Raised when scrape runs could not be started."""


class NoRunsStartedError(LaunchError):
    """Raised when not a single scrape run started."""

    def __init__(self, message: str = "No valid scrape runs started") -> None:
        super().__init__(message)


class PollTransientError(ScrapeOrchestrationError):
    """A status query failed. Always recovered by the poller."""

    def __init__(self, run_id: str, reason: str) -> None:
        self.run_id = run_id
        self.reason = reason
        super().__init__(f"Status query for run {run_id} failed: {reason}")


class DeadlineExceededError(ScrapeOrchestrationError):
    """Raised when the enclosing deadline runs out."""

    def __init__(self, max_seconds: float | None) -> None:
        self.max_seconds = max_seconds
        super().__init__(f"Scrape exceeded its maximum duration of {max_seconds}s")
