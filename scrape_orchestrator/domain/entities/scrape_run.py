from dataclasses import dataclass
from typing import Any

from scrape_orchestrator.domain.entities.social_profile import WorkItem
from scrape_orchestrator.domain.enums.run_status import RunStatus


@dataclass(frozen=True)
class RunHandle:
    """Identifies one in-flight remote scrape job."""

    run_id: str
    dataset_id: str
    # None for runs started through the per-artist bulk endpoint
    target: WorkItem | None = None

    @property
    def artist_id(self) -> str | None:
        return self.target.artist_id if self.target else None


@dataclass(frozen=True)
class RunResult:
    """Terminal state of a polled run. FAILED runs never carry data."""

    run_id: str
    dataset_id: str
    status: RunStatus
    data: list[Any] | None = None

    def __post_init__(self) -> None:
        if not self.status.is_terminal:
            raise ValueError(f"RunResult requires a terminal status, got {self.status.value}")
        if self.status is RunStatus.FAILED and self.data is not None:
            raise ValueError("FAILED run results cannot carry data")

    @classmethod
    def succeeded(cls, handle: RunHandle, data: list[Any] | None) -> "RunResult":
        return cls(
            run_id=handle.run_id,
            dataset_id=handle.dataset_id,
            status=RunStatus.SUCCEEDED,
            data=list(data or []),
        )

    @classmethod
    def failed(cls, handle: RunHandle) -> "RunResult":
        return cls(run_id=handle.run_id, dataset_id=handle.dataset_id, status=RunStatus.FAILED)


@dataclass(frozen=True)
class LaunchResponse:
    """What the launcher reported for one start request."""

    run_id: str | None = None
    dataset_id: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class RunStatusSnapshot:
    """One status reading of a remote run. ``status`` is the raw remote value."""

    status: str | None
    dataset_id: str | None = None
    data: list[Any] | None = None


@dataclass(frozen=True)
class LaunchFailure:
    target: WorkItem | str
    error: str
