from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from scrape_orchestrator.domain.enums.run_status import RunStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class ScrapeRunStartedEvent(DomainEvent):
    """Published for every run the launcher managed to start."""

    run_id: str = ""
    dataset_id: str = ""
    artist_id: str | None = None
    social_id: str | None = None


@dataclass(frozen=True)
class ScrapeRunFinishedEvent(DomainEvent):
    """Published once a run reaches SUCCEEDED or FAILED."""

    run_id: str = ""
    dataset_id: str = ""
    status: RunStatus = RunStatus.SUCCEEDED
    record_count: int = 0


@dataclass(frozen=True)
class ScrapeOutcomeRecordedEvent(DomainEvent):
    """Published when a whole scrape invocation has completed."""

    target: str = ""
    total_artists: int = 0
    total_runs: int = 0
    succeeded: int = 0
    failed: int = 0
    start_failures: int = 0
