from abc import ABC, abstractmethod

from scrape_orchestrator.domain.entities.job import ChatConfig, ScheduledJob
from scrape_orchestrator.domain.entities.scrape_run import LaunchResponse, RunStatusSnapshot
from scrape_orchestrator.domain.entities.social_profile import SocialProfile
from scrape_orchestrator.domain.results import FetchResult


class JobSource(ABC):
    """Port for reading customer jobs."""

    @abstractmethod
    async def fetch_jobs(self) -> FetchResult[list[ScheduledJob]]:
        """All jobs, disabled ones included. Callers filter."""
        ...

    @abstractmethod
    async def fetch_one(self, job_id: str) -> FetchResult[ScheduledJob]:
        """ABSENT when the job is missing or disabled."""
        ...


class ScrapeLauncher(ABC):
    """Port for starting remote scrape runs."""

    @abstractmethod
    async def start(self, social_id: str) -> FetchResult[LaunchResponse]:
        ...

    @abstractmethod
    async def start_all(self, artist_id: str) -> FetchResult[list[LaunchResponse]]:
        """Start one run per social profile of the artist."""
        ...


class ResultStore(ABC):
    """Port for reading artist socials and run state."""

    @abstractmethod
    async def fetch_socials(self, artist_id: str) -> FetchResult[list[SocialProfile]]:
        ...

    @abstractmethod
    async def poll_status(self, run_id: str) -> FetchResult[RunStatusSnapshot]:
        ...

    @abstractmethod
    async def fetch_pro_artist_ids(self) -> FetchResult[list[str]]:
        ...


class SummaryNotifier(ABC):
    """Port for handing a summary request to the chat service. Must not raise."""

    @abstractmethod
    async def send_summary(self, config: ChatConfig) -> None:
        ...
