from dataclasses import dataclass, field
from typing import Any

from scrape_orchestrator.domain.entities.scrape_run import LaunchFailure, RunHandle, RunResult
from scrape_orchestrator.domain.entities.social_profile import SocialProfile
from scrape_orchestrator.domain.enums.run_status import RunStatus


@dataclass(frozen=True)
class ScrapeOutcome:
    """
    Final artifact of one scrape invocation.

    Every requested target ends up either in ``started_runs`` or in
    ``start_failures``; every started run has exactly one entry in ``results``.
    Artists whose socials could not be re-read after the runs finished are
    missing from ``updated_socials``.
    """

    target: str
    artist_ids: list[str]
    started_runs: list[RunHandle]
    start_failures: list[LaunchFailure]
    results: list[RunResult]
    updated_socials: dict[str, list[SocialProfile]] = field(default_factory=dict)

    @property
    def total_runs(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.status is RunStatus.SUCCEEDED)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status is RunStatus.FAILED)

    def summary(self) -> dict[str, Any]:
        return {
            "target": self.target,
            "total_artists": len(self.artist_ids),
            "total_runs": self.total_runs,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "start_failures": len(self.start_failures),
            "refreshed_artists": sorted(self.updated_socials),
        }
