from typing import Any

from pydantic import BaseModel, Field

from scrape_orchestrator.domain.entities.job import ScheduledJob
from scrape_orchestrator.domain.entities.scrape_outcome import ScrapeOutcome
from scrape_orchestrator.domain.enums.platform import Platform
from scrape_orchestrator.domain.enums.run_status import RunStatus


class ScrapeArtistRequest(BaseModel):
    artist_account_id: str = Field(min_length=1)
    bulk: bool = False


class ScrapeAcceptedResponse(BaseModel):
    accepted: bool = True
    target: str
    message: str = "Scrape started. Results will be logged when all runs complete."


class RunHandleResponse(BaseModel):
    run_id: str
    dataset_id: str
    artist_id: str | None = None
    social_id: str | None = None


class LaunchFailureResponse(BaseModel):
    target: str
    error: str


class RunResultResponse(BaseModel):
    run_id: str
    dataset_id: str
    status: RunStatus
    data: list[Any] | None = None


class SocialProfileResponse(BaseModel):
    social_id: str
    platform: Platform
    username: str
    profile_url: str


class ScrapeOutcomeResponse(BaseModel):
    target: str
    artist_ids: list[str]
    total_runs: int
    succeeded: int
    failed: int
    started_runs: list[RunHandleResponse]
    start_failures: list[LaunchFailureResponse]
    results: list[RunResultResponse]
    updated_socials: dict[str, list[SocialProfileResponse]]

    @classmethod
    def from_outcome(cls, outcome: ScrapeOutcome) -> "ScrapeOutcomeResponse":
        return cls(
            target=outcome.target,
            artist_ids=outcome.artist_ids,
            total_runs=outcome.total_runs,
            succeeded=outcome.succeeded,
            failed=outcome.failed,
            started_runs=[
                RunHandleResponse(
                    run_id=h.run_id,
                    dataset_id=h.dataset_id,
                    artist_id=h.artist_id,
                    social_id=h.target.social_id if h.target else None,
                )
                for h in outcome.started_runs
            ],
            start_failures=[
                LaunchFailureResponse(
                    target=f.target if isinstance(f.target, str) else f.target.social_id,
                    error=f.error,
                )
                for f in outcome.start_failures
            ],
            results=[
                RunResultResponse(
                    run_id=r.run_id, dataset_id=r.dataset_id, status=r.status, data=r.data
                )
                for r in outcome.results
            ],
            updated_socials={
                artist_id: [
                    SocialProfileResponse(
                        social_id=p.social_id,
                        platform=p.platform,
                        username=p.username,
                        profile_url=p.profile_url,
                    )
                    for p in profiles
                ]
                for artist_id, profiles in outcome.updated_socials.items()
            },
        )


class JobResponse(BaseModel):
    id: str
    title: str
    schedule: str
    account_id: str
    artist_account_id: str
    enabled: bool | None = None

    @classmethod
    def from_job(cls, job: ScheduledJob) -> "JobResponse":
        return cls(
            id=job.id,
            title=job.title,
            schedule=job.schedule,
            account_id=job.account_id,
            artist_account_id=job.artist_account_id,
            enabled=job.enabled,
        )


class EnabledJobsResponse(BaseModel):
    jobs: list[JobResponse]
    skipped: int
