"""HTTP adapter for the Recoup Jobs API."""
import structlog
from pydantic import TypeAdapter

from scrape_orchestrator.application.interfaces.scrape_collaborators import JobSource
from scrape_orchestrator.config import settings
from scrape_orchestrator.domain.entities.job import ScheduledJob
from scrape_orchestrator.domain.results import FetchResult
from scrape_orchestrator.infrastructure.external_services.recoup_client import RecoupApiClient
from scrape_orchestrator.infrastructure.external_services.recoup_schemas import (
    JobSchema,
    JobsResponseSchema,
)

logger = structlog.get_logger(__name__)

_jobs_adapter = TypeAdapter(JobsResponseSchema)


def _to_domain(job: JobSchema) -> ScheduledJob:
    return ScheduledJob(
        id=job.id,
        title=job.title,
        prompt=job.prompt,
        schedule=job.schedule,
        account_id=job.account_id,
        artist_account_id=job.artist_account_id,
        enabled=job.enabled,
    )


class JobsClient(RecoupApiClient, JobSource):
    def __init__(self, jobs_url: str = settings.recoup_jobs_api_url, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self._jobs_url = jobs_url

    async def fetch_jobs(self) -> FetchResult[list[ScheduledJob]]:
        """GET /api/jobs → {"status": "success", "jobs": [...]}"""
        result = await self._request("GET", self._jobs_url, _jobs_adapter, operation="jobs")
        return result.map(lambda r: [_to_domain(job) for job in r.jobs])

    async def fetch_one(self, job_id: str) -> FetchResult[ScheduledJob]:
        """GET /api/jobs?id=... ABSENT when the job is missing or disabled."""
        if not job_id:
            return FetchResult.absent("missing job id")

        result = await self._request(
            "GET",
            self._jobs_url,
            _jobs_adapter,
            operation="job",
            params={"id": job_id},
            job_id=job_id,
        )
        if not result.is_ok or result.data is None:
            return FetchResult(status=result.status, errors=result.errors, reason=result.reason)

        if not result.data.jobs:
            logger.error("no_job_found", job_id=job_id)
            return FetchResult.absent("job not found")

        job = _to_domain(result.data.jobs[0])
        if job.is_disabled:
            logger.info("job_disabled_skipping", job_id=job_id)
            return FetchResult.absent("job disabled")
        return FetchResult.ok(job)
