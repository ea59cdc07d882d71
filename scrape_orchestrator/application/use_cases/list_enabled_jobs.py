from dataclasses import dataclass, field

import structlog

from scrape_orchestrator.application.interfaces.scrape_collaborators import JobSource
from scrape_orchestrator.domain.entities.job import ScheduledJob

logger = structlog.get_logger(__name__)


@dataclass
class ListEnabledJobsOutput:
    jobs: list[ScheduledJob] = field(default_factory=list)
    skipped: int = 0
    available: bool = True


class ListEnabledJobs:
    """Use case: list the jobs that should run. Disabled jobs are skipped here, not by the source."""

    def __init__(self, job_source: JobSource) -> None:
        self._job_source = job_source

    async def execute(self) -> ListEnabledJobsOutput:
        result = await self._job_source.fetch_jobs()
        if not result.is_ok or result.data is None:
            logger.error("failed_to_fetch_jobs", reason=result.describe())
            return ListEnabledJobsOutput(available=False)

        output = ListEnabledJobsOutput()
        for job in result.data:
            if job.is_disabled:
                logger.info("skipping_disabled_job", job_id=job.id, title=job.title)
                output.skipped += 1
                continue
            output.jobs.append(job)

        logger.info("jobs_listed", total=len(result.data), enabled=len(output.jobs), skipped=output.skipped)
        return output
