from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Response, status

from scrape_orchestrator.api.dependencies import (
    get_list_enabled_jobs_use_case,
    get_run_scheduled_job_use_case,
    get_scrape_artist_socials_use_case,
    get_scrape_pro_artist_socials_use_case,
)
from scrape_orchestrator.api.schemas.scrape_responses import (
    EnabledJobsResponse,
    JobResponse,
    ScrapeAcceptedResponse,
    ScrapeArtistRequest,
    ScrapeOutcomeResponse,
)
from scrape_orchestrator.application.use_cases.list_enabled_jobs import ListEnabledJobs
from scrape_orchestrator.application.use_cases.run_scheduled_job import (
    RunScheduledJob,
    RunScheduledJobInput,
)
from scrape_orchestrator.application.use_cases.scrape_artist_socials import (
    ScrapeArtistSocials,
    ScrapeArtistSocialsInput,
)
from scrape_orchestrator.application.use_cases.scrape_pro_artist_socials import (
    PRO_ARTISTS_TARGET,
    ScrapeProArtistSocials,
)
from scrape_orchestrator.domain.entities.scrape_outcome import ScrapeOutcome
from scrape_orchestrator.domain.errors import ConfigurationError, ScrapeOrchestrationError

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/admin", tags=["admin"])

# Outcome first: the accepted model validates against almost any payload
ScrapeResponse = ScrapeOutcomeResponse | ScrapeAcceptedResponse


async def _run_logged(target: str, run: Callable[[], Awaitable[Any]]) -> None:
    try:
        await run()
    except Exception:
        logger.exception("background_scrape_failed", target=target)


async def _dispatch(
    target: str,
    run: Callable[[], Awaitable[ScrapeOutcome]],
    *,
    wait: bool,
    background_tasks: BackgroundTasks,
    response: Response,
) -> ScrapeResponse:
    if not wait:
        background_tasks.add_task(_run_logged, target, run)
        return ScrapeAcceptedResponse(target=target)

    try:
        outcome = await run()
    except ConfigurationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    except ScrapeOrchestrationError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))

    response.status_code = status.HTTP_200_OK
    return ScrapeOutcomeResponse.from_outcome(outcome)


@router.post("/scrape/artist", status_code=status.HTTP_202_ACCEPTED, response_model=ScrapeResponse)
async def scrape_artist(
    body: ScrapeArtistRequest,
    background_tasks: BackgroundTasks,
    response: Response,
    wait: bool = Query(default=False),
    use_case: ScrapeArtistSocials = Depends(get_scrape_artist_socials_use_case),
) -> ScrapeResponse:
    """Scrape every social profile of one artist."""

    async def run() -> ScrapeOutcome:
        output = await use_case.execute(
            ScrapeArtistSocialsInput(artist_id=body.artist_account_id, bulk=body.bulk)
        )
        return output.outcome

    return await _dispatch(
        body.artist_account_id, run, wait=wait, background_tasks=background_tasks, response=response
    )


@router.post("/scrape/pro", status_code=status.HTTP_202_ACCEPTED, response_model=ScrapeResponse)
async def scrape_pro_artists(
    background_tasks: BackgroundTasks,
    response: Response,
    wait: bool = Query(default=False),
    use_case: ScrapeProArtistSocials = Depends(get_scrape_pro_artist_socials_use_case),
) -> ScrapeResponse:
    """Scrape the socials of the first pro artists."""

    async def run() -> ScrapeOutcome:
        return (await use_case.execute()).outcome

    return await _dispatch(
        PRO_ARTISTS_TARGET, run, wait=wait, background_tasks=background_tasks, response=response
    )


@router.post("/jobs/{job_id}/run", status_code=status.HTTP_202_ACCEPTED, response_model=ScrapeResponse)
async def run_job(
    job_id: str,
    background_tasks: BackgroundTasks,
    response: Response,
    wait: bool = Query(default=False),
    use_case: RunScheduledJob = Depends(get_run_scheduled_job_use_case),
) -> ScrapeResponse:
    """Run the scrape behind a customer job, falling back to configured defaults."""

    async def run() -> ScrapeOutcome:
        output = await use_case.execute(RunScheduledJobInput(job_id=job_id))
        return output.scrape.outcome

    return await _dispatch(job_id, run, wait=wait, background_tasks=background_tasks, response=response)


@router.get("/jobs", response_model=EnabledJobsResponse)
async def list_enabled_jobs(
    use_case: ListEnabledJobs = Depends(get_list_enabled_jobs_use_case),
) -> EnabledJobsResponse:
    output = await use_case.execute()
    if not output.available:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Jobs API unavailable."
        )
    return EnabledJobsResponse(
        jobs=[JobResponse.from_job(job) for job in output.jobs], skipped=output.skipped
    )
