"""Azure Functions entry point for the scrape orchestrator."""
import json
import logging

import azure.functions as func

from scrape_orchestrator.api.dependencies import (
    get_default_chat_config,
    get_event_publisher,
    get_job_source,
    get_result_store,
    get_scrape_launcher,
    get_scrape_pipeline,
    get_summary_notifier,
)
from scrape_orchestrator.api.schemas.scrape_responses import ScrapeOutcomeResponse
from scrape_orchestrator.application.use_cases.run_scheduled_job import (
    RunScheduledJob,
    RunScheduledJobInput,
)
from scrape_orchestrator.application.use_cases.scrape_artist_socials import (
    ScrapeArtistSocials,
    ScrapeArtistSocialsInput,
)
from scrape_orchestrator.application.use_cases.scrape_pro_artist_socials import (
    ScrapeProArtistSocials,
)
from scrape_orchestrator.config import settings
from scrape_orchestrator.domain.entities.scrape_outcome import ScrapeOutcome
from scrape_orchestrator.domain.errors import ConfigurationError, ScrapeOrchestrationError
from scrape_orchestrator.logging_config import configure_logging

configure_logging()

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)


def _build_scrape_artist_socials() -> ScrapeArtistSocials:
    result_store = get_result_store()
    pipeline = get_scrape_pipeline(result_store, get_scrape_launcher(), get_event_publisher())
    return ScrapeArtistSocials(
        pipeline,
        get_summary_notifier(),
        max_duration_seconds=settings.scrape_max_duration_seconds,
    )


def _build_scrape_pro_artist_socials() -> ScrapeProArtistSocials:
    result_store = get_result_store()
    pipeline = get_scrape_pipeline(result_store, get_scrape_launcher(), get_event_publisher())
    return ScrapeProArtistSocials(
        result_store,
        pipeline,
        artist_limit=settings.pro_artist_limit,
        max_duration_seconds=settings.scrape_max_duration_seconds,
    )


def _outcome_response(outcome: ScrapeOutcome) -> func.HttpResponse:
    return func.HttpResponse(
        ScrapeOutcomeResponse.from_outcome(outcome).model_dump_json(),
        mimetype="application/json",
    )


def _error_response(exc: Exception, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps({"error": str(exc)}),
        mimetype="application/json",
        status_code=status_code,
    )


# ============================================================================
# Timer Trigger - Pro artist scrape
# ============================================================================

@app.schedule(schedule="%PRO_SCRAPE_SCHEDULE%", arg_name="timer", run_on_startup=False)
async def scheduled_pro_artist_scrape(timer: func.TimerRequest) -> None:
    """Scrapes the socials of the first pro artists on the configured schedule."""
    logging.info("Starting scheduled pro artist scrape")
    try:
        output = await _build_scrape_pro_artist_socials().execute()
    except ScrapeOrchestrationError as exc:
        logging.error(f"Pro artist scrape failed: {exc}")
        raise

    logging.info(
        f"Pro artist scrape completed: {output.outcome.succeeded} succeeded, "
        f"{output.outcome.failed} failed"
    )


# ============================================================================
# HTTP Triggers
# ============================================================================

@app.route(route="scrape/artist", methods=["POST"])
async def scrape_artist(req: func.HttpRequest) -> func.HttpResponse:
    """
    Scrape all socials of one artist and wait for the runs to finish.

    Request body:
    {
        "artist_account_id": "...",
        "bulk": false
    }
    """
    try:
        payload = req.get_json() if req.get_body() else {}
    except ValueError:
        payload = {}

    try:
        output = await _build_scrape_artist_socials().execute(
            ScrapeArtistSocialsInput(
                artist_id=payload.get("artist_account_id"),
                bulk=bool(payload.get("bulk", False)),
            )
        )
    except ConfigurationError as exc:
        return _error_response(exc, 400)
    except ScrapeOrchestrationError as exc:
        logging.error(f"Artist scrape failed: {exc}")
        return _error_response(exc, 502)

    return _outcome_response(output.outcome)


@app.route(route="jobs/{job_id}/run", methods=["POST"])
async def run_job(req: func.HttpRequest) -> func.HttpResponse:
    """Run the scrape behind a customer job (the schedule's externalId)."""
    job_id = req.route_params.get("job_id")
    use_case = RunScheduledJob(
        get_job_source(), _build_scrape_artist_socials(), get_default_chat_config()
    )

    try:
        output = await use_case.execute(RunScheduledJobInput(job_id=job_id))
    except ConfigurationError as exc:
        return _error_response(exc, 400)
    except ScrapeOrchestrationError as exc:
        logging.error(f"Scheduled job {job_id} failed: {exc}")
        return _error_response(exc, 502)

    return _outcome_response(output.scrape.outcome)
