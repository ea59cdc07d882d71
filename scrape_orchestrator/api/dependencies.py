"""
FastAPI dependency injection wiring.

Each dependency function returns a fully-constructed object with its
collaborators injected, so route handlers stay thin. The Azure
Functions entry point calls the same builders directly.
"""
from fastapi import Depends

from scrape_orchestrator.application.coordinators.scrape_pipeline import ScrapePipeline
from scrape_orchestrator.application.interfaces.event_publisher import EventPublisher
from scrape_orchestrator.application.interfaces.scrape_collaborators import (
    JobSource,
    ResultStore,
    ScrapeLauncher,
    SummaryNotifier,
)
from scrape_orchestrator.application.services.run_launcher import RunLauncher
from scrape_orchestrator.application.services.run_poller import RunPoller
from scrape_orchestrator.application.use_cases.list_enabled_jobs import ListEnabledJobs
from scrape_orchestrator.application.use_cases.run_scheduled_job import RunScheduledJob
from scrape_orchestrator.application.use_cases.scrape_artist_socials import ScrapeArtistSocials
from scrape_orchestrator.application.use_cases.scrape_pro_artist_socials import (
    ScrapeProArtistSocials,
)
from scrape_orchestrator.config import settings
from scrape_orchestrator.domain.entities.job import ChatConfig
from scrape_orchestrator.infrastructure.external_services.artist_client import ArtistClient
from scrape_orchestrator.infrastructure.external_services.chat_client import ChatClient
from scrape_orchestrator.infrastructure.external_services.jobs_client import JobsClient
from scrape_orchestrator.infrastructure.external_services.scraper_client import ScraperClient
from scrape_orchestrator.infrastructure.messaging.noop_publisher import NoOpEventPublisher
from scrape_orchestrator.infrastructure.messaging.rabbitmq_publisher import RabbitMQPublisher


# ---- External collaborators ------------------------------------------------

def get_scrape_launcher() -> ScrapeLauncher:
    return ScraperClient()


def get_result_store() -> ResultStore:
    return ArtistClient()


def get_job_source() -> JobSource:
    return JobsClient()


def get_summary_notifier() -> SummaryNotifier:
    return ChatClient()


def get_event_publisher() -> EventPublisher:
    if settings.rabbitmq_url:
        return RabbitMQPublisher(settings.rabbitmq_url)
    return NoOpEventPublisher()


def get_default_chat_config() -> ChatConfig:
    return ChatConfig(
        prompt=settings.recoup_prompt,
        account_id=settings.recoup_account_id,
        room_id=settings.recoup_room_id,
        artist_id=settings.recoup_artist_id,
        model=settings.recoup_model,
    )


# ---- Orchestration ---------------------------------------------------------

def get_scrape_pipeline(
    result_store: ResultStore = Depends(get_result_store),
    launcher: ScrapeLauncher = Depends(get_scrape_launcher),
    event_publisher: EventPublisher = Depends(get_event_publisher),
) -> ScrapePipeline:
    return ScrapePipeline(
        result_store,
        RunLauncher(
            launcher,
            batch_size=settings.scrape_batch_size,
            batch_delay_seconds=settings.scrape_batch_delay_seconds,
        ),
        RunPoller(
            result_store,
            interval_seconds=settings.poll_interval_seconds,
            concurrent=settings.poll_concurrently,
        ),
        event_publisher,
        socials_batch_size=settings.socials_batch_size,
        socials_batch_delay_seconds=settings.socials_batch_delay_seconds,
        settle_delay_seconds=settings.settle_delay_seconds,
    )


# ---- Use-case dependencies -------------------------------------------------

def get_scrape_artist_socials_use_case(
    pipeline: ScrapePipeline = Depends(get_scrape_pipeline),
    notifier: SummaryNotifier = Depends(get_summary_notifier),
) -> ScrapeArtistSocials:
    return ScrapeArtistSocials(
        pipeline, notifier, max_duration_seconds=settings.scrape_max_duration_seconds
    )


def get_scrape_pro_artist_socials_use_case(
    result_store: ResultStore = Depends(get_result_store),
    pipeline: ScrapePipeline = Depends(get_scrape_pipeline),
) -> ScrapeProArtistSocials:
    return ScrapeProArtistSocials(
        result_store,
        pipeline,
        artist_limit=settings.pro_artist_limit,
        max_duration_seconds=settings.scrape_max_duration_seconds,
    )


def get_run_scheduled_job_use_case(
    job_source: JobSource = Depends(get_job_source),
    scrape_artist_socials: ScrapeArtistSocials = Depends(get_scrape_artist_socials_use_case),
    defaults: ChatConfig = Depends(get_default_chat_config),
) -> RunScheduledJob:
    return RunScheduledJob(job_source, scrape_artist_socials, defaults)


def get_list_enabled_jobs_use_case(
    job_source: JobSource = Depends(get_job_source),
) -> ListEnabledJobs:
    return ListEnabledJobs(job_source)
