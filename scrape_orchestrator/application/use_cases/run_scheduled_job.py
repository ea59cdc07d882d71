from dataclasses import dataclass

import structlog

from scrape_orchestrator.application.interfaces.scrape_collaborators import JobSource
from scrape_orchestrator.application.use_cases.scrape_artist_socials import (
    ScrapeArtistSocials,
    ScrapeArtistSocialsInput,
    ScrapeArtistSocialsOutput,
)
from scrape_orchestrator.domain.entities.job import ChatConfig
from scrape_orchestrator.domain.errors import ConfigurationError

logger = structlog.get_logger(__name__)


@dataclass
class RunScheduledJobInput:
    # externalId attached to the schedule that fired
    job_id: str | None = None


@dataclass
class RunScheduledJobOutput:
    job_id: str | None
    from_job: bool
    config: ChatConfig
    scrape: ScrapeArtistSocialsOutput


class RunScheduledJob:
    """
    Use case: run the scrape behind a customer job.

    The job's prompt, account and artist come from the Job Source. A job that
    is missing, disabled or malformed falls back to the configured defaults.
    """

    def __init__(
        self,
        job_source: JobSource,
        scrape_artist_socials: ScrapeArtistSocials,
        defaults: ChatConfig,
    ) -> None:
        self._job_source = job_source
        self._scrape_artist_socials = scrape_artist_socials
        self._defaults = defaults

    async def execute(self, input_data: RunScheduledJobInput) -> RunScheduledJobOutput:
        config = await self._resolve_config(input_data.job_id)
        from_job = config is not None
        config = (config or ChatConfig()).merged_with(self._defaults)

        if not config.artist_id:
            raise ConfigurationError(
                f"No artist configured for job {input_data.job_id!r} and no default artist set"
            )
        if not config.account_id:
            logger.warning("no_account_for_summary", job_id=input_data.job_id)

        scrape = await self._scrape_artist_socials.execute(
            ScrapeArtistSocialsInput(artist_id=config.artist_id, notification=config)
        )
        return RunScheduledJobOutput(
            job_id=input_data.job_id, from_job=from_job, config=config, scrape=scrape
        )

    async def _resolve_config(self, job_id: str | None) -> ChatConfig | None:
        if not job_id:
            return None
        result = await self._job_source.fetch_one(job_id)
        if not result.is_ok or result.data is None:
            logger.warning(
                "job_unavailable_using_defaults", job_id=job_id, reason=result.describe()
            )
            return None
        return ChatConfig.from_job(result.data)
