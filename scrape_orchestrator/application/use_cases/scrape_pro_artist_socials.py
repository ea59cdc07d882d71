from dataclasses import dataclass

import structlog

from scrape_orchestrator.application.coordinators.scrape_pipeline import ScrapePipeline
from scrape_orchestrator.application.interfaces.scrape_collaborators import ResultStore
from scrape_orchestrator.application.services.deadline import Deadline
from scrape_orchestrator.domain.entities.scrape_outcome import ScrapeOutcome
from scrape_orchestrator.domain.errors import ConfigurationError, ScrapeOrchestrationError

logger = structlog.get_logger(__name__)

PRO_ARTISTS_TARGET = "pro-artists"


@dataclass
class ScrapeProArtistSocialsOutput:
    outcome: ScrapeOutcome
    total_pro_artists: int


class ScrapeProArtistSocials:
    """Use case: scrape the socials of the first ``artist_limit`` pro artists."""

    def __init__(
        self,
        result_store: ResultStore,
        pipeline: ScrapePipeline,
        *,
        artist_limit: int = 10,
        max_duration_seconds: float | None = None,
    ) -> None:
        if artist_limit < 1:
            raise ConfigurationError(f"artist_limit must be at least 1, got {artist_limit}")
        self._store = result_store
        self._pipeline = pipeline
        self._artist_limit = artist_limit
        self._max_duration_seconds = max_duration_seconds

    async def execute(self) -> ScrapeProArtistSocialsOutput:
        deadline = Deadline(self._max_duration_seconds)

        result = await deadline.run(self._store.fetch_pro_artist_ids())
        all_artist_ids = result.unwrap_or([])
        if not all_artist_ids:
            raise ScrapeOrchestrationError(
                f"Failed to fetch pro artists or no artists found: {result.describe()}"
            )

        artist_ids = all_artist_ids[: self._artist_limit]
        logger.info(
            "fetched_pro_artists",
            total=len(all_artist_ids),
            processing=len(artist_ids),
            artist_ids=artist_ids,
        )

        outcome = await self._pipeline.run_for_artists(
            artist_ids, target=PRO_ARTISTS_TARGET, deadline=deadline
        )
        return ScrapeProArtistSocialsOutput(outcome=outcome, total_pro_artists=len(all_artist_ids))
