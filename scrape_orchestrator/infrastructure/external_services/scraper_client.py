"""HTTP adapter that starts social scrape runs."""
import structlog
from pydantic import TypeAdapter

from scrape_orchestrator.application.interfaces.scrape_collaborators import ScrapeLauncher
from scrape_orchestrator.domain.entities.scrape_run import LaunchResponse
from scrape_orchestrator.domain.results import FetchResult
from scrape_orchestrator.infrastructure.external_services.recoup_client import RecoupApiClient
from scrape_orchestrator.infrastructure.external_services.recoup_schemas import (
    LaunchResponseSchema,
)

logger = structlog.get_logger(__name__)

_launch_adapter = TypeAdapter(LaunchResponseSchema)
_bulk_launch_adapter = TypeAdapter(list[LaunchResponseSchema])


def _to_domain(schema: LaunchResponseSchema) -> LaunchResponse:
    return LaunchResponse(run_id=schema.run_id, dataset_id=schema.dataset_id, error=schema.error)


class ScraperClient(RecoupApiClient, ScrapeLauncher):
    """Starts Apify-backed scrape runs through the Recoup API."""

    async def start(self, social_id: str) -> FetchResult[LaunchResponse]:
        """
        POST /api/social/scrape → {"runId": "...", "datasetId": "...", "error": null}
        """
        result = await self._request(
            "POST",
            self._url("/api/social/scrape"),
            _launch_adapter,
            operation="social_scrape",
            json={"social_id": social_id},
            social_id=social_id,
        )
        if result.is_ok and result.data is not None:
            logger.info(
                "scraper_run_requested",
                social_id=social_id,
                run_id=result.data.run_id,
                error=result.data.error,
            )
        return result.map(_to_domain)

    async def start_all(self, artist_id: str) -> FetchResult[list[LaunchResponse]]:
        """
        POST /api/artist/socials/scrape → [{"runId", "datasetId", "error"}, ...]
        """
        if not artist_id:
            logger.error("artist_socials_scrape_called_without_artist_id")
            return FetchResult.absent("missing artist id")

        result = await self._request(
            "POST",
            self._url("/api/artist/socials/scrape"),
            _bulk_launch_adapter,
            operation="artist_socials_scrape",
            json={"artist_account_id": artist_id},
            artist_id=artist_id,
        )
        return result.map(lambda items: [_to_domain(item) for item in items])
