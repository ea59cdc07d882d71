"""HTTP adapter for artist socials, pro artists and scrape run status."""
from pydantic import TypeAdapter

from scrape_orchestrator.application.interfaces.scrape_collaborators import ResultStore
from scrape_orchestrator.domain.entities.scrape_run import RunStatusSnapshot
from scrape_orchestrator.domain.entities.social_profile import SocialProfile
from scrape_orchestrator.domain.results import FetchResult
from scrape_orchestrator.infrastructure.external_services.recoup_client import RecoupApiClient
from scrape_orchestrator.infrastructure.external_services.recoup_schemas import (
    ArtistSocialsResponseSchema,
    ProArtistsResponseSchema,
    RunStatusSchema,
)

_socials_adapter = TypeAdapter(ArtistSocialsResponseSchema)
_pro_artists_adapter = TypeAdapter(ProArtistsResponseSchema)
_run_status_adapter = TypeAdapter(RunStatusSchema)


def _socials_to_domain(response: ArtistSocialsResponseSchema) -> list[SocialProfile]:
    return [
        SocialProfile.from_store(
            social_id=s.social_id,
            username=s.username,
            profile_url=s.profile_url,
            platform=s.platform,
        )
        for s in response.socials
    ]


class ArtistClient(RecoupApiClient, ResultStore):
    async def fetch_socials(self, artist_id: str) -> FetchResult[list[SocialProfile]]:
        """GET /api/artist/socials?artist_account_id=... → {"status": "success", "socials": [...]}"""
        result = await self._request(
            "GET",
            self._url("/api/artist/socials"),
            _socials_adapter,
            operation="artist_socials",
            params={"artist_account_id": artist_id},
            artist_id=artist_id,
        )
        return result.map(_socials_to_domain)

    async def poll_status(self, run_id: str) -> FetchResult[RunStatusSnapshot]:
        """GET /api/apify/scraper?runId=... → {"status": "...", "datasetId": "...", "data": [...]}"""
        result = await self._request(
            "GET",
            self._url("/api/apify/scraper"),
            _run_status_adapter,
            operation="scraper_status",
            params={"runId": run_id},
            run_id=run_id,
        )
        return result.map(
            lambda r: RunStatusSnapshot(status=r.status, dataset_id=r.dataset_id, data=r.data)
        )

    async def fetch_pro_artist_ids(self) -> FetchResult[list[str]]:
        """GET /api/artists/pro → {"status": "success", "artists": ["<artist id>", ...]}"""
        result = await self._request(
            "GET",
            self._url("/api/artists/pro"),
            _pro_artists_adapter,
            operation="pro_artists",
        )
        return result.map(lambda r: list(r.artists))
