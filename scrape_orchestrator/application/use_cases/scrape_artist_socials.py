from dataclasses import dataclass, replace

import structlog

from scrape_orchestrator.application.coordinators.scrape_pipeline import ScrapePipeline
from scrape_orchestrator.application.interfaces.scrape_collaborators import SummaryNotifier
from scrape_orchestrator.application.services.deadline import Deadline
from scrape_orchestrator.domain.entities.job import ChatConfig
from scrape_orchestrator.domain.entities.scrape_outcome import ScrapeOutcome
from scrape_orchestrator.domain.errors import ConfigurationError

logger = structlog.get_logger(__name__)


@dataclass
class ScrapeArtistSocialsInput:
    artist_id: str | None
    # Use the per-artist bulk endpoint instead of one start call per social
    bulk: bool = False
    notification: ChatConfig | None = None


@dataclass
class ScrapeArtistSocialsOutput:
    outcome: ScrapeOutcome
    notified: bool = False


def build_summary_prompt(base_prompt: str | None, outcome: ScrapeOutcome) -> str:
    lines = [
        f"Social profile scrape finished for artist {outcome.target}.",
        f"Runs: {outcome.total_runs} ({outcome.succeeded} succeeded, {outcome.failed} failed).",
    ]
    if outcome.start_failures:
        lines.append(f"{len(outcome.start_failures)} profiles could not be scraped.")
    for profiles in outcome.updated_socials.values():
        for profile in profiles:
            lines.append(f"- {profile.platform.value.title()} @{profile.username}: {profile.profile_url}")
    if base_prompt:
        lines.extend(["", base_prompt])
    return "\n".join(lines)


class ScrapeArtistSocials:
    """
    Use case: scrape every social profile of one artist, wait for all runs
    to finish and re-read the artist's socials.

    When a notification target with an account is supplied, a summary
    request is handed to the chat service afterwards.
    """

    def __init__(
        self,
        pipeline: ScrapePipeline,
        notifier: SummaryNotifier,
        *,
        max_duration_seconds: float | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._notifier = notifier
        self._max_duration_seconds = max_duration_seconds

    async def execute(self, input_data: ScrapeArtistSocialsInput) -> ScrapeArtistSocialsOutput:
        if not input_data.artist_id:
            raise ConfigurationError("artist social scrape requires an artist_account_id")

        artist_id = input_data.artist_id
        logger.info("scrape_artist_socials", artist_id=artist_id, bulk=input_data.bulk)
        deadline = Deadline(self._max_duration_seconds)

        if input_data.bulk:
            outcome = await self._pipeline.run_bulk_for_artist(artist_id, deadline=deadline)
        else:
            outcome = await self._pipeline.run_for_artists(
                [artist_id], target=artist_id, deadline=deadline
            )

        if artist_id not in outcome.updated_socials:
            logger.warning("failed_to_fetch_updated_artist_socials", artist_id=artist_id)

        notified = False
        notification = input_data.notification
        if notification is not None and notification.account_id:
            prompt = build_summary_prompt(notification.prompt, outcome)
            await self._notifier.send_summary(
                replace(notification, prompt=prompt, artist_id=notification.artist_id or artist_id)
            )
            notified = True

        return ScrapeArtistSocialsOutput(outcome=outcome, notified=notified)
