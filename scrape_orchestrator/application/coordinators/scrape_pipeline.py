from collections.abc import Sequence

import structlog

from scrape_orchestrator.application.interfaces.event_publisher import EventPublisher
from scrape_orchestrator.application.interfaces.scrape_collaborators import ResultStore
from scrape_orchestrator.application.services.batcher import run_in_batches
from scrape_orchestrator.application.services.deadline import Deadline
from scrape_orchestrator.application.services.run_launcher import LaunchReport, RunLauncher
from scrape_orchestrator.application.services.run_poller import RunPoller
from scrape_orchestrator.application.services.target_selection import select_scrapable_targets
from scrape_orchestrator.domain.entities.scrape_outcome import ScrapeOutcome
from scrape_orchestrator.domain.entities.social_profile import SocialProfile
from scrape_orchestrator.domain.errors import NoRunsStartedError
from scrape_orchestrator.domain.events.domain_events import (
    DomainEvent,
    ScrapeOutcomeRecordedEvent,
    ScrapeRunFinishedEvent,
    ScrapeRunStartedEvent,
)

logger = structlog.get_logger(__name__)


class ScrapePipeline:
    """
    Drives one scrape invocation: read socials, filter, launch, poll until
    every run is terminal, let webhooks settle, re-read socials, report.

    Fatal conditions (nothing launched, deadline exhausted) raise; once runs
    are started the pipeline always returns a ScrapeOutcome.
    """

    def __init__(
        self,
        result_store: ResultStore,
        run_launcher: RunLauncher,
        poller: RunPoller,
        event_publisher: EventPublisher,
        *,
        socials_batch_size: int = 10,
        socials_batch_delay_seconds: float = 1.0,
        settle_delay_seconds: float = 10.0,
    ) -> None:
        self._store = result_store
        self._run_launcher = run_launcher
        self._poller = poller
        self._event_publisher = event_publisher
        self._socials_batch_size = socials_batch_size
        self._socials_batch_delay_seconds = socials_batch_delay_seconds
        self._settle_delay_seconds = settle_delay_seconds

    async def run_for_artists(
        self, artist_ids: Sequence[str], *, target: str, deadline: Deadline
    ) -> ScrapeOutcome:
        socials = await self.fetch_socials(artist_ids, deadline)
        selection = select_scrapable_targets(artist_ids, socials)
        if not selection.eligible:
            raise NoRunsStartedError("No valid scrape runs started for any artist")

        report = await self._run_launcher.launch(selection.eligible, deadline)
        report.require_started("No valid scrape runs started for any artist")
        return await self._complete(report, list(artist_ids), target=target, deadline=deadline)

    async def run_bulk_for_artist(self, artist_id: str, *, deadline: Deadline) -> ScrapeOutcome:
        report = await self._run_launcher.launch_for_artist(artist_id, deadline)
        report.require_started()
        return await self._complete(report, [artist_id], target=artist_id, deadline=deadline)

    async def fetch_socials(
        self, artist_ids: Sequence[str], deadline: Deadline
    ) -> dict[str, list[SocialProfile]]:
        """Socials per artist. Artists whose read failed are left out."""
        batch_report = await run_in_batches(
            artist_ids,
            self._socials_batch_size,
            self._store.fetch_socials,
            delay_seconds=self._socials_batch_delay_seconds,
            deadline=deadline,
            label="fetch_socials",
        )

        socials: dict[str, list[SocialProfile]] = {}
        for item_result in batch_report.results:
            result = item_result.value
            if result is None or not result.is_ok:
                reason = result.describe() if result is not None else str(item_result.error)
                logger.warning(
                    "failed_to_fetch_artist_socials", artist_id=item_result.item, reason=reason
                )
                continue
            socials[item_result.item] = list(result.data or [])
        return socials

    async def _complete(
        self,
        report: LaunchReport,
        artist_ids: list[str],
        *,
        target: str,
        deadline: Deadline,
    ) -> ScrapeOutcome:
        logger.info(
            "started_all_scrape_runs",
            target=target,
            total_runs=len(report.started),
            total_artists=len(artist_ids),
            run_ids=[h.run_id for h in report.started],
        )
        await self._event_publisher.publish_many(
            [
                ScrapeRunStartedEvent(
                    run_id=h.run_id,
                    dataset_id=h.dataset_id,
                    artist_id=h.artist_id,
                    social_id=h.target.social_id if h.target else None,
                )
                for h in report.started
            ]
        )

        results = await self._poller.poll_to_completion(report.started, deadline)

        # Webhooks write scraped data back asynchronously
        logger.info("waiting_for_webhooks", target=target, seconds=self._settle_delay_seconds)
        await deadline.sleep(self._settle_delay_seconds)

        affected = [a for a in artist_ids if self._has_runs(report, a)]
        updated_socials = await self.fetch_socials(affected, deadline)

        outcome = ScrapeOutcome(
            target=target,
            artist_ids=artist_ids,
            started_runs=report.started,
            start_failures=report.failed,
            results=results,
            updated_socials=updated_socials,
        )
        logger.info("scrape_runs_completed", **outcome.summary())

        events: list[DomainEvent] = [
            ScrapeRunFinishedEvent(
                run_id=r.run_id,
                dataset_id=r.dataset_id,
                status=r.status,
                record_count=len(r.data or []),
            )
            for r in results
        ]
        events.append(
            ScrapeOutcomeRecordedEvent(
                target=target,
                total_artists=len(artist_ids),
                total_runs=outcome.total_runs,
                succeeded=outcome.succeeded,
                failed=outcome.failed,
                start_failures=len(outcome.start_failures),
            )
        )
        await self._event_publisher.publish_many(events)
        return outcome

    @staticmethod
    def _has_runs(report: LaunchReport, artist_id: str) -> bool:
        # Bulk launches carry no per-run target; they always cover a single artist
        return any(h.artist_id in (artist_id, None) for h in report.started)
