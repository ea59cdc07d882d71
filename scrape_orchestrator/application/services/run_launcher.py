from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from scrape_orchestrator.application.interfaces.scrape_collaborators import ScrapeLauncher
from scrape_orchestrator.application.services.batcher import run_in_batches
from scrape_orchestrator.application.services.deadline import Deadline
from scrape_orchestrator.domain.entities.scrape_run import (
    LaunchFailure,
    LaunchResponse,
    RunHandle,
)
from scrape_orchestrator.domain.entities.social_profile import WorkItem
from scrape_orchestrator.domain.errors import LaunchError, NoRunsStartedError
from scrape_orchestrator.domain.results import FetchResult

logger = structlog.get_logger(__name__)


@dataclass
class LaunchReport:
    started: list[RunHandle] = field(default_factory=list)
    failed: list[LaunchFailure] = field(default_factory=list)

    def require_started(self, message: str = "No valid scrape runs started") -> None:
        if not self.started:
            raise NoRunsStartedError(message)


def _response_error(response: LaunchResponse) -> str | None:
    if response.error:
        return response.error
    if not response.run_id or not response.dataset_id:
        return "response is missing runId or datasetId"
    return None


class RunLauncher:
    """Starts scrape runs and sorts the responses into started and failed."""

    def __init__(
        self,
        launcher: ScrapeLauncher,
        *,
        batch_size: int = 3,
        batch_delay_seconds: float = 1.0,
    ) -> None:
        self._launcher = launcher
        self._batch_size = batch_size
        self._batch_delay_seconds = batch_delay_seconds

    async def launch(
        self, targets: Sequence[WorkItem], deadline: Deadline | None = None
    ) -> LaunchReport:
        """Issue exactly one start call per target, rate limited in batches."""
        report = LaunchReport()
        batch_report = await run_in_batches(
            targets,
            self._batch_size,
            lambda target: self._launcher.start(target.social_id),
            delay_seconds=self._batch_delay_seconds,
            deadline=deadline,
            label="scrape_socials",
        )

        for item_result in batch_report.results:
            target: WorkItem = item_result.item
            if not item_result.ok:
                self._record_failure(report, target, f"launch call raised: {item_result.error}")
                continue

            result: FetchResult[LaunchResponse] = item_result.value  # type: ignore[assignment]
            if not result.is_ok or result.data is None:
                self._record_failure(report, target, f"failed to start scrape: {result.describe()}")
                continue

            error = _response_error(result.data)
            if error:
                self._record_failure(report, target, error)
                continue

            handle = RunHandle(
                run_id=result.data.run_id,  # type: ignore[arg-type]
                dataset_id=result.data.dataset_id,  # type: ignore[arg-type]
                target=target,
            )
            report.started.append(handle)
            logger.info(
                "scrape_started_for_social",
                artist_id=target.artist_id,
                social_id=target.social_id,
                username=target.username,
                run_id=handle.run_id,
                dataset_id=handle.dataset_id,
            )

        logger.info(
            "scrape_launch_completed",
            requested=len(targets),
            started=len(report.started),
            failed=len(report.failed),
        )
        return report

    async def launch_for_artist(
        self, artist_id: str, deadline: Deadline | None = None
    ) -> LaunchReport:
        """Start runs for every social of one artist through the bulk endpoint."""
        deadline = deadline or Deadline.unbounded()
        result = await deadline.run(self._launcher.start_all(artist_id))
        if not result.is_ok or result.data is None:
            raise LaunchError(
                f"Failed to start artist social scrape for {artist_id}: {result.describe()}"
            )

        report = LaunchReport()
        for response in result.data:
            error = _response_error(response)
            if error:
                report.failed.append(LaunchFailure(target=response.run_id or artist_id, error=error))
                continue
            report.started.append(
                RunHandle(run_id=response.run_id, dataset_id=response.dataset_id)  # type: ignore[arg-type]
            )

        if report.failed:
            logger.warning(
                "some_scrape_runs_failed_to_start",
                artist_id=artist_id,
                errors=[{"target": str(f.target), "error": f.error} for f in report.failed],
            )
        logger.info(
            "scrape_launch_completed",
            artist_id=artist_id,
            started=len(report.started),
            failed=len(report.failed),
            run_ids=[h.run_id for h in report.started],
        )
        return report

    @staticmethod
    def _record_failure(report: LaunchReport, target: WorkItem, error: str) -> None:
        report.failed.append(LaunchFailure(target=target, error=error))
        logger.warning(
            "scrape_start_failed_for_social",
            artist_id=target.artist_id,
            social_id=target.social_id,
            username=target.username,
            error=error,
        )
