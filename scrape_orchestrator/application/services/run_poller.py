"""
Poll-to-completion engine.

Every run is driven by its own loop: wait one interval, read the run status,
and stop once the run is SUCCEEDED or FAILED. A status read that fails is
logged and retried on the next tick; it never ends the run.

With ``concurrent=False`` runs are polled strictly one after another. The
default fans out one loop per run and joins them, which returns the same
results in the same order without a slow run delaying everyone behind it.
"""
import asyncio
from collections.abc import Sequence

import structlog

from scrape_orchestrator.application.interfaces.scrape_collaborators import ResultStore
from scrape_orchestrator.application.services.deadline import Deadline
from scrape_orchestrator.domain.entities.scrape_run import RunHandle, RunResult, RunStatusSnapshot
from scrape_orchestrator.domain.enums.run_status import RunStatus
from scrape_orchestrator.domain.errors import DeadlineExceededError, PollTransientError
from scrape_orchestrator.domain.state_machine.run_state_machine import RunStateMachine

logger = structlog.get_logger(__name__)


class RunPoller:
    def __init__(
        self,
        result_store: ResultStore,
        *,
        interval_seconds: float = 10.0,
        concurrent: bool = True,
        state_machine: RunStateMachine | None = None,
    ) -> None:
        self._store = result_store
        self._interval_seconds = interval_seconds
        self._concurrent = concurrent
        self._state_machine = state_machine or RunStateMachine()

    async def poll_to_completion(
        self, runs: Sequence[RunHandle], deadline: Deadline | None = None
    ) -> list[RunResult]:
        """Return one terminal result per run, in input order."""
        deadline = deadline or Deadline.unbounded()
        logger.info("polling_scrape_runs", total=len(runs), concurrent=self._concurrent)

        if self._concurrent:
            results = list(await asyncio.gather(*(self._poll_run(run, deadline) for run in runs)))
        else:
            results = []
            for run in runs:
                results.append(await self._poll_run(run, deadline))

        logger.info(
            "scrape_runs_polled",
            total=len(results),
            succeeded=sum(1 for r in results if r.status is RunStatus.SUCCEEDED),
            failed=sum(1 for r in results if r.status is RunStatus.FAILED),
        )
        return results

    async def _poll_run(self, run: RunHandle, deadline: Deadline) -> RunResult:
        state = RunStatus.PENDING
        attempts = 0

        while True:
            await deadline.sleep(self._interval_seconds)
            attempts += 1

            try:
                snapshot = await self._read_status(run, deadline)
            except PollTransientError as exc:
                logger.warning(
                    "scraper_status_unavailable",
                    run_id=run.run_id,
                    attempt=attempts,
                    reason=exc.reason,
                )
                continue

            state = self._state_machine.advance(state, snapshot.status)
            logger.info(
                "scraper_status_check",
                run_id=run.run_id,
                attempt=attempts,
                status=snapshot.status,
            )

            if state is RunStatus.SUCCEEDED:
                return RunResult.succeeded(run, snapshot.data)
            if state is RunStatus.FAILED:
                return RunResult.failed(run)

    async def _read_status(self, run: RunHandle, deadline: Deadline) -> RunStatusSnapshot:
        try:
            result = await deadline.run(self._store.poll_status(run.run_id))
        except DeadlineExceededError:
            raise
        except Exception as exc:
            raise PollTransientError(run.run_id, str(exc)) from exc

        if not result.is_ok or result.data is None:
            raise PollTransientError(run.run_id, result.describe())
        return result.data
