"""Unit tests for the poll-to-completion engine."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from scrape_orchestrator.application.services.deadline import Deadline
from scrape_orchestrator.application.services.run_poller import RunPoller
from scrape_orchestrator.domain.entities.scrape_run import RunHandle, RunStatusSnapshot
from scrape_orchestrator.domain.enums.run_status import RunStatus
from scrape_orchestrator.domain.errors import DeadlineExceededError
from scrape_orchestrator.domain.results import FetchResult


def _status(status: str | None, data: list | None = None) -> FetchResult[RunStatusSnapshot]:
    return FetchResult.ok(RunStatusSnapshot(status=status, dataset_id="remote-ds", data=data))


def _make_store(script: dict[str, list]) -> tuple[MagicMock, list[str]]:
    """A result store that answers each run's status queries from ``script`` in order."""
    queues = {run_id: list(steps) for run_id, steps in script.items()}
    calls: list[str] = []

    async def poll_status(run_id: str) -> FetchResult[RunStatusSnapshot]:
        calls.append(run_id)
        step = queues[run_id].pop(0)
        if isinstance(step, Exception):
            raise step
        return step

    store = MagicMock()
    store.poll_status = AsyncMock(side_effect=poll_status)
    return store, calls


def _handle(run_id: str) -> RunHandle:
    return RunHandle(run_id=run_id, dataset_id=f"ds-{run_id}")


class TestPollToCompletion:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("concurrent", [True, False])
    async def test_results_in_input_order(self, concurrent: bool) -> None:
        store, calls = _make_store(
            {
                "r1": [_status("RUNNING"), _status("RUNNING"), _status("SUCCEEDED", [{"x": 1}])],
                "r2": [_status("FAILED")],
            }
        )
        poller = RunPoller(store, interval_seconds=0, concurrent=concurrent)

        results = await poller.poll_to_completion([_handle("r1"), _handle("r2")])

        assert [r.run_id for r in results] == ["r1", "r2"]
        assert results[0].status is RunStatus.SUCCEEDED
        assert results[0].data == [{"x": 1}]
        assert results[1].status is RunStatus.FAILED
        assert results[1].data is None
        assert calls.count("r1") == 3
        assert calls.count("r2") == 1

    @pytest.mark.asyncio
    async def test_sequential_mode_finishes_one_run_before_the_next(self) -> None:
        store, calls = _make_store(
            {
                "r1": [_status("RUNNING"), _status("SUCCEEDED")],
                "r2": [_status("SUCCEEDED")],
            }
        )
        poller = RunPoller(store, interval_seconds=0, concurrent=False)

        await poller.poll_to_completion([_handle("r1"), _handle("r2")])

        assert calls == ["r1", "r1", "r2"]

    @pytest.mark.asyncio
    async def test_transient_failures_are_retried(self) -> None:
        store, calls = _make_store(
            {
                "r1": [
                    RuntimeError("connection reset"),
                    FetchResult.absent("HTTP 503"),
                    FetchResult.invalid([{"msg": "bad"}]),
                    _status("SUCCEEDED", []),
                ],
            }
        )
        poller = RunPoller(store, interval_seconds=0)

        results = await poller.poll_to_completion([_handle("r1")])

        assert results[0].status is RunStatus.SUCCEEDED
        assert results[0].data == []
        assert len(calls) == 4

    @pytest.mark.asyncio
    @pytest.mark.parametrize("remote", [None, "", "READY", "RUNNING", "ABORTED", "TIMED-OUT"])
    async def test_unrecognized_statuses_keep_polling(self, remote: str | None) -> None:
        store, calls = _make_store({"r1": [_status(remote), _status("succeeded")]})
        poller = RunPoller(store, interval_seconds=0)

        results = await poller.poll_to_completion([_handle("r1")])

        assert results[0].status is RunStatus.SUCCEEDED
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_succeeded_without_data_yields_empty_list(self) -> None:
        store, _ = _make_store({"r1": [_status("SUCCEEDED", None)]})

        results = await RunPoller(store, interval_seconds=0).poll_to_completion([_handle("r1")])

        assert results[0].data == []

    @pytest.mark.asyncio
    async def test_failed_run_drops_returned_data(self) -> None:
        store, _ = _make_store({"r1": [_status("FAILED", [{"partial": True}])]})

        results = await RunPoller(store, interval_seconds=0).poll_to_completion([_handle("r1")])

        assert results[0].status is RunStatus.FAILED
        assert results[0].data is None

    @pytest.mark.asyncio
    async def test_result_keeps_dataset_id_from_the_handle(self) -> None:
        store, _ = _make_store({"r1": [_status("SUCCEEDED")]})

        results = await RunPoller(store, interval_seconds=0).poll_to_completion([_handle("r1")])

        assert results[0].dataset_id == "ds-r1"

    @pytest.mark.asyncio
    async def test_sleeps_before_each_status_query(self) -> None:
        store, _ = _make_store({"r1": [_status("RUNNING"), _status("SUCCEEDED")]})
        sleep = AsyncMock()
        poller = RunPoller(store, interval_seconds=10)

        await poller.poll_to_completion([_handle("r1")], Deadline(None, sleep=sleep))

        assert sleep.await_count == 2
        sleep.assert_awaited_with(10)

    @pytest.mark.asyncio
    async def test_empty_input_returns_empty_list(self) -> None:
        store, calls = _make_store({})

        assert await RunPoller(store, interval_seconds=0).poll_to_completion([]) == []
        assert calls == []

    @pytest.mark.asyncio
    async def test_deadline_ends_a_run_that_never_finishes(self) -> None:
        store = MagicMock()
        store.poll_status = AsyncMock(return_value=_status("RUNNING"))
        poller = RunPoller(store, interval_seconds=0.01)

        with pytest.raises(DeadlineExceededError):
            await poller.poll_to_completion([_handle("r1")], Deadline(0.1))
