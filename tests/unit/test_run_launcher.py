"""Unit tests for RunLauncher."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from scrape_orchestrator.application.services.run_launcher import LaunchReport, RunLauncher
from scrape_orchestrator.domain.entities.scrape_run import LaunchResponse
from scrape_orchestrator.domain.entities.social_profile import WorkItem
from scrape_orchestrator.domain.errors import LaunchError, NoRunsStartedError
from scrape_orchestrator.domain.results import FetchResult


def _make_target(social_id: str, artist_id: str = "artist-1") -> WorkItem:
    return WorkItem(
        artist_id=artist_id,
        social_id=social_id,
        username=f"user_{social_id}",
        profile_url=f"https://instagram.com/user_{social_id}",
    )


def _started(run_id: str) -> FetchResult[LaunchResponse]:
    return FetchResult.ok(LaunchResponse(run_id=run_id, dataset_id=f"ds-{run_id}"))


def _make_launcher(responses: dict[str, object]) -> MagicMock:
    async def start(social_id: str) -> FetchResult[LaunchResponse]:
        response = responses[social_id]
        if isinstance(response, Exception):
            raise response
        return response  # type: ignore[return-value]

    launcher = MagicMock()
    launcher.start = AsyncMock(side_effect=start)
    launcher.start_all = AsyncMock()
    return launcher


class TestLaunch:
    @pytest.mark.asyncio
    async def test_all_targets_start(self) -> None:
        launcher = _make_launcher({"s1": _started("r1"), "s2": _started("r2")})
        targets = [_make_target("s1"), _make_target("s2")]

        report = await RunLauncher(launcher, batch_delay_seconds=0).launch(targets)

        assert [h.run_id for h in report.started] == ["r1", "r2"]
        assert [h.target for h in report.started] == targets
        assert report.started[0].dataset_id == "ds-r1"
        assert report.failed == []

    @pytest.mark.asyncio
    async def test_partial_failures_are_recorded_per_target(self) -> None:
        launcher = _make_launcher(
            {
                "s1": _started("r1"),
                "s2": FetchResult.ok(LaunchResponse(error="Unsupported platform")),
                "s3": _started("r3"),
                "s4": FetchResult.ok(LaunchResponse(run_id="r4")),
                "s5": FetchResult.absent("HTTP 500"),
                "s6": RuntimeError("connection refused"),
            }
        )
        targets = [_make_target(f"s{i}") for i in range(1, 7)]

        report = await RunLauncher(launcher, batch_size=2, batch_delay_seconds=0).launch(targets)

        assert [h.run_id for h in report.started] == ["r1", "r3"]
        failed = {f.target.social_id: f.error for f in report.failed}  # type: ignore[union-attr]
        assert set(failed) == {"s2", "s4", "s5", "s6"}
        assert failed["s2"] == "Unsupported platform"
        assert "runId or datasetId" in failed["s4"]
        assert "HTTP 500" in failed["s5"]
        assert "connection refused" in failed["s6"]

    @pytest.mark.asyncio
    async def test_one_start_call_per_target(self) -> None:
        launcher = _make_launcher({f"s{i}": _started(f"r{i}") for i in range(7)})
        targets = [_make_target(f"s{i}") for i in range(7)]

        report = await RunLauncher(launcher, batch_size=3, batch_delay_seconds=0).launch(targets)

        assert launcher.start.await_count == 7
        assert sorted(c.args[0] for c in launcher.start.await_args_list) == sorted(
            t.social_id for t in targets
        )
        assert len(report.started) + len(report.failed) == len(targets)


class TestLaunchForArtist:
    @pytest.mark.asyncio
    async def test_splits_bulk_responses(self) -> None:
        launcher = MagicMock()
        launcher.start_all = AsyncMock(
            return_value=FetchResult.ok(
                [
                    LaunchResponse(run_id="r1", dataset_id="d1"),
                    LaunchResponse(error="Spotify is not supported"),
                    LaunchResponse(run_id="r3", dataset_id="d3"),
                ]
            )
        )

        report = await RunLauncher(launcher).launch_for_artist("artist-1")

        launcher.start_all.assert_awaited_once_with("artist-1")
        assert [h.run_id for h in report.started] == ["r1", "r3"]
        assert all(h.target is None for h in report.started)
        assert len(report.failed) == 1
        assert report.failed[0].target == "artist-1"

    @pytest.mark.asyncio
    async def test_non_ok_bulk_result_raises(self) -> None:
        launcher = MagicMock()
        launcher.start_all = AsyncMock(return_value=FetchResult.absent("HTTP 404"))

        with pytest.raises(LaunchError, match="HTTP 404"):
            await RunLauncher(launcher).launch_for_artist("artist-1")


class TestLaunchReport:
    def test_require_started_raises_when_empty(self) -> None:
        with pytest.raises(NoRunsStartedError, match="No valid scrape runs started"):
            LaunchReport().require_started()
