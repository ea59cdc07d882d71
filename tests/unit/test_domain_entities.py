"""Unit tests for run results, outcomes, chat config and fetch results."""
import pytest

from scrape_orchestrator.domain.entities.job import ChatConfig, ScheduledJob
from scrape_orchestrator.domain.entities.scrape_outcome import ScrapeOutcome
from scrape_orchestrator.domain.entities.scrape_run import LaunchFailure, RunHandle, RunResult
from scrape_orchestrator.domain.entities.social_profile import SocialProfile, WorkItem
from scrape_orchestrator.domain.enums.run_status import RunStatus
from scrape_orchestrator.domain.results import FetchResult, FetchStatus


def _make_handle(run_id: str = "r1", artist_id: str = "a1") -> RunHandle:
    target = WorkItem(
        artist_id=artist_id,
        social_id=f"s-{run_id}",
        username="someone",
        profile_url="https://instagram.com/someone",
    )
    return RunHandle(run_id=run_id, dataset_id=f"ds-{run_id}", target=target)


def _make_job(**overrides) -> ScheduledJob:  # type: ignore[no-untyped-def]
    defaults = dict(
        id="job-1",
        title="Weekly socials",
        prompt="Summarize",
        schedule="0 9 * * 1",
        account_id="acc-1",
        artist_account_id="artist-1",
    )
    defaults.update(overrides)
    return ScheduledJob(**defaults)


class TestRunResult:
    def test_succeeded_copies_data(self) -> None:
        data = [{"post": 1}]
        result = RunResult.succeeded(_make_handle(), data)
        data.append({"post": 2})
        assert result.data == [{"post": 1}]
        assert result.status is RunStatus.SUCCEEDED

    def test_failed_has_no_data(self) -> None:
        result = RunResult.failed(_make_handle())
        assert result.status is RunStatus.FAILED
        assert result.data is None

    def test_rejects_pending_status(self) -> None:
        with pytest.raises(ValueError):
            RunResult(run_id="r1", dataset_id="d1", status=RunStatus.PENDING)

    def test_rejects_failed_with_data(self) -> None:
        with pytest.raises(ValueError):
            RunResult(run_id="r1", dataset_id="d1", status=RunStatus.FAILED, data=[])

    def test_handle_exposes_artist(self) -> None:
        assert _make_handle(artist_id="a9").artist_id == "a9"
        assert RunHandle(run_id="r", dataset_id="d").artist_id is None


class TestScrapeOutcome:
    def test_counts_and_summary(self) -> None:
        h1, h2, h3 = _make_handle("r1"), _make_handle("r2"), _make_handle("r3")
        outcome = ScrapeOutcome(
            target="a1",
            artist_ids=["a1"],
            started_runs=[h1, h2, h3],
            start_failures=[LaunchFailure(target="s-x", error="boom")],
            results=[
                RunResult.succeeded(h1, []),
                RunResult.failed(h2),
                RunResult.succeeded(h3, [{"x": 1}]),
            ],
            updated_socials={
                "a1": [
                    SocialProfile.from_store(
                        social_id="s1", username="u", profile_url="https://x.com/u"
                    )
                ]
            },
        )

        assert outcome.total_runs == 3
        assert outcome.succeeded == 2
        assert outcome.failed == 1
        assert outcome.summary() == {
            "target": "a1",
            "total_artists": 1,
            "total_runs": 3,
            "succeeded": 2,
            "failed": 1,
            "start_failures": 1,
            "refreshed_artists": ["a1"],
        }


class TestChatConfig:
    def test_from_job(self) -> None:
        config = ChatConfig.from_job(_make_job())
        assert config.prompt == "Summarize"
        assert config.account_id == "acc-1"
        assert config.artist_id == "artist-1"

    def test_merged_with_fills_unset_fields(self) -> None:
        fallback = ChatConfig(
            prompt="default", account_id="acc-d", room_id="room-d", artist_id="art-d", model="m"
        )
        merged = ChatConfig(prompt="mine", artist_id="art-1").merged_with(fallback)
        assert merged == ChatConfig(
            prompt="mine", account_id="acc-d", room_id="room-d", artist_id="art-1", model="m"
        )

    @pytest.mark.parametrize("enabled,disabled", [(None, False), (True, False), (False, True)])
    def test_only_explicit_false_disables_a_job(self, enabled: bool | None, disabled: bool) -> None:
        assert _make_job(enabled=enabled).is_disabled is disabled


class TestFetchResult:
    def test_map_transforms_ok_data(self) -> None:
        assert FetchResult.ok(2).map(lambda v: v * 10).data == 20

    def test_map_passes_failures_through(self) -> None:
        absent = FetchResult.absent("HTTP 404").map(lambda v: v)
        invalid = FetchResult.invalid([{"loc": ["x"]}]).map(lambda v: v)
        assert absent.status is FetchStatus.ABSENT and absent.reason == "HTTP 404"
        assert invalid.status is FetchStatus.INVALID and len(invalid.errors) == 1

    def test_unwrap_or_and_describe(self) -> None:
        assert FetchResult.absent("gone").unwrap_or([]) == []
        assert FetchResult.ok([1]).unwrap_or([]) == [1]
        assert FetchResult.absent("gone").describe() == "gone"
        assert FetchResult.invalid([{}, {}]).describe() == "invalid response (2 schema errors)"
        assert FetchResult.ok(1).describe() == "ok"
