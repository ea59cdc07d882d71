"""
Rate-limited batching for calls against the shared Recoup API.

Items are processed in fixed-size groups. Calls inside a group run
concurrently; the next group starts only after every call of the current
group has settled and the inter-batch delay has elapsed.
"""
import asyncio
import math
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

import structlog

from scrape_orchestrator.application.services.deadline import Deadline
from scrape_orchestrator.domain.errors import ConfigurationError

logger = structlog.get_logger(__name__)

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class BatchItemResult(Generic[T, U]):
    item: T
    value: U | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport(Generic[T, U]):
    results: list[BatchItemResult[T, U]] = field(default_factory=list)
    batches: int = 0

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    def values(self) -> list[U | None]:
        return [r.value for r in self.results]


def split_into_batches(items: Sequence[T], size: int) -> list[list[T]]:
    if size < 1:
        raise ConfigurationError(f"Batch size must be at least 1, got {size}")
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


async def _capture(item: T, fn: Callable[[T], Awaitable[U]]) -> BatchItemResult[T, U]:
    try:
        return BatchItemResult(item=item, value=await fn(item))
    except Exception as exc:
        logger.warning("batch_item_failed", item=repr(item), error=str(exc))
        return BatchItemResult(item=item, error=exc)


async def run_in_batches(
    items: Sequence[T],
    size: int,
    fn: Callable[[T], Awaitable[U]],
    *,
    delay_seconds: float,
    deadline: Deadline | None = None,
    trailing_delay: bool = False,
    label: str = "batch",
) -> BatchReport[T, U]:
    """
    Apply ``fn`` to every item, ``size`` items at a time.

    Per-item exceptions are captured in the report and never cancel siblings.
    The delay after the last group is skipped unless ``trailing_delay`` is set.
    """
    groups = split_into_batches(items, size)
    deadline = deadline or Deadline.unbounded()
    report: BatchReport[T, U] = BatchReport()
    total = math.ceil(len(items) / size)

    for index, group in enumerate(groups):
        start = index * size
        logger.info(
            "batch_started",
            label=label,
            batch=index + 1,
            total_batches=total,
            batch_start=start + 1,
            batch_end=start + len(group),
            batch_size=len(group),
        )

        deadline.check()
        group_results = await deadline.run(
            asyncio.gather(*(_capture(item, fn) for item in group))
        )
        report.results.extend(group_results)
        report.batches += 1

        is_last = index == len(groups) - 1
        if delay_seconds > 0 and (trailing_delay or not is_last):
            await deadline.sleep(delay_seconds)

    return report
