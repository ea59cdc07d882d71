"""
Wall-clock budget threaded through every wait and network call of a scrape.

Scrape runs have no natural upper bound, so each invocation carries a
Deadline; once it is spent, the next suspension point raises
DeadlineExceededError and the whole invocation aborts.
"""
import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from scrape_orchestrator.domain.errors import DeadlineExceededError

T = TypeVar("T")

SleepFn = Callable[[float], Awaitable[None]]


class Deadline:
    def __init__(
        self,
        max_seconds: float | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self.max_seconds = max_seconds
        self._clock = clock
        self._sleep = sleep
        self._expires_at = None if max_seconds is None else clock() + max_seconds

    @classmethod
    def unbounded(cls) -> "Deadline":
        return cls(None)

    @property
    def remaining(self) -> float | None:
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - self._clock())

    @property
    def expired(self) -> bool:
        remaining = self.remaining
        return remaining is not None and remaining <= 0

    def check(self) -> None:
        if self.expired:
            raise DeadlineExceededError(self.max_seconds)

    async def sleep(self, seconds: float) -> None:
        """Sleep, or raise if the budget runs out first."""
        self.check()
        remaining = self.remaining
        if remaining is not None and seconds >= remaining:
            await self._sleep(remaining)
            raise DeadlineExceededError(self.max_seconds)
        await self._sleep(seconds)

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` within the remaining budget."""
        remaining = self.remaining
        if remaining is None:
            return await awaitable
        if remaining <= 0:
            # Close the coroutine so it is not reported as never awaited
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise DeadlineExceededError(self.max_seconds)
        try:
            return await asyncio.wait_for(awaitable, timeout=remaining)
        except asyncio.TimeoutError as exc:
            raise DeadlineExceededError(self.max_seconds) from exc
