from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class FetchStatus(str, Enum):
    OK = "OK"
    INVALID = "INVALID"
    ABSENT = "ABSENT"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """
    Tagged outcome of a collaborator call.

    INVALID carries schema errors, ABSENT carries a reason (not found,
    transport failure, disabled record). Neither is ever raised.
    """

    status: FetchStatus
    data: T | None = None
    errors: list[dict[str, Any]] = field(default_factory=list)
    reason: str | None = None

    @classmethod
    def ok(cls, data: T) -> "FetchResult[T]":
        return cls(status=FetchStatus.OK, data=data)

    @classmethod
    def invalid(cls, errors: list[dict[str, Any]]) -> "FetchResult[T]":
        return cls(status=FetchStatus.INVALID, errors=list(errors))

    @classmethod
    def absent(cls, reason: str) -> "FetchResult[T]":
        return cls(status=FetchStatus.ABSENT, reason=reason)

    @property
    def is_ok(self) -> bool:
        return self.status is FetchStatus.OK

    def map(self, fn: Callable[[T], U]) -> "FetchResult[U]":
        """Transform OK data; INVALID and ABSENT pass through unchanged."""
        if self.is_ok and self.data is not None:
            return FetchResult.ok(fn(self.data))
        return FetchResult(status=self.status, errors=self.errors, reason=self.reason)

    def unwrap_or(self, default: T) -> T:
        if self.is_ok and self.data is not None:
            return self.data
        return default

    def describe(self) -> str:
        if self.status is FetchStatus.INVALID:
            return f"invalid response ({len(self.errors)} schema errors)"
        if self.status is FetchStatus.ABSENT:
            return self.reason or "no data"
        return "ok"
