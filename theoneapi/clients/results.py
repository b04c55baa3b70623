from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class FailureReason(str, Enum):
    TRANSPORT = "transport"
    STATUS = "status"
    DECODE = "decode"
    NOT_FOUND = "not_found"


class FetchResult(Generic[T]):
    """Outcome of a single request: a value, or the reason there is none."""

    __slots__ = ("value", "failure", "status_code", "detail")

    def __init__(
        self,
        value: T | None = None,
        failure: FailureReason | None = None,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        self.value = value
        self.failure = failure
        self.status_code = status_code
        self.detail = detail

    @classmethod
    def success(cls, value: T, status_code: int | None = None) -> FetchResult[T]:
        return cls(value=value, status_code=status_code)

    @classmethod
    def failed(
        cls,
        reason: FailureReason,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> FetchResult[T]:
        return cls(failure=reason, status_code=status_code, detail=detail)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap_or_none(self) -> T | None:
        return self.value if self.ok else None

    def __repr__(self) -> str:
        if self.ok:
            return f"FetchResult(value={self.value!r})"
        return f"FetchResult(failure={self.failure.value!r}, status_code={self.status_code!r})"
