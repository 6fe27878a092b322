"""
Result envelope returned by every account mutation.

A mutation produces exactly one of:
- Success(payload)
- Failure(kind)

Consumers branch with ``match`` on the two variants. The fixed set of
failure kinds is the only error detail that crosses the external boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(StrEnum):
    """Reason codes surfaced to callers."""

    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class Success(Generic[T]):
    payload: T


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ErrorKind):
            raise TypeError(f"Failure kind must be an ErrorKind, got {self.kind!r}")


Result = Success[T] | Failure


def success(payload: T) -> Success[T]:
    return Success(payload=payload)


def failure(kind: ErrorKind) -> Failure:
    return Failure(kind=kind)
