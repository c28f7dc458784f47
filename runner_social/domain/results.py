"""Tagged results returned by the store adapters.

Repositories never let persistence exceptions escape. A call returns either
:class:`Ok` wrapping the value (``None`` when a lookup found nothing) or a
:class:`Failure` describing what went wrong, and callers branch with
``isinstance``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

from .exceptions import StoreError

T = TypeVar("T")


class FailureKind(str, Enum):
    """Coarse classification of a store failure."""

    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful store call."""

    value: T


@dataclass(frozen=True)
class Failure:
    """Failed store call with the operation that was attempted."""

    operation: str
    reason: str
    kind: FailureKind = FailureKind.UNAVAILABLE

    @property
    def is_conflict(self) -> bool:
        return self.kind is FailureKind.CONFLICT


StoreResult = Union[Ok[T], Failure]


def unwrap(result: StoreResult[T]) -> T:
    """Return the value of ``result`` or raise :class:`StoreError`."""

    if isinstance(result, Failure):
        raise StoreError(result.operation, result.reason)
    return result.value


__all__ = ["Failure", "FailureKind", "Ok", "StoreResult", "unwrap"]
