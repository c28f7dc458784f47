"""Decorator that keeps persistence exceptions inside the repositories."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from runner_social.domain.results import Failure, FailureKind

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., object])


def store_operation(operation: str) -> Callable[[F], F]:
    """Convert SQLAlchemy errors raised by the wrapped method into a :class:`Failure`.

    The wrapped method returns :class:`~runner_social.domain.results.Ok` itself;
    on error the repository session is rolled back so it stays usable.
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except IntegrityError as exc:
                self.session.rollback()
                logger.warning("%s rejected by a constraint: %s", operation, exc.orig)
                return Failure(operation, str(exc.orig), FailureKind.CONFLICT)
            except SQLAlchemyError as exc:
                self.session.rollback()
                logger.error("%s failed: %s", operation, exc)
                return Failure(operation, str(exc), FailureKind.UNAVAILABLE)

        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = ["store_operation"]
