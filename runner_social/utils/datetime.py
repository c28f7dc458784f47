"""Helpers for working with UTC datetimes across the storage boundary."""

from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed as an aware UTC datetime.

    Naive values are assumed to already be UTC, which is how they are written
    to the database by :func:`ensure_naive_utc`.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_naive_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` converted to UTC without ``tzinfo``.

    SQLite ``DATETIME`` columns drop the offset, so every timestamp is stored as
    naive UTC and re-attached to UTC when it is read back.
    """

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)


__all__ = ["now_utc", "ensure_utc", "ensure_naive_utc"]
