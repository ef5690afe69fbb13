"""
Time source for the few computations that depend on "now".

Everything else in playlens is pure over its input; streaks and relative
date filters take an optional ``now`` and fall back to ``utc_now()``.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Union

Instant = Union[datetime, date]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc_datetime(value: Optional[Instant] = None) -> datetime:
    """Normalize ``value`` (default: now) to an aware UTC datetime.

    Naive datetimes are taken as UTC; plain dates become midnight UTC.
    """
    if value is None:
        return utc_now()
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def utc_today(now: Optional[Instant] = None) -> date:
    return as_utc_datetime(now).date()
