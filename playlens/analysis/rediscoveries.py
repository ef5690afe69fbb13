"""
Rediscovery detection: returning to an artist after a long listening gap.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .. import config
from ..clock import as_utc_datetime
from ..models import Play


def _listening_periods(days: List[date]) -> List[Tuple[date, date]]:
    """Group sorted play dates into periods; a gap over PERIOD_GAP_DAYS starts a new one."""
    periods = []
    start = end = days[0]
    for day in days[1:]:
        if (day - end).days <= config.PERIOD_GAP_DAYS:
            end = day
        else:
            periods.append((start, end))
            start = end = day
    periods.append((start, end))
    return periods


def month_gap(earlier: date, later: date) -> int:
    """Whole calendar months between two dates, ignoring the day of month."""
    return (later.year - earlier.year) * 12 + (later.month - earlier.month)


def detect_rediscoveries(
    plays: Sequence[Play],
    min_gap_months: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Find artists the listener came back to after at least ``min_gap_months``.

    A rediscovery also needs at least 30 minutes of listening from the
    start of the returning period onward.

    Returns:
        Up to ten rediscoveries, longest gap first
    """
    if min_gap_months is None:
        min_gap_months = config.REDISCOVERY_GAP_MONTHS

    by_artist: Dict[str, List[Tuple[Any, Play]]] = {}
    for p in plays:
        if p.content_type != "music" or not p.artist_name:
            continue
        by_artist.setdefault(p.artist_name, []).append((as_utc_datetime(p.timestamp), p))

    found = []
    for artist_name, entries in by_artist.items():
        if len(entries) < 2:
            continue
        entries.sort(key=lambda e: e[0])
        periods = _listening_periods([ts.date() for ts, _ in entries])

        for (_, prev_end), (start, _) in zip(periods, periods[1:]):
            gap = month_gap(prev_end, start)
            if gap < min_gap_months:
                continue
            minutes_after = sum(p.ms_played for ts, p in entries if ts.date() >= start) / 60000
            if minutes_after >= config.REDISCOVERY_MIN_MINUTES:
                found.append({
                    "artist_name": artist_name,
                    "gap_months": gap,
                    "rediscovery_date": start,
                    "previous_period_end": prev_end,
                })

    found.sort(key=lambda r: r["gap_months"], reverse=True)
    return found[:config.MAX_REDISCOVERIES]
