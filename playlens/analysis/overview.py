"""
Overview statistics: totals, golden year, peak day and listening streaks.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

import numpy as np

from ..aggregators import aggregate_by_day, aggregate_by_year
from ..clock import Instant, utc_today
from ..models import Play
from .common import round_half_up

# A listening day needs at least this many aggregated minutes
MIN_LISTENING_MINUTES = 1


def calculate_total_listening_time(plays: Sequence[Play]) -> int:
    """Total listening time in whole hours."""
    total_ms = sum(p.ms_played for p in plays)
    return round_half_up(total_ms / 60000 / 60)


def calculate_total_plays(plays: Sequence[Play]) -> int:
    return len(plays)


def _argmax_key(values: Dict[Any, float]):
    # earliest key wins ties
    best, best_value = None, 0.0
    for key in sorted(values):
        if values[key] > best_value:
            best, best_value = key, values[key]
    return best


def get_golden_year(plays: Sequence[Play]) -> Optional[int]:
    """Year with the most listening minutes."""
    return _argmax_key(aggregate_by_year(plays, "minutes"))


def get_peak_day(plays: Sequence[Play]) -> Optional[date]:
    """Calendar day with the most listening minutes."""
    key = _argmax_key(aggregate_by_day(plays, "minutes"))
    return date.fromisoformat(key) if key else None


def calculate_streaks(plays: Sequence[Play], now: Optional[Instant] = None) -> Dict[str, Any]:
    """
    Longest and current runs of consecutive listening days.

    The current streak only counts when the last listening day is today or
    yesterday relative to ``now`` (defaults to the wall clock); otherwise
    it is 0 while the longest streak stays historical.

    Returns:
        Dict with longest_streak, current_streak and last_listening_date
        (a date, or None when there are no listening days)
    """
    daily = aggregate_by_day(plays, "minutes")
    days = sorted(key for key, minutes in daily.items() if minutes >= MIN_LISTENING_MINUTES)
    if not days:
        return {"longest_streak": 0, "current_streak": 0, "last_listening_date": None}

    ordinals = np.array([date.fromisoformat(d).toordinal() for d in days], dtype="int64")
    # run boundaries: positions where the gap to the previous day is not exactly 1
    breaks = np.flatnonzero(np.diff(ordinals) != 1) + 1
    starts = np.concatenate(([0], breaks))
    ends = np.concatenate((breaks, [len(ordinals)]))
    run_lengths = ends - starts

    last_day = date.fromordinal(int(ordinals[-1]))
    days_since = (utc_today(now) - last_day).days
    current = int(run_lengths[-1]) if days_since <= 1 else 0

    return {
        "longest_streak": int(run_lengths.max()),
        "current_streak": current,
        "last_listening_date": last_day,
    }
