"""
Time-series views: hour of day, daily, monthly and yearly listening.

Values are reported under a ``minutes`` key whatever the metric; with
``metric="plays"`` they are play counts. All series are rounded to whole
numbers and sorted chronologically.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from ..aggregators import (
    aggregate_by_day,
    aggregate_by_hour,
    aggregate_by_month,
    aggregate_by_year,
    month_key_to_tuple,
)
from ..clock import as_utc_datetime
from ..models import Metric, Play
from .common import round_half_up

NO_DATA_SUMMARY = "No listening data"


def get_time_of_day_data(plays: Sequence[Play], metric: Metric = "minutes") -> List[Dict[str, int]]:
    """Exactly 24 entries, zero-filled for hours without listening."""
    hourly = aggregate_by_hour(plays, metric)
    return [{"hour": hour, "minutes": round_half_up(hourly.get(hour, 0))} for hour in range(24)]


def get_monthly_data(plays: Sequence[Play], metric: Metric = "minutes") -> List[Dict[str, int]]:
    monthly = aggregate_by_month(plays, metric)
    out = []
    for key in sorted(monthly):
        year, month = month_key_to_tuple(key)
        out.append({"year": year, "month": month, "minutes": round_half_up(monthly[key])})
    return out


def get_yearly_data(plays: Sequence[Play], metric: Metric = "minutes") -> List[Dict[str, int]]:
    yearly = aggregate_by_year(plays, metric)
    return [{"year": year, "minutes": round_half_up(yearly[year])} for year in sorted(yearly)]


def get_daily_data(
    plays: Sequence[Play],
    year: Optional[int] = None,
    month: Optional[int] = None,
    metric: Metric = "minutes",
) -> List[Dict[str, Any]]:
    """Per-day series, optionally restricted to a year and/or month (UTC calendar)."""
    filtered = plays
    if year is not None:
        filtered = [p for p in filtered if as_utc_datetime(p.timestamp).year == year]
    if month is not None:
        filtered = [p for p in filtered if as_utc_datetime(p.timestamp).month == month]
    daily = aggregate_by_day(filtered, metric)
    return [
        {"date": date.fromisoformat(key), "minutes": round_half_up(daily[key])}
        for key in sorted(daily)
    ]


def get_peak_hour(plays: Sequence[Play], metric: Metric = "minutes") -> Optional[int]:
    """Hour with the highest metric value (earliest hour on ties)."""
    hourly = aggregate_by_hour(plays, metric)
    if not hourly:
        return None
    best, best_value = None, 0.0
    for hour in sorted(hourly):
        if hourly[hour] > best_value:
            best, best_value = hour, hourly[hour]
    return best


def _format_hour(hour: int) -> str:
    return f"{hour:02d}:00"


def get_time_of_day_summary(plays: Sequence[Play], metric: Metric = "minutes") -> str:
    """
    One-sentence summary of when listening happens.

    Takes the three hours with the highest values and reports the span
    between the earliest and latest of them.
    """
    hourly = aggregate_by_hour(plays, metric)
    hours = [h for h in range(24) if hourly.get(h, 0) > 0]
    if not hours:
        return NO_DATA_SUMMARY
    top = sorted(hours, key=lambda h: hourly[h], reverse=True)[:3]
    lo, hi = min(top), max(top)
    if lo == hi:
        return f"You mostly listen at {_format_hour(lo)}."
    return f"You mostly listen between {_format_hour(lo)} and {_format_hour(hi)}."
