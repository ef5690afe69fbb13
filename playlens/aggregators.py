"""
Aggregation primitives over a play list.

All functions are pure and total. None of them filters by content type;
callers pre-filter (e.g. to music only) when that matters.
"""

from __future__ import annotations

from typing import Dict, Sequence

from .frames import check_metric, plays_to_frame
from .models import Metric, Play

TRACK_KEY_SEPARATOR = "|||"


def _native(value):
    return value.item() if hasattr(value, "item") else value


def _sum_by(plays: Sequence[Play], key: str, metric: Metric) -> dict:
    column = check_metric(metric)
    df = plays_to_frame(plays)
    if df.empty:
        return {}
    totals = df.groupby(key, sort=False)[column].sum()
    return {_native(k): _native(v) for k, v in totals.items()}


def aggregate_by_day(plays: Sequence[Play], metric: Metric = "minutes") -> Dict[str, float]:
    """Metric per calendar date, keyed ``YYYY-MM-DD``."""
    return _sum_by(plays, "date", metric)


def aggregate_by_month(plays: Sequence[Play], metric: Metric = "minutes") -> Dict[str, float]:
    """Metric per month, keyed ``YYYY-MM``."""
    return _sum_by(plays, "month", metric)


def aggregate_by_year(plays: Sequence[Play], metric: Metric = "minutes") -> Dict[int, float]:
    return _sum_by(plays, "year", metric)


def aggregate_by_hour(plays: Sequence[Play], metric: Metric = "minutes") -> Dict[int, float]:
    """Metric per hour of day (0-23); hours without plays are absent."""
    return _sum_by(plays, "hour", metric)


def aggregate_by_artist(plays: Sequence[Play]) -> Dict[str, Dict[str, float]]:
    """Minutes and play count per artist name; plays without an artist are skipped."""
    df = plays_to_frame(plays)
    df = df[df["artist_name"].notna() & (df["artist_name"] != "")]
    if df.empty:
        return {}
    g = df.groupby("artist_name", sort=False).agg(minutes=("minutes", "sum"), count=("plays", "sum"))
    return {
        name: {"minutes": float(row["minutes"]), "count": int(row["count"])}
        for name, row in g.iterrows()
    }


def track_key(artist_name: str, track_name: str) -> str:
    return f"{artist_name}{TRACK_KEY_SEPARATOR}{track_name}"


def aggregate_by_track(plays: Sequence[Play]) -> Dict[str, Dict[str, object]]:
    """Minutes and play count per ``artist|||track``; plays missing either name are skipped."""
    df = plays_to_frame(plays)
    df = df[
        df["artist_name"].notna() & (df["artist_name"] != "")
        & df["track_name"].notna() & (df["track_name"] != "")
    ]
    if df.empty:
        return {}
    g = df.groupby(["artist_name", "track_name"], sort=False).agg(
        minutes=("minutes", "sum"), count=("plays", "sum")
    )
    out = {}
    for (artist, track), row in g.iterrows():
        out[track_key(artist, track)] = {
            "track_name": track,
            "artist_name": artist,
            "minutes": float(row["minutes"]),
            "count": int(row["count"]),
        }
    return out


def month_key_to_tuple(key: str) -> tuple:
    """``"2023-04"`` -> ``(2023, 4)``."""
    year, month = key.split("-")
    return int(year), int(month)
