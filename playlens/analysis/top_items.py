"""
Top-N rankings: songs, artists, albums, podcast episodes and skipped songs.

Each function returns plain records (list of dicts) ordered by the
selected metric, descending. ``minutes`` is rounded to whole minutes;
``percentage`` is each entry's share of the listed entries' total.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..aggregators import aggregate_by_month, month_key_to_tuple
from ..config import SKIP_HEURISTIC_MS
from ..models import Metric, Play
from .common import frame_for, has_text, rank_groups, round_half_up

Record = Dict[str, Any]

UNKNOWN_SHOW = "Unknown Show"


def get_top_songs(plays: Sequence[Play], limit: int = 25, metric: Metric = "minutes") -> List[Record]:
    """Top music tracks, keyed by artist + track so same-named songs stay apart."""
    df = frame_for(plays, "music")
    df = df[has_text(df["track_name"]) & has_text(df["artist_name"])]
    ranked = rank_groups(df, ["artist_name", "track_name"], metric, limit)
    return [
        {
            "track_name": row["track_name"],
            "artist_name": row["artist_name"],
            "minutes": round_half_up(row["minutes"]),
            "play_count": int(row["play_count"]),
            "percentage": float(row["percentage"]),
        }
        for _, row in ranked.iterrows()
    ]


def _peak_month(plays: Sequence[Play]):
    monthly = aggregate_by_month(plays, "minutes")
    best, best_minutes = None, 0.0
    for key in sorted(monthly):
        if monthly[key] > best_minutes:
            best_minutes = monthly[key]
            best = key
    if best is None:
        return None
    year, month = month_key_to_tuple(best)
    return {"year": year, "month": month}


def get_top_artists(plays: Sequence[Play], limit: int = 25, metric: Metric = "minutes") -> List[Record]:
    """
    Top artists across music and podcasts (for podcasts the artist is the show).

    ``peak_month`` is the month with the most minutes for that artist,
    whatever the ranking metric.
    """
    df = frame_for(plays)
    df = df[has_text(df["artist_name"])]
    ranked = rank_groups(df, ["artist_name"], metric, limit)

    by_artist: Dict[str, List[Play]] = {}
    wanted = set(ranked["artist_name"])
    for p in plays:
        if p.artist_name in wanted:
            by_artist.setdefault(p.artist_name, []).append(p)

    return [
        {
            "artist_name": row["artist_name"],
            "minutes": round_half_up(row["minutes"]),
            "play_count": int(row["play_count"]),
            "percentage": float(row["percentage"]),
            "peak_month": _peak_month(by_artist.get(row["artist_name"], [])),
        }
        for _, row in ranked.iterrows()
    ]


def get_top_albums(plays: Sequence[Play], limit: int = 25, metric: Metric = "minutes") -> List[Record]:
    df = frame_for(plays, "music")
    df = df[has_text(df["album_name"]) & has_text(df["artist_name"])]
    ranked = rank_groups(df, ["artist_name", "album_name"], metric, limit)
    return [
        {
            "album_name": row["album_name"],
            "artist_name": row["artist_name"],
            "minutes": round_half_up(row["minutes"]),
            "play_count": int(row["play_count"]),
            "percentage": float(row["percentage"]),
        }
        for _, row in ranked.iterrows()
    ]


def get_top_episodes(plays: Sequence[Play], limit: int = 25, metric: Metric = "minutes") -> List[Record]:
    """Top podcast episodes; the show falls back to ``"Unknown Show"``."""
    df = frame_for(plays, "podcast")
    df = df[has_text(df["track_name"])].copy()
    df["show_name"] = df["artist_name"].where(has_text(df["artist_name"]), UNKNOWN_SHOW)
    ranked = rank_groups(df, ["show_name", "track_name"], metric, limit)
    return [
        {
            "episode_name": row["track_name"],
            "show_name": row["show_name"],
            "minutes": round_half_up(row["minutes"]),
            "play_count": int(row["play_count"]),
            "percentage": float(row["percentage"]),
        }
        for _, row in ranked.iterrows()
    ]


def get_top_skipped_songs(plays: Sequence[Play], limit: int = 25) -> List[Record]:
    """
    Music tracks with at least one skip, by skip count then skip rate.

    Only the record's own ``skipped`` flag counts; see ``is_likely_skip``
    for the looser duration-based heuristic.
    """
    df = frame_for(plays, "music")
    df = df[has_text(df["track_name"]) & has_text(df["artist_name"])].copy()
    if df.empty:
        return []
    df["skip"] = (df["skipped"] == True).astype("int64")  # noqa: E712
    g = (
        df.groupby(["artist_name", "track_name"], sort=False)
        .agg(skip_count=("skip", "sum"), total_plays=("plays", "sum"))
        .reset_index()
    )
    g = g[g["skip_count"] > 0].copy()
    g["skip_rate"] = g["skip_count"] / g["total_plays"] * 100
    g = g.sort_values(["skip_count", "skip_rate"], ascending=False, kind="stable").head(limit)
    return [
        {
            "track_name": row["track_name"],
            "artist_name": row["artist_name"],
            "skip_count": int(row["skip_count"]),
            "total_plays": int(row["total_plays"]),
            "skip_rate": float(row["skip_rate"]),
        }
        for _, row in g.iterrows()
    ]


def is_likely_skip(play: Play) -> bool:
    """Presentation heuristic: flagged as skipped, or listened to for under 30 seconds."""
    return play.skipped is True or play.ms_played < SKIP_HEURISTIC_MS
