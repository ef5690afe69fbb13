"""
Genre rankings and year-by-year genre evolution (music plays only).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from ..genre_mapper import GenreMapping, default_mapping
from ..models import Metric, Play
from .common import frame_for, rank_groups, round_half_up


def _with_genres(plays: Sequence[Play], mapping: Optional[GenreMapping]) -> pd.DataFrame:
    mapping = mapping if mapping is not None else default_mapping()
    df = frame_for(plays, "music").copy()
    df["genre"] = [
        mapping.resolve(artist_id, artist_name)
        for artist_id, artist_name in zip(df["artist_id"], df["artist_name"])
    ]
    return df


def get_top_genres(
    plays: Sequence[Play],
    metric: Metric = "minutes",
    mapping: Optional[GenreMapping] = None,
) -> List[Dict[str, Any]]:
    """Genres ranked by the selected metric, with their share of music listening."""
    ranked = rank_groups(_with_genres(plays, mapping), ["genre"], metric)
    return [
        {
            "genre": row["genre"],
            "minutes": round_half_up(row["minutes"]),
            "play_count": int(row["play_count"]),
            "percentage": float(row["percentage"]),
        }
        for _, row in ranked.iterrows()
    ]


def get_genre_evolution(
    plays: Sequence[Play],
    mapping: Optional[GenreMapping] = None,
) -> List[Dict[str, Any]]:
    """
    Per year, each genre's share of that year's music minutes.

    Every year present in ``plays`` gets an entry, so a podcast-only year
    has an empty genre list.
    """
    years = sorted(int(y) for y in frame_for(plays)["year"].unique())
    df = _with_genres(plays, mapping)
    result = []
    for year in years:
        year_df = df[df["year"] == year]
        minutes = year_df.groupby("genre", sort=False)["minutes"].sum()
        total = float(minutes.sum())
        genres = [
            {"genre": genre, "percentage": (float(m) / total) * 100 if total > 0 else 0.0}
            for genre, m in minutes.items()
        ]
        genres.sort(key=lambda g: g["percentage"], reverse=True)
        result.append({"year": year, "genres": genres})
    return result
