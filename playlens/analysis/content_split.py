"""Music vs podcast listening per year."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..models import Play
from .common import frame_for, percentage, round_half_up


def get_content_split(plays: Sequence[Play]) -> List[Dict[str, Any]]:
    """
    Per year: music and podcast minutes and their shares of the two combined.

    Content classified as ``other`` still makes its year appear but counts
    toward neither side.
    """
    df = frame_for(plays)
    if df.empty:
        return []
    table = df.pivot_table(
        index="year", columns="content_type", values="minutes", aggfunc="sum", fill_value=0.0
    )
    out = []
    for year, row in table.sort_index().iterrows():
        music = float(row.get("music", 0.0))
        podcast = float(row.get("podcast", 0.0))
        total = music + podcast
        out.append({
            "year": int(year),
            "music_minutes": round_half_up(music),
            "podcast_minutes": round_half_up(podcast),
            "music_percentage": percentage(music, total),
            "podcast_percentage": percentage(podcast, total),
        })
    return out
