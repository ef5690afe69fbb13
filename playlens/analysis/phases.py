"""
Phase detection: multi-month runs where one artist dominates music listening.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from .. import config
from ..frames import check_metric
from ..models import Metric, Play
from .common import frame_for, has_text


def _month_index(month_keys: pd.Series) -> np.ndarray:
    parts = month_keys.str.split("-", expand=True).astype("int64")
    return (parts[0] * 12 + parts[1] - 1).to_numpy()


def _month_dict(index: int) -> Dict[str, int]:
    year, month0 = divmod(int(index), 12)
    return {"year": year, "month": month0 + 1}


def _runs(mask: np.ndarray):
    """(start, stop) positions of each run of True values."""
    padded = np.concatenate(([False], mask, [False])).astype("int8")
    edges = np.flatnonzero(np.diff(padded))
    return zip(edges[::2], edges[1::2])


def detect_phases(
    plays: Sequence[Play],
    threshold: Optional[float] = None,
    metric: Metric = "minutes",
) -> List[Dict[str, Any]]:
    """
    Find artist phases.

    For each artist and month, the artist's share of all music listening
    in that month is computed under ``metric``. A phase is a maximal run of
    calendar-consecutive months at or above ``threshold`` percent lasting
    at least two months; its intensity is the peak share inside the run.
    Months with no global listening divide by 1 instead of 0, which
    inflates the share in that edge case.

    Returns:
        Up to five phases, strongest first
    """
    column = check_metric(metric)
    threshold = config.PHASE_THRESHOLD_PERCENT if threshold is None else threshold

    music = frame_for(plays, "music")
    if music.empty:
        return []
    global_monthly = music.groupby("month")[column].sum().astype("float64")
    global_monthly = global_monthly.where(global_monthly != 0, 1.0)

    with_artist = music[has_text(music["artist_name"])]
    phases = []
    for artist_name, artist_df in with_artist.groupby("artist_name", sort=False):
        monthly = artist_df.groupby("month")[column].sum().astype("float64")
        shares = monthly / global_monthly.reindex(monthly.index).fillna(1.0) * 100

        idx = _month_index(pd.Series(shares.index, dtype="string"))
        first = idx.min()
        span = idx.max() - first + 1
        pct = np.zeros(span)
        present = np.zeros(span, dtype=bool)
        pct[idx - first] = shares.to_numpy()
        present[idx - first] = True

        qualifies = present & (pct >= threshold)
        for start, stop in _runs(qualifies):
            if stop - start < config.MIN_PHASE_MONTHS:
                continue
            phases.append({
                "artist_name": artist_name,
                "start_month": _month_dict(first + start),
                "end_month": _month_dict(first + stop - 1),
                "intensity": float(pct[start:stop].max()),
            })

    phases.sort(key=lambda p: p["intensity"], reverse=True)
    return phases[:config.MAX_PHASES]
