"""
Tidy DataFrame view of a play list.

Every aggregation works on this frame: one row per play, calendar fields
derived from the UTC timestamp, and both metric columns precomputed.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Iterable, List

import numpy as np
import pandas as pd

from .config import MS_PER_MINUTE
from .models import METRICS, Metric, Play

PLAY_FIELDS = [f.name for f in fields(Play)]


def check_metric(metric: str) -> Metric:
    if metric not in METRICS:
        raise ValueError(f"Unknown metric {metric!r}, expected one of {METRICS}")
    return metric  # type: ignore[return-value]


def plays_to_frame(plays: Iterable[Play]) -> pd.DataFrame:
    """Convert plays into a DataFrame with derived calendar and metric columns."""
    plays = list(plays)
    df = pd.DataFrame({f: [getattr(p, f) for p in plays] for f in PLAY_FIELDS}, columns=PLAY_FIELDS)
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
    df["ms_played"] = df["ms_played"].astype("float64")

    ts = df["timestamp"].dt
    df["minutes"] = df["ms_played"] / MS_PER_MINUTE
    df["plays"] = np.ones(len(df), dtype="int64")
    df["date"] = ts.strftime("%Y-%m-%d")
    df["month"] = ts.strftime("%Y-%m")
    df["year"] = ts.year.astype("int64")
    df["hour"] = ts.hour.astype("int64")
    return df


def frame_to_plays(df: pd.DataFrame) -> List[Play]:
    """Rebuild Play objects from a frame produced by ``plays_to_frame`` (or a persisted copy)."""
    out = []
    timestamps = pd.to_datetime(df["timestamp"], utc=True, format="ISO8601")
    for ts, row in zip(timestamps, df[PLAY_FIELDS].to_dict("records")):
        clean = {k: (None if _is_missing(v) else v) for k, v in row.items()}
        clean["timestamp"] = ts.to_pydatetime()
        ms = float(clean["ms_played"])
        clean["ms_played"] = int(ms) if ms.is_integer() else ms
        if clean["skipped"] is not None:
            clean["skipped"] = bool(clean["skipped"])
        out.append(Play(**clean))
    return out


def _is_missing(value) -> bool:
    try:
        return value is None or bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
