"""Shared helpers for the analytics modules."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

import pandas as pd

from ..frames import check_metric, plays_to_frame
from ..models import ContentType, Metric, Play


def round_half_up(value: float) -> int:
    """Round halves away from zero for positive values (2.5 -> 3), unlike ``round``."""
    return int(math.floor(value + 0.5))


def percentage(part: float, total: float) -> float:
    return (part / total) * 100 if total > 0 else 0.0


def frame_for(plays: Sequence[Play], content_type: Optional[ContentType] = None) -> pd.DataFrame:
    df = plays_to_frame(plays)
    if content_type is not None:
        df = df[df["content_type"] == content_type]
    return df


def has_text(series: pd.Series) -> pd.Series:
    """Mask of non-null, non-empty string values."""
    return series.notna() & (series.astype("string").fillna("") != "")


def rank_groups(
    df: pd.DataFrame,
    keys: List[str],
    metric: Metric,
    limit: Optional[int] = None,
) -> pd.DataFrame:
    """
    Group ``df`` by ``keys`` and rank groups by the selected metric.

    Returns a frame with the key columns plus ``minutes`` (unrounded),
    ``play_count``, ``value`` and ``percentage``. Percentages are relative
    to the sum of ``value`` over all groups, not to the whole input. Ties
    keep first-appearance order.
    """
    column = check_metric(metric)
    if df.empty:
        return pd.DataFrame(columns=keys + ["minutes", "play_count", "value", "percentage"])
    g = (
        df.groupby(keys, sort=False)
        .agg(minutes=("minutes", "sum"), play_count=("plays", "sum"))
        .reset_index()
    )
    g["value"] = g["minutes"] if column == "minutes" else g["play_count"].astype("float64")
    total = float(g["value"].sum())
    g["percentage"] = g["value"] / total * 100 if total > 0 else 0.0
    g = g.sort_values("value", ascending=False, kind="stable").reset_index(drop=True)
    if limit is not None:
        g = g.head(limit)
    return g
