from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

import pandas as pd

from .frames import plays_to_frame

__all__ = ["export_table", "plays_to_frame", "records_to_frame"]


def _flatten(record: Mapping[str, Any]) -> Dict[str, Any]:
    # {"peak_month": {"year": 2023, "month": 5}} -> peak_month_year, peak_month_month
    out: Dict[str, Any] = {}
    for key, value in record.items():
        if isinstance(value, Mapping):
            for sub, v in value.items():
                out[f"{key}_{sub}"] = v
        else:
            out[key] = value
    return out


def records_to_frame(records: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """One row per analytics record; nested dicts become ``<key>_<subkey>`` columns."""
    rows: List[Dict[str, Any]] = [_flatten(r) for r in records]
    return pd.DataFrame(rows)


def export_table(df: pd.DataFrame, out: str) -> str:
    """Write a plays or analytics table to ``out`` (parquet or csv by suffix) and return the path written."""
    p = Path(out)
    p.parent.mkdir(parents=True, exist_ok=True)
    if p.suffix.lower() in [".parquet", ".pq"]:
        df.to_parquet(p, index=False)
    elif p.suffix.lower() == ".csv":
        df.to_csv(p, index=False)
    else:
        # default parquet
        df.to_parquet(p.with_suffix(".parquet"), index=False)
        return str(p.with_suffix(".parquet"))
    return str(p)
