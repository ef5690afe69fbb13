"""
Filter state applied to the play catalog before analytics run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Literal, Optional, Sequence, Tuple

import pandas as pd

from .clock import Instant, as_utc_datetime
from .models import Metric, Play, Source

ContentFilter = Literal["music", "podcast", "both"]
DateRangeKind = Literal["all", "last12", "last6", "last3", "custom"]

_LAST_MONTHS = {"last12": 12, "last6": 6, "last3": 3}


@dataclass(frozen=True)
class DateRange:
    kind: DateRangeKind = "all"
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def bounds(self, now: Optional[Instant] = None) -> Tuple[Optional[datetime], Optional[datetime]]:
        """Inclusive (start, end) bounds; None means unbounded on that side."""
        if self.kind == "all":
            return None, None
        if self.kind == "custom":
            start = as_utc_datetime(self.start) if self.start is not None else None
            end = as_utc_datetime(self.end) if self.end is not None else None
            return start, end
        if self.kind not in _LAST_MONTHS:
            raise ValueError(f"Unknown date range {self.kind!r}")
        end = as_utc_datetime(now)
        start = (pd.Timestamp(end) - pd.DateOffset(months=_LAST_MONTHS[self.kind])).to_pydatetime()
        return start, end


@dataclass(frozen=True)
class FilterState:
    selected_sources: Tuple[str, ...] = field(default_factory=tuple)  # empty = all sources
    content_type: ContentFilter = "both"
    metric: Metric = "minutes"
    date_range: DateRange = field(default_factory=DateRange)


def sanitize_selected_sources(selected: Sequence[str], sources: Sequence[Source]) -> Tuple[str, ...]:
    """Drop selected ids that are not (or no longer) enabled sources."""
    if not selected:
        return tuple(selected)
    enabled = {s.id for s in sources if s.is_enabled}
    return tuple(sid for sid in selected if sid in enabled)


def apply_filters(
    plays: Sequence[Play],
    sources: Sequence[Source],
    filters: Optional[FilterState] = None,
    now: Optional[Instant] = None,
) -> List[Play]:
    """
    Plays visible under ``filters``.

    Only plays from enabled sources are kept; with no enabled source at
    all nothing is returned.
    """
    filters = filters or FilterState()
    enabled = {s.id for s in sources if s.is_enabled}
    if not enabled:
        return []
    out = [p for p in plays if p.source_id in enabled]

    selected = set(sanitize_selected_sources(filters.selected_sources, sources))
    if selected:
        out = [p for p in out if p.source_id in selected]

    if filters.content_type != "both":
        out = [p for p in out if p.content_type == filters.content_type]

    start, end = filters.date_range.bounds(now)
    if start is not None:
        out = [p for p in out if as_utc_datetime(p.timestamp) >= start]
    if end is not None:
        out = [p for p in out if as_utc_datetime(p.timestamp) <= end]
    return out
