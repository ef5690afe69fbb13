from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Literal, Optional

import pandas as pd

from . import config
from .errors import UnknownSourceError
from .filters import FilterState, apply_filters
from .frames import PLAY_FIELDS, frame_to_plays, plays_to_frame
from .models import Play, Source

logger = logging.getLogger(__name__)

SourceToggleMode = Literal["enable", "disable", "toggle"]

SOURCE_FIELDS = ["id", "name", "detected_username", "enabled"]
_STRING_PLAY_COLUMNS = [
    "id", "artist_name", "track_name", "album_name", "spotify_track_uri",
    "content_type", "source_id", "artist_id", "username",
]


def _default_data_dir() -> Path:
    return config.DATA_DIR


@dataclass
class CacheConfig:
    enabled: bool = True
    dir: Path = field(default_factory=_default_data_dir)
    fmt: str = field(default_factory=lambda: config.CACHE_FORMAT)  # parquet or csv

    def __post_init__(self):
        # Convert string paths to Path objects
        if isinstance(self.dir, str):
            self.dir = Path(self.dir)
        if self.fmt not in ("parquet", "csv"):
            raise ValueError(f"Unsupported cache format: {self.fmt!r}")


class PlayCatalog:
    """Sources and their plays, with optional on-disk tables + metadata.

    Plays are append-only; sources can be renamed, enabled/disabled, or the
    whole catalog cleared.
    """

    def __init__(self, cache: Optional[CacheConfig] = None):
        self.cache = cache or CacheConfig(enabled=False)
        self._sources: List[Source] = []
        self._plays: List[Play] = []

    # ------------------ State ------------------
    @property
    def sources(self) -> List[Source]:
        return list(self._sources)

    @property
    def plays(self) -> List[Play]:
        return list(self._plays)

    def has_data(self) -> bool:
        return bool(self._plays)

    def get_source(self, source_id: str) -> Source:
        for s in self._sources:
            if s.id == source_id:
                return s
        raise UnknownSourceError(source_id)

    def _replace_source(self, source_id: str, updated: Source) -> None:
        self.get_source(source_id)
        self._sources = [updated if s.id == source_id else s for s in self._sources]

    def add_source(self, source: Source) -> None:
        self._sources.append(source)

    def update_source_name(self, source_id: str, name: str) -> None:
        self._replace_source(source_id, self.get_source(source_id).renamed(name))

    def set_source_enabled(self, source_id: str, mode: SourceToggleMode = "toggle") -> None:
        source = self.get_source(source_id)
        if mode == "enable":
            enabled = True
        elif mode == "disable":
            enabled = False
        elif mode == "toggle":
            enabled = not source.is_enabled
        else:
            raise ValueError(f"Unknown toggle mode: {mode!r}")
        self._replace_source(source_id, replace(source, enabled=enabled))

    def set_all_sources_enabled(self, enabled: bool) -> None:
        self._sources = [replace(s, enabled=enabled) for s in self._sources]

    def add_plays(self, plays: Iterable[Play]) -> None:
        self._plays.extend(plays)

    def clear(self) -> None:
        self._sources = []
        self._plays = []

    def filtered_plays(self, filters: Optional[FilterState] = None, now=None) -> List[Play]:
        return apply_filters(self._plays, self._sources, filters, now=now)

    def play_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for p in self._plays:
            counts[p.source_id] = counts.get(p.source_id, 0) + 1
        return counts

    # ------------------ Persistence ------------------
    def _meta_path(self) -> Path:
        return self.cache.dir / "catalog_meta.json"

    def table_path(self, key: str) -> Path:
        return self.cache.dir / f"{key}.{self.cache.fmt}"

    def _write(self, key: str, df: pd.DataFrame) -> None:
        p = self.table_path(key)
        if self.cache.fmt == "parquet":
            df.to_parquet(p, index=False)
        else:
            df.to_csv(p, index=False)

    def _read(self, key: str, string_columns: List[str]) -> Optional[pd.DataFrame]:
        p = self.table_path(key)
        if not p.exists():
            return None
        if self.cache.fmt == "parquet":
            return pd.read_parquet(p)
        return pd.read_csv(p, dtype={c: "string" for c in string_columns})

    def save(self) -> None:
        if not self.cache.enabled:
            return
        self.cache.dir.mkdir(parents=True, exist_ok=True)
        plays_df = plays_to_frame(self._plays)[PLAY_FIELDS]
        sources_df = pd.DataFrame([asdict(s) for s in self._sources], columns=SOURCE_FIELDS)
        self._write("plays", plays_df)
        self._write("sources", sources_df)
        meta = {
            "saved_at": datetime.now(timezone.utc).isoformat(),
            "plays": len(self._plays),
            "sources": len(self._sources),
            "format": self.cache.fmt,
        }
        self._meta_path().write_text(json.dumps(meta, indent=2, sort_keys=True), encoding="utf-8")
        logger.info("Saved %d plays from %d sources to %s", len(self._plays), len(self._sources), self.cache.dir)

    def load_meta(self) -> dict:
        if not self.cache.enabled:
            return {}
        p = self._meta_path()
        if not p.exists():
            return {}
        return json.loads(p.read_text(encoding="utf-8"))

    def load(self) -> "PlayCatalog":
        """Replace in-memory state with the persisted tables (no-op when none exist)."""
        if not self.cache.enabled:
            return self
        sources_df = self._read("sources", ["id", "name", "detected_username"])
        plays_df = self._read("plays", _STRING_PLAY_COLUMNS)
        if sources_df is None or plays_df is None:
            return self
        self._sources = [_source_from_row(row) for row in sources_df.to_dict("records")]
        self._plays = frame_to_plays(plays_df)
        logger.info("Loaded %d plays from %d sources", len(self._plays), len(self._sources))
        return self

    @classmethod
    def open(cls, data_dir=None, fmt: Optional[str] = None) -> "PlayCatalog":
        cache = CacheConfig(
            enabled=True,
            dir=Path(data_dir) if data_dir else config.DATA_DIR,
            fmt=fmt or config.CACHE_FORMAT,
        )
        return cls(cache).load()


def _clean(value):
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


def _source_from_row(row: dict) -> Source:
    enabled = _clean(row.get("enabled"))
    if isinstance(enabled, str):
        enabled = enabled.strip().lower() == "true"
    return Source(
        id=str(row["id"]),
        name=str(_clean(row.get("name")) or ""),
        detected_username=_clean(row.get("detected_username")),
        enabled=None if enabled is None else bool(enabled),
    )
