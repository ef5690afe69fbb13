"""
Artist -> canonical genre resolution from a static mapping table.

The mapping file is a JSON object keyed by Spotify artist id or lowercase
artist name. Values are either a bare genre string or an object
``{"primaryGenre": ..., "rawGenres": [...]}``; both shapes are folded into
``GenreEntry`` once at load time.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from . import config
from .errors import ConfigurationError
from .models import DEFAULT_GENRE, GENRES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenreEntry:
    primary_genre: str
    raw_genres: Tuple[str, ...] = field(default_factory=tuple)


def _coerce_genre(value: Any) -> str:
    if isinstance(value, str) and value in GENRES:
        return value
    return DEFAULT_GENRE


def _to_entry(key: str, value: Any) -> GenreEntry:
    if isinstance(value, str):
        genre = _coerce_genre(value)
        if genre != value:
            logger.debug("Unknown genre %r for %r, using %s", value, key, DEFAULT_GENRE)
        return GenreEntry(genre)
    if isinstance(value, Mapping):
        primary = value.get("primaryGenre", value.get("primary_genre"))
        raw = value.get("rawGenres", value.get("raw_genres")) or ()
        return GenreEntry(_coerce_genre(primary), tuple(str(g) for g in raw))
    logger.debug("Unsupported mapping value for %r: %r", key, value)
    return GenreEntry(DEFAULT_GENRE)


class GenreMapping:
    """Read-only lookup table from artist id / name to a canonical genre."""

    def __init__(self, entries: Optional[Mapping[str, Any]] = None):
        self._entries: Dict[str, GenreEntry] = {
            str(k): _to_entry(str(k), v) for k, v in (entries or {}).items()
        }

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "GenreMapping":
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not read genre mapping {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Genre mapping {path} must be a JSON object")
        return cls(data)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def entry(self, key: str) -> Optional[GenreEntry]:
        return self._entries.get(key)

    def resolve(self, artist_id: Optional[str] = None, artist_name: Optional[str] = None) -> str:
        """Resolve a genre: artist id first, then normalized name, then exact name."""
        if artist_id:
            found = self._entries.get(artist_id)
            if found is not None:
                return found.primary_genre
        if artist_name:
            found = self._entries.get(artist_name.strip().lower())
            if found is None:
                # legacy entries keyed by exact casing
                found = self._entries.get(artist_name)
            if found is not None:
                return found.primary_genre
        return DEFAULT_GENRE

    def genres(self) -> List[str]:
        found = {e.primary_genre for e in self._entries.values()}
        found.add(DEFAULT_GENRE)
        return sorted(found)


@lru_cache(maxsize=1)
def default_mapping() -> GenreMapping:
    """The mapping at PLAYLENS_GENRE_MAPPING (or the bundled file), loaded once."""
    mapping = GenreMapping.from_json(config.GENRE_MAPPING_PATH)
    logger.debug("Loaded %d genre mapping entries from %s", len(mapping), config.GENRE_MAPPING_PATH)
    return mapping


def resolve_genre(
    artist_id: Optional[str] = None,
    artist_name: Optional[str] = None,
    mapping: Optional[GenreMapping] = None,
) -> str:
    """Map an artist to a canonical genre, ``"Other"`` when nothing matches."""
    mapping = mapping if mapping is not None else default_mapping()
    return mapping.resolve(artist_id, artist_name)


def map_artist_to_genre(artist_name: Optional[str], mapping: Optional[GenreMapping] = None) -> str:
    """Name-only lookup."""
    return resolve_genre(None, artist_name, mapping=mapping)


def get_all_genres(mapping: Optional[GenreMapping] = None) -> List[str]:
    """Sorted genres present in the mapping, always including ``"Other"``."""
    mapping = mapping if mapping is not None else default_mapping()
    return mapping.genres()
