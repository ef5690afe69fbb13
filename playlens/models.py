"""
Core data model: canonical play events, sources and genre tags.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Literal, Optional

ContentType = Literal["music", "podcast", "other"]
Metric = Literal["minutes", "plays"]

METRICS = ("minutes", "plays")

# Closed set of canonical genres used across genre analytics
GENRES = (
    "Pop",
    "Hip Hop",
    "R&B",
    "Rock",
    "Metal",
    "EDM",
    "House/Techno",
    "Indie/Alternative",
    "K-Pop",
    "Jazz",
    "Classical",
    "Latin",
    "Country",
    "Soundtrack",
    "Podcast",
    "Other",
)
DEFAULT_GENRE = "Other"


@dataclass(frozen=True)
class Play:
    """One normalized listening event.

    For podcasts ``track_name`` holds the episode name and ``artist_name``
    the show name.
    """

    id: str
    timestamp: datetime
    artist_name: Optional[str]
    track_name: Optional[str]
    album_name: Optional[str]
    spotify_track_uri: Optional[str]
    ms_played: int
    content_type: ContentType
    source_id: str
    artist_id: Optional[str] = None
    username: Optional[str] = None
    skipped: Optional[bool] = None

    @property
    def minutes(self) -> float:
        return self.ms_played / 60000


@dataclass
class Source:
    """One uploaded file or archive. ``enabled=None`` counts as enabled."""

    id: str
    name: str
    detected_username: Optional[str] = None
    enabled: Optional[bool] = None

    @property
    def is_enabled(self) -> bool:
        return self.enabled is not False

    def renamed(self, name: str) -> "Source":
        return replace(self, name=name)
