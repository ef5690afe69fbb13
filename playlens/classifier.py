"""
Content classification for raw streaming-history records.
"""

from __future__ import annotations

from typing import Any, Mapping

from .models import ContentType

# Podcast indicators are checked first: some export variants put track-like
# fields on episode records too.
PODCAST_FIELDS = (
    "episode_name",
    "episodeName",
    "episode_show_name",
    "episodeShowName",
    "show_name",
    "showName",
    "spotify_episode_uri",
    "spotifyEpisodeUri",
)

MUSIC_FIELDS = (
    "track_name",
    "trackName",
    "master_metadata_track_name",
    "artist_name",
    "artistName",
    "master_metadata_album_artist_name",
    "master_metadata_artist_name",
)


def _has_any(record: Mapping[str, Any], fields: tuple) -> bool:
    return any(record.get(f) for f in fields)


def classify_content_type(record: Mapping[str, Any]) -> ContentType:
    """Classify a raw record as ``music``, ``podcast`` or ``other``."""
    if not isinstance(record, Mapping):
        return "other"
    if _has_any(record, PODCAST_FIELDS):
        return "podcast"
    if _has_any(record, MUSIC_FIELDS):
        return "music"
    return "other"
