"""
Stable song identifiers for "this exact song" lookups.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .aggregators import track_key
from .models import Play


def _build_key(artist_name: Optional[str], track_name: Optional[str], fallback: Optional[str] = None) -> str:
    artist = (artist_name or "").strip() or "unknown-artist"
    track = (track_name or "").strip() or fallback or "unknown-track"
    return track_key(artist, track)


def get_song_id(play: Play) -> str:
    """Track URI when known, else an ``artist|||track`` key."""
    return play.spotify_track_uri or _build_key(play.artist_name, play.track_name, play.id)


def matches_song_id(play: Play, song_id: str) -> bool:
    normalized = song_id.strip()
    return normalized == play.spotify_track_uri or normalized == _build_key(
        play.artist_name, play.track_name, play.id
    )


def song_key_from_names(artist_name: str, track_name: str) -> str:
    return _build_key(artist_name, track_name)


def song_id_from_list(plays: Sequence[Play], artist_name: str, track_name: str) -> str:
    """Song id of the first matching music play, or a name-based key when none matches."""
    for play in plays:
        if (
            play.content_type == "music"
            and play.artist_name == artist_name
            and play.track_name == track_name
        ):
            return get_song_id(play)
    return song_key_from_names(artist_name, track_name)
