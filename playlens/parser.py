"""
Normalization of raw streaming-history records into canonical plays.

Spotify has shipped several export schemas over the years (Account Data
``StreamingHistory*.json`` with camelCase fields, Extended Streaming
History with ``master_metadata_*`` fields, plus podcast variants). Each
logical field is resolved from an ordered list of candidate raw names;
the first non-empty value wins.
"""

from __future__ import annotations

import logging
import math
import uuid
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd

from .classifier import classify_content_type
from .config import ARTIST_URI_PREFIX
from .models import Play

logger = logging.getLogger(__name__)

TIMESTAMP_FIELDS = ("ts", "endTime")
TRACK_NAME_FIELDS = (
    "trackName",
    "master_metadata_track_name",
    "track_name",
    "episode_name",
    "episodeName",
    "episode_show_name",
    "show_name",
)
ARTIST_NAME_FIELDS = (
    "artistName",
    "master_metadata_artist_name",
    "master_metadata_album_artist_name",
    "artist_name",
    "episode_show_name",
    "show_name",
)
ALBUM_NAME_FIELDS = (
    "albumName",
    "master_metadata_album_name",
    "master_metadata_album_album_name",
    "album_name",
)
TRACK_URI_FIELDS = ("spotify_uri", "spotify_track_uri", "spotifyUri")
ARTIST_URI_FIELDS = ("spotify_artist_uri", "artist_uri")
ALBUM_ARTIST_URI_FIELDS = ("master_metadata_album_artist_uri",)
MS_PLAYED_FIELDS = ("msPlayed", "ms_played")
USERNAME_FIELDS = ("username", "user_name")


def first_string(record: Mapping[str, Any], fields: Iterable[str]) -> Optional[str]:
    """First non-empty string value among ``fields``."""
    for f in fields:
        value = record.get(f)
        if isinstance(value, str) and value:
            return value
    return None


def first_number(record: Mapping[str, Any], fields: Iterable[str]) -> Optional[float]:
    """First non-zero numeric value among ``fields`` (booleans are not numbers)."""
    for f in fields:
        value = record.get(f)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if value and not math.isnan(value):
            return value
    return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-ish timestamp string to a UTC-aware datetime; None if invalid.

    Offset-less values such as ``"2023-01-15 10:30"`` are taken as UTC.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    ts = pd.to_datetime(value.strip(), utc=True, errors="coerce")
    if pd.isna(ts):
        return None
    return ts.to_pydatetime()


def extract_artist_id(record: Mapping[str, Any]) -> Optional[str]:
    """Artist id from ``spotify:artist:<id>`` URIs, dedicated field before album-artist field."""
    for fields in (ARTIST_URI_FIELDS, ALBUM_ARTIST_URI_FIELDS):
        uri = first_string(record, fields)
        if uri and uri.startswith(ARTIST_URI_PREFIX):
            artist_id = uri[len(ARTIST_URI_PREFIX):]
            if artist_id:
                return artist_id
    return None


def make_play_id(source_id: str, timestamp: datetime) -> str:
    millis = int(timestamp.timestamp() * 1000)
    return f"{source_id}-{millis}-{uuid.uuid4().hex[:9]}"


def parse_play_record(record: Mapping[str, Any], source_id: str) -> Optional[Play]:
    """
    Normalize one raw record into a Play.

    Returns None (and drops the record) when there is no timestamp field,
    the timestamp does not parse, or the play duration is not positive.
    Privacy-sensitive fields (IP address, user agent, ...) are never copied.
    """
    if not isinstance(record, Mapping):
        return None

    raw_ts = first_string(record, TIMESTAMP_FIELDS)
    if raw_ts is None:
        logger.debug("Dropping record without timestamp")
        return None
    timestamp = parse_timestamp(raw_ts)
    if timestamp is None:
        logger.debug("Dropping record with unparseable timestamp: %s", raw_ts)
        return None

    ms_played = first_number(record, MS_PLAYED_FIELDS) or 0
    if ms_played <= 0:
        return None
    if isinstance(ms_played, float) and ms_played.is_integer():
        ms_played = int(ms_played)

    skipped = record.get("skipped")

    return Play(
        id=make_play_id(source_id, timestamp),
        timestamp=timestamp,
        artist_name=first_string(record, ARTIST_NAME_FIELDS),
        track_name=first_string(record, TRACK_NAME_FIELDS),
        album_name=first_string(record, ALBUM_NAME_FIELDS),
        spotify_track_uri=first_string(record, TRACK_URI_FIELDS),
        ms_played=ms_played,
        content_type=classify_content_type(record),
        source_id=source_id,
        artist_id=extract_artist_id(record),
        username=first_string(record, USERNAME_FIELDS),
        skipped=skipped if isinstance(skipped, bool) else None,
    )


def parse_play_records(records: Iterable[Any], source_id: str) -> List[Play]:
    """Normalize many records, keeping input order and dropping rejects."""
    plays = []
    total = 0
    for record in records:
        total += 1
        play = parse_play_record(record, source_id)
        if play is not None:
            plays.append(play)
    if total != len(plays):
        logger.debug("Dropped %d of %d records for source %s", total - len(plays), total, source_id)
    return plays
