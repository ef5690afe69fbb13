"""Shared fixtures: small hand-built listening histories."""

from datetime import datetime, timezone

import pytest

from playlens.genre_mapper import GenreMapping
from playlens.models import Play


def make_play(
    ts,
    artist,
    track,
    ms,
    content_type="music",
    album=None,
    artist_id=None,
    source_id="s1",
    skipped=None,
    uri=None,
    play_id=None,
):
    timestamp = datetime.fromisoformat(ts.replace("Z", "+00:00"))
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return Play(
        id=play_id or f"{source_id}-{ts}-{track}",
        timestamp=timestamp,
        artist_name=artist,
        track_name=track,
        album_name=album,
        spotify_track_uri=uri,
        ms_played=ms,
        content_type=content_type,
        source_id=source_id,
        artist_id=artist_id,
        skipped=skipped,
    )


@pytest.fixture
def single_account_plays():
    return [
        make_play("2023-01-01T08:00:00Z", "Taylor Swift", "Lavender Haze", 180000,
                  album="Midnights", artist_id="artist-taylor"),
        make_play("2023-01-02T09:00:00Z", "Taylor Swift", "Anti-Hero", 240000),
        make_play("2023-02-01T10:00:00Z", "The Beatles", "Here Comes the Sun", 300000,
                  album="Abbey Road"),
        make_play("2023-02-10T14:00:00Z", "News Daily", "Morning Briefing", 120000,
                  content_type="podcast"),
        make_play("2023-03-05T12:00:00Z", "Radiohead", "Creep", 200000, album="Pablo Honey"),
    ]


@pytest.fixture
def phase_plays():
    return [
        make_play("2021-01-05T10:00:00Z", "Comeback Artist", "Old Hit", 200000),
        make_play("2021-01-06T10:00:00Z", "Comeback Artist", "Old Hit", 220000),
        make_play("2022-01-10T10:00:00Z", "Comeback Artist", "Return Single", 900000),
        make_play("2022-01-12T10:00:00Z", "Comeback Artist", "Return Single", 900000),
        make_play("2022-03-01T10:00:00Z", "Phase Artist", "Song A", 360000),
        make_play("2022-04-02T10:00:00Z", "Phase Artist", "Song B", 420000),
        make_play("2022-05-05T10:00:00Z", "Phase Artist", "Song C", 300000),
        make_play("2022-03-10T10:00:00Z", "Taylor Swift", "Lavender Haze", 180000),
        make_play("2022-04-11T10:00:00Z", "Taylor Swift", "Anti-Hero", 180000),
    ]


@pytest.fixture
def multi_year_plays():
    return [
        make_play("2022-06-01T20:00:00Z", "Taylor Swift", "Lavender Haze", 180000, source_id="s1"),
        make_play("2022-06-02T20:00:00Z", "Taylor Swift", "Lavender Haze", 180000, source_id="s1"),
        make_play("2022-07-15T21:00:00Z", "The Tech Pod", "Episode 1", 1800000,
                  content_type="podcast", source_id="s2"),
        make_play("2023-05-01T08:00:00Z", "Comeback Artist", "Return Single", 210000,
                  source_id="s2", skipped=True),
        make_play("2023-05-03T08:00:00Z", "Comeback Artist", "Return Single", 210000,
                  source_id="s2", skipped=False),
        make_play("2023-05-04T09:00:00Z", "Drake", "Hotline Bling", 240000, source_id="s1"),
    ]


@pytest.fixture
def genre_mapping():
    return GenreMapping({
        "artist-taylor": "Pop",
        "taylor swift": "Pop",
        "the beatles": {"primaryGenre": "Rock", "rawGenres": ["british invasion"]},
        "radiohead": "Indie/Alternative",
        "Sigur Rós": "Indie/Alternative",
    })
