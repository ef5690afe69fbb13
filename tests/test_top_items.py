"""Tests for top-N rankings."""

import pytest

from playlens.analysis import (
    get_top_albums,
    get_top_artists,
    get_top_episodes,
    get_top_skipped_songs,
    get_top_songs,
    is_likely_skip,
)
from tests.conftest import make_play


def test_top_songs_by_minutes(single_account_plays):
    songs = get_top_songs(single_account_plays)
    assert [s["track_name"] for s in songs] == [
        "Here Comes the Sun", "Anti-Hero", "Creep", "Lavender Haze",
    ]
    assert songs[0] == {
        "track_name": "Here Comes the Sun",
        "artist_name": "The Beatles",
        "minutes": 5,
        "play_count": 1,
        "percentage": pytest.approx(5 / (46 / 3) * 100),
    }
    assert sum(s["percentage"] for s in songs) == pytest.approx(100)


def test_top_songs_excludes_podcasts(single_account_plays):
    names = {s["track_name"] for s in get_top_songs(single_account_plays)}
    assert "Morning Briefing" not in names


def test_top_songs_by_plays_keeps_first_appearance_on_ties(single_account_plays):
    songs = get_top_songs(single_account_plays, metric="plays")
    assert [s["track_name"] for s in songs] == [
        "Lavender Haze", "Anti-Hero", "Here Comes the Sun", "Creep",
    ]
    assert all(s["percentage"] == pytest.approx(25) for s in songs)


def test_top_songs_limit(single_account_plays):
    assert len(get_top_songs(single_account_plays, limit=2)) == 2
    assert get_top_songs([], limit=5) == []


def test_top_artists(single_account_plays):
    artists = get_top_artists(single_account_plays)
    assert [a["artist_name"] for a in artists] == [
        "Taylor Swift", "The Beatles", "Radiohead", "News Daily",
    ]
    taylor = artists[0]
    assert taylor["minutes"] == 7
    assert taylor["play_count"] == 2
    assert taylor["peak_month"] == {"year": 2023, "month": 1}


def test_peak_month_uses_minutes_not_plays():
    plays = [
        make_play("2023-01-01T00:00:00Z", "A", "T", 60000),
        make_play("2023-01-02T00:00:00Z", "A", "T", 60000),
        make_play("2023-02-01T00:00:00Z", "A", "T", 600000),
    ]
    artist = get_top_artists(plays, metric="plays")[0]
    assert artist["peak_month"] == {"year": 2023, "month": 2}


def test_top_albums(single_account_plays):
    albums = get_top_albums(single_account_plays)
    assert [(a["album_name"], a["artist_name"]) for a in albums] == [
        ("Abbey Road", "The Beatles"),
        ("Pablo Honey", "Radiohead"),
        ("Midnights", "Taylor Swift"),
    ]
    assert albums[1]["minutes"] == 3


def test_top_episodes(single_account_plays):
    episodes = get_top_episodes(single_account_plays)
    assert episodes == [{
        "episode_name": "Morning Briefing",
        "show_name": "News Daily",
        "minutes": 2,
        "play_count": 1,
        "percentage": pytest.approx(100),
    }]


def test_top_episodes_unknown_show():
    plays = [make_play("2023-01-01T00:00:00Z", None, "Ep 1", 60000, content_type="podcast")]
    assert get_top_episodes(plays)[0]["show_name"] == "Unknown Show"


def test_top_skipped_songs(multi_year_plays):
    skipped = get_top_skipped_songs(multi_year_plays)
    assert skipped == [{
        "track_name": "Return Single",
        "artist_name": "Comeback Artist",
        "skip_count": 1,
        "total_plays": 2,
        "skip_rate": pytest.approx(50),
    }]


def test_top_skipped_songs_order():
    plays = [
        make_play("2023-01-01T00:00:00Z", "A", "Often", 1000, skipped=True),
        make_play("2023-01-02T00:00:00Z", "A", "Often", 1000, skipped=True),
        make_play("2023-01-03T00:00:00Z", "A", "Often", 1000, skipped=False),
        make_play("2023-01-04T00:00:00Z", "B", "Always", 1000, skipped=True),
        make_play("2023-01-05T00:00:00Z", "C", "Rare", 1000, skipped=True),
        make_play("2023-01-06T00:00:00Z", "C", "Rare", 1000, skipped=False),
        make_play("2023-01-07T00:00:00Z", "D", "Never", 1000, skipped=False),
    ]
    names = [s["track_name"] for s in get_top_skipped_songs(plays)]
    assert names == ["Often", "Always", "Rare"]


def test_is_likely_skip():
    assert is_likely_skip(make_play("2023-01-01T00:00:00Z", "A", "T", 20000))
    assert is_likely_skip(make_play("2023-01-01T00:00:00Z", "A", "T", 200000, skipped=True))
    assert not is_likely_skip(make_play("2023-01-01T00:00:00Z", "A", "T", 200000))
