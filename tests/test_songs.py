"""Tests for song identifiers."""

from playlens.songs import get_song_id, matches_song_id, song_id_from_list, song_key_from_names
from tests.conftest import make_play


def test_uri_wins():
    play = make_play("2023-01-01T00:00:00Z", "A", "T", 1000, uri="spotify:track:1")
    assert get_song_id(play) == "spotify:track:1"
    assert matches_song_id(play, " spotify:track:1 ")
    assert matches_song_id(play, "A|||T")


def test_name_key():
    play = make_play("2023-01-01T00:00:00Z", " A ", "T", 1000)
    assert get_song_id(play) == "A|||T"
    assert song_key_from_names("A", "T") == "A|||T"


def test_missing_names_fall_back():
    play = make_play("2023-01-01T00:00:00Z", None, None, 1000, play_id="p1")
    assert get_song_id(play) == "unknown-artist|||p1"
    assert song_key_from_names("", "") == "unknown-artist|||unknown-track"


def test_song_id_from_list(single_account_plays):
    uri_play = make_play("2023-01-01T00:00:00Z", "Radiohead", "Creep", 1000, uri="spotify:track:creep")
    plays = single_account_plays + [uri_play]
    assert song_id_from_list(plays, "Taylor Swift", "Anti-Hero") == "Taylor Swift|||Anti-Hero"
    assert song_id_from_list([uri_play], "Radiohead", "Creep") == "spotify:track:creep"
    assert song_id_from_list(plays, "Nobody", "Nothing") == "Nobody|||Nothing"
