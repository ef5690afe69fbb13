"""Tests for the music/podcast split."""

import pytest

from playlens.analysis import get_content_split
from tests.conftest import make_play


def test_eighty_twenty():
    plays = [
        make_play("2023-01-01T00:00:00Z", "A", "T", 80 * 60000),
        make_play("2023-01-02T00:00:00Z", "Show", "Ep", 20 * 60000, content_type="podcast"),
    ]
    assert get_content_split(plays) == [{
        "year": 2023,
        "music_minutes": 80,
        "podcast_minutes": 20,
        "music_percentage": pytest.approx(80),
        "podcast_percentage": pytest.approx(20),
    }]


def test_split_per_year(multi_year_plays):
    split = get_content_split(multi_year_plays)
    assert [s["year"] for s in split] == [2022, 2023]
    assert split[0]["music_minutes"] == 6
    assert split[0]["podcast_minutes"] == 30
    assert split[1]["podcast_percentage"] == 0
    assert split[1]["music_percentage"] == pytest.approx(100)


def test_other_content_only_year():
    plays = [make_play("2023-01-01T00:00:00Z", None, None, 60000, content_type="other")]
    assert get_content_split(plays) == [{
        "year": 2023,
        "music_minutes": 0,
        "podcast_minutes": 0,
        "music_percentage": 0.0,
        "podcast_percentage": 0.0,
    }]


def test_empty():
    assert get_content_split([]) == []
