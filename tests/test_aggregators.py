"""Tests for the aggregation primitives."""

import pytest

from playlens.aggregators import (
    aggregate_by_artist,
    aggregate_by_day,
    aggregate_by_hour,
    aggregate_by_month,
    aggregate_by_track,
    aggregate_by_year,
    month_key_to_tuple,
    track_key,
)
from tests.conftest import make_play


def test_by_day(single_account_plays):
    daily = aggregate_by_day(single_account_plays)
    assert daily["2023-01-01"] == pytest.approx(3.0)
    assert daily["2023-01-02"] == pytest.approx(4.0)
    assert daily["2023-03-05"] == pytest.approx(200000 / 60000)
    assert len(daily) == 5


def test_by_day_conserves_total_minutes(single_account_plays):
    total_ms = sum(p.ms_played for p in single_account_plays)
    assert sum(aggregate_by_day(single_account_plays).values()) == pytest.approx(total_ms / 60000)


def test_by_month_and_year(single_account_plays):
    monthly = aggregate_by_month(single_account_plays)
    assert monthly == pytest.approx({"2023-01": 7.0, "2023-02": 7.0, "2023-03": 200000 / 60000})
    assert aggregate_by_year(single_account_plays, "plays") == {2023: 5}


def test_by_hour(single_account_plays):
    hourly = aggregate_by_hour(single_account_plays, "plays")
    assert hourly == {8: 1, 9: 1, 10: 1, 14: 1, 12: 1}


def test_day_boundaries_are_utc():
    plays = [make_play("2023-01-01T23:30:00-02:00", "A", "T", 60000)]
    assert list(aggregate_by_day(plays)) == ["2023-01-02"]
    assert list(aggregate_by_hour(plays)) == [1]


def test_by_artist_includes_all_content(single_account_plays):
    artists = aggregate_by_artist(single_account_plays)
    assert artists["Taylor Swift"] == {"minutes": pytest.approx(7.0), "count": 2}
    assert artists["News Daily"]["count"] == 1


def test_by_artist_skips_missing_names():
    plays = [make_play("2023-01-01T00:00:00Z", None, "T", 60000)]
    assert aggregate_by_artist(plays) == {}


def test_by_track_keeps_same_title_apart():
    plays = [
        make_play("2023-01-01T00:00:00Z", "A", "Intro", 60000),
        make_play("2023-01-01T01:00:00Z", "B", "Intro", 120000),
        make_play("2023-01-01T02:00:00Z", "A", "Intro", 60000),
        make_play("2023-01-01T03:00:00Z", "A", None, 60000),
    ]
    tracks = aggregate_by_track(plays)
    assert set(tracks) == {"A|||Intro", "B|||Intro"}
    assert tracks[track_key("A", "Intro")]["count"] == 2
    assert tracks["B|||Intro"]["minutes"] == pytest.approx(2.0)


def test_empty_input():
    assert aggregate_by_day([]) == {}
    assert aggregate_by_artist([]) == {}
    assert aggregate_by_track([]) == {}


def test_unknown_metric(single_account_plays):
    with pytest.raises(ValueError):
        aggregate_by_day(single_account_plays, "seconds")


def test_month_key_to_tuple():
    assert month_key_to_tuple("2023-04") == (2023, 4)
