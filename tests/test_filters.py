"""Tests for source, content and date filters."""

from datetime import datetime, timezone

import pytest

from playlens.filters import DateRange, FilterState, apply_filters, sanitize_selected_sources
from playlens.models import Source

NOW = datetime(2023, 6, 1, tzinfo=timezone.utc)


@pytest.fixture
def sources():
    return [Source("s1", "Me"), Source("s2", "Partner", enabled=True)]


def test_all_enabled_by_default(multi_year_plays, sources):
    assert len(apply_filters(multi_year_plays, sources)) == len(multi_year_plays)


def test_disabled_source_is_hidden(multi_year_plays, sources):
    sources[1].enabled = False
    visible = apply_filters(multi_year_plays, sources)
    assert {p.source_id for p in visible} == {"s1"}


def test_no_enabled_sources_means_no_plays(multi_year_plays):
    assert apply_filters(multi_year_plays, [Source("s1", "Me", enabled=False)]) == []
    assert apply_filters(multi_year_plays, []) == []


def test_selected_sources(multi_year_plays, sources):
    visible = apply_filters(multi_year_plays, sources, FilterState(selected_sources=("s2",)))
    assert {p.source_id for p in visible} == {"s2"}


def test_sanitize_selected_sources(sources):
    sources[0].enabled = False
    assert sanitize_selected_sources(("s1", "s2", "gone"), sources) == ("s2",)
    assert sanitize_selected_sources((), sources) == ()


def test_content_type(multi_year_plays, sources):
    podcasts = apply_filters(multi_year_plays, sources, FilterState(content_type="podcast"))
    assert [p.track_name for p in podcasts] == ["Episode 1"]
    music = apply_filters(multi_year_plays, sources, FilterState(content_type="music"))
    assert all(p.content_type == "music" for p in music)


def test_last_months(multi_year_plays, sources):
    state = FilterState(date_range=DateRange("last12"))
    visible = apply_filters(multi_year_plays, sources, state, now=NOW)
    assert {p.timestamp.year for p in visible} == {2022, 2023}
    assert all(p.timestamp >= datetime(2022, 6, 1, tzinfo=timezone.utc) for p in visible)

    state = FilterState(date_range=DateRange("last3"))
    visible = apply_filters(multi_year_plays, sources, state, now=NOW)
    assert {p.timestamp.year for p in visible} == {2023}


def test_custom_range(multi_year_plays, sources):
    state = FilterState(date_range=DateRange(
        "custom",
        start=datetime(2022, 7, 1, tzinfo=timezone.utc),
        end=datetime(2023, 5, 2),
    ))
    visible = apply_filters(multi_year_plays, sources, state)
    assert [p.track_name for p in visible] == ["Episode 1", "Return Single"]


def test_unknown_range():
    with pytest.raises(ValueError):
        DateRange("last100").bounds(NOW)


def test_selection_of_only_disabled_sources_falls_back_to_enabled(multi_year_plays, sources):
    sources[0].enabled = False
    state = FilterState(selected_sources=("s1",))
    visible = apply_filters(multi_year_plays, sources, state)
    assert {p.source_id for p in visible} == {"s2"}
