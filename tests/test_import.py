"""Test that all public exports are importable."""

import pytest


def test_import_main():
    """Test importing main module."""
    import playlens
    assert hasattr(playlens, 'PlayCatalog')
    assert hasattr(playlens, '__version__')


def test_import_catalog():
    """Test importing catalog classes."""
    from playlens import CacheConfig, PlayCatalog
    assert CacheConfig is not None
    assert PlayCatalog is not None


def test_import_ingestion():
    """Test importing ingestion functions."""
    from playlens import (
        classify_content_type,
        extract_history_from_zip,
        ingest_files,
        parse_play_record,
        parse_play_records,
    )
    assert all([
        classify_content_type,
        extract_history_from_zip,
        ingest_files,
        parse_play_record,
        parse_play_records,
    ])


def test_import_analysis():
    """Test importing analytics functions."""
    from playlens import (
        calculate_streaks,
        detect_phases,
        detect_rediscoveries,
        get_content_split,
        get_genre_evolution,
        get_top_songs,
    )
    assert all([
        calculate_streaks,
        detect_phases,
        detect_rediscoveries,
        get_content_split,
        get_genre_evolution,
        get_top_songs,
    ])


def test_all_exports_resolve():
    """Every name in __all__ is an attribute of the package."""
    import playlens
    missing = [name for name in playlens.__all__ if not hasattr(playlens, name)]
    assert missing == []


def test_import_cli():
    """Test importing the CLI entry point."""
    from playlens.cli import main, AVAILABLE_TABLES
    assert callable(main)
    assert "top_songs" in AVAILABLE_TABLES


@pytest.mark.parametrize("genre", ["Pop", "Other", "Podcast"])
def test_genres_exported(genre):
    """Test the canonical genre list."""
    from playlens import GENRES
    assert genre in GENRES
