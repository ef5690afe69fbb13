"""
Playlens - Spotify streaming-history analytics on pandas.

Turns exported listening history into plays you can aggregate.

Usage:
    from playlens import PlayCatalog, ingest_files, get_top_songs

    catalog = PlayCatalog.open("data")
    ingest_files(["my_spotify_data.zip"], catalog=catalog)
    catalog.save()

    top = get_top_songs(catalog.filtered_plays(), limit=10)
"""

from .models import Play, Source, GENRES, DEFAULT_GENRE
from .classifier import classify_content_type
from .parser import parse_play_record, parse_play_records
from .archive import extract_history_from_zip, parse_json_bytes
from .genre_mapper import GenreMapping, resolve_genre, map_artist_to_genre, get_all_genres
from .aggregators import (
    aggregate_by_day,
    aggregate_by_month,
    aggregate_by_year,
    aggregate_by_hour,
    aggregate_by_artist,
    aggregate_by_track,
)
from .analysis import (
    calculate_streaks,
    calculate_total_listening_time,
    calculate_total_plays,
    detect_phases,
    detect_rediscoveries,
    get_content_split,
    get_daily_data,
    get_genre_evolution,
    get_golden_year,
    get_monthly_data,
    get_peak_day,
    get_peak_hour,
    get_time_of_day_data,
    get_time_of_day_summary,
    get_top_albums,
    get_top_artists,
    get_top_episodes,
    get_top_genres,
    get_top_skipped_songs,
    get_top_songs,
    get_yearly_data,
    is_likely_skip,
)
from .analysis import __all__ as _analysis_all
from .catalog import CacheConfig, PlayCatalog
from .errors import (
    PlaylensError,
    UnsupportedFileError,
    ArchiveError,
    ConfigurationError,
    UnknownSourceError,
)
from .export import export_table, plays_to_frame, records_to_frame
from .filters import DateRange, FilterState, apply_filters
from .ingest import ImportResult, ingest_files
from .songs import get_song_id, matches_song_id

__version__ = "0.1.0"

__all__ = [
    # Model
    "Play",
    "Source",
    "GENRES",
    "DEFAULT_GENRE",
    # Ingestion
    "classify_content_type",
    "parse_play_record",
    "parse_play_records",
    "extract_history_from_zip",
    "parse_json_bytes",
    "ImportResult",
    "ingest_files",
    # Genres
    "GenreMapping",
    "resolve_genre",
    "map_artist_to_genre",
    "get_all_genres",
    # Aggregation
    "aggregate_by_day",
    "aggregate_by_month",
    "aggregate_by_year",
    "aggregate_by_hour",
    "aggregate_by_artist",
    "aggregate_by_track",
    # Catalog and filters
    "CacheConfig",
    "PlayCatalog",
    "DateRange",
    "FilterState",
    "apply_filters",
    # Errors
    "PlaylensError",
    "UnsupportedFileError",
    "ArchiveError",
    "ConfigurationError",
    "UnknownSourceError",
    # Export
    "export_table",
    "plays_to_frame",
    "records_to_frame",
    # Songs
    "get_song_id",
    "matches_song_id",
] + list(_analysis_all)
