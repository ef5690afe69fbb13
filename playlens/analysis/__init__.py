"""
Listening analytics.

Read-only query functions over a list of plays: overview stats, top
lists, genres, time series, phases, rediscoveries and content split.
"""

from .content_split import get_content_split
from .genres import get_genre_evolution, get_top_genres
from .overview import (
    calculate_streaks,
    calculate_total_listening_time,
    calculate_total_plays,
    get_golden_year,
    get_peak_day,
)
from .phases import detect_phases
from .rediscoveries import detect_rediscoveries
from .time import (
    get_daily_data,
    get_monthly_data,
    get_peak_hour,
    get_time_of_day_data,
    get_time_of_day_summary,
    get_yearly_data,
)
from .top_items import (
    get_top_albums,
    get_top_artists,
    get_top_episodes,
    get_top_skipped_songs,
    get_top_songs,
    is_likely_skip,
)

__all__ = [
    # Overview
    "calculate_total_listening_time",
    "calculate_total_plays",
    "get_golden_year",
    "get_peak_day",
    "calculate_streaks",
    # Top items
    "get_top_songs",
    "get_top_artists",
    "get_top_albums",
    "get_top_episodes",
    "get_top_skipped_songs",
    "is_likely_skip",
    # Genres
    "get_top_genres",
    "get_genre_evolution",
    # Time
    "get_time_of_day_data",
    "get_monthly_data",
    "get_yearly_data",
    "get_daily_data",
    "get_peak_hour",
    "get_time_of_day_summary",
    # Story
    "detect_phases",
    "detect_rediscoveries",
    "get_content_split",
]
