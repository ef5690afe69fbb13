"""
Configuration module for playlens.

All environment variables and configuration constants are defined here.
"""

import os
import re
from pathlib import Path

from dotenv import load_dotenv

PACKAGE_DIR = Path(__file__).resolve().parent
BUNDLED_GENRE_MAPPING = PACKAGE_DIR / "data" / "genre_mapping.json"

# Load .env file early so environment variables are available
_env_path = Path.cwd() / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


def parse_bool_env(key: str, default: bool = True) -> bool:
    """Parse boolean environment variable."""
    value = os.environ.get(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")


def parse_int_env(key: str, default: int) -> int:
    """Parse integer environment variable, falling back to default on bad input."""
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def parse_float_env(key: str, default: float) -> float:
    """Parse float environment variable, falling back to default on bad input."""
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        return default


def parse_str_env(key: str, default: str) -> str:
    """Parse string environment variable (empty counts as unset)."""
    value = os.environ.get(key, "")
    return value if value.strip() else default


# ============================================================================
# PATHS AND STORAGE
# ============================================================================

DATA_DIR = Path(parse_str_env("PLAYLENS_DATA_DIR", str(Path.cwd() / "data")))
CACHE_FORMAT = parse_str_env("PLAYLENS_CACHE_FORMAT", "parquet")  # parquet or csv
GENRE_MAPPING_PATH = Path(parse_str_env("PLAYLENS_GENRE_MAPPING", str(BUNDLED_GENRE_MAPPING)))

# ============================================================================
# LOGGING
# ============================================================================

LOG_LEVEL = parse_str_env("PLAYLENS_LOG_LEVEL", "INFO")
LOG_DIR = os.environ.get("PLAYLENS_LOG_DIR") or None
SHOW_PROGRESS = parse_bool_env("PLAYLENS_PROGRESS", True)

# ============================================================================
# ANALYTICS DEFAULTS
# ============================================================================

PHASE_THRESHOLD_PERCENT = parse_float_env("PLAYLENS_PHASE_THRESHOLD", 5.0)
REDISCOVERY_GAP_MONTHS = parse_int_env("PLAYLENS_REDISCOVERY_GAP_MONTHS", 6)

MAX_PHASES = 5
MAX_REDISCOVERIES = 10
PERIOD_GAP_DAYS = 30  # plays further apart than this start a new listening period
REDISCOVERY_MIN_MINUTES = 30
MIN_PHASE_MONTHS = 2

# ============================================================================
# RECORD FORMAT CONSTANTS
# ============================================================================

MS_PER_MINUTE = 60000
ARTIST_URI_PREFIX = "spotify:artist:"
SKIP_HEURISTIC_MS = 30000  # presentation-side "likely skipped" cutoff

HISTORY_FILE_PATTERN = re.compile(r"Streaming_?History.*\.json$", re.IGNORECASE)
