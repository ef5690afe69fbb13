"""
Extraction of streaming-history JSON files from Spotify export archives.
"""

from __future__ import annotations

import io
import json
import logging
import zipfile
from pathlib import Path
from typing import Any, BinaryIO, List, NamedTuple, Union

from .config import HISTORY_FILE_PATTERN
from .errors import ArchiveError

logger = logging.getLogger(__name__)

ArchiveInput = Union[bytes, bytearray, str, Path, BinaryIO]


class HistoryFile(NamedTuple):
    filename: str
    content: List[Any]


def records_from_json(data: Any) -> List[Any]:
    """Records from a parsed JSON document: a top-level array or ``{"items": [...]}``."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        items = data.get("items")
        if isinstance(items, list):
            return items
    return []


def parse_json_bytes(raw: Union[bytes, str]) -> List[Any]:
    """Decode UTF-8 JSON text and return its records.

    Raises json.JSONDecodeError / UnicodeDecodeError on malformed input;
    callers at the file boundary decide how to recover.
    """
    if isinstance(raw, (bytes, bytearray)):
        raw = bytes(raw).decode("utf-8-sig")
    return records_from_json(json.loads(raw))


def parse_json_file(path: Union[str, Path]) -> List[Any]:
    return parse_json_bytes(Path(path).read_bytes())


def _open_zip(source: ArchiveInput) -> zipfile.ZipFile:
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(bytes(source))
    try:
        return zipfile.ZipFile(source, "r")
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Not a readable ZIP archive: {e}") from e


def is_history_file(filename: str) -> bool:
    return bool(HISTORY_FILE_PATTERN.search(filename))


def extract_history_from_zip(source: ArchiveInput) -> List[HistoryFile]:
    """
    Extract every ``Streaming_History*.json`` entry from a ZIP archive.

    Entries that fail to decode or parse are logged and skipped, as are
    entries with zero records. Order follows the archive's directory.

    Raises:
        ArchiveError: If ``source`` is not a ZIP archive
    """
    results: List[HistoryFile] = []
    with _open_zip(source) as zf:
        for info in zf.infolist():
            if info.is_dir() or not is_history_file(info.filename):
                continue
            try:
                records = parse_json_bytes(zf.read(info))
            except (ValueError, zipfile.BadZipFile, RuntimeError, OSError) as e:
                logger.warning("Error parsing %s: %s", info.filename, e)
                continue
            if records:
                results.append(HistoryFile(info.filename, records))
            else:
                logger.debug("Skipping empty history file %s", info.filename)
    logger.info("Extracted %d history file(s) from archive", len(results))
    return results
