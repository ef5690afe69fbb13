"""
Batch import of uploaded history files.

Every file in a batch becomes one source. Per-file problems (unsupported
suffix, malformed JSON, corrupt archive entries) are recorded or logged and
never stop the rest of the batch; only unexpected failures mark the whole
import as failed.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

from tqdm import tqdm

from . import config
from .archive import extract_history_from_zip, parse_json_bytes
from .catalog import PlayCatalog
from .errors import ArchiveError, PlaylensError, UnsupportedFileError, handle_errors
from .models import Play, Source
from .parser import parse_play_records

logger = logging.getLogger(__name__)

FileInput = Union[str, Path, Tuple[str, bytes]]

USERNAME_KEYS = ("username", "user_name", "platformUserName", "accountName")
SUPPORTED_SUFFIXES = (".zip", ".json")

SUCCESS_MESSAGE = "Imported {plays} plays from {sources} source(s)."
EMPTY_MESSAGE = "No new plays found in the uploaded files."
FAILURE_MESSAGE = "Something went wrong while processing your files."


@dataclass
class ImportResult:
    plays: List[Play] = field(default_factory=list)
    sources: List[Source] = field(default_factory=list)
    errors: List[PlaylensError] = field(default_factory=list)
    failed: bool = False
    message: str = ""

    @property
    def imported(self) -> bool:
        return bool(self.plays) and not self.failed


def detect_file_kind(filename: str) -> Optional[str]:
    """Return ``"zip"`` or ``"json"`` from the filename suffix, None otherwise."""
    suffix = Path(filename).suffix.lower()
    if suffix in SUPPORTED_SUFFIXES:
        return suffix[1:]
    return None


def detect_username(records: Sequence[Any]) -> Optional[str]:
    for record in records:
        if not isinstance(record, dict):
            continue
        for key in USERNAME_KEYS:
            value = record.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return None


def build_source_name(filename: str, username: Optional[str] = None) -> str:
    if username:
        return username
    name = Path(filename).name
    kind = detect_file_kind(name)
    if kind is not None:
        return name[: -len(kind) - 1]
    return name


def _read_input(item: FileInput) -> Tuple[str, bytes]:
    if isinstance(item, tuple):
        name, payload = item
        return str(name), bytes(payload)
    path = Path(item)
    return path.name, path.read_bytes()


@handle_errors(default_return=[])
def _json_records(payload: bytes) -> List[Any]:
    return parse_json_bytes(payload)


def _zip_records(payload: bytes) -> List[Any]:
    records: List[Any] = []
    for entry in extract_history_from_zip(payload):
        records.extend(entry.content)
    return records


def _ingest_one(filename: str, payload: bytes, kind: str) -> Tuple[Optional[Source], List[Play]]:
    records = _zip_records(payload) if kind == "zip" else _json_records(payload)
    if not records:
        logger.info("No records in %s", filename)
        return None, []

    source_id = uuid.uuid4().hex
    username = detect_username(records)
    plays = parse_play_records(records, source_id)
    if not plays:
        logger.info("No valid plays in %s (%d records)", filename, len(records))
        return None, []

    source = Source(
        id=source_id,
        name=build_source_name(filename, username),
        detected_username=username,
        enabled=True,
    )
    logger.info("Parsed %d plays from %s", len(plays), filename)
    return source, plays


def ingest_files(
    files: Iterable[FileInput],
    catalog: Optional[PlayCatalog] = None,
    progress: bool = config.SHOW_PROGRESS,
) -> ImportResult:
    """
    Import a batch of files.

    Args:
        files: Paths, or ``(filename, bytes)`` pairs for in-memory uploads
        catalog: When given, new sources and plays are appended to it once
            the whole batch has been read; a failed batch leaves it untouched
        progress: Show a tqdm progress bar over the files

    Returns:
        ImportResult with the new plays and sources, per-file errors and
        a user-facing summary message.
    """
    result = ImportResult()
    items = list(files)
    try:
        for item in tqdm(items, desc="Importing files", unit="file", disable=not progress):
            filename, payload = _read_input(item)
            kind = detect_file_kind(filename)
            if kind is None:
                logger.warning("Unsupported file: %s", filename)
                result.errors.append(UnsupportedFileError(filename))
                continue

            try:
                source, plays = _ingest_one(filename, payload, kind)
            except ArchiveError as e:
                logger.warning("Skipping %s: %s", filename, e)
                result.errors.append(e)
                continue
            if source is None:
                continue
            result.sources.append(source)
            result.plays.extend(plays)
    except Exception:
        logger.exception("Import failed")
        result.failed = True
        result.message = FAILURE_MESSAGE
        return result

    if catalog is not None:
        for source in result.sources:
            catalog.add_source(source)
        catalog.add_plays(result.plays)

    if result.plays:
        result.message = SUCCESS_MESSAGE.format(plays=len(result.plays), sources=len(result.sources))
    else:
        result.message = EMPTY_MESSAGE
    logger.info(result.message)
    return result
