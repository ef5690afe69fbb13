"""
Exception types and the error-handling decorator used at file boundaries.
"""

import logging
from functools import wraps
from typing import Any, Callable


class PlaylensError(Exception):
    """Base class for playlens errors."""
    pass


class UnsupportedFileError(PlaylensError):
    """Raised for an uploaded file that is neither a ZIP archive nor JSON."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"Unsupported file: {filename}")


class ArchiveError(PlaylensError):
    """Raised when a byte blob cannot be opened as a ZIP archive."""
    pass


class ConfigurationError(PlaylensError):
    """Exception for configuration-related errors (bad mapping file, bad values)."""
    pass


class UnknownSourceError(PlaylensError, KeyError):
    """Raised by catalog operations on a source id that was never added."""

    def __init__(self, source_id: str):
        self.source_id = source_id
        super().__init__(f"Unknown source: {source_id}")

    def __str__(self) -> str:
        return self.args[0]


def handle_errors(
    reraise: bool = False,
    default_return: Any = None,
    log_error: bool = True
):
    """
    Decorator for recovering from failures at a file-level boundary.

    Args:
        reraise: If True, re-raise the exception after logging
        default_return: Value to return on error (if not reraise)
        log_error: If True, log the error with traceback
    """
    def decorator(func: Callable) -> Callable:
        logger = logging.getLogger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if log_error:
                    logger.error(f"Error in {func.__name__}: {e}", exc_info=True)
                if reraise:
                    raise
                return default_return
        return wrapper
    return decorator
