"""
Custom exception hierarchy for the caption cache builder.

Every fatal condition of a run is reported as a subclass of
CaptionCacheError carrying the offending path and, where there is one,
the underlying cause.
"""
from pathlib import Path
from typing import Optional


class CaptionCacheError(Exception):
    """Base exception for all caption cache errors."""
    pass


class RootNotFoundError(CaptionCacheError):
    """Raised when the input directory is missing or is not a directory."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Input directory does not exist: {path}")


class _PathError(CaptionCacheError):
    action = "process"

    def __init__(self, path: Path, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        message = f"Failed to {self.action} {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class DirectoryEnumerationError(_PathError):
    """Raised when a directory of the input tree cannot be listed."""
    action = "list directory"


class ExtractionError(_PathError):
    """Raised when the resolution or caption of a candidate cannot be read."""
    action = "extract metadata from"


class CacheWriteError(_PathError):
    """Raised when the metadata cache file cannot be written."""
    action = "write metadata cache"


class CacheReadError(_PathError):
    """Raised when an existing metadata cache file cannot be loaded."""
    action = "read metadata cache"
