"""Exceptions raised while loading consist files.

All of them derive from `ConsistError` (itself a `ValueError`), so callers can
surface any load failure with a single `except ConsistError`.
"""

from __future__ import annotations

from pathlib import Path


class ConsistError(ValueError):
    """Base class for consist loading failures."""


class ConsistParseError(ConsistError):
    """The file content could not be parsed into a consist."""


class STFError(ConsistParseError):
    """Structural failure in a legacy STF (.con) file."""

    def __init__(self, message: str, *, path: str | Path | None = None, line: int | None = None):
        self.path = None if path is None else str(path)
        self.line = line
        if self.path is not None and line is not None:
            message = f"{self.path}:{line}: {message}"
        elif self.path is not None:
            message = f"{self.path}: {message}"
        super().__init__(message)


class MalformedFieldError(ConsistError):
    """A field is present but its value cannot be interpreted."""


class UnsupportedFormatError(ConsistError):
    """The file extension matches no known consist encoding."""
