"""Error types raised by repolog operations."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class RepologError(RuntimeError):
    """Base class for failures surfaced to the command line."""


class UnsupportedLanguageError(RepologError):
    """Raised when a language identifier is not in the registry."""

    def __init__(self, identifier: str, supported: Iterable[str] = ()) -> None:
        self.identifier = identifier
        choices = ", ".join(supported)
        message = f"Unsupported language: {identifier}"
        if choices:
            message += f" (expected one of: {choices})"
        super().__init__(message)


class FileReadError(RepologError):
    """Raised when a matched source file cannot be read as text."""

    def __init__(self, path: Path, reason: str | None = None) -> None:
        self.path = path
        message = f"Failed to read file: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class FileWriteError(RepologError):
    """Raised when a source file or the export output cannot be written."""

    def __init__(self, path: Path, reason: str | None = None) -> None:
        self.path = path
        message = f"Failed to write file: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class InvalidPathEncodingError(RepologError):
    """Raised when a path cannot be rendered as UTF-8 text for a title."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Invalid path: {path!r} is not valid UTF-8 text")


__all__ = [
    "FileReadError",
    "FileWriteError",
    "InvalidPathEncodingError",
    "RepologError",
    "UnsupportedLanguageError",
]
