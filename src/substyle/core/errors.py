"""Error hierarchy for subtitle conversion and styling."""

from pathlib import Path


class SubstyleError(Exception):
    """Base class for all subtitle engine errors."""


class SubtitleIOError(SubstyleError):
    """Raised when a subtitle file cannot be read or written."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class SubtitleParseError(SubstyleError):
    """Raised when subtitle content is structurally invalid."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"Line {line}: {message}"
        super().__init__(message)


class TimingFormatError(SubtitleParseError):
    """Raised when a time literal does not match its format."""


class UnsupportedFormatError(SubstyleError, LookupError):
    """Raised when a file extension or format name maps to no known format."""


class ThemeNotFoundError(SubstyleError, LookupError):
    """Raised when a theme name is not in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Theme '{name}' not found")


class InvalidOptionsError(SubstyleError, ValueError):
    """Raised when a caller passes an empty or invalid argument."""
