"""Core domain modules.

The converter and styler depend on ``substyle.formats`` and are imported from
their own modules.
"""

from substyle.core.constants import Position, SubtitleFormat
from substyle.core.errors import (
    InvalidOptionsError,
    SubstyleError,
    SubtitleIOError,
    SubtitleParseError,
    ThemeNotFoundError,
    TimingFormatError,
    UnsupportedFormatError,
)
from substyle.core.options import ConvertOptions, StyleOptions
from substyle.core.subtitle import Subtitle, SubtitleEntry
from substyle.core.theme import BUILTIN_THEMES, DEFAULT_THEME, Theme, ThemeRegistry
from substyle.core.timing import format_time, parse_time

__all__ = [
    "BUILTIN_THEMES",
    "DEFAULT_THEME",
    "ConvertOptions",
    "InvalidOptionsError",
    "Position",
    "StyleOptions",
    "SubstyleError",
    "Subtitle",
    "SubtitleEntry",
    "SubtitleFormat",
    "SubtitleIOError",
    "SubtitleParseError",
    "Theme",
    "ThemeNotFoundError",
    "ThemeRegistry",
    "TimingFormatError",
    "UnsupportedFormatError",
    "format_time",
    "parse_time",
]
