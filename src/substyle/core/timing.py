"""Conversion between timedelta values and per-format time literals.

SRT uses ``HH:MM:SS,mmm``, WebVTT ``HH:MM:SS.mmm`` (hours optional on read)
and ASS ``H:MM:SS.cc`` with centisecond precision and an unpadded hour.
"""

import re
from datetime import timedelta

from substyle.core.constants import SubtitleFormat
from substyle.core.errors import TimingFormatError, UnsupportedFormatError

_SRT_TIME = re.compile(r"^(\d+):(\d{1,2}):(\d{1,2})(?:[,.](\d*))?$")
_VTT_TIME = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{1,2})(?:\.(\d*))?$")
_ASS_TIME = re.compile(r"^(\d+):(\d{1,2}):(\d{1,2})(?:[.,](\d*))?$")

_PATTERNS: dict[SubtitleFormat, re.Pattern[str]] = {
    SubtitleFormat.SRT: _SRT_TIME,
    SubtitleFormat.VTT: _VTT_TIME,
    SubtitleFormat.ASS: _ASS_TIME,
}

_EXPECTED: dict[SubtitleFormat, str] = {
    SubtitleFormat.SRT: "HH:MM:SS,mmm",
    SubtitleFormat.VTT: "HH:MM:SS.mmm or MM:SS.mmm",
    SubtitleFormat.ASS: "H:MM:SS.cc",
}

# Fraction digits kept by each format
_PRECISION: dict[SubtitleFormat, int] = {
    SubtitleFormat.SRT: 3,
    SubtitleFormat.VTT: 3,
    SubtitleFormat.ASS: 2,
}

ARROW = "-->"


def _pattern_for(fmt: SubtitleFormat) -> re.Pattern[str]:
    try:
        return _PATTERNS[fmt]
    except KeyError:
        raise UnsupportedFormatError(
            f"Format '{fmt}' has no time literal syntax"
        ) from None


def parse_time(text: str, fmt: SubtitleFormat) -> timedelta:
    """Parse a time literal of the given format.

    Args:
        text: Time literal, e.g. "00:01:02,500"
        fmt: Format the literal is written in

    Returns:
        Parsed duration

    Raises:
        TimingFormatError: If the literal is malformed
        UnsupportedFormatError: If the format has no time literal
    """
    pattern = _pattern_for(fmt)
    literal = text.strip()
    match = pattern.match(literal)
    if not match:
        raise TimingFormatError(
            f"Invalid {fmt.upper()} time '{literal}', expected '{_EXPECTED[fmt]}'"
        )

    hours_str, minutes_str, seconds_str, fraction = match.groups()
    hours = int(hours_str) if hours_str else 0
    minutes = int(minutes_str)
    seconds = int(seconds_str)
    if minutes >= 60 or seconds >= 60:
        raise TimingFormatError(
            f"Invalid {fmt.upper()} time '{literal}': "
            "minutes and seconds must be below 60"
        )

    # Fraction digits are a decimal fraction, truncated to the format precision
    precision = _PRECISION[fmt]
    digits = (fraction or "")[:precision].ljust(precision, "0")
    milliseconds = int(digits) * 10 ** (3 - precision)

    return timedelta(
        hours=hours, minutes=minutes, seconds=seconds, milliseconds=milliseconds
    )


def format_time(td: timedelta, fmt: SubtitleFormat) -> str:
    """Format a duration as a time literal of the given format.

    Sub-millisecond precision is truncated; ASS output additionally truncates
    to whole centiseconds.

    Raises:
        ValueError: If the duration is negative
        UnsupportedFormatError: If the format has no time literal
    """
    _pattern_for(fmt)
    if td < timedelta(0):
        raise ValueError(f"Cannot format negative duration {td}")

    # Integer division keeps durations over 24 hours intact
    total_ms = td // timedelta(milliseconds=1)
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    seconds, millis = divmod(rest, 1000)

    if fmt is SubtitleFormat.ASS:
        return f"{hours}:{minutes:02d}:{seconds:02d}.{millis // 10:02d}"
    separator = "," if fmt is SubtitleFormat.SRT else "."
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}{separator}{millis:03d}"


def parse_timing_line(line: str, fmt: SubtitleFormat) -> tuple[timedelta, timedelta]:
    """Parse a ``start --> end`` timing line.

    Anything after the end literal (WebVTT cue settings, SRT coordinates) is
    ignored.

    Raises:
        TimingFormatError: If the line has no arrow or either literal is invalid
    """
    if ARROW not in line:
        raise TimingFormatError(f"Invalid timing line '{line.strip()}', missing '-->'")

    start_part, end_part = line.split(ARROW, 1)
    end_tokens = end_part.split()
    if not end_tokens:
        raise TimingFormatError(f"Invalid timing line '{line.strip()}', missing end")

    return parse_time(start_part, fmt), parse_time(end_tokens[0], fmt)


def format_timing_line(start: timedelta, end: timedelta, fmt: SubtitleFormat) -> str:
    """Format a ``start --> end`` timing line."""
    return f"{format_time(start, fmt)} {ARROW} {format_time(end, fmt)}"
