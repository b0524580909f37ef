"""Constants and enums shared by the format and style modules."""

from datetime import timedelta
from enum import StrEnum


class SubtitleFormat(StrEnum):
    """Supported subtitle formats."""

    SRT = "srt"
    VTT = "vtt"
    ASS = "ass"
    TXT = "txt"

    @property
    def extension(self) -> str:
        """File extension written for this format."""
        return f".{self.value}"


class Position(StrEnum):
    """Vertical subtitle position."""

    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


# File extensions accepted on input; .ssa is read with the ASS parser
INPUT_EXTENSIONS: dict[str, SubtitleFormat] = {
    ".srt": SubtitleFormat.SRT,
    ".vtt": SubtitleFormat.VTT,
    ".ass": SubtitleFormat.ASS,
    ".ssa": SubtitleFormat.ASS,
    ".txt": SubtitleFormat.TXT,
}

# Formats that can be restyled in place
STYLED_FORMATS = frozenset({SubtitleFormat.ASS})

# Numpad-style alignment codes, bottom row is 1-3
POSITION_ALIGNMENT: dict[Position, int] = {
    Position.TOP: 8,
    Position.CENTER: 5,
    Position.BOTTOM: 2,
}

# Semi-transparent black, AABBGGRR
BACKGROUND_BOX_COLOR = 0x80000000

DEFAULT_STYLE_NAME = "Default"
PLAIN_TEXT_CUE_DURATION = timedelta(seconds=3)
