"""Subtitle format handlers.

Every supported format has one parser and one serializer; ``parse_subtitle``
and ``serialize_subtitle`` dispatch on ``SubtitleFormat``.
"""

from collections.abc import Mapping
from datetime import timedelta

from substyle.core.constants import PLAIN_TEXT_CUE_DURATION, SubtitleFormat
from substyle.core.errors import UnsupportedFormatError
from substyle.core.subtitle import Subtitle
from substyle.core.theme import Theme
from substyle.formats.ass import format_style_row, parse_ass, serialize_ass
from substyle.formats.srt import parse_srt, serialize_srt
from substyle.formats.txt import parse_txt, serialize_txt
from substyle.formats.vtt import parse_vtt, serialize_vtt


def parse_subtitle(
    content: str,
    fmt: SubtitleFormat,
    *,
    cue_duration: timedelta = PLAIN_TEXT_CUE_DURATION,
) -> Subtitle:
    """Parse content written in the given format.

    Args:
        content: Subtitle file content
        fmt: Format of the content
        cue_duration: Window synthesized per line for plain text

    Returns:
        Parsed Subtitle

    Raises:
        SubtitleParseError: If the content is structurally invalid
    """
    match fmt:
        case SubtitleFormat.SRT:
            return parse_srt(content)
        case SubtitleFormat.VTT:
            return parse_vtt(content)
        case SubtitleFormat.ASS:
            return parse_ass(content)
        case SubtitleFormat.TXT:
            return parse_txt(content, cue_duration=cue_duration)
        case _:
            raise UnsupportedFormatError(f"Unsupported input format: {fmt}")


def serialize_subtitle(
    subtitle: Subtitle,
    fmt: SubtitleFormat,
    *,
    styles: Mapping[str, Theme] | None = None,
    title: str = "Styled Subtitles",
    play_res: tuple[int, int] = (1920, 1080),
) -> str:
    """Serialize a Subtitle into the given format.

    ``styles``, ``title`` and ``play_res`` only apply to ASS output.
    """
    match fmt:
        case SubtitleFormat.SRT:
            return serialize_srt(subtitle)
        case SubtitleFormat.VTT:
            return serialize_vtt(subtitle)
        case SubtitleFormat.ASS:
            return serialize_ass(
                subtitle, styles=styles, title=title, play_res=play_res
            )
        case SubtitleFormat.TXT:
            return serialize_txt(subtitle)
        case _:
            raise UnsupportedFormatError(f"Unsupported output format: {fmt}")


__all__ = [
    "format_style_row",
    "parse_ass",
    "parse_srt",
    "parse_subtitle",
    "parse_txt",
    "parse_vtt",
    "serialize_ass",
    "serialize_srt",
    "serialize_subtitle",
    "serialize_txt",
    "serialize_vtt",
]
