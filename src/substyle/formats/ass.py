"""ASS (Advanced SubStation Alpha) format parser and serializer."""

import re
from collections.abc import Mapping

from substyle.core.constants import DEFAULT_STYLE_NAME, SubtitleFormat
from substyle.core.errors import SubtitleParseError, TimingFormatError
from substyle.core.subtitle import Subtitle, SubtitleEntry
from substyle.core.theme import DEFAULT_THEME, Theme, format_color
from substyle.core.timing import format_time, parse_time

SCRIPT_INFO_HEADER = "[Script Info]"
STYLES_HEADER = "[V4+ Styles]"
EVENTS_HEADER = "[Events]"

# Column order is fixed by the V4+ script format
STYLE_FORMAT = (
    "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, "
    "OutlineColour, BackColour, Bold, Italic, Underline, StrikeOut, "
    "ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, "
    "Alignment, MarginL, MarginR, MarginV, Encoding"
)
EVENT_FORMAT = (
    "Format: Layer, Start, End, Style, Name, "
    "MarginL, MarginR, MarginV, Effect, Text"
)

DIALOGUE_PREFIX = "Dialogue:"
# Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
_DIALOGUE_FIELDS = 10

_OVERRIDE_BLOCK = re.compile(r"\{[^}]*\}")


def parse_ass(content: str) -> Subtitle:
    """Parse ASS/SSA format string into Subtitle object.

    Only ``Dialogue:`` lines are read. The text field is everything after the
    ninth comma, so commas inside the text survive. Override blocks are
    stripped and ``\\N``/``\\n`` become newlines.

    Args:
        content: ASS or SSA format string content

    Returns:
        Subtitle object with entries numbered from 1, each bound to its style

    Raises:
        SubtitleParseError: If a dialogue line has too few fields or bad timing
    """
    entries: list[SubtitleEntry] = []

    for line_num, raw_line in enumerate(content.splitlines(), start=1):
        line = raw_line.strip()
        if not line.startswith(DIALOGUE_PREFIX):
            continue

        fields = line[len(DIALOGUE_PREFIX) :].split(",", _DIALOGUE_FIELDS - 1)
        if len(fields) < _DIALOGUE_FIELDS:
            raise SubtitleParseError(
                f"Invalid dialogue line, expected {_DIALOGUE_FIELDS} "
                f"comma-separated fields, got {len(fields)}",
                line=line_num,
            )

        try:
            start = parse_time(fields[1], SubtitleFormat.ASS)
            end = parse_time(fields[2], SubtitleFormat.ASS)
        except TimingFormatError as e:
            raise TimingFormatError(str(e), line=line_num) from e

        style = fields[3].strip() or None
        try:
            entries.append(
                SubtitleEntry(
                    index=len(entries) + 1,
                    start=start,
                    end=end,
                    text=_unescape_ass_text(fields[9]),
                    style_ref=style,
                )
            )
        except ValueError as e:
            raise SubtitleParseError(str(e), line=line_num) from e

    return Subtitle(entries=entries)


def serialize_ass(
    subtitle: Subtitle,
    *,
    styles: Mapping[str, Theme] | None = None,
    title: str = "Styled Subtitles",
    play_res: tuple[int, int] = (1920, 1080),
) -> str:
    """Serialize Subtitle object to a complete ASS document.

    The output always carries the script info, style and event sections.

    Args:
        subtitle: Subtitle object to serialize
        styles: Style name to theme mapping written to the style table;
            defaults to the default theme named "Default"
        title: Script title
        play_res: Script resolution as (PlayResX, PlayResY)

    Returns:
        ASS format string

    Raises:
        ValueError: If styles is empty
    """
    if styles is None:
        styles = {DEFAULT_STYLE_NAME: DEFAULT_THEME}
    if not styles:
        raise ValueError("At least one style is required")

    fallback_style = next(iter(styles))
    style_rows = "\n".join(
        format_style_row(theme, name=name) for name, theme in styles.items()
    )
    play_res_x, play_res_y = play_res

    header = f"""{SCRIPT_INFO_HEADER}
Title: {title}
ScriptType: v4.00+
WrapStyle: 0
ScaledBorderAndShadow: yes
YCbCr Matrix: TV.601
PlayResX: {play_res_x}
PlayResY: {play_res_y}

{STYLES_HEADER}
{STYLE_FORMAT}
{style_rows}

{EVENTS_HEADER}
{EVENT_FORMAT}
"""

    dialogue_lines = []
    for entry in subtitle.entries:
        # Format time as H:MM:SS.cc (centiseconds)
        start_time = format_time(entry.start, SubtitleFormat.ASS)
        end_time = format_time(entry.end, SubtitleFormat.ASS)
        style = entry.style_ref if entry.style_ref in styles else fallback_style
        text = _escape_ass_text(entry.text)
        dialogue_lines.append(
            f"{DIALOGUE_PREFIX} 0,{start_time},{end_time},{style},,0,0,0,,{text}\n"
        )

    return header + "".join(dialogue_lines)


def format_style_row(theme: Theme, *, name: str = DEFAULT_STYLE_NAME) -> str:
    """Format a theme as one ``Style:`` row in V4+ column order.

    Args:
        theme: Theme to render
        name: Style name written in the first column

    Returns:
        Style row without a trailing newline
    """
    fields = [
        name,
        theme.font_name,
        str(theme.font_size),
        format_color(theme.primary_color),
        format_color(theme.secondary_color),
        format_color(theme.outline_color),
        format_color(theme.back_color),
        _ass_bool(theme.bold),
        _ass_bool(theme.italic),
        "0",  # Underline
        "0",  # StrikeOut
        "100",  # ScaleX
        "100",  # ScaleY
        "0",  # Spacing
        "0",  # Angle
        str(theme.border_style),
        _ass_number(theme.outline),
        _ass_number(theme.shadow),
        str(theme.alignment),
        str(theme.margin_l),
        str(theme.margin_r),
        str(theme.margin_v),
        "1",  # Encoding
    ]
    return "Style: " + ",".join(fields)


def _ass_bool(value: bool) -> str:
    # ASS uses -1 for true
    return "-1" if value else "0"


def _ass_number(value: float) -> str:
    return f"{value:g}"


def _escape_ass_text(text: str) -> str:
    """Convert newlines to the ASS hard line break."""
    return text.replace("\r\n", "\n").replace("\n", "\\N")


def _unescape_ass_text(text: str) -> str:
    """Strip override blocks and convert ASS escapes to plain text.

    Args:
        text: Raw dialogue text field

    Returns:
        Plain text with literal newlines
    """
    text = _OVERRIDE_BLOCK.sub("", text)
    text = text.replace("\\N", "\n").replace("\\n", "\n")
    return text.replace("\\h", " ")
