"""WebVTT format parser and serializer."""

from datetime import timedelta

import structlog

from substyle.core.constants import SubtitleFormat
from substyle.core.errors import SubtitleParseError, TimingFormatError
from substyle.core.subtitle import Subtitle, SubtitleEntry
from substyle.core.timing import ARROW, format_timing_line, parse_timing_line

logger = structlog.get_logger()

VTT_SIGNATURE = "WEBVTT"

# Blocks that carry no cue and are skipped as a whole
_NON_CUE_BLOCKS = ("NOTE", "STYLE", "REGION")


def _is_non_cue_block(line: str) -> bool:
    return any(
        line == keyword or line.startswith((f"{keyword} ", f"{keyword}\t"))
        for keyword in _NON_CUE_BLOCKS
    )


def parse_vtt(content: str) -> Subtitle:
    """Parse WebVTT format string into Subtitle object.

    The first line must start with ``WEBVTT``. Cue identifiers, NOTE, STYLE
    and REGION blocks are skipped, as are cues without text. Cues whose
    timing line does not parse are skipped with a warning.

    Args:
        content: WebVTT format string content

    Returns:
        Subtitle object with entries numbered from 1

    Raises:
        SubtitleParseError: If the signature line is missing or a cue's
            timing is inconsistent
    """
    lines = content.splitlines()
    if not lines or not lines[0].lstrip("\ufeff").startswith(VTT_SIGNATURE):
        raise SubtitleParseError("Invalid WebVTT file: missing WEBVTT header", line=1)

    entries: list[SubtitleEntry] = []
    text_lines: list[str] = []
    start = end = timedelta(0)
    cue_line = 0
    in_header = True
    in_cue = False
    skip_block = False
    block_started = False

    def flush() -> None:
        if not text_lines:
            return
        try:
            entries.append(
                SubtitleEntry(
                    index=len(entries) + 1,
                    start=start,
                    end=end,
                    text="\n".join(text_lines),
                )
            )
        except ValueError as e:
            raise SubtitleParseError(str(e), line=cue_line) from e

    for line_num, raw_line in enumerate(lines[1:], start=2):
        line = raw_line.strip()

        if not line:
            flush()
            text_lines = []
            in_header = in_cue = skip_block = block_started = False
            continue

        # Header metadata runs until the first blank line or timing line
        if in_header and ARROW in line:
            in_header = False
            block_started = True
        if in_header or skip_block:
            continue

        if not block_started:
            block_started = True
            if _is_non_cue_block(line):
                skip_block = True
                continue

        if ARROW in line:
            flush()
            text_lines = []
            try:
                start, end = parse_timing_line(line, SubtitleFormat.VTT)
            except TimingFormatError as e:
                logger.warning("vtt_cue_skipped", line=line_num, reason=str(e))
                in_cue = False
                skip_block = True
                continue
            cue_line = line_num
            in_cue = True
        elif in_cue:
            text_lines.append(line)
        # Anything else before the timing line is a cue identifier

    flush()

    return Subtitle(entries=entries)


def serialize_vtt(subtitle: Subtitle) -> str:
    """Serialize Subtitle object to WebVTT format string.

    Cues without visible text are left out.

    Args:
        subtitle: Subtitle object to serialize

    Returns:
        WebVTT format string, always starting with the signature line
    """
    blocks = [f"{VTT_SIGNATURE}\n\n"]

    for entry in subtitle.entries:
        if not entry.text.strip():
            continue
        timing = format_timing_line(entry.start, entry.end, SubtitleFormat.VTT)
        blocks.append(f"{timing}\n{entry.text}\n\n")

    return "".join(blocks)
