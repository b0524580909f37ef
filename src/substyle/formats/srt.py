"""SRT format parser and serializer."""

from datetime import timedelta
from enum import Enum, auto

from substyle.core.constants import SubtitleFormat
from substyle.core.errors import SubtitleParseError, TimingFormatError
from substyle.core.subtitle import Subtitle, SubtitleEntry
from substyle.core.timing import format_timing_line, parse_timing_line


class _State(Enum):
    INDEX = auto()
    TIMING = auto()
    TEXT = auto()


def parse_srt(content: str) -> Subtitle:
    """Parse SRT format string into Subtitle object.

    Parsing is permissive: a line that should be an index but is not an
    integer, or that should be a timing line but does not parse, is skipped
    without advancing. Blocks without text produce no entry.

    Args:
        content: SRT format string content

    Returns:
        Subtitle object containing parsed entries

    Raises:
        SubtitleParseError: If an entry's timing is inconsistent
    """
    entries: list[SubtitleEntry] = []
    state = _State.INDEX
    index = 0
    start = end = timedelta(0)
    text_lines: list[str] = []
    block_line = 0

    def flush() -> None:
        try:
            entries.append(
                SubtitleEntry(
                    index=max(index, 1),
                    start=start,
                    end=end,
                    text="\n".join(text_lines),
                )
            )
        except ValueError as e:
            raise SubtitleParseError(str(e), line=block_line) from e

    for line_num, raw_line in enumerate(content.splitlines(), start=1):
        line = raw_line.strip().lstrip("\ufeff")

        if not line:
            if text_lines:
                flush()
                text_lines = []
            state = _State.INDEX
            continue

        if state is _State.INDEX:
            try:
                index = int(line)
            except ValueError:
                continue
            block_line = line_num
            state = _State.TIMING
        elif state is _State.TIMING:
            try:
                start, end = parse_timing_line(line, SubtitleFormat.SRT)
            except TimingFormatError:
                continue
            state = _State.TEXT
        else:
            text_lines.append(line)

    if text_lines:
        flush()

    return Subtitle(entries=entries)


def serialize_srt(subtitle: Subtitle) -> str:
    """Serialize Subtitle object to SRT format string.

    Entries are numbered from 1 regardless of their stored index. Entries
    without visible text are left out, since an SRT block needs a text line.

    Args:
        subtitle: Subtitle object to serialize

    Returns:
        SRT format string
    """
    blocks = []

    written = (entry for entry in subtitle.entries if entry.text.strip())
    for i, entry in enumerate(written, start=1):
        timing = format_timing_line(entry.start, entry.end, SubtitleFormat.SRT)
        blocks.append(f"{i}\n{timing}\n{entry.text}\n\n")

    return "".join(blocks)
