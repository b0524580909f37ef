"""Plain text subtitle parser and serializer."""

from datetime import timedelta

from substyle.core.constants import PLAIN_TEXT_CUE_DURATION
from substyle.core.subtitle import Subtitle, SubtitleEntry


def parse_txt(
    content: str, *, cue_duration: timedelta = PLAIN_TEXT_CUE_DURATION
) -> Subtitle:
    """Parse plain text into Subtitle object, one entry per non-blank line.

    Plain text carries no timing, so each entry gets a fixed window starting
    where the previous one ended, beginning at zero.

    Args:
        content: Plain text content
        cue_duration: Display window given to every line

    Returns:
        Subtitle object with synthesized timing

    Raises:
        ValueError: If cue_duration is not positive
    """
    if cue_duration <= timedelta(0):
        raise ValueError(f"Cue duration must be positive, got {cue_duration}")

    entries = []
    current = timedelta(0)
    for line in content.splitlines():
        text = line.strip().lstrip("\ufeff")
        if not text:
            continue
        entries.append(
            SubtitleEntry(
                index=len(entries) + 1,
                start=current,
                end=current + cue_duration,
                text=text,
            )
        )
        current += cue_duration

    return Subtitle(entries=entries)


def serialize_txt(subtitle: Subtitle) -> str:
    """Serialize Subtitle object to plain text, one line per entry.

    Line breaks inside an entry are joined with a space so that reading the
    output back yields the same number of entries. Entries without visible
    text are left out.
    """
    lines = [
        " ".join(entry.text.split("\n")) + "\n"
        for entry in subtitle.entries
        if entry.text.strip()
    ]
    return "".join(lines)
