"""Subtitle domain models."""

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from datetime import timedelta


@dataclass(frozen=True)
class SubtitleEntry:
    """Single subtitle entry with timing and text.

    Attributes:
        index: 1-based position in the document
        start: Start time
        end: End time, never before start
        text: Subtitle text, line breaks as literal newlines
        style_ref: Name of the style bound to this entry, if the source
            format has one
    """

    index: int
    start: timedelta
    end: timedelta
    text: str
    style_ref: str | None = None

    def __post_init__(self):
        """Validate subtitle entry constraints."""
        if self.index < 1:
            raise ValueError(f"Index must be positive, got {self.index}")
        if self.start < timedelta(0):
            raise ValueError(f"Start time {self.start} must not be negative")
        if self.start > self.end:
            raise ValueError(
                f"Start time {self.start} must not be after end time {self.end}"
            )

    @property
    def duration(self) -> timedelta:
        """Time the entry stays on screen."""
        return self.end - self.start


@dataclass
class Subtitle:
    """Ordered collection of subtitle entries."""

    entries: list[SubtitleEntry] = field(default_factory=list)

    def reindexed(self) -> "Subtitle":
        """Return a copy whose entries are numbered sequentially from 1."""
        return Subtitle(
            entries=[
                entry if entry.index == i else replace(entry, index=i)
                for i, entry in enumerate(self.entries, start=1)
            ]
        )

    def __len__(self) -> int:
        """Return number of entries."""
        return len(self.entries)

    def __iter__(self) -> Iterator[SubtitleEntry]:
        """Iterate over entries."""
        return iter(self.entries)

    def __getitem__(self, index: int) -> SubtitleEntry:
        """Get entry by index (0-based)."""
        return self.entries[index]
