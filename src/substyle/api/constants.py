"""Constants for the API layer."""

from substyle.core.constants import SubtitleFormat

UPLOAD_CHUNK_BYTES = 1024 * 1024

MEDIA_TYPES: dict[SubtitleFormat, str] = {
    SubtitleFormat.SRT: "application/x-subrip",
    SubtitleFormat.VTT: "text/vtt",
    SubtitleFormat.ASS: "text/x-ssa",
    SubtitleFormat.TXT: "text/plain",
}
