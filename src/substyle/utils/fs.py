"""File helpers for reading and writing subtitle documents."""

import os
import tempfile
from pathlib import Path

from substyle.core.errors import SubtitleIOError


def read_subtitle_file(path: Path) -> str:
    """Read a subtitle file as text.

    A leading UTF-8 byte order mark is dropped. Line endings are returned
    untranslated so documents can be passed through unchanged.

    Args:
        path: Subtitle file to read

    Returns:
        Decoded file content

    Raises:
        SubtitleIOError: If the file does not exist or cannot be read
    """
    if not path.exists():
        raise SubtitleIOError(f"Input file does not exist: {path}", path=path)
    if not path.is_file():
        raise SubtitleIOError(f"Input path is not a file: {path}", path=path)

    try:
        with path.open(encoding="utf-8-sig", newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise SubtitleIOError(
            f"Input file is not valid UTF-8: {path}: {e}", path=path
        ) from e
    except OSError as e:
        raise SubtitleIOError(f"Cannot read input file {path}: {e}", path=path) from e


def write_text_atomic(path: Path, content: str, *, encoding: str = "utf-8") -> Path:
    """Write text to a file without leaving a partial file behind.

    The content goes to a temporary file in the target directory, which then
    replaces the target in one step.

    Args:
        path: Output file
        content: Text to write
        encoding: Output encoding

    Returns:
        Path to the written file

    Raises:
        SubtitleIOError: If the file cannot be written
    """
    if not path.parent.is_dir():
        raise SubtitleIOError(
            f"Output directory does not exist: {path.parent}", path=path
        )

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
    except OSError as e:
        raise SubtitleIOError(f"Cannot write output file {path}: {e}", path=path) from e

    tmp_path = Path(tmp_name)
    try:
        # newline="" keeps line endings exactly as given
        with os.fdopen(fd, "w", encoding=encoding, newline="") as tmp_file:
            tmp_file.write(content)
        os.replace(tmp_path, path)
    except (OSError, UnicodeEncodeError) as e:
        tmp_path.unlink(missing_ok=True)
        raise SubtitleIOError(f"Cannot write output file {path}: {e}", path=path) from e

    return path
