"""Utility modules."""

from substyle.utils.config import Settings, get_settings
from substyle.utils.fs import read_subtitle_file, write_text_atomic

__all__ = [
    "Settings",
    "get_settings",
    "read_subtitle_file",
    "write_text_atomic",
]
