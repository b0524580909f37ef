"""Subtitle format conversion and theme styling."""

from substyle.core.converter import convert_file
from substyle.core.styler import apply_theme, style_file

__version__ = "0.1.0"

__all__ = ["apply_theme", "convert_file", "style_file"]
