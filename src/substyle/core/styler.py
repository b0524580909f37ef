"""Apply themes to subtitle documents.

Plain timed text (SRT, WebVTT, plain text) is converted into an ASS document
whose only style is the theme. ASS/SSA documents keep every line except the
style rows, which are replaced by the theme.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import timedelta
from pathlib import Path
from typing import Any

import structlog

from substyle.core.constants import (
    DEFAULT_STYLE_NAME,
    STYLED_FORMATS,
    SubtitleFormat,
)
from substyle.core.converter import detect_format
from substyle.core.errors import InvalidOptionsError, SubtitleParseError
from substyle.core.options import StyleOptions
from substyle.core.theme import Theme, ThemeRegistry, load_registry
from substyle.formats import parse_subtitle, serialize_ass
from substyle.formats.ass import (
    EVENTS_HEADER,
    STYLE_FORMAT,
    STYLES_HEADER,
    format_style_row,
)
from substyle.utils.config import Settings, get_settings
from substyle.utils.fs import read_subtitle_file, write_text_atomic

logger = structlog.get_logger()

_SECTION_HEADER = re.compile(r"^\[[^\]]+\]$")
_STYLE_SECTIONS = frozenset({"[v4+ styles]", "[v4 styles]", "[v4 styles+]"})


def resolve_theme(
    options: StyleOptions | Mapping[str, Any] | None,
    registry: ThemeRegistry,
    *,
    settings: Settings | None = None,
) -> Theme:
    """Look up the requested theme and apply the option overrides to a copy.

    Raises:
        InvalidOptionsError: If the options are invalid
        ThemeNotFoundError: If the theme is not registered
    """
    opts = StyleOptions.from_options(options)
    settings = settings or get_settings()
    theme = registry.get(opts.theme or settings.default_theme)
    overrides = opts.overrides()
    return theme.with_overrides(**overrides) if overrides else theme


def style_from_plain(
    content: str,
    source_format: SubtitleFormat,
    theme: Theme,
    *,
    cue_duration: timedelta | None = None,
    title: str | None = None,
    play_res: tuple[int, int] | None = None,
) -> str:
    """Build an ASS document from plain timed text with a single theme.

    Every entry is bound to the one "Default" style row rendered from theme.

    Args:
        content: Subtitle content in source_format
        source_format: Format of content
        theme: Theme rendered as the only style
        cue_duration: Window per line for plain text; configured value if None
        title: Script title; configured value if None
        play_res: Script resolution; configured value if None

    Returns:
        ASS document

    Raises:
        SubtitleParseError: If the content is structurally invalid
    """
    settings = get_settings()
    subtitle = parse_subtitle(
        content,
        source_format,
        cue_duration=cue_duration
        or timedelta(seconds=settings.plain_text_cue_seconds),
    )
    return serialize_ass(
        subtitle,
        styles={DEFAULT_STYLE_NAME: theme},
        title=title or settings.script_title,
        play_res=play_res or (settings.play_res_x, settings.play_res_y),
    )


def restyle(content: str, theme: Theme) -> str:
    """Replace the style rows of an ASS/SSA document with one theme row.

    The style section keeps its header and any comment or blank lines; its
    Format line becomes the V4+ Format line followed by the theme row, and
    all existing ``Style:`` rows are dropped. The section ends at the next
    bracketed header, blank line or not. Every line outside the style section
    is passed through unchanged, line endings included.

    A document with no style section anywhere gets one inserted before
    ``[Events]``. Only the first style section receives the theme row; later
    ones lose their Format and ``Style:`` rows.

    Args:
        content: ASS or SSA document
        theme: Theme for the new style row

    Returns:
        Restyled document

    Raises:
        SubtitleParseError: If the document has neither a style nor an
            events section
    """
    lines = content.splitlines(keepends=True)
    newline = _detect_newline(lines)
    style_lines = [STYLE_FORMAT, format_style_row(theme)]

    out: list[str] = []
    in_styles = False
    # Only documents with no style section anywhere get one inserted
    styles_found = any(_is_style_header(line.strip()) for line in lines)
    # The theme row is written once, into the first style section
    row_written = False
    # Where to put the style rows if the section has no Format line
    insert_at = 0

    def close_styles_section() -> None:
        nonlocal row_written
        if in_styles and not row_written:
            out[insert_at:insert_at] = [line + newline for line in style_lines]
            row_written = True

    for line in lines:
        stripped = line.strip()
        body = line.rstrip("\r\n")
        eol = line[len(body) :] or newline

        if _SECTION_HEADER.match(stripped):
            close_styles_section()
            section = stripped.lower()
            if not styles_found and section == EVENTS_HEADER.lower():
                out.extend(
                    [STYLES_HEADER + newline]
                    + [row + newline for row in style_lines]
                    + [newline]
                )
                styles_found = True
            in_styles = section in _STYLE_SECTIONS
            out.append(line)
            insert_at = len(out)
            continue

        if in_styles:
            lowered = stripped.lower()
            if lowered.startswith("format:"):
                if not row_written:
                    out.extend(row + eol for row in style_lines)
                    row_written = True
                    insert_at = len(out)
                continue
            if lowered.startswith("style:"):
                continue
            out.append(line)
            if stripped:
                insert_at = len(out)
            continue

        out.append(line)

    close_styles_section()

    if not styles_found:
        raise SubtitleParseError(
            f"Invalid ASS document: no {STYLES_HEADER} or {EVENTS_HEADER} section"
        )

    return "".join(out)


def _is_style_header(stripped: str) -> bool:
    return bool(_SECTION_HEADER.match(stripped)) and stripped.lower() in _STYLE_SECTIONS


def _detect_newline(lines: list[str]) -> str:
    for line in lines:
        if line.endswith("\r\n"):
            return "\r\n"
        if line.endswith(("\n", "\r")):
            return line[-1]
    return "\n"


def style_text(
    content: str,
    source_format: SubtitleFormat,
    options: StyleOptions | Mapping[str, Any] | None = None,
    *,
    registry: ThemeRegistry | None = None,
) -> str:
    """Style subtitle content, restyling ASS in place and converting the rest.

    Raises:
        InvalidOptionsError: If the options are invalid
        ThemeNotFoundError: If the theme is not registered
        SubtitleParseError: If the content is structurally invalid
    """
    settings = get_settings()
    if registry is None:
        registry = load_registry(settings.themes_file)
    theme = resolve_theme(options, registry, settings=settings)
    return _style_content(content, source_format, theme)


def _style_content(content: str, source_format: SubtitleFormat, theme: Theme) -> str:
    if source_format in STYLED_FORMATS:
        return restyle(content, theme)
    return style_from_plain(content, source_format, theme)


def style_file(
    input_path: Path | str,
    output_path: Path | str,
    options: StyleOptions | Mapping[str, Any] | None = None,
    *,
    registry: ThemeRegistry | None = None,
) -> Path:
    """Apply a theme to a subtitle file and write the styled ASS result.

    Args:
        input_path: SRT, WebVTT, plain text, ASS or SSA file
        output_path: File to write
        options: StyleOptions or a mapping with the keys "theme",
            "font_size", "position" and "add_background"
        registry: Theme registry; built from settings if None

    Returns:
        Path to the written file

    Raises:
        InvalidOptionsError: If an argument is empty or an option is invalid
        SubtitleIOError: If the input cannot be read or the output written
        ThemeNotFoundError: If the theme is not registered
        UnsupportedFormatError: If the input format is not supported
        SubtitleParseError: If the input is structurally invalid
    """
    if not str(input_path).strip() or not str(output_path).strip():
        raise InvalidOptionsError("Input and output paths cannot be empty")
    input_path = Path(input_path)
    output_path = Path(output_path)
    settings = get_settings()
    opts = StyleOptions.from_options(options)

    content = read_subtitle_file(input_path)
    if registry is None:
        registry = load_registry(settings.themes_file)
    theme = resolve_theme(opts, registry, settings=settings)
    source = detect_format(input_path)

    theme_name = opts.theme or settings.default_theme
    log = logger.bind(input=str(input_path), output=str(output_path))
    log.info("styling_started", theme=theme_name, source=str(source))

    output = _style_content(content, source, theme)
    write_text_atomic(output_path, output, encoding=settings.output_encoding)

    log.info("styling_completed", theme=theme_name)
    return output_path


def apply_theme(
    input_path: Path | str,
    output_path: Path | str,
    theme_name: str,
    *,
    registry: ThemeRegistry | None = None,
) -> Path:
    """Apply a named theme without further overrides."""
    if not theme_name.strip():
        raise InvalidOptionsError("Theme name cannot be empty")
    return style_file(
        input_path, output_path, StyleOptions(theme=theme_name), registry=registry
    )


def available_themes(registry: ThemeRegistry | None = None) -> list[str]:
    """Return the names of all themes in the registry."""
    if registry is None:
        registry = load_registry(get_settings().themes_file)
    return registry.names()
