"""Subtitle format conversion."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
from pathlib import Path
from typing import Any

import structlog

from substyle.core.constants import (
    DEFAULT_STYLE_NAME,
    INPUT_EXTENSIONS,
    SubtitleFormat,
)
from substyle.core.errors import InvalidOptionsError, UnsupportedFormatError
from substyle.core.options import ConvertOptions
from substyle.core.subtitle import Subtitle
from substyle.core.theme import ThemeRegistry, load_registry
from substyle.formats import parse_subtitle, serialize_subtitle
from substyle.utils.config import Settings, get_settings
from substyle.utils.fs import read_subtitle_file, write_text_atomic

logger = structlog.get_logger()


def detect_format(path: Path) -> SubtitleFormat:
    """Detect a subtitle file's format from its extension.

    Raises:
        UnsupportedFormatError: If the extension maps to no known format
    """
    suffix = path.suffix.lower()
    try:
        return INPUT_EXTENSIONS[suffix]
    except KeyError:
        raise UnsupportedFormatError(
            f"Unsupported input format: '{suffix or path.name}'. "
            f"Supported formats: {', '.join(supported_input_formats())}"
        ) from None


def resolve_target_format(name: str | SubtitleFormat) -> SubtitleFormat:
    """Map an output format name such as "vtt" or ".vtt" to its format.

    Raises:
        InvalidOptionsError: If name is empty
        UnsupportedFormatError: If name is not a supported output format
    """
    normalized = str(name).strip().lower().lstrip(".")
    if not normalized:
        raise InvalidOptionsError("Target format cannot be empty")
    try:
        return SubtitleFormat(normalized)
    except ValueError:
        raise UnsupportedFormatError(
            f"Unsupported output format: '{name}'. "
            f"Supported formats: {', '.join(supported_output_formats())}"
        ) from None


def supported_input_formats() -> list[str]:
    """Return the readable format names, including the "ssa" alias."""
    return sorted(suffix.lstrip(".") for suffix in INPUT_EXTENSIONS)


def supported_output_formats() -> list[str]:
    """Return the writable format names."""
    return sorted(fmt.value for fmt in SubtitleFormat)


def convert_subtitle(
    subtitle: Subtitle,
    target: SubtitleFormat,
    options: ConvertOptions | Mapping[str, Any] | None = None,
    *,
    registry: ThemeRegistry | None = None,
    settings: Settings | None = None,
) -> str:
    """Serialize a parsed subtitle into the target format.

    For ASS output the style table holds the theme named in the options, or
    the configured default theme.

    Raises:
        ThemeNotFoundError: If the requested theme is not registered
    """
    opts = ConvertOptions.from_options(options)
    settings = settings or get_settings()

    if target is not SubtitleFormat.ASS:
        return serialize_subtitle(subtitle, target)

    if registry is None:
        registry = load_registry(settings.themes_file)
    theme = registry.get(opts.theme or settings.default_theme)
    return serialize_subtitle(
        subtitle,
        target,
        styles={DEFAULT_STYLE_NAME: theme},
        title=opts.title or settings.script_title,
        play_res=(settings.play_res_x, settings.play_res_y),
    )


def convert_text(
    content: str,
    source: SubtitleFormat,
    target: SubtitleFormat,
    options: ConvertOptions | Mapping[str, Any] | None = None,
    *,
    registry: ThemeRegistry | None = None,
    settings: Settings | None = None,
) -> str:
    """Convert subtitle content from one format to another.

    Raises:
        SubtitleParseError: If the content is structurally invalid
        ThemeNotFoundError: If the requested theme is not registered
    """
    settings = settings or get_settings()
    subtitle = parse_subtitle(
        content,
        source,
        cue_duration=timedelta(seconds=settings.plain_text_cue_seconds),
    )
    logger.debug("subtitle_parsed", format=str(source), entries=len(subtitle))
    return convert_subtitle(
        subtitle, target, options, registry=registry, settings=settings
    )


def convert_file(
    input_path: Path | str,
    output_path: Path | str,
    target_format: str | SubtitleFormat,
    options: ConvertOptions | Mapping[str, Any] | None = None,
    *,
    registry: ThemeRegistry | None = None,
) -> Path:
    """Convert a subtitle file to another format.

    Args:
        input_path: Subtitle file to read; its extension selects the parser
        output_path: File to write
        target_format: Output format name ("srt", "vtt", "ass" or "txt")
        options: ConvertOptions or an equivalent mapping
        registry: Theme registry for ASS output; built from settings if None

    Returns:
        Path to the written file

    Raises:
        InvalidOptionsError: If an argument is empty or an option is invalid
        SubtitleIOError: If the input cannot be read or the output written
        UnsupportedFormatError: If either format is not supported
        SubtitleParseError: If the input is structurally invalid
        ThemeNotFoundError: If the requested theme is not registered
    """
    if not str(input_path).strip() or not str(output_path).strip():
        raise InvalidOptionsError("Input and output paths cannot be empty")
    input_path = Path(input_path)
    output_path = Path(output_path)
    settings = get_settings()

    # Read first so a missing file is reported before anything else
    content = read_subtitle_file(input_path)
    source = detect_format(input_path)
    target = resolve_target_format(target_format)
    opts = ConvertOptions.from_options(options)

    log = logger.bind(input=str(input_path), output=str(output_path))
    log.info("conversion_started", source=str(source), target=str(target))

    output = convert_text(
        content, source, target, opts, registry=registry, settings=settings
    )
    write_text_atomic(output_path, output, encoding=settings.output_encoding)

    log.info("conversion_completed")
    return output_path
