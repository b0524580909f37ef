"""Subtitle themes and the theme registry."""

from __future__ import annotations

import json
import re
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Annotated, Any, Literal

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from substyle.core.errors import (
    InvalidOptionsError,
    SubtitleIOError,
    ThemeNotFoundError,
)

logger = structlog.get_logger()

_COLOR_LITERAL = re.compile(r"^&H([0-9A-Fa-f]{1,8})&?$")

PackedColor = Annotated[int, Field(ge=0, le=0xFFFFFFFF)]


def parse_color(value: str) -> int:
    """Parse an ASS ``&HAABBGGRR`` color literal into a packed integer."""
    match = _COLOR_LITERAL.match(value.strip())
    if not match:
        raise ValueError(f"Invalid color '{value}', expected '&HAABBGGRR'")
    return int(match.group(1), 16)


def format_color(value: int) -> str:
    """Format a packed integer as an ASS ``&HAABBGGRR`` color literal."""
    return f"&H{value:08X}"


class Theme(BaseModel):
    """Complete set of visual attributes for one subtitle style.

    Colors are packed 32-bit integers in ASS ``AABBGGRR`` order, where an
    alpha of 0x00 is opaque and 0xFF fully transparent.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = "Default"
    font_name: str = "Arial"
    font_size: int = Field(default=20, gt=0)
    primary_color: PackedColor = 0x00FFFFFF
    secondary_color: PackedColor = 0x000000FF
    outline_color: PackedColor = 0x00000000
    back_color: PackedColor = 0x00000000
    bold: bool = False
    italic: bool = False
    border_style: Literal[1, 3] = 1
    outline: float = Field(default=2.0, ge=0)
    shadow: float = Field(default=2.0, ge=0)
    alignment: int = Field(default=2, ge=1, le=9)
    margin_l: int = Field(default=10, ge=0)
    margin_r: int = Field(default=10, ge=0)
    margin_v: int = Field(default=10, ge=0)

    @field_validator(
        "primary_color",
        "secondary_color",
        "outline_color",
        "back_color",
        mode="before",
    )
    @classmethod
    def _parse_color_literal(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_color(value)
        return value

    @field_validator("font_name")
    @classmethod
    def _font_name_has_no_comma(cls, value: str) -> str:
        if not value.strip() or "," in value:
            raise ValueError("font_name must be non-empty and contain no commas")
        return value

    def with_overrides(self, **changes: Any) -> Theme:
        """Return a new complete theme with the given fields replaced.

        Raises:
            InvalidOptionsError: If a field name or value is invalid
        """
        try:
            return Theme.model_validate({**self.model_dump(), **changes})
        except ValidationError as e:
            raise InvalidOptionsError(f"Invalid theme override: {e}") from e


DEFAULT_THEME = Theme()

BUILTIN_THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "cinema": Theme(
        name="Cinema",
        font_name="Trebuchet MS",
        font_size=24,
        secondary_color=0x00FFFF00,
        bold=True,
        outline=3,
        shadow=3,
        margin_l=20,
        margin_r=20,
        margin_v=20,
    ),
    "modern": Theme(
        name="Modern",
        font_name="Segoe UI",
        font_size=22,
        primary_color=0x00F0F0F0,
        secondary_color=0x00FFAA00,
        outline_color=0x00202020,
        back_color=0x80000000,
        outline=2.5,
        shadow=1,
        margin_l=15,
        margin_r=15,
        margin_v=15,
    ),
    "elegant": Theme(
        name="Elegant",
        font_name="Georgia",
        primary_color=0x00FFFFCC,
        secondary_color=0x00FFCC00,
        italic=True,
    ),
    "bold_yellow": Theme(
        name="Bold Yellow",
        font_size=24,
        primary_color=0x0000FFFF,
        secondary_color=0x00FFFFFF,
        bold=True,
        outline=3,
        margin_v=15,
    ),
    "anime": Theme(
        name="Anime",
        font_size=22,
        secondary_color=0x00FF00FF,
        bold=True,
        outline=2.5,
        shadow=1.5,
        margin_v=12,
    ),
}


class ThemeRegistry:
    """Named theme catalogue owned by the caller.

    Starts with the built-in themes. Registered names may shadow built-ins;
    the built-in catalogue itself is never modified.
    """

    def __init__(self, themes: Mapping[str, Theme] | None = None) -> None:
        self._themes: dict[str, Theme] = dict(BUILTIN_THEMES)
        if themes:
            for name, theme in themes.items():
                self.register(name, theme)

    def register(self, name: str, theme: Theme) -> Theme:
        """Add or replace a named theme.

        Returns:
            The stored theme, renamed to ``name``

        Raises:
            InvalidOptionsError: If name is empty
        """
        if not name.strip():
            raise InvalidOptionsError("Theme name cannot be empty")
        stored = theme if theme.name == name else theme.with_overrides(name=name)
        shadows = name in self._themes
        self._themes[name] = stored
        logger.info("theme_registered", theme=name, shadows_existing=shadows)
        return stored

    def get(self, name: str) -> Theme:
        """Look up a theme by name.

        Raises:
            ThemeNotFoundError: If no theme has this name
        """
        try:
            return self._themes[name]
        except KeyError:
            raise ThemeNotFoundError(name) from None

    def names(self) -> list[str]:
        """Return all registered theme names, sorted."""
        return sorted(self._themes)

    def load_file(self, path: Path) -> list[str]:
        """Register themes from a JSON file of ``{name: {field: value}}``.

        Fields missing from an entry take the default theme's values.

        Returns:
            Names of the registered themes

        Raises:
            SubtitleIOError: If the file cannot be read
            InvalidOptionsError: If the file content is not a valid theme map
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise SubtitleIOError(f"Cannot read themes file: {e}", path=path) from e
        except json.JSONDecodeError as e:
            raise InvalidOptionsError(f"Themes file {path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise InvalidOptionsError(
                f"Themes file {path} must contain a JSON object of themes"
            )

        loaded = []
        for name, fields in data.items():
            if not isinstance(fields, dict):
                raise InvalidOptionsError(f"Theme '{name}' must be a JSON object")
            try:
                theme = Theme.model_validate({**fields, "name": name})
            except ValidationError as e:
                raise InvalidOptionsError(f"Invalid theme '{name}': {e}") from e
            self.register(name, theme)
            loaded.append(name)
        return loaded

    def __contains__(self, name: object) -> bool:
        return name in self._themes

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._themes)


def load_registry(themes_file: Path | None = None) -> ThemeRegistry:
    """Create a registry of the built-in themes plus those in themes_file."""
    registry = ThemeRegistry()
    if themes_file is not None:
        loaded = registry.load_file(themes_file)
        logger.info("themes_loaded", path=str(themes_file), count=len(loaded))
    return registry
