"""Option models for the conversion and styling entry points."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from substyle.core.constants import BACKGROUND_BOX_COLOR, POSITION_ALIGNMENT, Position
from substyle.core.errors import InvalidOptionsError

logger = structlog.get_logger()


class _Options(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    @classmethod
    def from_options(cls, options: Self | Mapping[str, Any] | None) -> Self:
        """Build options from an instance, an open mapping or None.

        Keys the model does not know are ignored.

        Raises:
            InvalidOptionsError: If a known key has a bad value
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        try:
            values = dict(options)
        except (TypeError, ValueError) as e:
            raise InvalidOptionsError(f"Invalid {cls.__name__}: {e}") from e
        ignored = sorted(str(key) for key in values if key not in cls.model_fields)
        if ignored:
            logger.debug("options_ignored", options=cls.__name__, keys=ignored)
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise InvalidOptionsError(f"Invalid {cls.__name__}: {e}") from e


class ConvertOptions(_Options):
    """Options for format conversion.

    Attributes:
        theme: Theme written into the style table of ASS output; the
            configured default theme when unset
        title: Script title of ASS output; the configured title when unset
    """

    theme: str | None = None
    title: str | None = None


class StyleOptions(_Options):
    """Options for subtitle styling.

    Attributes:
        theme: Theme to apply; the configured default theme when unset
        font_size: Font size override
        position: Vertical position override
        add_background: Give subtitles a semi-transparent background box
    """

    theme: str | None = None
    font_size: int | None = Field(default=None, gt=0)
    position: Position | None = None
    add_background: bool = False

    def overrides(self) -> dict[str, Any]:
        """Return the theme fields these options replace."""
        changes: dict[str, Any] = {}
        if self.font_size is not None:
            changes["font_size"] = self.font_size
        if self.position is not None:
            changes["alignment"] = POSITION_ALIGNMENT[self.position]
        if self.add_background:
            changes["back_color"] = BACKGROUND_BOX_COLOR
        return changes
