"""Pydantic v2 response schemas."""

from pydantic import BaseModel

from substyle.core.theme import Theme, format_color


class ErrorDetail(BaseModel):
    """Structured error information."""

    code: str
    message: str
    detail: str | None = None


class FormatsResponse(BaseModel):
    """Readable and writable subtitle formats."""

    input: list[str]
    output: list[str]


class ThemeResponse(BaseModel):
    """One registered theme, colors as ``&HAABBGGRR`` literals."""

    key: str
    name: str
    font_name: str
    font_size: int
    primary_color: str
    secondary_color: str
    outline_color: str
    back_color: str
    bold: bool
    italic: bool
    border_style: int
    outline: float
    shadow: float
    alignment: int
    margin_l: int
    margin_r: int
    margin_v: int

    @classmethod
    def from_theme(cls, key: str, theme: Theme) -> "ThemeResponse":
        data = theme.model_dump()
        for field in ("primary_color", "secondary_color", "outline_color", "back_color"):
            data[field] = format_color(data[field])
        return cls(key=key, **data)
