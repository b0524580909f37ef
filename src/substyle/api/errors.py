"""API error hierarchy."""

from collections.abc import Callable

from substyle.core.errors import (
    InvalidOptionsError,
    SubstyleError,
    SubtitleIOError,
    SubtitleParseError,
    ThemeNotFoundError,
    UnsupportedFormatError,
)


class ApiError(Exception):
    """Base API error with HTTP status code and structured detail."""

    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        detail: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        self.detail = detail
        super().__init__(message)


class NotFoundError(ApiError):
    """Raised when a requested theme or format does not exist."""

    def __init__(self, code: str, message: str, *, detail: str | None = None) -> None:
        super().__init__(
            status_code=404,
            code=code,
            message=message,
            detail=detail,
        )


class InvalidRequestError(ApiError):
    """Raised when the client sends an invalid request."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "invalid_request",
        detail: str | None = None,
    ) -> None:
        super().__init__(
            status_code=422,
            code=code,
            message=message,
            detail=detail,
        )


class ProcessingError(ApiError):
    """Raised when a conversion or styling step fails unexpectedly."""

    def __init__(self, code: str, message: str, *, detail: str | None = None) -> None:
        super().__init__(
            status_code=500,
            code=code,
            message=message,
            detail=detail,
        )


# Maps core errors to API errors built from the detail text; first match wins
_ERROR_MAP: list[tuple[type[SubstyleError], Callable[[str], ApiError]]] = [
    (
        ThemeNotFoundError,
        lambda detail: NotFoundError(
            "theme_not_found", "Theme not found", detail=detail
        ),
    ),
    (
        UnsupportedFormatError,
        lambda detail: NotFoundError(
            "unsupported_format", "Unsupported format", detail=detail
        ),
    ),
    (
        SubtitleParseError,
        lambda detail: InvalidRequestError(
            "Failed to parse subtitles", code="parse_failed", detail=detail
        ),
    ),
    (
        InvalidOptionsError,
        lambda detail: InvalidRequestError(
            "Invalid options", code="invalid_options", detail=detail
        ),
    ),
    (
        SubtitleIOError,
        lambda detail: ApiError(
            status_code=400,
            code="io_error",
            message="Failed to read or write subtitles",
            detail=detail,
        ),
    ),
]


def to_api_error(exc: SubstyleError) -> ApiError:
    """Convert a core exception to an ApiError."""
    for exc_type, build in _ERROR_MAP:
        if isinstance(exc, exc_type):
            return build(str(exc))
    return ProcessingError(
        "processing_failed", "Unexpected processing error", detail=str(exc)
    )
