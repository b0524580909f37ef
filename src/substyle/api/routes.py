"""API route definitions."""

from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import structlog
from fastapi import APIRouter, Body, Form, Request, UploadFile
from fastapi.responses import Response
from pydantic import ValidationError

from substyle.api.constants import MEDIA_TYPES, UPLOAD_CHUNK_BYTES
from substyle.api.errors import InvalidRequestError, NotFoundError, to_api_error
from substyle.api.schemas import FormatsResponse, ThemeResponse
from substyle.core.constants import INPUT_EXTENSIONS, SubtitleFormat
from substyle.core.converter import (
    convert_file,
    resolve_target_format,
    supported_input_formats,
    supported_output_formats,
)
from substyle.core.errors import SubstyleError
from substyle.core.options import ConvertOptions, StyleOptions
from substyle.core.styler import style_file
from substyle.core.theme import Theme
from substyle.utils.config import get_settings

if TYPE_CHECKING:
    from substyle.core.theme import ThemeRegistry

router = APIRouter(prefix="/api")
logger = structlog.get_logger()


def _get_registry(request: Request) -> ThemeRegistry:
    """Get the ThemeRegistry from app state."""
    registry: ThemeRegistry = request.app.state.theme_registry
    return registry


async def _save_upload(file: UploadFile, tmp_dir: Path) -> Path:
    """Save an uploaded subtitle file into tmp_dir, enforcing the size limit."""
    filename = file.filename or ""
    suffix = Path(filename).suffix.lower()
    if suffix not in INPUT_EXTENSIONS:
        raise NotFoundError(
            "unsupported_format",
            f"Unsupported file type: {suffix}",
            detail=f"Allowed: {', '.join(sorted(INPUT_EXTENSIONS))}",
        )

    # Sanitize filename to prevent path traversal
    safe_name = Path(filename).name or f"upload{suffix}"
    upload_dir = tmp_dir / "in"
    upload_dir.mkdir()
    saved_path = upload_dir / safe_name

    max_size = get_settings().max_upload_bytes
    bytes_written = 0
    with saved_path.open("wb") as buf:
        while chunk := await file.read(UPLOAD_CHUNK_BYTES):
            bytes_written += len(chunk)
            if bytes_written > max_size:
                raise InvalidRequestError(
                    "File too large",
                    detail=f"Maximum file size is {max_size} bytes",
                )
            buf.write(chunk)
    return saved_path


def _output_path(tmp_dir: Path, input_path: Path, fmt: SubtitleFormat) -> Path:
    output_dir = tmp_dir / "out"
    output_dir.mkdir()
    return output_dir / f"{input_path.stem}{fmt.extension}"


def _attachment(path: Path, fmt: SubtitleFormat) -> Response:
    """Return a written subtitle file as a download."""
    return Response(
        content=path.read_bytes(),
        media_type=MEDIA_TYPES[fmt],
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(path.name)}"
        },
    )


@router.get("/formats", response_model=FormatsResponse)
async def list_formats() -> FormatsResponse:
    """List readable and writable subtitle formats."""
    return FormatsResponse(
        input=supported_input_formats(), output=supported_output_formats()
    )


@router.get("/themes", response_model=list[ThemeResponse])
async def list_themes(request: Request) -> list[ThemeResponse]:
    """List all registered themes."""
    registry = _get_registry(request)
    return [ThemeResponse.from_theme(name, registry.get(name)) for name in registry]


@router.put("/themes/{name}", response_model=ThemeResponse)
async def register_theme(
    name: str,
    request: Request,
    fields: dict[str, Any] = Body(...),
) -> ThemeResponse:
    """Register a theme, shadowing any existing theme of the same name."""
    try:
        theme = Theme.model_validate({**fields, "name": name})
    except ValidationError as exc:
        raise InvalidRequestError(
            f"Invalid theme '{name}'", code="invalid_options", detail=str(exc)
        ) from exc

    registry = _get_registry(request)
    try:
        stored = registry.register(name, theme)
    except SubstyleError as exc:
        raise to_api_error(exc) from exc
    return ThemeResponse.from_theme(name, stored)


@router.post("/convert")
async def convert(
    request: Request,
    file: UploadFile,
    target_format: str = Form(...),
    theme: str | None = Form(None),
) -> Response:
    """Convert an uploaded subtitle file to another format."""
    registry = _get_registry(request)
    with tempfile.TemporaryDirectory(prefix="substyle_") as tmp:
        tmp_dir = Path(tmp)
        input_path = await _save_upload(file, tmp_dir)
        try:
            target = resolve_target_format(target_format)
            output_path = _output_path(tmp_dir, input_path, target)
            await asyncio.to_thread(
                convert_file,
                input_path,
                output_path,
                target,
                ConvertOptions(theme=theme),
                registry=registry,
            )
        except SubstyleError as exc:
            logger.warning("convert_request_failed", error=str(exc))
            raise to_api_error(exc) from exc
        return _attachment(output_path, target)


@router.post("/style")
async def style(
    request: Request,
    file: UploadFile,
    theme: str | None = Form(None),
    font_size: int | None = Form(None),
    position: str | None = Form(None),
    add_background: bool = Form(False),
) -> Response:
    """Apply a theme to an uploaded subtitle file and return styled ASS."""
    registry = _get_registry(request)
    with tempfile.TemporaryDirectory(prefix="substyle_") as tmp:
        tmp_dir = Path(tmp)
        input_path = await _save_upload(file, tmp_dir)
        output_path = _output_path(tmp_dir, input_path, SubtitleFormat.ASS)
        try:
            options = StyleOptions.from_options(
                {
                    "theme": theme,
                    "font_size": font_size,
                    "position": position or None,
                    "add_background": add_background,
                }
            )
            await asyncio.to_thread(
                style_file, input_path, output_path, options, registry=registry
            )
        except SubstyleError as exc:
            logger.warning("style_request_failed", error=str(exc))
            raise to_api_error(exc) from exc
        return _attachment(output_path, SubtitleFormat.ASS)


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}
