"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from substyle.api.errors import ApiError
from substyle.api.logging import setup_logging
from substyle.api.routes import router
from substyle.api.schemas import ErrorDetail
from substyle.core.theme import load_registry
from substyle.utils.config import get_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: setup/teardown."""
    setup_logging()
    app.state.theme_registry = load_registry(get_settings().themes_file)
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="substyle",
        description="Subtitle format conversion and theme styling",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global error handler
    @app.exception_handler(ApiError)
    async def api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorDetail(
                code=exc.code, message=exc.message, detail=exc.detail
            ).model_dump(),
        )

    # API routes
    app.include_router(router)

    return app


app = create_app()
