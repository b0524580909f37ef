"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Attributes:
        default_theme: Theme used when a caller names none
        plain_text_cue_seconds: Display window synthesized per plain-text line
        script_title: Title written into generated ASS headers
        play_res_x: ASS PlayResX of generated documents
        play_res_y: ASS PlayResY of generated documents
        output_encoding: Text encoding of written subtitle files
        themes_file: Optional JSON file of extra themes for new registries
        max_upload_bytes: Upload size limit of the HTTP API
        log_level: Minimum log level
        log_json: Render logs as JSON instead of console output
    """

    default_theme: str = "default"
    plain_text_cue_seconds: float = Field(default=3.0, gt=0)
    script_title: str = "Styled Subtitles"
    play_res_x: int = Field(default=1920, gt=0)
    play_res_y: int = Field(default=1080, gt=0)
    output_encoding: str = "utf-8"
    themes_file: Path | None = None
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, gt=0)

    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="SUBSTYLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment

    Note:
        Settings are cached for performance. Use get_settings.cache_clear()
        to reload settings in tests.
    """
    return Settings()
