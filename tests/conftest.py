"""Pytest configuration and shared fixtures."""

from collections.abc import Generator
from pathlib import Path

import pytest

from substyle.core.theme import ThemeRegistry
from substyle.utils.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch, tmp_path) -> Generator[None, None, None]:
    """Isolate every test from the developer's environment and .env file."""
    for name in (
        "SUBSTYLE_DEFAULT_THEME",
        "SUBSTYLE_THEMES_FILE",
        "SUBSTYLE_PLAIN_TEXT_CUE_SECONDS",
        "SUBSTYLE_SCRIPT_TITLE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def temp_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    yield tmp_path


@pytest.fixture
def registry() -> ThemeRegistry:
    """Fresh registry holding only the built-in themes."""
    return ThemeRegistry()


@pytest.fixture
def sample_srt_content() -> str:
    """Return sample SRT content for testing."""
    return """1
00:00:01,000 --> 00:00:04,000
Hello, this is a test.

2
00:00:05,000 --> 00:00:08,000
This is the second subtitle.

3
00:00:09,000 --> 00:00:12,000
And this is the third one.
"""


@pytest.fixture
def sample_vtt_content() -> str:
    """Return sample WebVTT content for testing."""
    return """WEBVTT
Kind: captions

NOTE This is a comment

intro
00:00:01.000 --> 00:00:04.000 align:start
Hello, this is a test.

00:05.000 --> 00:08.000
This is the second subtitle.
"""


@pytest.fixture
def sample_ass_content() -> str:
    """Return sample ASS content with a custom style."""
    return """[Script Info]
; Script generated by hand
Title: Sample
ScriptType: v4.00+

[V4+ Styles]
Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, BackColour, Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, Alignment, MarginL, MarginR, MarginV, Encoding
Style: Default,Comic Sans MS,30,&H0000FFFF,&H000000FF,&H00000000,&H00000000,0,0,0,0,100,100,0,0,1,1,0,2,5,5,5,1
Style: Sign,Arial,18,&H00FFFFFF,&H000000FF,&H00000000,&H00000000,0,0,0,0,100,100,0,0,1,1,0,8,5,5,5,1

[Events]
Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
Dialogue: 0,0:00:01.00,0:00:04.00,Default,,0,0,0,,{\\i1}Hello{\\i0}, this is a test.
Dialogue: 0,0:00:05.00,0:00:08.00,Sign,,0,0,0,,Second line\\Nwith a break
"""


@pytest.fixture
def sample_txt_content() -> str:
    """Return sample plain text content for testing."""
    return "First line\n\nSecond line\nThird line\n"
