"""Unit tests for applying themes to subtitle documents."""

import pytest

from substyle import apply_theme, style_file
from substyle.core.constants import SubtitleFormat
from substyle.core.errors import (
    InvalidOptionsError,
    SubtitleIOError,
    SubtitleParseError,
    ThemeNotFoundError,
)
from substyle.core.styler import (
    available_themes,
    resolve_theme,
    restyle,
    style_from_plain,
    style_text,
)
from substyle.core.theme import BUILTIN_THEMES, DEFAULT_THEME, Theme
from substyle.formats.ass import EVENT_FORMAT, STYLE_FORMAT, parse_ass

DEFAULT_ROW = (
    "Style: Default,Arial,20,&H00FFFFFF,&H000000FF,&H00000000,&H00000000,"
    "0,0,0,0,100,100,0,0,1,2,2,2,10,10,10,1"
)

EVENTS = """[Events]
Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,Hello
"""


def _events_part(document: str) -> str:
    return document[document.index("[Events]") :]


@pytest.mark.unit
class TestResolveTheme:
    """Test cases for theme lookup with overrides."""

    def test_default_theme(self, registry):
        assert resolve_theme(None, registry) == DEFAULT_THEME

    def test_configured_default_theme(self, registry, monkeypatch):
        monkeypatch.setenv("SUBSTYLE_DEFAULT_THEME", "anime")
        assert resolve_theme(None, registry) == BUILTIN_THEMES["anime"]

    def test_overrides_applied_to_copy(self, registry):
        theme = resolve_theme(
            {"theme": "cinema", "font_size": 40, "position": "center"}, registry
        )

        assert theme.font_size == 40
        assert theme.alignment == 5
        assert theme.font_name == "Trebuchet MS"
        assert registry.get("cinema").font_size == 24

    def test_unknown_theme(self, registry):
        with pytest.raises(ThemeNotFoundError):
            resolve_theme({"theme": "neon"}, registry)


@pytest.mark.unit
class TestStyleFromPlain:
    """Test cases for building ASS from plain timed text."""

    def test_full_document(self):
        content = "1\n00:00:00,000 --> 00:00:03,000\nHi\n"

        result = style_from_plain(content, SubtitleFormat.SRT, DEFAULT_THEME)

        assert result == (
            "[Script Info]\n"
            "Title: Styled Subtitles\n"
            "ScriptType: v4.00+\n"
            "WrapStyle: 0\n"
            "ScaledBorderAndShadow: yes\n"
            "YCbCr Matrix: TV.601\n"
            "PlayResX: 1920\n"
            "PlayResY: 1080\n"
            "\n"
            "[V4+ Styles]\n"
            f"{STYLE_FORMAT}\n"
            f"{DEFAULT_ROW}\n"
            "\n"
            "[Events]\n"
            f"{EVENT_FORMAT}\n"
            "Dialogue: 0,0:00:00.00,0:00:03.00,Default,,0,0,0,,Hi\n"
        )

    def test_every_entry_uses_default_style(self, sample_vtt_content):
        result = style_from_plain(
            sample_vtt_content, SubtitleFormat.VTT, BUILTIN_THEMES["modern"]
        )

        parsed = parse_ass(result)
        assert len(parsed) == 2
        assert {entry.style_ref for entry in parsed} == {"Default"}
        assert result.count("Style: ") == 1

    def test_multiline_text_uses_hard_breaks(self):
        content = "1\n00:00:01,000 --> 00:00:02,000\nTop\nBottom\n"

        result = style_from_plain(content, SubtitleFormat.SRT, DEFAULT_THEME)

        assert ",,Top\\NBottom\n" in result

    def test_title_and_resolution(self):
        result = style_from_plain(
            "Hi\n",
            SubtitleFormat.TXT,
            DEFAULT_THEME,
            title="Demo",
            play_res=(1280, 720),
        )

        assert "Title: Demo\n" in result
        assert "PlayResX: 1280\nPlayResY: 720\n" in result


@pytest.mark.unit
class TestRestyle:
    """Test cases for restyling existing ASS documents."""

    def test_replaces_style_rows(self, sample_ass_content):
        result = restyle(sample_ass_content, DEFAULT_THEME)

        assert f"[V4+ Styles]\n{STYLE_FORMAT}\n{DEFAULT_ROW}\n\n[Events]" in result
        assert "Comic Sans MS" not in result
        assert "Style: Sign," not in result

    def test_keeps_everything_else(self, sample_ass_content):
        result = restyle(sample_ass_content, DEFAULT_THEME)

        assert result.startswith(
            "[Script Info]\n; Script generated by hand\nTitle: Sample\n"
        )
        assert _events_part(result) == _events_part(sample_ass_content)

    def test_section_without_trailing_blank_line(self):
        content = (
            "[V4+ Styles]\n"
            f"{STYLE_FORMAT}\n"
            "Style: Old,Arial,10,&H00FFFFFF,&H000000FF,&H00000000,&H00000000,"
            "0,0,0,0,100,100,0,0,1,2,2,2,10,10,10,1\n"
            + EVENTS
        )

        result = restyle(content, DEFAULT_THEME)

        assert result == f"[V4+ Styles]\n{STYLE_FORMAT}\n{DEFAULT_ROW}\n" + EVENTS

    def test_preserves_crlf_line_endings(self, sample_ass_content):
        content = sample_ass_content.replace("\n", "\r\n")

        result = restyle(content, DEFAULT_THEME)

        assert f"{DEFAULT_ROW}\r\n" in result
        assert "\n" not in result.replace("\r\n", "")

    def test_legacy_style_section(self):
        """SSA [V4 Styles] sections are restyled with the V4+ Format line."""
        content = (
            "[Script Info]\nScriptType: v4.00\n\n"
            "[V4 Styles]\n"
            "Format: Name, Fontname, Fontsize\n"
            "Style: Default,Tahoma,24\n\n" + EVENTS
        )

        result = restyle(content, DEFAULT_THEME)

        assert f"[V4 Styles]\n{STYLE_FORMAT}\n{DEFAULT_ROW}\n\n[Events]" in result
        assert "Tahoma" not in result

    def test_inserts_missing_style_section(self):
        content = "[Script Info]\nTitle: x\n\n" + EVENTS

        result = restyle(content, DEFAULT_THEME)

        assert result == (
            "[Script Info]\nTitle: x\n\n"
            f"[V4+ Styles]\n{STYLE_FORMAT}\n{DEFAULT_ROW}\n\n" + EVENTS
        )

    def test_style_section_after_events_is_not_duplicated(self):
        """A style section placed after [Events] is restyled where it is."""
        content = (
            "[Script Info]\nTitle: x\n\n"
            + EVENTS
            + "\n[V4+ Styles]\n"
            f"{STYLE_FORMAT}\nStyle: Default,Arial\n"
        )

        result = restyle(content, DEFAULT_THEME)

        assert result == (
            "[Script Info]\nTitle: x\n\n"
            + EVENTS
            + f"\n[V4+ Styles]\n{STYLE_FORMAT}\n{DEFAULT_ROW}\n"
        )
        assert result.count("[V4+ Styles]") == 1
        assert result.count("Style: Default,") == 1

    def test_only_first_style_section_gets_row(self):
        content = (
            f"[V4 Styles]\n{STYLE_FORMAT}\nStyle: Old,Tahoma,24\n\n"
            f"[V4+ Styles]\n{STYLE_FORMAT}\nStyle: Other,Arial,10\n\n" + EVENTS
        )

        result = restyle(content, DEFAULT_THEME)

        assert result == (
            f"[V4 Styles]\n{STYLE_FORMAT}\n{DEFAULT_ROW}\n\n"
            "[V4+ Styles]\n\n" + EVENTS
        )

    def test_inserts_missing_format_line(self):
        content = "[V4+ Styles]\nStyle: Old,Arial,10\n\n" + EVENTS

        result = restyle(content, DEFAULT_THEME)

        assert result == (
            f"[V4+ Styles]\n{STYLE_FORMAT}\n{DEFAULT_ROW}\n\n" + EVENTS
        )

    def test_keeps_comments_in_style_section(self):
        content = (
            "[V4+ Styles]\n; house style\n"
            f"{STYLE_FORMAT}\nStyle: Old,Arial,10\n\n" + EVENTS
        )

        result = restyle(content, DEFAULT_THEME)

        assert result.startswith(
            f"[V4+ Styles]\n; house style\n{STYLE_FORMAT}\n{DEFAULT_ROW}\n\n"
        )

    def test_document_without_sections(self):
        with pytest.raises(SubtitleParseError):
            restyle("Dialogue: nothing here\n", DEFAULT_THEME)

    def test_applies_theme_values(self, sample_ass_content):
        theme = Theme(font_name="Impact", font_size=36, bold=True, outline=1.5)

        result = restyle(sample_ass_content, theme)

        assert "Style: Default,Impact,36,&H00FFFFFF,&H000000FF," in result
        assert ",-1,0,0,0,100,100,0,0,1,1.5,2,2," in result


@pytest.mark.unit
class TestStyleText:
    """Test cases for in-memory styling."""

    def test_ass_is_restyled(self, sample_ass_content, registry):
        result = style_text(
            sample_ass_content, SubtitleFormat.ASS, {"theme": "elegant"}, registry=registry
        )

        assert "Title: Sample" in result
        assert "Style: Default,Georgia," in result

    def test_plain_text_is_converted(self, registry):
        result = style_text("Hi\n", SubtitleFormat.TXT, registry=registry)

        assert "Dialogue: 0,0:00:00.00,0:00:03.00,Default,,0,0,0,,Hi\n" in result


@pytest.mark.unit
class TestStyleFile:
    """Test cases for file styling."""

    def test_style_srt_file(self, tmp_path, sample_srt_content):
        input_path = tmp_path / "movie.srt"
        input_path.write_text(sample_srt_content, encoding="utf-8")
        output_path = tmp_path / "movie.ass"

        result = style_file(
            input_path,
            output_path,
            {"font_size": 30, "position": "top", "add_background": True},
        )

        assert result == output_path
        content = output_path.read_text(encoding="utf-8")
        assert (
            "Style: Default,Arial,30,&H00FFFFFF,&H000000FF,&H00000000,&H80000000,"
            "0,0,0,0,100,100,0,0,1,2,2,8,10,10,10,1\n"
        ) in content
        assert content.count("Dialogue:") == 3

    def test_style_ass_file_preserves_crlf(self, tmp_path, sample_ass_content):
        input_path = tmp_path / "movie.ass"
        input_path.write_bytes(sample_ass_content.replace("\n", "\r\n").encode())
        output_path = tmp_path / "styled.ass"

        style_file(input_path, output_path, {"theme": "bold_yellow"})

        raw = output_path.read_bytes()
        assert b"\r\n" in raw
        assert b"\n" not in raw.replace(b"\r\n", b"")

    def test_unknown_theme_writes_nothing(self, tmp_path, sample_srt_content):
        input_path = tmp_path / "movie.srt"
        input_path.write_text(sample_srt_content, encoding="utf-8")
        output_path = tmp_path / "movie.ass"

        with pytest.raises(ThemeNotFoundError):
            style_file(input_path, output_path, {"theme": "neon"})

        assert not output_path.exists()

    def test_missing_input(self, tmp_path):
        with pytest.raises(SubtitleIOError):
            style_file(tmp_path / "missing.srt", tmp_path / "out.ass")

    def test_invalid_options(self, tmp_path, sample_srt_content):
        input_path = tmp_path / "movie.srt"
        input_path.write_text(sample_srt_content, encoding="utf-8")

        with pytest.raises(InvalidOptionsError):
            style_file(input_path, tmp_path / "out.ass", {"font_size": 0})

    def test_registered_theme(self, tmp_path, registry, sample_srt_content):
        registry.register("neon", Theme(font_name="Impact"))
        input_path = tmp_path / "movie.srt"
        input_path.write_text(sample_srt_content, encoding="utf-8")
        output_path = tmp_path / "movie.ass"

        style_file(input_path, output_path, {"theme": "neon"}, registry=registry)

        assert "Style: Default,Impact," in output_path.read_text(encoding="utf-8")


@pytest.mark.unit
class TestApplyTheme:
    """Test cases for apply_theme and theme listing."""

    def test_apply_theme(self, tmp_path):
        input_path = tmp_path / "notes.txt"
        input_path.write_text("Hi\n", encoding="utf-8")
        output_path = tmp_path / "notes.ass"

        apply_theme(input_path, output_path, "cinema")

        assert "Style: Default,Trebuchet MS,24," in output_path.read_text(
            encoding="utf-8"
        )

    def test_empty_theme_name(self, tmp_path):
        with pytest.raises(InvalidOptionsError):
            apply_theme(tmp_path / "a.srt", tmp_path / "b.ass", " ")

    def test_available_themes(self, registry):
        registry.register("neon", Theme())

        assert available_themes(registry) == sorted([*BUILTIN_THEMES, "neon"])
        assert "neon" not in available_themes()
