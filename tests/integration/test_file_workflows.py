"""Integration tests for file conversion and styling workflows."""

import json
from pathlib import Path

import pytest

from substyle import apply_theme, convert_file, style_file
from substyle.core.styler import available_themes
from substyle.formats import parse_ass, parse_srt, parse_vtt


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.integration
class TestConversionChain:
    """Convert a document through every format and back."""

    def test_srt_through_vtt_and_ass(self, tmp_path, sample_srt_content):
        srt_path = _write(tmp_path / "movie.srt", sample_srt_content)

        vtt_path = convert_file(srt_path, tmp_path / "movie.vtt", "vtt")
        ass_path = convert_file(vtt_path, tmp_path / "movie.ass", "ass")
        back_path = convert_file(ass_path, tmp_path / "back.srt", "srt")

        original = parse_srt(sample_srt_content)
        assert len(parse_vtt(vtt_path.read_text(encoding="utf-8"))) == 3
        assert len(parse_ass(ass_path.read_text(encoding="utf-8"))) == 3
        result = parse_srt(back_path.read_text(encoding="utf-8"))
        assert [(e.start, e.end, e.text) for e in result] == [
            (e.start, e.end, e.text) for e in original
        ]

    def test_ssa_input_converts_to_srt(self, tmp_path, sample_ass_content):
        ssa_path = _write(tmp_path / "legacy.ssa", sample_ass_content)

        out = convert_file(ssa_path, tmp_path / "legacy.srt", "srt")

        assert out.read_text(encoding="utf-8") == (
            "1\n00:00:01,000 --> 00:00:04,000\nHello, this is a test.\n\n"
            "2\n00:00:05,000 --> 00:00:08,000\nSecond line\nwith a break\n\n"
        )

    def test_txt_to_vtt(self, tmp_path, sample_txt_content):
        txt_path = _write(tmp_path / "notes.txt", sample_txt_content)

        out = convert_file(txt_path, tmp_path / "notes.vtt", "vtt")

        assert out.read_text(encoding="utf-8") == (
            "WEBVTT\n\n"
            "00:00:00.000 --> 00:00:03.000\nFirst line\n\n"
            "00:00:03.000 --> 00:00:06.000\nSecond line\n\n"
            "00:00:06.000 --> 00:00:09.000\nThird line\n\n"
        )


@pytest.mark.integration
class TestStylingWorkflow:
    """Style generated and hand-written documents."""

    def test_restyling_is_repeatable(self, tmp_path, sample_srt_content):
        srt_path = _write(tmp_path / "movie.srt", sample_srt_content)
        first = apply_theme(srt_path, tmp_path / "first.ass", "cinema")
        second = apply_theme(first, tmp_path / "second.ass", "anime")
        third = apply_theme(second, tmp_path / "third.ass", "cinema")

        assert first.read_text(encoding="utf-8") == third.read_text(encoding="utf-8")
        assert "Style: Default,Arial,22," in second.read_text(encoding="utf-8")

    def test_restyle_keeps_events(self, tmp_path, sample_ass_content):
        ass_path = _write(tmp_path / "movie.ass", sample_ass_content)

        out = style_file(ass_path, tmp_path / "styled.ass", {"theme": "modern"})

        styled = out.read_text(encoding="utf-8")
        events = sample_ass_content[sample_ass_content.index("[Events]") :]
        assert styled.endswith(events)
        assert "Style: Default,Segoe UI,22," in styled

    def test_themes_file_from_settings(self, tmp_path, monkeypatch, sample_srt_content):
        themes_path = tmp_path / "themes.json"
        themes_path.write_text(
            json.dumps({"neon": {"font_name": "Impact", "bold": True}}),
            encoding="utf-8",
        )
        monkeypatch.setenv("SUBSTYLE_THEMES_FILE", str(themes_path))
        monkeypatch.setenv("SUBSTYLE_DEFAULT_THEME", "neon")
        srt_path = _write(tmp_path / "movie.srt", sample_srt_content)

        out = style_file(srt_path, tmp_path / "movie.ass")

        assert "Style: Default,Impact,20," in out.read_text(encoding="utf-8")
        assert "neon" in available_themes()


@pytest.mark.integration
class TestSharedOptions:
    """One options map serves both entry points."""

    def test_shared_map(self, tmp_path, sample_srt_content):
        options = {"theme": "cinema", "font_size": 30, "title": "Demo", "extra": 1}
        srt_path = _write(tmp_path / "movie.srt", sample_srt_content)

        styled = style_file(srt_path, tmp_path / "styled.ass", options)
        converted = convert_file(srt_path, tmp_path / "plain.ass", "ass", options)

        assert "Style: Default,Trebuchet MS,30," in styled.read_text(encoding="utf-8")
        converted_text = converted.read_text(encoding="utf-8")
        assert "Style: Default,Trebuchet MS,24," in converted_text
        assert "Title: Demo\n" in converted_text


@pytest.mark.integration
class TestEmptyDialogue:
    """Dialogue that is only override tags has no text to carry over."""

    def test_entry_count_stable_across_conversions(self, tmp_path):
        ass_path = _write(
            tmp_path / "fx.ass",
            "[Events]\n"
            "Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,{\\fad(200,200)}\n"
            "Dialogue: 0,0:00:03.00,0:00:04.00,Default,,0,0,0,,Spoken\n",
        )

        first = convert_file(ass_path, tmp_path / "first.srt", "srt")
        second = convert_file(first, tmp_path / "second.srt", "srt")

        assert first.read_text(encoding="utf-8") == (
            "1\n00:00:03,000 --> 00:00:04,000\nSpoken\n\n"
        )
        assert second.read_text(encoding="utf-8") == first.read_text(encoding="utf-8")
