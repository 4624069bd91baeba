"""Unit tests for highlight styles and style files."""

from pathlib import Path

import pytest
from colorama import Back, Fore, Style
from pydantic import ValidationError

from diffhighlight.errors import InvalidStyleError
from diffhighlight.highlight.style import (
    STYLE_PRESETS,
    HighlightStyle,
    get_preset,
    load_style,
)


class TestPresets:
    def test_reverse_is_default(self):
        style = HighlightStyle()
        assert style == HighlightStyle.reverse()
        assert style.added_start == "\x1b[7m"
        assert style.added_end == "\x1b[27m"

    def test_color_preset(self):
        style = HighlightStyle.color()
        assert style.added_start == Fore.BLACK + Back.GREEN
        assert style.removed_start == Fore.BLACK + Back.RED
        assert style.removed_end == Style.RESET_ALL

    def test_markers_are_normalized(self):
        start, end = HighlightStyle.reverse().added_markers()
        assert start == "\\x1b[7m"
        assert end == "\\x1b[27m"

    def test_get_preset_known_names(self):
        for name in STYLE_PRESETS:
            assert isinstance(get_preset(name), HighlightStyle)

    def test_get_preset_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown style preset"):
            get_preset("sparkly")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            HighlightStyle(added_colour="x")


class TestLoadStyle:
    """Tests for load_style function."""

    def test_preset_with_override(self, tmp_path: Path):
        path = tmp_path / "style.yaml"
        path.write_text('preset: color\nadded_start: "\\e[30;102m"\n', encoding="utf-8")

        style = load_style(path)

        assert style.added_start == "\x1b[30;102m"
        assert style.removed_start == Fore.BLACK + Back.RED

    def test_empty_file_uses_reverse(self, tmp_path: Path):
        path = tmp_path / "style.yaml"
        path.write_text("", encoding="utf-8")

        assert load_style(path) == HighlightStyle.reverse()

    def test_unknown_field_raises(self, tmp_path: Path):
        path = tmp_path / "style.yaml"
        path.write_text("added_colour: red\n", encoding="utf-8")

        with pytest.raises(InvalidStyleError) as exc_info:
            load_style(path)
        assert "style.yaml" in str(exc_info.value)

    def test_unknown_preset_raises(self, tmp_path: Path):
        path = tmp_path / "style.yaml"
        path.write_text("preset: sparkly\n", encoding="utf-8")

        with pytest.raises(InvalidStyleError):
            load_style(path)

    def test_non_mapping_raises(self, tmp_path: Path):
        path = tmp_path / "style.yaml"
        path.write_text("- reverse\n", encoding="utf-8")

        with pytest.raises(InvalidStyleError):
            load_style(path)

    def test_malformed_yaml_raises(self, tmp_path: Path):
        path = tmp_path / "style.yaml"
        path.write_text("added_start: [\n", encoding="utf-8")

        with pytest.raises(InvalidStyleError):
            load_style(path)

    def test_missing_file_raises_os_error(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_style(tmp_path / "missing.yaml")
