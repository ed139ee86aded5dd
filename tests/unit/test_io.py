"""Unit tests for the font I/O layer.

Tests for FontReader, FontRegistry and FontMetricsMeasurer.
"""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from fontTools.ttLib import TTLibError

from coursemark.core import BasicTextCourseObject
from coursemark.domain import FontStyle
from coursemark.exceptions import FontLoadError, FontNotFoundError
from coursemark.geometry import Rect
from coursemark.io import FontMetricsMeasurer, FontReader, FontRegistry


class TestFontReader:
    """Tests for FontReader class."""

    def test_init(self):
        """Test FontReader initialization."""
        path = Path("test.ttf")
        reader = FontReader(path)
        assert reader._font_path == path
        assert reader._font is None

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FontLoadError."""
        reader = FontReader(Path("nonexistent.ttf"))
        with pytest.raises(FontLoadError) as exc_info:
            reader.load()
        assert exc_info.value.reason == "file not found"

    def test_load_invalid_file(self, tmp_path: Path):
        """Test loading a file that is not a font."""
        path = tmp_path / "broken.ttf"
        path.write_bytes(b"not a font")
        with pytest.raises(FontLoadError) as exc_info:
            FontReader(path).load()
        assert exc_info.value.path == str(path)

    def test_load_wraps_ttlib_error(self, tmp_path: Path):
        """Test that fontTools errors are wrapped."""
        path = tmp_path / "font.ttf"
        path.write_bytes(b"")
        with patch("coursemark.io.fonts.TTFont", side_effect=TTLibError("bad table")):
            with pytest.raises(FontLoadError, match="bad table"):
                FontReader(path).load()

    def test_units_per_em_before_load(self):
        """Test accessing units_per_em before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.units_per_em

    def test_measure_before_load(self):
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            reader.measure("A", 10)

    def test_metadata(self, font_file: Path):
        """Test metrics read from a loaded font."""
        reader = FontReader(font_file)
        reader.load()
        assert reader.units_per_em == 1000
        assert reader.family_name == "Testface"
        assert reader.style == FontStyle.REGULAR
        assert reader.line_height == 1000

    def test_bold_style(self, bold_font_file: Path):
        reader = FontReader(bold_font_file)
        reader.load()
        assert reader.style == FontStyle.BOLD

    def test_advance_width(self, font_file: Path):
        reader = FontReader(font_file)
        reader.load()
        assert reader.advance_width("A") == 600
        assert reader.advance_width(" ") == 250
        assert reader.advance_width("Z") == 500

    def test_measure(self, font_file: Path):
        """Test that text extents scale with the em height."""
        reader = FontReader(font_file)
        reader.load()
        width, height = reader.measure("A1", 10)
        assert width == pytest.approx(11.5)
        assert height == pytest.approx(10.0)


class TestFontRegistry:
    """Tests for FontRegistry class."""

    def test_register_file(self, font_file: Path, bold_font_file: Path):
        registry = FontRegistry()
        regular = registry.register_file(font_file)
        bold = registry.register_file(bold_font_file)
        assert len(registry) == 2
        assert registry.get("Testface", FontStyle.REGULAR) is regular
        assert registry.get("testface", FontStyle.BOLD) is bold

    def test_missing_style(self, font_file: Path):
        registry = FontRegistry()
        registry.register_file(font_file)
        with pytest.raises(FontNotFoundError) as exc_info:
            registry.get("Testface", FontStyle.ITALIC)
        assert exc_info.value.font_name == "Testface"
        assert exc_info.value.style == "Italic"

    def test_register_file_propagates_load_error(self, tmp_path: Path):
        registry = FontRegistry()
        with pytest.raises(FontLoadError):
            registry.register_file(tmp_path / "missing.ttf")
        assert len(registry) == 0

    def test_register_mock_reader(self):
        """Test registration uses the reader's own family and style."""
        reader = Mock(spec=FontReader)
        reader.family_name = "Arial"
        reader.style = FontStyle.BOLD
        registry = FontRegistry()
        registry.register(reader)
        assert registry.get("ARIAL", FontStyle.BOLD) is reader


class TestFontMetricsMeasurer:
    """Tests for FontMetricsMeasurer class."""

    @pytest.fixture
    def font_measurer(self, font_file: Path) -> FontMetricsMeasurer:
        registry = FontRegistry()
        registry.register_file(font_file)
        return FontMetricsMeasurer(registry)

    def test_measure(self, font_measurer: FontMetricsMeasurer):
        width, height = font_measurer.measure("A1", "Testface", FontStyle.REGULAR, 10)
        assert width == pytest.approx(11.5)
        assert height == pytest.approx(10.0)

    def test_zero_em_height(self, font_measurer: FontMetricsMeasurer):
        """Test that em height 0 short-circuits, even for unknown fonts."""
        assert font_measurer.measure("A1", "Nope", FontStyle.REGULAR, 0) == (0.0, 0.0)

    def test_unknown_font(self, font_measurer: FontMetricsMeasurer):
        with pytest.raises(FontNotFoundError):
            font_measurer.measure("A1", "Nope", FontStyle.REGULAR, 10)

    def test_fits_basic_text(self, font_measurer: FontMetricsMeasurer):
        """Test text fitted into a box with real font metrics."""
        text = BasicTextCourseObject(1, "AA", Rect(0, 0, 12, 50), "Testface", FontStyle.REGULAR, font_measurer)
        assert text.em_height == pytest.approx(10.0)
        assert text.size[0] == pytest.approx(12.0)
