"""Shared fixtures for coursemark tests."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from coursemark.config import CourseAppearance
from coursemark.core import SymDefCache
from coursemark.domain import FontStyle, Map, SymColor


class FakeMeasurer:
    """Monospace measurer: 0.6 em per character, 1.2 em line height."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, FontStyle, float]] = []

    def measure(self, text: str, font_name: str, font_style: FontStyle, em_height: float) -> tuple[float, float]:
        self.calls.append((text, font_name, font_style, em_height))
        return len(text) * 0.6 * em_height, 1.2 * em_height


@pytest.fixture
def measurer() -> FakeMeasurer:
    return FakeMeasurer()


@pytest.fixture
def appearance() -> CourseAppearance:
    return CourseAppearance()


@pytest.fixture
def purple() -> SymColor:
    return SymColor(11, "Purple", cyan=0.0, magenta=1.0, yellow=0.0, black=0.0)


@pytest.fixture
def black() -> SymColor:
    return SymColor(1, "Black", black=1.0)


@pytest.fixture
def course_map() -> Map:
    return Map()


@pytest.fixture
def cache() -> SymDefCache:
    return SymDefCache()


def build_test_font(path: Path, family: str = "Testface", style_name: str = "Regular", mac_style: int = 0) -> Path:
    """Write a tiny TrueType font with known metrics.

    1000 units per em, ascent 800, descent -200. Advance widths:
    space 250, "A" 600, "1" 550, .notdef 500.
    """
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "space", "A", "one"])
    fb.setupCharacterMap({32: "space", 65: "A", 49: "one"})

    pen = TTGlyphPen(None)
    pen.moveTo((0, 0))
    pen.lineTo((0, 500))
    pen.lineTo((500, 500))
    pen.closePath()
    box = pen.glyph()
    empty = TTGlyphPen(None).glyph()

    fb.setupGlyf({".notdef": box, "space": empty, "A": box, "one": box})
    fb.setupHorizontalMetrics({".notdef": (500, 0), "space": (250, 0), "A": (600, 0), "one": (550, 0)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": style_name})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.updateHead(macStyle=mac_style)
    fb.save(str(path))
    return path


@pytest.fixture
def font_file(tmp_path: Path) -> Path:
    return build_test_font(tmp_path / "Testface-Regular.ttf")


@pytest.fixture
def bold_font_file(tmp_path: Path) -> Path:
    return build_test_font(tmp_path / "Testface-Bold.ttf", style_name="Bold", mac_style=1)
