"""Font loading and text measurement.

Text course objects are sized from font metrics. This module reads the
horizontal metrics of TrueType/OpenType fonts with fontTools and turns
them into text extents in map units.
"""

from pathlib import Path
from typing import Protocol

import structlog
from fontTools.ttLib import TTFont, TTLibError

from coursemark.domain.enums import FontStyle
from coursemark.exceptions import FontLoadError, FontNotFoundError

logger = structlog.get_logger(__name__)

# head.macStyle bits
_MAC_STYLE_BOLD = 1 << 0
_MAC_STYLE_ITALIC = 1 << 1


class TextMeasurer(Protocol):
    """Measures single-line text in map units."""

    def measure(self, text: str, font_name: str, font_style: FontStyle, em_height: float) -> tuple[float, float]:
        """Return (width, height) of the text set at the given em height."""
        ...


class FontReader:
    """Loads a TTF/OTF font and exposes the metrics needed to measure text.

    Example:
        reader = FontReader(Path("font.ttf"))
        reader.load()
        width, height = reader.measure("31", em_height=5.57)
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FontLoadError: If the file does not exist or is not a valid font
        """
        if not self._font_path.exists():
            raise FontLoadError(str(self._font_path), "file not found")

        try:
            self._font = TTFont(str(self._font_path))
        except (OSError, TTLibError) as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

        logger.debug("Font loaded", path=str(self._font_path), family=self.family_name, style=self.style.label)

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def family_name(self) -> str:
        """Best family name from the name table."""
        name = self._require_font()["name"].getBestFamilyName()  # type: ignore[attr-defined]
        return name or self._font_path.stem

    @property
    def style(self) -> FontStyle:
        """Bold/italic flags from head.macStyle."""
        mac_style = self._require_font()["head"].macStyle  # type: ignore[attr-defined]
        style = FontStyle.REGULAR
        if mac_style & _MAC_STYLE_BOLD:
            style |= FontStyle.BOLD
        if mac_style & _MAC_STYLE_ITALIC:
            style |= FontStyle.ITALIC
        return style

    @property
    def line_height(self) -> int:
        """Ascent minus descent from the hhea table, in font units."""
        hhea = self._require_font()["hhea"]
        return hhea.ascent - hhea.descent  # type: ignore[attr-defined]

    def advance_width(self, char: str) -> int:
        """Advance width of a character in font units; unmapped characters use .notdef."""
        font = self._require_font()
        cmap = font.getBestCmap() or {}
        glyph_name = cmap.get(ord(char), ".notdef")
        advance, _lsb = font["hmtx"][glyph_name]
        return advance

    def measure(self, text: str, em_height: float) -> tuple[float, float]:
        """Width and height of single-line text set at em_height.

        Args:
            text: Text to measure
            em_height: Em height in map units

        Returns:
            (width, height) in map units
        """
        scale = em_height / self.units_per_em
        width = sum(self.advance_width(c) for c in text) * scale
        return width, self.line_height * scale


class FontRegistry:
    """Loaded fonts keyed by family name and style."""

    def __init__(self) -> None:
        self._fonts: dict[tuple[str, FontStyle], FontReader] = {}

    def register(self, reader: FontReader) -> None:
        """Register a loaded font under its own family name and style."""
        key = (reader.family_name.lower(), reader.style)
        self._fonts[key] = reader
        logger.debug("Font registered", family=reader.family_name, style=reader.style.label)

    def register_file(self, font_path: Path) -> FontReader:
        """Load a font file and register it.

        Raises:
            FontLoadError: If the font cannot be loaded
        """
        reader = FontReader(font_path)
        reader.load()
        self.register(reader)
        return reader

    def get(self, font_name: str, font_style: FontStyle) -> FontReader:
        """Find the font for a family and style.

        Raises:
            FontNotFoundError: If no font with that exact family and style is registered
        """
        try:
            return self._fonts[(font_name.lower(), font_style)]
        except KeyError:
            raise FontNotFoundError(font_name, font_style.label) from None

    def __len__(self) -> int:
        return len(self._fonts)


class FontMetricsMeasurer:
    """TextMeasurer backed by a FontRegistry."""

    def __init__(self, registry: FontRegistry) -> None:
        self._registry = registry

    def measure(self, text: str, font_name: str, font_style: FontStyle, em_height: float) -> tuple[float, float]:
        """Measure text; an em height of 0 measures as (0, 0).

        Raises:
            FontNotFoundError: If the font is not registered
        """
        if em_height == 0:
            return 0.0, 0.0
        return self._registry.get(font_name, font_style).measure(text, em_height)
