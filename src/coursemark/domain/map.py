"""Map model that receives finished course symbols.

A map holds symbol definitions (reusable, color-specific styles and
glyphs keyed by a numeric id) and symbol instances placed on the map.
Course objects create definitions once per map through the symbol
definition cache and then append one or more symbols.

This module defines:
- SymColor: A spot color with CMYK components
- Glyph: Point-symbol shape built from circles, lines and areas
- PointSymDef, LineSymDef, AreaSymDef, TextSymDef: Symbol definitions
- PointSymbol, LineSymbol, AreaSymbol, TextSymbol: Symbol instances
- Map: Ordered collection of definitions and symbols
"""

from dataclasses import dataclass, field

from fontTools.misc.arrayTools import unionRect

from coursemark.domain.enums import LineStyle
from coursemark.exceptions import DuplicateSymdefError, MapError, UnknownSymdefError
from coursemark.geometry import Point, Rect, SymPath


@dataclass(frozen=True, slots=True)
class SymColor:
    """A map color.

    Attributes:
        ocad_id: Color number, unique within a map
        name: Color name
        cyan: Cyan component (0..1)
        magenta: Magenta component (0..1)
        yellow: Yellow component (0..1)
        black: Black component (0..1)
    """

    ocad_id: int
    name: str
    cyan: float = 0.0
    magenta: float = 0.0
    yellow: float = 0.0
    black: float = 0.0


@dataclass(frozen=True, slots=True)
class GlyphCircle:
    """Stroked circle centered at a point. Diameter is measured to the stroke center."""

    color: SymColor
    center: Point
    line_width: float
    diameter: float

    def bounds(self) -> tuple[float, float, float, float]:
        r = (self.diameter + self.line_width) / 2
        return (self.center.x - r, self.center.y - r, self.center.x + r, self.center.y + r)


@dataclass(frozen=True, slots=True)
class GlyphLine:
    """Stroked open or closed path."""

    color: SymColor
    path: SymPath
    width: float
    style: LineStyle

    def bounds(self) -> tuple[float, float, float, float]:
        box = self.path.bounding_box
        half = self.width / 2
        return (box.left - half, box.top - half, box.right + half, box.bottom + half)


@dataclass(frozen=True, slots=True)
class GlyphArea:
    """Filled closed path."""

    color: SymColor
    path: SymPath

    def bounds(self) -> tuple[float, float, float, float]:
        box = self.path.bounding_box
        return (box.left, box.top, box.right, box.bottom)


GlyphPart = GlyphCircle | GlyphLine | GlyphArea


class Glyph:
    """Shape of a point symbol, in symbol-local coordinates centered at the origin.

    Parts are added during construction; ``construction_complete`` seals
    the glyph, after which it can be shared by any number of symbols.
    """

    def __init__(self) -> None:
        self._parts: list[GlyphPart] = []
        self._complete = False

    @property
    def parts(self) -> tuple[GlyphPart, ...]:
        return tuple(self._parts)

    @property
    def is_complete(self) -> bool:
        return self._complete

    def _add(self, part: GlyphPart) -> None:
        if self._complete:
            raise MapError("Cannot add parts to a glyph after construction is complete")
        self._parts.append(part)

    def add_circle(self, color: SymColor, center: Point, line_width: float, diameter: float) -> None:
        self._add(GlyphCircle(color, center, line_width, diameter))

    def add_line(self, color: SymColor, path: SymPath, width: float, style: LineStyle) -> None:
        self._add(GlyphLine(color, path, width, style))

    def add_area(self, color: SymColor, path: SymPath) -> None:
        self._add(GlyphArea(color, path))

    def construction_complete(self) -> None:
        """Seal the glyph.

        Raises:
            MapError: If the glyph has no parts
        """
        if not self._parts:
            raise MapError("Glyph has no parts")
        self._complete = True

    def bounding_box(self) -> Rect:
        """Bounds of all parts, including stroke widths."""
        bounds = self._parts[0].bounds()
        for part in self._parts[1:]:
            bounds = unionRect(bounds, part.bounds())
        return Rect.from_bounds(bounds)


@dataclass(frozen=True, slots=True)
class DashInfo:
    """Dash pattern of a dashed line symbol."""

    dash_length: float
    gap_length: float
    first_dash_length: float
    last_dash_length: float
    min_gaps: int = 1


@dataclass(frozen=True, slots=True)
class HatchInfo:
    """Hatch pattern of an area symbol.

    Attributes:
        mode: Number of hatch directions (1 = single, 2 = cross hatch)
        color: Hatch line color
        thickness: Hatch line thickness
        spacing: Distance between hatch lines
        angle1: Angle of the first hatch direction, degrees
        angle2: Angle of the second hatch direction, degrees (cross hatch only)
    """

    mode: int
    color: SymColor
    thickness: float
    spacing: float
    angle1: float
    angle2: float


# Symbol definitions compare by identity: two definitions with the same
# content are still distinct entries in a map.


@dataclass(eq=False)
class SymDef:
    """Base of all symbol definitions."""

    name: str
    ocad_id: int


@dataclass(eq=False)
class PointSymDef(SymDef):
    glyph: Glyph
    rotatable: bool


@dataclass(eq=False)
class LineSymDef(SymDef):
    color: SymColor
    thickness: float
    style: LineStyle
    dashes: DashInfo | None = None


@dataclass(eq=False)
class AreaSymDef(SymDef):
    hatching: HatchInfo | None = None
    fill_color: SymColor | None = None


@dataclass(eq=False)
class TextSymDef(SymDef):
    font_name: str
    em_height: float
    bold: bool
    italic: bool
    color: SymColor


@dataclass(frozen=True, slots=True)
class PointSymbol:
    """A point symbol placed on the map.

    Attributes:
        symdef: Definition holding the glyph
        location: Map location of the glyph origin
        orientation: Rotation in degrees, counter-clockwise
        gaps: Circle gap angles as flat (start, end) pairs, or None for no gaps
    """

    symdef: PointSymDef
    location: Point
    orientation: float
    gaps: tuple[float, ...] | None


@dataclass(frozen=True, slots=True)
class LineSymbol:
    symdef: LineSymDef
    path: SymPath


@dataclass(frozen=True, slots=True)
class AreaSymbol:
    symdef: AreaSymDef
    path: SymPath
    angle: float = 0.0


@dataclass(frozen=True, slots=True)
class TextSymbol:
    """Text placed on the map; location is the top-left of the first line."""

    symdef: TextSymDef
    lines: tuple[str, ...]
    location: Point


Symbol = PointSymbol | LineSymbol | AreaSymbol | TextSymbol


@dataclass
class Map:
    """Destination map for course symbols.

    Attributes:
        symdefs: Definitions keyed by id, in insertion order
        symbols: Symbols in drawing order
    """

    symdefs: dict[int, SymDef] = field(default_factory=dict)
    symbols: list[Symbol] = field(default_factory=list)

    def add_symdef(self, symdef: SymDef) -> None:
        """Register a symbol definition.

        Raises:
            DuplicateSymdefError: If the id is already used
        """
        if symdef.ocad_id in self.symdefs:
            raise DuplicateSymdefError(symdef.ocad_id)
        self.symdefs[symdef.ocad_id] = symdef

    def add_symbol(self, symbol: Symbol) -> None:
        """Append a symbol.

        Raises:
            UnknownSymdefError: If the symbol's definition was not added to this map
        """
        if self.symdefs.get(symbol.symdef.ocad_id) is not symbol.symdef:
            raise UnknownSymdefError(symbol.symdef.name)
        self.symbols.append(symbol)

    def get_free_symdef_ocad_id(self, integer_part: int) -> int:
        """First unused id of the form ``integer_part * 1000 + n``."""
        ocad_id = integer_part * 1000
        while ocad_id in self.symdefs:
            ocad_id += 1
        return ocad_id

    def symbols_of(self, symdef: SymDef) -> list[Symbol]:
        """Symbols that reference the given definition."""
        return [s for s in self.symbols if s.symdef is symdef]
