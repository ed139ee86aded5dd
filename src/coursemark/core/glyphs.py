"""Shapes of the point course objects.

Each point variant is described by a PointGlyph: parts in an unscaled
coordinate space centered at the origin (map units, y up), plus the flags
that drive highlighting and symbol creation. One generic routine in
PointCourseObject handles every entry of POINT_GLYPHS.
"""

from dataclasses import dataclass

from coursemark.domain.enums import CourseObjectKind, LineStyle
from coursemark.geometry import Point, PointKind, SymPath

N = PointKind.NORMAL
B = PointKind.BEZIER_CONTROL


@dataclass(frozen=True, slots=True)
class CirclePart:
    """Stroked circle centered at the origin; diameter to the stroke center."""

    diameter: float


@dataclass(frozen=True, slots=True)
class StrokePart:
    """Stroked path."""

    path: SymPath


@dataclass(frozen=True, slots=True)
class FillPart:
    """Filled closed path."""

    path: SymPath


GlyphPartSpec = CirclePart | StrokePart | FillPart


@dataclass(frozen=True, slots=True)
class PointGlyph:
    """Shape and behavior of one point variant.

    Attributes:
        name: Symbol definition name
        ocad_id: Integer part of the symbol definition id
        parts: Shape parts
        radius: Unscaled hit-test radius
        rotatable: Glyph follows the object orientation
        crosshair: Highlight adds a cross-hair at the location
        line_style: Join style of stroked parts
        line_thickness: Fixed stroke thickness; None uses the appearance line thickness
    """

    name: str
    ocad_id: int
    parts: tuple[GlyphPartSpec, ...]
    radius: float
    rotatable: bool = False
    crosshair: bool = False
    line_style: LineStyle = LineStyle.MITERED
    line_thickness: float | None = None

    @property
    def has_gaps(self) -> bool:
        """Circles of this glyph honor the gap mask."""
        return any(isinstance(part, CirclePart) for part in self.parts)


def _path(coords: list[tuple[float, float]], kinds: str | None = None) -> SymPath:
    points = tuple(Point(x, y) for x, y in coords)
    if kinds is None:
        return SymPath(points)
    return SymPath(points, tuple(N if k == "N" else B for k in kinds))


_START_TRIANGLE = _path([(0.0, 4.041), (3.5, -2.021), (-3.5, -2.021), (0.0, 4.041)])

_FIRST_AID_CROSS = _path([
    (-0.5, 1.5), (0.5, 1.5), (0.5, 0.5), (1.5, 0.5),
    (1.5, -0.5), (0.5, -0.5), (0.5, -1.5), (-0.5, -1.5),
    (-0.5, -0.5), (-1.5, -0.5), (-1.5, 0.5), (-0.5, 0.5), (-0.5, 1.5),
])

_WATER_CUP_TOP = _path(
    [
        (1.5, 1.375), (1.5, 1.5825), (0.8275, 1.75),
        (0.0, 1.75), (-0.8275, 1.75), (-1.5, 1.5825),
        (-1.5, 1.375), (-1.5, 1.1675), (-0.8275, 1.0),
        (0.0, 1.0), (0.8275, 1.0), (1.5, 1.1675), (1.5, 1.375),
    ],
    "NBBNBBNBBNBBN",
)

_WATER_CUP_BOTTOM = _path(
    [
        (1.0, -1.5), (1.0, -1.6375), (0.551, -1.75),
        (0.0, -1.75), (-0.551, -1.75), (-1.0, -1.6375), (-1.0, -1.5),
    ],
    "NBBNBBN",
)

POINT_GLYPHS: dict[CourseObjectKind, PointGlyph] = {
    CourseObjectKind.CONTROL: PointGlyph(
        name="Control point",
        ocad_id=702,
        parts=(CirclePart(6.0),),
        radius=3.0,
        crosshair=True,
    ),
    CourseObjectKind.START: PointGlyph(
        name="Start",
        ocad_id=701,
        parts=(StrokePart(_START_TRIANGLE),),
        radius=4.041,
        rotatable=True,
        crosshair=True,
    ),
    CourseObjectKind.FINISH: PointGlyph(
        name="Finish",
        ocad_id=706,
        parts=(CirclePart(5.0), CirclePart(7.0)),
        radius=3.5,
        crosshair=True,
    ),
    CourseObjectKind.CROSSING: PointGlyph(
        name="Crossing point",
        ocad_id=708,
        parts=(
            StrokePart(_path([(-0.85, -1.5), (-0.35, -0.65), (-0.35, 0.65), (-0.85, 1.5)], "NBBN")),
            StrokePart(_path([(0.85, -1.5), (0.35, -0.65), (0.35, 0.65), (0.85, 1.5)], "NBBN")),
        ),
        radius=1.72,
        rotatable=True,
    ),
    CourseObjectKind.FIRST_AID: PointGlyph(
        name="First aid post",
        ocad_id=712,
        parts=(FillPart(_FIRST_AID_CROSS),),
        radius=1.5,
    ),
    CourseObjectKind.WATER: PointGlyph(
        name="Refreshment point",
        ocad_id=713,
        parts=(
            StrokePart(_WATER_CUP_TOP),
            StrokePart(_WATER_CUP_BOTTOM),
            StrokePart(_path([(1.5, 1.375), (1.0, -1.5)])),
            StrokePart(_path([(-1.5, 1.375), (-1.0, -1.5)])),
        ),
        radius=2.0,
        line_style=LineStyle.ROUNDED,
    ),
    CourseObjectKind.REGISTRATION_MARK: PointGlyph(
        name="Registration mark",
        ocad_id=714,
        parts=(
            StrokePart(_path([(-2.0, 0.0), (2.0, 0.0)])),
            StrokePart(_path([(0.0, -2.0), (0.0, 2.0)])),
        ),
        radius=2.0,
        line_thickness=0.1,
    ),
    CourseObjectKind.FORBIDDEN: PointGlyph(
        name="Forbidden route",
        ocad_id=710,
        parts=(
            StrokePart(_path([(-1.06, -1.06), (1.06, 1.06)])),
            StrokePart(_path([(1.06, -1.06), (-1.06, 1.06)])),
        ),
        radius=1.5,
    ),
}
