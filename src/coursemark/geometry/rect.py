"""Axis-aligned rectangle in map or page coordinates."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fontTools.misc.arrayTools import calcBounds
from fontTools.misc.transform import Transform

from coursemark.geometry.point import Point

if TYPE_CHECKING:
    from coursemark.geometry.path import SymPath


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle.

    ``top`` is the edge with the smaller y value. In map coordinates y grows
    upwards, so ``top`` is visually the bottom edge of the rectangle.

    Attributes:
        x: Left edge
        y: Top edge (minimum y)
        width: Width, never negative
        height: Height, never negative
    """

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> "Rect":
        """Create a rectangle from its edges, normalizing swapped edges."""
        x0, x1 = min(left, right), max(left, right)
        y0, y1 = min(top, bottom), max(top, bottom)
        return cls(x0, y0, x1 - x0, y1 - y0)

    @classmethod
    def from_bounds(cls, bounds: tuple[float, float, float, float]) -> "Rect":
        """Create a rectangle from an (x_min, y_min, x_max, y_max) tuple."""
        return cls.from_ltrb(*bounds)

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, pt: Point) -> bool:
        """Half-open containment test: left and top edges are inside."""
        return self.left <= pt.x < self.right and self.top <= pt.y < self.bottom

    def offset(self, dx: float, dy: float) -> "Rect":
        """Return this rectangle moved by (dx, dy)."""
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def corners(self) -> tuple[Point, Point, Point, Point]:
        """Corners in outline order: (L,T), (R,T), (R,B), (L,B)."""
        return (
            Point(self.left, self.top),
            Point(self.right, self.top),
            Point(self.right, self.bottom),
            Point(self.left, self.bottom),
        )

    def to_path(self) -> "SymPath":
        """Closed outline of the rectangle as a SymPath."""
        from coursemark.geometry.path import SymPath

        corners = self.corners()
        return SymPath(corners + (corners[0],))

    def transform(self, xform: Transform) -> "Rect":
        """Bounding rectangle of the transformed corners."""
        pts = [xform.transformPoint(c.to_tuple()) for c in self.corners()]
        return Rect.from_bounds(calcBounds(pts))

    def __str__(self) -> str:
        return f"{{X={self.x:g},Y={self.y:g},Width={self.width:g},Height={self.height:g}}}"
