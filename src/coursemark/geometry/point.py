"""Point type used by every geometric entity.

This module defines:
- Point: An immutable 2D coordinate in map units
- PointKind: Kind flag attached to each point of a path
"""

import math
from dataclasses import dataclass
from enum import Enum, auto


class PointKind(Enum):
    """Kind of a point within a path.

    Paths are sequences of NORMAL points, except that a cubic Bezier
    segment is written as NORMAL, BEZIER_CONTROL, BEZIER_CONTROL, NORMAL.
    """

    NORMAL = auto()
    BEZIER_CONTROL = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D map space.

    Immutable and hashable, so handles can be compared and looked up
    exactly.

    Attributes:
        x: X coordinate in map units (mm)
        y: Y coordinate in map units (mm), increasing upwards
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def offset(self, dx: float, dy: float) -> "Point":
        """Return this point moved by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    @classmethod
    def from_tuple(cls, pt: tuple[float, float]) -> "Point":
        """Create a point from an (x, y) pair."""
        return cls(float(pt[0]), float(pt[1]))

    def __str__(self) -> str:
        return f"({self.x:g},{self.y:g})"
