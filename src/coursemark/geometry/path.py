"""Paths made of straight and cubic Bezier segments.

This module provides:
- SymPath: Immutable ordered point sequence with per-point kind flags
- nearest_point_on_segment: Closest point on a line segment
- point_in_polygon: Ray casting containment test

Arc length along cubic segments is computed with fontTools' bezierTools so
that splitting a path keeps its curves as curves.
"""

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from functools import cached_property

from fontTools.misc.arrayTools import calcBounds, unionRect
from fontTools.misc.bezierTools import calcCubicArcLength, calcCubicBounds, splitCubicAtT
from fontTools.misc.transform import Transform

from coursemark.exceptions import PathError
from coursemark.geometry._bezier import flatten_cubic
from coursemark.geometry.point import Point, PointKind
from coursemark.geometry.rect import Rect

# Flattening tolerance in map units (mm).
FLATTEN_TOLERANCE = 0.01

_CUBIC_KINDS = (
    PointKind.NORMAL,
    PointKind.BEZIER_CONTROL,
    PointKind.BEZIER_CONTROL,
    PointKind.NORMAL,
)


def nearest_point_on_segment(point: Point, seg_start: Point, seg_end: Point) -> tuple[Point, float]:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps to the segment endpoints.

    Args:
        point: The point to project
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Tuple of (nearest_point, distance)
    """
    t = _segment_parameter(point, seg_start, seg_end)
    nearest = Point(
        seg_start.x + t * (seg_end.x - seg_start.x),
        seg_start.y + t * (seg_end.y - seg_start.y),
    )
    return nearest, point.distance_to(nearest)


def _segment_parameter(point: Point, seg_start: Point, seg_end: Point) -> float:
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y
    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq < 1e-20:
        return 0.0
    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    return max(0.0, min(1.0, t))


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        polygon: Points forming the polygon boundary (closing point optional)

    Returns:
        True if point is inside polygon, False otherwise
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def _tuples(seg: Sequence[Point]) -> list[tuple[float, float]]:
    return [p.to_tuple() for p in seg]


def _segment_length(seg: tuple[Point, ...]) -> float:
    if len(seg) == 2:
        return seg[0].distance_to(seg[1])
    return calcCubicArcLength(*_tuples(seg))


def _cubic_point(seg: tuple[Point, ...], t: float) -> Point:
    p0, p1, p2, p3 = seg
    mt = 1.0 - t
    a, b, c, d = mt * mt * mt, 3 * mt * mt * t, 3 * mt * t * t, t * t * t
    return Point(
        a * p0.x + b * p1.x + c * p2.x + d * p3.x,
        a * p0.y + b * p1.y + c * p2.y + d * p3.y,
    )


def _cubic_t_at_length(seg: tuple[Point, ...], seg_length: float, target: float) -> float:
    """Parameter t at which the arc length from the start equals target."""
    if target <= 1e-9:
        return 0.0
    if target >= seg_length - 1e-9:
        return 1.0

    pts = _tuples(seg)
    lo, hi = 0.0, 1.0
    for _ in range(40):
        mid = (lo + hi) / 2
        first, _second = splitCubicAtT(*pts, mid)
        if calcCubicArcLength(*first) < target:
            lo = mid
        else:
            hi = mid
    return (lo + hi) / 2


@dataclass(frozen=True)
class SymPath:
    """An open or closed path of straight and cubic Bezier segments.

    Immutable: every operation returns a new path, so paths can be shared
    between course objects and their clones without aliasing.

    Attributes:
        points: Points of the path, in order
        kinds: Kind of each point (defaults to all NORMAL)
    """

    points: tuple[Point, ...]
    kinds: tuple[PointKind, ...] = ()

    def __post_init__(self) -> None:
        points = tuple(self.points)
        kinds = tuple(self.kinds) if self.kinds else (PointKind.NORMAL,) * len(points)
        object.__setattr__(self, "points", points)
        object.__setattr__(self, "kinds", kinds)

        if len(points) < 2:
            raise PathError(f"Path needs at least 2 points, got {len(points)}")
        if len(kinds) != len(points):
            raise PathError(f"Path has {len(points)} points but {len(kinds)} kinds")
        self._check_kinds()

    def _check_kinds(self) -> None:
        kinds = self.kinds
        if kinds[0] is not PointKind.NORMAL or kinds[-1] is not PointKind.NORMAL:
            raise PathError("Path must start and end with a normal point")

        i = 0
        while i < len(kinds) - 1:
            if kinds[i + 1] is PointKind.BEZIER_CONTROL:
                if tuple(kinds[i:i + 4]) != _CUBIC_KINDS:
                    raise PathError(f"Malformed Bezier segment at point {i}")
                i += 3
            else:
                i += 1

    @property
    def first_point(self) -> Point:
        return self.points[0]

    @property
    def last_point(self) -> Point:
        return self.points[-1]

    @property
    def is_closed(self) -> bool:
        return self.points[0] == self.points[-1]

    def segments(self) -> Iterator[tuple[Point, ...]]:
        """Yield segments: 2-point lines and 4-point cubic Beziers."""
        pts, kinds = self.points, self.kinds
        i = 0
        while i < len(pts) - 1:
            if kinds[i + 1] is PointKind.BEZIER_CONTROL:
                yield pts[i:i + 4]
                i += 3
            else:
                yield pts[i:i + 2]
                i += 1

    @cached_property
    def length(self) -> float:
        """Total arc length of the path."""
        return sum(_segment_length(seg) for seg in self.segments())

    @cached_property
    def bounding_box(self) -> Rect:
        """Exact bounds of the path, including curve extrema."""
        bounds: tuple[float, float, float, float] | None = None
        for seg in self.segments():
            if len(seg) == 2:
                seg_bounds = calcBounds(_tuples(seg))
            else:
                seg_bounds = calcCubicBounds(*_tuples(seg))
            bounds = seg_bounds if bounds is None else unionRect(bounds, seg_bounds)
        assert bounds is not None
        return Rect.from_bounds(bounds)

    def flatten(self, tolerance: float = FLATTEN_TOLERANCE) -> list[Point]:
        """Approximate the path by a polyline.

        Args:
            tolerance: Maximum distance between curve and polyline

        Returns:
            Polyline points, starting and ending at the path ends
        """
        result = [self.points[0]]
        for seg in self.segments():
            if len(seg) == 2:
                result.append(seg[1])
            else:
                result.extend(flatten_cubic(seg, tolerance)[1:])  # type: ignore[arg-type]
        return result

    def distance_from_point(self, pt: Point) -> tuple[float, Point]:
        """Distance from a point to the nearest point on the path.

        Returns:
            Tuple of (distance, closest_point)
        """
        polyline = self.flatten()
        best_dist = math.inf
        best_point = polyline[0]
        for start, end in zip(polyline, polyline[1:], strict=False):
            nearest, dist = nearest_point_on_segment(pt, start, end)
            if dist < best_dist:
                best_dist, best_point = dist, nearest
        return best_dist, best_point

    def distance_along(self, pt: Point) -> float:
        """Arc length from the start of the path to the point closest to pt."""
        best_dist = math.inf
        best_along = 0.0
        travelled = 0.0

        for seg in self.segments():
            seg_length = _segment_length(seg)
            if len(seg) == 2:
                t = _segment_parameter(pt, seg[0], seg[1])
                nearest, dist = nearest_point_on_segment(pt, seg[0], seg[1])
                along = travelled + t * seg_length
            else:
                along_in_seg, dist = self._nearest_on_cubic(pt, seg, seg_length)
                along = travelled + along_in_seg
            if dist < best_dist:
                best_dist, best_along = dist, along
            travelled += seg_length

        return best_along

    @staticmethod
    def _nearest_on_cubic(pt: Point, seg: tuple[Point, ...], seg_length: float) -> tuple[float, float]:
        polyline = flatten_cubic(seg, FLATTEN_TOLERANCE)  # type: ignore[arg-type]
        poly_length = sum(a.distance_to(b) for a, b in zip(polyline, polyline[1:], strict=False))
        best_dist = math.inf
        best_along = 0.0
        travelled = 0.0
        for start, end in zip(polyline, polyline[1:], strict=False):
            piece = start.distance_to(end)
            t = _segment_parameter(pt, start, end)
            _nearest, dist = nearest_point_on_segment(pt, start, end)
            if dist < best_dist:
                best_dist, best_along = dist, travelled + t * piece
            travelled += piece
        if poly_length > 0:
            best_along *= seg_length / poly_length
        return best_along, best_dist

    def point_at_distance(self, distance: float) -> Point:
        """Point at the given arc length from the start, clamped to the path."""
        distance = max(0.0, min(distance, self.length))
        travelled = 0.0
        last_seg: tuple[Point, ...] = ()
        for seg in self.segments():
            seg_length = _segment_length(seg)
            if distance <= travelled + seg_length:
                remaining = distance - travelled
                if len(seg) == 2:
                    t = remaining / seg_length if seg_length > 0 else 0.0
                    return Point(
                        seg[0].x + t * (seg[1].x - seg[0].x),
                        seg[0].y + t * (seg[1].y - seg[0].y),
                    )
                return _cubic_point(seg, _cubic_t_at_length(seg, seg_length, remaining))
            travelled += seg_length
            last_seg = seg
        return last_seg[-1] if last_seg else self.points[-1]

    def subpath(self, start: float, end: float) -> "SymPath":
        """The part of the path between two arc lengths.

        Args:
            start: Arc length where the sub-path starts
            end: Arc length where the sub-path ends

        Returns:
            New path; Bezier segments are split, not flattened

        Raises:
            PathError: If the clamped range is empty
        """
        start = max(0.0, start)
        end = min(self.length, end)
        if end <= start:
            raise PathError(f"Empty sub-path range [{start}, {end}]")

        points: list[Point] = []
        kinds: list[PointKind] = []
        travelled = 0.0

        for seg in self.segments():
            seg_length = _segment_length(seg)
            seg_start, seg_end = travelled, travelled + seg_length
            travelled = seg_end
            if seg_end <= start or seg_start >= end:
                continue

            lo = max(start, seg_start) - seg_start
            hi = min(end, seg_end) - seg_start
            piece, piece_kinds = _sub_segment(seg, seg_length, lo, hi)

            if points:
                piece, piece_kinds = piece[1:], piece_kinds[1:]
            points.extend(piece)
            kinds.extend(piece_kinds)

        return SymPath(tuple(points), tuple(kinds))

    def transform(self, xform: Transform) -> "SymPath":
        """Apply an affine transform to every point."""
        points = tuple(Point.from_tuple(xform.transformPoint(p.to_tuple())) for p in self.points)
        return SymPath(points, self.kinds)

    def offset(self, dx: float, dy: float) -> "SymPath":
        """Translate every point by (dx, dy)."""
        return SymPath(tuple(p.offset(dx, dy) for p in self.points), self.kinds)

    def with_points(self, points: Sequence[Point]) -> "SymPath":
        """Same point kinds, new coordinates."""
        return SymPath(tuple(points), self.kinds)

    def __str__(self) -> str:
        parts = []
        for pt, kind in zip(self.points, self.kinds, strict=True):
            prefix = "N" if kind is PointKind.NORMAL else "B"
            parts.append(f"{prefix}{pt}")
        return " ".join(parts)


def _sub_segment(
    seg: tuple[Point, ...], seg_length: float, lo: float, hi: float
) -> tuple[list[Point], list[PointKind]]:
    if len(seg) == 2:
        if seg_length <= 0:
            return list(seg), [PointKind.NORMAL, PointKind.NORMAL]
        a, b = seg
        t0, t1 = lo / seg_length, hi / seg_length
        start = Point(a.x + t0 * (b.x - a.x), a.y + t0 * (b.y - a.y)) if t0 > 0 else a
        end = Point(a.x + t1 * (b.x - a.x), a.y + t1 * (b.y - a.y)) if t1 < 1 else b
        return [start, end], [PointKind.NORMAL, PointKind.NORMAL]

    t0 = _cubic_t_at_length(seg, seg_length, lo)
    t1 = _cubic_t_at_length(seg, seg_length, hi)
    split_at = [t for t in (t0, t1) if 0.0 < t < 1.0]
    if not split_at:
        return list(seg), list(_CUBIC_KINDS)

    pieces = splitCubicAtT(*_tuples(seg), *split_at)
    piece = pieces[1] if t0 > 0.0 else pieces[0]
    points = [Point.from_tuple(p) for p in piece]
    # Keep the original end points exact where the piece reaches them
    if t0 <= 0.0:
        points[0] = seg[0]
    if t1 >= 1.0:
        points[-1] = seg[3]
    return points, list(_CUBIC_KINDS)
