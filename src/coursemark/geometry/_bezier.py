"""Internal Bezier curve flattening.

This is an internal module containing helpers for SymPath.flatten.
Not intended for public use.
"""

import math

from coursemark.geometry.point import Point

# Subdivision depth limit; 2**12 pieces is far below any useful tolerance.
_MAX_DEPTH = 12


def _midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def flatten_cubic(points: tuple[Point, Point, Point, Point], tolerance: float) -> list[Point]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Uses De Casteljau's algorithm for subdivision.

    Args:
        points: The 4 control points (p0, p1, p2, p3)
        tolerance: Maximum distance from true curve

    Returns:
        List of points approximating the curve, starting at p0 and ending at p3
    """
    return _flatten_cubic(points, tolerance, 0)


def _flatten_cubic(
    points: tuple[Point, Point, Point, Point], tolerance: float, depth: int
) -> list[Point]:
    p0, p1, p2, p3 = points

    # Curve midpoint (t=0.5) against chord midpoint
    curve_mid_x = 0.125 * (p0.x + 3 * p1.x + 3 * p2.x + p3.x)
    curve_mid_y = 0.125 * (p0.y + 3 * p1.y + 3 * p2.y + p3.y)
    line_mid_x = (p0.x + p3.x) / 2
    line_mid_y = (p0.y + p3.y) / 2

    # Control points must also hug the chord, otherwise S-curves look flat
    distance = max(
        math.hypot(curve_mid_x - line_mid_x, curve_mid_y - line_mid_y),
        _distance_from_chord(p1, p0, p3),
        _distance_from_chord(p2, p0, p3),
    )

    if distance <= tolerance or depth >= _MAX_DEPTH:
        return [p0, p3]

    q1 = _midpoint(p0, p1)
    q2 = _midpoint(p1, p2)
    q3 = _midpoint(p2, p3)
    r1 = _midpoint(q1, q2)
    r2 = _midpoint(q2, q3)
    mid = _midpoint(r1, r2)

    left = _flatten_cubic((p0, q1, r1, mid), tolerance, depth + 1)
    right = _flatten_cubic((mid, r2, q3, p3), tolerance, depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right


def _distance_from_chord(pt: Point, start: Point, end: Point) -> float:
    dx = end.x - start.x
    dy = end.y - start.y
    length = math.hypot(dx, dy)
    if length < 1e-12:
        return math.hypot(pt.x - start.x, pt.y - start.y)
    return abs((pt.x - start.x) * dy - (pt.y - start.y) * dx) / length
