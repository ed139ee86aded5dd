"""Affine transform helpers on top of fontTools' Transform.

Transform composition follows fontTools: ``Transform().translate(x, y).rotate(a)``
rotates first and then translates. Angles are in radians, counter-clockwise.
"""

from fontTools.misc.transform import Identity, Offset, Scale, Transform

from coursemark.geometry.point import Point
from coursemark.geometry.rect import Rect

__all__ = [
    "Identity",
    "Offset",
    "Scale",
    "Transform",
    "rectangle_transform",
    "transform_distance",
    "transform_point",
]


def transform_point(pt: Point, xform: Transform) -> Point:
    """Apply a transform to a single point."""
    return Point.from_tuple(xform.transformPoint(pt.to_tuple()))


def transform_distance(distance: float, xform: Transform) -> float:
    """Transform a distance: length of the transformed x-axis vector of that length.

    Translation does not affect the result.
    """
    dx, dy = xform.transformVector((distance, 0.0))
    return float((dx * dx + dy * dy) ** 0.5)


def rectangle_transform(src: Rect, dest: Rect, invert_y: bool = False) -> Transform:
    """Transform mapping one rectangle onto another.

    Args:
        src: Source rectangle
        dest: Destination rectangle
        invert_y: Flip the y axis, so the bottom of src lands on the top of dest

    Returns:
        Transform with independent x and y scale
    """
    sx = dest.width / src.width
    sy = dest.height / src.height
    if invert_y:
        return Transform(sx, 0, 0, -sy, dest.left - src.left * sx, dest.top + src.bottom * sy)
    return Transform(sx, 0, 0, sy, dest.left - src.left * sx, dest.top - src.top * sy)
