"""Geometry primitives: points, paths, rectangles, gaps and transforms."""

from coursemark.geometry.legs import (
    LegGap,
    gap_start_stop_points,
    move_gaps_to_new_path,
    move_start_stop_point,
    split_path_with_gaps,
)
from coursemark.geometry.path import SymPath, nearest_point_on_segment, point_in_polygon
from coursemark.geometry.point import Point, PointKind
from coursemark.geometry.rect import Rect
from coursemark.geometry.transform import (
    Transform,
    rectangle_transform,
    transform_distance,
    transform_point,
)

__all__ = [
    "LegGap",
    "Point",
    "PointKind",
    "Rect",
    "SymPath",
    "Transform",
    "gap_start_stop_points",
    "move_gaps_to_new_path",
    "move_start_stop_point",
    "nearest_point_on_segment",
    "point_in_polygon",
    "rectangle_transform",
    "split_path_with_gaps",
    "transform_distance",
    "transform_point",
]
