"""Gaps along legs and boundaries.

A gap is an interval of arc length along a path that is not drawn. Gaps
are stored relative to the path, so when the path is edited they have to
be re-projected onto the new path.

This module provides:
- LegGap: A single (distance_from_start, length) interval
- split_path_with_gaps: Drawn sub-paths of a gapped path
- gap_start_stop_points: Handle positions for gap ends
- move_gaps_to_new_path: Re-project gaps after the path changed
- move_start_stop_point: Drag one end of a gap
"""

from collections.abc import Sequence
from dataclasses import dataclass

from coursemark.geometry.path import SymPath
from coursemark.geometry.point import Point

# Pieces shorter than this (mm) are not drawn.
MIN_PIECE_LENGTH = 1e-4


@dataclass(frozen=True, slots=True)
class LegGap:
    """An undrawn interval along a path.

    Attributes:
        distance_from_start: Arc length from the path start to the gap start
        length: Length of the gap along the path
    """

    distance_from_start: float
    length: float

    @property
    def distance_to_end(self) -> float:
        return self.distance_from_start + self.length


def _normalized(gaps: Sequence[LegGap], path_length: float) -> list[tuple[float, float]]:
    """Clip gaps to the path, sort them and merge overlapping ones."""
    intervals = []
    for gap in gaps:
        start = max(0.0, gap.distance_from_start)
        end = min(path_length, gap.distance_to_end)
        if end > start:
            intervals.append((start, end))
    intervals.sort()

    merged: list[tuple[float, float]] = []
    for start, end in intervals:
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def split_path_with_gaps(path: SymPath, gaps: Sequence[LegGap] | None) -> list[SymPath]:
    """Split a path into the pieces that are actually drawn.

    Args:
        path: Path to split
        gaps: Gaps along the path, or None for a continuous path

    Returns:
        Drawn sub-paths in path order. A path gapped over its whole length
        yields an empty list.
    """
    if not gaps:
        return [path]

    total = path.length
    pieces = []
    position = 0.0
    for start, end in _normalized(gaps, total):
        if start - position > MIN_PIECE_LENGTH:
            pieces.append(path.subpath(position, start))
        position = end
    if total - position > MIN_PIECE_LENGTH:
        pieces.append(path.subpath(position, total))
    return pieces


def gap_start_stop_points(path: SymPath, gaps: Sequence[LegGap]) -> list[Point]:
    """Start and stop point of every gap, in gap order."""
    points = []
    for gap in gaps:
        points.append(path.point_at_distance(gap.distance_from_start))
        points.append(path.point_at_distance(gap.distance_to_end))
    return points


def move_gaps_to_new_path(gaps: Sequence[LegGap], old_path: SymPath, new_path: SymPath) -> tuple[LegGap, ...]:
    """Re-project gaps from an old path onto an edited path.

    Each gap end is located on the old path and projected to the closest
    point of the new path, so gaps stay near where they were drawn.

    Args:
        gaps: Gaps relative to old_path
        old_path: Path the gaps were measured on
        new_path: Path after the edit

    Returns:
        Gaps relative to new_path
    """
    moved = []
    for gap in gaps:
        start_pt = old_path.point_at_distance(gap.distance_from_start)
        stop_pt = old_path.point_at_distance(gap.distance_to_end)
        start = new_path.distance_along(start_pt)
        stop = new_path.distance_along(stop_pt)
        moved.append(LegGap(min(start, stop), abs(stop - start)))
    return tuple(moved)


def move_start_stop_point(
    path: SymPath, gaps: Sequence[LegGap], old_pt: Point, new_pt: Point
) -> tuple[LegGap, ...]:
    """Move the gap end located at old_pt to the path point closest to new_pt.

    Args:
        path: Path the gaps belong to
        gaps: Current gaps
        old_pt: Current position of the gap start or stop point
        new_pt: Requested new position

    Returns:
        Updated gaps; unchanged when no gap end is at old_pt
    """
    result = list(gaps)
    for i, gap in enumerate(gaps):
        start_pt = path.point_at_distance(gap.distance_from_start)
        stop_pt = path.point_at_distance(gap.distance_to_end)
        if start_pt == old_pt:
            start, stop = path.distance_along(new_pt), gap.distance_to_end
        elif stop_pt == old_pt:
            start, stop = gap.distance_from_start, path.distance_along(new_pt)
        else:
            continue
        result[i] = LegGap(min(start, stop), abs(stop - start))
        break
    return tuple(result)
