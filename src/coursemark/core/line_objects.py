"""Course objects drawn along a path: legs, flagged legs and boundaries."""

from collections.abc import Sequence
from typing import Any, ClassVar

from fontTools.misc.transform import Transform

from coursemark.config.settings import CourseAppearance
from coursemark.core.course_object import CourseObject, format_number
from coursemark.domain.enums import CourseObjectKind, LineStyle
from coursemark.domain.map import DashInfo, LineSymbol, LineSymDef, Map, SymColor, SymDef
from coursemark.geometry import (
    LegGap,
    Point,
    Rect,
    SymPath,
    gap_start_stop_points,
    move_gaps_to_new_path,
    move_start_stop_point,
    split_path_with_gaps,
    transform_distance,
)
from coursemark.graphics.target import AREA_HIGHLIGHT, Brush, GraphicsTarget, Pen


class LineCourseObject(CourseObject):
    """A course object following a path, possibly interrupted by gaps.

    Attributes:
        course_control_id2: Second course control of a two-ended leg, or None
        path: Path of the line
        gaps: Undrawn intervals along the path, or None
        thickness: Unscaled line thickness
    """

    # Leg ends belong to the controls they join, so legs do not expose them.
    handles_on_ends: ClassVar[bool] = True

    def __init__(
        self,
        control_id: int | None,
        course_control_id: int | None,
        course_control_id2: int | None,
        special_id: int | None,
        scale_ratio: float,
        appearance: CourseAppearance,
        thickness: float,
        path: SymPath,
        gaps: Sequence[LegGap] | None,
    ) -> None:
        super().__init__(control_id, course_control_id, special_id, scale_ratio, appearance)
        self.course_control_id2 = course_control_id2
        self.thickness = thickness
        self.path = path
        self.gaps = tuple(gaps) if gaps is not None else None

    def gapped_paths(self) -> list[SymPath]:
        """Drawn pieces of the line."""
        return split_path_with_gaps(self.path, self.gaps)

    def _line_symdef(self, map: Map, color: SymColor, name: str, ocad_id: int, dashes: DashInfo | None = None) -> LineSymDef:
        symdef = LineSymDef(
            name,
            map.get_free_symdef_ocad_id(ocad_id),
            color,
            self.thickness * self.scale_ratio,
            LineStyle.BEVELED,
            dashes,
        )
        map.add_symdef(symdef)
        return symdef

    def add_symbols(self, map: Map, symdef: SymDef) -> None:
        assert isinstance(symdef, LineSymDef)
        for piece in self.gapped_paths():
            map.add_symbol(LineSymbol(symdef, piece))

    def distance_from_point(self, pt: Point) -> float:
        dist, _closest = self.path.distance_from_point(pt)
        return max(0.0, dist - self.thickness / 2 * self.scale_ratio)

    def highlight(
        self,
        target: GraphicsTarget,
        world_to_pixel: Transform,
        brush: Brush,
        erasing: bool,
        area_brush: Brush = AREA_HIGHLIGHT,
    ) -> None:
        pen = Pen(brush, transform_distance(self.thickness * self.scale_ratio, world_to_pixel))
        for piece in self.gapped_paths():
            target.draw_path(pen, piece.transform(world_to_pixel))

    def get_highlight_bounds(self) -> Rect:
        return self.path.bounding_box

    def offset(self, dx: float, dy: float) -> None:
        self.path = self.path.offset(dx, dy)

    def get_handles(self) -> list[Point] | None:
        handles = list(self.path.points)
        if not self.handles_on_ends:
            handles = handles[1:-1]
        if self.gaps is not None:
            handles.extend(gap_start_stop_points(self.path, self.gaps))
        return handles or None

    def move_handle(self, old_handle: Point, new_handle: Point) -> None:
        """Move a bend point, or failing that a gap end."""
        points = list(self.path.points)
        candidates = range(len(points)) if self.handles_on_ends else range(1, len(points) - 1)

        for i in candidates:
            if points[i] == old_handle:
                old_path = self.path
                points[i] = new_handle
                self.path = old_path.with_points(points)
                if self.gaps is not None:
                    self.gaps = move_gaps_to_new_path(self.gaps, old_path, self.path)
                return

        if self.gaps is not None:
            self.gaps = move_start_stop_point(self.path, self.gaps, old_handle, new_handle)

    def _state(self) -> tuple[Any, ...]:
        return (self.course_control_id2, self.thickness, self.path, self.gaps)

    def __str__(self) -> str:
        result = super().__str__()
        if self.course_control_id2 is not None:
            result += f"course-control2:{self.course_control_id2}  "
        result += f"path:{self.path}"
        if self.gaps is not None:
            result += "  gaps:"
            for gap in self.gaps:
                result += f" (s:{format_number(gap.distance_from_start, 2)},l:{format_number(gap.length, 2)})"
        return result


class LegCourseObject(LineCourseObject):
    """Leg between two controls."""

    kind = CourseObjectKind.LEG
    handles_on_ends = False

    def __init__(
        self,
        control_id: int | None,
        course_control_id: int | None,
        course_control_id2: int | None,
        scale_ratio: float,
        appearance: CourseAppearance,
        path: SymPath,
        gaps: Sequence[LegGap] | None,
    ) -> None:
        super().__init__(
            control_id, course_control_id, course_control_id2, None,
            scale_ratio, appearance, appearance.line_thickness, path, gaps,
        )

    def create_symdef(self, map: Map, color: SymColor) -> SymDef:
        return self._line_symdef(map, color, "Line", 704)


class FlaggedLegCourseObject(LineCourseObject):
    """Marked route between two controls, drawn dashed."""

    kind = CourseObjectKind.FLAGGED_LEG
    handles_on_ends = False

    def __init__(
        self,
        control_id: int | None,
        course_control_id: int | None,
        course_control_id2: int | None,
        scale_ratio: float,
        appearance: CourseAppearance,
        path: SymPath,
        gaps: Sequence[LegGap] | None,
    ) -> None:
        super().__init__(
            control_id, course_control_id, course_control_id2, None,
            scale_ratio, appearance, appearance.line_thickness, path, gaps,
        )

    def create_symdef(self, map: Map, color: SymColor) -> SymDef:
        dash = self.appearance.flagged_dash_length * self.scale_ratio
        dashes = DashInfo(
            dash_length=dash,
            gap_length=self.appearance.flagged_gap_length * self.scale_ratio,
            first_dash_length=dash,
            last_dash_length=dash,
            min_gaps=1,
        )
        return self._line_symdef(map, color, "Marked route", 705, dashes)


class BoundaryCourseObject(LineCourseObject):
    """Uncrossable boundary."""

    kind = CourseObjectKind.BOUNDARY

    def __init__(self, special_id: int | None, scale_ratio: float, appearance: CourseAppearance, path: SymPath) -> None:
        super().__init__(
            None, None, None, special_id, scale_ratio, appearance, appearance.boundary_thickness, path, None
        )

    def create_symdef(self, map: Map, color: SymColor) -> SymDef:
        return self._line_symdef(map, color, "Uncrossable boundary", 707)
