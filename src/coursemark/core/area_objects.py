"""Course objects covering an area: out-of-bounds and dangerous areas."""

from collections.abc import Sequence
from typing import Any

from fontTools.misc.transform import Transform

from coursemark.config.settings import CourseAppearance
from coursemark.core.course_object import CourseObject
from coursemark.domain.enums import CourseObjectKind
from coursemark.domain.map import AreaSymbol, AreaSymDef, HatchInfo, Map, SymColor, SymDef
from coursemark.geometry import Point, Rect, SymPath, point_in_polygon
from coursemark.graphics.target import AREA_HIGHLIGHT, Brush, GraphicsTarget, Pen

# Hatch line thickness and spacing at scale ratio 1 (mm).
HATCH_THICKNESS = 0.25
HATCH_SPACING = 0.6


class AreaCourseObject(CourseObject):
    """A course object filling a closed outline (no holes).

    Attributes:
        path: Closed outline; an open input gets the first point appended
    """

    def __init__(
        self,
        control_id: int | None,
        course_control_id: int | None,
        special_id: int | None,
        scale_ratio: float,
        appearance: CourseAppearance,
        points: Sequence[Point],
    ) -> None:
        super().__init__(control_id, course_control_id, special_id, scale_ratio, appearance)
        points = list(points)
        if points[-1] != points[0]:
            points.append(points[0])
        self.path = SymPath(tuple(points))

    def _area_symdef(self, map: Map, color: SymColor, name: str, ocad_id: int, mode: int, angle1: float, angle2: float) -> AreaSymDef:
        hatching = HatchInfo(
            mode=mode,
            color=color,
            thickness=HATCH_THICKNESS * self.scale_ratio,
            spacing=HATCH_SPACING * self.scale_ratio,
            angle1=angle1,
            angle2=angle2,
        )
        symdef = AreaSymDef(name, map.get_free_symdef_ocad_id(ocad_id), hatching)
        map.add_symdef(symdef)
        return symdef

    def add_symbols(self, map: Map, symdef: SymDef) -> None:
        assert isinstance(symdef, AreaSymDef)
        map.add_symbol(AreaSymbol(symdef, self.path, 0.0))

    def distance_from_point(self, pt: Point) -> float:
        if point_in_polygon(pt, self.path.points):
            return 0.0
        dist, _closest = self.path.distance_from_point(pt)
        return dist

    def highlight(
        self,
        target: GraphicsTarget,
        world_to_pixel: Transform,
        brush: Brush,
        erasing: bool,
        area_brush: Brush = AREA_HIGHLIGHT,
    ) -> None:
        pixel_path = self.path.transform(world_to_pixel)
        target.draw_path(Pen(brush, 2), pixel_path)
        target.fill_path(brush if erasing else area_brush, pixel_path)

    def get_highlight_bounds(self) -> Rect:
        return self.path.bounding_box

    def offset(self, dx: float, dy: float) -> None:
        self.path = self.path.offset(dx, dy)

    def get_handles(self) -> list[Point] | None:
        # Last point duplicates the first
        return list(self.path.points[:-1])

    def move_handle(self, old_handle: Point, new_handle: Point) -> None:
        points = [new_handle if p == old_handle else p for p in self.path.points]
        self.path = self.path.with_points(points)

    def _state(self) -> tuple[Any, ...]:
        return (self.path,)

    def __str__(self) -> str:
        return super().__str__() + f"path:{self.path}"


class OOBCourseObject(AreaCourseObject):
    """Out-of-bounds area, single hatch."""

    kind = CourseObjectKind.OUT_OF_BOUNDS

    def __init__(self, special_id: int | None, scale_ratio: float, appearance: CourseAppearance, points: Sequence[Point]) -> None:
        super().__init__(None, None, special_id, scale_ratio, appearance, points)

    def create_symdef(self, map: Map, color: SymColor) -> SymDef:
        return self._area_symdef(map, color, "Out-of-bounds area", 709, 1, 90.0, 0.0)


class DangerousCourseObject(AreaCourseObject):
    """Dangerous area, cross hatch."""

    kind = CourseObjectKind.DANGEROUS

    def __init__(self, special_id: int | None, scale_ratio: float, appearance: CourseAppearance, points: Sequence[Point]) -> None:
        super().__init__(None, None, special_id, scale_ratio, appearance, points)

    def create_symdef(self, map: Map, color: SymColor) -> SymDef:
        return self._area_symdef(map, color, "Dangerous area", 710, 2, 45.0, 135.0)
