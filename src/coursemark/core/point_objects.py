"""Course objects placed at a single point.

All point variants share one implementation driven by the glyph table in
coursemark.core.glyphs; the leaf classes only pick their glyph and
constructor signature.
"""

import math
from typing import Any, ClassVar

from fontTools.misc.transform import Transform

from coursemark.config.settings import CourseAppearance
from coursemark.core.course_object import CourseObject, format_number
from coursemark.core.gaps import FULL_CIRCLE, check_mask, compute_circle_gaps, drawn_arcs
from coursemark.core.glyphs import POINT_GLYPHS, CirclePart, FillPart, PointGlyph, StrokePart
from coursemark.domain.enums import CourseObjectKind, LineStyle
from coursemark.domain.map import Glyph, Map, PointSymbol, PointSymDef, SymColor, SymDef
from coursemark.geometry import Point, Rect, transform_distance, transform_point
from coursemark.graphics.target import AREA_HIGHLIGHT, Brush, GraphicsTarget, LineCap, Pen

# Cross-hair half length at scale ratio 1 (mm).
CROSSHAIR_LENGTH = 1.5


class PointCourseObject(CourseObject):
    """A course object at a single location.

    Attributes:
        location: Map location of the glyph origin
        orientation: Rotation in degrees, counter-clockwise (rotatable glyphs only)
        gaps: 32-bit circle gap mask, set bits drawn
    """

    glyph: ClassVar[PointGlyph]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "kind" in cls.__dict__:
            cls.glyph = POINT_GLYPHS[cls.kind]

    def __init__(
        self,
        control_id: int | None,
        course_control_id: int | None,
        special_id: int | None,
        scale_ratio: float,
        appearance: CourseAppearance,
        gaps: int,
        orientation: float,
        location: Point,
    ) -> None:
        super().__init__(control_id, course_control_id, special_id, scale_ratio, appearance)
        self.gaps = check_mask(gaps)
        self.orientation = orientation
        self.location = location
        self._radius = self.glyph.radius

    @property
    def true_radius(self) -> float:
        """Hit-test radius at the current scale."""
        return self._radius * self.scale_ratio

    @property
    def line_thickness(self) -> float:
        """Unscaled stroke thickness of the glyph."""
        if self.glyph.line_thickness is not None:
            return self.glyph.line_thickness
        return self.appearance.line_thickness

    def change_orientation(self, orientation: float) -> None:
        self.orientation = orientation

    def glyph_transform(self) -> Transform:
        """Glyph space to map space: scale, rotate, then move to the location."""
        return (
            Transform()
            .translate(self.location.x, self.location.y)
            .rotate(math.radians(self.orientation))
            .scale(self.scale_ratio)
        )

    # Map emission

    def create_symdef(self, map: Map, color: SymColor) -> SymDef:
        glyph = Glyph()
        width = self.line_thickness * self.scale_ratio
        for part in self.glyph.parts:
            if isinstance(part, CirclePart):
                glyph.add_circle(color, Point(0.0, 0.0), width, part.diameter * self.scale_ratio)
            elif isinstance(part, StrokePart):
                path = part.path.transform(Transform().scale(self.scale_ratio))
                glyph.add_line(color, path, width, self.glyph.line_style)
            else:
                glyph.add_area(color, part.path.transform(Transform().scale(self.scale_ratio)))
        glyph.construction_complete()

        symdef = PointSymDef(
            self.glyph.name,
            map.get_free_symdef_ocad_id(self.glyph.ocad_id),
            glyph,
            self.glyph.rotatable,
        )
        map.add_symdef(symdef)
        return symdef

    def add_symbols(self, map: Map, symdef: SymDef) -> None:
        assert isinstance(symdef, PointSymDef)
        map.add_symbol(PointSymbol(symdef, self.location, self.orientation, compute_circle_gaps(self.gaps)))

    # Hit-testing and highlighting

    def distance_from_point(self, pt: Point) -> float:
        return max(0.0, pt.distance_to(self.location) - self.true_radius)

    def highlight(
        self,
        target: GraphicsTarget,
        world_to_pixel: Transform,
        brush: Brush,
        erasing: bool,
        area_brush: Brush = AREA_HIGHLIGHT,
    ) -> None:
        thickness = transform_distance(self.line_thickness * self.scale_ratio, world_to_pixel)
        cap = LineCap.ROUND if self.glyph.line_style is LineStyle.ROUNDED else LineCap.FLAT
        pen = Pen(brush, thickness, cap)
        to_pixel = world_to_pixel.transform(self.glyph_transform())

        for part in self.glyph.parts:
            if isinstance(part, CirclePart):
                self._highlight_circle(target, world_to_pixel, pen, part.diameter)
            elif isinstance(part, StrokePart):
                target.draw_path(pen, part.path.transform(to_pixel))
            elif isinstance(part, FillPart):
                target.fill_polygon(brush, part.path.transform(to_pixel).points)

        if self.glyph.crosshair:
            self._highlight_crosshair(target, world_to_pixel, brush)

    def _highlight_circle(self, target: GraphicsTarget, world_to_pixel: Transform, pen: Pen, diameter: float) -> None:
        radius = (diameter - self.line_thickness) * self.scale_ratio / 2
        corner1 = transform_point(self.location.offset(-radius, -radius), world_to_pixel)
        corner2 = transform_point(self.location.offset(radius, radius), world_to_pixel)
        rect = Rect.from_ltrb(corner1.x, corner2.y, corner2.x, corner1.y)

        circle_gaps = compute_circle_gaps(self.gaps)
        if circle_gaps is None:
            target.draw_ellipse(pen, rect.center, rect.width / 2, rect.height / 2)
        else:
            for start, sweep in drawn_arcs(circle_gaps):
                target.draw_arc(pen, rect, -start, -sweep)

    def _highlight_crosshair(self, target: GraphicsTarget, world_to_pixel: Transform, brush: Brush) -> None:
        length = CROSSHAIR_LENGTH * self.scale_ratio
        loc = self.location
        ends = [
            loc.offset(-length, 0.0), loc.offset(length, 0.0),
            loc.offset(0.0, -length), loc.offset(0.0, length),
        ]
        px = [transform_point(p, world_to_pixel) for p in ends]
        px = [Point(round(p.x), round(p.y)) for p in px]

        pen = Pen(brush, 0)
        target.draw_line(pen, px[0], px[1])
        target.draw_line(pen, px[2], px[3])

    def get_highlight_bounds(self) -> Rect:
        r = self._radius
        return Rect(self.location.x - r, self.location.y - r, r * 2, r * 2)

    # Editing

    def offset(self, dx: float, dy: float) -> None:
        self.location = self.location.offset(dx, dy)

    def _state(self) -> tuple[Any, ...]:
        return (self.gaps, self.orientation, self.location, self._radius)

    def __str__(self) -> str:
        result = super().__str__()
        result += f"location:({format_number(self.location.x)},{format_number(self.location.y)})"
        if self.glyph.has_gaps:
            result += f"  gaps:{self.gaps:b}"
        if self.glyph.rotatable:
            result += f"  orientation:{format_number(self.orientation, 2)}"
        return result


class ControlCourseObject(PointCourseObject):
    """Control circle."""

    kind = CourseObjectKind.CONTROL

    def __init__(
        self,
        control_id: int | None,
        course_control_id: int | None,
        scale_ratio: float,
        appearance: CourseAppearance,
        gaps: int,
        location: Point,
    ) -> None:
        super().__init__(control_id, course_control_id, None, scale_ratio, appearance, gaps, 0.0, location)


class StartCourseObject(PointCourseObject):
    """Start triangle, pointing along the orientation."""

    kind = CourseObjectKind.START

    def __init__(
        self,
        control_id: int | None,
        course_control_id: int | None,
        scale_ratio: float,
        appearance: CourseAppearance,
        orientation: float,
        location: Point,
    ) -> None:
        super().__init__(control_id, course_control_id, None, scale_ratio, appearance, FULL_CIRCLE, orientation, location)


class FinishCourseObject(PointCourseObject):
    """Finish: two concentric circles sharing one gap mask."""

    kind = CourseObjectKind.FINISH

    def __init__(
        self,
        control_id: int | None,
        course_control_id: int | None,
        scale_ratio: float,
        appearance: CourseAppearance,
        gaps: int,
        location: Point,
    ) -> None:
        super().__init__(control_id, course_control_id, None, scale_ratio, appearance, gaps, 0.0, location)


class CrossingCourseObject(PointCourseObject):
    """Crossing point; mandatory crossings use a control id, optional ones a special id."""

    kind = CourseObjectKind.CROSSING

    def __init__(
        self,
        control_id: int | None,
        course_control_id: int | None,
        special_id: int | None,
        scale_ratio: float,
        appearance: CourseAppearance,
        orientation: float,
        location: Point,
    ) -> None:
        super().__init__(
            control_id, course_control_id, special_id, scale_ratio, appearance, FULL_CIRCLE, orientation, location
        )


class _SpecialPointCourseObject(PointCourseObject):
    def __init__(self, special_id: int | None, scale_ratio: float, appearance: CourseAppearance, location: Point) -> None:
        super().__init__(None, None, special_id, scale_ratio, appearance, FULL_CIRCLE, 0.0, location)


class FirstAidCourseObject(_SpecialPointCourseObject):
    kind = CourseObjectKind.FIRST_AID


class WaterCourseObject(_SpecialPointCourseObject):
    kind = CourseObjectKind.WATER


class RegMarkCourseObject(_SpecialPointCourseObject):
    """Registration mark, drawn with thin fixed-width strokes."""

    kind = CourseObjectKind.REGISTRATION_MARK


class ForbiddenCourseObject(_SpecialPointCourseObject):
    kind = CourseObjectKind.FORBIDDEN
