"""Text course objects: control numbers, control codes and free text.

Text objects are sized from font metrics through a TextMeasurer and carry
their own em height instead of using the scale ratio.
"""

from collections.abc import Hashable
from typing import Any, ClassVar

from fontTools.misc.transform import Transform

from coursemark.config.settings import CourseAppearance, FontSpec
from coursemark.core.course_object import CourseObject, format_number, handle_cursor, moved_rect, rect_handles
from coursemark.core.symdefs import TextSymDefKey
from coursemark.domain.enums import CourseObjectKind, FontStyle, HandleCursor
from coursemark.domain.map import Map, SymColor, SymDef, TextSymbol, TextSymDef
from coursemark.geometry import Point, Rect, transform_distance, transform_point
from coursemark.graphics.target import AREA_HIGHLIGHT, Brush, GraphicsTarget, Pen
from coursemark.io.fonts import TextMeasurer


class TextCourseObject(CourseObject):
    """A single line of text.

    ``top_left`` is the top-left corner in map coordinates (y up), so the
    text extends downwards to ``top_left.y - height``.

    Attributes:
        text: Text to draw
        top_left: Top-left corner of the text
        font_name: Font family
        font_style: Bold/italic flags
    """

    symdef_name: ClassVar[str]
    ocad_id_part: ClassVar[int]

    def __init__(
        self,
        control_id: int | None,
        course_control_id: int | None,
        special_id: int | None,
        text: str,
        top_left: Point,
        font_name: str,
        font_style: FontStyle,
        em_height: float,
        measurer: TextMeasurer,
        appearance: CourseAppearance | None = None,
    ) -> None:
        super().__init__(control_id, course_control_id, special_id, 1.0, appearance or CourseAppearance())
        self.text = text
        self.top_left = top_left
        self.font_name = font_name
        self.font_style = font_style
        self._measurer = measurer
        self._em_height = em_height
        self.size = self._measure()

    @property
    def em_height(self) -> float:
        return self._em_height

    @em_height.setter
    def em_height(self, value: float) -> None:
        self._em_height = value
        self.size = self._measure()

    def _measure(self) -> tuple[float, float]:
        if self._em_height == 0:
            return (0.0, 0.0)
        return self._measurer.measure(self.text, self.font_name, self.font_style, self._em_height)

    def text_rect(self) -> Rect:
        """Map-space rectangle covered by the text."""
        width, height = self.size
        return Rect(self.top_left.x, self.top_left.y - height, width, height)

    def symdef_key(self) -> Hashable:
        return TextSymDefKey(self.font_name, self.font_style, self._em_height)

    def create_symdef(self, map: Map, color: SymColor) -> SymDef:
        symdef = TextSymDef(
            self.symdef_name,
            map.get_free_symdef_ocad_id(self.ocad_id_part),
            font_name=self.font_name,
            em_height=self._em_height,
            bold=bool(self.font_style & FontStyle.BOLD),
            italic=bool(self.font_style & FontStyle.ITALIC),
            color=color,
        )
        map.add_symdef(symdef)
        return symdef

    def add_symbols(self, map: Map, symdef: SymDef) -> None:
        assert isinstance(symdef, TextSymDef)
        map.add_symbol(TextSymbol(symdef, (self.text,), self.top_left))

    def distance_from_point(self, pt: Point) -> float:
        rect = self.text_rect()
        if rect.contains(pt):
            return 0.0
        dist, _closest = rect.to_path().distance_from_point(pt)
        return dist

    def highlight(
        self,
        target: GraphicsTarget,
        world_to_pixel: Transform,
        brush: Brush,
        erasing: bool,
        area_brush: Brush = AREA_HIGHLIGHT,
    ) -> None:
        pixel_em_height = transform_distance(self._em_height, world_to_pixel)
        pixel_top_left = transform_point(self.top_left, world_to_pixel)
        target.draw_text(self.text, self.font_name, self.font_style, pixel_em_height, brush, pixel_top_left)

    def get_highlight_bounds(self) -> Rect:
        return self.text_rect()

    def offset(self, dx: float, dy: float) -> None:
        self.top_left = self.top_left.offset(dx, dy)

    def _state(self) -> tuple[Any, ...]:
        return (self.text, self.top_left, self.font_name, self.font_style, self._em_height)

    def __str__(self) -> str:
        return super().__str__() + (
            f"text:{self.text}  top-left:({format_number(self.top_left.x, 2)},{format_number(self.top_left.y, 2)})\n"
            f"                font-name:{self.font_name}  font-style:{self.font_style.label}"
            f"  font-height:{format_number(self._em_height)}"
        )


class _CenteredTextCourseObject(TextCourseObject):
    """Text centered on a point, in a font taken from the appearance."""

    font_field: ClassVar[str]

    def __init__(
        self,
        control_id: int | None,
        course_control_id: int | None,
        scale_ratio: float,
        appearance: CourseAppearance,
        text: str,
        center_point: Point,
        measurer: TextMeasurer,
    ) -> None:
        font: FontSpec = getattr(appearance, self.font_field)
        super().__init__(
            control_id, course_control_id, None, text, center_point,
            font.name, font.style, font.em_height * scale_ratio, measurer, appearance,
        )
        self.center_point = center_point
        width, height = self.size
        self.top_left = Point(center_point.x - width / 2, center_point.y + height / 2)

    def offset(self, dx: float, dy: float) -> None:
        super().offset(dx, dy)
        self.center_point = self.center_point.offset(dx, dy)


class ControlNumberCourseObject(_CenteredTextCourseObject):
    """Control number printed next to a control circle."""

    kind = CourseObjectKind.CONTROL_NUMBER
    symdef_name = "Control number"
    ocad_id_part = 703
    font_field = "number_font"


class CodeCourseObject(_CenteredTextCourseObject):
    """Control code printed next to a control circle."""

    kind = CourseObjectKind.CODE
    symdef_name = "Control code"
    ocad_id_part = 720
    font_field = "code_font"


def calculate_em_height(
    measurer: TextMeasurer, text: str, font_name: str, font_style: FontStyle, width: float, height: float
) -> float:
    """Em height at which text just fits a width x height box.

    Measures at em height 1 and scales by whichever dimension binds.
    Returns 0 for empty text or a box with zero width or height.
    """
    if not text or width == 0 or height == 0:
        return 0.0

    unit_width, unit_height = measurer.measure(text, font_name, font_style, 1.0)
    if unit_width * height > unit_height * width:
        return width / unit_width
    return height / unit_height


class BasicTextCourseObject(TextCourseObject):
    """Free text sized to fit a bounding rectangle.

    Attributes:
        rect_bounding: Rectangle the text is fitted into
    """

    kind = CourseObjectKind.BASIC_TEXT
    symdef_name = "Text"
    ocad_id_part = 730

    def __init__(
        self,
        special_id: int | None,
        text: str,
        rect_bounding: Rect,
        font_name: str,
        font_style: FontStyle,
        measurer: TextMeasurer,
    ) -> None:
        em_height = calculate_em_height(
            measurer, text, font_name, font_style, rect_bounding.width, rect_bounding.height
        )
        super().__init__(
            None, None, special_id, text, Point(rect_bounding.left, rect_bounding.bottom),
            font_name, font_style, em_height, measurer,
        )
        self.rect_bounding = rect_bounding

    def get_handles(self) -> list[Point] | None:
        return rect_handles(self.rect_bounding)

    def get_handle_cursor(self, handle: Point) -> HandleCursor:
        return handle_cursor(self.rect_bounding, handle)

    def move_handle(self, old_handle: Point, new_handle: Point) -> None:
        moved = moved_rect(self.rect_bounding, old_handle, new_handle)
        if moved is None:
            return
        new_rect, _drag = moved
        self.em_height = calculate_em_height(
            self._measurer, self.text, self.font_name, self.font_style, new_rect.width, new_rect.height
        )
        self.top_left = Point(new_rect.left, new_rect.bottom)
        self.rect_bounding = new_rect

    def highlight(
        self,
        target: GraphicsTarget,
        world_to_pixel: Transform,
        brush: Brush,
        erasing: bool,
        area_brush: Brush = AREA_HIGHLIGHT,
    ) -> None:
        super().highlight(target, world_to_pixel, brush, erasing, area_brush)
        target.draw_rectangle(Pen(brush, 0), self.rect_bounding.transform(world_to_pixel))

    def get_highlight_bounds(self) -> Rect:
        return self.rect_bounding

    def offset(self, dx: float, dy: float) -> None:
        super().offset(dx, dy)
        self.rect_bounding = self.rect_bounding.offset(dx, dy)

    def _state(self) -> tuple[Any, ...]:
        return super()._state() + (self.rect_bounding,)

    def __str__(self) -> str:
        r = self.rect_bounding
        return super().__str__() + (
            f"  rect:({format_number(r.left)},{format_number(r.bottom)})-({format_number(r.right)},{format_number(r.top)})"
        )
