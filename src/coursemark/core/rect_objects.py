"""Course objects occupying an axis-aligned rectangle."""

from typing import Any

from fontTools.misc.transform import Transform

from coursemark.config.settings import CourseAppearance
from coursemark.core.course_object import CourseObject, RectDrag, handle_cursor, moved_rect, rect_handles
from coursemark.domain.enums import HandleCursor
from coursemark.geometry import Point, Rect
from coursemark.graphics.target import AREA_HIGHLIGHT, Brush, GraphicsTarget, Pen


class RectCourseObject(CourseObject):
    """A course object occupying a rectangle, resizable through 8 handles.

    Attributes:
        rect: Occupied rectangle in map coordinates
    """

    def __init__(
        self,
        control_id: int | None,
        course_control_id: int | None,
        special_id: int | None,
        scale_ratio: float,
        appearance: CourseAppearance,
        rect: Rect,
    ) -> None:
        super().__init__(control_id, course_control_id, special_id, scale_ratio, appearance)
        self.rect = rect

    def rectangle_updating(self, new_rect: Rect, drag: RectDrag) -> Rect:
        """Hook called before the rectangle changes; may return an adjusted rectangle.

        Args:
            new_rect: Proposed rectangle
            drag: Which edges changed, or drag_all for a move

        Returns:
            Rectangle to commit
        """
        return new_rect

    def get_handles(self) -> list[Point] | None:
        return rect_handles(self.rect)

    def get_handle_cursor(self, handle: Point) -> HandleCursor:
        return handle_cursor(self.rect, handle)

    def distance_from_point(self, pt: Point) -> float:
        if self.rect.contains(pt):
            return 0.0
        dist, _closest = self.rect.to_path().distance_from_point(pt)
        return dist

    def highlight(
        self,
        target: GraphicsTarget,
        world_to_pixel: Transform,
        brush: Brush,
        erasing: bool,
        area_brush: Brush = AREA_HIGHLIGHT,
    ) -> None:
        pixel_rect = self.rect.transform(world_to_pixel)
        target.fill_rectangle(brush if erasing else area_brush, pixel_rect)
        target.draw_rectangle(Pen(brush, 2), pixel_rect)

    def get_highlight_bounds(self) -> Rect:
        return self.rect

    def offset(self, dx: float, dy: float) -> None:
        self.rect = self.rectangle_updating(self.rect.offset(dx, dy), RectDrag(drag_all=True))

    def move_handle(self, old_handle: Point, new_handle: Point) -> None:
        moved = moved_rect(self.rect, old_handle, new_handle)
        if moved is None:
            return
        new_rect, drag = moved
        self.rect = self.rectangle_updating(new_rect, drag)

    def _state(self) -> tuple[Any, ...]:
        return (self.rect,)

    def __str__(self) -> str:
        return super().__str__() + f"rect:{self.rect}"


class AspectPreservingRectCourseObject(RectCourseObject):
    """Rectangle whose width/height ratio, captured at construction, survives resizing."""

    def __init__(
        self,
        control_id: int | None,
        course_control_id: int | None,
        special_id: int | None,
        scale_ratio: float,
        appearance: CourseAppearance,
        rect: Rect,
    ) -> None:
        super().__init__(control_id, course_control_id, special_id, scale_ratio, appearance, rect)
        self.aspect = rect.width / rect.height if rect.height != 0 else 1.0

    def rectangle_updating(self, new_rect: Rect, drag: RectDrag) -> Rect:
        """Recompute the dimension that was not dragged.

        A single edge drag adjusts the perpendicular dimension. A corner drag
        adjusts whichever dimension is too large for the captured aspect.
        """
        if drag.drag_all:
            return new_rect

        left, top, right, bottom = new_rect.left, new_rect.top, new_rect.right, new_rect.bottom
        adjust_width = adjust_height = False

        if not drag.top and not drag.bottom:
            adjust_height = True
        elif not drag.left and not drag.right:
            adjust_width = True
        else:
            new_aspect = abs(right - left) / abs(bottom - top) if bottom != top else 1.0
            if new_aspect < self.aspect:
                adjust_width = True
            elif new_aspect > self.aspect:
                adjust_height = True

        if adjust_height and self.aspect != 0:
            new_height = abs(right - left) / self.aspect
            if drag.bottom:
                bottom = top + new_height if bottom > top else top - new_height
            else:
                top = bottom - new_height if top < bottom else bottom + new_height
        elif adjust_width:
            new_width = abs(bottom - top) * self.aspect
            if drag.left:
                left = right - new_width if left < right else right + new_width
            else:
                right = left + new_width if right > left else left - new_width

        return Rect.from_ltrb(left, top, right, bottom)
