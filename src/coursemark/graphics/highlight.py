"""Highlight session: draws and erases selected course objects with their handles."""

from typing import TYPE_CHECKING

from fontTools.misc.transform import Transform

from coursemark.config.settings import HighlightConfig
from coursemark.geometry import Point, Rect, transform_point
from coursemark.graphics.target import Brush, GraphicsTarget

if TYPE_CHECKING:
    from coursemark.core.course_object import CourseObject


class HighlightSession:
    """Brushes and pixel transform of one highlight rendering session.

    The session owns its brushes; nothing is shared between sessions.

    Args:
        target: Surface in pixel coordinates
        world_to_pixel: Map to pixel transform
        config: Colors and handle size
    """

    def __init__(self, target: GraphicsTarget, world_to_pixel: Transform, config: HighlightConfig | None = None) -> None:
        config = config or HighlightConfig()
        self.target = target
        self.world_to_pixel = world_to_pixel
        self.handle_size = config.handle_size
        self.highlight_brush = Brush(config.highlight_color)
        self.area_brush = Brush(config.area_highlight_color, config.area_highlight_opacity)
        self.handle_brush = Brush(config.handle_color)

    def handle_rect(self, handle: Point) -> Rect:
        """Pixel square of a handle, centered on its rounded pixel position."""
        pixel = transform_point(handle, self.world_to_pixel)
        half = (self.handle_size - 1) // 2
        return Rect(round(pixel.x) - half, round(pixel.y) - half, self.handle_size, self.handle_size)

    def _draw(self, obj: "CourseObject", brush: Brush, handle_brush: Brush, erasing: bool) -> None:
        obj.highlight(self.target, self.world_to_pixel, brush, erasing, self.area_brush)
        for handle in obj.get_handles() or ():
            self.target.fill_rectangle(handle_brush, self.handle_rect(handle))

    def draw(self, obj: "CourseObject") -> None:
        """Draw the highlight of an object and its handles."""
        self._draw(obj, self.highlight_brush, self.handle_brush, erasing=False)

    def erase(self, obj: "CourseObject", erase_brush: Brush) -> None:
        """Paint over a previous highlight of obj with erase_brush."""
        self._draw(obj, erase_brush, erase_brush, erasing=True)

    def pixel_bounds(self, obj: "CourseObject") -> Rect:
        """Pixel area touched by the highlight, including handles."""
        bounds = obj.get_highlight_bounds().transform(self.world_to_pixel)
        margin = self.handle_size
        return Rect(bounds.x - margin, bounds.y - margin, bounds.width + 2 * margin, bounds.height + 2 * margin)
