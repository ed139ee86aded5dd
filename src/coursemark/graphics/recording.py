"""Drawing target that records every call.

Used by tests and by callers that want to replay or inspect drawing
output without a real surface.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from coursemark.domain.enums import FontStyle
from coursemark.geometry import Point, Rect, SymPath
from coursemark.graphics.target import Brush, Pen, StackedTarget


@dataclass(frozen=True, slots=True)
class DrawCommand:
    """One recorded drawing call.

    Attributes:
        operation: Name of the GraphicsTarget method, e.g. "draw_line"
        args: Arguments of the call, in order
        transform: Current transform coefficients when the call was made
        clip_depth: Number of clip rectangles active when the call was made
    """

    operation: str
    args: tuple[Any, ...]
    transform: tuple[float, float, float, float, float, float]
    clip_depth: int


class RecordingTarget(StackedTarget):
    """GraphicsTarget that stores drawing calls as DrawCommand values."""

    def __init__(self) -> None:
        super().__init__()
        self.commands: list[DrawCommand] = []

    def _record(self, operation: str, *args: Any) -> None:
        self.commands.append(DrawCommand(operation, args, tuple(self.transform), self.clip_depth))

    def operations(self) -> list[str]:
        """Recorded operation names, in order."""
        return [c.operation for c in self.commands]

    def clear(self) -> None:
        self.commands.clear()

    def draw_line(self, pen: Pen, start: Point, end: Point) -> None:
        self._record("draw_line", pen, start, end)

    def draw_ellipse(self, pen: Pen, center: Point, radius_x: float, radius_y: float) -> None:
        self._record("draw_ellipse", pen, center, radius_x, radius_y)

    def fill_ellipse(self, brush: Brush, center: Point, radius_x: float, radius_y: float) -> None:
        self._record("fill_ellipse", brush, center, radius_x, radius_y)

    def draw_arc(self, pen: Pen, rect: Rect, start_angle: float, sweep_angle: float) -> None:
        self._record("draw_arc", pen, rect, start_angle, sweep_angle)

    def draw_rectangle(self, pen: Pen, rect: Rect) -> None:
        self._record("draw_rectangle", pen, rect)

    def fill_rectangle(self, brush: Brush, rect: Rect) -> None:
        self._record("fill_rectangle", brush, rect)

    def draw_polygon(self, pen: Pen, points: Sequence[Point]) -> None:
        self._record("draw_polygon", pen, tuple(points))

    def fill_polygon(self, brush: Brush, points: Sequence[Point]) -> None:
        self._record("fill_polygon", brush, tuple(points))

    def draw_path(self, pen: Pen, path: SymPath) -> None:
        self._record("draw_path", pen, path)

    def fill_path(self, brush: Brush, path: SymPath) -> None:
        self._record("fill_path", brush, path)

    def draw_text(
        self, text: str, font_name: str, font_style: FontStyle, em_height: float, brush: Brush, top_left: Point
    ) -> None:
        self._record("draw_text", text, font_name, font_style, em_height, brush, top_left)

    def draw_clipped_text(
        self, text: str, font_name: str, font_style: FontStyle, em_height: float, brush: Brush, rect: Rect
    ) -> None:
        self._record("draw_clipped_text", text, font_name, font_style, em_height, brush, rect)
