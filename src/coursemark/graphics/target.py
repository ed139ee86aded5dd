"""Drawing surface interface.

Course objects draw highlights and pages render through a GraphicsTarget.
Implementations are picked by the caller at construction time; course
objects only ever see the protocol.

This module defines:
- Brush, Pen, LineCap: Immutable drawing styles
- GraphicsTarget: Protocol every drawing surface implements
- StackedTarget: Base class managing the transform and clip stacks
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

from fontTools.misc.transform import Identity, Transform

from coursemark.domain.enums import FontStyle
from coursemark.exceptions import GraphicsStateError
from coursemark.geometry import Point, Rect, SymPath


class LineCap(Enum):
    """End cap of stroked lines."""

    FLAT = auto()
    ROUND = auto()


@dataclass(frozen=True, slots=True)
class Brush:
    """Solid fill.

    Attributes:
        color: Color as "#rrggbb"
        opacity: Opacity from 0 (transparent) to 1 (opaque)
    """

    color: str
    opacity: float = 1.0


@dataclass(frozen=True, slots=True)
class Pen:
    """Stroke style. A width of 0 draws the thinnest line the surface supports."""

    brush: Brush
    width: float
    cap: LineCap = LineCap.FLAT


# Fill used for area and rectangle highlights when not erasing.
AREA_HIGHLIGHT = Brush("#FF00FF", opacity=0.25)


class GraphicsTarget(Protocol):
    """A stateful 2-D drawing surface.

    Coordinates passed to drawing calls are transformed by the current
    transform (the composition of all pushed transforms) and clipped by
    every pushed clip rectangle.
    """

    @property
    def transform(self) -> Transform: ...

    def push_transform(self, xform: Transform) -> None: ...

    def pop_transform(self) -> None: ...

    def push_clip(self, rect: Rect) -> None: ...

    def pop_clip(self) -> None: ...

    def draw_line(self, pen: Pen, start: Point, end: Point) -> None: ...

    def draw_ellipse(self, pen: Pen, center: Point, radius_x: float, radius_y: float) -> None: ...

    def fill_ellipse(self, brush: Brush, center: Point, radius_x: float, radius_y: float) -> None: ...

    def draw_arc(self, pen: Pen, rect: Rect, start_angle: float, sweep_angle: float) -> None: ...

    def draw_rectangle(self, pen: Pen, rect: Rect) -> None: ...

    def fill_rectangle(self, brush: Brush, rect: Rect) -> None: ...

    def draw_polygon(self, pen: Pen, points: Sequence[Point]) -> None: ...

    def fill_polygon(self, brush: Brush, points: Sequence[Point]) -> None: ...

    def draw_path(self, pen: Pen, path: SymPath) -> None: ...

    def fill_path(self, brush: Brush, path: SymPath) -> None: ...

    def draw_text(
        self, text: str, font_name: str, font_style: FontStyle, em_height: float, brush: Brush, top_left: Point
    ) -> None: ...

    def draw_clipped_text(
        self, text: str, font_name: str, font_style: FontStyle, em_height: float, brush: Brush, rect: Rect
    ) -> None: ...


class StackedTarget:
    """Transform and clip stack shared by the concrete targets.

    Transforms and clips are pushed and popped independently; popping an
    empty stack raises GraphicsStateError.
    """

    def __init__(self) -> None:
        self._transforms: list[Transform] = [Identity]
        self._clips: list[Rect] = []

    @property
    def transform(self) -> Transform:
        """Current transform from drawing coordinates to surface coordinates."""
        return self._transforms[-1]

    @property
    def clip_depth(self) -> int:
        return len(self._clips)

    def push_transform(self, xform: Transform) -> None:
        """Apply xform to coordinates before the current transform."""
        self._transforms.append(self.transform.transform(xform))

    def pop_transform(self) -> None:
        if len(self._transforms) == 1:
            raise GraphicsStateError("pop_transform called without matching push_transform")
        self._transforms.pop()

    def push_clip(self, rect: Rect) -> None:
        self._clips.append(rect)

    def pop_clip(self) -> None:
        if not self._clips:
            raise GraphicsStateError("pop_clip called without matching push_clip")
        self._clips.pop()
