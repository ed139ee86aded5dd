"""Course objects: drawable course symbols that can be edited.

A course object knows how to:
- add itself to a map, reusing symbol definitions through a SymDefCache
- report its distance from a point for hit-testing
- draw and erase its highlight in pixel space
- expose drag handles and move them
- be offset as a whole

This module holds the abstract base and the shared handle helpers for
rectangular objects. Shape families and concrete variants live in the
sibling modules.
"""

import copy
from abc import ABC, abstractmethod
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any, ClassVar

from fontTools.misc.transform import Transform

from coursemark.config.settings import CourseAppearance
from coursemark.core.symdefs import SymDefCache
from coursemark.domain.enums import CourseObjectKind, HandleCursor
from coursemark.domain.map import Map, SymColor, SymDef
from coursemark.exceptions import InvalidScaleError
from coursemark.geometry import Point, Rect
from coursemark.graphics.target import AREA_HIGHLIGHT, Brush, GraphicsTarget

_CLASS_SUFFIX = "CourseObject"


def format_number(value: float, decimals: int | None = None) -> str:
    """Format a number for diagnostic dumps.

    Args:
        value: Number to format
        decimals: Maximum decimals, trailing zeros dropped; None for general format
    """
    if decimals is None:
        return f"{value:g}"
    text = f"{value:.{decimals}f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


class CourseObject(ABC):
    """Base of all course objects.

    Equality is structural (same variant, ids, scale and shape state) and
    is used to skip redraws of unchanged objects. Course objects are
    mutable through offset, move_handle and orientation changes, so they
    are deliberately unhashable.

    Attributes:
        layer: Draw layer, assigned when the object is added to a layout
        control_id: Associated control, or None
        course_control_id: Associated course control, or None
        special_id: Associated special, or None
        scale_ratio: Display scale, 1.0 is normal scale
        appearance: Stroke widths and fonts
    """

    kind: ClassVar[CourseObjectKind]

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        control_id: int | None,
        course_control_id: int | None,
        special_id: int | None,
        scale_ratio: float,
        appearance: CourseAppearance,
    ) -> None:
        if not scale_ratio > 0:
            raise InvalidScaleError(scale_ratio)
        self.layer = 0
        self.control_id = control_id
        self.course_control_id = course_control_id
        self.special_id = special_id
        self.scale_ratio = scale_ratio
        self.appearance = appearance

    # Map emission

    def symdef_key(self) -> Hashable:
        """Key identifying the symbol definition this object needs."""
        return self.kind

    @abstractmethod
    def create_symdef(self, map: Map, color: SymColor) -> SymDef:
        """Create and register the symbol definition. Called once per key and color."""

    @abstractmethod
    def add_symbols(self, map: Map, symdef: SymDef) -> None:
        """Append this object's symbols to the map."""

    def add_to_map(self, map: Map, color: SymColor, cache: SymDefCache) -> None:
        """Add this object to a map, creating its symbol definition if needed.

        Args:
            map: Destination map
            color: Color to draw in
            cache: Definition cache with the same lifetime as the map
        """
        symdef = cache.get_or_create(color, self.symdef_key(), lambda: self.create_symdef(map, color))
        self.add_symbols(map, symdef)

    # Hit-testing and highlighting

    @abstractmethod
    def distance_from_point(self, pt: Point) -> float:
        """Distance from pt to the drawn shape; 0 if the shape covers pt."""

    @abstractmethod
    def highlight(
        self,
        target: GraphicsTarget,
        world_to_pixel: Transform,
        brush: Brush,
        erasing: bool,
        area_brush: Brush = AREA_HIGHLIGHT,
    ) -> None:
        """Draw the highlight in pixel coordinates.

        Erasing draws exactly the same pixel geometry with the erase brush.

        Args:
            target: Surface with an identity transform (pixel space)
            world_to_pixel: Map to pixel transform
            brush: Highlight or erase brush
            erasing: Whether this call erases a previous highlight
            area_brush: Interior fill when not erasing
        """

    @abstractmethod
    def get_highlight_bounds(self) -> Rect:
        """Map-space bounds of the highlight."""

    # Editing

    @abstractmethod
    def offset(self, dx: float, dy: float) -> None:
        """Translate the object in place."""

    def get_handles(self) -> list[Point] | None:
        """Drag handles in map coordinates, or None if the object has none."""
        return None

    def move_handle(self, old_handle: Point, new_handle: Point) -> None:
        """Move the handle at old_handle to new_handle; no-op for unknown handles."""

    def get_handle_cursor(self, handle: Point) -> HandleCursor:
        return HandleCursor.MOVE

    def clone(self) -> "CourseObject":
        """Independent copy. Geometry values are immutable, so a shallow copy suffices."""
        return copy.copy(self)

    # Equality and diagnostics

    def _identity(self) -> tuple[Any, ...]:
        return (self.layer, self.control_id, self.course_control_id, self.special_id, self.scale_ratio)

    def _state(self) -> tuple[Any, ...]:
        return ()

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, CourseObject):
            return NotImplemented
        if type(other) is not type(self):
            return False
        return self._state() == other._state() and self._identity() == other._identity()

    def __str__(self) -> str:
        result = ""
        type_name = type(self).__name__
        if type_name.endswith(_CLASS_SUFFIX):
            result += f"{type_name[: -len(_CLASS_SUFFIX)] + ':':<16}"

        if self.layer != 0:
            result += f"layer:{self.layer}  "
        if self.control_id is not None:
            result += f"control:{self.control_id}  "
        if self.course_control_id is not None:
            result += f"course-control:{self.course_control_id}  "
        if self.special_id is not None:
            result += f"special:{self.special_id}  "
        result += f"scale:{format_number(self.scale_ratio)}  "
        return result


# Rectangle handles, row by row from (left, top): 0 1 2 / 3 . 4 / 5 6 7

_HANDLE_CURSORS = {
    0: HandleCursor.SIZE_NESW,
    7: HandleCursor.SIZE_NESW,
    1: HandleCursor.SIZE_NS,
    6: HandleCursor.SIZE_NS,
    2: HandleCursor.SIZE_NWSE,
    5: HandleCursor.SIZE_NWSE,
    3: HandleCursor.SIZE_WE,
    4: HandleCursor.SIZE_WE,
}


@dataclass(frozen=True, slots=True)
class RectDrag:
    """Which edges of a rectangle an edit changed."""

    drag_all: bool = False
    left: bool = False
    top: bool = False
    right: bool = False
    bottom: bool = False


_HANDLE_EDGES = {
    0: RectDrag(left=True, top=True),
    1: RectDrag(top=True),
    2: RectDrag(right=True, top=True),
    3: RectDrag(left=True),
    4: RectDrag(right=True),
    5: RectDrag(left=True, bottom=True),
    6: RectDrag(bottom=True),
    7: RectDrag(right=True, bottom=True),
}


def rect_handles(rect: Rect) -> list[Point]:
    """Corner and edge-midpoint handles of a rectangle."""
    mid_x = (rect.left + rect.right) / 2
    mid_y = (rect.top + rect.bottom) / 2
    return [
        Point(rect.left, rect.top), Point(mid_x, rect.top), Point(rect.right, rect.top),
        Point(rect.left, mid_y), Point(rect.right, mid_y),
        Point(rect.left, rect.bottom), Point(mid_x, rect.bottom), Point(rect.right, rect.bottom),
    ]


def handle_cursor(rect: Rect, handle: Point) -> HandleCursor:
    """Resize cursor for a rectangle handle; MOVE if handle is not one of them."""
    handles = rect_handles(rect)
    if handle not in handles:
        return HandleCursor.MOVE
    return _HANDLE_CURSORS[handles.index(handle)]


def moved_rect(rect: Rect, old_handle: Point, new_handle: Point) -> tuple[Rect, RectDrag] | None:
    """Rectangle after dragging one of its handles.

    Only the edges controlled by the handle change; swapped edges are
    normalized.

    Returns:
        (new rectangle, changed edges), or None if old_handle is not a handle
    """
    handles = rect_handles(rect)
    if old_handle not in handles:
        return None
    drag = _HANDLE_EDGES[handles.index(old_handle)]

    left, top, right, bottom = rect.left, rect.top, rect.right, rect.bottom
    if drag.left:
        left = new_handle.x
    if drag.top:
        top = new_handle.y
    if drag.right:
        right = new_handle.x
    if drag.bottom:
        bottom = new_handle.y
    return Rect.from_ltrb(left, top, right, bottom), drag
