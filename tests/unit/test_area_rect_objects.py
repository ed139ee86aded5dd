"""Unit tests for area and rectangle course objects."""

import pytest

from coursemark.config import CourseAppearance
from coursemark.core import (
    AspectPreservingRectCourseObject,
    DangerousCourseObject,
    OOBCourseObject,
    RectCourseObject,
    SymDefCache,
)
from coursemark.domain import AreaSymbol, CourseObjectKind, HandleCursor, Map, SymColor, SymDef
from coursemark.geometry import Point, Rect, Transform
from coursemark.graphics import AREA_HIGHLIGHT, Brush, RecordingTarget

PIXELS = Transform().scale(10)
BRUSH = Brush("#00A0FF")

SQUARE = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]


class FrameCourseObject(RectCourseObject):
    """Plain rectangle used to exercise the shared rectangle behavior."""

    kind = CourseObjectKind.DESCRIPTION

    def create_symdef(self, map: Map, color: SymColor) -> SymDef:
        raise NotImplementedError

    def add_symbols(self, map: Map, symdef: SymDef) -> None:
        raise NotImplementedError


class LockedFrameCourseObject(AspectPreservingRectCourseObject):
    kind = CourseObjectKind.DESCRIPTION

    def create_symdef(self, map: Map, color: SymColor) -> SymDef:
        raise NotImplementedError

    def add_symbols(self, map: Map, symdef: SymDef) -> None:
        raise NotImplementedError


@pytest.fixture
def oob(appearance: CourseAppearance) -> OOBCourseObject:
    return OOBCourseObject(1, 1.0, appearance, SQUARE)


@pytest.fixture
def frame(appearance: CourseAppearance) -> FrameCourseObject:
    return FrameCourseObject(None, None, 1, 1.0, appearance, Rect(0, 0, 10, 20))


@pytest.fixture
def locked(appearance: CourseAppearance) -> LockedFrameCourseObject:
    return LockedFrameCourseObject(None, None, 1, 1.0, appearance, Rect(0, 0, 10, 20))


class TestAreaObjects:
    """Tests for hatched areas."""

    def test_outline_is_closed(self, oob: OOBCourseObject) -> None:
        assert oob.path.is_closed
        assert len(oob.path.points) == 5

    def test_closed_input_not_doubled(self, appearance: CourseAppearance) -> None:
        area = OOBCourseObject(1, 1.0, appearance, SQUARE + [SQUARE[0]])
        assert len(area.path.points) == 5

    def test_handles_skip_closing_point(self, oob: OOBCourseObject) -> None:
        assert oob.get_handles() == SQUARE

    def test_distance(self, oob: OOBCourseObject) -> None:
        assert oob.distance_from_point(Point(5, 5)) == 0.0
        assert oob.distance_from_point(Point(15, 5)) == pytest.approx(5.0)

    def test_move_first_corner_keeps_closed(self, oob: OOBCourseObject) -> None:
        oob.move_handle(Point(0, 0), Point(-1, -1))
        assert oob.path.first_point == Point(-1, -1)
        assert oob.path.last_point == Point(-1, -1)

    def test_single_hatch(self, oob: OOBCourseObject, course_map: Map, purple: SymColor, cache: SymDefCache) -> None:
        oob.add_to_map(course_map, purple, cache)
        (symbol,) = course_map.symbols
        assert isinstance(symbol, AreaSymbol)
        hatching = symbol.symdef.hatching
        assert symbol.symdef.ocad_id == 709000
        assert (hatching.mode, hatching.angle1, hatching.angle2) == (1, 90.0, 0.0)
        assert hatching.thickness == pytest.approx(0.25)
        assert hatching.spacing == pytest.approx(0.6)

    def test_cross_hatch_scales(
        self, appearance: CourseAppearance, course_map: Map, purple: SymColor, cache: SymDefCache
    ) -> None:
        DangerousCourseObject(1, 2.0, appearance, SQUARE).add_to_map(course_map, purple, cache)
        hatching = course_map.symbols[0].symdef.hatching
        assert (hatching.mode, hatching.angle1, hatching.angle2) == (2, 45.0, 135.0)
        assert hatching.spacing == pytest.approx(1.2)

    def test_highlight_fills_with_area_brush(self, oob: OOBCourseObject) -> None:
        target = RecordingTarget()
        oob.highlight(target, PIXELS, BRUSH, False)
        assert target.operations() == ["draw_path", "fill_path"]
        assert target.commands[1].args[0] == AREA_HIGHLIGHT

    def test_erase_fills_with_erase_brush(self, oob: OOBCourseObject) -> None:
        erase = Brush("#FFFFFF")
        target = RecordingTarget()
        oob.highlight(target, PIXELS, erase, True)
        assert target.commands[1].args[0] == erase

    def test_dump(self, oob: OOBCourseObject) -> None:
        assert str(oob).startswith("OOB:            special:1  scale:1  path:N(0,0) N(10,0)")


class TestRectObjects:
    """Tests for rectangle handles and resizing."""

    def test_handles_row_major(self, frame: FrameCourseObject) -> None:
        assert frame.get_handles() == [
            Point(0, 0), Point(5, 0), Point(10, 0),
            Point(0, 10), Point(10, 10),
            Point(0, 20), Point(5, 20), Point(10, 20),
        ]

    @pytest.mark.parametrize(
        ("handle", "cursor"),
        [
            (Point(0, 0), HandleCursor.SIZE_NESW),
            (Point(5, 0), HandleCursor.SIZE_NS),
            (Point(10, 0), HandleCursor.SIZE_NWSE),
            (Point(0, 10), HandleCursor.SIZE_WE),
            (Point(10, 20), HandleCursor.SIZE_NESW),
            (Point(3, 3), HandleCursor.MOVE),
        ],
    )
    def test_handle_cursors(self, frame: FrameCourseObject, handle: Point, cursor: HandleCursor) -> None:
        assert frame.get_handle_cursor(handle) is cursor

    def test_corner_drag(self, frame: FrameCourseObject) -> None:
        frame.move_handle(Point(10, 20), Point(15, 30))
        assert frame.rect == Rect(0, 0, 15, 30)

    def test_drag_past_opposite_edge_normalizes(self, frame: FrameCourseObject) -> None:
        frame.move_handle(Point(10, 10), Point(-5, 10))
        assert frame.rect == Rect(-5, 0, 5, 20)

    def test_unknown_handle_is_noop(self, frame: FrameCourseObject) -> None:
        frame.move_handle(Point(3, 3), Point(30, 30))
        assert frame.rect == Rect(0, 0, 10, 20)

    def test_distance(self, frame: FrameCourseObject) -> None:
        assert frame.distance_from_point(Point(5, 5)) == 0.0
        assert frame.distance_from_point(Point(13, 5)) == pytest.approx(3.0)

    def test_highlight(self, frame: FrameCourseObject) -> None:
        target = RecordingTarget()
        frame.highlight(target, PIXELS, BRUSH, False)
        assert target.operations() == ["fill_rectangle", "draw_rectangle"]
        assert target.commands[0].args == (AREA_HIGHLIGHT, Rect(0, 0, 100, 200))
        assert target.commands[1].args[0].width == 2

    def test_offset(self, frame: FrameCourseObject) -> None:
        frame.offset(1, 2)
        assert frame.rect == Rect(1, 2, 10, 20)

    def test_dump(self, frame: FrameCourseObject) -> None:
        assert str(frame).endswith("rect:{X=0,Y=0,Width=10,Height=20}")


class TestAspectPreservingRect:
    """Tests for resizing with a locked aspect ratio."""

    def test_aspect_captured(self, locked: LockedFrameCourseObject) -> None:
        assert locked.aspect == pytest.approx(0.5)

    def test_side_drag_adjusts_height(self, locked: LockedFrameCourseObject) -> None:
        locked.move_handle(Point(10, 10), Point(20, 10))
        assert locked.rect == Rect(0, -20, 20, 40)

    def test_bottom_drag_adjusts_width(self, locked: LockedFrameCourseObject) -> None:
        locked.move_handle(Point(5, 20), Point(5, 30))
        assert locked.rect == Rect(0, 0, 15, 30)

    def test_corner_drag_adjusts_oversized_dimension(self, locked: LockedFrameCourseObject) -> None:
        locked.move_handle(Point(10, 20), Point(30, 30))
        assert locked.rect == Rect(0, 0, 30, 60)

    @pytest.mark.parametrize(
        ("old", "new"),
        [
            (Point(0, 0), Point(-4, -1)),
            (Point(5, 0), Point(5, -7)),
            (Point(10, 0), Point(12, 3)),
            (Point(0, 10), Point(-3, 10)),
            (Point(10, 20), Point(11, 40)),
        ],
    )
    def test_aspect_survives_any_drag(self, locked: LockedFrameCourseObject, old: Point, new: Point) -> None:
        locked.move_handle(old, new)
        assert locked.rect.width / locked.rect.height == pytest.approx(0.5)

    def test_offset_keeps_size(self, locked: LockedFrameCourseObject) -> None:
        locked.offset(5, 5)
        assert locked.rect == Rect(5, 5, 10, 20)
