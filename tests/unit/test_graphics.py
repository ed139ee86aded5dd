"""Unit tests for drawing targets and highlight sessions."""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from coursemark.config import CourseAppearance, HighlightConfig
from coursemark.core import ControlCourseObject, LegCourseObject
from coursemark.core.gaps import FULL_CIRCLE
from coursemark.domain import FontStyle
from coursemark.exceptions import GraphicsStateError
from coursemark.geometry import Point, PointKind, Rect, SymPath, Transform, transform_point
from coursemark.graphics import Brush, HighlightSession, LineCap, Pen, RecordingTarget, StackedTarget, SvgTarget
from coursemark.graphics.svg import path_data

NS = {"svg": "http://www.w3.org/2000/svg"}
BLACK = Brush("#000000")


class TestStackedTarget:
    """Tests for the transform and clip stacks."""

    def test_transforms_compose_inner_first(self) -> None:
        target = StackedTarget()
        target.push_transform(Transform().translate(10, 0))
        target.push_transform(Transform().scale(2))
        assert transform_point(Point(1, 0), target.transform) == Point(12, 0)
        target.pop_transform()
        assert transform_point(Point(1, 0), target.transform) == Point(11, 0)

    def test_pop_empty_transform(self) -> None:
        with pytest.raises(GraphicsStateError):
            StackedTarget().pop_transform()

    def test_pop_empty_clip(self) -> None:
        with pytest.raises(GraphicsStateError):
            StackedTarget().pop_clip()

    def test_clip_depth(self) -> None:
        target = StackedTarget()
        target.push_clip(Rect(0, 0, 1, 1))
        target.push_clip(Rect(0, 0, 2, 2))
        assert target.clip_depth == 2
        target.pop_clip()
        assert target.clip_depth == 1


class TestRecordingTarget:
    def test_records_state_with_each_call(self) -> None:
        target = RecordingTarget()
        pen = Pen(BLACK, 1)
        target.draw_line(pen, Point(0, 0), Point(1, 1))
        target.push_transform(Transform().scale(3))
        target.push_clip(Rect(0, 0, 5, 5))
        target.fill_rectangle(BLACK, Rect(0, 0, 1, 1))

        first, second = target.commands
        assert first.operation == "draw_line"
        assert first.args == (pen, Point(0, 0), Point(1, 1))
        assert first.transform == (1, 0, 0, 1, 0, 0)
        assert first.clip_depth == 0
        assert second.transform == (3, 0, 0, 3, 0, 0)
        assert second.clip_depth == 1

    def test_stack_calls_not_recorded(self) -> None:
        target = RecordingTarget()
        target.push_transform(Transform())
        target.pop_transform()
        assert target.commands == []

    def test_clear(self) -> None:
        target = RecordingTarget()
        target.fill_ellipse(BLACK, Point(0, 0), 1, 1)
        target.clear()
        assert target.operations() == []


class TestSvgTarget:
    """Tests for SVG output."""

    @staticmethod
    def _parse(target: SvgTarget) -> ET.Element:
        return ET.fromstring(target.to_string())

    def test_document_size(self) -> None:
        root = self._parse(SvgTarget(800, 1050))
        assert root.get("width") == "800"
        assert root.get("viewBox") == "0 0 800 1050"

    def test_nested_groups(self) -> None:
        target = SvgTarget(100, 100)
        target.push_clip(Rect(10, 10, 50, 50))
        target.push_transform(Transform(2, 0, 0, -2, 5, 90))
        target.draw_line(Pen(BLACK, 0.5), Point(0, 0), Point(1, 1))
        target.pop_transform()
        target.pop_clip()

        root = self._parse(target)
        clip_group = root.find("svg:g", NS)
        assert clip_group.get("clip-path") == "url(#clip1)"
        transform_group = clip_group.find("svg:g", NS)
        assert transform_group.get("transform") == "matrix(2 0 0 -2 5 90)"
        line = transform_group.find("svg:line", NS)
        assert line.get("stroke-width") == "0.5"
        assert root.find("svg:defs/svg:clipPath/svg:rect", NS).get("width") == "50"

    def test_mismatched_pop(self) -> None:
        target = SvgTarget(100, 100)
        target.push_transform(Transform())
        target.push_clip(Rect(0, 0, 1, 1))
        with pytest.raises(GraphicsStateError):
            target.pop_transform()

    def test_hairline_pen(self) -> None:
        target = SvgTarget(10, 10)
        target.draw_rectangle(Pen(BLACK, 0), Rect(1, 1, 2, 2))
        rect = self._parse(target).find("svg:rect", NS)
        assert rect.get("vector-effect") == "non-scaling-stroke"
        assert rect.get("fill") == "none"

    def test_round_cap_and_opacity(self) -> None:
        target = SvgTarget(10, 10)
        target.draw_path(Pen(Brush("#FF0000", 0.5), 1, LineCap.ROUND), SymPath((Point(0, 0), Point(5, 5))))
        path = self._parse(target).find("svg:path", NS)
        assert path.get("stroke-linecap") == "round"
        assert path.get("stroke-opacity") == "0.5"

    def test_text(self) -> None:
        target = SvgTarget(10, 10)
        target.draw_text("31", "Arial", FontStyle.BOLD, 4.0, BLACK, Point(1, 2))
        text = self._parse(target).find("svg:text", NS)
        assert text.text == "31"
        assert text.get("font-weight") == "bold"
        assert text.get("font-size") == "4"

    def test_full_sweep_arc_is_ellipse(self) -> None:
        target = SvgTarget(10, 10)
        target.draw_arc(Pen(BLACK, 1), Rect(0, 0, 4, 4), 0, 360)
        assert self._parse(target).find("svg:ellipse", NS) is not None

    def test_partial_arc(self) -> None:
        target = SvgTarget(10, 10)
        target.draw_arc(Pen(BLACK, 1), Rect(0, 0, 4, 4), 0, 270)
        path = self._parse(target).find("svg:path", NS)
        assert path.get("d").startswith("M4,2 A2,2 0 1 1")

    def test_path_data_keeps_curves(self) -> None:
        n, b = PointKind.NORMAL, PointKind.BEZIER_CONTROL
        path = SymPath((Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)), (n, b, b, n))
        assert path_data(path) == "M0,0 C0,1 1,1 1,0"

    def test_closed_path_data(self) -> None:
        assert path_data(Rect(0, 0, 1, 1).to_path()).endswith("Z")

    def test_save(self, tmp_path: Path) -> None:
        target = SvgTarget(10, 10)
        target.fill_polygon(BLACK, [Point(0, 0), Point(1, 0), Point(0, 1)])
        out = tmp_path / "page.svg"
        target.save(out)
        assert out.read_text(encoding="utf-8").startswith("<?xml")


class TestHighlightSession:
    """Tests for drawing selected objects with their handles."""

    @pytest.fixture
    def leg(self, appearance: CourseAppearance) -> LegCourseObject:
        path = SymPath((Point(0, 0), Point(1, 0), Point(1, 1)))
        return LegCourseObject(1, 2, 3, 1.0, appearance, path, None)

    def test_draw_adds_handles(self, leg: LegCourseObject) -> None:
        target = RecordingTarget()
        session = HighlightSession(target, Transform().scale(10))
        session.draw(leg)
        assert target.operations() == ["draw_path", "fill_rectangle"]
        brush, rect = target.commands[1].args
        assert brush == session.handle_brush
        assert rect == Rect(8, -2, 5, 5)

    def test_erase_uses_erase_brush_everywhere(self, leg: LegCourseObject) -> None:
        target = RecordingTarget()
        erase = Brush("#FFFFFF")
        HighlightSession(target, Transform().scale(10)).erase(leg, erase)
        assert target.commands[0].args[0].brush == erase
        assert target.commands[1].args[0] == erase

    def test_objects_without_handles(self, appearance: CourseAppearance) -> None:
        target = RecordingTarget()
        control = ControlCourseObject(1, 2, 1.0, appearance, FULL_CIRCLE, Point(0, 0))
        HighlightSession(target, Transform()).draw(control)
        assert "fill_rectangle" not in target.operations()

    def test_brushes_from_config(self) -> None:
        config = HighlightConfig(highlight_color="#112233", area_highlight_opacity=0.5, handle_size=7)
        session = HighlightSession(RecordingTarget(), Transform(), config)
        assert session.highlight_brush == Brush("#112233")
        assert session.area_brush.opacity == 0.5
        assert session.handle_rect(Point(10, 10)) == Rect(7, 7, 7, 7)

    def test_sessions_do_not_share_brushes(self) -> None:
        first = HighlightSession(RecordingTarget(), Transform())
        second = HighlightSession(RecordingTarget(), Transform(), HighlightConfig(highlight_color="#123456"))
        assert first.highlight_brush.color == "#00A0FF"
        assert second.highlight_brush.color == "#123456"

    def test_pixel_bounds_include_handles(self, leg: LegCourseObject) -> None:
        session = HighlightSession(RecordingTarget(), Transform().scale(10))
        assert session.pixel_bounds(leg) == Rect(-5, -5, 20, 20)
