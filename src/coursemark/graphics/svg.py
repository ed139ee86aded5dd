"""Drawing target that renders to an SVG document."""

import math
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from pathlib import Path

from fontTools.misc.transform import Transform

from coursemark.domain.enums import FontStyle
from coursemark.exceptions import GraphicsStateError
from coursemark.geometry import Point, Rect, SymPath
from coursemark.graphics.target import Brush, LineCap, Pen, StackedTarget

SVG_NS = "http://www.w3.org/2000/svg"

ET.register_namespace("", SVG_NS)


def _fmt(value: float) -> str:
    return f"{value:.4f}".rstrip("0").rstrip(".")


def _points_attr(points: Sequence[Point]) -> str:
    return " ".join(f"{_fmt(p.x)},{_fmt(p.y)}" for p in points)


def path_data(path: SymPath) -> str:
    """SVG path data for a SymPath, keeping cubic segments as curves."""
    first = path.first_point
    commands = [f"M{_fmt(first.x)},{_fmt(first.y)}"]
    for seg in path.segments():
        if len(seg) == 2:
            commands.append(f"L{_fmt(seg[1].x)},{_fmt(seg[1].y)}")
        else:
            commands.append("C" + " ".join(f"{_fmt(p.x)},{_fmt(p.y)}" for p in seg[1:]))
    if path.is_closed:
        commands.append("Z")
    return " ".join(commands)


class SvgTarget(StackedTarget):
    """GraphicsTarget producing an SVG document.

    Pushed transforms and clips become nested ``<g>`` elements, so they
    must be popped in the reverse order they were pushed.

    Args:
        width: Document width in user units
        height: Document height in user units
    """

    def __init__(self, width: float, height: float) -> None:
        super().__init__()
        self.root = ET.Element(
            f"{{{SVG_NS}}}svg",
            {
                "width": _fmt(width),
                "height": _fmt(height),
                "viewBox": f"0 0 {_fmt(width)} {_fmt(height)}",
            },
        )
        self._defs = ET.SubElement(self.root, f"{{{SVG_NS}}}defs")
        self._groups: list[tuple[str, ET.Element]] = []
        self._clip_count = 0

    @property
    def _parent(self) -> ET.Element:
        return self._groups[-1][1] if self._groups else self.root

    def _element(self, tag: str, attrs: dict[str, str], parent: ET.Element | None = None) -> ET.Element:
        return ET.SubElement(self._parent if parent is None else parent, f"{{{SVG_NS}}}{tag}", attrs)

    def _close_group(self, kind: str) -> None:
        if not self._groups or self._groups[-1][0] != kind:
            raise GraphicsStateError(f"pop_{kind} does not match the innermost push")
        self._groups.pop()

    def push_transform(self, xform: Transform) -> None:
        super().push_transform(xform)
        xx, xy, yx, yy, dx, dy = xform
        group = self._element("g", {"transform": f"matrix({' '.join(_fmt(v) for v in (xx, xy, yx, yy, dx, dy))})"})
        self._groups.append(("transform", group))

    def pop_transform(self) -> None:
        super().pop_transform()
        self._close_group("transform")

    def _clip_path(self, rect: Rect) -> str:
        self._clip_count += 1
        clip_id = f"clip{self._clip_count}"
        clip = self._element("clipPath", {"id": clip_id}, parent=self._defs)
        self._element("rect", self._rect_attrs(rect), parent=clip)
        return f"url(#{clip_id})"

    def push_clip(self, rect: Rect) -> None:
        super().push_clip(rect)
        group = self._element("g", {"clip-path": self._clip_path(rect)})
        self._groups.append(("clip", group))

    def pop_clip(self) -> None:
        super().pop_clip()
        self._close_group("clip")

    @staticmethod
    def _rect_attrs(rect: Rect) -> dict[str, str]:
        return {"x": _fmt(rect.x), "y": _fmt(rect.y), "width": _fmt(rect.width), "height": _fmt(rect.height)}

    @staticmethod
    def _fill(brush: Brush) -> dict[str, str]:
        attrs = {"fill": brush.color, "stroke": "none"}
        if brush.opacity < 1.0:
            attrs["fill-opacity"] = _fmt(brush.opacity)
        return attrs

    @staticmethod
    def _stroke(pen: Pen) -> dict[str, str]:
        attrs = {"fill": "none", "stroke": pen.brush.color}
        if pen.width > 0:
            attrs["stroke-width"] = _fmt(pen.width)
        else:
            attrs["stroke-width"] = "1"
            attrs["vector-effect"] = "non-scaling-stroke"
        if pen.cap is LineCap.ROUND:
            attrs["stroke-linecap"] = "round"
            attrs["stroke-linejoin"] = "round"
        if pen.brush.opacity < 1.0:
            attrs["stroke-opacity"] = _fmt(pen.brush.opacity)
        return attrs

    def draw_line(self, pen: Pen, start: Point, end: Point) -> None:
        attrs = {"x1": _fmt(start.x), "y1": _fmt(start.y), "x2": _fmt(end.x), "y2": _fmt(end.y)}
        self._element("line", {**attrs, **self._stroke(pen)})

    def _ellipse_attrs(self, center: Point, radius_x: float, radius_y: float) -> dict[str, str]:
        return {"cx": _fmt(center.x), "cy": _fmt(center.y), "rx": _fmt(radius_x), "ry": _fmt(radius_y)}

    def draw_ellipse(self, pen: Pen, center: Point, radius_x: float, radius_y: float) -> None:
        self._element("ellipse", {**self._ellipse_attrs(center, radius_x, radius_y), **self._stroke(pen)})

    def fill_ellipse(self, brush: Brush, center: Point, radius_x: float, radius_y: float) -> None:
        self._element("ellipse", {**self._ellipse_attrs(center, radius_x, radius_y), **self._fill(brush)})

    def draw_arc(self, pen: Pen, rect: Rect, start_angle: float, sweep_angle: float) -> None:
        """Draw part of the ellipse inscribed in rect.

        Angles are in degrees, measured from the positive x axis towards
        the positive y axis.
        """
        center = rect.center
        rx, ry = rect.width / 2, rect.height / 2
        if abs(sweep_angle) >= 360.0:
            self.draw_ellipse(pen, center, rx, ry)
            return

        def at(angle: float) -> Point:
            rad = math.radians(angle)
            return Point(center.x + rx * math.cos(rad), center.y + ry * math.sin(rad))

        start = at(start_angle)
        end = at(start_angle + sweep_angle)
        large_arc = 1 if abs(sweep_angle) > 180.0 else 0
        sweep_flag = 1 if sweep_angle > 0 else 0
        d = (
            f"M{_fmt(start.x)},{_fmt(start.y)} "
            f"A{_fmt(rx)},{_fmt(ry)} 0 {large_arc} {sweep_flag} {_fmt(end.x)},{_fmt(end.y)}"
        )
        self._element("path", {"d": d, **self._stroke(pen)})

    def draw_rectangle(self, pen: Pen, rect: Rect) -> None:
        self._element("rect", {**self._rect_attrs(rect), **self._stroke(pen)})

    def fill_rectangle(self, brush: Brush, rect: Rect) -> None:
        self._element("rect", {**self._rect_attrs(rect), **self._fill(brush)})

    def draw_polygon(self, pen: Pen, points: Sequence[Point]) -> None:
        self._element("polygon", {"points": _points_attr(points), **self._stroke(pen)})

    def fill_polygon(self, brush: Brush, points: Sequence[Point]) -> None:
        self._element("polygon", {"points": _points_attr(points), **self._fill(brush)})

    def draw_path(self, pen: Pen, path: SymPath) -> None:
        self._element("path", {"d": path_data(path), **self._stroke(pen)})

    def fill_path(self, brush: Brush, path: SymPath) -> None:
        self._element("path", {"d": path_data(path), **self._fill(brush)})

    def _text_element(
        self, text: str, font_name: str, font_style: FontStyle, em_height: float, brush: Brush, top_left: Point
    ) -> ET.Element:
        attrs = {
            "x": _fmt(top_left.x),
            "y": _fmt(top_left.y),
            "font-family": font_name,
            "font-size": _fmt(em_height),
            "dominant-baseline": "text-before-edge",
            **self._fill(brush),
        }
        if font_style & FontStyle.BOLD:
            attrs["font-weight"] = "bold"
        if font_style & FontStyle.ITALIC:
            attrs["font-style"] = "italic"
        element = self._element("text", attrs)
        element.text = text
        return element

    def draw_text(
        self, text: str, font_name: str, font_style: FontStyle, em_height: float, brush: Brush, top_left: Point
    ) -> None:
        self._text_element(text, font_name, font_style, em_height, brush, top_left)

    def draw_clipped_text(
        self, text: str, font_name: str, font_style: FontStyle, em_height: float, brush: Brush, rect: Rect
    ) -> None:
        self.push_clip(rect)
        try:
            self._text_element(text, font_name, font_style, em_height, brush, Point(rect.left, rect.top))
        finally:
            self.pop_clip()

    def to_string(self) -> str:
        """Serialized SVG document."""
        return ET.tostring(self.root, encoding="unicode")

    def save(self, path: Path) -> None:
        """Write the document to a file."""
        ET.ElementTree(self.root).write(path, encoding="utf-8", xml_declaration=True)
