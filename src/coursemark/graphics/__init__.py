"""Drawing surfaces and highlight rendering."""

from coursemark.graphics.highlight import HighlightSession
from coursemark.graphics.recording import DrawCommand, RecordingTarget
from coursemark.graphics.svg import SvgTarget
from coursemark.graphics.target import AREA_HIGHLIGHT, Brush, GraphicsTarget, LineCap, Pen, StackedTarget

__all__ = [
    "AREA_HIGHLIGHT",
    "Brush",
    "DrawCommand",
    "GraphicsTarget",
    "HighlightSession",
    "LineCap",
    "Pen",
    "RecordingTarget",
    "StackedTarget",
    "SvgTarget",
]
