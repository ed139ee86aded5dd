"""Domain models for coursemark.

This module contains the value types shared by course objects and the
map they are emitted into. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Independent of any drawing backend

Key classes:
- CourseObjectKind: Tag identifying each course object variant
- Map: Destination map holding symbol definitions and symbols
- Glyph: Shape of a point symbol
- DescriptionLine: One row of a description sheet
"""

from coursemark.domain.description import DESCRIPTION_COLUMNS, DescriptionKind, DescriptionLine
from coursemark.domain.enums import CourseObjectKind, FontStyle, HandleCursor, LineStyle
from coursemark.domain.map import (
    AreaSymbol,
    AreaSymDef,
    DashInfo,
    Glyph,
    GlyphArea,
    GlyphCircle,
    GlyphLine,
    HatchInfo,
    LineSymbol,
    LineSymDef,
    Map,
    PointSymbol,
    PointSymDef,
    SymColor,
    SymDef,
    Symbol,
    TextSymbol,
    TextSymDef,
)

__all__: list[str] = [
    # Enums
    "CourseObjectKind",
    "FontStyle",
    "HandleCursor",
    "LineStyle",
    "DescriptionKind",
    # Map model
    "SymColor",
    "Glyph",
    "GlyphArea",
    "GlyphCircle",
    "GlyphLine",
    "DashInfo",
    "HatchInfo",
    "SymDef",
    "PointSymDef",
    "LineSymDef",
    "AreaSymDef",
    "TextSymDef",
    "Symbol",
    "PointSymbol",
    "LineSymbol",
    "AreaSymbol",
    "TextSymbol",
    "Map",
    # Description
    "DESCRIPTION_COLUMNS",
    "DescriptionLine",
]
