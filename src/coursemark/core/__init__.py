"""Core course object model and print layout.

This module contains the course objects, the circle gap codec, the
symbol-definition cache and the page tiling and printing logic.

Key classes:
- CourseObject: Base of every drawable, editable course symbol
- SymDefCache: Reuses symbol definitions within one map
- CoursePrinter: Lays out courses on pages and draws them
"""

from coursemark.core.area_objects import AreaCourseObject, DangerousCourseObject, OOBCourseObject
from coursemark.core.course_object import CourseObject, RectDrag
from coursemark.core.description import DescriptionCourseObject, DescriptionRenderer, GridDescriptionRenderer
from coursemark.core.gaps import compute_circle_gaps, drawn_arcs, mask_from_gaps
from coursemark.core.glyphs import POINT_GLYPHS, PointGlyph
from coursemark.core.line_objects import (
    BoundaryCourseObject,
    FlaggedLegCourseObject,
    LegCourseObject,
    LineCourseObject,
)
from coursemark.core.point_objects import (
    ControlCourseObject,
    CrossingCourseObject,
    FinishCourseObject,
    FirstAidCourseObject,
    ForbiddenCourseObject,
    PointCourseObject,
    RegMarkCourseObject,
    StartCourseObject,
    WaterCourseObject,
)
from coursemark.core.printing import CoursePrinter, PageOrientation
from coursemark.core.rect_objects import AspectPreservingRectCourseObject, RectCourseObject
from coursemark.core.symdefs import SymDefCache, TextSymDefKey
from coursemark.core.text_objects import (
    BasicTextCourseObject,
    CodeCourseObject,
    ControlNumberCourseObject,
    TextCourseObject,
    calculate_em_height,
)
from coursemark.core.tiling import (
    CoursePage,
    DimensionLayout,
    PageSettings,
    choose_landscape,
    layout_course,
    layout_optimized_course,
    layout_page_dimension,
)

__all__ = [
    # Course objects
    "AreaCourseObject",
    "AspectPreservingRectCourseObject",
    "BasicTextCourseObject",
    "BoundaryCourseObject",
    "CodeCourseObject",
    "ControlCourseObject",
    "ControlNumberCourseObject",
    "CourseObject",
    "CrossingCourseObject",
    "DangerousCourseObject",
    "DescriptionCourseObject",
    "FinishCourseObject",
    "FirstAidCourseObject",
    "FlaggedLegCourseObject",
    "ForbiddenCourseObject",
    "LegCourseObject",
    "LineCourseObject",
    "OOBCourseObject",
    "PointCourseObject",
    "RectCourseObject",
    "RectDrag",
    "RegMarkCourseObject",
    "StartCourseObject",
    "TextCourseObject",
    "WaterCourseObject",
    "calculate_em_height",
    # Descriptions
    "DescriptionRenderer",
    "GridDescriptionRenderer",
    # Gaps and symbol definitions
    "POINT_GLYPHS",
    "PointGlyph",
    "SymDefCache",
    "TextSymDefKey",
    "compute_circle_gaps",
    "drawn_arcs",
    "mask_from_gaps",
    # Printing
    "CoursePage",
    "CoursePrinter",
    "DimensionLayout",
    "PageOrientation",
    "PageSettings",
    "choose_landscape",
    "layout_course",
    "layout_optimized_course",
    "layout_page_dimension",
]
