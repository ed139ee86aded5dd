"""Description sheet blocks.

A description block is an aspect-preserving rectangle on the map whose
content is drawn by a DescriptionRenderer. Resizing the block changes the
renderer's cell size in proportion to the new width.
"""

import copy
from collections.abc import Sequence
from typing import Any, Protocol

from coursemark.config.settings import CourseAppearance
from coursemark.core.course_object import RectDrag
from coursemark.core.rect_objects import AspectPreservingRectCourseObject
from coursemark.core.symdefs import SymDefCache, TextSymDefKey
from coursemark.domain.description import DESCRIPTION_COLUMNS, DescriptionKind, DescriptionLine
from coursemark.domain.enums import CourseObjectKind, FontStyle, LineStyle
from coursemark.domain.map import LineSymbol, LineSymDef, Map, SymColor, SymDef, TextSymbol, TextSymDef
from coursemark.exceptions import UnsupportedOperationError
from coursemark.geometry import Point, Rect, SymPath
from coursemark.io.fonts import TextMeasurer

# Symbol definition id integer parts.
DESCRIPTION_LINE_OCAD_ID = 750
DESCRIPTION_TEXT_OCAD_ID = 751

# Every third row boundary is drawn thick.
THICK_ROW_INTERVAL = 3

# Text em height relative to the cell size.
TEXT_CELL_RATIO = 0.6


class DescriptionRenderer(Protocol):
    """Lays out and renders a description sheet.

    Attributes:
        description: Lines of the sheet
        kind: Symbol or text rendering
        cell_size: Side of one grid cell in map units
    """

    description: Sequence[DescriptionLine]
    kind: DescriptionKind
    cell_size: float

    def measure(self) -> tuple[float, float]:
        """(width, height) of the sheet at the current cell size."""
        ...

    def render_to_map(self, map: Map, color: SymColor, top_left: Point, cache: SymDefCache) -> None:
        """Emit the sheet into a map with its top-left corner at top_left."""
        ...


class GridDescriptionRenderer:
    """Renders a description sheet as a grid of line and text symbols.

    The grid is DESCRIPTION_COLUMNS cells wide with one row per line. In
    SYMBOLS mode every cell is its own column; in TEXT mode the first two
    cells keep their columns and the rest of the line is written as one
    text across the remaining columns. Title lines always span the row.

    Args:
        description: Lines of the sheet
        kind: Symbol or text rendering
        measurer: Measures cell text for centering
        font_name: Font of cell text
        font_style: Style of cell text
        cell_size: Initial cell size in map units
    """

    def __init__(
        self,
        description: Sequence[DescriptionLine],
        kind: DescriptionKind,
        measurer: TextMeasurer,
        font_name: str = "Arial",
        font_style: FontStyle = FontStyle.BOLD,
        cell_size: float = 6.0,
    ) -> None:
        self.description = tuple(description)
        self.kind = kind
        self.font_name = font_name
        self.font_style = font_style
        self.cell_size = cell_size
        self._measurer = measurer

    @property
    def margin(self) -> float:
        """Space around the grid; about the width of the thick lines."""
        return self.cell_size / 20

    @property
    def thick_line_width(self) -> float:
        return self.cell_size / 20

    @property
    def thin_line_width(self) -> float:
        return self.cell_size / 60

    def measure(self) -> tuple[float, float]:
        width = DESCRIPTION_COLUMNS * self.cell_size + 2 * self.margin
        height = len(self.description) * self.cell_size + 2 * self.margin
        return width, height

    def _column_boundaries(self, line: DescriptionLine) -> list[int]:
        """Inner vertical lines of a row, as column indexes."""
        if line.is_title:
            return []
        if self.kind is DescriptionKind.TEXT:
            return [1, 2]
        return list(range(1, DESCRIPTION_COLUMNS))

    def _cell_texts(self, line: DescriptionLine) -> list[tuple[int, int, str]]:
        """(first column, column span, text) of every non-blank cell."""
        if line.is_title:
            return [(0, DESCRIPTION_COLUMNS, line.cell(0))] if line.cell(0) else []
        if self.kind is DescriptionKind.TEXT:
            rest = " ".join(c for c in line.cells[2:] if c)
            spans = [(0, 1, line.cell(0)), (1, 1, line.cell(1)), (2, DESCRIPTION_COLUMNS - 2, rest)]
        else:
            spans = [(i, 1, line.cell(i)) for i in range(DESCRIPTION_COLUMNS)]
        return [s for s in spans if s[2]]

    def _line_symdef(self, map: Map, color: SymColor, cache: SymDefCache, width: float) -> LineSymDef:
        def create() -> LineSymDef:
            symdef = LineSymDef(
                "Description line",
                map.get_free_symdef_ocad_id(DESCRIPTION_LINE_OCAD_ID),
                color,
                width,
                LineStyle.MITERED,
            )
            map.add_symdef(symdef)
            return symdef

        return cache.get_or_create(color, ("description-line", width), create)

    def _text_symdef(self, map: Map, color: SymColor, cache: SymDefCache, em_height: float) -> TextSymDef:
        def create() -> TextSymDef:
            symdef = TextSymDef(
                "Description text",
                map.get_free_symdef_ocad_id(DESCRIPTION_TEXT_OCAD_ID),
                font_name=self.font_name,
                em_height=em_height,
                bold=bool(self.font_style & FontStyle.BOLD),
                italic=bool(self.font_style & FontStyle.ITALIC),
                color=color,
            )
            map.add_symdef(symdef)
            return symdef

        return cache.get_or_create(color, TextSymDefKey(self.font_name, self.font_style, em_height), create)

    def render_to_map(self, map: Map, color: SymColor, top_left: Point, cache: SymDefCache) -> None:
        cell = self.cell_size
        left = top_left.x + self.margin
        top = top_left.y - self.margin
        right = left + DESCRIPTION_COLUMNS * cell
        rows = len(self.description)
        bottom = top - rows * cell

        thick = self._line_symdef(map, color, cache, self.thick_line_width)
        thin = self._line_symdef(map, color, cache, self.thin_line_width)

        def line(symdef: LineSymDef, start: Point, end: Point) -> None:
            map.add_symbol(LineSymbol(symdef, SymPath((start, end))))

        for row in range(rows + 1):
            y = top - row * cell
            is_thick = row in (0, rows) or row % THICK_ROW_INTERVAL == 0
            line(thick if is_thick else thin, Point(left, y), Point(right, y))

        line(thick, Point(left, top), Point(left, bottom))
        line(thick, Point(right, top), Point(right, bottom))

        em_height = cell * TEXT_CELL_RATIO
        text_symdef = self._text_symdef(map, color, cache, em_height)

        for row, desc_line in enumerate(self.description):
            row_top = top - row * cell
            for column in self._column_boundaries(desc_line):
                x = left + column * cell
                line(thin, Point(x, row_top), Point(x, row_top - cell))

            for first, span, text in self._cell_texts(desc_line):
                width, height = self._measurer.measure(text, self.font_name, self.font_style, em_height)
                cell_left = left + first * cell
                location = Point(cell_left + (span * cell - width) / 2, row_top - (cell - height) / 2)
                map.add_symbol(TextSymbol(text_symdef, (text,), location))


class DescriptionCourseObject(AspectPreservingRectCourseObject):
    """Description sheet block placed on the map.

    Args:
        special_id: Associated special
        top_left: Top-left corner of the block in map coordinates
        cell_size: Initial cell size
        renderer: Renderer holding the description; owned by this object
    """

    kind = CourseObjectKind.DESCRIPTION

    def __init__(self, special_id: int | None, top_left: Point, cell_size: float, renderer: DescriptionRenderer) -> None:
        renderer.cell_size = cell_size
        width, height = renderer.measure()
        self._renderer = renderer
        super().__init__(
            None, None, special_id, 1.0, CourseAppearance(),
            Rect(top_left.x, top_left.y - height, width, height),
        )
        self.cell_size_ratio = self.rect.width / cell_size

    @property
    def renderer(self) -> DescriptionRenderer:
        return self._renderer

    @property
    def cell_size(self) -> float:
        return self._renderer.cell_size

    def rectangle_updating(self, new_rect: Rect, drag: RectDrag) -> Rect:
        new_rect = super().rectangle_updating(new_rect, drag)
        self._renderer.cell_size = new_rect.width / self.cell_size_ratio
        return new_rect

    def add_to_map(self, map: Map, color: SymColor, cache: SymDefCache) -> None:
        self._renderer.render_to_map(map, color, Point(self.rect.left, self.rect.bottom), cache)

    def create_symdef(self, map: Map, color: SymColor) -> SymDef:
        raise UnsupportedOperationError("create_symdef", type(self).__name__)

    def add_symbols(self, map: Map, symdef: SymDef) -> None:
        raise UnsupportedOperationError("add_symbols", type(self).__name__)

    def clone(self) -> "DescriptionCourseObject":
        duplicate = copy.copy(self)
        duplicate._renderer = copy.copy(self._renderer)
        return duplicate

    def _state(self) -> tuple[Any, ...]:
        return (self._renderer.kind, tuple(self._renderer.description)) + super()._state()

