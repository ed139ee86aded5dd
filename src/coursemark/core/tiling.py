"""Page tiling: splitting a map area across printed pages.

Map coordinates are millimeters; page coordinates are hundredths of an
inch. Each axis is split independently and the pages of a course are the
cross product of the vertical and horizontal splits.
"""

import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass

import structlog

from coursemark.exceptions import TilingError
from coursemark.geometry import Rect

logger = structlog.get_logger(__name__)

# Millimeters per hundredth of an inch.
MM_PER_PAGE_UNIT = 0.254

DEFAULT_MAX_MIN_OVERLAP = 100.0
DEFAULT_OVERLAP_DIVISOR = 6.0

# Course id -> (map area to print, scale ratio)
PrintAreaProvider = Callable[[int], tuple[Rect, float]]


@dataclass(frozen=True, slots=True)
class DimensionLayout:
    """Placement of one page along one axis.

    Attributes:
        map_start: Start of the printed span in map coordinates
        map_length: Length of the printed span in map coordinates
        page_start: Start on the page (1/100 inch)
        page_length: Length on the page (1/100 inch)
    """

    map_start: float
    map_length: float
    page_start: float
    page_length: float


@dataclass(frozen=True, slots=True)
class PageSettings:
    """Printable area of the paper and the orientation to lay out for.

    Attributes:
        printable_area: Printable area in portrait orientation (1/100 inch)
        landscape: Lay out for landscape orientation
    """

    printable_area: Rect
    landscape: bool = False

    @property
    def oriented_area(self) -> Rect:
        """Printable area in the chosen orientation; landscape swaps the axes."""
        area = self.printable_area
        if self.landscape:
            return Rect(area.top, area.left, area.height, area.width)
        return area

    def with_landscape(self, landscape: bool) -> "PageSettings":
        return PageSettings(self.printable_area, landscape)


@dataclass(frozen=True, slots=True)
class CoursePage:
    """One physical page of a course.

    Attributes:
        course_id: Course printed on the page
        map_rectangle: Map area printed, in map coordinates
        print_rectangle: Destination on the page (1/100 inch)
        landscape: Page orientation
    """

    course_id: int
    map_rectangle: Rect
    print_rectangle: Rect
    landscape: bool


def layout_page_dimension(
    map_start: float,
    map_length: float,
    printable_start: float,
    printable_length: float,
    scale_ratio: float,
    max_min_overlap: float = DEFAULT_MAX_MIN_OVERLAP,
    overlap_divisor: float = DEFAULT_OVERLAP_DIVISOR,
) -> Iterator[DimensionLayout]:
    """Split one axis of a map area across pages.

    A map span that fits is centered on a single page. Otherwise pages
    overlap by at least min(max_min_overlap, printable_length / overlap_divisor)
    and the overlap is spread evenly so the pages exactly cover the span.

    Arguments are validated immediately; the placements are produced lazily
    and the returned iterator may be recreated by calling again.

    Args:
        map_start: Start of the map span (mm)
        map_length: Length of the map span (mm)
        printable_start: Start of the printable area (1/100 inch)
        printable_length: Length of the printable area (1/100 inch)
        scale_ratio: Print scale relative to the map scale

    Returns:
        Iterator over per-page placements

    Raises:
        TilingError: If printable_length or scale_ratio is not positive
    """
    if not printable_length > 0:
        raise TilingError(f"printable length must be positive, got {printable_length}")
    if not scale_ratio > 0:
        raise TilingError(f"scale ratio must be positive, got {scale_ratio}")

    return _layout_page_dimension(
        map_start, map_length, printable_start, printable_length, scale_ratio, max_min_overlap, overlap_divisor
    )


def _layout_page_dimension(
    map_start: float,
    map_length: float,
    printable_start: float,
    printable_length: float,
    scale_ratio: float,
    max_min_overlap: float,
    overlap_divisor: float,
) -> Iterator[DimensionLayout]:
    mm_per_page_unit = MM_PER_PAGE_UNIT * scale_ratio
    length_needed = map_length / mm_per_page_unit

    if length_needed <= printable_length:
        border = (printable_length - length_needed) / 2
        yield DimensionLayout(map_start, map_length, printable_start + border, length_needed)
        return

    min_overlap = min(max_min_overlap, printable_length / overlap_divisor)
    page_count = math.ceil((length_needed - min_overlap) / (printable_length - min_overlap))
    # Rounding can leave a span just over one page needing a single page.
    page_count = max(page_count, 2)

    overlap = (page_count * printable_length - length_needed) / (page_count - 1)
    map_advance = (printable_length - overlap) * mm_per_page_unit
    for i in range(page_count):
        yield DimensionLayout(
            map_start + i * map_advance,
            printable_length * mm_per_page_unit,
            printable_start,
            printable_length,
        )


def layout_course(
    course_id: int,
    map_area: Rect,
    scale_ratio: float,
    page_settings: PageSettings,
    max_min_overlap: float = DEFAULT_MAX_MIN_OVERLAP,
    overlap_divisor: float = DEFAULT_OVERLAP_DIVISOR,
) -> list[CoursePage]:
    """Lay out a course's map area on pages of one orientation.

    Pages run row by row: the vertical split is the outer loop.
    """
    area = page_settings.oriented_area
    pages = []
    for vertical in layout_page_dimension(
        map_area.top, map_area.height, area.top, area.height, scale_ratio, max_min_overlap, overlap_divisor
    ):
        for horizontal in layout_page_dimension(
            map_area.left, map_area.width, area.left, area.width, scale_ratio, max_min_overlap, overlap_divisor
        ):
            pages.append(
                CoursePage(
                    course_id=course_id,
                    map_rectangle=Rect(horizontal.map_start, vertical.map_start, horizontal.map_length, vertical.map_length),
                    print_rectangle=Rect(
                        horizontal.page_start, vertical.page_start, horizontal.page_length, vertical.page_length
                    ),
                    landscape=page_settings.landscape,
                )
            )
    return pages


def choose_landscape(portrait: list[CoursePage], landscape: list[CoursePage]) -> bool:
    """Whether the landscape layout should be used.

    Fewer pages wins. On a tie landscape is used when its first page's print
    rectangle is wider than tall.
    """
    if len(portrait) != len(landscape):
        return len(landscape) < len(portrait)
    if not landscape:
        return False
    first = landscape[0].print_rectangle
    return first.width > first.height


def layout_optimized_course(
    course_id: int,
    map_area: Rect,
    scale_ratio: float,
    page_settings: PageSettings,
    max_min_overlap: float = DEFAULT_MAX_MIN_OVERLAP,
    overlap_divisor: float = DEFAULT_OVERLAP_DIVISOR,
) -> list[CoursePage]:
    """Lay out a course in both orientations and keep the better one."""
    portrait = layout_course(
        course_id, map_area, scale_ratio, page_settings.with_landscape(False), max_min_overlap, overlap_divisor
    )
    landscape = layout_course(
        course_id, map_area, scale_ratio, page_settings.with_landscape(True), max_min_overlap, overlap_divisor
    )

    use_landscape = choose_landscape(portrait, landscape)
    logger.debug(
        "Orientation chosen",
        course=course_id,
        portrait_pages=len(portrait),
        landscape_pages=len(landscape),
        landscape=use_landscape,
    )
    return landscape if use_landscape else portrait
