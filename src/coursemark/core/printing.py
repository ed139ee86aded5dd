"""Course printing: laying out courses on pages and drawing them one by one."""

import time
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from coursemark.config.settings import PrintSettings
from coursemark.core.tiling import (
    CoursePage,
    PageSettings,
    PrintAreaProvider,
    layout_course,
    layout_optimized_course,
)
from coursemark.exceptions import PageOutOfRangeError
from coursemark.geometry import Rect, rectangle_transform, transform_distance
from coursemark.graphics.target import GraphicsTarget
from coursemark.utils.logging import PrintLogger

# Coarsest map resolution a page is ever drawn with (mm).
MAX_MAP_RESOLUTION = 0.01

# (target, course id, map rectangle, minimum map resolution)
PageRenderer = Callable[[GraphicsTarget, int, Rect, float], None]


@dataclass(frozen=True, slots=True)
class Margins:
    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0


@dataclass(frozen=True, slots=True)
class PageOrientation:
    """Per-page settings handed back to the print host."""

    landscape: bool
    margins: Margins


class CoursePrinter:
    """Prints one or more courses, each split over as many pages as needed.

    Pages are laid out once by layout_pages and then drawn sequentially by
    page number.

    Args:
        print_area_provider: Map area and scale ratio of a course
        page_renderer: Draws the map for a course into a prepared target
        settings: Courses, copies and overlap parameters
        print_logger: Collects layout and drawing statistics
    """

    def __init__(
        self,
        print_area_provider: PrintAreaProvider,
        page_renderer: PageRenderer,
        settings: PrintSettings,
        print_logger: PrintLogger | None = None,
    ) -> None:
        self.print_area_provider = print_area_provider
        self.page_renderer = page_renderer
        self.settings = settings
        self.print_logger = print_logger or PrintLogger(structlog.get_logger(__name__))
        self.pages: list[CoursePage] = []

    def layout_pages(self, page_settings: PageSettings, optimize: bool = True) -> int:
        """Lay out every requested course and return the total page count.

        Args:
            page_settings: Printable area; its orientation is used only when
                optimize is False
            optimize: Pick the orientation needing fewer pages for each course
        """
        layout = layout_optimized_course if optimize else layout_course
        self.print_logger.stats.start_time = time.time()
        self.pages = []
        for course_id in self.settings.course_ids:
            map_area, scale_ratio = self.print_area_provider(course_id)
            course_pages = layout(
                course_id,
                map_area,
                scale_ratio,
                page_settings,
                self.settings.max_min_overlap,
                self.settings.overlap_divisor,
            )
            self.print_logger.log_course_layout(
                course_id, len(course_pages), bool(course_pages) and course_pages[0].landscape
            )
            for _ in range(self.settings.copies):
                self.pages.extend(course_pages)

        return len(self.pages)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def _page(self, page_number: int) -> CoursePage:
        if not 0 <= page_number < len(self.pages):
            raise PageOutOfRangeError(page_number, len(self.pages))
        return self.pages[page_number]

    def change_page_settings(self, page_number: int) -> PageOrientation:
        """Orientation of a page; pages are always printed without margins."""
        return PageOrientation(self._page(page_number).landscape, Margins())

    def draw_page(self, target: GraphicsTarget, page_number: int, dpi: float) -> None:
        """Draw one page.

        The page's print rectangle is clipped and the map rectangle is
        mapped onto it with y inverted. The renderer is called with the
        finest map resolution the printer can show, never coarser than
        MAX_MAP_RESOLUTION.

        Args:
            target: Page surface in 1/100 inch units
            page_number: Zero-based page number
            dpi: Printer resolution

        Raises:
            PageOutOfRangeError: If page_number is not a laid out page
        """
        page = self._page(page_number)
        started = time.perf_counter()

        transform = rectangle_transform(page.map_rectangle, page.print_rectangle, invert_y=True)
        min_resolution = min(MAX_MAP_RESOLUTION, transform_distance(100 / dpi, transform.inverse()))

        target.push_clip(page.print_rectangle)
        target.push_transform(transform)
        try:
            self.page_renderer(target, page.course_id, page.map_rectangle, min_resolution)
        finally:
            target.pop_transform()
            target.pop_clip()

        self.print_logger.log_page_drawn(
            page_number, page.course_id, dpi, (time.perf_counter() - started) * 1000
        )
        self.print_logger.stats.end_time = time.time()
