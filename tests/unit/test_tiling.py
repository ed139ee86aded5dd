"""Unit tests for page tiling."""

import pytest

from coursemark.core import (
    CoursePage,
    DimensionLayout,
    PageSettings,
    choose_landscape,
    layout_course,
    layout_optimized_course,
    layout_page_dimension,
)
from coursemark.exceptions import TilingError
from coursemark.geometry import Rect

PORTRAIT = PageSettings(Rect(0, 0, 500, 800))


class TestLayoutPageDimension:
    """Tests for splitting one axis."""

    def test_fits_on_one_page_centered(self) -> None:
        (page,) = layout_page_dimension(0, 100, 0, 500, 1.0)
        assert page.map_start == 0
        assert page.map_length == 100
        assert page.page_length == pytest.approx(393.7, abs=0.01)
        assert page.page_start == pytest.approx(53.15, abs=0.01)

    def test_printable_start_offsets_page(self) -> None:
        (page,) = layout_page_dimension(0, 100, 25, 500, 1.0)
        assert page.page_start == pytest.approx(78.15, abs=0.01)

    def test_scale_ratio_shrinks_print(self) -> None:
        (page,) = layout_page_dimension(0, 100, 0, 500, 2.0)
        assert page.page_length == pytest.approx(196.85, abs=0.01)

    def test_multiple_pages_cover_exactly(self) -> None:
        pages = list(layout_page_dimension(10, 300, 0, 500, 1.0))
        assert len(pages) == 3
        assert pages[0].map_start == 10
        assert pages[-1].map_start + pages[-1].map_length == pytest.approx(310.0)
        assert all(p.page_length == 500 for p in pages)
        assert all(p.map_length == pytest.approx(127.0) for p in pages)

    def test_overlap_is_constant_and_large_enough(self) -> None:
        pages = list(layout_page_dimension(0, 300, 0, 500, 1.0))
        advances = [b.map_start - a.map_start for a, b in zip(pages, pages[1:])]
        assert advances[0] == pytest.approx(advances[1])
        overlap_page_units = (pages[0].map_length - advances[0]) / 0.254
        assert overlap_page_units >= 500 / 6

    def test_max_min_overlap_caps_overlap(self) -> None:
        """With a long printable length the 1 inch cap applies."""
        pages = list(layout_page_dimension(0, 500, 0, 1200, 1.0))
        advance = pages[1].map_start - pages[0].map_start
        overlap_page_units = (pages[0].map_length - advance) / 0.254
        assert overlap_page_units >= 100
        assert len(pages) == 2

    def test_overlap_parameters(self) -> None:
        default = list(layout_page_dimension(0, 400, 0, 500, 1.0))
        generous = list(layout_page_dimension(0, 400, 0, 500, 1.0, max_min_overlap=250, overlap_divisor=2))
        assert len(generous) > len(default)

    def test_restartable(self) -> None:
        first = list(layout_page_dimension(0, 300, 0, 500, 1.0))
        second = list(layout_page_dimension(0, 300, 0, 500, 1.0))
        assert first == second

    def test_lazy(self) -> None:
        placements = layout_page_dimension(0, 300, 0, 500, 1.0)
        assert isinstance(next(placements), DimensionLayout)

    @pytest.mark.parametrize(("printable", "scale"), [(0, 1.0), (-10, 1.0), (500, 0.0), (500, -1.0)])
    def test_invalid_arguments_raise_immediately(self, printable: float, scale: float) -> None:
        with pytest.raises(TilingError) as exc_info:
            layout_page_dimension(0, 100, 0, printable, scale)
        assert str(exc_info.value).startswith("Cannot lay out pages")


class TestLayoutCourse:
    """Tests for two-dimensional layouts."""

    def test_pages_row_major(self) -> None:
        pages = layout_course(1, Rect(0, 0, 300, 300), 1.0, PORTRAIT)
        # 3 columns, 2 rows on 500 x 800 paper
        assert len(pages) == 6
        assert [p.map_rectangle.left for p in pages[:3]] == sorted(p.map_rectangle.left for p in pages[:3])
        assert pages[0].map_rectangle.top == pages[2].map_rectangle.top
        assert pages[3].map_rectangle.top > pages[0].map_rectangle.top

    def test_page_fields(self) -> None:
        (page,) = layout_course(7, Rect(0, 0, 100, 50), 1.0, PORTRAIT)
        assert isinstance(page, CoursePage)
        assert page.course_id == 7
        assert page.map_rectangle == Rect(0, 0, 100, 50)
        assert not page.landscape
        assert page.print_rectangle.center.x == pytest.approx(250)
        assert page.print_rectangle.center.y == pytest.approx(400)

    def test_landscape_swaps_axes(self) -> None:
        settings = PageSettings(Rect(10, 20, 500, 800), landscape=True)
        assert settings.oriented_area == Rect(20, 10, 800, 500)
        pages = layout_course(1, Rect(0, 0, 300, 100), 1.0, settings)
        assert len(pages) == 2
        assert all(p.landscape for p in pages)

    def test_union_covers_map_area(self) -> None:
        area = Rect(-40, 15, 300, 300)
        pages = layout_course(1, area, 1.0, PORTRAIT)
        assert min(p.map_rectangle.left for p in pages) == pytest.approx(area.left)
        assert min(p.map_rectangle.top for p in pages) == pytest.approx(area.top)
        assert max(p.map_rectangle.right for p in pages) == pytest.approx(area.right)
        assert max(p.map_rectangle.bottom for p in pages) == pytest.approx(area.bottom)


class TestOrientation:
    """Tests for choosing page orientation."""

    @staticmethod
    def _page(width: float, height: float, landscape: bool) -> CoursePage:
        return CoursePage(1, Rect(0, 0, 1, 1), Rect(0, 0, width, height), landscape)

    def test_fewer_pages_wins(self) -> None:
        portrait = [self._page(500, 800, False)] * 3
        landscape = [self._page(800, 500, True)] * 2
        assert choose_landscape(portrait, landscape)
        assert not choose_landscape(landscape, portrait)

    def test_tie_prefers_wide_landscape(self) -> None:
        assert choose_landscape([self._page(300, 200, False)], [self._page(300, 200, True)])
        assert not choose_landscape([self._page(200, 300, False)], [self._page(200, 300, True)])

    def test_tie_square_is_portrait(self) -> None:
        assert not choose_landscape([self._page(300, 300, False)], [self._page(300, 300, True)])

    def test_optimized_picks_fewer_pages(self) -> None:
        pages = layout_optimized_course(1, Rect(0, 0, 300, 100), 1.0, PORTRAIT)
        assert len(pages) == 2
        assert all(p.landscape for p in pages)

    def test_optimized_wide_map_on_one_page(self) -> None:
        (page,) = layout_optimized_course(1, Rect(0, 0, 100, 50), 1.0, PORTRAIT)
        assert page.landscape

    def test_optimized_tall_map_on_one_page(self) -> None:
        (page,) = layout_optimized_course(1, Rect(0, 0, 50, 100), 1.0, PORTRAIT)
        assert not page.landscape
