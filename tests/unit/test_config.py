"""Unit tests for configuration models."""

import pytest
from pydantic import ValidationError

from coursemark.config import (
    CourseAppearance,
    CoursemarkSettings,
    FontSpec,
    HighlightConfig,
    PrintSettings,
    get_default_settings,
)
from coursemark.domain import FontStyle


class TestCourseAppearance:
    def test_defaults(self) -> None:
        appearance = CourseAppearance()
        assert appearance.line_thickness == 0.35
        assert appearance.boundary_thickness == 0.7
        assert appearance.number_font == FontSpec(name="Arial", style=FontStyle.REGULAR, em_height=5.57)
        assert appearance.code_font.em_height == 3.5

    def test_frozen(self) -> None:
        appearance = CourseAppearance()
        with pytest.raises(ValidationError):
            appearance.line_thickness = 1.0  # type: ignore[misc]

    def test_thickness_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            CourseAppearance(line_thickness=0)


class TestHighlightConfig:
    def test_defaults(self) -> None:
        config = HighlightConfig()
        assert config.highlight_color == "#00A0FF"
        assert config.handle_size == 5

    @pytest.mark.parametrize("color", ["blue", "#12345", "#GGGGGG"])
    def test_color_format(self, color: str) -> None:
        with pytest.raises(ValidationError):
            HighlightConfig(highlight_color=color)

    @pytest.mark.parametrize("size", [2, 16])
    def test_handle_size_bounds(self, size: int) -> None:
        with pytest.raises(ValidationError):
            HighlightConfig(handle_size=size)


class TestPrintSettings:
    def test_defaults(self) -> None:
        settings = PrintSettings()
        assert settings.course_ids == []
        assert settings.copies == 1
        assert settings.max_min_overlap == 100.0
        assert settings.overlap_divisor == 6.0

    @pytest.mark.parametrize("copies", [0, 1000])
    def test_copies_bounds(self, copies: int) -> None:
        with pytest.raises(ValidationError):
            PrintSettings(copies=copies)

    def test_overlap_divisor_above_one(self) -> None:
        with pytest.raises(ValidationError):
            PrintSettings(overlap_divisor=1.0)


class TestCoursemarkSettings:
    def test_default_settings(self) -> None:
        settings = get_default_settings()
        assert isinstance(settings, CoursemarkSettings)
        assert settings.logging.log_file is None
        assert settings.logging.log_level == "WARNING"
        assert settings.printing.copies == 1

    def test_nested_from_dict(self) -> None:
        settings = CoursemarkSettings.model_validate(
            {"appearance": {"line_thickness": 0.5}, "printing": {"course_ids": [3, 1], "copies": 2}}
        )
        assert settings.appearance.line_thickness == 0.5
        assert settings.printing.course_ids == [3, 1]
