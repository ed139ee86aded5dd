"""Configuration settings for coursemark."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from coursemark.domain.enums import FontStyle


class FontSpec(BaseModel):
    """Font family, style and size used for course text."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        default="Arial",
        description="Font family name",
    )
    style: FontStyle = Field(
        default=FontStyle.REGULAR,
        description="Bold/italic flags",
    )
    em_height: float = Field(
        default=5.57,
        gt=0.0,
        description="Em height in map units (mm) at scale ratio 1",
    )


class CourseAppearance(BaseModel):
    """Stroke widths and fonts of course symbols at scale ratio 1.

    Immutable, so one instance can be shared by every course object.
    """

    model_config = ConfigDict(frozen=True)

    line_thickness: float = Field(
        default=0.35,
        gt=0.0,
        le=2.0,
        description="Thickness of control circles, legs and point glyph strokes (mm)",
    )
    boundary_thickness: float = Field(
        default=0.7,
        gt=0.0,
        le=5.0,
        description="Thickness of uncrossable boundaries (mm)",
    )
    number_font: FontSpec = Field(
        default_factory=FontSpec,
        description="Font of control numbers",
    )
    code_font: FontSpec = Field(
        default_factory=lambda: FontSpec(em_height=3.5),
        description="Font of control codes",
    )
    flagged_dash_length: float = Field(
        default=2.0,
        gt=0.0,
        description="Dash length of flagged legs (mm)",
    )
    flagged_gap_length: float = Field(
        default=0.5,
        gt=0.0,
        description="Gap length between dashes of flagged legs (mm)",
    )


class HighlightConfig(BaseModel):
    """Colors and sizes used when highlighting selected course objects."""

    highlight_color: str = Field(
        default="#00A0FF",
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Color of highlighted outlines",
    )
    area_highlight_color: str = Field(
        default="#FF00FF",
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Fill color of highlighted areas",
    )
    area_highlight_opacity: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Opacity of the area highlight fill",
    )
    handle_color: str = Field(
        default="#0000FF",
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Color of drag handles",
    )
    handle_size: int = Field(
        default=5,
        ge=3,
        le=15,
        description="Side of a square drag handle in pixels (odd)",
    )


class PrintSettings(BaseModel):
    """Which courses to print and how pages overlap."""

    course_ids: list[int] = Field(
        default_factory=list,
        description="Courses to print, in order",
    )
    copies: int = Field(
        default=1,
        ge=1,
        le=999,
        description="Copies of each course",
    )
    max_min_overlap: float = Field(
        default=100.0,
        gt=0.0,
        description="Upper bound of the minimum page overlap (1/100 inch)",
    )
    overlap_divisor: float = Field(
        default=6.0,
        gt=1.0,
        description="Minimum overlap as a fraction 1/n of the printable length",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class CoursemarkSettings(BaseModel):
    """Main application settings."""

    appearance: CourseAppearance = Field(default_factory=CourseAppearance)
    highlight: HighlightConfig = Field(default_factory=HighlightConfig)
    printing: PrintSettings = Field(default_factory=PrintSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> CoursemarkSettings:
    """Get default application settings."""
    return CoursemarkSettings()
