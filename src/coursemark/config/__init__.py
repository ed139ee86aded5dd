"""Configuration management for coursemark.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- CourseAppearance: Stroke widths and fonts of course symbols
- HighlightConfig: Highlight colors and handle size
- PrintSettings: Courses, copies and page overlap
- LoggingConfig: Logging settings
- CoursemarkSettings: Main application settings
"""

from coursemark.config.settings import (
    CourseAppearance,
    CoursemarkSettings,
    FontSpec,
    HighlightConfig,
    LoggingConfig,
    PrintSettings,
    get_default_settings,
)

__all__ = [
    "CourseAppearance",
    "CoursemarkSettings",
    "FontSpec",
    "HighlightConfig",
    "LoggingConfig",
    "PrintSettings",
    "get_default_settings",
]
