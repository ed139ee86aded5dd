"""Font I/O layer for coursemark.

This module reads font files using fonttools and measures text for
text course objects.

Key classes:
- FontReader: Load a font and read its horizontal metrics
- FontRegistry: Fonts keyed by family and style
- FontMetricsMeasurer: TextMeasurer backed by a FontRegistry
"""

from coursemark.io.fonts import FontMetricsMeasurer, FontReader, FontRegistry, TextMeasurer

__all__ = [
    "FontMetricsMeasurer",
    "FontReader",
    "FontRegistry",
    "TextMeasurer",
]
