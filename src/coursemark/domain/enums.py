"""Enumerations shared by course objects and their collaborators."""

from enum import Enum, IntFlag, auto


class CourseObjectKind(Enum):
    """Concrete variant of a course object.

    Used as the default symbol-definition key, so every variant gets its
    own definition per color.
    """

    CONTROL = auto()
    START = auto()
    FINISH = auto()
    CROSSING = auto()
    FIRST_AID = auto()
    WATER = auto()
    REGISTRATION_MARK = auto()
    FORBIDDEN = auto()
    LEG = auto()
    FLAGGED_LEG = auto()
    BOUNDARY = auto()
    OUT_OF_BOUNDS = auto()
    DANGEROUS = auto()
    CONTROL_NUMBER = auto()
    CODE = auto()
    BASIC_TEXT = auto()
    DESCRIPTION = auto()


class HandleCursor(str, Enum):
    """Cursor hint shown while hovering over a drag handle."""

    MOVE = "move"
    SIZE_NESW = "size_nesw"
    SIZE_NS = "size_ns"
    SIZE_NWSE = "size_nwse"
    SIZE_WE = "size_we"


class FontStyle(IntFlag):
    """Font style flags."""

    REGULAR = 0
    BOLD = 1
    ITALIC = 2

    @property
    def label(self) -> str:
        """Human readable style, e.g. "Bold, Italic"."""
        if self == FontStyle.REGULAR:
            return "Regular"
        names = []
        if self & FontStyle.BOLD:
            names.append("Bold")
        if self & FontStyle.ITALIC:
            names.append("Italic")
        return ", ".join(names)


class LineStyle(Enum):
    """Join and cap style of a stroked line."""

    MITERED = auto()
    ROUNDED = auto()
    BEVELED = auto()
