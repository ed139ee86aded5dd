"""Exception hierarchy for coursemark."""


class CoursemarkError(Exception):
    """Base exception for all coursemark errors."""

    pass


class GeometryError(CoursemarkError):
    """Errors in geometric data or calculations."""

    pass


class PathError(GeometryError):
    """Malformed path data."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class GapMaskError(GeometryError):
    """Circle gap mask outside the 32-bit range."""

    def __init__(self, mask: int) -> None:
        self.mask = mask
        super().__init__(f"Gap mask {mask!r} is not a 32-bit unsigned value")


class CourseObjectError(CoursemarkError):
    """Errors related to course objects."""

    pass


class InvalidScaleError(CourseObjectError):
    """Scale ratio is not positive."""

    def __init__(self, scale_ratio: float) -> None:
        self.scale_ratio = scale_ratio
        super().__init__(f"Scale ratio must be positive, got {scale_ratio}")


class UnsupportedOperationError(CourseObjectError):
    """Operation is not supported by this kind of course object."""

    def __init__(self, operation: str, type_name: str) -> None:
        self.operation = operation
        self.type_name = type_name
        super().__init__(f"'{operation}' is not supported by {type_name}")


class MapError(CoursemarkError):
    """Errors related to the map and its symbol definitions."""

    pass


class DuplicateSymdefError(MapError):
    """A symbol definition with the same id is already in the map."""

    def __init__(self, ocad_id: int) -> None:
        self.ocad_id = ocad_id
        super().__init__(f"Symbol definition {ocad_id} already exists in map")


class UnknownSymdefError(MapError):
    """Symbol references a definition that is not in the map."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Symbol definition '{name}' has not been added to the map")


class FontError(CoursemarkError):
    """Errors related to font loading or measurement."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontNotFoundError(FontError):
    """No registered font matches the requested family and style."""

    def __init__(self, font_name: str, style: str) -> None:
        self.font_name = font_name
        self.style = style
        super().__init__(f"No font registered for '{font_name}' ({style})")


class GraphicsError(CoursemarkError):
    """Errors raised by drawing targets."""

    pass


class GraphicsStateError(GraphicsError):
    """Transform or clip stack misuse."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class PrintError(CoursemarkError):
    """Errors related to page layout and printing."""

    pass


class TilingError(PrintError):
    """Invalid input to the page tiling algorithm."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Cannot lay out pages: {reason}")


class PageOutOfRangeError(PrintError):
    """Requested page does not exist in the current layout."""

    def __init__(self, page_number: int, page_count: int) -> None:
        self.page_number = page_number
        self.page_count = page_count
        super().__init__(f"Page {page_number} out of range (layout has {page_count} pages)")
