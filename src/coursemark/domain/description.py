"""Description sheet content.

A description sheet is a grid, 8 cells wide, with one row per line. Title
lines span the whole row; other lines hold one entry per column.
"""

from dataclasses import dataclass
from enum import Enum, auto

# Columns of a full description row.
DESCRIPTION_COLUMNS = 8


class DescriptionKind(Enum):
    """How description cells are rendered."""

    SYMBOLS = auto()
    TEXT = auto()


@dataclass(frozen=True, slots=True)
class DescriptionLine:
    """One row of a description sheet.

    Attributes:
        cells: Cell contents, left to right; missing trailing cells are blank
        is_title: Row is a single text spanning all columns
    """

    cells: tuple[str, ...]
    is_title: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", tuple(self.cells))
        if len(self.cells) > DESCRIPTION_COLUMNS:
            raise ValueError(f"Description line has {len(self.cells)} cells, at most {DESCRIPTION_COLUMNS} allowed")

    @classmethod
    def title(cls, text: str) -> "DescriptionLine":
        return cls((text,), is_title=True)

    def cell(self, column: int) -> str:
        """Content of a column, blank when the line is shorter."""
        if column < len(self.cells):
            return self.cells[column]
        return ""
