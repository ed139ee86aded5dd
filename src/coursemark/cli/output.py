"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from coursemark.core.tiling import CoursePage
from coursemark.geometry import Rect
from coursemark.utils.logging import PrintStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Coursemark[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def _format_rect(rect: Rect) -> str:
    return f"{rect.x:.2f}, {rect.y:.2f}  {rect.width:.2f} x {rect.height:.2f}"


def print_pages(pages: Sequence[CoursePage]) -> None:
    """Print a table of laid out pages.

    Args:
        pages: Pages in print order
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("Course", justify="right")
    table.add_column("Map rectangle (mm)")
    table.add_column("Print rectangle (1/100 in)")
    table.add_column("Orientation")

    for number, page in enumerate(pages, start=1):
        table.add_row(
            str(number),
            str(page.course_id),
            _format_rect(page.map_rectangle),
            _format_rect(page.print_rectangle),
            "landscape" if page.landscape else "portrait",
        )
    console.print(table)


def print_layout_summary(page_count: int, landscape: bool) -> None:
    """Print the outcome of a page layout."""
    orientation = "landscape" if landscape else "portrait"
    plural = "page" if page_count == 1 else "pages"
    console.print(f"\n[bold green]{SYM_OK} Laid out[/bold green] {page_count} {plural} {SYM_DOT} {orientation}")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_drawn(stats: PrintStats) -> None:
    """Print how many pages were drawn and how long it took."""
    plural = "page" if stats.pages_drawn == 1 else "pages"
    console.print(
        f"\n[bold green]{SYM_OK} Drew[/bold green] {stats.pages_drawn} {plural} "
        f"in {_format_time(stats.duration_seconds)}"
    )


def print_gaps(mask: int, gaps: Sequence[float] | None, arcs: Sequence[tuple[float, float]]) -> None:
    """Print decoded circle gaps.

    Args:
        mask: Gap mask as given
        gaps: Flat (start, end) gap angles, or None for a full circle
        arcs: Drawn arcs as (start, sweep)
    """
    console.print(f"  mask 0x{mask:08X}")
    if gaps is None:
        console.print(f"  [green]no gaps[/green] {SYM_DOT} full circle")
        return

    line = Text("  gaps ")
    line.append(", ".join(f"{gaps[i]:.10g}-{gaps[i + 1]:.10g}" for i in range(0, len(gaps), 2)))
    console.print(line)
    if arcs:
        console.print("  arcs " + ", ".join(f"{start:.10g}+{sweep:.10g}" for start, sweep in arcs))
    else:
        console.print(f"  arcs {SYM_DOT} none")


def print_saved(paths: Sequence[str]) -> None:
    """Print the files written."""
    for path in paths:
        line = Text("  ")
        line.append(path, style="bold")
        console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
