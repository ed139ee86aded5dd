"""CLI application entry point for coursemark.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from coursemark import __version__
from coursemark.cli.output import (
    console,
    print_drawn,
    print_error,
    print_gaps,
    print_header,
    print_layout_summary,
    print_pages,
    print_saved,
    print_step,
)
from coursemark.config import LoggingConfig, PrintSettings
from coursemark.core import CoursePrinter, PageSettings, compute_circle_gaps, drawn_arcs
from coursemark.exceptions import CoursemarkError, GapMaskError
from coursemark.geometry import Rect
from coursemark.graphics import Brush, GraphicsTarget, Pen, SvgTarget
from coursemark.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="coursemark",
    help="Lay out orienteering courses on printed pages and inspect course symbols.",
    add_completion=False,
    no_args_is_help=True,
)

# Letter paper with quarter-inch margins, in 1/100 inch.
DEFAULT_PRINTABLE_AREA = "25,25,800,1050"

# The layout command prints a single course.
COURSE_ID = 1

_FRAME_PEN = Pen(Brush("#000000"), 0)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Coursemark[/bold blue] v{__version__}")
        raise typer.Exit()


def parse_rect(value: str) -> Rect:
    """Parse "x,y,width,height" into a Rect."""
    parts = value.split(",")
    if len(parts) != 4:
        raise typer.BadParameter(f"expected x,y,width,height, got {value!r}")
    try:
        x, y, width, height = (float(p) for p in parts)
    except ValueError:
        raise typer.BadParameter(f"not a number in {value!r}") from None
    if width <= 0 or height <= 0:
        raise typer.BadParameter("width and height must be positive")
    return Rect(x, y, width, height)


def parse_mask(value: str) -> int:
    """Parse a gap mask given in decimal, 0x hex or 0b binary."""
    try:
        return int(value, 0)
    except ValueError:
        raise typer.BadParameter(f"not an integer: {value!r}") from None


@app.callback()
def main(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Lay out orienteering courses on printed pages and inspect course symbols."""
    ctx.obj = {"quiet": quiet}
    config = LoggingConfig(log_file=log_file, log_level=log_level)
    configure_logging(
        log_file=config.log_file,
        console_level=config.log_level,
        file_level=config.file_log_level,
        quiet=quiet,
    )


@app.command()
def layout(
    ctx: typer.Context,
    map_area: Annotated[
        str,
        typer.Option(
            "--map",
            "-m",
            help="Map area to print in mm, as x,y,width,height",
            show_default=False,
        ),
    ],
    scale: Annotated[
        float,
        typer.Option(
            "--scale",
            "-s",
            help="Print scale relative to the map scale",
            min=0.01,
        ),
    ] = 1.0,
    printable: Annotated[
        str,
        typer.Option(
            "--printable",
            "-p",
            help="Portrait printable area in 1/100 inch, as x,y,width,height",
        ),
    ] = DEFAULT_PRINTABLE_AREA,
    copies: Annotated[
        int,
        typer.Option(
            "--copies",
            "-n",
            help="Copies of the course",
            min=1,
        ),
    ] = 1,
    landscape: Annotated[
        bool | None,
        typer.Option(
            "--landscape/--portrait",
            help="Force an orientation (default: fewest pages)",
            show_default=False,
        ),
    ] = None,
    svg_dir: Annotated[
        Path | None,
        typer.Option(
            "--svg-dir",
            help="Write one SVG per page showing the printed map frame",
        ),
    ] = None,
    dpi: Annotated[
        float,
        typer.Option(
            "--dpi",
            help="Printer resolution used when drawing pages",
            min=1.0,
        ),
    ] = 600.0,
) -> None:
    """Split a map area across as many pages as needed.

    Pages overlap evenly when the area does not fit on one page. Without
    --landscape or --portrait the orientation with fewer pages is used.

    Example:
        coursemark layout --map 0,0,400,300 --scale 1
    """
    try:
        map_rect = parse_rect(map_area)
        printable_rect = parse_rect(printable)
    except typer.BadParameter as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    if not quiet:
        print_header(__version__)

    printer = CoursePrinter(
        lambda _course_id: (map_rect, scale),
        _draw_map_frame,
        PrintSettings(course_ids=[COURSE_ID], copies=copies),
    )
    try:
        printer.layout_pages(PageSettings(printable_rect, bool(landscape)), optimize=landscape is None)

        if not quiet:
            print_step("Pages")
            print_pages(printer.pages)
        print_layout_summary(printer.page_count, bool(printer.pages) and printer.pages[0].landscape)

        if svg_dir is not None:
            written = _write_svg_pages(printer, svg_dir, dpi)
            if not quiet:
                print_step("Writing SVG")
                print_saved(written)
                print_drawn(printer.print_logger.stats)

    except CoursemarkError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None


@app.command()
def gaps(
    mask: Annotated[
        str,
        typer.Argument(
            help="32-bit gap mask: decimal, 0x hex or 0b binary; set bits are drawn",
            show_default=False,
        ),
    ],
) -> None:
    """Decode a control circle gap mask into gap angles and drawn arcs."""
    try:
        value = parse_mask(mask)
        decoded = compute_circle_gaps(value)
    except typer.BadParameter as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None
    except GapMaskError as e:
        print_error(str(e), details="Masks are unsigned 32-bit values (0 to 0xFFFFFFFF).")
        raise typer.Exit(code=1) from None

    print_gaps(value, decoded, drawn_arcs(decoded) if decoded is not None else [])


def _draw_map_frame(target: GraphicsTarget, _course_id: int, map_rect: Rect, _min_resolution: float) -> None:
    target.draw_rectangle(_FRAME_PEN, map_rect)


def _write_svg_pages(printer: CoursePrinter, svg_dir: Path, dpi: float) -> list[str]:
    """Draw every page into its own SVG file and return the paths written."""
    svg_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for number, page in enumerate(printer.pages):
        area = page.print_rectangle
        target = SvgTarget(area.right, area.bottom)
        printer.draw_page(target, number, dpi)
        path = svg_dir / f"page-{number + 1}.svg"
        target.save(path)
        written.append(str(path))
    return written


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
