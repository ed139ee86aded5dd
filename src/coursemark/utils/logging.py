"""Logging utilities for coursemark."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class PrintStats:
    """Statistics from a print run."""

    courses_laid_out: int = 0
    pages_laid_out: int = 0
    pages_drawn: int = 0
    orientations: Counter[str] = field(default_factory=Counter)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate print duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("coursemark")
    logger.info("Logging initialized", log_file=str(log_file) if log_file else None, level=file_level)

    return logger


class PrintLogger:
    """Logger for tracking page layout and drawing progress."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = PrintStats()

    def log_course_layout(self, course_id: int, page_count: int, landscape: bool) -> None:
        """Log the pages chosen for one course."""
        orientation = "landscape" if landscape else "portrait"
        self._logger.info(
            "Course laid out",
            course=course_id,
            pages=page_count,
            orientation=orientation,
        )
        self._stats.courses_laid_out += 1
        self._stats.pages_laid_out += page_count
        self._stats.orientations[orientation] += page_count

    def log_page_drawn(self, page_number: int, course_id: int, dpi: float, duration_ms: float) -> None:
        """Log a page handed to the page renderer."""
        self._logger.debug(
            "Page drawn",
            page=page_number,
            course=course_id,
            dpi=dpi,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.pages_drawn += 1

    @property
    def stats(self) -> PrintStats:
        """Get current print statistics."""
        return self._stats
