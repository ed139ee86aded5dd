"""Tests for the command line interface."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from typer.testing import CliRunner

from coursemark import __version__
from coursemark.cli import app

runner = CliRunner()

LAYOUT_ARGS = ["layout", "--map", "0,0,300,100", "--printable", "0,0,500,800"]


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Undo the handlers and structlog setup installed by each invocation."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestVersion:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestGapsCommand:
    """Tests for decoding gap masks."""

    def test_single_gap(self) -> None:
        result = runner.invoke(app, ["gaps", "0xFFFFFFF0"])
        assert result.exit_code == 0
        assert "mask 0xFFFFFFF0" in result.output
        assert "gaps 0-45" in result.output
        assert "arcs 45+315" in result.output

    def test_full_circle(self) -> None:
        result = runner.invoke(app, ["gaps", "4294967295"])
        assert result.exit_code == 0
        assert "full circle" in result.output

    def test_binary_mask(self) -> None:
        result = runner.invoke(app, ["gaps", "0b0"])
        assert result.exit_code == 0
        assert "gaps 0-359.9999" in result.output

    def test_mask_out_of_range(self) -> None:
        result = runner.invoke(app, ["gaps", "0x100000000"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_not_a_number(self) -> None:
        result = runner.invoke(app, ["gaps", "circle"])
        assert result.exit_code == 1
        assert "not an integer" in result.output


class TestLayoutCommand:
    """Tests for laying out a map area on pages."""

    def test_optimized_layout(self) -> None:
        result = runner.invoke(app, LAYOUT_ARGS)
        assert result.exit_code == 0, result.output
        assert "Laid out 2 pages" in result.output
        assert "landscape" in result.output

    def test_forced_portrait(self) -> None:
        result = runner.invoke(app, [*LAYOUT_ARGS, "--portrait"])
        assert result.exit_code == 0, result.output
        assert "Laid out 3 pages" in result.output

    def test_copies(self) -> None:
        result = runner.invoke(app, [*LAYOUT_ARGS, "--copies", "2"])
        assert result.exit_code == 0, result.output
        assert "Laid out 4 pages" in result.output

    def test_quiet_hides_header(self) -> None:
        result = runner.invoke(app, ["-q", *LAYOUT_ARGS])
        assert result.exit_code == 0, result.output
        assert "Coursemark" not in result.output
        assert "Laid out 2 pages" in result.output

    def test_svg_pages(self, tmp_path: Path) -> None:
        svg_dir = tmp_path / "pages"
        result = runner.invoke(app, [*LAYOUT_ARGS, "--svg-dir", str(svg_dir)])
        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in svg_dir.iterdir()) == ["page-1.svg", "page-2.svg"]
        assert "<rect" in (svg_dir / "page-1.svg").read_text(encoding="utf-8")
        assert "Drew 2 pages" in result.output

    def test_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "coursemark.log"
        result = runner.invoke(app, ["--log-file", str(log_file), *LAYOUT_ARGS])
        assert result.exit_code == 0, result.output
        assert "Course laid out" in log_file.read_text(encoding="utf-8")

    @pytest.mark.parametrize("bad_map", ["0,0,300", "0,0,a,100", "0,0,-5,100"])
    def test_bad_map(self, bad_map: str) -> None:
        result = runner.invoke(app, ["layout", "--map", bad_map])
        assert result.exit_code == 1
        assert "Error" in result.output
