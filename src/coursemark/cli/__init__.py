"""Command-line interface for coursemark.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Page layout preview for a map area, with optional SVG output
- Circle gap mask decoding
- Quiet mode and file logging
"""

from coursemark.cli.app import app, cli

__all__ = ["app", "cli"]
