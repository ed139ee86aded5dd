"""Coursemark - Orienteering course symbols and multi-page print layout.

Coursemark models the objects drawn on an orienteering course (controls,
legs, boundaries, text and description sheets), emits them into a map as
symbols, highlights them for interactive editing, and splits a course's
map area across as many printed pages as needed.

Example:
    $ coursemark layout --map 0,0,400,300 --scale 1

This prints the pages needed to print a 400 x 300 mm map area at full scale.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
