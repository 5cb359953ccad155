"""Text input and output for polykit.

This module provides parsing and formatting of the ``x,y;x,y`` point list
literals used to enter polygons.
"""

from polykit.io.parser import format_points, parse_int_pair, parse_points, parse_polygon

__all__ = ["format_points", "parse_int_pair", "parse_points", "parse_polygon"]
