"""Command-line interface for polykit.

This module provides the CLI using Typer with rich output.

Commands:
- triangulate: Ear clipping triangulation, with optional holes
- clip: Sutherland-Hodgman or Cyrus-Beck clipping
- fill: Seed fills and active edge table filling on a blank canvas
"""

from polykit.cli.app import cli, main

__all__ = ["cli", "main"]
