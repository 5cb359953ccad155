"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from polykit.core.pixels import RGBA, get_pixel
from polykit.domain import Point, Triangle

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

MAX_PREVIEW_WIDTH = 120


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Polykit[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def _fmt(value: float) -> str:
    return f"{value:.6g}"


def print_triangles(triangles: list[Triangle], complete: bool) -> None:
    """Print triangles as a table followed by a summary line.

    Args:
        triangles: Triangles to print
        complete: Whether the triangulation finished
    """
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("a")
    table.add_column("b")
    table.add_column("c")
    table.add_column("area", justify="right")

    for i, tri in enumerate(triangles):
        table.add_row(
            str(i),
            *(f"({_fmt(p.x)}, {_fmt(p.y)})" for p in tri.points()),
            _fmt(tri.area()),
        )
    console.print(table)

    total = sum(t.area() for t in triangles)
    console.print(f"  {len(triangles)} triangles {SYM_DOT} area {_fmt(total)}")
    if not complete:
        console.print("  [yellow]Triangulation incomplete (partial result)[/yellow]")


def print_points(points: list[Point]) -> None:
    """Print a point list, one point per line."""
    if not points:
        console.print("  [yellow]Empty result[/yellow] (subject clipped away)")
        return
    for p in points:
        console.print(f"  ({_fmt(p.x)}, {_fmt(p.y)})")


def print_clip_summary(algorithm: str, concave: bool, vertex_count: int, area: float) -> None:
    """Print clip result summary.

    Args:
        algorithm: Clipping algorithm name
        concave: Whether the window was decomposed into triangles
        vertex_count: Number of points in the result
        area: Area covered by the clipped pieces
    """
    path = "concave window (triangulated)" if concave else "convex window"
    console.print(
        f"  {algorithm} {SYM_DOT} {path} {SYM_DOT} {vertex_count} points "
        f"{SYM_DOT} area {_fmt(area)}"
    )


def print_fill_summary(strategy: str, pixels: int, width: int, height: int) -> None:
    """Print fill result summary."""
    console.print(
        f"\n[bold green]{SYM_OK} Filled[/bold green] {pixels:,} pixels "
        f"{SYM_DOT} {width}x{height} canvas {SYM_DOT} {strategy}"
    )


def print_preview(buffer: bytearray, width: int, height: int, fill_color: RGBA) -> None:
    """Print an ASCII preview of the buffer.

    Filled pixels show as ``#``; everything else as ``.``.
    """
    if width > MAX_PREVIEW_WIDTH:
        console.print(f"  Preview skipped (canvas wider than {MAX_PREVIEW_WIDTH} pixels)")
        return
    for y in range(height):
        row = "".join(
            "#" if get_pixel(buffer, width, height, x, y) == fill_color else "."
            for x in range(width)
        )
        console.print(Text(row))


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
