"""CLI application entry point for polykit.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated

import typer

from polykit import __version__
from polykit.cli.output import (
    console,
    print_clip_summary,
    print_error,
    print_fill_summary,
    print_header,
    print_points,
    print_preview,
    print_step,
    print_triangles,
)
from polykit.config import (
    ClippingAlgorithm,
    ClippingConfig,
    FillConfig,
    FillRule,
    FillStrategy,
    LoggingConfig,
    PolykitSettings,
)
from polykit.core import PolygonClipper, create_triangulator, fill, fill_polygon_aet
from polykit.core.clipping import clip_pieces_area
from polykit.core.pixels import RED, WHITE, create_buffer, parse_hex_color
from polykit.domain import Polygon, PolygonTree
from polykit.exceptions import PolykitError
from polykit.io import parse_int_pair, parse_polygon
from polykit.utils import OperationLogger, configure_logging

# Color of the scan-converted region that seed fills flood
REGION_COLOR = (200, 200, 200, 255)

# Create the Typer app
app = typer.Typer(
    name="polykit",
    help="Triangulate, clip and fill 2D polygons.",
    add_completion=False,
    no_args_is_help=True,
)


class CliState:
    """Options shared by every command."""

    def __init__(self, settings: PolykitSettings, quiet: bool) -> None:
        self.settings = settings
        self.quiet = quiet
        self.operations = OperationLogger(
            configure_logging(
                log_file=settings.logging.log_file,
                console_level=settings.logging.log_level,
                file_level=settings.logging.file_log_level,
                quiet=quiet,
            )
        )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Polykit[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
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
    """Triangulate, clip and fill 2D polygons.

    Polygons are given as point lists: "x,y;x,y;x,y".
    """
    settings = PolykitSettings(
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    ctx.obj = CliState(settings, quiet)
    if not quiet:
        print_header(__version__)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


@app.command()
def triangulate(
    ctx: typer.Context,
    points: Annotated[
        str,
        typer.Argument(help="Outer polygon, e.g. '0,0;4,0;4,4;0,4'", show_default=False),
    ],
    holes: Annotated[
        list[str] | None,
        typer.Option("--hole", "-H", help="Hole polygon (repeatable)"),
    ] = None,
) -> None:
    """Triangulate a polygon, optionally with holes, by ear clipping."""
    state = _state(ctx)
    try:
        outer = parse_polygon(points)
        hole_polygons = [parse_polygon(h) for h in holes or []]

        triangulator = create_triangulator(
            config=state.settings.triangulation,
            tolerance=state.settings.tolerance,
        )
        start = time.perf_counter()
        if hole_polygons:
            tree = PolygonTree(outer, [PolygonTree(h) for h in hole_polygons])
            result = triangulator.triangulate_tree(tree)
        else:
            result = triangulator.clip_ears(outer)
        triangles = result.triangles
        complete = result.complete
        duration_ms = (time.perf_counter() - start) * 1000

        state.operations.log_triangulation(len(outer), len(triangles), complete, duration_ms)
        if not state.quiet:
            print_step(f"Triangulated {len(outer)} vertices, {len(hole_polygons)} holes")
        print_triangles(triangles, complete)
    except PolykitError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command()
def clip(
    ctx: typer.Context,
    subject: Annotated[
        str,
        typer.Argument(help="Subject polygon", show_default=False),
    ],
    window: Annotated[
        str,
        typer.Argument(help="Clip window polygon", show_default=False),
    ],
    algorithm: Annotated[
        ClippingAlgorithm,
        typer.Option("--algorithm", "-a", help="Clipping algorithm"),
    ] = ClippingAlgorithm.SUTHERLAND_HODGMAN,
) -> None:
    """Clip a subject polygon against a convex or concave window."""
    state = _state(ctx)
    try:
        subject_polygon = parse_polygon(subject)
        window_polygon = parse_polygon(window)

        clipper = PolygonClipper(
            config=ClippingConfig(algorithm=algorithm),
            tolerance=state.settings.tolerance,
        )
        start = time.perf_counter()
        concave = clipper.is_concave(window_polygon)
        pieces = clipper.clip_concave_pieces(subject_polygon, window_polygon)
        result = Polygon(tuple(p for piece in pieces for p in piece))
        duration_ms = (time.perf_counter() - start) * 1000

        state.operations.log_clip(algorithm.value, concave, len(result), duration_ms)
        if not state.quiet:
            print_step("Clipped polygon")
        print_points(list(result))
        print_clip_summary(algorithm.value, concave, len(result), clip_pieces_area(pieces))
    except PolykitError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command("fill")
def fill_command(
    ctx: typer.Context,
    polygon: Annotated[
        str,
        typer.Argument(help="Polygon in pixel coordinates", show_default=False),
    ],
    width: Annotated[int, typer.Option("--width", min=1, help="Canvas width")] = 32,
    height: Annotated[int, typer.Option("--height", min=1, help="Canvas height")] = 32,
    strategy: Annotated[
        FillStrategy,
        typer.Option("--strategy", "-s", help="Fill strategy"),
    ] = FillStrategy.STACK,
    rule: Annotated[
        FillRule,
        typer.Option("--rule", "-r", help="Fill rule (active-edge-table only)"),
    ] = FillRule.EVEN_ODD,
    seed: Annotated[
        str | None,
        typer.Option("--seed", help="Seed pixel 'x,y' (default: bounding box center)"),
    ] = None,
    color: Annotated[
        str | None,
        typer.Option("--color", "-c", help="Fill color as #RRGGBB[AA] (default: red)"),
    ] = None,
    preview: Annotated[
        bool,
        typer.Option("--preview", help="Print an ASCII preview of the canvas"),
    ] = False,
) -> None:
    """Fill a polygon on a blank canvas.

    Seed strategies first scan-convert the polygon as a gray region and
    then flood it from the seed pixel; the active edge table strategy
    fills the polygon directly.
    """
    state = _state(ctx)
    config = FillConfig(strategy=strategy, rule=rule)
    try:
        shape = parse_polygon(polygon)
        fill_color = parse_hex_color(color) if color else RED

        canvas = create_buffer(width, height, WHITE)
        start = time.perf_counter()
        if config.strategy is FillStrategy.ACTIVE_EDGE_TABLE:
            written = fill(
                canvas,
                width,
                height,
                0,
                0,
                None,
                fill_color,
                strategy=config.strategy,
                polygon=shape,
                rule=config.rule,
            )
        else:
            fill_polygon_aet(shape, canvas, width, height, REGION_COLOR)
            seed_x, seed_y = parse_int_pair(seed) if seed else _default_seed(shape)
            written = fill(
                canvas,
                width,
                height,
                seed_x,
                seed_y,
                REGION_COLOR,
                fill_color,
                strategy=config.strategy,
            )
        duration_ms = (time.perf_counter() - start) * 1000

        state.operations.log_fill(config.strategy.value, written, duration_ms)
        print_fill_summary(config.strategy.value, written, width, height)
        if preview:
            print_preview(canvas, width, height, fill_color)
    except PolykitError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _default_seed(shape: Polygon) -> tuple[int, int]:
    min_x, min_y, max_x, max_y = shape.bounding_box()
    return (int((min_x + max_x) / 2), int((min_y + max_y) / 2))


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
