"""Raster fill algorithms operating on RGBA8 pixel buffers.

Seed fills flood a 4-connected region of ``target`` colored pixels
starting from a seed pixel:
- seed_fill_recursive: Direct recursion, for small regions only
- seed_fill_stack: Explicit LIFO stack of pixels
- scanline_seed_fill: Fills whole runs and seeds one pixel per run above
  and below

fill_polygon_aet scan-converts a polygon with an active edge table under
the even-odd or nonzero winding rule.

Every function mutates the caller's buffer in place through
``get_pixel``/``set_pixel`` and returns the number of pixels written.
"""

import math
from dataclasses import dataclass

import structlog

from polykit.config import FillRule, FillStrategy
from polykit.core.pixels import RGBA, check_buffer, get_pixel, in_bounds, set_pixel
from polykit.domain import Polygon
from polykit.exceptions import MissingPolygonError, UnsupportedFillRuleError

logger = structlog.get_logger(__name__)


def seed_fill_recursive(
    buffer: bytearray,
    width: int,
    height: int,
    x: int,
    y: int,
    target: RGBA,
    fill_color: RGBA,
) -> int:
    """Recursive 4-connected flood fill.

    Recursion depth grows with the filled area; prefer ``seed_fill_stack``
    for anything but small regions.
    """
    if not in_bounds(x, y, width, height):
        return 0
    current = get_pixel(buffer, width, height, x, y)
    if current != target or current == fill_color:
        return 0

    set_pixel(buffer, width, height, x, y, fill_color)
    return (
        1
        + seed_fill_recursive(buffer, width, height, x + 1, y, target, fill_color)
        + seed_fill_recursive(buffer, width, height, x - 1, y, target, fill_color)
        + seed_fill_recursive(buffer, width, height, x, y + 1, target, fill_color)
        + seed_fill_recursive(buffer, width, height, x, y - 1, target, fill_color)
    )


def seed_fill_stack(
    buffer: bytearray,
    width: int,
    height: int,
    x: int,
    y: int,
    target: RGBA,
    fill_color: RGBA,
) -> int:
    """4-connected flood fill with an explicit stack.

    All four neighbors are pushed for every filled pixel; bounds are checked
    when a pixel is popped.
    """
    if target == fill_color:
        return 0

    written = 0
    stack = [(x, y)]
    while stack:
        px, py = stack.pop()
        if not in_bounds(px, py, width, height):
            continue
        if get_pixel(buffer, width, height, px, py) != target:
            continue

        set_pixel(buffer, width, height, px, py, fill_color)
        written += 1
        stack.append((px + 1, py))
        stack.append((px - 1, py))
        stack.append((px, py + 1))
        stack.append((px, py - 1))

    return written


def scanline_seed_fill(
    buffer: bytearray,
    width: int,
    height: int,
    x: int,
    y: int,
    target: RGBA,
    fill_color: RGBA,
) -> int:
    """Scanline flood fill.

    Each popped seed is widened to the maximal run of ``target`` pixels on
    its row, the run is filled, and the rows above and below are scanned
    across the run's extent. One seed is pushed per contiguous sub-run found
    there.
    """
    if target == fill_color:
        return 0

    written = 0
    stack = [(x, y)]
    while stack:
        sx, sy = stack.pop()
        if not in_bounds(sx, sy, width, height):
            continue
        if get_pixel(buffer, width, height, sx, sy) != target:
            continue

        left = sx
        while left - 1 >= 0 and get_pixel(buffer, width, height, left - 1, sy) == target:
            left -= 1
        right = sx
        while right + 1 < width and get_pixel(buffer, width, height, right + 1, sy) == target:
            right += 1

        for fx in range(left, right + 1):
            set_pixel(buffer, width, height, fx, sy, fill_color)
        written += right - left + 1

        for row in (sy - 1, sy + 1):
            if 0 <= row < height:
                _push_runs(buffer, width, height, row, left, right, target, stack)

    return written


def _push_runs(
    buffer: bytearray,
    width: int,
    height: int,
    row: int,
    left: int,
    right: int,
    target: RGBA,
    stack: list[tuple[int, int]],
) -> None:
    """Push one seed per maximal run of ``target`` pixels in [left, right]."""
    x = left
    while x <= right:
        if get_pixel(buffer, width, height, x, row) == target:
            stack.append((x, row))
            while x <= right and get_pixel(buffer, width, height, x, row) == target:
                x += 1
        x += 1


@dataclass
class ActiveEdge:
    """A polygon edge in the active edge table.

    Attributes:
        y_min: First scanline the edge covers
        y_max: Scanline at which the edge leaves the table
        x_of_y_min: X coordinate at ``y_min``
        inv_slope: dx/dy, relative to the lower-y endpoint
        direction: +1 if the source edge runs towards increasing y, else -1
        current_x: X coordinate on the scanline being processed
    """

    y_min: int
    y_max: int
    x_of_y_min: float
    inv_slope: float
    direction: int
    current_x: float = 0.0

    def update(self, y: int) -> None:
        self.current_x = self.x_of_y_min + self.inv_slope * (y - self.y_min)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def build_edge_table(polygon: Polygon) -> list[ActiveEdge]:
    """Build one edge per non-horizontal polygon side, vertices rounded to pixels."""
    points = [(_round_half_away(p.x), _round_half_away(p.y)) for p in polygon]
    edges = []
    n = len(points)
    for i in range(n):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % n]
        if y1 == y2:
            continue
        direction = 1
        if y2 < y1:
            x1, y1, x2, y2 = x2, y2, x1, y1
            direction = -1
        edges.append(
            ActiveEdge(
                y_min=y1,
                y_max=y2,
                x_of_y_min=float(x1),
                inv_slope=(x2 - x1) / (y2 - y1),
                direction=direction,
            )
        )
    return edges


def fill_polygon_aet(
    polygon: Polygon,
    buffer: bytearray,
    width: int,
    height: int,
    fill_color: RGBA,
    rule: FillRule = FillRule.EVEN_ODD,
) -> int:
    """Scan-convert ``polygon`` into ``buffer``.

    For each scanline between the polygon's clamped vertical extent, edges
    entering at that row join the active table, edges ending there leave
    it, and spans between sorted crossings are filled. Spans cover
    [x_left, x_right) in pixel columns.

    Args:
        polygon: Polygon in pixel coordinates
        buffer: RGBA8 buffer to draw into
        width: Buffer width
        height: Buffer height
        fill_color: Color to write
        rule: EVEN_ODD pairs crossings 1-2, 3-4, ...; WINDING fills where the
            signed crossing count is nonzero

    Returns:
        Number of pixel writes

    Raises:
        UnsupportedFillRuleError: For FillRule.BOTH; the buffer is untouched
    """
    rule = FillRule(rule)
    if rule is FillRule.BOTH:
        raise UnsupportedFillRuleError(rule.value)
    check_buffer(buffer, width, height)
    if len(polygon) < 3:
        return 0

    ys = [_round_half_away(p.y) for p in polygon]
    min_y = max(min(ys), 0)
    max_y = min(max(ys), height - 1)

    pending = sorted(build_edge_table(polygon), key=lambda e: e.y_min)
    active: list[ActiveEdge] = []
    written = 0

    for y in range(min_y, max_y + 1):
        while pending and pending[0].y_min <= y:
            active.append(pending.pop(0))
        active = [e for e in active if e.y_max > y]

        for edge in active:
            edge.update(y)
        active.sort(key=lambda e: e.current_x)

        if rule is FillRule.EVEN_ODD:
            for i in range(0, len(active) - 1, 2):
                left, right = active[i].current_x, active[i + 1].current_x
                written += _fill_span(buffer, width, height, y, left, right, fill_color)
        else:
            winding = 0
            for i in range(len(active) - 1):
                winding += active[i].direction
                if winding != 0:
                    left, right = active[i].current_x, active[i + 1].current_x
                    written += _fill_span(buffer, width, height, y, left, right, fill_color)

    logger.debug("Polygon scan-converted", rule=rule.value, pixels=written)
    return written


def _fill_span(
    buffer: bytearray,
    width: int,
    height: int,
    y: int,
    x_a: float,
    x_b: float,
    color: RGBA,
) -> int:
    start = _round_half_away(min(x_a, x_b))
    end = _round_half_away(max(x_a, x_b))
    written = 0
    for x in range(max(start, 0), min(end, width)):
        set_pixel(buffer, width, height, x, y, color)
        written += 1
    return written


_SEED_FILLS = {
    FillStrategy.RECURSIVE: seed_fill_recursive,
    FillStrategy.STACK: seed_fill_stack,
    FillStrategy.SCANLINE: scanline_seed_fill,
}


def fill(
    buffer: bytearray,
    width: int,
    height: int,
    seed_x: int,
    seed_y: int,
    target_color: RGBA | None,
    fill_color: RGBA,
    strategy: FillStrategy = FillStrategy.STACK,
    polygon: Polygon | None = None,
    rule: FillRule = FillRule.EVEN_ODD,
) -> int:
    """Fill ``buffer`` in place with the selected strategy.

    Args:
        buffer: RGBA8 buffer, exclusively owned for the duration of the call
        width: Buffer width
        height: Buffer height
        seed_x: Seed column for seed fills
        seed_y: Seed row for seed fills
        target_color: Color of the region to flood; None reads it from the
            seed pixel
        fill_color: Color to write
        strategy: Fill strategy
        polygon: Polygon for the ACTIVE_EDGE_TABLE strategy
        rule: Fill rule for the ACTIVE_EDGE_TABLE strategy

    Returns:
        Number of pixel writes

    Raises:
        MissingPolygonError: ACTIVE_EDGE_TABLE requested without a polygon
        BufferSizeError: Buffer length does not match width and height
    """
    strategy = FillStrategy(strategy)
    if strategy is FillStrategy.ACTIVE_EDGE_TABLE:
        if polygon is None:
            raise MissingPolygonError(strategy.value)
        return fill_polygon_aet(polygon, buffer, width, height, fill_color, rule)

    check_buffer(buffer, width, height)
    if not in_bounds(seed_x, seed_y, width, height):
        return 0
    if target_color is None:
        target_color = get_pixel(buffer, width, height, seed_x, seed_y)

    written = _SEED_FILLS[strategy](
        buffer, width, height, seed_x, seed_y, target_color, fill_color
    )
    logger.debug(
        "Seed fill completed",
        strategy=strategy.value,
        seed=(seed_x, seed_y),
        pixels=written,
    )
    return written
