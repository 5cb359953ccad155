"""Polygon clipping against convex and concave windows.

Both algorithms refine the subject polygon one window edge at a time,
starting from the full subject and feeding each edge's output into the
next edge. An empty intermediate result ends the clip early.

- Sutherland-Hodgman: inside/outside classification with line intersection
- Cyrus-Beck: parametric clipping of each subject edge against the clip
  edge's half-plane

Windows are assumed counter-clockwise (inside lies left of every edge);
``PolygonClipper`` reverses clockwise windows unless configured otherwise.
Concave windows are decomposed into triangles and the subject is clipped
against each of them. The pieces are concatenated, not unioned.
"""

from collections.abc import Callable, Sequence

import structlog

from polykit.config import ClippingAlgorithm, ClippingConfig, ToleranceConfig
from polykit.core.geometry import (
    INTERSECTION_EPSILON,
    line_intersection,
    polygon_is_concave,
)
from polykit.core.triangulation import EarClipTriangulator
from polykit.domain import Edge, Point, Polygon

logger = structlog.get_logger(__name__)

ClipFunction = Callable[[Polygon, Polygon, float], Polygon]


def _is_inside(p: Point, a: Point, b: Point) -> bool:
    """Left-of-or-on test against the directed clip edge a -> b."""
    return (b - a).cross(p - a) >= 0


def _window_edges(window: Polygon) -> list[tuple[Point, Point]]:
    n = len(window)
    return [(window[i], window[(i + 1) % n]) for i in range(n)]


def sutherland_hodgman_clip(
    subject: Polygon, window: Polygon, epsilon: float = INTERSECTION_EPSILON
) -> Polygon:
    """Clip ``subject`` against a convex counter-clockwise ``window``.

    Args:
        subject: Polygon to clip
        window: Convex clip window, counter-clockwise
        epsilon: Determinant magnitude below which edges count as parallel

    Returns:
        Clipped polygon; empty if either input has fewer than 3 vertices or
        the subject lies entirely outside the window
    """
    if len(subject) < 3 or len(window) < 3:
        return Polygon()

    output = list(subject.vertices)
    for a, b in _window_edges(window):
        output = _sutherland_hodgman_edge(output, a, b, epsilon)
        if not output:
            break

    return Polygon(tuple(output))


def _sutherland_hodgman_edge(
    points: list[Point], a: Point, b: Point, epsilon: float
) -> list[Point]:
    result: list[Point] = []
    n = len(points)

    for i in range(n):
        current = points[i]
        nxt = points[(i + 1) % n]
        current_inside = _is_inside(current, a, b)
        next_inside = _is_inside(nxt, a, b)

        if current_inside and next_inside:
            result.append(nxt)
        elif current_inside:
            crossing = line_intersection(current, nxt, a, b, epsilon)
            if crossing is not None:
                result.append(crossing)
        elif next_inside:
            crossing = line_intersection(current, nxt, a, b, epsilon)
            if crossing is not None:
                result.append(crossing)
            result.append(nxt)

    return result


def cyrus_beck_clip(
    subject: Polygon, window: Polygon, epsilon: float = INTERSECTION_EPSILON
) -> Polygon:
    """Clip ``subject`` against a convex counter-clockwise ``window``.

    Each subject edge is clipped parametrically against the half-plane of
    the current window edge; the surviving segment endpoints feed the same
    in/out transition table as Sutherland-Hodgman.

    Args:
        subject: Polygon to clip
        window: Convex clip window, counter-clockwise
        epsilon: Denominator magnitude below which edges count as parallel

    Returns:
        Clipped polygon; empty if either input has fewer than 3 vertices or
        the subject lies entirely outside the window
    """
    if len(subject) < 3 or len(window) < 3:
        return Polygon()

    output = list(subject.vertices)
    for a, b in _window_edges(window):
        output = _cyrus_beck_edge(output, a, b, epsilon)
        if not output:
            break

    return Polygon(tuple(output))


def _cyrus_beck_edge(
    points: list[Point], a: Point, b: Point, epsilon: float
) -> list[Point]:
    result: list[Point] = []
    n = len(points)

    for i in range(n):
        p1 = points[i]
        p2 = points[(i + 1) % n]

        segment = _clip_to_half_plane(p1, p2, a, b, epsilon)
        if segment is None:
            continue

        start, end = segment
        p1_inside = _is_inside(p1, a, b)
        p2_inside = _is_inside(p2, a, b)

        if p1_inside and p2_inside:
            result.append(end)
        elif p1_inside:
            result.append(end)
        elif p2_inside:
            result.append(start)
            result.append(end)

    return result


def _clip_to_half_plane(
    p1: Point, p2: Point, a: Point, b: Point, epsilon: float
) -> tuple[Point, Point] | None:
    """Clip segment p1 -> p2 to the inside half-plane of edge a -> b.

    Returns:
        The surviving (start, end) pair, or None if nothing survives
    """
    d = p2 - p1
    if abs(d.x) < epsilon and abs(d.y) < epsilon:
        return (p1, p1) if _is_inside(p1, a, b) else None

    edge = b - a
    normal = Point(-edge.y, edge.x)
    denom = d.dot(normal)
    numer = (p1 - a).dot(normal)

    if abs(denom) < epsilon:
        return (p1, p2) if numer >= 0 else None

    t = -numer / denom
    t_enter = 0.0
    t_exit = 1.0
    if denom > 0:
        t_enter = max(t_enter, t)
    else:
        t_exit = min(t_exit, t)

    if t_enter > t_exit:
        return None

    return (p1 + d.scaled(t_enter), p1 + d.scaled(t_exit))


def clip_segment(
    start: Point,
    end: Point,
    window: Polygon,
    epsilon: float = INTERSECTION_EPSILON,
) -> Edge | None:
    """Clip one segment against a convex counter-clockwise window.

    Classic single-pass Cyrus-Beck: the entering parameter is the maximum
    over all potentially-entering edges and the leaving parameter the
    minimum over all potentially-leaving edges.

    Args:
        start: Segment start
        end: Segment end
        window: Convex clip window, counter-clockwise
        epsilon: Denominator magnitude below which edges count as parallel

    Returns:
        Clipped edge, or None if the segment misses the window
    """
    if len(window) < 3:
        return None

    d = end - start
    t_enter = 0.0
    t_exit = 1.0

    for a, b in _window_edges(window):
        edge = b - a
        normal = Point(-edge.y, edge.x)
        denom = d.dot(normal)
        numer = (start - a).dot(normal)

        if abs(denom) < epsilon:
            if numer < 0:
                return None
            continue

        t = -numer / denom
        if denom > 0:
            t_enter = max(t_enter, t)
        else:
            t_exit = min(t_exit, t)

        if t_enter > t_exit:
            return None

    return Edge(start + d.scaled(t_enter), start + d.scaled(t_exit))


_CLIP_FUNCTIONS: dict[ClippingAlgorithm, ClipFunction] = {
    ClippingAlgorithm.CYRUS_BECK: cyrus_beck_clip,
    ClippingAlgorithm.SUTHERLAND_HODGMAN: sutherland_hodgman_clip,
}


class PolygonClipper:
    """Clips polygons against convex or concave windows.

    Example:
        clipper = PolygonClipper(ClippingConfig(algorithm=ClippingAlgorithm.CYRUS_BECK))
        result = clipper.clip(subject, window)
    """

    def __init__(
        self,
        config: ClippingConfig | None = None,
        tolerance: ToleranceConfig | None = None,
        triangulator: EarClipTriangulator | None = None,
    ) -> None:
        """Initialize the clipper.

        Args:
            config: Algorithm selection and window normalization
            tolerance: Numeric tolerances
            triangulator: Triangulator for concave window decomposition
        """
        self.config = config or ClippingConfig()
        self.tolerance = tolerance or ToleranceConfig()
        self.triangulator = triangulator or EarClipTriangulator(tolerance=self.tolerance)

    def _resolve(self, algorithm: ClippingAlgorithm | None) -> ClipFunction:
        return _CLIP_FUNCTIONS[ClippingAlgorithm(algorithm or self.config.algorithm)]

    def _prepare_window(self, window: Polygon) -> Polygon:
        if self.config.normalize_window:
            return window.counter_clockwise()
        return window

    def clip(
        self,
        subject: Polygon,
        window: Polygon,
        algorithm: ClippingAlgorithm | None = None,
    ) -> Polygon:
        """Clip against any window, choosing the concave path when needed."""
        if self.is_concave(window):
            return self.clip_concave(subject, window, algorithm)
        return self.clip_convex(subject, window, algorithm)

    def is_concave(self, window: Polygon) -> bool:
        return polygon_is_concave(window.vertices)

    def clip_convex(
        self,
        subject: Polygon,
        window: Polygon,
        algorithm: ClippingAlgorithm | None = None,
    ) -> Polygon:
        """Clip ``subject`` against a convex window.

        Args:
            subject: Polygon to clip
            window: Convex clip window
            algorithm: Overrides the configured algorithm

        Returns:
            Clipped polygon, possibly empty
        """
        clip_fn = self._resolve(algorithm)
        return clip_fn(
            subject, self._prepare_window(window), self.tolerance.intersection_epsilon
        )

    def clip_concave_pieces(
        self,
        subject: Polygon,
        window: Polygon,
        algorithm: ClippingAlgorithm | None = None,
    ) -> list[Polygon]:
        """Clip ``subject`` against each piece of the window.

        Concave windows are split into triangles; convex windows form a
        single piece. Pieces with fewer than 3 points are discarded.

        Returns:
            Non-degenerate clipped pieces
        """
        if len(subject) < 3 or len(window) < 3:
            return []

        if not self.is_concave(window):
            clipped = self.clip_convex(subject, window, algorithm)
            return [clipped] if len(clipped) >= 3 else []

        clip_fn = self._resolve(algorithm)
        triangles = self.triangulator.triangulate_simple(window)
        logger.debug(
            "Decomposed concave window",
            window_vertices=len(window),
            triangles=len(triangles),
        )

        pieces = []
        for triangle in triangles:
            piece_window = self._prepare_window(triangle.to_polygon())
            partial = clip_fn(subject, piece_window, self.tolerance.intersection_epsilon)
            if len(partial) >= 3:
                pieces.append(partial)
        return pieces

    def clip_concave(
        self,
        subject: Polygon,
        window: Polygon,
        algorithm: ClippingAlgorithm | None = None,
    ) -> Polygon:
        """Clip ``subject`` against a possibly concave window.

        The result concatenates the clipped pieces into one point list. This
        approximates the true intersection: pieces are not unioned, so the
        ring may revisit shared boundaries.

        Returns:
            Concatenated clipped pieces, possibly empty
        """
        pieces = self.clip_concave_pieces(subject, window, algorithm)
        return Polygon(tuple(p for piece in pieces for p in piece))


def clip_convex(
    subject: Polygon,
    window: Polygon,
    algorithm: ClippingAlgorithm = ClippingAlgorithm.SUTHERLAND_HODGMAN,
) -> Polygon:
    """Clip against a convex window with default settings."""
    return PolygonClipper().clip_convex(subject, window, algorithm)


def clip_concave(
    subject: Polygon,
    window: Polygon,
    algorithm: ClippingAlgorithm = ClippingAlgorithm.SUTHERLAND_HODGMAN,
) -> Polygon:
    """Clip against a possibly concave window with default settings."""
    return PolygonClipper().clip_concave(subject, window, algorithm)


def clip_pieces_area(pieces: Sequence[Polygon]) -> float:
    """Sum of piece areas, the exact intersection area for disjoint pieces."""
    return sum(piece.area() for piece in pieces)
