"""Geometric predicates shared by the triangulation and clipping engines.

This module provides core mathematical utilities for:
- Signed area calculation (shoelace formula)
- Convexity and point-in-triangle tests with a containment tolerance
- Point-in-polygon testing (ray casting algorithm)
- Concavity detection for clip windows
- Line intersection with a parallel-edge tolerance

All functions are pure and stateless.
"""

from collections.abc import Sequence

from polykit.domain import Point

CONTAINMENT_EPSILON = 1e-9
INTERSECTION_EPSILON = 1e-12


def signed_area(points: Sequence[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    Args:
        points: Points forming the polygon boundary

    Returns:
        Signed area; positive for counter-clockwise winding. Returns 0.0 for
        fewer than three points.

    Examples:
        >>> signed_area([Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)])
        1.0
        >>> signed_area([Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)])
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def cross(o: Point, a: Point, b: Point) -> float:
    """Cross product of (a - o) and (b - o).

    Positive when ``b`` lies to the left of the directed line o -> a.
    """
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def is_convex_vertex(
    a: Point, b: Point, c: Point, epsilon: float = CONTAINMENT_EPSILON
) -> bool:
    """Check whether ``b`` is a convex corner of a counter-clockwise ring.

    The turn (b - a) x (c - b) must exceed ``epsilon``; near-collinear
    corners are not convex.
    """
    return (b - a).cross(c - b) > epsilon


def point_in_triangle(
    p: Point, a: Point, b: Point, c: Point, epsilon: float = CONTAINMENT_EPSILON
) -> bool:
    """Barycentric containment test, inclusive of the boundary.

    Args:
        p: Point to test
        a: First triangle vertex
        b: Second triangle vertex
        c: Third triangle vertex
        epsilon: Tolerance applied to both barycentric bounds, and relative
            tolerance of the degeneracy test

    Returns:
        True if ``p`` lies inside or on the triangle. Degenerate triangles
        contain nothing at any coordinate scale.
    """
    v0 = c - a
    v1 = b - a
    v2 = p - a

    dot00 = v0.dot(v0)
    dot01 = v0.dot(v1)
    dot02 = v0.dot(v2)
    dot11 = v1.dot(v1)
    dot12 = v1.dot(v2)

    denom = dot00 * dot11 - dot01 * dot01
    if abs(denom) <= epsilon * dot00 * dot11:
        return False

    u = (dot11 * dot02 - dot01 * dot12) / denom
    v = (dot00 * dot12 - dot01 * dot02) / denom
    return u >= -epsilon and v >= -epsilon and u + v <= 1.0 + epsilon


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting.

    Casts a horizontal ray to the right and counts edge crossings. Odd
    count means inside (even-odd rule).

    Examples:
        >>> square = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        >>> point_in_polygon(Point(1, 1), square)
        True
        >>> point_in_polygon(Point(3, 3), square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def polygon_is_concave(points: Sequence[Point]) -> bool:
    """Detect concavity from sign changes between consecutive edge turns.

    Collinear corners (zero cross product) are ignored. Triangles and
    smaller inputs are never concave.

    Examples:
        >>> polygon_is_concave([Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)])
        False
    """
    n = len(points)
    if n < 4:
        return False

    sign = 0
    for i in range(n):
        p0 = points[i]
        p1 = points[(i + 1) % n]
        p2 = points[(i + 2) % n]
        turn = (p1 - p0).cross(p2 - p1)
        s = 1 if turn > 0 else (-1 if turn < 0 else 0)
        if s == 0:
            continue
        if sign == 0:
            sign = s
        elif s != sign:
            return True

    return False


def line_intersection(
    p1: Point,
    p2: Point,
    p3: Point,
    p4: Point,
    epsilon: float = INTERSECTION_EPSILON,
) -> Point | None:
    """Intersect the infinite lines through (p1, p2) and (p3, p4).

    Uses the determinant form of the two-line intersection.

    Args:
        p1: First point on line 1
        p2: Second point on line 1
        p3: First point on line 2
        p4: Second point on line 2
        epsilon: Determinant magnitude below which the lines count as parallel

    Returns:
        Intersection point, or None if the lines are parallel
    """
    d_s = p2 - p1
    d_w = p4 - p3
    denom = d_s.x * d_w.y - d_s.y * d_w.x
    if abs(denom) < epsilon:
        return None

    x1, y1 = p1.x, p1.y
    x2, y2 = p2.x, p2.y
    x3, y3 = p3.x, p3.y
    x4, y4 = p4.x, p4.y

    a = x1 * y2 - y1 * x2
    b = x3 * y4 - y3 * x4
    px = (a * (x3 - x4) - (x1 - x2) * b) / denom
    py = (a * (y3 - y4) - (y1 - y2) * b) / denom
    return Point(px, py)
