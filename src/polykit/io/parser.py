"""Point list literals.

Polygons are entered as ``x,y`` pairs separated by semicolons, for example
``"0.0,0.5; -0.5,-0.2; 0.5,-0.2"``. Whitespace around numbers and empty
segments (such as a trailing semicolon) are ignored.
"""

from polykit.domain import Point, Polygon
from polykit.exceptions import PointParseError


def parse_points(text: str) -> list[Point]:
    """Parse a point list literal.

    Args:
        text: Semicolon-separated ``x,y`` pairs

    Returns:
        Points in input order

    Raises:
        PointParseError: If a segment is not a pair of numbers

    Examples:
        >>> parse_points("0,0; 1,0;1,1")
        [Point(x=0.0, y=0.0), Point(x=1.0, y=0.0), Point(x=1.0, y=1.0)]
    """
    points = []
    for segment in text.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        parts = [part.strip() for part in segment.split(",")]
        if len(parts) != 2:
            raise PointParseError(text, f"expected 'x,y' but got '{segment}'")
        try:
            points.append(Point(float(parts[0]), float(parts[1])))
        except ValueError as e:
            raise PointParseError(text, f"non-numeric coordinate in '{segment}'") from e
    return points


def parse_polygon(text: str) -> Polygon:
    """Parse a point list literal into a polygon."""
    return Polygon(tuple(parse_points(text)))


def parse_int_pair(text: str) -> tuple[int, int]:
    """Parse an ``x,y`` pixel coordinate.

    Raises:
        PointParseError: If the text is not two integers
    """
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2:
        raise PointParseError(text, "expected 'x,y'")
    try:
        return (int(parts[0]), int(parts[1]))
    except ValueError as e:
        raise PointParseError(text, "coordinates must be integers") from e


def format_points(points: Polygon | list[Point], precision: int = 6) -> str:
    """Format points as a literal accepted by ``parse_points``.

    Examples:
        >>> format_points([Point(0.0, 0.5), Point(1.0, 2.0)])
        '0,0.5;1,2'
    """
    return ";".join(f"{p.x:.{precision}g},{p.y:.{precision}g}" for p in points)
