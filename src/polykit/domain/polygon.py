"""Core geometric value types.

This module defines the fundamental geometric types used throughout polykit:
- Point: A 2D point with value-based equality and hashing
- Edge: A directed segment between two points
- Triangle: An ordered triple of points
- Polygon: An ordered ring of points with a first-occurrence index
- PolygonTree: A polygon with nested child polygons (holes, islands)
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from polykit.exceptions import InvalidPolygonError


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable so it can key dictionaries during vertex
    deduplication. Equality is exact on both coordinates.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def scaled(self, factor: float) -> "Point":
        """Multiply both coordinates by ``factor``."""
        return Point(self.x * factor, self.y * factor)

    def cross(self, other: "Point") -> float:
        """Z component of the cross product of two vectors."""
        return self.x * other.y - self.y * other.x

    def dot(self, other: "Point") -> float:
        """Dot product of two vectors."""
        return self.x * other.x + self.y * other.y

    def quantized(self, ndigits: int = 9) -> "Point":
        """Round both coordinates, for tolerant deduplication.

        Args:
            ndigits: Number of decimal digits to keep

        Returns:
            New point with rounded coordinates
        """
        return Point(round(self.x, ndigits), round(self.y, ndigits))

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed segment from ``start`` to ``end``.

    Direction matters: the inside of a counter-clockwise clip window lies to
    the left of each of its edges.
    """

    start: Point
    end: Point

    @property
    def direction(self) -> Point:
        """Vector from start to end."""
        return self.end - self.start

    def length_squared(self) -> float:
        d = self.direction
        return d.dot(d)


@dataclass(frozen=True, slots=True)
class Triangle:
    """An ordered triple of points.

    Winding follows the order in which the triangulator emitted the vertices.
    """

    a: Point
    b: Point
    c: Point

    def signed_area(self) -> float:
        """Signed area, positive for counter-clockwise winding."""
        return (self.b - self.a).cross(self.c - self.a) / 2.0

    def area(self) -> float:
        return abs(self.signed_area())

    def points(self) -> tuple[Point, Point, Point]:
        return (self.a, self.b, self.c)

    def to_polygon(self) -> "Polygon":
        """Convert to a three-vertex polygon."""
        return Polygon(self.points())


@dataclass(frozen=True)
class Polygon:
    """An ordered ring of points.

    The vertex order is the boundary traversal order; the closing edge from
    the last vertex back to the first is implicit. Orientation is significant
    and algorithms may reverse it internally.

    Attributes:
        vertices: Points of the ring in traversal order
    """

    vertices: tuple[Point, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.vertices, tuple):
            object.__setattr__(self, "vertices", tuple(self.vertices))

    @classmethod
    def from_tuples(cls, coords: Iterable[Sequence[float]]) -> "Polygon":
        """Build a polygon from (x, y) pairs.

        Args:
            coords: Iterable of coordinate pairs

        Returns:
            Polygon instance

        Raises:
            InvalidPolygonError: If any entry is not a pair of numbers
        """
        points = []
        for entry in coords:
            if len(entry) != 2:
                raise InvalidPolygonError(f"expected (x, y) pair, got {entry!r}")
            try:
                points.append(Point(float(entry[0]), float(entry[1])))
            except (TypeError, ValueError) as e:
                raise InvalidPolygonError(f"non-numeric coordinate in {entry!r}") from e
        return cls(tuple(points))

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.vertices)

    def __getitem__(self, index: int) -> Point:
        return self.vertices[index]

    @cached_property
    def first_indices(self) -> dict[Point, int]:
        """Map each distinct point to the index of its first occurrence."""
        indices: dict[Point, int] = {}
        for i, point in enumerate(self.vertices):
            indices.setdefault(point, i)
        return indices

    def is_empty(self) -> bool:
        return not self.vertices

    def is_valid(self) -> bool:
        """Check whether the polygon has enough vertices to enclose area."""
        return len(self.vertices) >= 3

    def edges(self) -> list[Edge]:
        """Edges of the ring, including the closing edge."""
        n = len(self.vertices)
        if n < 2:
            return []
        return [Edge(self.vertices[i], self.vertices[(i + 1) % n]) for i in range(n)]

    def signed_area(self) -> float:
        """Calculate signed area using the shoelace formula.

        Returns:
            Positive area for counter-clockwise rings, negative for clockwise,
            0.0 for fewer than three vertices
        """
        n = len(self.vertices)
        if n < 3:
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.vertices[i].x * self.vertices[j].y
            area -= self.vertices[j].x * self.vertices[i].y
        return area / 2.0

    def area(self) -> float:
        return abs(self.signed_area())

    def is_counter_clockwise(self) -> bool:
        return self.signed_area() > 0

    def is_clockwise(self) -> bool:
        return self.signed_area() < 0

    def reversed(self) -> "Polygon":
        """Return the same ring traversed in the opposite direction."""
        return Polygon(tuple(reversed(self.vertices)))

    def counter_clockwise(self) -> "Polygon":
        """Return this polygon oriented counter-clockwise."""
        return self if self.is_counter_clockwise() else self.reversed()

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.vertices:
            return (0.0, 0.0, 0.0, 0.0)
        xs = [p.x for p in self.vertices]
        ys = [p.y for p in self.vertices]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_tuples(self) -> list[tuple[float, float]]:
        return [p.to_tuple() for p in self.vertices]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"vertices": [p.to_dict() for p in self.vertices]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        """Deserialize from dictionary."""
        return cls(tuple(Point.from_dict(p) for p in data["vertices"]))


@dataclass
class PolygonTree:
    """A polygon with nested children.

    Children of a node are holes in it; children of a hole are filled
    islands inside that hole, and so on.

    Attributes:
        polygon: The boundary of this node
        children: Polygons directly nested inside this one
    """

    polygon: Polygon
    children: list["PolygonTree"] = field(default_factory=list)

    def depth(self) -> int:
        """Number of nesting levels, 1 for a node without children."""
        if not self.children:
            return 1
        return 1 + max(child.depth() for child in self.children)

    def iter_polygons(self) -> Iterator[Polygon]:
        """Yield every polygon in the tree, parents before children."""
        yield self.polygon
        for child in self.children:
            yield from child.iter_polygons()
