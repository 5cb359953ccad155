"""Ear clipping triangulation for simple polygons and polygons with holes.

Holes are fused into their outer boundary with zero-area bridges, producing
a pseudo-simple polygon that the simple-polygon ear clipper can consume.
Based on Eberly, "Triangulation by Ear Clipping".

Key components:
- TriangulationResult: Triangles plus a completeness flag
- EarClipTriangulator: Simple, with-holes and polygon-tree triangulation
- create_triangulator: Algorithm dispatch on TriangulationConfig
- triangulate_simple / triangulate_with_holes: Default-configured shortcuts
"""

from collections import deque
from dataclasses import dataclass, field

import structlog

from polykit.config import ToleranceConfig, TriangulationAlgorithm, TriangulationConfig
from polykit.core.geometry import is_convex_vertex, point_in_triangle
from polykit.domain import Point, Polygon, PolygonTree, Triangle

logger = structlog.get_logger(__name__)


@dataclass
class TriangulationResult:
    """Outcome of an ear clipping run.

    Attributes:
        triangles: Triangles emitted so far, in emission order
        complete: False if the run stopped early (no ear found or iteration
            cap reached); ``triangles`` is then a partial result
        remaining: Vertices left unclipped when the run stopped
    """

    triangles: list[Triangle] = field(default_factory=list)
    complete: bool = True
    remaining: int = 0

    def total_area(self) -> float:
        return sum(t.area() for t in self.triangles)


class EarClipTriangulator:
    """Triangulates polygons by repeatedly clipping the first available ear.

    Ear selection is first-fit: the ear scan runs over the working index
    list from the start and takes the first convex vertex whose triangle
    holds no other remaining vertex. After each removal the scan restarts.

    Example:
        triangulator = EarClipTriangulator()
        triangles = triangulator.triangulate_simple(polygon)
    """

    def __init__(
        self,
        config: TriangulationConfig | None = None,
        tolerance: ToleranceConfig | None = None,
    ) -> None:
        """Initialize the triangulator.

        Args:
            config: Triangulation settings (iteration cap)
            tolerance: Numeric tolerances for convexity/containment tests
        """
        self.config = config or TriangulationConfig()
        self.tolerance = tolerance or ToleranceConfig()

    @property
    def epsilon(self) -> float:
        return self.tolerance.containment_epsilon

    def triangulate_simple(self, polygon: Polygon) -> list[Triangle]:
        """Triangulate a simple polygon.

        Args:
            polygon: Polygon in either orientation

        Returns:
            Triangles covering the polygon; empty for fewer than 3 vertices.
            Partial if the clipper could not finish (see ``clip_ears``).
        """
        return self.clip_ears(polygon).triangles

    def clip_ears(self, polygon: Polygon) -> TriangulationResult:
        """Run ear clipping and report whether it completed.

        Args:
            polygon: Polygon in either orientation

        Returns:
            TriangulationResult with the emitted triangles
        """
        vertices = list(polygon.vertices)
        if len(vertices) < 3:
            return TriangulationResult()

        if not polygon.is_counter_clockwise():
            vertices.reverse()

        eps = self.epsilon
        indices = list(range(len(vertices)))
        result = TriangulationResult()
        removals = 0

        while len(indices) > 3:
            nv = len(indices)
            ear_found = False

            for i in range(nv):
                a = vertices[indices[(i - 1) % nv]]
                b = vertices[indices[i]]
                c = vertices[indices[(i + 1) % nv]]

                if not is_convex_vertex(a, b, c, eps):
                    continue
                if self._blocks_ear(vertices, indices, a, b, c):
                    continue

                result.triangles.append(Triangle(a, b, c))
                indices.pop(i)
                ear_found = True
                break

            if not ear_found:
                logger.warning("Ear clipping found no ear", remaining=len(indices))
                result.complete = False
                result.remaining = len(indices)
                return result

            removals += 1
            if removals > self.config.max_iterations and len(indices) > 3:
                logger.warning(
                    "Ear clipping iteration cap reached",
                    max_iterations=self.config.max_iterations,
                    remaining=len(indices),
                )
                result.complete = False
                result.remaining = len(indices)
                return result

        a, b, c = (vertices[i] for i in indices)
        result.triangles.append(Triangle(a, b, c))
        return result

    def _blocks_ear(
        self,
        vertices: list[Point],
        indices: list[int],
        a: Point,
        b: Point,
        c: Point,
    ) -> bool:
        # Compared by value so that the duplicated bridge endpoints of a
        # pseudo-simple polygon never block their own ear.
        for idx in indices:
            p = vertices[idx]
            if p == a or p == b or p == c:
                continue
            if point_in_triangle(p, a, b, c, self.epsilon):
                return True
        return False

    def triangulate_with_holes(self, tree: PolygonTree) -> list[Triangle]:
        """Triangulate a polygon tree.

        Args:
            tree: Root of the polygon tree

        Returns:
            Triangles for every filled region of the tree
        """
        return self.triangulate_tree(tree).triangles

    def triangulate_tree(self, tree: PolygonTree) -> TriangulationResult:
        """Triangulate a polygon tree and report whether every region completed.

        Nodes are processed breadth-first. A node's direct children are its
        holes; grandchildren are filled islands inside those holes and are
        queued as independent outer boundaries.

        Args:
            tree: Root of the polygon tree

        Returns:
            TriangulationResult over all regions; ``remaining`` sums the
            vertices left by regions that stopped early
        """
        result = TriangulationResult()
        queue: deque[PolygonTree] = deque([tree])

        while queue:
            node = queue.popleft()

            if not node.children:
                region = node.polygon
            else:
                holes = []
                for hole in node.children:
                    holes.append(hole.polygon)
                    queue.extend(hole.children)
                region = self.combine_to_pseudo_simple(node.polygon, holes)

            partial = self.clip_ears(region)
            result.triangles.extend(partial.triangles)
            if not partial.complete:
                result.complete = False
                result.remaining += partial.remaining

        return result

    def combine_to_pseudo_simple(self, outer: Polygon, holes: list[Polygon]) -> Polygon:
        """Fuse holes into the outer boundary with zero-area bridges.

        Holes are merged right to left by their rightmost vertex so that
        bridges never cross each other. Each hole is bridged from its
        rightmost vertex M to a vertex P of the current ring visible along
        the +x ray, giving the sequence ``P, M, hole..., M, P``.

        Args:
            outer: Outer boundary in either orientation
            holes: Hole boundaries in either orientation

        Returns:
            Single counter-clockwise ring. Holes with no visible bridge
            vertex are logged and dropped.
        """
        ring = list(outer.counter_clockwise().vertices)
        pending = [h for h in holes if h.is_valid()]

        while pending:
            hole_index = max(
                range(len(pending)), key=lambda k: max(p.x for p in pending[k])
            )
            hole = pending.pop(hole_index)

            hole_ring = list(hole.vertices)
            if not hole.is_clockwise():
                hole_ring.reverse()

            m_index = max(range(len(hole_ring)), key=lambda k: hole_ring[k].x)
            m = hole_ring[m_index]

            visible = self.find_visible_vertex(m, ring)
            if visible is None:
                logger.warning(
                    "No visible vertex for hole",
                    hole_vertices=len(hole_ring),
                    bridge_from=m.to_tuple(),
                )
                continue

            p = ring[visible]
            bridge = hole_ring[m_index:] + hole_ring[:m_index] + [m, p]
            ring = ring[: visible + 1] + bridge + ring[visible + 1 :]

        return Polygon(tuple(ring))

    def find_visible_vertex(self, m: Point, ring: list[Point]) -> int | None:
        """Find a ring vertex visible from ``m`` along the +x direction.

        Among ring edges that have ``m`` strictly on their interior side and
        straddle its y coordinate, the edge hit first by the ray from ``m``
        wins; its endpoint with the larger x is returned.

        Args:
            m: Ray origin (rightmost vertex of a hole)
            ring: Counter-clockwise outer ring

        Returns:
            Index of the visible vertex in ``ring``, or None
        """
        eps = self.epsilon
        best_t = float("inf")
        visible: int | None = None

        n = len(ring)
        for i in range(n):
            a = ring[i]
            b = ring[(i + 1) % n]

            if (b - a).cross(m - b) <= eps:
                continue
            if (a.y > m.y and b.y > m.y) or (a.y < m.y and b.y < m.y):
                continue

            t = self._ray_edge_parameter(m, a, b)
            if t is None or t >= best_t:
                continue

            best_t = t
            visible = i if a.x > b.x else (i + 1) % n

        return visible

    def _ray_edge_parameter(self, origin: Point, a: Point, b: Point) -> float | None:
        """Parameter along the +x ray where it meets segment a-b, if it does."""
        eps = self.epsilon
        ray = Point(1.0, 0.0)
        edge = b - a
        delta = a - origin

        denom = ray.cross(edge)
        if abs(denom) < eps:
            return None

        t = delta.cross(edge) / denom
        u = delta.cross(ray) / denom
        if t >= -eps and -eps <= u <= 1.0 + eps:
            return t
        return None


_TRIANGULATORS: dict[TriangulationAlgorithm, type[EarClipTriangulator]] = {
    TriangulationAlgorithm.EAR_CLIPPING: EarClipTriangulator,
}


def create_triangulator(
    config: TriangulationConfig | None = None,
    tolerance: ToleranceConfig | None = None,
) -> EarClipTriangulator:
    """Create the triangulator selected by ``config.algorithm``."""
    config = config or TriangulationConfig()
    triangulator_class = _TRIANGULATORS[TriangulationAlgorithm(config.algorithm)]
    return triangulator_class(config=config, tolerance=tolerance)


def triangulate_simple(polygon: Polygon) -> list[Triangle]:
    """Triangulate a simple polygon with default settings."""
    return create_triangulator().triangulate_simple(polygon)


def triangulate_with_holes(tree: PolygonTree) -> list[Triangle]:
    """Triangulate a polygon tree with default settings."""
    return create_triangulator().triangulate_with_holes(tree)
