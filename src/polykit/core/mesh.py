"""Render mesh assembly from user polygons.

Polygons are optionally clipped against a window, ear-clipped, and packed
into one vertex/index buffer pair for the rendering layer.
"""

from collections.abc import Iterable

import structlog

from polykit.config import ClippingAlgorithm
from polykit.core.clipping import PolygonClipper
from polykit.core.triangulation import EarClipTriangulator
from polykit.domain import Mesh, MeshVertex, Point, Polygon, RGBAFloat, Triangle

logger = structlog.get_logger(__name__)


class MeshBuilder:
    """Builds triangle meshes from polygons.

    In the default non-indexed mode every triangle gets three fresh
    vertices. In indexed mode vertices shared between triangles of the same
    polygon are emitted once, keyed by their first occurrence in the
    triangulated point list.

    Example:
        builder = MeshBuilder()
        mesh = builder.build([square], color=(0.0, 1.0, 0.0, 1.0))
    """

    def __init__(
        self,
        triangulator: EarClipTriangulator | None = None,
        clipper: PolygonClipper | None = None,
        indexed: bool = False,
    ) -> None:
        self.triangulator = triangulator or EarClipTriangulator()
        self.clipper = clipper or PolygonClipper(triangulator=self.triangulator)
        self.indexed = indexed

    def build(
        self,
        polygons: Iterable[Polygon],
        color: RGBAFloat = (1.0, 1.0, 1.0, 1.0),
        clip_window: Polygon | None = None,
        clip_algorithm: ClippingAlgorithm | None = None,
        existing_vertex_count: int = 0,
    ) -> Mesh:
        """Build one mesh for all polygons.

        Args:
            polygons: Polygons to triangulate; entries with fewer than 3
                vertices are skipped
            color: Vertex color for every vertex
            clip_window: Optional window; each polygon is clipped against it
                before triangulation. Against a concave window every clipped
                piece is triangulated on its own.
            clip_algorithm: Clipping algorithm, defaults to the clipper's
            existing_vertex_count: Index of the first emitted vertex, for
                appending to an existing vertex buffer

        Returns:
            Mesh with indices starting at ``existing_vertex_count``
        """
        mesh = Mesh()
        for polygon in polygons:
            if len(polygon) < 3:
                continue

            pieces = [polygon]
            if clip_window is not None:
                pieces = self.clipper.clip_concave_pieces(polygon, clip_window, clip_algorithm)

            for piece in pieces:
                triangles = self.triangulator.triangulate_simple(piece)
                mesh.extend(self._pack(triangles, color))

        if existing_vertex_count:
            mesh.indices = [i + existing_vertex_count for i in mesh.indices]

        logger.debug(
            "Mesh built",
            vertices=len(mesh.vertices),
            triangles=mesh.triangle_count,
            indexed=self.indexed,
        )
        return mesh

    def _pack(self, triangles: list[Triangle], color: RGBAFloat) -> Mesh:
        mesh = Mesh()
        if not self.indexed:
            for triangle in triangles:
                base = len(mesh.vertices)
                for point in triangle.points():
                    mesh.vertices.append(MeshVertex(position=point, color=color))
                mesh.indices.extend((base, base + 1, base + 2))
            return mesh

        corners = Polygon(tuple(p for t in triangles for p in t.points()))
        slots: dict[Point, int] = {}
        for point, _ in sorted(corners.first_indices.items(), key=lambda item: item[1]):
            slots[point] = len(mesh.vertices)
            mesh.vertices.append(MeshVertex(position=point, color=color))
        for point in corners:
            mesh.indices.append(slots[point])
        return mesh


def build_mesh(
    polygons: Iterable[Polygon],
    color: RGBAFloat = (1.0, 1.0, 1.0, 1.0),
    clip_window: Polygon | None = None,
    clip_algorithm: ClippingAlgorithm | None = None,
) -> Mesh:
    """Build a non-indexed mesh with default settings."""
    return MeshBuilder().build(polygons, color, clip_window, clip_algorithm)
