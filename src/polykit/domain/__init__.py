"""Domain models for polykit.

This module contains the value types shared by every algorithm. All
geometric types are immutable where possible (frozen dataclasses) and use
value-based equality so they can key dictionaries.

Key classes:
- Point: A 2D point
- Edge: A directed segment
- Triangle: An ordered triple of points
- Polygon: An ordered ring of points
- PolygonTree: A polygon with nested children
- MeshVertex: A vertex of a render mesh
- Mesh: Vertex and index buffers
"""

from polykit.domain.mesh import Mesh, MeshVertex, RGBAFloat
from polykit.domain.polygon import Edge, Point, Polygon, PolygonTree, Triangle

__all__: list[str] = [
    # Core types
    "Point",
    "Edge",
    "Triangle",
    "Polygon",
    "PolygonTree",
    # Mesh types
    "Mesh",
    "MeshVertex",
    "RGBAFloat",
]
