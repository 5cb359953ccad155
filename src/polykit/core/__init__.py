"""Core algorithms for polykit.

This module contains the geometry and raster algorithms:

- Geometry predicates (signed area, convexity, containment, intersection)
- Ear clipping triangulation, including polygons with holes
- Polygon clipping (Sutherland-Hodgman, Cyrus-Beck, concave windows)
- Raster filling (seed fills, active edge table)
- Render mesh assembly

All services are synchronous and keep no state between calls; independent
calls on different polygons or buffers can run in parallel.

Key classes:
- EarClipTriangulator: Simple and with-holes triangulation
- PolygonClipper: Convex and concave window clipping
- MeshBuilder: Vertex/index buffers from polygons
"""

from polykit.core.clipping import (
    PolygonClipper,
    clip_concave,
    clip_convex,
    clip_segment,
    cyrus_beck_clip,
    sutherland_hodgman_clip,
)
from polykit.core.fill import (
    fill,
    fill_polygon_aet,
    scanline_seed_fill,
    seed_fill_recursive,
    seed_fill_stack,
)
from polykit.core.geometry import (
    line_intersection,
    point_in_polygon,
    point_in_triangle,
    polygon_is_concave,
    signed_area,
)
from polykit.core.mesh import MeshBuilder, build_mesh
from polykit.core.triangulation import (
    EarClipTriangulator,
    TriangulationResult,
    create_triangulator,
    triangulate_simple,
    triangulate_with_holes,
)

__all__ = [
    # Triangulation
    "EarClipTriangulator",
    # Mesh
    "MeshBuilder",
    # Clipping
    "PolygonClipper",
    "TriangulationResult",
    "build_mesh",
    "clip_concave",
    "clip_convex",
    "clip_segment",
    "create_triangulator",
    "cyrus_beck_clip",
    # Fill
    "fill",
    "fill_polygon_aet",
    # Geometry functions
    "line_intersection",
    "point_in_polygon",
    "point_in_triangle",
    "polygon_is_concave",
    "scanline_seed_fill",
    "seed_fill_recursive",
    "seed_fill_stack",
    "signed_area",
    "sutherland_hodgman_clip",
    "triangulate_simple",
    "triangulate_with_holes",
]
