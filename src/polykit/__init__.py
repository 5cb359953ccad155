"""Polykit - 2D polygon triangulation, clipping and raster filling.

Polykit provides the geometry core of a small drawing application:

- Ear clipping triangulation, including polygons with holes
- Polygon clipping against convex and concave windows (Cyrus-Beck,
  Sutherland-Hodgman)
- Raster filling of RGBA8 pixel buffers (seed fills and an active edge table)

Example:
    $ polykit triangulate "0,0;4,0;4,4;0,4"
"""

__version__ = "0.1.0"
__author__ = "Michaël Attal"

__all__ = ["__author__", "__version__"]
