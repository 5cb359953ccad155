"""Triangle mesh types handed to the rendering layer."""

from dataclasses import dataclass, field
from typing import Any

from polykit.domain.polygon import Point

RGBAFloat = tuple[float, float, float, float]


@dataclass(frozen=True, slots=True)
class MeshVertex:
    """A single mesh vertex.

    Attributes:
        position: Vertex position
        uv: Texture coordinate (zero for untextured polygons)
        color: RGBA color with components in [0, 1]
    """

    position: Point
    uv: Point = Point(0.0, 0.0)
    color: RGBAFloat = (1.0, 1.0, 1.0, 1.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": self.position.to_dict(),
            "uv": self.uv.to_dict(),
            "color": list(self.color),
        }


@dataclass
class Mesh:
    """Vertex and index buffers describing a triangle list.

    Every consecutive triple in ``indices`` is one triangle.
    """

    vertices: list[MeshVertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def is_empty(self) -> bool:
        return not self.indices

    def extend(self, other: "Mesh") -> None:
        """Append another mesh, rebasing its indices."""
        offset = len(self.vertices)
        self.vertices.extend(other.vertices)
        self.indices.extend(i + offset for i in other.indices)

    def to_dict(self) -> dict[str, Any]:
        return {
            "vertices": [v.to_dict() for v in self.vertices],
            "indices": list(self.indices),
        }
