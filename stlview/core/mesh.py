"""Triangle mesh data model produced by the STL decoder."""

import math
from dataclasses import dataclass, field
from typing import Iterator, NamedTuple

import numpy as np
import trimesh


class Point3(NamedTuple):
    """A point or direction with single-precision coordinates."""

    x: float
    y: float
    z: float

    @classmethod
    def origin(cls) -> "Point3":
        return cls(0.0, 0.0, 0.0)

    def norm(self) -> float:
        """Euclidean length measured from the origin."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def distance(self, other: "Point3") -> float:
        return math.dist(self, other)


@dataclass(frozen=True)
class Triangle:
    """One facet: three vertices in winding order and the stored face normal.

    The normal is kept exactly as the file supplied it, including the zero
    vector. Nothing is recomputed or renormalised.
    """

    vertices: tuple[Point3, Point3, Point3]
    normal: Point3

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertices", tuple(self.vertices))
        if len(self.vertices) != 3:
            raise ValueError(
                f"Triangle needs exactly 3 vertices, got {len(self.vertices)}"
            )


@dataclass(frozen=True)
class Mesh:
    """A named, ordered collection of triangles in file order."""

    name: str
    triangles: tuple[Triangle, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Callers may pass any sequence; the stored one must not be mutable
        object.__setattr__(self, "triangles", tuple(self.triangles))

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)

    def iter_vertices(self) -> Iterator[Point3]:
        """Yield every vertex of every triangle in file order."""
        for triangle in self.triangles:
            yield from triangle.vertices

    def to_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """Return vertices as (n, 3, 3) and normals as (n, 3) float32 arrays."""
        if not self.triangles:
            return (
                np.zeros((0, 3, 3), dtype=np.float32),
                np.zeros((0, 3), dtype=np.float32),
            )
        vertices = np.array(
            [triangle.vertices for triangle in self.triangles], dtype=np.float32
        )
        normals = np.array(
            [triangle.normal for triangle in self.triangles], dtype=np.float32
        )
        return vertices, normals

    def to_trimesh(self) -> trimesh.Trimesh:
        """Build an unprocessed trimesh with three independent vertices per face.

        Vertices are not merged so face indices map one to one onto
        ``self.triangles``.
        """
        vertices, _ = self.to_arrays()
        faces = np.arange(len(vertices) * 3, dtype=np.int64).reshape((-1, 3))
        return trimesh.Trimesh(
            vertices=vertices.reshape((-1, 3)),
            faces=faces,
            process=False,
        )
