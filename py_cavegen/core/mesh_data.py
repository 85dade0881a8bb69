"""Mesh buffer types shared by the floor, outline and wall stages."""

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np


class Triangle(NamedTuple):
    """Three mesh vertex indices in winding order."""
    a: int
    b: int
    c: int

    def contains(self, vertex_index: int) -> bool:
        return vertex_index == self.a or vertex_index == self.b or vertex_index == self.c


@dataclass
class MeshData:
    """Vertex, index and UV buffers for one mesh.

    Attributes:
        vertices: ``(N, 3)`` float positions (x, y up, z)
        triangles: Flat int32 index buffer, three entries per triangle
        uvs: ``(N, 2)`` texture coordinates
    """
    vertices: np.ndarray
    triangles: np.ndarray
    uvs: np.ndarray

    @classmethod
    def empty(cls) -> "MeshData":
        return cls(
            vertices=np.zeros((0, 3), dtype=np.float64),
            triangles=np.zeros(0, dtype=np.int32),
            uvs=np.zeros((0, 2), dtype=np.float64),
        )

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.triangles.shape[0]) // 3

    def faces(self) -> np.ndarray:
        """Index buffer reshaped to ``(M, 3)``."""
        return self.triangles.reshape(-1, 3)
