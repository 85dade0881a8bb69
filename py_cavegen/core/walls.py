"""
Wall extrusion.

Every consecutive pair of outline vertices becomes one vertical quad. Quads
do not share vertices, so each wall face gets its own texture coordinates.
"""

from typing import List, Sequence

import numpy as np
import structlog

from .mesh_data import MeshData

logger = structlog.get_logger()

# Quad corners are (top_a, top_b, bottom_a, bottom_b); the winding faces
# into the cave.
WALL_QUAD_TRIANGLES = (3, 2, 0, 0, 1, 3)


def build_wall_mesh(
    floor_vertices: np.ndarray,
    outlines: Sequence[List[int]],
    wall_height: float = 2.0,
    uv_vertical_scale: float = 0.5,
) -> MeshData:
    """
    Extrude outlines into a wall mesh.

    Args:
        floor_vertices: ``(N, 3)`` floor vertex positions
        outlines: Closed outlines of floor vertex indices
        wall_height: Height of the walls above the floor
        uv_vertical_scale: Multiplier applied to vertex height for the V coordinate

    Returns:
        Wall MeshData (empty when there are no outlines)
    """
    quad_count = sum(max(len(outline) - 1, 0) for outline in outlines)
    if quad_count == 0:
        return MeshData.empty()

    up = np.array([0.0, wall_height, 0.0])
    vertices = np.empty((quad_count * 4, 3), dtype=np.float64)
    triangles = np.empty(quad_count * 6, dtype=np.int32)
    quad_offsets = np.asarray(WALL_QUAD_TRIANGLES, dtype=np.int32)

    quad = 0
    for outline in outlines:
        for i in range(len(outline) - 1):
            a = floor_vertices[outline[i]]
            b = floor_vertices[outline[i + 1]]
            start = quad * 4
            vertices[start] = a + up
            vertices[start + 1] = b + up
            vertices[start + 2] = a
            vertices[start + 3] = b
            triangles[quad * 6:quad * 6 + 6] = quad_offsets + start
            quad += 1

    uvs = wall_uvs(vertices, uv_vertical_scale)
    logger.debug("Walls extruded", quads=quad_count, vertices=len(vertices))
    return MeshData(vertices=vertices, triangles=triangles, uvs=uvs)


def wall_uvs(vertices: np.ndarray, uv_vertical_scale: float = 0.5) -> np.ndarray:
    """
    Texture coordinates for wall vertices.

    U is the world x coordinate, switching to z where a vertex sits between
    two neighbours with the same x (a wall running along z would otherwise
    collapse to a single U value). V is height times ``uv_vertical_scale``.
    """
    count = len(vertices)
    uvs = np.empty((count, 2), dtype=np.float64)
    for i in range(count):
        x, y, z = vertices[i]
        u = x
        if i + 1 < count and i > 1 and vertices[i + 1][0] == x and vertices[i - 1][0] == x:
            u = z
        uvs[i, 0] = u
        uvs[i, 1] = y * uv_vertical_scale
    return uvs
