"""
Cave mesh generation from a bordered tile grid.

This module implements:
- Marching squares triangulation of open floor space
- Vertex deduplication through shared square-grid nodes
- The vertex -> triangle adjacency index used for outline tracing
- Floor texture coordinates
- ``generate_mesh``, which chains floor, outline and wall construction
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Set, Tuple

import numpy as np
import structlog

from .mesh_data import MeshData, Triangle
from .outlines import OutlineTracer
from .square_grid import Node, Square, SquareGrid
from .walls import build_wall_mesh

logger = structlog.get_logger()

# Fan points per square configuration, in winding order. Corners: TL/TR/BR/BL,
# edge midpoints: CT/CR/CB/CL. Configuration 0 emits nothing.
TRIANGULATION_TABLE: Dict[int, Tuple[str, ...]] = {
    0: (),
    # 1 point
    1: ("center_left", "center_bottom", "bottom_left"),
    2: ("bottom_right", "center_bottom", "center_right"),
    4: ("top_right", "center_right", "center_top"),
    8: ("top_left", "center_top", "center_left"),
    # 2 points
    3: ("center_right", "bottom_right", "bottom_left", "center_left"),
    6: ("center_top", "top_right", "bottom_right", "center_bottom"),
    9: ("top_left", "center_top", "center_bottom", "bottom_left"),
    12: ("top_left", "top_right", "center_right", "center_left"),
    5: ("center_top", "top_right", "center_right", "center_bottom", "bottom_left", "center_left"),
    10: ("top_left", "center_top", "center_right", "bottom_right", "center_bottom", "center_left"),
    # 3 points
    7: ("center_top", "top_right", "bottom_right", "bottom_left", "center_left"),
    11: ("top_left", "center_top", "center_right", "bottom_right", "bottom_left"),
    13: ("top_left", "top_right", "center_right", "center_bottom", "bottom_left"),
    14: ("top_left", "top_right", "bottom_right", "center_bottom", "center_left"),
    # 4 points
    15: ("top_left", "top_right", "bottom_right", "bottom_left"),
}

FULL_CONFIGURATION = 15


def inverse_lerp(a: float, b: float, value: np.ndarray) -> np.ndarray:
    """Clamped inverse linear interpolation of ``value`` between ``a`` and ``b``."""
    if a == b:
        return np.zeros_like(value, dtype=np.float64)
    return np.clip((value - a) / (b - a), 0.0, 1.0)


class MeshGenerator:
    """
    Triangulates a square grid into the floor mesh.

    After :meth:`triangulate` the generator exposes the floor vertices and
    triangles, the adjacency index and the set of interior vertices (corners
    of fully open squares, which can never lie on an outline).
    """

    def __init__(self, square_grid: SquareGrid):
        self.square_grid = square_grid
        self.vertices: List[Tuple[float, float, float]] = []
        self.triangles: List[int] = []
        self.triangle_dictionary: Dict[int, List[Triangle]] = {}
        self.interior_vertices: Set[int] = set()

    def triangulate(self) -> None:
        """Triangulate every square, column by column."""
        for square in self.square_grid.iter_squares():
            self.triangulate_square(square)

        logger.debug(
            "Floor triangulated",
            vertices=len(self.vertices),
            triangles=len(self.triangles) // 3,
            interior_vertices=len(self.interior_vertices),
        )

    def triangulate_square(self, square: Square) -> None:
        names = TRIANGULATION_TABLE[square.configuration]
        if not names:
            return
        self.mesh_from_points([getattr(square, name) for name in names])

        if square.configuration == FULL_CONFIGURATION:
            self.interior_vertices.update((
                square.top_left.vertex_index,
                square.top_right.vertex_index,
                square.bottom_right.vertex_index,
                square.bottom_left.vertex_index,
            ))

    def mesh_from_points(self, points: Sequence[Node]) -> None:
        """Emit a triangle fan anchored at the first point."""
        self.assign_vertices(points)
        anchor = points[0]
        for i in range(1, len(points) - 1):
            self.create_triangle(anchor, points[i], points[i + 1])

    def assign_vertices(self, points: Sequence[Node]) -> None:
        """Give each node a vertex index on first use."""
        for point in points:
            if point.vertex_index == -1:
                point.vertex_index = len(self.vertices)
                self.vertices.append(point.position)

    def create_triangle(self, a: Node, b: Node, c: Node) -> None:
        triangle = Triangle(a.vertex_index, b.vertex_index, c.vertex_index)
        self.triangles.extend(triangle)
        for vertex_index in triangle:
            self.triangle_dictionary.setdefault(vertex_index, []).append(triangle)

    def floor_uvs(self, tile_amount: float) -> np.ndarray:
        """
        Planar texture coordinates across the whole map.

        Args:
            tile_amount: How many times the texture repeats across the map

        Returns:
            ``(N, 2)`` UV array aligned with :attr:`vertices`
        """
        if not self.vertices:
            return np.zeros((0, 2), dtype=np.float64)
        vertices = np.asarray(self.vertices, dtype=np.float64)
        half_width = self.square_grid.map_width / 2
        half_height = self.square_grid.map_height / 2
        u = inverse_lerp(-half_width, half_width, vertices[:, 0]) * tile_amount
        v = inverse_lerp(-half_height, half_height, vertices[:, 2]) * tile_amount
        return np.column_stack([u, v])

    def to_mesh_data(self, tile_amount: float) -> MeshData:
        if not self.vertices:
            return MeshData.empty()
        return MeshData(
            vertices=np.asarray(self.vertices, dtype=np.float64),
            triangles=np.asarray(self.triangles, dtype=np.int32),
            uvs=self.floor_uvs(tile_amount),
        )


@dataclass
class CaveMesh:
    """Floor and wall meshes plus the outlines the walls were built from."""
    floor: MeshData
    walls: MeshData
    outlines: List[List[int]]


def generate_mesh(
    bordered_grid: np.ndarray,
    square_size: float = 1.0,
    wall_height: float = 2.0,
    floor_tile_amount: float = 150.0,
    wall_uv_vertical_scale: float = 0.5,
) -> CaveMesh:
    """
    Build floor and wall meshes for a bordered grid.

    Args:
        bordered_grid: Grid whose outer ring is wall
        square_size: World size of one tile
        wall_height: Height of the extruded walls
        floor_tile_amount: Floor texture repeat count
        wall_uv_vertical_scale: Vertical scale of wall UVs

    Returns:
        CaveMesh with floor, walls and outlines
    """
    square_grid = SquareGrid(bordered_grid, square_size)
    generator = MeshGenerator(square_grid)
    generator.triangulate()
    floor = generator.to_mesh_data(floor_tile_amount)

    tracer = OutlineTracer(generator.triangle_dictionary, generator.interior_vertices)
    outlines = tracer.calculate_mesh_outlines(floor.vertex_count)

    walls = build_wall_mesh(floor.vertices, outlines, wall_height, wall_uv_vertical_scale)

    logger.info(
        "Cave mesh generated",
        floor_vertices=floor.vertex_count,
        floor_triangles=floor.triangle_count,
        outlines=len(outlines),
        wall_triangles=walls.triangle_count,
    )
    return CaveMesh(floor=floor, walls=walls, outlines=outlines)
