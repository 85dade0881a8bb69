"""Tests for wall extrusion."""

import numpy as np
from py_cavegen.core.grid import CellState, new_grid
from py_cavegen.core.mesh_generator import generate_mesh
from py_cavegen.core.walls import build_wall_mesh, wall_uvs


class TestWallMesh:
    """Test wall quads and UVs."""

    def test_quad_layout_and_winding(self):
        floor = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 0.0, 1.0]])
        walls = build_wall_mesh(floor, [[0, 1, 2, 0]], wall_height=2.0)

        assert walls.vertex_count == 12
        assert walls.triangle_count == 6
        np.testing.assert_array_equal(walls.vertices[0], [0.0, 2.0, 0.0])
        np.testing.assert_array_equal(walls.vertices[1], [1.0, 2.0, 0.0])
        np.testing.assert_array_equal(walls.vertices[2], [0.0, 0.0, 0.0])
        np.testing.assert_array_equal(walls.vertices[3], [1.0, 0.0, 0.0])
        assert walls.triangles[:6].tolist() == [3, 2, 0, 0, 1, 3]
        assert walls.triangles[6:12].tolist() == [7, 6, 4, 4, 5, 7]

    def test_uv_heights(self):
        floor = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 0.0, 1.0]])
        walls = build_wall_mesh(floor, [[0, 1, 2, 0]], wall_height=2.0, uv_vertical_scale=0.5)
        assert walls.uvs[0, 1] == 1.0
        assert walls.uvs[2, 1] == 0.0

    def test_uv_switches_to_z_along_constant_x(self):
        vertices = np.array([
            [1.0, 2.0, 0.0],
            [1.0, 2.0, 1.0],
            [1.0, 0.0, 0.0],
            [1.0, 0.0, 1.0],
            [2.0, 2.0, 1.0],
        ])
        uvs = wall_uvs(vertices)
        # Index 0 and 1 are never switched
        assert uvs[0, 0] == 1.0
        assert uvs[1, 0] == 1.0
        # Neighbours share x = 1, so u takes z
        assert uvs[2, 0] == 0.0
        # Next vertex differs in x
        assert uvs[3, 0] == 1.0

    def test_empty_outlines(self):
        walls = build_wall_mesh(np.zeros((0, 3)), [])
        assert walls.vertex_count == 0
        assert walls.triangles.dtype == np.int32

    def test_wall_count_matches_outline_edges(self):
        grid = new_grid(8, 8, CellState.WALL)
        grid[1:7, 1:4] = CellState.OPEN
        grid[2, 5] = CellState.OPEN
        mesh = generate_mesh(grid, wall_height=3.0)

        edges = sum(len(outline) - 1 for outline in mesh.outlines)
        assert mesh.walls.triangle_count == 2 * edges
        assert mesh.walls.vertex_count == 4 * edges
        assert set(np.unique(mesh.walls.vertices[:, 1])) == {0.0, 3.0}
