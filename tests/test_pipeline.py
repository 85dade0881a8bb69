"""
End-to-end tests for the cave generation pipeline.
"""

import pytest
import numpy as np
from py_cavegen.config import Settings
from py_cavegen.core.errors import CaveConfigurationError
from py_cavegen.core.grid import CellState, Coord
from py_cavegen.core.mesh_analysis import validate_mesh_closure, validate_outlines
from py_cavegen.core.pipeline import CaveGenerator
from py_cavegen.core.regions import find_regions


class TestCaveGenerator:
    """Test full generation runs."""

    @pytest.fixture
    def cave(self):
        return CaveGenerator(width=48, height=32, fill_percent=45, seed="pipeline").generate()

    def test_deterministic(self):
        a = CaveGenerator(width=40, height=30, fill_percent=45, seed="determinism").generate()
        b = CaveGenerator(width=40, height=30, fill_percent=45, seed="determinism").generate()

        np.testing.assert_array_equal(a.grid, b.grid)
        np.testing.assert_array_equal(a.floor.vertices, b.floor.vertices)
        np.testing.assert_array_equal(a.floor.triangles, b.floor.triangles)
        np.testing.assert_array_equal(a.walls.vertices, b.walls.vertices)
        np.testing.assert_array_equal(a.floor.uvs, b.floor.uvs)
        np.testing.assert_array_equal(a.walls.triangles, b.walls.triangles)
        np.testing.assert_array_equal(a.walls.uvs, b.walls.uvs)
        assert [room.tiles for room in a.rooms] == [room.tiles for room in b.rooms]
        assert a.outlines == b.outlines
        assert [(p.room_a, p.room_b, p.tile_a, p.tile_b, p.line) for p in a.passages] == [
            (p.room_a, p.room_b, p.tile_a, p.tile_b, p.line) for p in b.passages
        ]
        assert [(r.is_main_room, r.is_accessible_from_main_room) for r in a.rooms] == [
            (r.is_main_room, r.is_accessible_from_main_room) for r in b.rooms
        ]

    def test_seeds_change_the_cave(self):
        a = CaveGenerator(width=40, height=30, fill_percent=45, seed="one").generate()
        b = CaveGenerator(width=40, height=30, fill_percent=45, seed="two").generate()
        assert not np.array_equal(a.grid, b.grid)

    def test_small_scenario(self):
        cave = CaveGenerator(width=20, height=20, fill_percent=45, seed="test").generate()

        assert len(cave.rooms) > 0
        assert sum(room.is_main_room for room in cave.rooms) == 1
        assert cave.floor.vertex_count > 0
        assert len(cave.floor.triangles) % 3 == 0

    def test_border_invariant(self, cave):
        bordered = cave.bordered_grid
        assert bordered.shape == (50, 34)
        assert np.all(bordered[0, :] == CellState.WALL)
        assert np.all(bordered[-1, :] == CellState.WALL)
        assert np.all(bordered[:, 0] == CellState.WALL)
        assert np.all(bordered[:, -1] == CellState.WALL)
        np.testing.assert_array_equal(bordered[1:-1, 1:-1], cave.grid)

    def test_all_rooms_connected(self, cave):
        assert cave.rooms[0] is cave.main_room
        assert cave.main_room.is_main_room
        assert all(room.is_accessible_from_main_room for room in cave.rooms)
        # Every room tile ends up in one open region
        regions = find_regions(cave.grid, CellState.OPEN)
        room_tiles = {tile for room in cave.rooms for tile in room.tiles}
        region_of = {tile: i for i, region in enumerate(regions) for tile in region}
        assert len({region_of[tile] for tile in room_tiles}) == 1

    def test_mesh_closure(self, cave):
        closed, errors = validate_mesh_closure(cave.floor)
        assert closed, errors

    def test_outline_closure(self, cave):
        assert cave.outlines
        for outline in cave.outlines:
            assert outline[0] == outline[-1]
        ok, errors = validate_outlines(cave.floor, cave.outlines)
        assert ok, errors

    def test_walls_follow_outlines(self, cave):
        edges = sum(len(outline) - 1 for outline in cave.outlines)
        assert cave.walls.triangle_count == 2 * edges
        assert cave.walls.uvs.shape == (cave.walls.vertex_count, 2)

    def test_world_transform(self, cave):
        assert cave.coord_to_world_point(Coord(0, 0)) == (-23.5, 0.0, -15.5)

    def test_fill_zero_gives_single_room(self):
        cave = CaveGenerator(width=20, height=20, fill_percent=0, seed="open").generate()

        assert len(cave.rooms) == 1
        assert cave.passages == []
        assert cave.main_room.size == 18 * 18 - 4
        for x, y in [(1, 1), (1, 18), (18, 1), (18, 18)]:
            assert cave.grid[x, y] == CellState.WALL
        assert len(cave.outlines) == 1

    def test_fill_hundred_has_no_rooms(self):
        with pytest.raises(CaveConfigurationError):
            CaveGenerator(width=20, height=20, fill_percent=100, seed="solid").generate()

    @pytest.mark.parametrize("kwargs", [
        {"width": 0, "height": 20, "fill_percent": 45},
        {"width": 20, "height": 0, "fill_percent": 45},
        {"width": 20, "height": 20, "fill_percent": 150},
    ])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(CaveConfigurationError):
            CaveGenerator(seed="bad", **kwargs)

    def test_random_seed(self):
        cave = CaveGenerator(width=30, height=30, fill_percent=0, seed="ignored", use_random_seed=True).generate()
        assert cave.seed != "ignored"

    def test_settings_drive_mesh(self):
        settings = Settings(square_size=2.0, wall_height=4.0)
        cave = CaveGenerator(width=20, height=20, fill_percent=0, seed="scaled", settings=settings).generate()

        assert cave.square_size == 2.0
        assert cave.walls.vertices[:, 1].max() == 4.0
        assert cave.coord_to_world_point(Coord(0, 0)) == (-19.0, 0.0, -19.0)

    def test_defaults_from_settings(self):
        settings = Settings(default_width=24, default_height=22, default_fill_percent=0)
        cave = CaveGenerator(seed="defaults", settings=settings).generate()
        assert cave.grid.shape == (24, 22)
