"""
Tests for random fill, border padding and parameter validation.
"""

import pytest
import numpy as np
from py_cavegen.core.alea_prng import AleaPRNG
from py_cavegen.core.errors import CaveConfigurationError
from py_cavegen.core.grid import CellState, Coord, coord_to_world_point, pad_border, new_grid
from py_cavegen.core.grid_generator import random_fill_grid, validate_parameters


class TestRandomFill:
    """Test random fill behaviour."""

    def test_border_is_wall(self):
        grid = random_fill_grid(20, 15, 30, AleaPRNG("border"))
        assert grid.shape == (20, 15)
        assert np.all(grid[0, :] == CellState.WALL)
        assert np.all(grid[-1, :] == CellState.WALL)
        assert np.all(grid[:, 0] == CellState.WALL)
        assert np.all(grid[:, -1] == CellState.WALL)

    def test_deterministic(self):
        a = random_fill_grid(30, 20, 45, AleaPRNG("same"))
        b = random_fill_grid(30, 20, 45, AleaPRNG("same"))
        np.testing.assert_array_equal(a, b)

    def test_column_major_draw_order(self):
        """Interior tiles consume draws x outer, y inner."""
        width, height, fill = 7, 5, 45
        grid = random_fill_grid(width, height, fill, AleaPRNG("order"))

        prng = AleaPRNG("order")
        for x in range(1, width - 1):
            for y in range(1, height - 1):
                expected = CellState.WALL if prng.next_int(0, 100) < fill else CellState.OPEN
                assert grid[x, y] == expected

    def test_one_draw_per_interior_tile(self):
        prng = AleaPRNG("draws")
        random_fill_grid(12, 9, 50, prng)
        assert prng.call_count == 10 * 7

    def test_fill_extremes(self):
        empty = random_fill_grid(10, 10, 0, AleaPRNG("zero"))
        full = random_fill_grid(10, 10, 100, AleaPRNG("full"))
        assert np.all(empty[1:-1, 1:-1] == CellState.OPEN)
        assert np.all(full == CellState.WALL)

    def test_fill_ratio_roughly_matches(self):
        grid = random_fill_grid(100, 100, 40, AleaPRNG("ratio"))
        interior = grid[1:-1, 1:-1]
        wall_ratio = np.mean(interior == CellState.WALL)
        assert 0.35 < wall_ratio < 0.45


class TestParameters:
    """Test parameter validation."""

    def test_valid(self):
        params = validate_parameters(width=20, height=10, fill_percent=45, seed="x")
        assert params.width == 20
        assert params.seed == "x"
        assert params.square_size == 1.0

    @pytest.mark.parametrize("values", [
        {"width": 0, "height": 10, "fill_percent": 45},
        {"width": 10, "height": -1, "fill_percent": 45},
        {"width": 10, "height": 10, "fill_percent": 101},
        {"width": 10, "height": 10, "fill_percent": -5},
        {"width": 10, "height": 10, "fill_percent": 45, "square_size": 0},
        {"width": 10, "height": 10, "fill_percent": 45, "wall_height": -2.0},
    ])
    def test_invalid_raises_configuration_error(self, values):
        with pytest.raises(CaveConfigurationError) as exc_info:
            validate_parameters(**values)
        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.__cause__ is not None


class TestGridHelpers:
    """Test border padding and the world transform."""

    def test_pad_border(self):
        grid = new_grid(4, 3, CellState.OPEN)
        bordered = pad_border(grid)
        assert bordered.shape == (6, 5)
        assert np.all(bordered[0, :] == CellState.WALL)
        assert np.all(bordered[-1, :] == CellState.WALL)
        assert np.all(bordered[:, 0] == CellState.WALL)
        assert np.all(bordered[:, -1] == CellState.WALL)
        assert np.all(bordered[1:-1, 1:-1] == CellState.OPEN)
        # Input untouched
        assert np.all(grid == CellState.OPEN)

    def test_pad_border_thickness(self):
        bordered = pad_border(new_grid(2, 2, CellState.OPEN), border_size=3)
        assert bordered.shape == (8, 8)
        assert np.sum(bordered == CellState.OPEN) == 4

    def test_coord_to_world_point(self):
        assert coord_to_world_point(Coord(0, 0), 20, 10) == (-9.5, 0.0, -4.5)
        assert coord_to_world_point(Coord(19, 9), 20, 10, elevation=2) == (9.5, 2.0, 4.5)

    def test_coord_to_world_point_odd_size(self):
        x, _, z = coord_to_world_point(Coord(2, 1), 5, 3)
        assert x == 0.0
        assert z == 0.0
