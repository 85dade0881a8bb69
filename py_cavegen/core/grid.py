"""Tile grid primitives shared by every pipeline stage."""

from enum import IntEnum
from typing import NamedTuple, Tuple

import numpy as np


class CellState(IntEnum):
    """Tile states as stored in the grid (0 = wall)."""
    WALL = 0
    OPEN = 1


class Coord(NamedTuple):
    """Tile coordinate."""
    x: int
    y: int


# 4-connected neighbour offsets, in the order regions and edge tiles scan them
ORTHOGONAL_OFFSETS: Tuple[Tuple[int, int], ...] = ((-1, 0), (0, -1), (0, 1), (1, 0))


def new_grid(width: int, height: int, fill: CellState = CellState.WALL) -> np.ndarray:
    """Allocate a ``(width, height)`` grid indexed ``grid[x, y]``."""
    return np.full((width, height), int(fill), dtype=np.uint8)


def is_in_map_range(grid: np.ndarray, x: int, y: int) -> bool:
    width, height = grid.shape
    return 0 <= x < width and 0 <= y < height


def pad_border(grid: np.ndarray, border_size: int = 1) -> np.ndarray:
    """
    Wrap the grid in a solid border.

    The result is a new array; the input grid is left untouched. Every cell of
    the outer ``border_size`` rings is ``CellState.WALL``, so meshing never
    needs out-of-range neighbour checks.

    Args:
        grid: Processed tile grid
        border_size: Border thickness in tiles

    Returns:
        Bordered grid of shape ``(width + 2 * border_size, height + 2 * border_size)``
    """
    return np.pad(
        grid,
        pad_width=border_size,
        mode="constant",
        constant_values=int(CellState.WALL),
    )


def coord_to_world_point(
    tile: Coord, width: int, height: int, elevation: float = 0.0, square_size: float = 1.0
) -> Tuple[float, float, float]:
    """
    Convert a tile coordinate to a world-space point at the tile centre.

    The grid is centred on the world origin; grid ``y`` maps to world ``z``.
    """
    x, y = tile
    return (
        (-width / 2 + 0.5 + x) * square_size,
        float(elevation),
        (-height / 2 + 0.5 + y) * square_size,
    )
