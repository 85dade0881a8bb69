"""Cellular automaton smoothing that turns noise into cave blobs."""

import numpy as np
import structlog
from scipy import ndimage

from .grid import CellState

logger = structlog.get_logger()

# Moore neighbourhood without the centre tile
_NEIGHBOUR_KERNEL = np.array([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=np.int32)

NEIGHBOUR_THRESHOLD = 4


def count_wall_neighbours(grid: np.ndarray) -> np.ndarray:
    """
    Count wall tiles among the 8 neighbours of every tile.

    Tiles outside the grid count as walls.
    """
    walls = (grid == CellState.WALL).astype(np.int32)
    return ndimage.convolve(walls, _NEIGHBOUR_KERNEL, mode="constant", cval=1)


def smooth_step(grid: np.ndarray) -> np.ndarray:
    """
    Apply one automaton pass.

    Fewer than 4 wall neighbours opens a tile, more than 4 makes it wall and
    exactly 4 keeps it. All counts come from the input grid, which is not
    modified.
    """
    counts = count_wall_neighbours(grid)
    smoothed = grid.copy()
    smoothed[counts < NEIGHBOUR_THRESHOLD] = CellState.OPEN
    smoothed[counts > NEIGHBOUR_THRESHOLD] = CellState.WALL
    return smoothed


def smooth_grid(grid: np.ndarray, passes: int = 5) -> np.ndarray:
    """Run ``passes`` automaton steps and return the resulting grid."""
    for _ in range(passes):
        grid = smooth_step(grid)
    logger.debug("Grid smoothed", passes=passes, open_tiles=int(np.sum(grid == CellState.OPEN)))
    return grid
