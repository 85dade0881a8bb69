"""
Region analysis: 4-connected flood fill over the tile grid.

Regions are discovered by scanning the grid column by column (x outer, y
inner) and flood filling breadth-first from the first unvisited tile of the
requested state, so discovery order, and the tile order inside each region,
is fully determined by the grid.
"""

from collections import deque
from typing import List

import numpy as np

from .grid import CellState, Coord, ORTHOGONAL_OFFSETS, is_in_map_range

Region = List[Coord]


def get_region_tiles(grid: np.ndarray, start_x: int, start_y: int, visited: np.ndarray) -> Region:
    """
    Collect the region containing ``(start_x, start_y)``.

    Args:
        grid: Tile grid
        start_x: Seed tile x
        start_y: Seed tile y
        visited: Boolean mask shared across one analysis pass; updated in place

    Returns:
        Region tiles in breadth-first visit order
    """
    tile_type = grid[start_x, start_y]
    tiles: Region = []

    queue = deque([(start_x, start_y)])
    visited[start_x, start_y] = True

    while queue:
        x, y = queue.popleft()
        tiles.append(Coord(x, y))

        for dx, dy in ORTHOGONAL_OFFSETS:
            nx, ny = x + dx, y + dy
            if is_in_map_range(grid, nx, ny):
                if not visited[nx, ny] and grid[nx, ny] == tile_type:
                    visited[nx, ny] = True
                    queue.append((nx, ny))

    return tiles


def find_regions(grid: np.ndarray, cell_state: CellState) -> List[Region]:
    """
    Find all maximal 4-connected regions of ``cell_state``.

    Each tile is visited at most once per call.
    """
    width, height = grid.shape
    visited = np.zeros(grid.shape, dtype=bool)
    target = int(cell_state)
    regions: List[Region] = []

    for x in range(width):
        for y in range(height):
            if not visited[x, y] and grid[x, y] == target:
                regions.append(get_region_tiles(grid, x, y, visited))

    return regions
