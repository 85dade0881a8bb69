"""
Marching squares view over a bordered tile grid.

Every tile becomes a control node at its centre. Each control node owns the
edge-midpoint node above it and the one to its right, so a midpoint is shared
by exactly the two squares on either side of it and corner nodes are shared
by position. Mesh vertex indices are assigned lazily on the nodes themselves,
which is what deduplicates vertices during triangulation.
"""

from typing import List, Tuple

import numpy as np

from .grid import CellState

Vector3 = Tuple[float, float, float]


class Node:
    """A point that may become a mesh vertex."""
    __slots__ = ("position", "vertex_index")

    def __init__(self, position: Vector3):
        self.position = position
        self.vertex_index = -1


class ControlNode(Node):
    """A tile centre; ``active`` when the tile is open floor."""
    __slots__ = ("active", "above", "right")

    def __init__(self, position: Vector3, active: bool, square_size: float):
        super().__init__(position)
        self.active = active
        x, y, z = position
        half = square_size / 2
        self.above = Node((x, y, z + half))
        self.right = Node((x + half, y, z))


class Square:
    """A 2x2 block of control nodes with its four edge midpoints.

    ``configuration`` sets bit 3/2/1/0 when the top-left/top-right/
    bottom-right/bottom-left corner is active.
    """
    __slots__ = (
        "top_left", "top_right", "bottom_right", "bottom_left",
        "center_top", "center_right", "center_bottom", "center_left",
        "configuration",
    )

    def __init__(self, top_left: ControlNode, top_right: ControlNode,
                 bottom_right: ControlNode, bottom_left: ControlNode):
        self.top_left = top_left
        self.top_right = top_right
        self.bottom_right = bottom_right
        self.bottom_left = bottom_left

        self.center_top = top_left.right
        self.center_right = bottom_right.above
        self.center_bottom = bottom_left.right
        self.center_left = bottom_left.above

        self.configuration = (
            (8 if top_left.active else 0)
            | (4 if top_right.active else 0)
            | (2 if bottom_right.active else 0)
            | (1 if bottom_left.active else 0)
        )


class SquareGrid:
    """Grid of ``(width - 1) x (height - 1)`` squares over a tile grid."""

    def __init__(self, grid: np.ndarray, square_size: float = 1.0):
        node_count_x, node_count_y = grid.shape
        map_width = node_count_x * square_size
        map_height = node_count_y * square_size
        open_ = int(CellState.OPEN)

        control_nodes: List[List[ControlNode]] = []
        for x in range(node_count_x):
            column = []
            for y in range(node_count_y):
                position = (
                    -map_width / 2 + x * square_size + square_size / 2,
                    0.0,
                    -map_height / 2 + y * square_size + square_size / 2,
                )
                column.append(ControlNode(position, bool(grid[x, y] == open_), square_size))
            control_nodes.append(column)

        self.square_size = square_size
        self.map_width = map_width
        self.map_height = map_height
        self.control_nodes = control_nodes
        self.squares: List[List[Square]] = [
            [
                Square(
                    control_nodes[x][y + 1],
                    control_nodes[x + 1][y + 1],
                    control_nodes[x + 1][y],
                    control_nodes[x][y],
                )
                for y in range(node_count_y - 1)
            ]
            for x in range(node_count_x - 1)
        ]

    @property
    def shape(self) -> Tuple[int, int]:
        if not self.squares:
            return (0, 0)
        return (len(self.squares), len(self.squares[0]))

    def iter_squares(self):
        """Yield squares column by column (x outer, y inner)."""
        for column in self.squares:
            yield from column
