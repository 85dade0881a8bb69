"""
Room graph construction.

This module handles:
- Pruning wall specks and undersized open pockets
- Building rooms from the surviving open regions
- Edge tile detection
- Connecting every room to the main room with carved passages
"""

from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np
import structlog
from scipy.spatial.distance import cdist

from .errors import CaveConfigurationError, CaveInvariantError
from .grid import CellState, Coord, ORTHOGONAL_OFFSETS, is_in_map_range
from .regions import Region, find_regions

logger = structlog.get_logger()


@dataclass(eq=False)
class Room:
    """An open region large enough to play in.

    Rooms compare and hash by identity; ``connected_rooms`` is kept symmetric
    by :meth:`connect_rooms`.
    """

    tiles: List[Coord] = field(repr=False)
    edge_tiles: List[Coord] = field(default_factory=list, repr=False)
    connected_rooms: List["Room"] = field(default_factory=list, repr=False)
    is_main_room: bool = False
    is_accessible_from_main_room: bool = False
    _edge_array: Optional[np.ndarray] = field(default=None, init=False, repr=False)

    @property
    def size(self) -> int:
        return len(self.tiles)

    def is_connected(self, other: "Room") -> bool:
        return any(room is other for room in self.connected_rooms)

    def edge_tile_array(self) -> np.ndarray:
        """Edge tiles as an ``(n, 2)`` array, rebuilt when the list changes."""
        if self._edge_array is None or len(self._edge_array) != len(self.edge_tiles):
            self._edge_array = np.asarray(self.edge_tiles, dtype=np.int64).reshape(-1, 2)
        return self._edge_array

    def set_accessible_from_main_room(self) -> None:
        """Mark this room and everything reachable from it as accessible."""
        stack = [self]
        while stack:
            room = stack.pop()
            if room.is_accessible_from_main_room:
                continue
            room.is_accessible_from_main_room = True
            stack.extend(room.connected_rooms)

    @staticmethod
    def connect_rooms(room_a: "Room", room_b: "Room") -> None:
        if room_a.is_accessible_from_main_room:
            room_b.set_accessible_from_main_room()
        elif room_b.is_accessible_from_main_room:
            room_a.set_accessible_from_main_room()
        room_a.connected_rooms.append(room_b)
        room_b.connected_rooms.append(room_a)


class Passage(NamedTuple):
    """Record of one carved connection (for diagnostics and rendering)."""
    room_a: int
    room_b: int
    tile_a: Coord
    tile_b: Coord
    line: List[Coord]


def find_edge_tiles(tiles: List[Coord], grid: np.ndarray) -> List[Coord]:
    """
    Find the tiles of a room that touch a wall.

    A tile is appended once per orthogonal wall neighbour, so tiles in a
    corner appear more than once.
    """
    wall = int(CellState.WALL)
    edge_tiles: List[Coord] = []
    for tile in tiles:
        for dx, dy in ORTHOGONAL_OFFSETS:
            x, y = tile.x + dx, tile.y + dy
            if is_in_map_range(grid, x, y) and grid[x, y] == wall:
                edge_tiles.append(tile)
    return edge_tiles


def get_line(start: Coord, end: Coord) -> List[Coord]:
    """
    Rasterize the integer line from ``start`` towards ``end``.

    Integer-only accumulator stepping along the longer axis. The start tile is
    included and the end tile is not; a zero-length line is empty.
    """
    x, y = start
    dx = end.x - start.x
    dy = end.y - start.y

    inverted = False
    step = int(np.sign(dx))
    gradient_step = int(np.sign(dy))
    longest = abs(dx)
    shortest = abs(dy)

    if longest < shortest:
        inverted = True
        longest, shortest = shortest, longest
        step, gradient_step = gradient_step, step

    line: List[Coord] = []
    gradient_accumulation = longest // 2
    for _ in range(longest):
        line.append(Coord(x, y))
        if inverted:
            y += step
        else:
            x += step

        gradient_accumulation += shortest
        if gradient_accumulation >= longest:
            if inverted:
                x += gradient_step
            else:
                y += gradient_step
            gradient_accumulation -= longest

    return line


def draw_circle(grid: np.ndarray, center: Coord, radius: int) -> None:
    """Open every in-range tile within ``radius`` of ``center`` (in place)."""
    open_ = int(CellState.OPEN)
    r_squared = radius * radius
    for dx in range(-radius, radius + 1):
        for dy in range(-radius, radius + 1):
            if dx * dx + dy * dy <= r_squared:
                x, y = center.x + dx, center.y + dy
                if is_in_map_range(grid, x, y):
                    grid[x, y] = open_


class RoomGraphBuilder:
    """Prunes regions, builds rooms and carves passages between them."""

    def __init__(
        self,
        grid: np.ndarray,
        wall_threshold_size: int = 50,
        room_threshold_size: int = 50,
        passage_radius: int = 2,
    ):
        """
        Initialize the builder.

        Args:
            grid: Smoothed grid; owned and mutated by the builder from here on
            wall_threshold_size: Wall regions smaller than this become open
            room_threshold_size: Open regions smaller than this become wall
            passage_radius: Brush radius for carving passages
        """
        self.grid = grid
        self.wall_threshold_size = wall_threshold_size
        self.room_threshold_size = room_threshold_size
        self.passage_radius = passage_radius

        self.rooms: List[Room] = []
        self.passages: List[Passage] = []
        self._pair_distances: Dict[Tuple[Room, Room], Tuple[int, int, int]] = {}

    def prune_regions(self) -> List[Region]:
        """
        Remove wall specks and undersized open pockets.

        Returns:
            Surviving open regions, in discovery order
        """
        removed_walls = 0
        for region in find_regions(self.grid, CellState.WALL):
            if len(region) < self.wall_threshold_size:
                removed_walls += 1
                for tile in region:
                    self.grid[tile.x, tile.y] = CellState.OPEN

        surviving: List[Region] = []
        removed_pockets = 0
        for region in find_regions(self.grid, CellState.OPEN):
            if len(region) < self.room_threshold_size:
                removed_pockets += 1
                for tile in region:
                    self.grid[tile.x, tile.y] = CellState.WALL
            else:
                surviving.append(region)

        logger.info(
            "Regions pruned",
            wall_regions_removed=removed_walls,
            open_regions_removed=removed_pockets,
            surviving_regions=len(surviving),
        )
        return surviving

    def build_rooms(self, regions: List[Region]) -> List[Room]:
        """
        Create rooms from surviving regions and pick the main room.

        Rooms are stably sorted largest first; the first one is the main room.

        Raises:
            CaveConfigurationError: If no region survived pruning
        """
        if not regions:
            raise CaveConfigurationError(
                "No room survived pruning; lower the fill percent or enlarge the grid"
            )

        rooms = [Room(tiles=list(region), edge_tiles=find_edge_tiles(region, self.grid)) for region in regions]
        rooms.sort(key=lambda room: room.size, reverse=True)

        main_room = rooms[0]
        main_room.is_main_room = True
        main_room.is_accessible_from_main_room = True

        self.rooms = rooms
        self._pair_distances.clear()
        return rooms

    def _closest_pair(
        self, rooms_a: List[Room], rooms_b: List[Room]
    ) -> Optional[Tuple[int, Room, Room, Coord, Coord]]:
        """Find the closest edge tile pair between two room lists (first found wins ties)."""
        best = None
        for room_a in rooms_a:
            best_a = self._closest_pair_for(room_a, rooms_b)
            if best_a is not None and (best is None or best_a[0] < best[0]):
                best = best_a
        return best

    def _closest_pair_for(
        self, room_a: Room, candidates: List[Room]
    ) -> Optional[Tuple[int, Room, Room, Coord, Coord]]:
        best = None
        for room_b in candidates:
            if room_a is room_b or room_a.is_connected(room_b):
                continue
            if not room_a.edge_tiles or not room_b.edge_tiles:
                raise CaveInvariantError("Room without edge tiles cannot be connected")

            distance, index_a, index_b = self._closest_edge_tiles(room_a, room_b)
            if best is None or distance < best[0]:
                best = (distance, room_a, room_b, room_a.edge_tiles[index_a], room_b.edge_tiles[index_b])
        return best

    def _closest_edge_tiles(self, room_a: Room, room_b: Room) -> Tuple[int, int, int]:
        """
        Squared distance and edge tile indices of the closest pair between two rooms.

        ``argmin`` returns the first minimum in row-major order, so among equal
        distances the earliest tile of ``room_a``, then of ``room_b``, wins.
        Results are cached per ordered room pair; edge tiles do not change while
        rooms are being connected.
        """
        key = (room_a, room_b)
        cached = self._pair_distances.get(key)
        if cached is None:
            distances = cdist(room_a.edge_tile_array(), room_b.edge_tile_array(), "sqeuclidean")
            index_a, index_b = np.unravel_index(int(np.argmin(distances)), distances.shape)
            cached = (int(distances[index_a, index_b]), int(index_a), int(index_b))
            self._pair_distances[key] = cached
        return cached

    def connect_closest_rooms(self) -> None:
        """
        Connect every room to the main room.

        First each still-unconnected room is joined to its nearest neighbour.
        Then, until no room is inaccessible, the closest pair straddling the
        accessible/inaccessible split is connected.

        Raises:
            CaveInvariantError: If inaccessible rooms remain with no candidate pair
        """
        for room_a in self.rooms:
            if room_a.connected_rooms:
                continue
            best = self._closest_pair_for(room_a, self.rooms)
            if best is not None:
                _, best_a, best_b, tile_a, tile_b = best
                self.create_passage(best_a, best_b, tile_a, tile_b)

        forced = 0
        while True:
            accessible = [room for room in self.rooms if room.is_accessible_from_main_room]
            inaccessible = [room for room in self.rooms if not room.is_accessible_from_main_room]
            if not inaccessible:
                break

            best = self._closest_pair(inaccessible, accessible)
            if best is None:
                raise CaveInvariantError(
                    f"{len(inaccessible)} room(s) remain unreachable from the main room"
                )
            _, best_a, best_b, tile_a, tile_b = best
            self.create_passage(best_a, best_b, tile_a, tile_b)
            forced += 1

        logger.info("Rooms connected", rooms=len(self.rooms), passages=len(self.passages), forced_passages=forced)

    def create_passage(self, room_a: Room, room_b: Room, tile_a: Coord, tile_b: Coord) -> Passage:
        """Connect two rooms and carve a walkable line between their edge tiles."""
        Room.connect_rooms(room_a, room_b)
        line = get_line(tile_a, tile_b)
        for point in line:
            draw_circle(self.grid, point, self.passage_radius)

        passage = Passage(
            room_a=self._index_of(room_a),
            room_b=self._index_of(room_b),
            tile_a=tile_a,
            tile_b=tile_b,
            line=line,
        )
        self.passages.append(passage)
        logger.debug("Passage carved", tile_a=tuple(tile_a), tile_b=tuple(tile_b), length=len(line))
        return passage

    def _index_of(self, room: Room) -> int:
        for index, candidate in enumerate(self.rooms):
            if candidate is room:
                return index
        raise CaveInvariantError("Passage endpoint is not a known room")

    def run(self) -> List[Room]:
        """Prune, build rooms and connect them; returns the room list (main room first)."""
        regions = self.prune_regions()
        self.build_rooms(regions)
        self.connect_closest_rooms()
        return self.rooms
