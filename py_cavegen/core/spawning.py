"""
Player and enemy placement.

The player starts on a random tile of the main room. Every other room gets
one enemy per ``tiles_per_enemy`` tiles (rounded up), each on a random tile
of that room. Placement uses its own fixed seed so the same cave always
produces the same spawn plan.
"""

import math
from dataclasses import dataclass, field
from typing import List, NamedTuple, Sequence, Tuple

import structlog

from .alea_prng import AleaPRNG
from .errors import CaveConfigurationError
from .grid import Coord, coord_to_world_point
from .rooms import Room

logger = structlog.get_logger()


class SpawnPoint(NamedTuple):
    room_index: int
    tile: Coord
    position: Tuple[float, float, float]


@dataclass
class SpawnPlan:
    """Where the player and enemies start."""
    player: SpawnPoint
    enemies: List[SpawnPoint] = field(default_factory=list)

    @property
    def enemy_count(self) -> int:
        return len(self.enemies)


class SpawnPlanner:
    """Derives a spawn plan from a connected room list."""

    def __init__(
        self,
        width: int,
        height: int,
        spawn_seed: str = "1234",
        spawn_height: float = 1.0,
        tiles_per_enemy: int = 100,
        square_size: float = 1.0,
    ):
        if tiles_per_enemy < 1:
            raise CaveConfigurationError(f"tiles_per_enemy must be positive, got {tiles_per_enemy}")
        self.width = width
        self.height = height
        self.spawn_seed = spawn_seed
        self.spawn_height = spawn_height
        self.tiles_per_enemy = tiles_per_enemy
        self.square_size = square_size

    def enemies_for_room(self, room: Room) -> int:
        return math.ceil(room.size / self.tiles_per_enemy)

    def _spawn_point(self, room_index: int, tile: Coord) -> SpawnPoint:
        position = coord_to_world_point(
            tile, self.width, self.height, elevation=self.spawn_height, square_size=self.square_size
        )
        return SpawnPoint(room_index=room_index, tile=tile, position=position)

    def plan(self, rooms: Sequence[Room]) -> SpawnPlan:
        """
        Place the player and enemies.

        Args:
            rooms: Rooms with the main room first

        Returns:
            SpawnPlan for the level

        Raises:
            CaveConfigurationError: If there are no rooms or the first one is not the main room
        """
        if not rooms or not rooms[0].is_main_room:
            raise CaveConfigurationError("Spawn planning needs a room list headed by the main room")

        player_prng = AleaPRNG(self.spawn_seed)
        main_room = rooms[0]
        player_tile = player_prng.choice(main_room.tiles)
        player = self._spawn_point(0, player_tile)

        enemy_prng = AleaPRNG(self.spawn_seed)
        enemies: List[SpawnPoint] = []
        for room_index, room in enumerate(rooms):
            if room.is_main_room:
                continue
            for _ in range(self.enemies_for_room(room)):
                enemies.append(self._spawn_point(room_index, enemy_prng.choice(room.tiles)))

        logger.info("Spawn plan created", player_tile=tuple(player_tile), enemies=len(enemies))
        return SpawnPlan(player=player, enemies=enemies)
