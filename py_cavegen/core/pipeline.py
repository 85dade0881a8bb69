"""
Cave generation pipeline and level sessions.

``CaveGenerator`` runs every stage in order:

1. Random fill (seeded)
2. Cellular automaton smoothing
3. Region pruning, room building and passage carving
4. Border padding
5. Floor triangulation, outline tracing and wall extrusion

``LevelSession`` wraps a generator with the game-facing loop: it keeps the
current cave and spawn plan, counts enemy deaths and regenerates the level
when the last enemy dies.
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import structlog

from .errors import GenerationInProgressError
from .events import LEVEL_CLEARED, LEVEL_GENERATED, LevelEventBus
from .grid import Coord, coord_to_world_point, pad_border
from .grid_generator import random_fill_grid, validate_parameters
from .mesh_data import MeshData
from .mesh_generator import generate_mesh
from .rooms import Passage, Room, RoomGraphBuilder
from .smoothing import smooth_grid
from .spawning import SpawnPlan, SpawnPlanner
from ..config.config import Settings, settings as default_settings
from ..utils.random import create_prng, resolve_seed

logger = structlog.get_logger()


@dataclass
class CaveMap:
    """Everything one generation pass produces."""
    seed: str
    width: int
    height: int
    grid: np.ndarray
    bordered_grid: np.ndarray
    rooms: List[Room]
    passages: List[Passage]
    floor: MeshData
    walls: MeshData
    outlines: List[List[int]]
    square_size: float = 1.0
    generation_time_seconds: float = field(default=0.0, compare=False)

    @property
    def main_room(self) -> Room:
        return self.rooms[0]

    def coord_to_world_point(self, tile: Coord, elevation: float = 0.0) -> Tuple[float, float, float]:
        """World-space centre of ``tile`` at ``elevation``."""
        return coord_to_world_point(tile, self.width, self.height, elevation, self.square_size)


class CaveGenerator:
    """Produces caves from validated parameters and package settings."""

    def __init__(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        fill_percent: Optional[int] = None,
        seed: Optional[str] = None,
        use_random_seed: bool = False,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the generator.

        Args:
            width: Grid width (defaults to settings)
            height: Grid height (defaults to settings)
            fill_percent: Wall fill percent (defaults to settings)
            seed: Seed string; a time-based seed is used when omitted
            use_random_seed: Ignore ``seed`` and derive one from the current time
            settings: Settings to use instead of the package settings

        Raises:
            CaveConfigurationError: If any parameter is out of range
        """
        self.settings = settings or default_settings
        self.params = validate_parameters(
            width=self.settings.default_width if width is None else width,
            height=self.settings.default_height if height is None else height,
            fill_percent=self.settings.default_fill_percent if fill_percent is None else fill_percent,
            seed=seed,
            use_random_seed=use_random_seed,
            square_size=self.settings.square_size,
            wall_height=self.settings.wall_height,
        )

    def generate(self) -> CaveMap:
        """
        Run the full pipeline once.

        Returns:
            CaveMap with grids, rooms, passages and meshes

        Raises:
            CaveConfigurationError: If no room survives pruning
        """
        params = self.params
        config = self.settings
        seed = resolve_seed(params.seed, params.use_random_seed)
        started = time.perf_counter()
        logger.info(
            "Starting cave generation",
            seed=seed,
            width=params.width,
            height=params.height,
            fill_percent=params.fill_percent,
        )

        # Stage 1: Random fill
        grid = random_fill_grid(params.width, params.height, params.fill_percent, create_prng(seed))

        # Stage 2: Smoothing
        grid = smooth_grid(grid, config.smoothing_passes)

        # Stage 3: Rooms and passages
        builder = RoomGraphBuilder(
            grid,
            wall_threshold_size=config.wall_threshold_size,
            room_threshold_size=config.room_threshold_size,
            passage_radius=config.passage_radius,
        )
        rooms = builder.run()

        # Stage 4: Border
        bordered_grid = pad_border(builder.grid, config.border_size)

        # Stage 5: Meshes
        cave_mesh = generate_mesh(
            bordered_grid,
            square_size=params.square_size,
            wall_height=params.wall_height,
            floor_tile_amount=config.floor_tile_amount,
            wall_uv_vertical_scale=config.wall_uv_vertical_scale,
        )

        elapsed = time.perf_counter() - started
        logger.info(
            "Cave generation completed",
            seed=seed,
            rooms=len(rooms),
            passages=len(builder.passages),
            floor_vertices=cave_mesh.floor.vertex_count,
            seconds=round(elapsed, 4),
        )

        return CaveMap(
            seed=seed,
            width=params.width,
            height=params.height,
            grid=builder.grid,
            bordered_grid=bordered_grid,
            rooms=rooms,
            passages=builder.passages,
            floor=cave_mesh.floor,
            walls=cave_mesh.walls,
            outlines=cave_mesh.outlines,
            square_size=params.square_size,
            generation_time_seconds=elapsed,
        )


class LevelSession:
    """
    Game-facing level loop.

    The session subscribes :meth:`new_level` to ``level_cleared`` on its bus,
    so killing the last enemy produces the next cave. A level with no enemies
    (a cave that is one room) is never cleared this way; call :meth:`new_level`
    directly to move on from it.
    """

    def __init__(
        self,
        generator: CaveGenerator,
        bus: Optional[LevelEventBus] = None,
        spawn_planner: Optional[SpawnPlanner] = None,
    ):
        self.generator = generator
        self.bus = bus or LevelEventBus()
        config = generator.settings
        self.spawn_planner = spawn_planner or SpawnPlanner(
            generator.params.width,
            generator.params.height,
            spawn_seed=config.spawn_seed,
            spawn_height=config.spawn_height,
            tiles_per_enemy=config.tiles_per_enemy,
            square_size=generator.params.square_size,
        )

        self.cave: Optional[CaveMap] = None
        self.spawn_plan: Optional[SpawnPlan] = None
        self.enemies_remaining = 0
        self.level_number = 0
        self._generating = False

        self.bus.subscribe(LEVEL_CLEARED, self._on_level_cleared)

    @property
    def is_generating(self) -> bool:
        return self._generating

    def new_level(self) -> CaveMap:
        """
        Generate the next cave and its spawn plan.

        Raises:
            GenerationInProgressError: If called while a level is being generated
        """
        if self._generating:
            raise GenerationInProgressError("A level is already being generated")

        self._generating = True
        try:
            cave = self.generator.generate()
            spawn_plan = self.spawn_planner.plan(cave.rooms)
        finally:
            self._generating = False

        self.cave = cave
        self.spawn_plan = spawn_plan
        self.enemies_remaining = spawn_plan.enemy_count
        self.level_number += 1
        logger.info(
            "Level ready",
            level=self.level_number,
            seed=cave.seed,
            enemies=self.enemies_remaining,
        )

        self.bus.publish(LEVEL_GENERATED, level=self.level_number, seed=cave.seed)
        self.bus.flush()
        return cave

    def record_enemy_death(self) -> int:
        """
        Count one enemy death; publishes ``level_cleared`` when none remain.

        Returns:
            Enemies still alive

        Raises:
            ValueError: If there is no living enemy to kill
        """
        if self.enemies_remaining <= 0:
            raise ValueError("No enemies remain in the current level")

        self.enemies_remaining -= 1
        if self.enemies_remaining == 0:
            logger.info("Level cleared", level=self.level_number)
            self.bus.publish(LEVEL_CLEARED, level=self.level_number)
            self.bus.flush()
        return self.enemies_remaining

    def _on_level_cleared(self, event_name, data) -> None:
        self.new_level()

    def close(self) -> None:
        """Detach the session from its bus."""
        self.bus.unsubscribe(LEVEL_CLEARED, self._on_level_cleared)
