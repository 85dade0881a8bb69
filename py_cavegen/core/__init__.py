"""
Core cave generation functionality.
"""

from .errors import CaveGenerationError, CaveConfigurationError, CaveInvariantError, GenerationInProgressError
from .grid import CellState, Coord, pad_border, coord_to_world_point
from .grid_generator import CaveParameters, random_fill_grid
from .smoothing import smooth_grid
from .regions import find_regions
from .rooms import Room, Passage, RoomGraphBuilder
from .mesh_data import MeshData
from .mesh_generator import CaveMesh, generate_mesh
from .spawning import SpawnPlan, SpawnPlanner
from .events import LevelEventBus
from .pipeline import CaveGenerator, CaveMap, LevelSession

__all__ = ['CaveGenerationError', 'CaveConfigurationError', 'CaveInvariantError', 'GenerationInProgressError',
           'CellState', 'Coord', 'pad_border', 'coord_to_world_point',
           'CaveParameters', 'random_fill_grid', 'smooth_grid', 'find_regions',
           'Room', 'Passage', 'RoomGraphBuilder', 'MeshData', 'CaveMesh', 'generate_mesh',
           'SpawnPlan', 'SpawnPlanner', 'LevelEventBus',
           'CaveGenerator', 'CaveMap', 'LevelSession']
