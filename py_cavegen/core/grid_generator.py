"""Random tile fill: the first stage of cave generation."""

from typing import Optional

import numpy as np
import structlog
from pydantic import BaseModel, Field, ValidationError

from .alea_prng import AleaPRNG
from .errors import CaveConfigurationError
from .grid import CellState, new_grid

logger = structlog.get_logger()


class CaveParameters(BaseModel):
    """Validated inputs for one generation pass."""

    width: int = Field(..., ge=1, description="Grid width in tiles")
    height: int = Field(..., ge=1, description="Grid height in tiles")
    fill_percent: int = Field(..., ge=0, le=100, description="Chance (percent) an interior tile starts as wall")
    seed: Optional[str] = Field(None, description="Seed string for reproducible generation")
    use_random_seed: bool = Field(False, description="Derive the seed from the current time")
    square_size: float = Field(1.0, gt=0, description="World size of one tile")
    wall_height: float = Field(2.0, gt=0, description="Height of extruded walls")


def validate_parameters(**values) -> CaveParameters:
    """
    Build ``CaveParameters``, turning validation failures into configuration errors.

    Raises:
        CaveConfigurationError: If any parameter is out of range
    """
    try:
        return CaveParameters(**values)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise CaveConfigurationError(f"Invalid cave parameters: {problems}") from exc


def random_fill_grid(width: int, height: int, fill_percent: int, prng: AleaPRNG) -> np.ndarray:
    """
    Fill a grid with noise.

    Border tiles are always wall. Every interior tile consumes exactly one
    draw, in column-major order (x outer, y inner); that order is what makes
    a seed reproduce the same cave.

    Args:
        width: Grid width
        height: Grid height
        fill_percent: Wall probability in percent
        prng: Generator seeded for this pass

    Returns:
        ``(width, height)`` uint8 grid
    """
    grid = new_grid(width, height, CellState.WALL)
    wall = int(CellState.WALL)
    open_ = int(CellState.OPEN)

    for x in range(1, width - 1):
        for y in range(1, height - 1):
            grid[x, y] = wall if prng.next_int(0, 100) < fill_percent else open_

    logger.debug(
        "Grid filled",
        width=width,
        height=height,
        fill_percent=fill_percent,
        draws=prng.call_count,
        wall_tiles=int(np.sum(grid == wall)),
    )
    return grid
