from pathlib import Path
from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

import os

# Explicitly load .env for local/dev environments only if values are missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    missing_keys = {k: v for k, v in file_env.items() if k not in os.environ and v is not None}
    for k, v in missing_keys.items():
        os.environ[k] = v


class Settings(BaseSettings):
    """Generation settings pulled from ``CAVEGEN_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CAVEGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Grid defaults
    default_width: int = Field(default=128, ge=1, description="Default grid width in tiles")
    default_height: int = Field(default=80, ge=1, description="Default grid height in tiles")
    default_fill_percent: int = Field(default=50, ge=0, le=100, description="Default random fill percent")

    # Cave shaping
    smoothing_passes: int = Field(default=5, ge=0, description="Cellular automaton passes")
    wall_threshold_size: int = Field(default=50, ge=0, description="Wall regions below this size are opened")
    room_threshold_size: int = Field(default=50, ge=0, description="Open regions below this size are filled")
    passage_radius: int = Field(default=2, ge=0, description="Brush radius used when carving passages")
    border_size: int = Field(default=1, ge=1, description="Solid border added before meshing")

    # Mesh
    square_size: float = Field(default=1.0, gt=0, description="World size of one tile")
    wall_height: float = Field(default=2.0, gt=0, description="Height of extruded walls")
    floor_tile_amount: float = Field(default=150.0, gt=0, description="Floor texture tiling factor")
    wall_uv_vertical_scale: float = Field(default=0.5, gt=0, description="Wall texture vertical scale")

    # Spawning
    spawn_seed: str = Field(default="1234", description="Seed for player/enemy placement")
    spawn_height: float = Field(default=1.0, description="World height of spawn points")
    tiles_per_enemy: int = Field(default=100, ge=1, description="Room tiles per spawned enemy")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (json or console)")


# Instantiate singleton settings object
settings = Settings()
