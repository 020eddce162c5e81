"""
Configuration management for the tile generation service.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_TILE_KINDS_PATH = Path(__file__).resolve().parents[2] / "config" / "tile-kinds.json"


class Config:
    """Configuration for tile generation service"""

    def __init__(self):
        # Server configuration
        self.host = os.getenv("TILEGEN_SERVICE_HOST", "0.0.0.0")
        self.port = int(os.getenv("TILEGEN_SERVICE_PORT", "8082"))
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        # Generation configuration
        self.world_seed = int(os.getenv("WORLD_SEED", "12345"))
        self.segment_columns = int(os.getenv("SEGMENT_COLUMNS", "10"))
        self.segment_rows = int(os.getenv("SEGMENT_ROWS", "10"))

        # The map is a grid of segments; only its outer edges get walls
        self.map_columns = int(os.getenv("MAP_COLUMNS", "10"))
        self.map_rows = int(os.getenv("MAP_ROWS", "10"))

        self.max_placement_attempts = int(os.getenv("MAX_PLACEMENT_ATTEMPTS", "1000"))
        self.tile_kinds_path = Path(
            os.getenv("TILE_KINDS_PATH", str(DEFAULT_TILE_KINDS_PATH))
        )


def load_config(env_file: Optional[str] = None) -> Config:
    """Load configuration from environment variables (and .env if present)"""
    load_dotenv(env_file, override=False)
    return Config()
