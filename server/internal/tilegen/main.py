"""
Tile Generation Service
Main entry point for the Python board segment generation service.
"""

import logging
import os
import sys
from pathlib import Path

# Add server directory to path for imports
server_dir = Path(__file__).parent.parent.parent
sys.path.insert(0, str(server_dir))

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
import uvicorn

from internal.tilegen import config
from internal.tilegen import seeds
from internal.tilegen import generation
from internal.tilegen import tile_kinds

SERVICE_NAME = "tilegen-service"
SERVICE_VERSION = "0.1.0"

# Load configuration
cfg = config.load_config()

logging.basicConfig(
    level=cfg.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Tile Generation Service",
    description="Service for populating board segments with buildings, obstacles and actors",
    version=SERVICE_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HealthResponse(BaseModel):
    """Health check response"""

    status: str
    service: str
    version: str


class GenerateTileRequest(BaseModel):
    """Request to generate one board segment"""

    segment_row: int = Field(..., ge=0, description="Row of the segment within the map")
    segment_col: int = Field(..., ge=0, description="Column of the segment within the map")
    tile_kind: str = Field(..., description="Tile kind: market, town, forest, cave, farm, ...")
    world_seed: Optional[int] = Field(
        default=None, description="World seed (uses default if not provided)"
    )
    regeneration_counter: Optional[int] = Field(
        default=None, ge=0, description="Regeneration counter for a fresh but reproducible layout"
    )


class GenerateMapRequest(BaseModel):
    """Request to generate every segment of a map"""

    kinds: List[List[str]] = Field(
        ..., description="Tile kind names indexed as kinds[segment_row][segment_col]"
    )
    world_seed: Optional[int] = Field(
        default=None, description="World seed (uses default if not provided)"
    )
    regeneration_counter: Optional[int] = Field(default=None, ge=0)


class PlacementModel(BaseModel):
    """An object placed on a segment cell"""

    category: str
    variant_index: int
    variant: Any = None
    position: List[int]
    depth: int


class SegmentModel(BaseModel):
    """A populated board segment"""

    segment_id: str
    segment_row: int
    segment_col: int
    tile_kind: str
    columns: int
    rows: int
    seed: int
    floors: List[PlacementModel]
    buildings: List[PlacementModel]
    obstacles: List[PlacementModel]
    actors: List[PlacementModel]
    free_cells: int
    shortfalls: Dict[str, int] = {}
    valid: bool
    violations: List[str] = []
    metadata: Dict[str, Any] = {}


class GenerateTileResponse(BaseModel):
    """Response from segment generation"""

    success: bool
    segment: SegmentModel
    message: Optional[str] = None


class GenerateMapResponse(BaseModel):
    """Response from map generation"""

    success: bool
    world_seed: int
    regeneration_counter: int
    map_rows: int
    map_columns: int
    segments: List[SegmentModel]


def _load_kinds() -> Dict[str, tile_kinds.TileKind]:
    return tile_kinds.load_tile_kinds(
        cfg.tile_kinds_path, columns=cfg.segment_columns, rows=cfg.segment_rows
    )


def _generation_options() -> Dict[str, Any]:
    return {
        "columns": cfg.segment_columns,
        "rows": cfg.segment_rows,
        "kinds": _load_kinds(),
        "max_attempts": cfg.max_placement_attempts,
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(status="ok", service=SERVICE_NAME, version=SERVICE_VERSION)


@app.get("/api/v1/tile-kinds")
async def list_tile_kinds():
    """List the configured tile kinds and their placement parameters"""
    try:
        kinds = _load_kinds()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid tile kind config: {e}")
    return {"tile_kinds": [kind.to_dict() for kind in kinds.values()]}


@app.post("/api/v1/tiles/generate", response_model=GenerateTileResponse)
async def generate_tile(request: GenerateTileRequest):
    """Generate and populate one board segment."""
    if request.segment_row >= cfg.map_rows or request.segment_col >= cfg.map_columns:
        raise HTTPException(
            status_code=422,
            detail=f"Segment ({request.segment_row}, {request.segment_col}) is outside "
            f"the {cfg.map_rows}x{cfg.map_columns} map",
        )

    try:
        world_seed = (
            request.world_seed if request.world_seed is not None else cfg.world_seed
        )
        segment_seed = seeds.get_regeneration_seed(
            seeds.get_segment_seed(request.segment_row, request.segment_col, world_seed),
            request.regeneration_counter or 0,
        )

        segment = generation.generate_segment(
            request.segment_row,
            request.segment_col,
            request.tile_kind,
            segment_seed,
            map_columns=cfg.map_columns,
            map_rows=cfg.map_rows,
            **_generation_options(),
        )

        message = None
        if segment["shortfalls"]:
            message = f"Segment partially populated: {segment['shortfalls']}"

        return GenerateTileResponse(
            success=True, segment=SegmentModel(**segment), message=message
        )

    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e.args[0]))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception("Segment generation failed")
        raise HTTPException(
            status_code=500, detail=f"Failed to generate segment: {str(e)}"
        )


@app.post("/api/v1/maps/generate", response_model=GenerateMapResponse)
async def generate_map(request: GenerateMapRequest):
    """Generate every segment of a map."""
    try:
        world_seed = (
            request.world_seed if request.world_seed is not None else cfg.world_seed
        )
        map_data = generation.generate_map(
            request.kinds,
            world_seed,
            regeneration_counter=request.regeneration_counter or 0,
            **_generation_options(),
        )
        return GenerateMapResponse(
            success=True,
            world_seed=map_data["world_seed"],
            regeneration_counter=map_data["regeneration_counter"],
            map_rows=map_data["map_rows"],
            map_columns=map_data["map_columns"],
            segments=[SegmentModel(**segment) for segment in map_data["segments"]],
        )

    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e.args[0]))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception("Map generation failed")
        raise HTTPException(status_code=500, detail=f"Failed to generate map: {str(e)}")


@app.get("/api/v1/tiles/seed/{segment_row}/{segment_col}")
async def get_segment_seed(
    segment_row: int, segment_col: int, world_seed: Optional[int] = None
):
    """Get the seed for a specific segment (useful for debugging)"""
    seed = world_seed if world_seed is not None else cfg.world_seed
    segment_seed = seeds.get_segment_seed(segment_row, segment_col, seed)

    return {
        "segment_row": segment_row,
        "segment_col": segment_col,
        "world_seed": seed,
        "segment_seed": segment_seed,
    }


if __name__ == "__main__":
    port = int(os.getenv("TILEGEN_SERVICE_PORT", str(cfg.port)))
    host = os.getenv("TILEGEN_SERVICE_HOST", cfg.host)

    uvicorn.run(
        "main:app", host=host, port=port, reload=cfg.environment == "development"
    )
