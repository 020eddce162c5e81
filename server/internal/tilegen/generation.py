"""
Segment and map generation functions.
Builds populated board segments from tile kinds and deterministic seeds.
"""

import logging
from typing import Any, Dict, List, Optional

from . import seeds
from . import tile_kinds
from . import validation
from .cell_pool import DEFAULT_MAX_ATTEMPTS
from .populator import TilePopulator

logger = logging.getLogger(__name__)

# Layout version - increment this when the placement algorithm changes
# Version history:
#   1: Rejection-sampled anchors with star-shaped exclusion buffers
LAYOUT_VERSION = 1

DEFAULT_SEGMENT_COLUMNS = 10
DEFAULT_SEGMENT_ROWS = 10


def populate_segment(
    segment_row: int,
    segment_col: int,
    tile_kind_name: str,
    segment_seed: int,
    columns: int = DEFAULT_SEGMENT_COLUMNS,
    rows: int = DEFAULT_SEGMENT_ROWS,
    map_columns: int = 10,
    map_rows: int = 10,
    kinds: Optional[Dict[str, tile_kinds.TileKind]] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    asset_catalog: Optional[Dict[str, List[Any]]] = None,
) -> TilePopulator:
    """
    Populate one board segment.

    Args:
        segment_row: Row of the segment within the map
        segment_col: Column of the segment within the map
        tile_kind_name: Name of the tile kind (case-insensitive)
        segment_seed: Seed for this segment's random generator
        columns: Columns of cells per segment
        rows: Rows of cells per segment
        map_columns: Segments per map row
        map_rows: Segments per map column
        kinds: Tile kind table (loaded from the default config if omitted)
        max_attempts: Rejection-sampling ceiling per placement
        asset_catalog: Variant lists per category

    Returns:
        The populated TilePopulator

    Raises:
        KeyError: If the tile kind is unknown
    """
    if kinds is None:
        kinds = tile_kinds.load_tile_kinds(columns=columns, rows=rows)
    kind = tile_kinds.get_tile_kind(tile_kind_name, kinds)

    populator = TilePopulator(
        kind,
        segment_row=segment_row,
        segment_col=segment_col,
        rng=seeds.seeded_random(segment_seed),
        columns=columns,
        rows=rows,
        map_columns=map_columns,
        map_rows=map_rows,
        asset_catalog=asset_catalog,
        max_attempts=max_attempts,
    )
    return populator.setup()


def generate_segment(
    segment_row: int,
    segment_col: int,
    tile_kind_name: str,
    segment_seed: int,
    **kwargs,
) -> Dict[str, Any]:
    """
    Generate a segment and return it as a serialisable dictionary.

    Accepts the same keyword arguments as ``populate_segment``.
    """
    populator = populate_segment(
        segment_row, segment_col, tile_kind_name, segment_seed, **kwargs
    )
    violations = validation.validate_layout(populator)
    if violations:
        logger.warning("%s has layout violations: %s", populator.name, violations)

    segment = populator.to_dict()
    segment["seed"] = segment_seed
    segment["valid"] = not violations
    segment["violations"] = violations
    segment["metadata"] = {
        "generated": True,
        "version": LAYOUT_VERSION,
        "building_count": len(populator.buildings),
        "obstacle_count": len(populator.obstacles),
        "actor_count": len(populator.actors),
    }
    return segment


def generate_map(
    kind_grid: List[List[str]],
    world_seed: int,
    regeneration_counter: int = 0,
    **kwargs,
) -> Dict[str, Any]:
    """
    Generate every segment of a map.

    Each segment gets its own generator seeded from its position, so segments
    are independent of each other and of generation order.

    Args:
        kind_grid: Tile kind names indexed as kind_grid[segment_row][segment_col]
        world_seed: Global world seed
        regeneration_counter: Bump to get a different but reproducible layout
        **kwargs: Passed through to ``populate_segment``

    Returns:
        Dictionary with map dimensions and the generated segments

    Raises:
        ValueError: If the grid is empty or ragged
    """
    if not kind_grid or not kind_grid[0]:
        raise ValueError("Map must contain at least one segment")
    map_columns = len(kind_grid[0])
    if any(len(row) != map_columns for row in kind_grid):
        raise ValueError("All map rows must have the same number of segments")
    map_rows = len(kind_grid)

    segments = []
    for segment_row, row in enumerate(kind_grid):
        for segment_col, kind_name in enumerate(row):
            segment_seed = seeds.get_regeneration_seed(
                seeds.get_segment_seed(segment_row, segment_col, world_seed),
                regeneration_counter,
            )
            segments.append(
                generate_segment(
                    segment_row,
                    segment_col,
                    kind_name,
                    segment_seed,
                    map_columns=map_columns,
                    map_rows=map_rows,
                    **kwargs,
                )
            )

    return {
        "world_seed": world_seed,
        "regeneration_counter": regeneration_counter,
        "map_rows": map_rows,
        "map_columns": map_columns,
        "segments": segments,
    }
