"""
Board segment population.

Lays out the floor, outer walls, road band, buildings, obstacles and actors
of one board segment by drawing anchors from a FreeCellPool.
"""

import logging
import random
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from . import assets
from .actors import Actor
from .cell_pool import DEFAULT_MAX_ATTEMPTS, Cell, Footprint, FreeCellPool, NoValidPlacement
from .tile_kinds import ACTOR_FOOTPRINT, OBSTACLE_FOOTPRINT, Count, TileKind

logger = logging.getLogger(__name__)

# Returned by empty_location() once the pool is exhausted
EMPTY_LOCATION = (-1, -1, -1)


class Placement:
    """An object placed on a segment cell."""

    def __init__(
        self,
        category: str,
        variant_index: int,
        handle: Any,
        x: int,
        y: int,
        depth: int,
    ):
        self.category = category
        self.variant_index = variant_index
        self.handle = handle
        self.x = x
        self.y = y
        self.depth = depth
        self.visible = False

    @property
    def cell(self) -> Cell:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, Any]:
        handle = self.handle.to_dict() if hasattr(self.handle, "to_dict") else self.handle
        return {
            "category": self.category,
            "variant_index": self.variant_index,
            "variant": handle,
            "position": [self.x, self.y],
            "depth": self.depth,
        }

    def __repr__(self) -> str:
        return f"Placement({self.category!r}, {self.variant_index}, ({self.x}, {self.y}))"


class TilePopulator:
    """Populates one board segment of a larger map."""

    def __init__(
        self,
        tile_kind: TileKind,
        segment_row: int = 0,
        segment_col: int = 0,
        rng: Optional[random.Random] = None,
        columns: int = 10,
        rows: int = 10,
        map_columns: int = 10,
        map_rows: int = 10,
        asset_catalog: Optional[Dict[str, List[Any]]] = None,
        actor_factory: Callable[[Any], Any] = Actor,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        """
        Initialize populator for the segment at (segment_row, segment_col).

        Args:
            tile_kind: Placement parameters for this segment
            segment_row: Row of the segment within the map
            segment_col: Column of the segment within the map
            rng: Random source shared by the pool and all passes
            columns: Columns of cells in the segment
            rows: Rows of cells in the segment
            map_columns: Segments per map row (decides the right map edge)
            map_rows: Segments per map column (decides the top map edge)
            asset_catalog: Variant lists per category (defaults to assets.DEFAULT_VARIANTS)
            actor_factory: Builds an actor collaborator from its variant handle
            max_attempts: Rejection-sampling ceiling per placement

        Raises:
            InvalidFootprint: If the kind's building footprint cannot fit
            InvalidTileKind: If the kind's count ranges are malformed
        """
        self.tile_kind = tile_kind.validate(columns, rows)
        self.segment_row = segment_row
        self.segment_col = segment_col
        self.rng = rng if rng is not None else random.Random()
        self.columns = columns
        self.rows = rows
        self.map_columns = map_columns
        self.map_rows = map_rows
        self.asset_catalog = asset_catalog if asset_catalog is not None else assets.DEFAULT_VARIANTS
        self.actor_factory = actor_factory
        self.max_attempts = max_attempts

        # Road band runs through the middle two columns and rows
        self.road_columns = (columns // 2 - 1, columns // 2)
        self.road_rows = (rows // 2 - 1, rows // 2)

        self.pool: Optional[FreeCellPool] = None
        self.floors: List[Placement] = []
        self.buildings: List[Placement] = []
        self.obstacles: List[Placement] = []
        self.actors: List[Placement] = []
        self.border_cells: Set[Cell] = set()
        self.road_cells: Set[Cell] = set()
        self.shortfalls: Dict[str, int] = {}

    @property
    def name(self) -> str:
        return f"Board {self.segment_row} {self.segment_col}"

    def is_border_cell(self, x: int, y: int) -> bool:
        """True for cells on an edge of the overall map."""
        return (
            (x == 0 and self.segment_col == 0)
            or (x == self.columns - 1 and self.segment_col == self.map_columns - 1)
            or (y == 0 and self.segment_row == 0)
            or (y == self.rows - 1 and self.segment_row == self.map_rows - 1)
        )

    def is_road_cell(self, x: int, y: int) -> bool:
        return x in self.road_columns or y in self.road_rows

    def depth_of(self, y: int) -> int:
        # Rows nearer the bottom are drawn in front
        return self.rows - y

    def setup(self) -> "TilePopulator":
        """Run the full layout: floor, buildings, obstacles, actors."""
        self.pool = FreeCellPool(self.columns, self.rows, self.rng, self.max_attempts)
        self.floors = []
        self.border_cells = set()
        self.road_cells = set()
        self.shortfalls = {}

        self._board_setup()

        kind = self.tile_kind
        self.buildings = self._layout_objects(
            assets.BUILDING, kind.building_count, kind.building_footprint
        )
        self.obstacles = self._layout_objects(
            assets.OBSTACLE, kind.obstacle_count, OBSTACLE_FOOTPRINT
        )
        self.actors = self._layout_actors(kind.actor_count)

        logger.debug(
            "%s (%s): %d buildings, %d obstacles, %d actors, %d free cells",
            self.name,
            kind.name,
            len(self.buildings),
            len(self.obstacles),
            len(self.actors),
            self.pool.size(),
        )
        return self

    def _pick_variant(self, category: str) -> Tuple[int, Any]:
        variants = assets.get_variants(category, self.asset_catalog)
        index = self.rng.randrange(len(variants))
        return index, variants[index]

    def _board_setup(self) -> None:
        """Lay the floor and carve the map border and road band out of the pool."""
        for x in range(self.columns):
            for y in range(self.rows):
                category = assets.FLOOR
                index, handle = self._pick_variant(assets.FLOOR)

                if self.is_border_cell(x, y):
                    category = assets.OUTER_WALL
                    index, handle = self._pick_variant(assets.OUTER_WALL)
                    self.pool.remove(x, y)
                    self.border_cells.add((x, y))

                # Nothing may be placed on the road
                if self.is_road_cell(x, y):
                    self.pool.remove(x, y)
                    self.road_cells.add((x, y))

                self.floors.append(Placement(category, index, handle, x, y, 0))

    def _claim_anchors(self, category: str, count_range: Count, footprint: Footprint):
        """Yield anchors for one pass, stopping early when the pool runs out."""
        count = count_range.draw(self.rng)

        if self.pool.size() == 0:
            logger.debug("%s: pool empty, skipping %s pass", self.name, category)
            return

        for placed in range(count):
            try:
                anchor = self.pool.sample_valid_anchor(footprint)
            except NoValidPlacement as e:
                self.shortfalls[category] = count - placed
                logger.warning(
                    "%s: placed %d of %d %s objects: %s",
                    self.name,
                    placed,
                    count,
                    category,
                    e,
                )
                return
            yield anchor

    def _layout_objects(
        self, category: str, count_range: Count, footprint: Footprint
    ) -> List[Placement]:
        placements = []
        for x, y in self._claim_anchors(category, count_range, footprint):
            index, handle = self._pick_variant(category)
            placements.append(Placement(category, index, handle, x, y, self.depth_of(y)))
        return placements

    def _layout_actors(self, count_range: Count) -> List[Placement]:
        variants = assets.get_variants(assets.ACTOR, self.asset_catalog)
        placements = []
        for x, y in self._claim_anchors(assets.ACTOR, count_range, ACTOR_FOOTPRINT):
            depth = self.depth_of(y)
            actor = self.actor_factory(variants[0])
            actor.init()
            actor.place_at(self.segment_col, self.segment_row, x, y, depth)
            placements.append(Placement(assets.ACTOR, 0, actor, x, y, depth))
        return placements

    @property
    def placements(self) -> List[Placement]:
        """Buildings, obstacles and actors in placement order."""
        return self.buildings + self.obstacles + self.actors

    def _set_visible(self, visible: bool) -> None:
        for placement in self.floors + self.obstacles + self.buildings:
            placement.visible = visible
        for placement in self.actors:
            placement.visible = visible
            if visible:
                placement.handle.draw()
            else:
                placement.handle.undraw()

    def draw(self) -> None:
        """Show this segment."""
        self._set_visible(True)

    def undraw(self) -> None:
        """Hide this segment."""
        self._set_visible(False)

    def empty_location(self) -> Tuple[int, int, int]:
        """
        Claim a random free cell.

        Returns:
            (x, y, depth) of the claimed cell, or EMPTY_LOCATION if none remain
        """
        if self.pool is None or self.pool.size() == 0:
            return EMPTY_LOCATION

        index = self.rng.randrange(self.pool.size())
        x, y = self.pool.get(index)
        self.pool.remove_at(index)
        return (x, y, self.depth_of(y))

    def object_at(self, x: int, y: int) -> bool:
        """Is there a building or obstacle anchored at (x, y)?"""
        for placement in self.buildings:
            if placement.x == x and placement.y == y:
                return True
        for placement in self.obstacles:
            if placement.x == x and placement.y == y:
                return True
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "segment_id": f"{self.segment_row}_{self.segment_col}",
            "segment_row": self.segment_row,
            "segment_col": self.segment_col,
            "tile_kind": self.tile_kind.name,
            "columns": self.columns,
            "rows": self.rows,
            "floors": [p.to_dict() for p in self.floors],
            "buildings": [p.to_dict() for p in self.buildings],
            "obstacles": [p.to_dict() for p in self.obstacles],
            "actors": [p.to_dict() for p in self.actors],
            "free_cells": self.pool.size() if self.pool is not None else 0,
            "shortfalls": dict(self.shortfalls),
        }
