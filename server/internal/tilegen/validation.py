"""
Layout validation for populated segments.

Checks that every placed object stays inside the segment, that no two
objects share a footprint extremal cell, and that nothing is anchored on the
map border or the road band.
"""

from typing import List, Set

import shapely.geometry as sg

from . import assets
from .cell_pool import Cell, Footprint
from .populator import Placement, TilePopulator
from .tile_kinds import ACTOR_FOOTPRINT, OBSTACLE_FOOTPRINT


def footprint_for(populator: TilePopulator, placement: Placement) -> Footprint:
    if placement.category == assets.BUILDING:
        return populator.tile_kind.building_footprint
    if placement.category == assets.ACTOR:
        return ACTOR_FOOTPRINT
    return OBSTACLE_FOOTPRINT


def extremal_cells(anchor: Cell, footprint: Footprint) -> Set[Cell]:
    """The four cells at the tips of a footprint grown from ``anchor``."""
    x, y = anchor
    width, height = footprint
    return {
        (x - width + 1, y),
        (x + width - 1, y),
        (x, y + height - 1),
        (x, y - height + 1),
    }


def validate_layout(populator: TilePopulator) -> List[str]:
    """
    Check a populated segment.

    Returns:
        List of human-readable violations (empty when the layout is valid)
    """
    violations = []
    segment = sg.box(0, 0, populator.columns - 1, populator.rows - 1)

    claimed = []
    for placement in populator.placements:
        footprint = footprint_for(populator, placement)
        label = f"{placement.category} at ({placement.x}, {placement.y})"

        cells = extremal_cells(placement.cell, footprint)
        if not all(segment.covers(sg.Point(cell)) for cell in cells):
            violations.append(f"{label} extends outside the segment")

        if placement.cell in populator.border_cells:
            violations.append(f"{label} is anchored on the map border")
        if placement.cell in populator.road_cells:
            violations.append(f"{label} is anchored on the road")

        for other_label, other_cells in claimed:
            if cells & other_cells:
                violations.append(f"{label} overlaps {other_label}")
        claimed.append((label, cells))

    return violations
