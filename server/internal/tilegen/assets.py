"""
Default asset variants for each placement category.

The populator only picks an index into these lists; what a variant actually
is (a prefab, a sprite name, ...) is up to the renderer.
"""

from typing import Any, Dict, List

FLOOR = "floor"
OUTER_WALL = "outer_wall"
BUILDING = "building"
OBSTACLE = "obstacle"
ACTOR = "actor"

DEFAULT_VARIANTS: Dict[str, List[Any]] = {
    FLOOR: ["floor_grass", "floor_dirt", "floor_stone", "floor_sand"],
    OUTER_WALL: ["outer_wall_rock", "outer_wall_cliff", "outer_wall_water"],
    BUILDING: ["building_house", "building_stall", "building_barn", "building_cave"],
    OBSTACLE: ["obstacle_tree", "obstacle_bush", "obstacle_rock", "obstacle_fence"],
    ACTOR: ["actor_villager"],
}


def get_variants(category: str, catalog: Dict[str, List[Any]] = None) -> List[Any]:
    """
    Get the variant list for a category.

    Raises:
        KeyError: If the category has no variants
    """
    catalog = catalog if catalog is not None else DEFAULT_VARIANTS
    variants = catalog.get(category)
    if not variants:
        raise KeyError(f"No asset variants for category: {category}")
    return variants
