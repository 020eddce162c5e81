"""
Tile kind parameter tables.

Each tile kind (market, town, forest, ...) defines how many buildings,
obstacles and actors a segment of that kind receives and how large its
buildings are. Kinds are loaded from JSON so new ones need no code change.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional

from .cell_pool import Footprint, validate_footprint

_KINDS_CACHE: Dict[str, Dict[str, "TileKind"]] = {}
# __file__ = server/internal/tilegen/tile_kinds.py
# config lives at server/config/tile-kinds.json
_DEFAULT_PATH = Path(__file__).resolve().parents[2] / "config" / "tile-kinds.json"

OBSTACLE_FOOTPRINT = Footprint(1, 1)
ACTOR_FOOTPRINT = Footprint(1, 1)


class InvalidTileKind(ValueError):
    """Tile kind definition is malformed."""


class Count(NamedTuple):
    """Inclusive range for a random object count."""

    minimum: int
    maximum: int

    def draw(self, rng) -> int:
        return rng.randint(self.minimum, self.maximum)


class TileKind:
    """Placement parameters for one kind of tile."""

    def __init__(
        self,
        name: str,
        building_count: Count,
        obstacle_count: Count,
        actor_count: Count,
        building_footprint: Footprint,
        description: str = "",
    ):
        self.name = name
        self.building_count = building_count
        self.obstacle_count = obstacle_count
        self.actor_count = actor_count
        self.building_footprint = building_footprint
        self.description = description

    def validate(self, columns: int, rows: int) -> "TileKind":
        """
        Check counts and footprint against a segment size.

        Raises:
            InvalidTileKind: If a count range is negative or inverted
            InvalidFootprint: If the building footprint cannot fit
        """
        for label, count in (
            ("building_count", self.building_count),
            ("obstacle_count", self.obstacle_count),
            ("actor_count", self.actor_count),
        ):
            if count.minimum < 0 or count.maximum < count.minimum:
                raise InvalidTileKind(
                    f"{self.name}.{label}: invalid range {count.minimum}..{count.maximum}"
                )
        validate_footprint(self.building_footprint, columns, rows)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "building_count": {"min": self.building_count.minimum, "max": self.building_count.maximum},
            "obstacle_count": {"min": self.obstacle_count.minimum, "max": self.obstacle_count.maximum},
            "actor_count": {"min": self.actor_count.minimum, "max": self.actor_count.maximum},
            "building_footprint": {
                "width": self.building_footprint.width,
                "height": self.building_footprint.height,
            },
        }


def _parse_count(name: str, key: str, raw: Dict[str, Any]) -> Count:
    value = raw.get(key)
    if not isinstance(value, dict) or "min" not in value or "max" not in value:
        raise InvalidTileKind(f"{name}.{key}: expected {{'min': int, 'max': int}}")
    return Count(int(value["min"]), int(value["max"]))


def parse_tile_kind(name: str, raw: Dict[str, Any]) -> TileKind:
    """Build a TileKind from its JSON definition."""
    footprint = raw.get("building_footprint", {"width": 1, "height": 1})
    if not isinstance(footprint, dict) or "width" not in footprint or "height" not in footprint:
        raise InvalidTileKind(f"{name}.building_footprint: expected width and height")

    return TileKind(
        name=name.lower(),
        building_count=_parse_count(name, "building_count", raw),
        obstacle_count=_parse_count(name, "obstacle_count", raw),
        actor_count=_parse_count(name, "actor_count", raw),
        building_footprint=Footprint(int(footprint["width"]), int(footprint["height"])),
        description=raw.get("description", ""),
    )


def parse_tile_kinds(data: Dict[str, Any], columns: int = 10, rows: int = 10) -> Dict[str, TileKind]:
    """Parse and validate the ``tile_kinds`` mapping of a config document."""
    raw_kinds = data.get("tile_kinds")
    if not isinstance(raw_kinds, dict) or not raw_kinds:
        raise InvalidTileKind("Config must contain a non-empty 'tile_kinds' mapping")

    kinds = {}
    for name, raw in raw_kinds.items():
        kind = parse_tile_kind(name, raw).validate(columns, rows)
        kinds[kind.name] = kind
    return kinds


def load_tile_kinds(
    path: Optional[Path] = None, columns: int = 10, rows: int = 10
) -> Dict[str, TileKind]:
    """Load, validate and cache tile kinds from a JSON file."""
    path = Path(path) if path is not None else _DEFAULT_PATH
    cache_key = f"{path.resolve()}:{columns}x{rows}"
    if cache_key in _KINDS_CACHE:
        return _KINDS_CACHE[cache_key]

    if not path.exists():
        raise FileNotFoundError(f"Tile kind config not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    kinds = parse_tile_kinds(data, columns, rows)
    _KINDS_CACHE[cache_key] = kinds
    return kinds


def get_tile_kind(name: str, kinds: Optional[Dict[str, TileKind]] = None) -> TileKind:
    """
    Look up a tile kind by name (case-insensitive).

    Raises:
        KeyError: If the kind is not defined
    """
    kinds = kinds if kinds is not None else load_tile_kinds()
    key = name.lower()
    if key not in kinds:
        raise KeyError(f"Unknown tile kind: {name}")
    return kinds[key]


def clear_cache() -> None:
    _KINDS_CACHE.clear()
