"""
Tests for tile kind configuration loading.
"""

import json
import random
import sys
from pathlib import Path

# Add server directory to path
server_dir = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(server_dir))

import pytest
from internal.tilegen import tile_kinds
from internal.tilegen.cell_pool import Footprint, InvalidFootprint
from internal.tilegen.tile_kinds import Count, InvalidTileKind


def _write_config(tmp_path, kinds):
    path = tmp_path / "tile-kinds.json"
    path.write_text(json.dumps({"tile_kinds": kinds}), encoding="utf-8")
    return path


def _kind(building=(1, 1), obstacle=(0, 0), actor=(0, 0), footprint=(2, 2)):
    return {
        "building_count": {"min": building[0], "max": building[1]},
        "obstacle_count": {"min": obstacle[0], "max": obstacle[1]},
        "actor_count": {"min": actor[0], "max": actor[1]},
        "building_footprint": {"width": footprint[0], "height": footprint[1]},
    }


def test_load_default_kinds():
    """Test the shipped config defines the five reference kinds"""
    kinds = tile_kinds.load_tile_kinds()

    assert set(kinds) == {"market", "town", "forest", "cave", "farm"}

    market = kinds["market"]
    assert market.building_count == Count(1, 2)
    assert market.obstacle_count == Count(0, 0)
    assert market.actor_count == Count(1, 2)
    assert market.building_footprint == Footprint(2, 2)

    forest = kinds["forest"]
    assert forest.building_count == Count(0, 0)
    assert forest.obstacle_count == Count(10, 30)
    assert forest.building_footprint == Footprint(1, 1)

    assert kinds["town"].obstacle_count == Count(0, 5)
    assert kinds["cave"].building_count == Count(1, 1)
    assert kinds["farm"].actor_count == Count(0, 1)


def test_get_tile_kind_case_insensitive():
    """Test kind lookup ignores case"""
    assert tile_kinds.get_tile_kind("Market").name == "market"
    assert tile_kinds.get_tile_kind("FOREST").name == "forest"


def test_get_unknown_tile_kind():
    """Test unknown kinds raise KeyError"""
    with pytest.raises(KeyError):
        tile_kinds.get_tile_kind("volcano")


def test_load_custom_kinds(tmp_path):
    """Test new kinds can be added without code changes"""
    path = _write_config(tmp_path, {"Swamp": _kind(obstacle=(3, 8), footprint=(1, 1))})

    kinds = tile_kinds.load_tile_kinds(path)

    assert list(kinds) == ["swamp"]
    assert kinds["swamp"].obstacle_count == Count(3, 8)
    # Cached per path
    assert tile_kinds.load_tile_kinds(path) is kinds


def test_load_missing_file(tmp_path):
    """Test missing config raises FileNotFoundError"""
    with pytest.raises(FileNotFoundError):
        tile_kinds.load_tile_kinds(tmp_path / "missing.json")


def test_invalid_count_ranges():
    """Test negative or inverted ranges are rejected"""
    with pytest.raises(InvalidTileKind):
        tile_kinds.parse_tile_kinds({"tile_kinds": {"bad": _kind(building=(3, 1))}})
    with pytest.raises(InvalidTileKind):
        tile_kinds.parse_tile_kinds({"tile_kinds": {"bad": _kind(actor=(-1, 2))}})

    raw = _kind()
    del raw["obstacle_count"]
    with pytest.raises(InvalidTileKind):
        tile_kinds.parse_tile_kinds({"tile_kinds": {"bad": raw}})


def test_empty_config_rejected():
    """Test a config without kinds is rejected"""
    with pytest.raises(InvalidTileKind):
        tile_kinds.parse_tile_kinds({})
    with pytest.raises(InvalidTileKind):
        tile_kinds.parse_tile_kinds({"tile_kinds": {}})


def test_invalid_footprint_rejected():
    """Test footprints that cannot fit the segment fail at configuration time"""
    with pytest.raises(InvalidFootprint):
        tile_kinds.parse_tile_kinds({"tile_kinds": {"big": _kind(footprint=(0, 2))}})
    with pytest.raises(InvalidFootprint):
        tile_kinds.parse_tile_kinds(
            {"tile_kinds": {"big": _kind(footprint=(3, 3))}}, columns=4, rows=4
        )


def test_count_draw_within_range():
    """Test counts are drawn inclusively"""
    rng = random.Random(0)
    count = Count(2, 4)

    draws = {count.draw(rng) for _ in range(200)}

    assert draws == {2, 3, 4}
    assert Count(0, 0).draw(rng) == 0


def test_to_dict():
    """Test kinds serialise back to the config shape"""
    data = tile_kinds.get_tile_kind("cave").to_dict()

    assert data["name"] == "cave"
    assert data["building_count"] == {"min": 1, "max": 1}
    assert data["obstacle_count"] == {"min": 5, "max": 10}
    assert data["building_footprint"] == {"width": 2, "height": 2}
