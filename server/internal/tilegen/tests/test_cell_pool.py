"""
Tests for the free cell pool.
"""

import sys
from pathlib import Path

# Add server directory to path
server_dir = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(server_dir))

import pytest
from internal.tilegen import cell_pool
from internal.tilegen import seeds
from internal.tilegen.cell_pool import Footprint, FreeCellPool, InvalidFootprint, NoValidPlacement


def test_pool_starts_full():
    """Test pool contains every cell of the grid"""
    pool = FreeCellPool(10, 10)

    assert pool.size() == 100
    assert len(pool) == 100
    assert pool.contains(0, 0)
    assert pool.contains(9, 9)
    assert not pool.contains(10, 0)
    assert not pool.contains(0, -1)
    # Column-major enumeration order
    assert pool.get(0) == (0, 0)
    assert pool.get(1) == (0, 1)
    assert pool.get(10) == (1, 0)


def test_queries_do_not_mutate():
    """Test contains and size leave the pool untouched"""
    pool = FreeCellPool(4, 3)
    before = pool.cells

    pool.contains(1, 1)
    pool.contains(7, 7)
    pool.size()

    assert pool.cells == before


def test_remove():
    """Test removal of present and absent cells"""
    pool = FreeCellPool(5, 5)

    pool.remove(2, 3)
    assert not pool.contains(2, 3)
    assert pool.size() == 24

    # Absent cells are a no-op
    pool.remove(2, 3)
    pool.remove(50, 50)
    assert pool.size() == 24


def test_remove_at():
    """Test removal by enumeration index"""
    pool = FreeCellPool(3, 3)

    pool.remove_at(0)
    assert not pool.contains(0, 0)
    assert pool.get(0) == (0, 1)
    assert pool.size() == 8

    # Out of range indices are ignored
    pool.remove_at(8)
    pool.remove_at(-1)
    assert pool.size() == 8


def test_add_returns_cell():
    """Test a removed cell can be handed back once"""
    pool = FreeCellPool(3, 3)
    pool.remove(1, 1)

    pool.add(1, 1)
    assert pool.contains(1, 1)
    assert pool.size() == 9

    pool.add(1, 1)
    assert pool.size() == 9


def test_exclude_neighborhood_2x2():
    """Test 2x2 exclusion removes the eight surrounding cells but not the anchor"""
    pool = FreeCellPool(10, 10)

    pool.exclude_footprint_neighborhood((5, 5), Footprint(2, 2))

    assert pool.contains(5, 5)
    for cell in [(6, 5), (4, 5), (5, 6), (5, 4), (6, 6), (6, 4), (4, 6), (4, 4)]:
        assert not pool.contains(*cell)
    assert pool.contains(7, 5)
    assert pool.contains(5, 7)
    assert pool.size() == 92


def test_exclude_neighborhood_is_star_shaped():
    """Test 3x2 exclusion sweeps the axes and diagonals, not a full rectangle"""
    pool = FreeCellPool(10, 10)

    pool.exclude_footprint_neighborhood((5, 5), Footprint(3, 2))

    for cell in [(7, 5), (3, 5), (7, 6), (7, 4), (3, 6), (3, 4)]:
        assert not pool.contains(*cell)
    # Height 2 only reaches one row up and down
    assert pool.contains(5, 7)
    assert pool.contains(5, 3)
    assert pool.size() == 86


def test_exclude_neighborhood_single_cell():
    """Test 1x1 footprints exclude nothing"""
    pool = FreeCellPool(5, 5)

    pool.exclude_footprint_neighborhood((2, 2), Footprint(1, 1))

    assert pool.size() == 25


def test_exclude_neighborhood_near_edge():
    """Test exclusion off the grid edge is harmless"""
    pool = FreeCellPool(5, 5)

    pool.exclude_footprint_neighborhood((0, 0), Footprint(2, 2))

    assert pool.contains(0, 0)
    assert not pool.contains(1, 0)
    assert not pool.contains(0, 1)
    assert not pool.contains(1, 1)
    assert pool.size() == 22


def test_sample_single_cell():
    """Test sampling a 1x1 anchor claims exactly that cell"""
    pool = FreeCellPool(10, 10, seeds.seeded_random(1))

    anchor = pool.sample_valid_anchor(Footprint(1, 1))

    assert 0 <= anchor[0] < 10
    assert 0 <= anchor[1] < 10
    assert not pool.contains(*anchor)
    assert pool.size() == 99


def test_sample_respects_bounds_and_claims_footprint():
    """Test 2x2 anchors stay one cell inside the grid and claim their extremal cells"""
    for seed in range(25):
        pool = FreeCellPool(10, 10, seeds.seeded_random(seed))

        x, y = pool.sample_valid_anchor(Footprint(2, 2))

        assert 1 <= x <= 8
        assert 1 <= y <= 8
        assert not pool.contains(x, y)
        for cell in [(x - 1, y), (x + 1, y), (x, y + 1), (x, y - 1)]:
            assert not pool.contains(*cell)


def test_sample_requires_free_extremal_cells():
    """Test anchors whose extremal cells are taken are rejected"""
    pool = FreeCellPool(3, 3, seeds.seeded_random(7))
    # Only (1, 1) can anchor a 2x2 footprint on a 3x3 grid
    assert pool.sample_valid_anchor(Footprint(2, 2)) == (1, 1)

    pool = FreeCellPool(3, 3, seeds.seeded_random(7), max_attempts=50)
    pool.remove(2, 1)
    with pytest.raises(NoValidPlacement):
        pool.sample_valid_anchor(Footprint(2, 2))


def test_sample_with_explicit_bounds():
    """Test caller-supplied bounds narrow the valid anchors"""
    pool = FreeCellPool(10, 10, seeds.seeded_random(3))

    for _ in range(5):
        x, y = pool.sample_valid_anchor(Footprint(1, 1), bounds=(3, 3))
        assert x <= 2
        assert y <= 2


def test_sample_is_deterministic():
    """Test the same seed yields the same anchor sequence"""
    pool1 = FreeCellPool(10, 10, seeds.seeded_random(42))
    pool2 = FreeCellPool(10, 10, seeds.seeded_random(42))

    anchors1 = [pool1.sample_valid_anchor(Footprint(2, 2)) for _ in range(3)]
    anchors2 = [pool2.sample_valid_anchor(Footprint(2, 2)) for _ in range(3)]

    assert anchors1 == anchors2
    assert pool1.cells == pool2.cells


def test_sample_shrinks_pool_monotonically():
    """Test pool size never grows while sampling"""
    pool = FreeCellPool(10, 10, seeds.seeded_random(5))
    sizes = [pool.size()]

    for _ in range(10):
        pool.sample_valid_anchor(Footprint(1, 1))
        sizes.append(pool.size())

    assert all(later < earlier for earlier, later in zip(sizes, sizes[1:]))


def test_sample_impossible_footprint_is_bounded():
    """Test over-packed pools fail after the attempt ceiling instead of looping"""
    pool = FreeCellPool(10, 10, seeds.seeded_random(9), max_attempts=200)
    for cell in pool.cells:
        if cell not in [(0, 0), (5, 5), (9, 9)]:
            pool.remove(*cell)

    with pytest.raises(NoValidPlacement) as exc_info:
        pool.sample_valid_anchor(Footprint(2, 2))

    assert exc_info.value.attempts == 200
    assert exc_info.value.free_cells == 3
    # Failed sampling claims nothing
    assert pool.size() == 3


def test_sample_empty_pool():
    """Test sampling from an empty pool fails immediately"""
    pool = FreeCellPool(1, 1, seeds.seeded_random(0))
    pool.remove(0, 0)

    with pytest.raises(NoValidPlacement):
        pool.sample_valid_anchor(Footprint(1, 1))


def test_validate_footprint():
    """Test footprint validation against segment size"""
    assert cell_pool.validate_footprint(Footprint(2, 2), 10, 10) == (2, 2)
    assert cell_pool.validate_footprint(Footprint(5, 5), 10, 10) == (5, 5)

    with pytest.raises(InvalidFootprint):
        cell_pool.validate_footprint(Footprint(0, 1), 10, 10)
    with pytest.raises(InvalidFootprint):
        cell_pool.validate_footprint(Footprint(2, -1), 10, 10)
    with pytest.raises(InvalidFootprint):
        cell_pool.validate_footprint(Footprint(6, 2), 10, 10)
