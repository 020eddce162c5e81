"""
Seed generation utilities for deterministic tile population.
"""

import random


def get_segment_seed(segment_row: int, segment_col: int, world_seed: int) -> int:
    """
    Generate deterministic seed for a board segment.

    Args:
        segment_row: Row of the segment within the map
        segment_col: Column of the segment within the map
        world_seed: Global world seed

    Returns:
        Deterministic segment seed
    """
    # Integer tuples hash identically across processes
    # Modulo to keep within 32-bit signed integer range
    seed = hash((segment_row, segment_col, world_seed)) % (2**31)
    return seed


def get_regeneration_seed(segment_seed: int, regeneration_counter: int) -> int:
    """
    Generate seed for a regenerated segment.

    A counter of 0 keeps the original segment seed so that the first layout
    of every segment is stable.
    """
    if regeneration_counter == 0:
        return segment_seed
    return hash((segment_seed, regeneration_counter)) % (2**31)


def seeded_random(seed: int) -> random.Random:
    """
    Create deterministic random number generator.

    Args:
        seed: Seed value

    Returns:
        Seeded Random instance
    """
    return random.Random(seed)
