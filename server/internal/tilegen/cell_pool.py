"""
Free cell pool for a single board segment.

Tracks which grid cells are still available for placement and picks random
anchors for multi-cell objects. Placing an object removes its anchor plus a
buffer around it so later objects cannot overlap or touch it.
"""

import random
from typing import List, NamedTuple, Optional, Set, Tuple

# Ceiling on rejection-sampling draws before a placement is abandoned
DEFAULT_MAX_ATTEMPTS = 1000

Cell = Tuple[int, int]


class InvalidFootprint(ValueError):
    """Footprint is non-positive or does not fit inside the segment."""


class NoValidPlacement(RuntimeError):
    """No free anchor satisfying the footprint was found within the attempt limit."""

    def __init__(self, width: int, height: int, attempts: int, free_cells: int):
        super().__init__(
            f"No valid anchor for {width}x{height} footprint after {attempts} attempts "
            f"({free_cells} free cells)"
        )
        self.width = width
        self.height = height
        self.attempts = attempts
        self.free_cells = free_cells


class Footprint(NamedTuple):
    """Width and height (in cells) of an object's occupied rectangle."""

    width: int
    height: int


def validate_footprint(footprint: Footprint, columns: int, rows: int) -> Footprint:
    """
    Check a footprint against segment bounds.

    An anchor grows by ``width - 1`` cells to each side, so the footprint
    only fits when ``2 * width - 1 <= columns`` (same for rows).

    Raises:
        InvalidFootprint: If the footprint can never be placed
    """
    width, height = footprint
    if width <= 0 or height <= 0:
        raise InvalidFootprint(f"Footprint must be positive, got {width}x{height}")
    if 2 * width - 1 > columns or 2 * height - 1 > rows:
        raise InvalidFootprint(
            f"Footprint {width}x{height} does not fit a {columns}x{rows} segment"
        )
    return footprint


class FreeCellPool:
    """Set of grid cells currently free for placement."""

    def __init__(
        self,
        columns: int,
        rows: int,
        rng: Optional[random.Random] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        """
        Initialize pool with every cell of a ``columns`` x ``rows`` grid.

        Args:
            columns: Number of columns in the segment
            rows: Number of rows in the segment
            rng: Random source used for sampling (fresh unseeded one if omitted)
            max_attempts: Rejection-sampling ceiling for ``sample_valid_anchor``
        """
        self.columns = columns
        self.rows = rows
        self.rng = rng if rng is not None else random.Random()
        self.max_attempts = max_attempts

        # List keeps a stable enumeration order for index-based access,
        # set gives constant-time membership
        self._cells: List[Cell] = []
        self._members: Set[Cell] = set()
        for x in range(columns):
            for y in range(rows):
                self._cells.append((x, y))
                self._members.add((x, y))

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, cell: Cell) -> bool:
        return cell in self._members

    @property
    def cells(self) -> List[Cell]:
        """Copy of the free cells in enumeration order."""
        return list(self._cells)

    def size(self) -> int:
        return len(self._cells)

    def contains(self, x: int, y: int) -> bool:
        return (x, y) in self._members

    def get(self, index: int) -> Cell:
        return self._cells[index]

    def remove(self, x: int, y: int) -> None:
        """Remove a cell; absent cells are ignored."""
        cell = (x, y)
        if cell in self._members:
            self._members.remove(cell)
            self._cells.remove(cell)

    def remove_at(self, index: int) -> None:
        """Remove the cell at ``index`` in enumeration order; out-of-range is ignored."""
        if not 0 <= index < len(self._cells):
            return
        cell = self._cells.pop(index)
        self._members.discard(cell)

    def add(self, x: int, y: int) -> None:
        """Hand a cell back to the pool (no-op if already free)."""
        cell = (x, y)
        if cell not in self._members:
            self._members.add(cell)
            self._cells.append(cell)

    def exclude_footprint_neighborhood(self, anchor: Cell, footprint: Footprint) -> None:
        """
        Remove the buffer cells around a placed anchor.

        Sweeps offsets starting at 1 along both axes and the diagonals. This
        is a star-shaped approximation of the footprint, not a full
        rectangle, and it leaves the anchor itself alone.
        """
        x, y = anchor
        width, height = footprint
        for dx in range(1, width):
            for dy in range(1, height):
                self.remove(x + dx, y)
                self.remove(x - dx, y)
                self.remove(x, y + dy)
                self.remove(x, y - dy)
                self.remove(x + dx, y + dy)
                self.remove(x + dx, y - dy)
                self.remove(x - dx, y + dy)
                self.remove(x - dx, y - dy)

    def is_valid_anchor(
        self, cell: Cell, footprint: Footprint, bounds: Optional[Tuple[int, int]] = None
    ) -> bool:
        """
        Check whether ``cell`` can anchor an object of the given footprint.

        The anchor grown by the footprint must stay in bounds, and the four
        extremal cells of the footprint must still be free.
        """
        columns, rows = bounds if bounds is not None else (self.columns, self.rows)
        x, y = cell
        width, height = footprint

        if x - width + 1 < 0 or x + width - 1 > columns - 1:
            return False
        if y - height + 1 < 0 or y + height - 1 > rows - 1:
            return False

        return (
            (x - width + 1, y) in self._members
            and (x + width - 1, y) in self._members
            and (x, y + height - 1) in self._members
            and (x, y - height + 1) in self._members
        )

    def sample_valid_anchor(
        self, footprint: Footprint, bounds: Optional[Tuple[int, int]] = None
    ) -> Cell:
        """
        Pick a random free anchor for ``footprint`` and claim it.

        Draws uniformly from the pool until a valid anchor turns up, then
        removes the anchor and its buffer neighbourhood.

        Args:
            footprint: Object footprint (width, height)
            bounds: (columns, rows) to check against; defaults to the pool grid

        Returns:
            The claimed anchor cell

        Raises:
            NoValidPlacement: If the pool is empty or ``max_attempts`` draws fail
        """
        footprint = Footprint(*footprint)
        anchor = None
        for _ in range(self.max_attempts):
            if not self._cells:
                break
            candidate = self._cells[self.rng.randrange(len(self._cells))]
            if self.is_valid_anchor(candidate, footprint, bounds):
                anchor = candidate
                break

        if anchor is None:
            raise NoValidPlacement(
                footprint.width, footprint.height, self.max_attempts, len(self._cells)
            )

        self.remove(*anchor)
        self.exclude_footprint_neighborhood(anchor, footprint)
        return anchor
