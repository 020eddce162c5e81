"""
Default actor collaborator for populated segments.

The populator only needs ``init``, ``place_at``, ``draw`` and ``undraw``;
any object providing them can be supplied through ``actor_factory``.
"""

from typing import Any, Dict, Optional, Tuple


class Actor:
    """A mobile actor spawned on a board segment."""

    def __init__(self, variant: Optional[Any] = None):
        self.variant = variant
        self.initialized = False
        self.visible = False
        self.segment: Optional[Tuple[int, int]] = None
        self.position: Optional[Tuple[int, int]] = None
        self.depth: Optional[int] = None

    def init(self) -> None:
        self.initialized = True
        self.visible = False

    def place_at(self, segment_col: int, segment_row: int, x: int, y: int, depth: int) -> None:
        """Record the segment and cell this actor stands on."""
        self.segment = (segment_col, segment_row)
        self.position = (x, y)
        self.depth = depth

    def draw(self) -> None:
        self.visible = True

    def undraw(self) -> None:
        self.visible = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "variant": self.variant,
            "segment": list(self.segment) if self.segment else None,
            "position": list(self.position) if self.position else None,
            "depth": self.depth,
        }
