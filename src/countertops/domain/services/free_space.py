"""Free-space discovery by rescanning a slab's occupancy grid.

After every placement the slab is rasterized onto unit cells, a cell being
occupied when any placed effective rectangle overlaps it. Free rectangles
are grown from seed cells whose left and upper neighbours are blocked.
This is an approximation of the true maximal-rectangle set: some maximal
rectangles are never seeded, and the list is capped to the largest ones.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from countertops.domain.entities import PlacedPiece
from countertops.domain.value_objects import FreeSpace

logger = logging.getLogger(__name__)

DEFAULT_MAX_SPACES = 30


def occupancy_grid(
    slab_width: float, slab_height: float, placements: Sequence[PlacedPiece]
) -> np.ndarray:
    """Rasterize placements onto a (rows, cols) boolean grid of unit cells.

    Only whole cells inside the slab are represented.
    """
    cols = int(math.floor(slab_width))
    rows = int(math.floor(slab_height))
    occupied = np.zeros((max(rows, 0), max(cols, 0)), dtype=bool)
    for placement in placements:
        c0 = int(math.floor(placement.x))
        c1 = min(cols, int(math.ceil(placement.right)))
        r0 = int(math.floor(placement.y))
        r1 = min(rows, int(math.ceil(placement.bottom)))
        occupied[r0:r1, c0:c1] = True
    return occupied


def free_runs(occupied: np.ndarray) -> np.ndarray:
    """Count consecutive free cells from each cell rightwards (0 if occupied)."""
    cols = occupied.shape[1]
    col_idx = np.arange(cols)
    blocked_at = np.where(occupied, col_idx, cols)
    next_blocked = np.minimum.accumulate(blocked_at[:, ::-1], axis=1)[:, ::-1]
    return next_blocked - col_idx


def seed_cells(occupied: np.ndarray) -> np.ndarray:
    """Free cells whose left and upper neighbours are blocked or off-slab."""
    free = ~occupied
    left_blocked = np.ones_like(occupied)
    left_blocked[:, 1:] = occupied[:, :-1]
    up_blocked = np.ones_like(occupied)
    up_blocked[1:, :] = occupied[:-1, :]
    return np.argwhere(free & left_blocked & up_blocked)


def staircase_rectangles(
    runs: np.ndarray, row: int, col: int
) -> list[tuple[int, int, int, int]]:
    """Grow every maximal rectangle anchored at (row, col).

    Returns (x, y, width, height) tuples in grid units.
    """
    column = runs[row:, col]
    blocked = np.flatnonzero(column == 0)
    depth = int(blocked[0]) if blocked.size else column.size
    if depth == 0:
        return []
    widths = np.minimum.accumulate(column[:depth])
    ends = np.append(np.flatnonzero(np.diff(widths)), depth - 1)
    return [(col, row, int(widths[end]), int(end) + 1) for end in ends]


def drop_contained(spaces: list[FreeSpace]) -> list[FreeSpace]:
    """Remove duplicates and spaces lying inside another space.

    Returns survivors ordered by area, largest first.
    """
    kept: list[FreeSpace] = []
    for space in sorted(set(spaces), key=lambda s: s.area, reverse=True):
        if not any(other.contains(space) for other in kept):
            kept.append(space)
    return kept


class GridScanFreeSpaceFinder:
    """FreeSpaceFinder that rescans the slab grid on every call.

    Attributes:
        max_spaces: Maximum number of spaces returned; the largest win.
    """

    def __init__(self, max_spaces: int = DEFAULT_MAX_SPACES) -> None:
        if max_spaces < 1:
            raise ValueError("max_spaces must be at least 1")
        self.max_spaces = max_spaces

    def find(
        self,
        slab_width: float,
        slab_height: float,
        placements: Sequence[PlacedPiece],
    ) -> list[FreeSpace]:
        """Return free rectangles in (y, x) order, at most max_spaces of them."""
        occupied = occupancy_grid(slab_width, slab_height, placements)
        if occupied.size == 0:
            return []

        runs = free_runs(occupied)
        candidates: list[FreeSpace] = []
        for row, col in seed_cells(occupied):
            for x, y, w, h in staircase_rectangles(runs, int(row), int(col)):
                candidates.append(FreeSpace(float(x), float(y), float(w), float(h)))

        kept = drop_contained(candidates)
        if len(kept) > self.max_spaces:
            logger.debug(
                "Capping free spaces at %d of %d", self.max_spaces, len(kept)
            )
            kept = kept[: self.max_spaces]
        return sorted(kept, key=lambda s: (s.y, s.x))
