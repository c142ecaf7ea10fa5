"""Tests for grid-scan free-space discovery."""

from __future__ import annotations

import numpy as np
import pytest

from countertops.contracts import FreeSpaceFinder
from countertops.domain import FreeSpace, Piece, PlacedPiece
from countertops.domain.services import GridScanFreeSpaceFinder
from countertops.domain.services.free_space import (
    drop_contained,
    free_runs,
    occupancy_grid,
    seed_cells,
)


def _placed(width: float, height: float, x: float, y: float) -> PlacedPiece:
    return PlacedPiece.at(Piece(id=f"{x},{y}", width=width, height=height), x, y)


class TestGridHelpers:
    """Tests for the numpy grid helpers."""

    def test_occupancy_marks_overlapped_cells(self) -> None:
        """Cells touched by a fractional edge count as occupied."""
        grid = occupancy_grid(10, 5, [_placed(2.5, 1, 0, 0)])
        assert grid.shape == (5, 10)
        assert grid[0, :3].all()
        assert not grid[0, 3:].any()
        assert not grid[1:].any()

    def test_free_runs(self) -> None:
        """Runs count free cells to the right, zero on occupied cells."""
        occupied = np.array([[False, True, False, False]])
        assert free_runs(occupied).tolist() == [[1, 0, 2, 1]]

    def test_seed_cells(self) -> None:
        """Seeds have a blocked or off-slab neighbour to the left and above."""
        occupied = np.array(
            [
                [True, False],
                [False, False],
            ]
        )
        seeds = {tuple(cell) for cell in seed_cells(occupied).tolist()}
        assert seeds == {(0, 1), (1, 0)}

    def test_drop_contained(self) -> None:
        """Duplicates and nested spaces are removed, largest first."""
        big = FreeSpace(0, 0, 10, 10)
        spaces = drop_contained([FreeSpace(1, 1, 2, 2), big, big, FreeSpace(5, 5, 10, 1)])
        assert spaces == [big, FreeSpace(5, 5, 10, 1)]


class TestGridScanFreeSpaceFinder:
    """Tests for GridScanFreeSpaceFinder."""

    def test_satisfies_protocol(self) -> None:
        """The finder implements the FreeSpaceFinder protocol."""
        assert isinstance(GridScanFreeSpaceFinder(), FreeSpaceFinder)

    def test_empty_slab_is_one_space(self) -> None:
        """An empty slab is a single free rectangle."""
        spaces = GridScanFreeSpaceFinder().find(100, 100, [])
        assert spaces == [FreeSpace(0, 0, 100, 100)]

    def test_corner_piece_leaves_two_maximal_spaces(self) -> None:
        """A piece in the corner leaves a right column and a bottom band."""
        spaces = GridScanFreeSpaceFinder().find(100, 100, [_placed(80, 40, 0, 0)])
        assert spaces == [FreeSpace(80, 0, 20, 100), FreeSpace(0, 40, 100, 60)]

    def test_spaces_overlap_no_placement(self) -> None:
        """Every returned space avoids every placed rectangle."""
        placements = [_placed(30, 30, 0, 0), _placed(20, 50, 40, 10), _placed(10, 10, 70, 70)]
        spaces = GridScanFreeSpaceFinder().find(100, 100, placements)
        assert spaces
        for space in spaces:
            probe = _placed(space.width, space.height, space.x, space.y)
            assert not any(probe.overlaps(p) for p in placements)

    def test_sorted_by_row_then_column(self) -> None:
        """Spaces come back ordered by (y, x)."""
        placements = [_placed(30, 30, 0, 0), _placed(20, 50, 40, 10)]
        spaces = GridScanFreeSpaceFinder().find(100, 100, placements)
        keys = [(s.y, s.x) for s in spaces]
        assert keys == sorted(keys)

    def test_cap_keeps_largest(self) -> None:
        """Only the max_spaces largest spaces are returned."""
        placements = [_placed(5, 5, x, y) for x in range(0, 100, 20) for y in range(0, 100, 20)]
        uncapped = GridScanFreeSpaceFinder(max_spaces=1000).find(100, 100, placements)
        capped = GridScanFreeSpaceFinder(max_spaces=3).find(100, 100, placements)
        assert len(uncapped) > 3
        assert len(capped) == 3
        smallest_kept = min(s.area for s in capped)
        assert all(s.area <= smallest_kept for s in uncapped if s not in capped)

    def test_full_slab_has_no_space(self) -> None:
        """A fully covered slab has no free spaces."""
        assert GridScanFreeSpaceFinder().find(50, 50, [_placed(50, 50, 0, 0)]) == []

    def test_rejects_zero_cap(self) -> None:
        """max_spaces must be positive."""
        with pytest.raises(ValueError):
            GridScanFreeSpaceFinder(max_spaces=0)
