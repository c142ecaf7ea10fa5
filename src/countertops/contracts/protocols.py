"""Protocols shared between the application layer and the solvers.

Solvers and free-space finders are swapped through these contracts, so the
command layer and the search loops never depend on a concrete class.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    import threading

    from countertops.domain.entities import PlacedPiece, Solution
    from countertops.domain.value_objects import FreeSpace, Piece


ProgressCallback = Callable[[Any], None]
"""Receives solver-specific progress snapshots (SearchProgress, GenerationProgress)."""


@runtime_checkable
class FreeSpaceFinder(Protocol):
    """Computes the free rectangles of a slab from its placements.

    Example:
        ```python
        class GridScanFreeSpaceFinder:
            def find(self, slab_width, slab_height, placements):
                ...
        ```
    """

    def find(
        self,
        slab_width: float,
        slab_height: float,
        placements: Sequence["PlacedPiece"],
    ) -> list["FreeSpace"]:
        """Return free rectangles that overlap no placement.

        Args:
            slab_width: Slab width in inches.
            slab_height: Slab height in inches.
            placements: Pieces already on the slab.

        Returns:
            Free rectangles inside the slab. They may overlap each other.
        """
        ...


@runtime_checkable
class Solver(Protocol):
    """Packs preprocessed pieces onto identical slabs."""

    def solve(
        self,
        pieces: Sequence["Piece"],
        slab_width: float,
        slab_height: float,
        progress: ProgressCallback | None = None,
        cancel: "threading.Event | None" = None,
    ) -> "Solution":
        """Pack the pieces.

        Implementations must not mutate the pieces they are given.

        Args:
            pieces: Placement-ready pieces.
            slab_width: Slab width in inches.
            slab_height: Slab height in inches.
            progress: Optional callback for progress snapshots.
            cancel: Optional event; when set, searches stop at their next
                progress checkpoint.

        Returns:
            Solution with slabs in creation order.

        Raises:
            PackingError: On unplaceable pieces or infeasibility.
        """
        ...
