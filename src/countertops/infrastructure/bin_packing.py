"""Greedy guillotine packing of countertop pieces onto slabs.

Pieces are oriented one at a time, sorted largest first, and dropped into
the free spaces of existing slabs. Every placement splits its free space
with two guillotine cuts: a full-width strip below the piece and a strip
to its right as tall as the piece. A new slab is opened only when no
existing slab can take the piece.
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Sequence

from countertops.contracts.protocols import ProgressCallback
from countertops.domain.entities import Slab, Solution
from countertops.domain.exceptions import UnplaceablePieceError
from countertops.domain.services.orientation import find_unplaceable, orient_pieces
from countertops.domain.value_objects import GREEDY_ALGORITHMS, Algorithm, FreeSpace, Piece

logger = logging.getLogger(__name__)


def guillotine_split(space: FreeSpace, piece: Piece) -> list[FreeSpace]:
    """Split ``space`` around a piece placed at its origin.

    Args:
        space: The free space receiving the piece.
        piece: The piece placed at (space.x, space.y).

    Returns:
        Up to two child spaces: below the piece spanning the old width, and
        right of the piece spanning the piece's height.
    """
    children: list[FreeSpace] = []
    if space.height > piece.effective_height:
        children.append(
            FreeSpace(
                x=space.x,
                y=space.y + piece.effective_height,
                width=space.width,
                height=space.height - piece.effective_height,
            )
        )
    if space.width > piece.effective_width:
        children.append(
            FreeSpace(
                x=space.x + piece.effective_width,
                y=space.y,
                width=space.width - piece.effective_width,
                height=piece.effective_height,
            )
        )
    return children


def best_fit_score(space: FreeSpace, piece: Piece) -> float:
    """Leftover area estimate for placing ``piece`` in ``space``; lower is tighter."""
    width_waste = space.width - piece.effective_width
    height_waste = space.height - piece.effective_height
    return width_waste * piece.effective_height + height_waste * space.width


class GreedyPacker:
    """Shelf-style guillotine packer with first-fit or best-fit space choice.

    ``guillotine`` and ``best_fit`` both pick the space with the lowest
    best_fit_score(); ``first_fit`` takes the first space that holds the
    piece. Spaces are kept sorted smallest first, so first fit also favours
    tight spots.

    Attributes:
        strategy: One of the greedy algorithms.
    """

    def __init__(self, strategy: Algorithm = Algorithm.GUILLOTINE) -> None:
        if strategy not in GREEDY_ALGORITHMS:
            raise ValueError(f"Not a greedy strategy: {strategy.value}")
        self.strategy = strategy

    def solve(
        self,
        pieces: Sequence[Piece],
        slab_width: float,
        slab_height: float,
        progress: ProgressCallback | None = None,
        cancel: threading.Event | None = None,
    ) -> Solution:
        """Pack pieces greedily, largest first.

        The given pieces are copied before orientation, so the caller's
        pieces keep their orientation.

        Raises:
            UnplaceablePieceError: If any piece fits an empty slab in
                neither orientation.
        """
        working = [copy.copy(p) for p in pieces]

        unplaceable = find_unplaceable(working, slab_width, slab_height)
        if unplaceable:
            raise UnplaceablePieceError(unplaceable)

        orient_pieces(working, slab_width, slab_height)
        ordered = sorted(working, key=lambda p: p.area, reverse=True)

        logger.debug(
            "Packing %d pieces with %s strategy", len(ordered), self.strategy.value
        )

        slabs: list[Slab] = []
        for piece in ordered:
            if not self._place_on_existing(piece, slabs):
                slabs.append(self._open_slab(piece, len(slabs) + 1, slab_width, slab_height))

        for slab in slabs:
            logger.debug(
                "Slab %d: %d pieces, %.1f%% waste",
                slab.id,
                slab.piece_count,
                slab.waste_percentage,
            )
        logger.info(
            "%s packed %d pieces onto %d slab(s)",
            self.strategy.display_name,
            len(ordered),
            len(slabs),
        )

        return Solution(
            slabs=tuple(slabs),
            slab_width=slab_width,
            slab_height=slab_height,
            algorithm=self.strategy,
        )

    def _select_space(self, slab: Slab, piece: Piece) -> int | None:
        """Pick the index of the free space that should receive the piece."""
        best_index: int | None = None
        best_score = float("inf")
        for index, space in enumerate(slab.spaces):
            if not space.can_hold(piece.effective_width, piece.effective_height):
                continue
            if self.strategy == Algorithm.FIRST_FIT:
                return index
            score = best_fit_score(space, piece)
            if score < best_score:
                best_score = score
                best_index = index
        return best_index

    def _place_on_existing(self, piece: Piece, slabs: list[Slab]) -> bool:
        """Try slabs in creation order; place the piece in the first that takes it."""
        for slab in slabs:
            if not slab.spaces:
                continue
            index = self._select_space(slab, piece)
            if index is None:
                continue

            space = slab.spaces.pop(index)
            slab.place(piece, space.x, space.y)
            slab.spaces.extend(guillotine_split(space, piece))
            slab.spaces.sort(key=lambda s: s.area)
            logger.debug(
                "Placed '%s' on slab %d at (%s, %s)", piece.label, slab.id, space.x, space.y
            )
            return True
        return False

    def _open_slab(
        self, piece: Piece, slab_id: int, slab_width: float, slab_height: float
    ) -> Slab:
        """Start a new slab with the piece in its top-left corner."""
        slab = Slab(id=slab_id, width=slab_width, height=slab_height)
        slab.place(piece, 0.0, 0.0)
        slab.spaces = guillotine_split(FreeSpace(0.0, 0.0, slab_width, slab_height), piece)
        logger.debug("Opened slab %d for '%s'", slab_id, piece.label)
        return slab


def pack(
    pieces: Sequence[Piece],
    slab_width: float,
    slab_height: float,
    strategy: Algorithm = Algorithm.GUILLOTINE,
) -> Solution:
    """Pack pieces with one of the greedy strategies."""
    return GreedyPacker(strategy).solve(pieces, slab_width, slab_height)
