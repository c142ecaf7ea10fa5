"""Immutable per-slab state shared by the search-based solvers.

The branch-and-bound and genetic solvers explore many partial layouts.
Each partial layout is a tuple of BinState values; placing a piece returns
a new BinState, so sibling branches never see each other's placements.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from countertops.contracts.protocols import FreeSpaceFinder
from countertops.domain.entities import PlacedPiece, Slab
from countertops.domain.value_objects import FreeSpace, Piece


@dataclass(frozen=True)
class BinState:
    """Placements and free spaces of one slab in a partial layout."""

    placements: tuple[PlacedPiece, ...]
    spaces: tuple[FreeSpace, ...]
    used_area: float = 0.0

    @classmethod
    def empty(cls, slab_width: float, slab_height: float) -> BinState:
        return cls(placements=(), spaces=(FreeSpace(0.0, 0.0, slab_width, slab_height),))

    def with_piece(
        self,
        piece: Piece,
        x: float,
        y: float,
        slab_width: float,
        slab_height: float,
        finder: FreeSpaceFinder,
    ) -> BinState:
        """Return a new state with ``piece`` placed at (x, y) and spaces rescanned."""
        placements = self.placements + (PlacedPiece.at(piece, x, y),)
        return BinState(
            placements=placements,
            spaces=tuple(finder.find(slab_width, slab_height, placements)),
            used_area=self.used_area + piece.area,
        )

    def accepts_at(
        self, piece: Piece, x: float, y: float, slab_width: float, slab_height: float
    ) -> bool:
        """Check that ``piece`` at (x, y) stays on the slab and overlaps nothing."""
        if x < 0 or y < 0:
            return False
        if x + piece.effective_width > slab_width or y + piece.effective_height > slab_height:
            return False
        candidate = PlacedPiece(piece=piece, x=x, y=y)
        return not any(candidate.overlaps(p) for p in self.placements)


@dataclass(frozen=True)
class Move:
    """Placement of an oriented piece into a bin; bin_index == len(bins) opens a bin."""

    bin_index: int
    x: float
    y: float
    piece: Piece


def orientations(piece: Piece) -> list[Piece]:
    """The piece as given and turned 90 degrees; squares yield one variant."""
    variants = [piece.oriented(piece.rotated)]
    if piece.width != piece.height:
        variants.append(piece.oriented(not piece.rotated))
    return variants


def existing_bin_moves(
    bins: Sequence[BinState], variants: Sequence[Piece]
) -> Iterator[Move]:
    """Yield distinct moves into free spaces of already opened bins."""
    for bin_index, state in enumerate(bins):
        seen: set[tuple[float, float, bool]] = set()
        for space in state.spaces:
            for variant in variants:
                key = (space.x, space.y, variant.rotated)
                if key in seen:
                    continue
                if space.can_hold(variant.effective_width, variant.effective_height):
                    seen.add(key)
                    yield Move(bin_index, space.x, space.y, variant)


def new_bin_moves(
    bins: Sequence[BinState],
    variants: Sequence[Piece],
    slab_width: float,
    slab_height: float,
) -> list[Move]:
    """Moves opening a fresh bin with the piece in its top-left corner."""
    return [
        Move(len(bins), 0.0, 0.0, variant)
        for variant in variants
        if variant.fits_within(slab_width, slab_height)
    ]


def apply_move(
    bins: tuple[BinState, ...],
    move: Move,
    slab_width: float,
    slab_height: float,
    finder: FreeSpaceFinder,
) -> tuple[BinState, ...]:
    """Return the bins after ``move``; the input tuple is left untouched."""
    if move.bin_index == len(bins):
        target = BinState.empty(slab_width, slab_height)
        bins = bins + (target,)
    else:
        target = bins[move.bin_index]
    updated = target.with_piece(move.piece, move.x, move.y, slab_width, slab_height, finder)
    return bins[: move.bin_index] + (updated,) + bins[move.bin_index + 1 :]


def to_slabs(
    bins: Sequence[BinState], slab_width: float, slab_height: float
) -> tuple[Slab, ...]:
    """Materialize non-empty bins as numbered slabs."""
    used = [state for state in bins if state.placements]
    return tuple(
        Slab(
            id=index + 1,
            width=slab_width,
            height=slab_height,
            placements=list(state.placements),
            spaces=list(state.spaces),
        )
        for index, state in enumerate(used)
    )
