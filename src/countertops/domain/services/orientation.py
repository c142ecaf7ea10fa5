"""Per-piece orientation choice and oversize detection."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from countertops.domain.value_objects import Piece

logger = logging.getLogger(__name__)


def guillotine_waste(
    width: float, height: float, slab_width: float, slab_height: float
) -> float:
    """Estimate waste of a width x height piece cut from the slab corner.

    Counts the strip to the right of the piece plus the full-width strip
    below it. A local proxy, not a prediction of the final layout.
    """
    return (slab_width - width) * height + (slab_height - height) * slab_width


def should_rotate(piece: Piece, slab_width: float, slab_height: float) -> bool:
    """Decide whether ``piece`` should be turned before greedy placement.

    Rotates when only the rotated orientation fits, or when both fit and
    the rotated orientation scores strictly lower guillotine waste.
    """
    normal_fits = piece.fits_within(slab_width, slab_height)
    rotated_fits = piece.fits_rotated_within(slab_width, slab_height)

    if rotated_fits and not normal_fits:
        return True
    if normal_fits and rotated_fits:
        w, h = piece.effective_width, piece.effective_height
        normal_waste = guillotine_waste(w, h, slab_width, slab_height)
        rotated_waste = guillotine_waste(h, w, slab_width, slab_height)
        return rotated_waste < normal_waste
    return False


def orient_pieces(
    pieces: Iterable[Piece], slab_width: float, slab_height: float
) -> None:
    """Rotate each piece in place where should_rotate() says so."""
    for piece in pieces:
        if should_rotate(piece, slab_width, slab_height):
            piece.rotate()
            logger.debug(
                "Rotated '%s' to %sx%s",
                piece.label,
                piece.effective_width,
                piece.effective_height,
            )


def fits_slab(piece: Piece, slab_width: float, slab_height: float) -> bool:
    """Check whether the piece fits an empty slab in either orientation."""
    return piece.fits_within(slab_width, slab_height) or piece.fits_rotated_within(
        slab_width, slab_height
    )


def find_unplaceable(
    pieces: Sequence[Piece], slab_width: float, slab_height: float
) -> list[Piece]:
    """Return the pieces that fit an empty slab in neither orientation."""
    return [p for p in pieces if not fits_slab(p, slab_width, slab_height)]
