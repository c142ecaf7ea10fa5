"""Exceptions raised by the packing solvers.

Every terminal failure of a packing run is a PackingError carrying a kind,
a message, and the offending pieces, so callers can report it without
inspecting the exception type.
"""

from __future__ import annotations

from collections.abc import Sequence

from .value_objects import ErrorKind, Piece


class PackingError(Exception):
    """Base class for terminal packing failures.

    Attributes:
        kind: Failure category.
        message: Human-readable description.
        pieces: Pieces involved in the failure (may be empty).
    """

    kind: ErrorKind = ErrorKind.COMPUTATION

    def __init__(self, message: str, pieces: Sequence[Piece] = ()) -> None:
        self.message = message
        self.pieces = tuple(pieces)
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class UnplaceablePieceError(PackingError):
    """Raised when pieces fit an empty slab in neither orientation."""

    kind = ErrorKind.UNPLACEABLE_PIECE

    def __init__(self, pieces: Sequence[Piece]) -> None:
        labels = ", ".join(p.label or p.id for p in pieces)
        super().__init__(
            "Some pieces are too large to fit on any slab, even after "
            f"splitting: {labels}",
            pieces,
        )


class InfeasibleError(PackingError):
    """Raised when no complete layout exists within the slab cap.

    A search cut off by its time budget without any complete layout is
    reported the same way, with ``timed_out`` set.
    """

    kind = ErrorKind.INFEASIBLE

    def __init__(
        self,
        max_slabs: int,
        timed_out: bool = False,
        pieces: Sequence[Piece] = (),
    ) -> None:
        self.max_slabs = max_slabs
        self.timed_out = timed_out
        reason = (
            "the time budget ran out before any complete layout was found"
            if timed_out
            else "no complete layout exists"
        )
        super().__init__(
            f"Could not pack all pieces onto {max_slabs} slab(s): {reason}. "
            "Raise the maximum slab count or enable splitting.",
            pieces,
        )


class ComputationError(PackingError):
    """Wraps an unexpected fault raised while solving."""

    kind = ErrorKind.COMPUTATION

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"An error occurred during optimization: {cause}")
