"""Domain layer - pieces, slabs, and packing rules."""

from .entities import PlacedPiece, Slab, Solution
from .exceptions import (
    ComputationError,
    InfeasibleError,
    PackingError,
    UnplaceablePieceError,
)
from .value_objects import (
    Algorithm,
    CountertopSpec,
    ErrorKind,
    FreeSpace,
    Piece,
    SplitDirection,
    SplitRecord,
)

__all__ = [
    "Algorithm",
    "ComputationError",
    "CountertopSpec",
    "ErrorKind",
    "FreeSpace",
    "InfeasibleError",
    "PackingError",
    "Piece",
    "PlacedPiece",
    "Slab",
    "Solution",
    "SplitDirection",
    "SplitRecord",
    "UnplaceablePieceError",
]
