"""Value objects for countertop cutting optimization.

Pieces are the placement units handed to the solvers. They carry both their
nominal (pre-kerf) dimensions and the kerf, so the effective dimensions used
for all placement math can never drift from the nominal ones: rotating a
piece swaps width and height and the effective dimensions follow.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum


class Algorithm(str, Enum):
    """Packing algorithms available to callers."""

    GUILLOTINE = "guillotine"
    FIRST_FIT = "first_fit"
    BEST_FIT = "best_fit"
    BRANCH_AND_BOUND = "branch_and_bound"
    GENETIC = "genetic"

    @property
    def is_greedy(self) -> bool:
        """True for the shelf packing strategies."""
        return self in GREEDY_ALGORITHMS

    @property
    def display_name(self) -> str:
        """Human-readable algorithm name."""
        return _DISPLAY_NAMES[self]


GREEDY_ALGORITHMS: frozenset[Algorithm] = frozenset(
    {Algorithm.GUILLOTINE, Algorithm.FIRST_FIT, Algorithm.BEST_FIT}
)

_DISPLAY_NAMES = {
    Algorithm.GUILLOTINE: "Guillotine Cutting (Best Fit)",
    Algorithm.FIRST_FIT: "First Fit",
    Algorithm.BEST_FIT: "Best Fit",
    Algorithm.BRANCH_AND_BOUND: "Branch and Bound (Exact)",
    Algorithm.GENETIC: "Genetic Algorithm",
}


class SplitDirection(str, Enum):
    """Axis along which an oversized countertop is cut into sections.

    HORIZONTAL cuts along the width (sections are narrower than the
    original), VERTICAL cuts along the height.
    """

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ErrorKind(str, Enum):
    """Categories of terminal packing failures."""

    UNPLACEABLE_PIECE = "unplaceable_piece"
    INFEASIBLE = "infeasible"
    COMPUTATION = "computation"
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True)
class CountertopSpec:
    """A requested countertop as entered by the user.

    Attributes:
        id: Identifier unique within one job.
        width: Nominal width in inches.
        height: Nominal height (depth) in inches.
        label: Display text.
    """

    id: str
    width: float
    height: float
    label: str = ""

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Countertop dimensions must be positive")

    @property
    def area(self) -> float:
        """Nominal area in square inches."""
        return self.width * self.height


@dataclass
class Piece:
    """A rectangle ready for placement.

    Mutable only through rotate(); once placed on a slab a snapshot is taken
    so later rotations cannot affect the layout.

    Attributes:
        id: Placement-unit id. Split fragments use "{original_id}_{n}".
        width: Nominal width in the current orientation.
        height: Nominal height in the current orientation.
        kerf: Blade allowance added to each effective dimension.
        label: Display text, "(Part n)" suffixed for fragments.
        original_id: Id of the countertop a fragment was cut from.
        rotated: True when turned 90 degrees from the requested orientation.
    """

    id: str
    width: float
    height: float
    kerf: float = 0.0
    label: str = ""
    original_id: str | None = None
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Piece dimensions must be positive")
        if self.kerf < 0:
            raise ValueError("Kerf must be non-negative")

    @property
    def effective_width(self) -> float:
        """Width plus kerf; used for all placement math."""
        return self.width + self.kerf

    @property
    def effective_height(self) -> float:
        """Height plus kerf; used for all placement math."""
        return self.height + self.kerf

    @property
    def area(self) -> float:
        """Effective area in square inches."""
        return self.effective_width * self.effective_height

    @property
    def is_split(self) -> bool:
        """True if this piece is a fragment of an oversized countertop."""
        return self.original_id is not None

    def rotate(self) -> None:
        """Turn the piece 90 degrees in place."""
        self.width, self.height = self.height, self.width
        self.rotated = not self.rotated

    def fits_within(self, width: float, height: float) -> bool:
        """Check whether the effective rectangle fits as currently oriented."""
        return self.effective_width <= width and self.effective_height <= height

    def fits_rotated_within(self, width: float, height: float) -> bool:
        """Check whether the effective rectangle fits after a 90 degree turn."""
        return self.effective_height <= width and self.effective_width <= height

    def oriented(self, rotated: bool) -> Piece:
        """Return a copy turned so its rotated flag equals ``rotated``."""
        clone = copy.copy(self)
        if clone.rotated != rotated:
            clone.rotate()
        return clone


@dataclass(frozen=True)
class FreeSpace:
    """An empty axis-aligned rectangle inside a slab.

    y grows downward from the top edge of the slab.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def can_hold(self, width: float, height: float) -> bool:
        """Check whether a width x height rectangle fits at this space's origin."""
        return width <= self.width and height <= self.height

    def contains(self, other: FreeSpace) -> bool:
        """Check whether ``other`` lies entirely inside this space."""
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )


@dataclass(frozen=True)
class SplitRecord:
    """Provenance of one oversized countertop that was cut into sections.

    Attributes:
        original_id: Id of the requested countertop.
        original_label: Label of the requested countertop.
        direction: Axis along which sections were cut.
        pieces: Kept fragments in cut order.
        discarded_lengths: Lengths of carved segments dropped because they
            were shorter than the minimum section length.
    """

    original_id: str
    original_label: str
    direction: SplitDirection
    pieces: tuple[Piece, ...] = field(default_factory=tuple)
    discarded_lengths: tuple[float, ...] = field(default_factory=tuple)

    @property
    def parts(self) -> int:
        """Number of kept fragments."""
        return len(self.pieces)

    @property
    def kept_length(self) -> float:
        """Total nominal length of kept fragments along the split axis."""
        if self.direction == SplitDirection.HORIZONTAL:
            return sum(p.width for p in self.pieces)
        return sum(p.height for p in self.pieces)

    @property
    def discarded_length(self) -> float:
        """Total nominal length lost to too-short segments."""
        return sum(self.discarded_lengths)
