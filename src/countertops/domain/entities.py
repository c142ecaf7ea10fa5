"""Slabs and solutions produced by the packing solvers."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from .value_objects import Algorithm, FreeSpace, Piece, SplitRecord

SQUARE_INCHES_PER_SQ_FT = 144.0
DEFAULT_PRICE_PER_SQ_FT = 50.0


@dataclass(frozen=True)
class PlacedPiece:
    """A piece fixed at a position on a slab.

    The piece is a private snapshot taken at placement time.

    Attributes:
        piece: The placed piece in its final orientation.
        x: Left edge of the effective rectangle.
        y: Top edge of the effective rectangle.
    """

    piece: Piece
    x: float
    y: float

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @classmethod
    def at(cls, piece: Piece, x: float, y: float) -> PlacedPiece:
        """Place a snapshot of ``piece`` at (x, y)."""
        return cls(piece=copy.copy(piece), x=x, y=y)

    @property
    def effective_width(self) -> float:
        return self.piece.effective_width

    @property
    def effective_height(self) -> float:
        return self.piece.effective_height

    @property
    def right(self) -> float:
        """X coordinate of the effective rectangle's right edge."""
        return self.x + self.piece.effective_width

    @property
    def bottom(self) -> float:
        """Y coordinate of the effective rectangle's bottom edge."""
        return self.y + self.piece.effective_height

    @property
    def area(self) -> float:
        return self.piece.area

    def overlaps(self, other: PlacedPiece) -> bool:
        """Check whether two effective rectangles share interior area."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.piece.id,
            "original_id": self.piece.original_id,
            "label": self.piece.label,
            "x": self.x,
            "y": self.y,
            "width": self.piece.width,
            "height": self.piece.height,
            "effective_width": self.piece.effective_width,
            "effective_height": self.piece.effective_height,
            "rotated": self.piece.rotated,
            "is_split": self.piece.is_split,
        }


@dataclass
class Slab:
    """One stock sheet and the pieces placed on it.

    Waste figures are derived from the placements on every access, so they
    are always consistent with the final piece list.

    Attributes:
        id: 1-based slab number in creation order.
        width: Slab width in inches.
        height: Slab height in inches.
        placements: Placed pieces in placement order.
        spaces: Free spaces as last tracked by the solver that built the slab.
    """

    id: int
    width: float
    height: float
    placements: list[PlacedPiece] = field(default_factory=list)
    spaces: list[FreeSpace] = field(default_factory=list)

    @property
    def total_area(self) -> float:
        return self.width * self.height

    @property
    def used_area(self) -> float:
        """Sum of placed effective areas."""
        return sum(p.area for p in self.placements)

    @property
    def waste_area(self) -> float:
        return self.total_area - self.used_area

    @property
    def waste_percentage(self) -> float:
        return self.waste_area / self.total_area * 100

    @property
    def piece_count(self) -> int:
        return len(self.placements)

    def place(self, piece: Piece, x: float, y: float) -> PlacedPiece:
        """Record a placement and return it."""
        placement = PlacedPiece.at(piece, x, y)
        self.placements.append(placement)
        return placement

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "total_area": self.total_area,
            "waste_area": self.waste_area,
            "waste_percentage": round(self.waste_percentage, 1),
            "pieces": [p.to_dict() for p in self.placements],
        }


@dataclass(frozen=True)
class Solution:
    """Result of a successful packing run.

    Attributes:
        slabs: Slabs in creation order.
        slab_width: Width shared by every slab.
        slab_height: Height shared by every slab.
        algorithm: Algorithm that produced the layout.
        split_records: Provenance for countertops cut into sections.
        price_per_sq_ft: Slab price used for the cost estimate.
        optimal: True when an exact search completed without cutoff.
    """

    slabs: tuple[Slab, ...]
    slab_width: float
    slab_height: float
    algorithm: Algorithm
    split_records: tuple[SplitRecord, ...] = ()
    price_per_sq_ft: float = DEFAULT_PRICE_PER_SQ_FT
    optimal: bool = False

    @property
    def total_pieces(self) -> int:
        return sum(slab.piece_count for slab in self.slabs)

    @property
    def total_slabs(self) -> int:
        return len(self.slabs)

    @property
    def total_area_needed(self) -> float:
        """Effective area of all placed pieces."""
        return sum(slab.used_area for slab in self.slabs)

    @property
    def total_slab_area(self) -> float:
        return self.total_slabs * self.slab_width * self.slab_height

    @property
    def total_waste(self) -> float:
        return self.total_slab_area - self.total_area_needed

    @property
    def total_waste_percentage(self) -> float:
        if self.total_slab_area == 0:
            return 0.0
        return self.total_waste / self.total_slab_area * 100

    @property
    def total_waste_sq_ft(self) -> float:
        return self.total_waste / SQUARE_INCHES_PER_SQ_FT

    @property
    def total_slab_sq_ft(self) -> float:
        return self.total_slab_area / SQUARE_INCHES_PER_SQ_FT

    @property
    def estimated_cost(self) -> float:
        """Material cost of all slabs at the configured square-foot price."""
        return round(self.total_slab_sq_ft, 2) * self.price_per_sq_ft

    @property
    def utilization_percentage(self) -> float:
        return 100.0 - self.total_waste_percentage

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "algorithm": self.algorithm.value,
            "optimal": self.optimal,
            "slab_width": self.slab_width,
            "slab_height": self.slab_height,
            "total_pieces": self.total_pieces,
            "total_slabs": self.total_slabs,
            "total_area_needed": self.total_area_needed,
            "total_slab_area": self.total_slab_area,
            "total_waste": self.total_waste,
            "total_waste_percentage": round(self.total_waste_percentage, 1),
            "total_slab_sq_ft": round(self.total_slab_sq_ft, 2),
            "estimated_cost": round(self.estimated_cost, 2),
            "slabs": [slab.to_dict() for slab in self.slabs],
            "split_pieces": [
                {
                    "original_id": record.original_id,
                    "original_label": record.original_label,
                    "direction": record.direction.value,
                    "parts": record.parts,
                    "pieces": [
                        {"id": p.id, "label": p.label, "width": p.width, "height": p.height}
                        for p in record.pieces
                    ],
                    "discarded_lengths": list(record.discarded_lengths),
                }
                for record in self.split_records
            ],
        }
