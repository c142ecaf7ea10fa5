"""Summary statistics over a requested countertop list."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from countertops.domain.value_objects import CountertopSpec


@dataclass(frozen=True)
class InventorySummary:
    """Totals shown before optimization runs.

    Attributes:
        total_area: Nominal area of all countertops in square inches.
        largest: The countertop with the largest nominal area, if any.
        oversized_count: Countertops exceeding the slab in both
            dimensions in both orientations; these cannot be split.
    """

    total_area: float
    largest: CountertopSpec | None
    oversized_count: int

    @property
    def total_sq_ft(self) -> float:
        return self.total_area / 144


def is_oversized(countertop: CountertopSpec, slab_width: float, slab_height: float) -> bool:
    """Check whether a countertop overflows the slab on both axes."""
    return (countertop.width > slab_width and countertop.height > slab_height) or (
        countertop.height > slab_width and countertop.width > slab_height
    )


def summarize_countertops(
    countertops: Sequence[CountertopSpec], slab_width: float, slab_height: float
) -> InventorySummary:
    """Compute totals for a countertop list against a slab size."""
    largest = max(countertops, key=lambda c: c.area, default=None)
    return InventorySummary(
        total_area=sum(c.area for c in countertops),
        largest=largest,
        oversized_count=sum(
            1 for c in countertops if is_oversized(c, slab_width, slab_height)
        ),
    )
