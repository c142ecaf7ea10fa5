"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from countertops.contracts.dtos import (
    ComparisonEntry,
    ComparisonReport,
    OptimizationFailure,
    OptimizationOutput,
    Recommendation,
)
from countertops.domain import Algorithm, CountertopSpec
from countertops.domain.entities import DEFAULT_PRICE_PER_SQ_FT

DEFAULT_SLAB_WIDTH = 133.0
DEFAULT_SLAB_HEIGHT = 78.0
DEFAULT_KERF = 0.125
DEFAULT_MIN_SPLIT_LENGTH = 24.0


@dataclass(frozen=True)
class ExactSettings:
    """Branch-and-bound tuning."""

    time_limit_seconds: float = 10.0
    max_free_spaces: int = 30
    progress_interval: int = 1000


@dataclass(frozen=True)
class GeneticSettings:
    """Genetic algorithm tuning."""

    population_size: int = 30
    generations: int = 40
    elite_count: int = 4
    mutation_rate: float = 0.1
    progress_interval: int = 10
    seed: int | None = None


@dataclass(frozen=True)
class SolverSettings:
    """Settings consumed by the search-based solvers.

    Attributes:
        max_slabs: Slab cap for the exact and genetic solvers.
        exact: Branch-and-bound settings.
        genetic: Genetic algorithm settings.
    """

    max_slabs: int = 10
    exact: ExactSettings = field(default_factory=ExactSettings)
    genetic: GeneticSettings = field(default_factory=GeneticSettings)

    def __post_init__(self) -> None:
        if self.max_slabs < 1:
            raise ValueError("max_slabs must be at least 1")


@dataclass(frozen=True)
class OptimizationRequest:
    """Everything needed for one optimization run.

    Attributes:
        countertops: Requested countertops.
        slab_width: Slab width in inches.
        slab_height: Slab height in inches.
        kerf: Blade allowance in inches.
        allow_splitting: Whether oversized countertops may be cut into sections.
        min_split_length: Shortest section kept when splitting.
        algorithm: Algorithm to run.
        settings: Solver settings.
        price_per_sq_ft: Slab price for the cost estimate.
    """

    countertops: tuple[CountertopSpec, ...]
    slab_width: float = DEFAULT_SLAB_WIDTH
    slab_height: float = DEFAULT_SLAB_HEIGHT
    kerf: float = DEFAULT_KERF
    allow_splitting: bool = True
    min_split_length: float = DEFAULT_MIN_SPLIT_LENGTH
    algorithm: Algorithm = Algorithm.GUILLOTINE
    settings: SolverSettings = field(default_factory=SolverSettings)
    price_per_sq_ft: float = DEFAULT_PRICE_PER_SQ_FT

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if self.slab_width <= 0:
            errors.append("Slab width must be positive")
        if self.slab_height <= 0:
            errors.append("Slab height must be positive")
        if self.kerf < 0:
            errors.append("Kerf must be non-negative")
        if self.min_split_length <= 0:
            errors.append("Minimum split length must be positive")
        if self.price_per_sq_ft < 0:
            errors.append("Price per square foot must be non-negative")
        ids = [c.id for c in self.countertops]
        if len(ids) != len(set(ids)):
            errors.append("Countertop ids must be unique")
        return errors


__all__ = [
    "ComparisonEntry",
    "ComparisonReport",
    "ExactSettings",
    "GeneticSettings",
    "OptimizationFailure",
    "OptimizationOutput",
    "OptimizationRequest",
    "Recommendation",
    "SolverSettings",
]
