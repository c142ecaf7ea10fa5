"""Infrastructure layer - packing solvers and formatters."""

from .bin_packing import GreedyPacker, guillotine_split, pack
from .branch_and_bound import BranchAndBoundSolver, SearchProgress, SearchStats
from .formatters import (
    ComparisonFormatter,
    FailureFormatter,
    InventoryFormatter,
    JsonExporter,
    SolutionFormatter,
)
from .genetic import GenerationProgress, GeneticSolver

__all__ = [
    # Solvers
    "BranchAndBoundSolver",
    "GeneticSolver",
    "GreedyPacker",
    "guillotine_split",
    "pack",
    # Progress snapshots
    "GenerationProgress",
    "SearchProgress",
    "SearchStats",
    # Formatters
    "ComparisonFormatter",
    "FailureFormatter",
    "InventoryFormatter",
    "JsonExporter",
    "SolutionFormatter",
]
