"""Application layer - use cases and DTOs."""

from .commands import OptimizeCommand
from .comparison import compare_algorithms
from .dtos import (
    ComparisonEntry,
    ComparisonReport,
    ExactSettings,
    GeneticSettings,
    OptimizationFailure,
    OptimizationOutput,
    OptimizationRequest,
    Recommendation,
    SolverSettings,
)
from .factory import create_solver

__all__ = [
    "ComparisonEntry",
    "ComparisonReport",
    "ExactSettings",
    "GeneticSettings",
    "OptimizationFailure",
    "OptimizationOutput",
    "OptimizationRequest",
    "OptimizeCommand",
    "Recommendation",
    "SolverSettings",
    "compare_algorithms",
    "create_solver",
]
