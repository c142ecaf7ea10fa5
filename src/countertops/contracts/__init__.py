"""Contracts between application and infrastructure layers."""

from .dtos import (
    ComparisonEntry,
    ComparisonReport,
    OptimizationFailure,
    OptimizationOutput,
    Recommendation,
)
from .protocols import FreeSpaceFinder, ProgressCallback, Solver

__all__ = [
    # Protocols
    "FreeSpaceFinder",
    "ProgressCallback",
    "Solver",
    # DTOs
    "ComparisonEntry",
    "ComparisonReport",
    "OptimizationFailure",
    "OptimizationOutput",
    "Recommendation",
]
