"""Factory for creating solvers.

Keeps the algorithm-to-solver mapping in one place so the command layer and
the comparison harness select solvers by passing an Algorithm explicitly.
"""

from __future__ import annotations

from countertops.contracts.protocols import Solver
from countertops.domain import Algorithm
from countertops.domain.services.free_space import GridScanFreeSpaceFinder
from countertops.infrastructure import BranchAndBoundSolver, GeneticSolver, GreedyPacker

from .dtos import SolverSettings


def create_solver(algorithm: Algorithm, settings: SolverSettings | None = None) -> Solver:
    """Create the solver for ``algorithm``.

    Args:
        algorithm: Algorithm to run.
        settings: Tuning for the search-based solvers; defaults apply if None.

    Returns:
        A Solver instance.
    """
    settings = settings or SolverSettings()

    if algorithm.is_greedy:
        return GreedyPacker(algorithm)

    if algorithm == Algorithm.BRANCH_AND_BOUND:
        exact = settings.exact
        return BranchAndBoundSolver(
            max_slabs=settings.max_slabs,
            time_limit_seconds=exact.time_limit_seconds,
            progress_interval=exact.progress_interval,
            finder=GridScanFreeSpaceFinder(exact.max_free_spaces),
        )

    if algorithm == Algorithm.GENETIC:
        genetic = settings.genetic
        return GeneticSolver(
            max_slabs=settings.max_slabs,
            population_size=genetic.population_size,
            generations=genetic.generations,
            elite_count=genetic.elite_count,
            mutation_rate=genetic.mutation_rate,
            progress_interval=genetic.progress_interval,
            seed=genetic.seed,
            finder=GridScanFreeSpaceFinder(settings.exact.max_free_spaces),
        )

    raise ValueError(f"Unknown algorithm: {algorithm}")
