"""Run every algorithm on the same pieces and recommend one."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import replace

from countertops.domain import Algorithm, ComputationError, PackingError, Piece
from countertops.domain.services import preprocess

from .dtos import (
    ComparisonEntry,
    ComparisonReport,
    OptimizationFailure,
    OptimizationRequest,
    Recommendation,
    SolverSettings,
)
from .factory import create_solver

logger = logging.getLogger(__name__)

COMPARISON_ORDER: tuple[Algorithm, ...] = (
    Algorithm.GUILLOTINE,
    Algorithm.FIRST_FIT,
    Algorithm.BEST_FIT,
    Algorithm.BRANCH_AND_BOUND,
    Algorithm.GENETIC,
)


def run_algorithm(
    algorithm: Algorithm,
    pieces: Sequence[Piece],
    slab_width: float,
    slab_height: float,
    settings: SolverSettings,
) -> ComparisonEntry:
    """Run one algorithm and time it, turning failures into entry data."""
    solver = create_solver(algorithm, settings)
    start = time.perf_counter()
    try:
        solution = solver.solve(pieces, slab_width, slab_height)
    except PackingError as e:
        elapsed = time.perf_counter() - start
        logger.info("%s failed during comparison: %s", algorithm.display_name, e)
        return ComparisonEntry(
            algorithm=algorithm,
            elapsed_seconds=elapsed,
            failure=OptimizationFailure.from_error(e),
        )
    except Exception as e:
        elapsed = time.perf_counter() - start
        logger.exception("Unexpected error running %s", algorithm.display_name)
        return ComparisonEntry(
            algorithm=algorithm,
            elapsed_seconds=elapsed,
            failure=OptimizationFailure.from_error(ComputationError(e)),
        )
    elapsed = time.perf_counter() - start
    logger.debug(
        "%s: %d slab(s) in %.3fs", algorithm.display_name, solution.total_slabs, elapsed
    )
    return ComparisonEntry(
        algorithm=algorithm,
        elapsed_seconds=elapsed,
        solution=solution,
        optimal=algorithm == Algorithm.BRANCH_AND_BOUND,
    )


def rank_entries(entries: Sequence[ComparisonEntry]) -> tuple[ComparisonEntry, ...]:
    """Order successes by (slab count, waste %), then failures in run order."""
    successful = [e for e in entries if e.solution is not None]
    failed = [e for e in entries if e.solution is None]
    successful.sort(key=lambda e: (e.slab_count, e.waste_percentage))
    return tuple(successful) + tuple(failed)


def recommend(ranked: Sequence[ComparisonEntry]) -> Recommendation | None:
    """Pick an algorithm from ranked entries.

    When every successful algorithm needs the same number of slabs, the
    fastest one wins. Otherwise the exact result is preferred if it matches
    the best slab count, falling back to the best-ranked entry; the slabs
    saved are measured against the fastest algorithm.
    """
    successful = [e for e in ranked if e.solution is not None]
    if not successful:
        return None

    best = successful[0]
    worst = successful[-1]
    fastest = min(successful, key=lambda e: e.elapsed_seconds)

    if best.slab_count == worst.slab_count:
        return Recommendation(
            algorithm=fastest.algorithm,
            reason=(
                f"All algorithms need {best.slab_count} slab(s); "
                f"{fastest.algorithm.display_name} is the fastest "
                f"({fastest.elapsed_seconds:.3f}s)."
            ),
        )

    chosen = next(
        (e for e in successful if e.optimal and e.slab_count == best.slab_count),
        best,
    )
    saved = fastest.slab_count - chosen.slab_count
    return Recommendation(
        algorithm=chosen.algorithm,
        reason=(
            f"{chosen.algorithm.display_name} needs {chosen.slab_count} slab(s), "
            f"saving {saved} slab(s) over the fastest algorithm "
            f"({fastest.algorithm.display_name})."
        ),
        slabs_saved=saved,
    )


def compare_algorithms(
    request: OptimizationRequest,
    algorithms: Sequence[Algorithm] = COMPARISON_ORDER,
) -> ComparisonReport:
    """Run each algorithm sequentially on one preprocessed piece set.

    The request's own ``algorithm`` field is ignored; each run receives its
    algorithm explicitly.

    Args:
        request: Countertops, slab, and solver settings.
        algorithms: Algorithms to run, in run order.

    Returns:
        ComparisonReport with ranked entries and a recommendation.

    Raises:
        ValueError: If the request is invalid.
    """
    errors = request.validate()
    if errors:
        raise ValueError("; ".join(errors))

    prepared = preprocess(
        request.countertops,
        request.slab_width,
        request.slab_height,
        kerf=request.kerf,
        allow_splitting=request.allow_splitting,
        min_split_length=request.min_split_length,
    )

    entries = []
    for algorithm in algorithms:
        entry = run_algorithm(
            algorithm,
            prepared.pieces,
            request.slab_width,
            request.slab_height,
            request.settings,
        )
        if entry.solution is not None:
            entry = replace(
                entry,
                solution=replace(
                    entry.solution,
                    split_records=prepared.split_records,
                    price_per_sq_ft=request.price_per_sq_ft,
                ),
            )
        entries.append(entry)

    ranked = rank_entries(entries)
    recommendation = recommend(ranked)
    if recommendation is not None:
        logger.info("Recommended algorithm: %s", recommendation.algorithm.value)
    return ComparisonReport(ranked=ranked, recommendation=recommendation)
