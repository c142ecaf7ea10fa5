"""Tests for the algorithm comparison harness."""

from __future__ import annotations

import pytest

from countertops.application import (
    ComparisonEntry,
    ExactSettings,
    GeneticSettings,
    OptimizationFailure,
    OptimizationRequest,
    SolverSettings,
    compare_algorithms,
)
from countertops.application.comparison import (
    COMPARISON_ORDER,
    rank_entries,
    recommend,
    run_algorithm,
)
from countertops.application.config import get_preset
from countertops.domain import (
    Algorithm,
    CountertopSpec,
    ErrorKind,
    Piece,
    Slab,
    Solution,
)

FAST_SETTINGS = SolverSettings(
    max_slabs=5,
    exact=ExactSettings(time_limit_seconds=2.0),
    genetic=GeneticSettings(population_size=6, generations=4, elite_count=2, seed=1),
)


def _entry(
    algorithm: Algorithm,
    slabs: int,
    elapsed: float,
    optimal: bool = False,
    used: float = 0.0,
) -> ComparisonEntry:
    """An entry whose solution has ``slabs`` slabs and ``used`` area on the first."""
    slab_list = [Slab(id=i + 1, width=10, height=10) for i in range(slabs)]
    if used:
        slab_list[0].place(Piece(id="p", width=used, height=1), 0, 0)
    solution = Solution(
        slabs=tuple(slab_list), slab_width=10, slab_height=10, algorithm=algorithm
    )
    return ComparisonEntry(
        algorithm=algorithm, elapsed_seconds=elapsed, solution=solution, optimal=optimal
    )


def _failed(algorithm: Algorithm, elapsed: float = 0.1) -> ComparisonEntry:
    return ComparisonEntry(
        algorithm=algorithm,
        elapsed_seconds=elapsed,
        failure=OptimizationFailure(kind=ErrorKind.INFEASIBLE, message="no"),
    )


# =============================================================================
# Ranking
# =============================================================================


class TestRankEntries:
    """Tests for rank_entries()."""

    def test_slab_count_then_waste(self) -> None:
        """Fewer slabs rank first; waste breaks ties."""
        three = _entry(Algorithm.FIRST_FIT, 3, 0.01)
        two_wasteful = _entry(Algorithm.BEST_FIT, 2, 0.01)
        two_tight = _entry(Algorithm.GENETIC, 2, 0.01, used=10)

        ranked = rank_entries([three, two_wasteful, two_tight])
        assert [e.algorithm for e in ranked] == [
            Algorithm.GENETIC,
            Algorithm.BEST_FIT,
            Algorithm.FIRST_FIT,
        ]

    def test_failures_last_in_run_order(self) -> None:
        """Failed entries follow every success, in the order they ran."""
        ranked = rank_entries(
            [
                _failed(Algorithm.GENETIC),
                _entry(Algorithm.FIRST_FIT, 2, 0.01),
                _failed(Algorithm.BRANCH_AND_BOUND),
            ]
        )
        assert [e.algorithm for e in ranked] == [
            Algorithm.FIRST_FIT,
            Algorithm.GENETIC,
            Algorithm.BRANCH_AND_BOUND,
        ]


# =============================================================================
# Recommendation
# =============================================================================


class TestRecommend:
    """Tests for recommend()."""

    def test_tie_picks_fastest(self) -> None:
        """When every algorithm needs the same slabs, the fastest wins."""
        ranked = rank_entries(
            [
                _entry(Algorithm.GUILLOTINE, 1, 0.010),
                _entry(Algorithm.BEST_FIT, 1, 0.005),
                _entry(Algorithm.BRANCH_AND_BOUND, 1, 1.2, optimal=True),
            ]
        )
        recommendation = recommend(ranked)

        assert recommendation is not None
        assert recommendation.algorithm == Algorithm.BEST_FIT
        assert recommendation.slabs_saved == 0
        assert recommendation.reason == (
            "All algorithms need 1 slab(s); Best Fit is the fastest (0.005s)."
        )

    def test_prefers_exact_when_it_matches_best(self) -> None:
        """The exact result is chosen when it ties for fewest slabs."""
        ranked = rank_entries(
            [
                _entry(Algorithm.FIRST_FIT, 3, 0.001),
                _entry(Algorithm.GENETIC, 2, 0.5),
                _entry(Algorithm.BRANCH_AND_BOUND, 2, 1.0, optimal=True),
            ]
        )
        recommendation = recommend(ranked)

        assert recommendation is not None
        assert recommendation.algorithm == Algorithm.BRANCH_AND_BOUND
        assert recommendation.slabs_saved == 1
        assert "saving 1 slab(s) over the fastest algorithm (First Fit)" in (
            recommendation.reason
        )

    def test_best_entry_when_exact_falls_short(self) -> None:
        """An exact result with more slabs than the best is not chosen."""
        ranked = rank_entries(
            [
                _entry(Algorithm.FIRST_FIT, 4, 0.001),
                _entry(Algorithm.BRANCH_AND_BOUND, 3, 1.0, optimal=True),
                _entry(Algorithm.GENETIC, 2, 0.5),
            ]
        )
        recommendation = recommend(ranked)

        assert recommendation is not None
        assert recommendation.algorithm == Algorithm.GENETIC
        assert recommendation.slabs_saved == 2

    def test_failures_ignored(self) -> None:
        """Failed runs take no part in the slab-count tie check."""
        ranked = rank_entries(
            [_entry(Algorithm.FIRST_FIT, 2, 0.01), _failed(Algorithm.GENETIC, 0.001)]
        )
        recommendation = recommend(ranked)
        assert recommendation is not None
        assert recommendation.algorithm == Algorithm.FIRST_FIT

    def test_all_failed(self) -> None:
        """No successes means no recommendation."""
        assert recommend([_failed(Algorithm.GENETIC)]) is None


# =============================================================================
# Running algorithms
# =============================================================================


class TestRunAlgorithm:
    """Tests for run_algorithm()."""

    def test_success_is_timed(self) -> None:
        """Successful runs carry a solution and a non-negative time."""
        pieces = [Piece(id="1", width=40, height=30)]
        entry = run_algorithm(Algorithm.FIRST_FIT, pieces, 100, 100, FAST_SETTINGS)
        assert entry.solution is not None
        assert entry.elapsed_seconds >= 0
        assert entry.optimal is False

    def test_exact_is_marked_optimal(self) -> None:
        """The exact solver's result is flagged."""
        pieces = [Piece(id="1", width=40, height=30)]
        entry = run_algorithm(Algorithm.BRANCH_AND_BOUND, pieces, 100, 100, FAST_SETTINGS)
        assert entry.optimal is True

    def test_failure_becomes_entry(self) -> None:
        """Solver errors are captured in the entry."""
        pieces = [Piece(id="1", width=200, height=200)]
        entry = run_algorithm(Algorithm.GUILLOTINE, pieces, 100, 100, FAST_SETTINGS)
        assert entry.solution is None
        assert entry.failure is not None
        assert entry.failure.kind == ErrorKind.UNPLACEABLE_PIECE


# =============================================================================
# Full comparison
# =============================================================================


@pytest.mark.slow
class TestCompareAlgorithms:
    """Tests for compare_algorithms()."""

    def test_minimal_preset(self) -> None:
        """Every algorithm runs on the minimal preset and one is recommended."""
        request = OptimizationRequest(
            countertops=get_preset("minimal"),
            settings=FAST_SETTINGS,
            price_per_sq_ft=60,
        )
        report = compare_algorithms(request)

        assert {e.algorithm for e in report.ranked} == set(COMPARISON_ORDER)
        assert len(report.successful) == 5
        assert report.recommendation is not None
        assert report.best is not None
        assert report.best.slab_count == 1
        exact = next(e for e in report.ranked if e.algorithm == Algorithm.BRANCH_AND_BOUND)
        assert exact.optimal is True
        assert all(e.solution.price_per_sq_ft == 60 for e in report.successful)

    def test_split_records_attached(self) -> None:
        """Each solution reports the shared preprocessing splits."""
        request = OptimizationRequest(
            countertops=(CountertopSpec(id="1", width=200, height=26, label="Run"),),
            settings=FAST_SETTINGS,
        )
        report = compare_algorithms(
            request, algorithms=(Algorithm.FIRST_FIT, Algorithm.BEST_FIT)
        )
        for entry in report.successful:
            assert [r.original_label for r in entry.solution.split_records] == ["Run"]

    def test_invalid_request_raises(self) -> None:
        """Invalid requests are rejected before any solver runs."""
        request = OptimizationRequest(countertops=(), slab_width=0)
        with pytest.raises(ValueError, match="Slab width must be positive"):
            compare_algorithms(request)
