"""Pytest configuration and shared fixtures for countertop tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from countertops.domain import CountertopSpec, Piece, Solution


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Layout property checks
# =============================================================================


def _check_layout(solution: Solution) -> None:
    """Assert no two pieces on a slab overlap and every piece stays on its slab."""
    for slab in solution.slabs:
        for placement in slab.placements:
            assert placement.x >= 0 and placement.y >= 0, placement
            assert placement.right <= solution.slab_width + 1e-9, placement
            assert placement.bottom <= solution.slab_height + 1e-9, placement
        for i, first in enumerate(slab.placements):
            for second in slab.placements[i + 1 :]:
                assert not first.overlaps(second), (first, second)


@pytest.fixture
def assert_valid_layout() -> Callable[[Solution], None]:
    """Provide the no-overlap and containment check for any solver's output."""
    return _check_layout


# =============================================================================
# Shared pieces
# =============================================================================


@pytest.fixture
def three_long_pieces() -> list[Piece]:
    """Three 80x40 pieces that need two 100x100 slabs."""
    return [Piece(id=str(i), width=80, height=40, label=f"Piece {i}") for i in (1, 2, 3)]


@pytest.fixture
def mixed_pieces() -> list[Piece]:
    """A small mix of sizes that fits on one 100x100 slab."""
    return [
        Piece(id="a", width=50, height=40, label="A"),
        Piece(id="b", width=50, height=30, label="B"),
        Piece(id="c", width=40, height=20, label="C"),
        Piece(id="d", width=50, height=50, label="D"),
    ]


@pytest.fixture
def kitchen_countertops() -> tuple[CountertopSpec, ...]:
    """A small kitchen on the default 133x78 slab, one piece needing a split."""
    return (
        CountertopSpec(id="1", width=96, height=26, label="Main Counter"),
        CountertopSpec(id="2", width=60, height=36, label="Island"),
        CountertopSpec(id="3", width=160, height=18, label="Backsplash"),
    )
