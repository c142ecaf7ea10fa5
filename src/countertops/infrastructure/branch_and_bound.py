"""Exact depth-first branch-and-bound search for slab layouts.

Every piece, largest first, is branched over every distinct placement into
an already opened slab (any free space, either orientation) and over opening
one new slab. A branch accrues ``piece area x slab index`` so layouts that
fill early slabs score lower. Branches that cannot beat the best complete
layout, or that need more slabs than allowed, are pruned.

The search stops when the tree is exhausted or when its wall-clock budget
runs out, whichever comes first. A search that stops early still returns
the best complete layout it found.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from countertops.contracts.protocols import FreeSpaceFinder, ProgressCallback
from countertops.domain.entities import Solution
from countertops.domain.exceptions import InfeasibleError, UnplaceablePieceError
from countertops.domain.services.free_space import (
    DEFAULT_MAX_SPACES,
    GridScanFreeSpaceFinder,
)
from countertops.domain.services.orientation import find_unplaceable
from countertops.domain.value_objects import Algorithm, Piece
from countertops.infrastructure.layout_state import (
    BinState,
    Move,
    apply_move,
    existing_bin_moves,
    new_bin_moves,
    orientations,
    to_slabs,
)

logger = logging.getLogger(__name__)

DEFAULT_TIME_LIMIT_SECONDS = 10.0
DEFAULT_PROGRESS_INTERVAL = 1000


@dataclass(frozen=True)
class SearchProgress:
    """Snapshot reported every ``progress_interval`` nodes.

    Attributes:
        nodes_explored: Nodes popped from the stack so far.
        depth: Index of the piece being placed at the current node.
        best_score: Weighted score of the best complete layout, if any.
        elapsed_seconds: Wall-clock time since the search started.
    """

    nodes_explored: int
    depth: int
    best_score: float | None
    elapsed_seconds: float


@dataclass(frozen=True)
class SearchStats:
    """Outcome of the most recent search."""

    nodes_explored: int
    elapsed_seconds: float
    completed: bool
    timed_out: bool
    cancelled: bool
    best_score: float | None


@dataclass(frozen=True)
class _Frame:
    """A pending branch: the move is applied only when the frame is popped."""

    index: int
    bins: tuple[BinState, ...]
    score: float
    move: Move | None = None


class BranchAndBoundSolver:
    """Exhaustive placement search within a slab cap and a time budget.

    Attributes:
        max_slabs: Largest slab count a layout may use.
        time_limit_seconds: Wall-clock budget for one search.
        progress_interval: Nodes between progress reports and deadline checks.
        finder: Free-space discovery used after each placement.
        last_stats: Statistics of the most recent solve() call.
    """

    def __init__(
        self,
        max_slabs: int = 10,
        time_limit_seconds: float = DEFAULT_TIME_LIMIT_SECONDS,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
        finder: FreeSpaceFinder | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        if max_slabs < 1:
            raise ValueError("max_slabs must be at least 1")
        if time_limit_seconds <= 0:
            raise ValueError("time_limit_seconds must be positive")
        if progress_interval < 1:
            raise ValueError("progress_interval must be at least 1")
        self.max_slabs = max_slabs
        self.time_limit_seconds = time_limit_seconds
        self.progress_interval = progress_interval
        self.finder = finder or GridScanFreeSpaceFinder(DEFAULT_MAX_SPACES)
        self._clock = clock
        self.last_stats: SearchStats | None = None

    def solve(
        self,
        pieces: Sequence[Piece],
        slab_width: float,
        slab_height: float,
        progress: ProgressCallback | None = None,
        cancel: threading.Event | None = None,
    ) -> Solution:
        """Search for the lowest-scoring complete layout.

        Returns:
            Solution built from the best layout found. ``optimal`` is True
            only when the whole tree was explored.

        Raises:
            UnplaceablePieceError: If a piece fits an empty slab in neither
                orientation.
            InfeasibleError: If no complete layout within max_slabs was
                found before the tree or the time budget ran out.
        """
        unplaceable = find_unplaceable(pieces, slab_width, slab_height)
        if unplaceable:
            raise UnplaceablePieceError(unplaceable)

        order = sorted(pieces, key=lambda p: p.area, reverse=True)
        total_area = sum(p.area for p in order)
        if total_area > self.max_slabs * slab_width * slab_height:
            logger.info(
                "Piece area %.1f exceeds %d slab(s); no layout possible",
                total_area,
                self.max_slabs,
            )
            self.last_stats = SearchStats(0, 0.0, True, False, False, None)
            raise InfeasibleError(self.max_slabs, pieces=order)

        variants = [orientations(p) for p in order]
        start = self._clock()
        deadline = start + self.time_limit_seconds

        best_score = float("inf")
        best_bins: tuple[BinState, ...] | None = None
        nodes = 0
        timed_out = False
        cancelled = False
        stack: list[_Frame] = [_Frame(index=0, bins=(), score=0.0)]

        while stack:
            frame = stack.pop()
            nodes += 1

            if nodes % self.progress_interval == 0:
                elapsed = self._clock() - start
                if progress is not None:
                    progress(
                        SearchProgress(
                            nodes_explored=nodes,
                            depth=frame.index,
                            best_score=None if best_bins is None else best_score,
                            elapsed_seconds=elapsed,
                        )
                    )
                if self._clock() >= deadline:
                    timed_out = True
                    break
                if cancel is not None and cancel.is_set():
                    cancelled = True
                    break

            if frame.score >= best_score:
                continue

            bins = frame.bins
            if frame.move is not None:
                bins = apply_move(bins, frame.move, slab_width, slab_height, self.finder)
            if len(bins) > self.max_slabs:
                continue

            if frame.index == len(order):
                best_score = frame.score
                best_bins = bins
                logger.debug(
                    "New best layout: score %.1f on %d slab(s) after %d nodes",
                    best_score,
                    len(bins),
                    nodes,
                )
                continue

            moves = list(existing_bin_moves(bins, variants[frame.index]))
            if len(bins) < self.max_slabs:
                moves.extend(
                    new_bin_moves(bins, variants[frame.index], slab_width, slab_height)
                )

            children = []
            for move in moves:
                score = frame.score + move.piece.area * move.bin_index
                if score < best_score:
                    children.append(_Frame(frame.index + 1, bins, score, move))
            # Reversed so the first move is explored first.
            stack.extend(reversed(children))

        elapsed = self._clock() - start
        completed = not (timed_out or cancelled)
        self.last_stats = SearchStats(
            nodes_explored=nodes,
            elapsed_seconds=elapsed,
            completed=completed,
            timed_out=timed_out,
            cancelled=cancelled,
            best_score=None if best_bins is None else best_score,
        )

        if timed_out:
            logger.warning(
                "Branch and bound stopped after %.1fs and %d nodes", elapsed, nodes
            )
        elif cancelled:
            logger.warning("Branch and bound cancelled after %d nodes", nodes)

        if best_bins is None:
            raise InfeasibleError(
                self.max_slabs, timed_out=not completed, pieces=order
            )

        logger.info(
            "Branch and bound explored %d nodes in %.2fs: %d slab(s)%s",
            nodes,
            elapsed,
            len(best_bins),
            "" if completed else " (best found before cutoff)",
        )

        return Solution(
            slabs=to_slabs(best_bins, slab_width, slab_height),
            slab_width=slab_width,
            slab_height=slab_height,
            algorithm=Algorithm.BRANCH_AND_BOUND,
            optimal=completed,
        )
