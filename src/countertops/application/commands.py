"""Application commands (use cases) for countertop layout optimization."""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import replace

from countertops.contracts.protocols import ProgressCallback
from countertops.domain import ComputationError, ErrorKind, PackingError
from countertops.domain.services import preprocess

from .dtos import OptimizationFailure, OptimizationOutput, OptimizationRequest
from .factory import create_solver

logger = logging.getLogger(__name__)


class OptimizeCommand:
    """Command to turn a list of countertops into a slab cutting plan.

    This is the boundary between the solvers, which raise, and callers,
    which always receive an OptimizationOutput.
    """

    def execute(
        self,
        request: OptimizationRequest,
        progress: ProgressCallback | None = None,
        cancel: threading.Event | None = None,
    ) -> OptimizationOutput:
        """Execute the optimization.

        Args:
            request: Countertops, slab, and algorithm settings.
            progress: Optional callback receiving solver progress snapshots.
            cancel: Optional event that stops the search-based solvers early.

        Returns:
            OptimizationOutput with either a solution or a failure.
        """
        errors = request.validate()
        if errors:
            return OptimizationOutput(
                failure=OptimizationFailure(
                    kind=ErrorKind.INVALID_INPUT,
                    message="; ".join(errors),
                )
            )

        try:
            prepared = preprocess(
                request.countertops,
                request.slab_width,
                request.slab_height,
                kerf=request.kerf,
                allow_splitting=request.allow_splitting,
                min_split_length=request.min_split_length,
            )
            solver = create_solver(request.algorithm, request.settings)
            solution = solver.solve(
                prepared.pieces,
                request.slab_width,
                request.slab_height,
                progress=progress,
                cancel=cancel,
            )
        except PackingError as e:
            logger.info("Optimization with %s failed: %s", request.algorithm.value, e)
            return OptimizationOutput(failure=OptimizationFailure.from_error(e))
        except Exception as e:
            logger.exception("Unexpected error while optimizing")
            return OptimizationOutput(
                failure=OptimizationFailure.from_error(ComputationError(e))
            )

        solution = replace(
            solution,
            split_records=prepared.split_records,
            price_per_sq_ft=request.price_per_sq_ft,
        )
        return OptimizationOutput(solution=solution)

    async def execute_async(
        self,
        request: OptimizationRequest,
        progress: ProgressCallback | None = None,
        cancel: threading.Event | None = None,
    ) -> OptimizationOutput:
        """Run execute() on a worker thread so the event loop stays responsive."""
        return await asyncio.to_thread(self.execute, request, progress, cancel)
