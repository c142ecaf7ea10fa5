"""Shared Data Transfer Objects for cross-layer communication.

Outputs of the application layer live here so the infrastructure
formatters can render them without importing the application package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from countertops.domain import Algorithm, ErrorKind, PackingError, Piece, Solution


@dataclass(frozen=True)
class OptimizationFailure:
    """Structured description of a failed run.

    Attributes:
        kind: Failure category.
        message: Human-readable description, including remediation hints.
        pieces: Pieces responsible for the failure, if any.
    """

    kind: ErrorKind
    message: str
    pieces: tuple[Piece, ...] = ()

    @classmethod
    def from_error(cls, error: PackingError) -> OptimizationFailure:
        return cls(kind=error.kind, message=error.message, pieces=error.pieces)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": True,
            "kind": self.kind.value,
            "message": self.message,
            "pieces": [
                {"id": p.id, "label": p.label, "width": p.width, "height": p.height}
                for p in self.pieces
            ],
        }


@dataclass(frozen=True)
class OptimizationOutput:
    """Outcome of one optimization run: a solution or a failure."""

    solution: Solution | None = None
    failure: OptimizationFailure | None = None

    def __post_init__(self) -> None:
        if (self.solution is None) == (self.failure is None):
            raise ValueError("Exactly one of solution or failure must be set")

    @property
    def is_success(self) -> bool:
        return self.solution is not None


@dataclass(frozen=True)
class ComparisonEntry:
    """One algorithm's result in a comparison run.

    Attributes:
        algorithm: Algorithm that ran.
        elapsed_seconds: Wall-clock time of the run.
        solution: Layout found, if the run succeeded.
        failure: Failure description, if it did not.
        optimal: True for the exact solver's result.
    """

    algorithm: Algorithm
    elapsed_seconds: float
    solution: Solution | None = None
    failure: OptimizationFailure | None = None
    optimal: bool = False

    @property
    def slab_count(self) -> int | None:
        return None if self.solution is None else self.solution.total_slabs

    @property
    def waste_percentage(self) -> float | None:
        return None if self.solution is None else self.solution.total_waste_percentage


@dataclass(frozen=True)
class Recommendation:
    """Which algorithm to use and why.

    Attributes:
        algorithm: Recommended algorithm.
        reason: Short explanation.
        slabs_saved: Slabs saved compared with the fastest algorithm.
    """

    algorithm: Algorithm
    reason: str
    slabs_saved: int = 0


@dataclass(frozen=True)
class ComparisonReport:
    """All algorithms run on the same pieces, best first.

    Attributes:
        ranked: Successful entries ordered by slab count then waste,
            followed by failed entries in run order.
        recommendation: Suggested algorithm, None if every run failed.
    """

    ranked: tuple[ComparisonEntry, ...] = field(default_factory=tuple)
    recommendation: Recommendation | None = None

    @property
    def successful(self) -> tuple[ComparisonEntry, ...]:
        return tuple(e for e in self.ranked if e.solution is not None)

    @property
    def best(self) -> ComparisonEntry | None:
        successful = self.successful
        return successful[0] if successful else None
