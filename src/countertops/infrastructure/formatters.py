"""Text and JSON formatters for packing results."""

from __future__ import annotations

import json

from countertops.contracts.dtos import (
    ComparisonReport,
    OptimizationFailure,
)
from countertops.domain import Solution
from countertops.domain.services.inventory import InventorySummary


class SolutionFormatter:
    """Formats a solution as a plain-text cutting report."""

    def __init__(self, include_spaces: bool = False) -> None:
        """Initialize formatter.

        Args:
            include_spaces: Whether to list each slab's remaining free spaces.
        """
        self._include_spaces = include_spaces

    def format(self, solution: Solution) -> str:
        lines = [
            f"CUTTING PLAN ({solution.algorithm.display_name})",
            "=" * 70,
            f"Slab size:        {solution.slab_width:g} x {solution.slab_height:g} in",
            f"Slabs needed:     {solution.total_slabs}",
            f"Pieces placed:    {solution.total_pieces}",
            f"Material usage:   {solution.utilization_percentage:.1f}%",
            f"Waste:            {solution.total_waste_sq_ft:.1f} sq ft "
            f"({solution.total_waste_percentage:.1f}%)",
            f"Slab area:        {solution.total_slab_sq_ft:.2f} sq ft",
            f"Estimated cost:   ${solution.estimated_cost:,.2f}",
        ]
        if solution.optimal:
            lines.append("Search completed: layout is optimal for the search model")

        for slab in solution.slabs:
            lines.append("")
            lines.append(
                f"Slab {slab.id}: {slab.piece_count} piece(s), "
                f"{slab.waste_percentage:.1f}% waste"
            )
            lines.append("-" * 70)
            lines.append(f"  {'Piece':<32} {'Size':<16} {'Position':<16} {'Rot'}")
            for placement in slab.placements:
                piece = placement.piece
                size = f"{piece.width:g} x {piece.height:g}"
                position = f"({placement.x:g}, {placement.y:g})"
                lines.append(
                    f"  {piece.label or piece.id:<32} {size:<16} {position:<16} "
                    f"{'yes' if piece.rotated else ''}"
                )
            if self._include_spaces and slab.spaces:
                lines.append("  Free spaces:")
                for space in slab.spaces:
                    lines.append(
                        f"    {space.width:g} x {space.height:g} at ({space.x:g}, {space.y:g})"
                    )

        if solution.split_records:
            lines.append("")
            lines.append("SPLIT PIECES")
            lines.append("-" * 70)
            for record in solution.split_records:
                parts = ", ".join(
                    f"{p.width:g} x {p.height:g}" for p in record.pieces
                )
                lines.append(
                    f"  {record.original_label}: {record.parts} part(s), "
                    f"{record.direction.value} [{parts}]"
                )
                if record.discarded_lengths:
                    lost = ", ".join(f"{d:g}" for d in record.discarded_lengths)
                    lines.append(f"    discarded short section(s): {lost}")

        return "\n".join(lines)


class FailureFormatter:
    """Formats a failed run for display."""

    def format(self, failure: OptimizationFailure) -> str:
        lines = [f"Error ({failure.kind.value}): {failure.message}"]
        for piece in failure.pieces:
            lines.append(
                f"  - {piece.label or piece.id}: {piece.width:g} x {piece.height:g} in"
            )
        return "\n".join(lines)


class ComparisonFormatter:
    """Formats a comparison report as a ranked table."""

    def format(self, report: ComparisonReport) -> str:
        lines = [
            "ALGORITHM COMPARISON",
            "=" * 70,
            f"{'Rank':<6}{'Algorithm':<32}{'Slabs':<8}{'Waste':<10}{'Time (s)'}",
            "-" * 70,
        ]
        for rank, entry in enumerate(report.ranked, start=1):
            name = entry.algorithm.display_name + (" *" if entry.optimal else "")
            if entry.solution is None:
                kind = entry.failure.kind.value if entry.failure else "failed"
                lines.append(
                    f"{'-':<6}{name:<32}{kind:<18}{entry.elapsed_seconds:.3f}"
                )
                continue
            lines.append(
                f"{rank:<6}{name:<32}{entry.slab_count:<8}"
                f"{entry.waste_percentage:<10.1f}{entry.elapsed_seconds:.3f}"
            )
        lines.append("-" * 70)
        if any(e.optimal for e in report.ranked):
            lines.append("* exact search result")
        if report.recommendation is not None:
            rec = report.recommendation
            lines.append(f"Recommended: {rec.algorithm.display_name}")
            lines.append(f"  {rec.reason}")
        else:
            lines.append("No algorithm produced a layout.")
        return "\n".join(lines)


class InventoryFormatter:
    """Formats the pre-optimization countertop summary."""

    def format(self, summary: InventorySummary) -> str:
        largest = (
            f"{summary.largest.label} ({summary.largest.width:g} x {summary.largest.height:g})"
            if summary.largest is not None
            else "-"
        )
        return "\n".join(
            [
                f"Total area:      {summary.total_sq_ft:.1f} sq ft",
                f"Largest piece:   {largest}",
                f"Oversized:       {summary.oversized_count}",
            ]
        )


class JsonExporter:
    """Exports solutions and failures as JSON."""

    def __init__(self, indent: int = 2) -> None:
        self._indent = indent

    def export(self, solution: Solution) -> str:
        return json.dumps(solution.to_dict(), indent=self._indent)

    def export_failure(self, failure: OptimizationFailure) -> str:
        return json.dumps(failure.to_dict(), indent=self._indent)

    def export_comparison(self, report: ComparisonReport) -> str:
        data = {
            "ranked": [
                {
                    "algorithm": entry.algorithm.value,
                    "elapsed_seconds": entry.elapsed_seconds,
                    "slabs": entry.slab_count,
                    "waste_percentage": (
                        None
                        if entry.waste_percentage is None
                        else round(entry.waste_percentage, 1)
                    ),
                    "optimal": entry.optimal,
                    "error": None if entry.failure is None else entry.failure.to_dict(),
                }
                for entry in report.ranked
            ],
            "recommendation": (
                None
                if report.recommendation is None
                else {
                    "algorithm": report.recommendation.algorithm.value,
                    "reason": report.recommendation.reason,
                    "slabs_saved": report.recommendation.slabs_saved,
                }
            ),
        }
        return json.dumps(data, indent=self._indent)
