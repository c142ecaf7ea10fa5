"""Conversion of requested countertops into placement-ready pieces.

A countertop longer than the slab in exactly one dimension is cut into
sections along that dimension. Each section is at most the slab dimension
minus the kerf long, so its effective length still fits. Sections shorter
than the minimum section length are dropped, not merged into a neighbour,
which loses that material from the job.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from countertops.domain.value_objects import (
    CountertopSpec,
    Piece,
    SplitDirection,
    SplitRecord,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreprocessResult:
    """Pieces ready for placement plus split provenance."""

    pieces: tuple[Piece, ...]
    split_records: tuple[SplitRecord, ...]


def split_direction(
    countertop: CountertopSpec,
    slab_width: float,
    slab_height: float,
    kerf: float,
) -> SplitDirection | None:
    """Decide whether a countertop needs splitting and along which axis.

    Returns None when the countertop fits the slab as is, or when it
    exceeds both slab dimensions (such pieces are rejected later).
    """
    effective_width = countertop.width + kerf
    effective_height = countertop.height + kerf
    if effective_width > slab_width and effective_height <= slab_height:
        return SplitDirection.HORIZONTAL
    if effective_height > slab_height and effective_width <= slab_width:
        return SplitDirection.VERTICAL
    return None


def carve_segments(total_length: float, max_segment: float) -> list[float]:
    """Cut ``total_length`` into consecutive segments of at most ``max_segment``."""
    if max_segment <= 0:
        raise ValueError("Slab is too small to hold any section after kerf")
    segments: list[float] = []
    remaining = total_length
    while remaining > 0:
        segment = min(remaining, max_segment)
        segments.append(segment)
        remaining -= segment
    return segments


def split_countertop(
    countertop: CountertopSpec,
    direction: SplitDirection,
    slab_width: float,
    slab_height: float,
    kerf: float,
    min_split_length: float,
) -> SplitRecord:
    """Cut one oversized countertop into sections.

    Args:
        countertop: The countertop to split.
        direction: Axis to cut along.
        slab_width: Slab width in inches.
        slab_height: Slab height in inches.
        kerf: Blade allowance in inches.
        min_split_length: Segments shorter than this are discarded.

    Returns:
        SplitRecord with the kept fragments and the discarded lengths.
    """
    horizontal = direction == SplitDirection.HORIZONTAL
    length = countertop.width if horizontal else countertop.height
    max_segment = (slab_width if horizontal else slab_height) - kerf

    kept: list[Piece] = []
    discarded: list[float] = []
    for segment in carve_segments(length, max_segment):
        if segment < min_split_length:
            discarded.append(segment)
            continue
        n = len(kept) + 1
        kept.append(
            Piece(
                id=f"{countertop.id}_{n}",
                width=segment if horizontal else countertop.width,
                height=countertop.height if horizontal else segment,
                kerf=kerf,
                label=f"{countertop.label} (Part {n})",
                original_id=countertop.id,
            )
        )

    if discarded:
        logger.warning(
            "Discarded %d section(s) of '%s' shorter than %s: %s",
            len(discarded),
            countertop.label,
            min_split_length,
            ", ".join(f"{d:g}" for d in discarded),
        )

    return SplitRecord(
        original_id=countertop.id,
        original_label=countertop.label,
        direction=direction,
        pieces=tuple(kept),
        discarded_lengths=tuple(discarded),
    )


def preprocess(
    countertops: Sequence[CountertopSpec],
    slab_width: float,
    slab_height: float,
    kerf: float = 0.0,
    allow_splitting: bool = True,
    min_split_length: float = 24.0,
) -> PreprocessResult:
    """Turn requested countertops into placement pieces.

    The input sequence is never modified.

    Args:
        countertops: Requested countertops.
        slab_width: Slab width in inches.
        slab_height: Slab height in inches.
        kerf: Blade allowance added to each effective dimension.
        allow_splitting: Whether oversized countertops may be cut into sections.
        min_split_length: Minimum length of a kept section.

    Returns:
        PreprocessResult with one piece per countertop, or its kept fragments,
        and one SplitRecord per countertop that produced fragments.
    """
    if slab_width <= 0 or slab_height <= 0:
        raise ValueError("Slab dimensions must be positive")
    if kerf < 0:
        raise ValueError("Kerf must be non-negative")
    if min_split_length <= 0:
        raise ValueError("Minimum split length must be positive")

    pieces: list[Piece] = []
    records: list[SplitRecord] = []

    for countertop in countertops:
        direction = (
            split_direction(countertop, slab_width, slab_height, kerf)
            if allow_splitting
            else None
        )
        if direction is None:
            pieces.append(
                Piece(
                    id=countertop.id,
                    width=countertop.width,
                    height=countertop.height,
                    kerf=kerf,
                    label=countertop.label,
                )
            )
            continue

        record = split_countertop(
            countertop, direction, slab_width, slab_height, kerf, min_split_length
        )
        pieces.extend(record.pieces)
        if record.parts > 0:
            records.append(record)
            logger.info(
                "Split '%s' (%sx%s) %s into %d section(s)",
                countertop.label,
                countertop.width,
                countertop.height,
                direction.value,
                record.parts,
            )

    return PreprocessResult(pieces=tuple(pieces), split_records=tuple(records))
