"""Validation result structures and cutting advisories for job files.

Schema validation (types, bounds) happens in the pydantic models. The
checks here look at the job as a whole: countertops that can never be
placed, split remainders that would be thrown away, and solver settings
that are unlikely to finish.
"""

from dataclasses import dataclass, field
from typing import Any

from countertops.application.config.adapter import config_to_countertops
from countertops.application.config.schema import JobConfiguration
from countertops.domain.services.inventory import is_oversized
from countertops.domain.services.preprocessor import split_countertop, split_direction
from countertops.domain.value_objects import Algorithm

# Piece count above which the exact search rarely finishes in its budget
EXACT_SEARCH_PIECE_ADVISORY = 12


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "countertops[0]")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def _countertop_path(config: JobConfiguration, index: int) -> str:
    if config.countertops:
        return f"countertops[{index}]"
    return f"preset[{index}]"


def check_placement(config: JobConfiguration) -> ValidationResult:
    """Check that every countertop can end up on a slab.

    Oversized countertops are errors when splitting is disabled. With
    splitting enabled, countertops oversized in both directions are errors,
    and splits that would discard a short remainder are warnings.
    """
    result = ValidationResult()
    width = config.slab.width
    height = config.slab.height
    kerf = config.kerf

    for index, countertop in enumerate(config_to_countertops(config)):
        path = _countertop_path(config, index)
        direction = (
            split_direction(countertop, width, height, kerf)
            if config.splitting.enabled
            else None
        )
        if direction is None:
            fits = (
                countertop.width + kerf <= width and countertop.height + kerf <= height
            ) or (countertop.height + kerf <= width and countertop.width + kerf <= height)
            if fits:
                continue
            result.add_error(
                path,
                f"'{countertop.label}' ({countertop.width:g} x {countertop.height:g}) "
                f"does not fit a {width:g} x {height:g} slab"
                + ("" if config.splitting.enabled else " and splitting is disabled"),
                value=countertop.label,
            )
            continue

        record = split_countertop(
            countertop, direction, width, height, kerf, config.splitting.min_length
        )
        if record.discarded_lengths:
            lost = ", ".join(f"{d:g}" for d in record.discarded_lengths)
            result.add_warning(
                path,
                f"Splitting '{countertop.label}' discards a short section ({lost} in)",
                suggestion="Lower splitting.min_length to keep the remainder",
            )
    return result


def check_solver_settings(config: JobConfiguration) -> ValidationResult:
    """Flag solver settings that are unlikely to produce a layout."""
    result = ValidationResult()
    countertops = config_to_countertops(config)

    if config.preset is not None and config.countertops:
        result.add_warning(
            "preset",
            "Both preset and countertops are set; the preset is ignored",
        )

    if config.algorithm == Algorithm.BRANCH_AND_BOUND and (
        len(countertops) > EXACT_SEARCH_PIECE_ADVISORY
    ):
        result.add_warning(
            "algorithm",
            f"Exact search over {len(countertops)} countertops will likely stop at "
            f"the {config.exact.time_limit_seconds:g}s time limit",
            suggestion="Raise exact.time_limit_seconds or use a greedy algorithm",
        )

    if not config.algorithm.is_greedy:
        slab_area = config.slab.width * config.slab.height
        oversized = sum(
            1
            for c in countertops
            if is_oversized(c, config.slab.width, config.slab.height)
        )
        needed = sum(c.area for c in countertops)
        if oversized == 0 and needed > config.max_slabs * slab_area:
            result.add_warning(
                "max_slabs",
                f"Countertops cover {needed:g} sq in but {config.max_slabs} slab(s) "
                f"only provide {config.max_slabs * slab_area:g} sq in",
                suggestion="Raise max_slabs",
            )
    return result


def validate_config(config: JobConfiguration) -> ValidationResult:
    """Run every job-level check on a schema-valid configuration."""
    result = ValidationResult()
    result.merge(check_placement(config))
    result.merge(check_solver_settings(config))
    return result
