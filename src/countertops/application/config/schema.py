"""Pydantic configuration schema models for optimization job files.

This module defines the schema for JSON job files that describe the slab,
the cutting settings, the algorithm, and the countertops to cut. It uses
Pydantic v2 for validation and serialization.

The Algorithm enum is reused from the domain layer so that configuration
values and solver selection share one vocabulary.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from countertops.domain.value_objects import Algorithm

# Supported schema versions for job files
# Version 1.0: Initial schema
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class PresetName(str, Enum):
    """Built-in countertop lists that can stand in for explicit countertops."""

    STANDARD = "standard"
    MINIMAL = "minimal"


class SlabConfigSchema(BaseModel):
    """Stock slab dimensions in inches.

    Attributes:
        width: Slab width (default jumbo slab, 133").
        height: Slab height (default 78").
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(default=133.0, gt=0)
    height: float = Field(default=78.0, gt=0)


class SplittingConfigSchema(BaseModel):
    """Whether and how oversized countertops are cut into sections.

    Attributes:
        enabled: Allow splitting of countertops larger than the slab.
        min_length: Shortest section kept; shorter remainders are discarded.
    """

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    min_length: float = Field(default=24.0, gt=0)


class ExactSolverConfigSchema(BaseModel):
    """Branch-and-bound settings."""

    model_config = ConfigDict(extra="forbid")

    time_limit_seconds: float = Field(default=10.0, gt=0)
    max_free_spaces: int = Field(default=30, ge=1)
    progress_interval: int = Field(default=1000, ge=1)


class GeneticSolverConfigSchema(BaseModel):
    """Genetic algorithm settings.

    Attributes:
        population_size: Individuals per generation.
        generations: Number of generations.
        elite_count: Individuals carried over unchanged; must be smaller
            than population_size.
        mutation_rate: Probability a child is mutated.
        progress_interval: Generations between progress reports.
        seed: Optional random seed for reproducible runs.
    """

    model_config = ConfigDict(extra="forbid")

    population_size: int = Field(default=30, ge=2)
    generations: int = Field(default=40, ge=1)
    elite_count: int = Field(default=4, ge=1)
    mutation_rate: float = Field(default=0.1, ge=0, le=1)
    progress_interval: int = Field(default=10, ge=1)
    seed: int | None = None

    @model_validator(mode="after")
    def validate_elite_count(self) -> "GeneticSolverConfigSchema":
        """Ensure the elite leaves room for offspring."""
        if self.elite_count >= self.population_size:
            raise ValueError(
                f"elite_count ({self.elite_count}) must be less than "
                f"population_size ({self.population_size})"
            )
        return self


class PricingConfigSchema(BaseModel):
    """Slab pricing used for the cost estimate."""

    model_config = ConfigDict(extra="forbid")

    price_per_sq_ft: float = Field(default=50.0, ge=0)


class CountertopConfigSchema(BaseModel):
    """One requested countertop.

    Attributes:
        id: Unique identifier; numbers are accepted and converted to text.
        width: Width in inches.
        height: Height (depth) in inches.
        label: Display name.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    label: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> object:
        """Accept integer ids; job files often number their countertops."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class JobConfiguration(BaseModel):
    """Root configuration model for an optimization job file.

    Attributes:
        version: Schema version in "major.minor" form.
        slab: Slab dimensions.
        kerf: Blade allowance in inches added to every effective dimension.
        splitting: Oversized countertop handling.
        algorithm: Algorithm to run.
        max_slabs: Slab cap for the exact and genetic solvers.
        exact: Branch-and-bound settings.
        genetic: Genetic algorithm settings.
        pricing: Cost estimate settings.
        preset: Built-in countertop list used when countertops is empty.
        countertops: Explicit countertop list.

    Example:
        >>> config = JobConfiguration(
        ...     version="1.0",
        ...     countertops=[{"id": "1", "width": 96, "height": 26}],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    slab: SlabConfigSchema = Field(default_factory=SlabConfigSchema)
    kerf: float = Field(default=0.125, ge=0, le=0.5)
    splitting: SplittingConfigSchema = Field(default_factory=SplittingConfigSchema)
    algorithm: Algorithm = Algorithm.GUILLOTINE
    max_slabs: int = Field(default=10, ge=1)
    exact: ExactSolverConfigSchema = Field(default_factory=ExactSolverConfigSchema)
    genetic: GeneticSolverConfigSchema = Field(default_factory=GeneticSolverConfigSchema)
    pricing: PricingConfigSchema = Field(default_factory=PricingConfigSchema)
    preset: PresetName | None = None
    countertops: list[CountertopConfigSchema] = Field(default_factory=list)

    @field_validator("version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that the schema version is supported."""
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(f"Unsupported version '{v}'. Supported: {supported}")
        return v

    @field_validator("countertops")
    @classmethod
    def validate_unique_ids(
        cls, v: list[CountertopConfigSchema]
    ) -> list[CountertopConfigSchema]:
        """Reject duplicate countertop ids."""
        seen: set[str] = set()
        for countertop in v:
            if countertop.id in seen:
                raise ValueError(f"Duplicate countertop id '{countertop.id}'")
            seen.add(countertop.id)
        return v

    @model_validator(mode="after")
    def validate_has_pieces(self) -> "JobConfiguration":
        """Require a preset or at least one countertop."""
        if self.preset is None and not self.countertops:
            raise ValueError("Provide either a preset or at least one countertop")
        return self
