"""Adapter to convert a JobConfiguration into application DTOs.

Keeps the pydantic schema out of the command layer: the command and the
comparison harness only ever see OptimizationRequest and SolverSettings.
"""

from countertops.application.config.presets import get_preset
from countertops.application.config.schema import JobConfiguration
from countertops.application.dtos import (
    ExactSettings,
    GeneticSettings,
    OptimizationRequest,
    SolverSettings,
)
from countertops.domain import CountertopSpec


def config_to_countertops(config: JobConfiguration) -> tuple[CountertopSpec, ...]:
    """Resolve the countertops of a job.

    Explicit countertops win; the preset is used only when none are listed.
    """
    if config.countertops:
        return tuple(
            CountertopSpec(
                id=c.id,
                width=c.width,
                height=c.height,
                label=c.label or f"Countertop {c.id}",
            )
            for c in config.countertops
        )
    if config.preset is not None:
        return get_preset(config.preset)
    return ()


def config_to_settings(config: JobConfiguration) -> SolverSettings:
    """Convert the solver sections of a job into SolverSettings."""
    exact = config.exact
    genetic = config.genetic
    return SolverSettings(
        max_slabs=config.max_slabs,
        exact=ExactSettings(
            time_limit_seconds=exact.time_limit_seconds,
            max_free_spaces=exact.max_free_spaces,
            progress_interval=exact.progress_interval,
        ),
        genetic=GeneticSettings(
            population_size=genetic.population_size,
            generations=genetic.generations,
            elite_count=genetic.elite_count,
            mutation_rate=genetic.mutation_rate,
            progress_interval=genetic.progress_interval,
            seed=genetic.seed,
        ),
    )


def config_to_request(config: JobConfiguration) -> OptimizationRequest:
    """Convert a JobConfiguration into an OptimizationRequest.

    Example:
        >>> config = load_config(Path("kitchen.json"))
        >>> output = OptimizeCommand().execute(config_to_request(config))
    """
    return OptimizationRequest(
        countertops=config_to_countertops(config),
        slab_width=config.slab.width,
        slab_height=config.slab.height,
        kerf=config.kerf,
        allow_splitting=config.splitting.enabled,
        min_split_length=config.splitting.min_length,
        algorithm=config.algorithm,
        settings=config_to_settings(config),
        price_per_sq_ft=config.pricing.price_per_sq_ft,
    )
