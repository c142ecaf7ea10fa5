"""Configuration merging utilities for CLI override support.

Precedence is CLI args > job file values > defaults. Only CLI arguments
that are not None override the job file.
"""

from typing import Any

from countertops.application.config.loader import load_config_from_dict
from countertops.application.config.schema import JobConfiguration
from countertops.domain.value_objects import Algorithm


def merge_config_with_cli(
    config: JobConfiguration,
    *,
    slab_width: float | None = None,
    slab_height: float | None = None,
    kerf: float | None = None,
    algorithm: Algorithm | str | None = None,
    max_slabs: int | None = None,
    allow_splitting: bool | None = None,
    min_split_length: float | None = None,
    time_limit_seconds: float | None = None,
    seed: int | None = None,
    price_per_sq_ft: float | None = None,
    preset: str | None = None,
) -> JobConfiguration:
    """Merge CLI arguments with job file values.

    The merged data is re-validated, so an out-of-range override raises the
    same ConfigError a bad job file would.

    Returns:
        A new JobConfiguration with merged values

    Example:
        >>> merged = merge_config_with_cli(config, slab_width=120.0)
        >>> merged.slab.width
        120.0
    """
    data: dict[str, Any] = config.model_dump()

    _override(data["slab"], "width", slab_width)
    _override(data["slab"], "height", slab_height)
    _override(data, "kerf", kerf)
    _override(data, "algorithm", Algorithm(algorithm) if algorithm is not None else None)
    _override(data, "max_slabs", max_slabs)
    _override(data["splitting"], "enabled", allow_splitting)
    _override(data["splitting"], "min_length", min_split_length)
    _override(data["exact"], "time_limit_seconds", time_limit_seconds)
    _override(data["genetic"], "seed", seed)
    _override(data["pricing"], "price_per_sq_ft", price_per_sq_ft)
    if preset is not None:
        # A preset named on the command line replaces the file's countertops.
        data["preset"] = preset
        data["countertops"] = []

    return load_config_from_dict(data)


def _override(section: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        section[key] = value
