"""Job file schema, loading, and validation.

Public API:
    - JobConfiguration: Root configuration model
    - load_config / load_config_from_dict: Load and validate a job
    - ConfigError: Exception for configuration errors
    - merge_config_with_cli: Apply command-line overrides
    - config_to_request: Convert a job into an OptimizationRequest
    - get_preset / available_presets: Built-in countertop lists
    - validate_config: Job-level placement and solver checks

Example:
    >>> from pathlib import Path
    >>> from countertops.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("kitchen.json"))
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from countertops.application.config.adapter import (
    config_to_countertops,
    config_to_request,
    config_to_settings,
)
from countertops.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from countertops.application.config.merger import merge_config_with_cli
from countertops.application.config.presets import available_presets, get_preset
from countertops.application.config.schema import (
    SUPPORTED_VERSIONS,
    CountertopConfigSchema,
    ExactSolverConfigSchema,
    GeneticSolverConfigSchema,
    JobConfiguration,
    PresetName,
    PricingConfigSchema,
    SlabConfigSchema,
    SplittingConfigSchema,
)
from countertops.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    # Schema
    "SUPPORTED_VERSIONS",
    "CountertopConfigSchema",
    "ExactSolverConfigSchema",
    "GeneticSolverConfigSchema",
    "JobConfiguration",
    "PresetName",
    "PricingConfigSchema",
    "SlabConfigSchema",
    "SplittingConfigSchema",
    # Loading
    "ConfigError",
    "load_config",
    "load_config_from_dict",
    "merge_config_with_cli",
    # Conversion
    "config_to_countertops",
    "config_to_request",
    "config_to_settings",
    "available_presets",
    "get_preset",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate_config",
]
