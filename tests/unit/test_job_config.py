"""Unit tests for job file loading, merging, conversion and validation.

These tests verify:
- Loader errors carry a category and an actionable message
- Schema bounds and cross-field rules are enforced
- CLI overrides take precedence and are re-validated
- The adapter resolves presets and explicit countertops
- Job-level checks produce errors, warnings and exit codes
"""

from pathlib import Path

import pytest

from countertops.application.config import (
    ConfigError,
    JobConfiguration,
    PresetName,
    available_presets,
    config_to_countertops,
    config_to_request,
    get_preset,
    load_config,
    load_config_from_dict,
    merge_config_with_cli,
    validate_config,
)
from countertops.application.config.validator import ValidationResult
from countertops.domain import Algorithm

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "jobs"


def _job(**overrides: object) -> dict:
    data: dict = {
        "version": "1.0",
        "countertops": [{"id": "1", "width": 96, "height": 26, "label": "Main"}],
    }
    data.update(overrides)
    return data


# =============================================================================
# Loader
# =============================================================================


class TestLoadConfig:
    """Tests for load_config()."""

    def test_valid_file(self) -> None:
        """A valid job file loads with integer ids converted to text."""
        config = load_config(FIXTURES_PATH / "valid_kitchen.json")
        assert config.algorithm == Algorithm.BEST_FIT
        assert [c.id for c in config.countertops] == ["1", "2", "3"]
        assert config.slab.width == 133

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file is reported as file_not_found."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "nope.json")
        assert exc_info.value.error_type == "file_not_found"
        assert "Config file not found" in str(exc_info.value)

    def test_malformed_json(self) -> None:
        """Syntax errors report line and column."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(FIXTURES_PATH / "malformed.json")
        error = exc_info.value
        assert error.error_type == "json_parse"
        assert "Invalid JSON" in error.message
        assert "line" in error.details[0]

    def test_validation_error_path(self) -> None:
        """Schema errors name the offending field."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(FIXTURES_PATH / "invalid_dimensions.json")
        error = exc_info.value
        assert error.error_type == "validation"
        assert error.details[0]["path"] == "countertops[0].width"
        assert "countertops[0].width" in error.message

    def test_directory_is_a_read_error(self, tmp_path: Path) -> None:
        """Paths that exist but cannot be read as text are read errors."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)
        assert exc_info.value.error_type in ("file_read_error", "permission_denied")


class TestJobSchema:
    """Tests for JobConfiguration rules."""

    def test_defaults(self) -> None:
        """Unset sections take the documented defaults."""
        config = load_config_from_dict(_job())
        assert (config.slab.width, config.slab.height) == (133, 78)
        assert config.kerf == 0.125
        assert config.splitting.enabled is True
        assert config.splitting.min_length == 24
        assert config.algorithm == Algorithm.GUILLOTINE
        assert config.max_slabs == 10
        assert config.pricing.price_per_sq_ft == 50

    def test_unsupported_version(self) -> None:
        """Only supported schema versions load."""
        with pytest.raises(ConfigError, match="Unsupported version '2.0'"):
            load_config_from_dict(_job(version="2.0"))

    def test_requires_preset_or_countertops(self) -> None:
        """A job with nothing to cut is rejected at the root."""
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({"version": "1.0"})
        assert exc_info.value.details[0]["path"] == "(root)"
        assert "Provide either a preset" in exc_info.value.message

    def test_duplicate_ids(self) -> None:
        """Countertop ids must be unique."""
        countertops = [
            {"id": "1", "width": 10, "height": 10},
            {"id": 1, "width": 20, "height": 10},
        ]
        with pytest.raises(ConfigError, match="Duplicate countertop id '1'"):
            load_config_from_dict(_job(countertops=countertops))

    def test_elite_must_be_below_population(self) -> None:
        """The genetic elite must leave room for offspring."""
        with pytest.raises(ConfigError, match="must be less than population_size"):
            load_config_from_dict(
                _job(genetic={"population_size": 4, "elite_count": 4})
            )

    def test_kerf_bounds(self) -> None:
        """Kerf is limited to half an inch."""
        with pytest.raises(ConfigError):
            load_config_from_dict(_job(kerf=0.75))

    def test_unknown_fields_rejected(self) -> None:
        """Typos in section names are errors."""
        with pytest.raises(ConfigError):
            load_config_from_dict(_job(slabs={"width": 100}))

    def test_unknown_algorithm(self) -> None:
        """Algorithm names come from the Algorithm enum."""
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(_job(algorithm="simulated_annealing"))
        assert exc_info.value.details[0]["path"] == "algorithm"


# =============================================================================
# Merger
# =============================================================================


class TestMergeConfigWithCli:
    """Tests for merge_config_with_cli()."""

    @pytest.fixture
    def base_config(self) -> JobConfiguration:
        """A job with non-default values in every section."""
        return load_config_from_dict(
            _job(
                slab={"width": 120, "height": 60},
                kerf=0.25,
                algorithm="first_fit",
                genetic={"seed": 3},
            )
        )

    def test_no_overrides_returns_equivalent_config(
        self, base_config: JobConfiguration
    ) -> None:
        """Without CLI arguments the job is unchanged."""
        assert merge_config_with_cli(base_config) == base_config

    def test_overrides_win(self, base_config: JobConfiguration) -> None:
        """Non-None CLI arguments replace job values."""
        merged = merge_config_with_cli(
            base_config,
            slab_width=100,
            kerf=0,
            algorithm="genetic",
            max_slabs=3,
            allow_splitting=False,
            time_limit_seconds=2.5,
            seed=11,
            price_per_sq_ft=80,
        )
        assert merged.slab.width == 100
        assert merged.slab.height == 60
        assert merged.kerf == 0
        assert merged.algorithm == Algorithm.GENETIC
        assert merged.max_slabs == 3
        assert merged.splitting.enabled is False
        assert merged.exact.time_limit_seconds == 2.5
        assert merged.genetic.seed == 11
        assert merged.pricing.price_per_sq_ft == 80

    def test_original_is_not_modified(self, base_config: JobConfiguration) -> None:
        """Merging returns a new configuration."""
        merge_config_with_cli(base_config, slab_width=100)
        assert base_config.slab.width == 120

    def test_preset_replaces_countertops(self, base_config: JobConfiguration) -> None:
        """A preset on the command line replaces the job's countertops."""
        merged = merge_config_with_cli(base_config, preset="minimal")
        assert merged.preset == PresetName.MINIMAL
        assert merged.countertops == []

    def test_invalid_override_raises_config_error(
        self, base_config: JobConfiguration
    ) -> None:
        """Overrides are validated like job values."""
        with pytest.raises(ConfigError) as exc_info:
            merge_config_with_cli(base_config, slab_width=-1)
        assert exc_info.value.details[0]["path"] == "slab.width"


# =============================================================================
# Presets and adapter
# =============================================================================


class TestPresets:
    """Tests for the built-in countertop lists."""

    def test_available(self) -> None:
        """Both presets are listed."""
        assert available_presets() == ["standard", "minimal"]

    def test_standard(self) -> None:
        """The standard preset has twelve numbered countertops."""
        countertops = get_preset("standard")
        assert len(countertops) == 12
        assert [c.id for c in countertops] == [str(i) for i in range(1, 13)]
        assert countertops[0].label == "Long Countertop"
        assert (countertops[0].width, countertops[0].height) == (137, 26)

    def test_minimal(self) -> None:
        """The minimal preset has three countertops."""
        countertops = get_preset(PresetName.MINIMAL)
        assert [c.label for c in countertops] == ["Main Counter", "Island", "Backsplash"]

    def test_unknown(self) -> None:
        """Unknown preset names raise ValueError."""
        with pytest.raises(ValueError):
            get_preset("deluxe")


class TestConfigAdapter:
    """Tests for config_to_countertops() and config_to_request()."""

    def test_explicit_countertops_with_default_label(self) -> None:
        """Unlabelled countertops are named after their id."""
        config = load_config_from_dict(
            _job(countertops=[{"id": "7", "width": 30, "height": 20}])
        )
        (countertop,) = config_to_countertops(config)
        assert countertop.label == "Countertop 7"

    def test_preset_used_when_no_countertops(self) -> None:
        """A preset supplies the countertops when none are listed."""
        config = load_config_from_dict({"preset": "minimal"})
        assert len(config_to_countertops(config)) == 3

    def test_explicit_countertops_win_over_preset(self) -> None:
        """Listed countertops take precedence over a preset."""
        config = load_config_from_dict(_job(preset="standard"))
        assert [c.label for c in config_to_countertops(config)] == ["Main"]

    def test_request_carries_all_settings(self) -> None:
        """Every job section reaches the request."""
        config = load_config_from_dict(
            _job(
                slab={"width": 120, "height": 60},
                kerf=0,
                splitting={"enabled": False, "min_length": 30},
                algorithm="branch_and_bound",
                max_slabs=4,
                exact={"time_limit_seconds": 2},
                genetic={"population_size": 10, "elite_count": 2, "seed": 5},
                pricing={"price_per_sq_ft": 75},
            )
        )
        request = config_to_request(config)

        assert (request.slab_width, request.slab_height, request.kerf) == (120, 60, 0)
        assert request.allow_splitting is False
        assert request.min_split_length == 30
        assert request.algorithm == Algorithm.BRANCH_AND_BOUND
        assert request.settings.max_slabs == 4
        assert request.settings.exact.time_limit_seconds == 2
        assert request.settings.genetic.population_size == 10
        assert request.settings.genetic.seed == 5
        assert request.price_per_sq_ft == 75
        assert request.validate() == []


# =============================================================================
# Job-level validation
# =============================================================================


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_exit_codes(self) -> None:
        """Clean is 0, errors are 1, warnings only are 2."""
        assert ValidationResult().exit_code == 0
        assert ValidationResult().add_warning("a", "w").exit_code == 2
        assert ValidationResult().add_warning("a", "w").add_error("b", "e").exit_code == 1

    def test_merge(self) -> None:
        """Merging collects both lists."""
        result = ValidationResult().add_error("a", "e")
        result.merge(ValidationResult().add_warning("b", "w"))
        assert not result.is_valid
        assert result.has_warnings


class TestValidateConfig:
    """Tests for validate_config()."""

    def test_clean_job(self) -> None:
        """A job whose countertops all fit passes cleanly."""
        result = validate_config(load_config(FIXTURES_PATH / "valid_kitchen.json"))
        assert result.exit_code == 0

    def test_oversized_without_splitting_is_error(self) -> None:
        """An oversized countertop with splitting off cannot be placed."""
        result = validate_config(load_config(FIXTURES_PATH / "oversized_no_split.json"))
        assert result.exit_code == 1
        assert result.errors[0].path == "countertops[0]"
        assert "splitting is disabled" in result.errors[0].message

    def test_oversized_both_ways_is_error(self) -> None:
        """Countertops too big on both axes are errors even with splitting."""
        config = load_config_from_dict(
            _job(countertops=[{"id": "1", "width": 200, "height": 100, "label": "Slab"}])
        )
        result = validate_config(config)
        assert result.exit_code == 1
        assert "does not fit a 133 x 78 slab" in result.errors[0].message

    def test_discarded_remainder_is_warning(self) -> None:
        """A split that drops a short section warns with a suggestion."""
        result = validate_config(load_config(FIXTURES_PATH / "short_remainder.json"))
        assert result.exit_code == 2
        warning = result.warnings[0]
        assert warning.path == "countertops[0]"
        assert "discards a short section" in warning.message
        assert warning.suggestion is not None

    def test_preset_paths(self) -> None:
        """Preset countertops are reported by preset index."""
        result = validate_config(load_config_from_dict({"preset": "standard"}))
        assert result.is_valid
        assert [w.path for w in result.warnings] == ["preset[0]"]

    def test_preset_and_countertops_warns(self) -> None:
        """Setting both a preset and countertops warns that the preset is ignored."""
        result = validate_config(load_config_from_dict(_job(preset="minimal")))
        assert [w.path for w in result.warnings] == ["preset"]

    def test_large_exact_search_warns(self) -> None:
        """Many countertops under the exact search trigger an advisory."""
        countertops = [
            {"id": str(i), "width": 20, "height": 10} for i in range(13)
        ]
        config = load_config_from_dict(
            _job(algorithm="branch_and_bound", countertops=countertops)
        )
        assert [w.path for w in validate_config(config).warnings] == ["algorithm"]

    def test_slab_cap_too_small_warns(self) -> None:
        """Area beyond max_slabs slabs is flagged for capped algorithms."""
        countertops = [
            {"id": "1", "width": 130, "height": 70},
            {"id": "2", "width": 130, "height": 70},
        ]
        config = load_config_from_dict(
            _job(algorithm="genetic", max_slabs=1, countertops=countertops)
        )
        assert [w.path for w in validate_config(config).warnings] == ["max_slabs"]
