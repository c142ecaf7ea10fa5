"""Typer CLI for countertop slab optimization."""

import logging
from pathlib import Path
from typing import Annotated, Any

import typer

from countertops.application import (
    OptimizationRequest,
    OptimizeCommand,
    compare_algorithms,
)
from countertops.application.config import (
    ConfigError,
    JobConfiguration,
    available_presets,
    config_to_request,
    get_preset,
    load_config,
    load_config_from_dict,
    merge_config_with_cli,
)
from countertops.cli.commands import validate_command
from countertops.domain import Algorithm
from countertops.domain.services import summarize_countertops
from countertops.infrastructure import (
    ComparisonFormatter,
    FailureFormatter,
    InventoryFormatter,
    JsonExporter,
    SolutionFormatter,
)

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json")

app = typer.Typer(
    name="countertops",
    help="Lay out countertops on stone slabs with as little waste as possible.",
)

app.command(name="validate")(validate_command)


def setup_logging(verbose: bool) -> None:
    """Send library logs to stderr at DEBUG level when --verbose is given."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def _log_progress(snapshot: Any) -> None:
    logger.info("Progress: %s", snapshot)


def _resolve_config(config_file: Path | None, preset: str | None) -> JobConfiguration:
    """Load the job file, or build a job from a preset name alone."""
    if config_file is not None:
        return load_config(config_file)
    if preset is None:
        typer.echo("Error: --config or --preset is required", err=True)
        raise typer.Exit(code=1)
    return load_config_from_dict({"preset": preset})


def _build_request(
    config_file: Path | None,
    preset: str | None,
    overrides: dict[str, Any],
) -> OptimizationRequest:
    try:
        config = _resolve_config(config_file, preset)
        config = merge_config_with_cli(config, preset=preset, **overrides)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    return config_to_request(config)


def _check_format(output_format: str) -> None:
    if output_format not in OUTPUT_FORMATS:
        typer.echo(
            f"Error: Unknown format '{output_format}'. "
            f"Choose from: {', '.join(OUTPUT_FORMATS)}",
            err=True,
        )
        raise typer.Exit(code=1)


def _emit(text: str, output_file: Path | None) -> None:
    if output_file is None:
        typer.echo(text)
        return
    output_file.write_text(text + "\n", encoding="utf-8")
    typer.echo(f"Written to: {output_file}", err=True)


ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to JSON job file"),
]
PresetOption = Annotated[
    str | None,
    typer.Option("--preset", "-p", help="Built-in countertop list: standard, minimal"),
]
SlabWidthOption = Annotated[
    float | None,
    typer.Option("--slab-width", help="Slab width in inches (default 133)"),
]
SlabHeightOption = Annotated[
    float | None,
    typer.Option("--slab-height", help="Slab height in inches (default 78)"),
]
KerfOption = Annotated[
    float | None,
    typer.Option("--kerf", help="Blade width in inches (default 0.125)"),
]
MaxSlabsOption = Annotated[
    int | None,
    typer.Option("--max-slabs", help="Slab cap for exact and genetic search"),
]
NoSplittingOption = Annotated[
    bool,
    typer.Option("--no-splitting", help="Do not split countertops larger than a slab"),
]
MinSplitOption = Annotated[
    float | None,
    typer.Option("--min-split-length", help="Shortest split section kept, in inches"),
]
TimeLimitOption = Annotated[
    float | None,
    typer.Option("--time-limit", help="Exact search time limit in seconds"),
]
SeedOption = Annotated[
    int | None,
    typer.Option("--seed", help="Random seed for the genetic algorithm"),
]
FormatOption = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format: text, json"),
]
OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Write the report to a file"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log solver progress to stderr"),
]


@app.command()
def optimize(
    config_file: ConfigOption = None,
    preset: PresetOption = None,
    slab_width: SlabWidthOption = None,
    slab_height: SlabHeightOption = None,
    kerf: KerfOption = None,
    algorithm: Annotated[
        str | None,
        typer.Option(
            "--algorithm",
            "-a",
            help="guillotine, first_fit, best_fit, branch_and_bound, genetic",
        ),
    ] = None,
    max_slabs: MaxSlabsOption = None,
    no_splitting: NoSplittingOption = False,
    min_split_length: MinSplitOption = None,
    time_limit: TimeLimitOption = None,
    seed: SeedOption = None,
    output_format: FormatOption = "text",
    output_file: OutputOption = None,
    include_spaces: Annotated[
        bool,
        typer.Option("--spaces", help="List each slab's remaining free spaces"),
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Compute a cutting plan for a set of countertops.

    Countertops come from a JSON job file or a preset. When using --config,
    command-line options override job file values.

    Examples:
        countertops optimize --preset standard
        countertops optimize --config kitchen.json --algorithm best_fit
        countertops optimize --config kitchen.json --format json -o plan.json
    """
    setup_logging(verbose)
    _check_format(output_format)
    if algorithm is not None and algorithm not in {a.value for a in Algorithm}:
        typer.echo(f"Error: Unknown algorithm '{algorithm}'", err=True)
        raise typer.Exit(code=1)

    request = _build_request(
        config_file,
        preset,
        dict(
            slab_width=slab_width,
            slab_height=slab_height,
            kerf=kerf,
            algorithm=algorithm,
            max_slabs=max_slabs,
            allow_splitting=False if no_splitting else None,
            min_split_length=min_split_length,
            time_limit_seconds=time_limit,
            seed=seed,
        ),
    )

    if output_format == "text":
        summary = summarize_countertops(
            request.countertops, request.slab_width, request.slab_height
        )
        typer.echo("COUNTERTOPS")
        typer.echo(InventoryFormatter().format(summary))
        typer.echo()

    output = OptimizeCommand().execute(
        request, progress=_log_progress if verbose else None
    )

    if output.failure is not None:
        if output_format == "json":
            _emit(JsonExporter().export_failure(output.failure), output_file)
        else:
            typer.echo(FailureFormatter().format(output.failure), err=True)
        raise typer.Exit(code=1)

    if output_format == "json":
        _emit(JsonExporter().export(output.solution), output_file)
    else:
        _emit(SolutionFormatter(include_spaces=include_spaces).format(output.solution), output_file)


@app.command()
def compare(
    config_file: ConfigOption = None,
    preset: PresetOption = None,
    slab_width: SlabWidthOption = None,
    slab_height: SlabHeightOption = None,
    kerf: KerfOption = None,
    max_slabs: MaxSlabsOption = None,
    no_splitting: NoSplittingOption = False,
    min_split_length: MinSplitOption = None,
    time_limit: TimeLimitOption = None,
    seed: SeedOption = None,
    output_format: FormatOption = "text",
    output_file: OutputOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Run every algorithm on the same countertops and recommend one.

    Examples:
        countertops compare --preset minimal
        countertops compare --config kitchen.json --time-limit 2
    """
    setup_logging(verbose)
    _check_format(output_format)

    request = _build_request(
        config_file,
        preset,
        dict(
            slab_width=slab_width,
            slab_height=slab_height,
            kerf=kerf,
            max_slabs=max_slabs,
            allow_splitting=False if no_splitting else None,
            min_split_length=min_split_length,
            time_limit_seconds=time_limit,
            seed=seed,
        ),
    )

    try:
        report = compare_algorithms(request)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output_format == "json":
        _emit(JsonExporter().export_comparison(report), output_file)
    else:
        _emit(ComparisonFormatter().format(report), output_file)

    if report.recommendation is None:
        raise typer.Exit(code=1)


@app.command()
def presets(
    slab_width: SlabWidthOption = None,
    slab_height: SlabHeightOption = None,
) -> None:
    """List the built-in countertop presets."""
    width = slab_width if slab_width is not None else 133.0
    height = slab_height if slab_height is not None else 78.0
    formatter = InventoryFormatter()
    for name in available_presets():
        countertops = get_preset(name)
        typer.echo(f"{name} ({len(countertops)} countertops)")
        for countertop in countertops:
            typer.echo(
                f"  {countertop.id:>3}  {countertop.label:<28} "
                f"{countertop.width:g} x {countertop.height:g}"
            )
        typer.echo(formatter.format(summarize_countertops(countertops, width, height)))
        typer.echo()


if __name__ == "__main__":
    app()
