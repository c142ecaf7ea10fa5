"""Validate command for checking countertop job files.

Loads the job file, then reports schema problems, countertops that can
never be placed, split sections that would be thrown away, and solver
settings that cannot succeed.
"""

from pathlib import Path
from typing import Annotated

import typer

from countertops.application.config import (
    ConfigError,
    JobConfiguration,
    ValidationResult,
    load_config,
    validate_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file to validate"),
    ],
) -> None:
    """Validate a countertop job file.

    Exit codes:
        0 - the job can be optimized as written
        1 - the job has errors and cannot be optimized
        2 - the job can be optimized but has warnings

    Example:
        countertops validate kitchen.json
    """
    typer.echo(f"Validating {config_file}...")

    try:
        config = load_config(config_file)
    except ConfigError as e:
        typer.echo()
        _echo_issues("Errors", _load_error_lines(e), err=True)
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    typer.echo(_describe_job(config))
    typer.echo()

    result = validate_config(config)
    if result.errors:
        _echo_issues(
            "Errors", [f"{error.path}: {error.message}" for error in result.errors], err=True
        )
    if result.warnings:
        _echo_issues("Warnings", _warning_lines(result))
    _echo_summary(result)
    raise typer.Exit(code=result.exit_code)


def _describe_job(config: JobConfiguration) -> str:
    """One line naming what the job cuts and from what."""
    if config.countertops:
        source = f"{len(config.countertops)} countertop(s)"
    else:
        source = f"preset '{config.preset.value}'"
    return (
        f"Job: {source} on {config.slab.width:g}x{config.slab.height:g} slabs, "
        f"algorithm {config.algorithm.value}"
    )


def _load_error_lines(error: ConfigError) -> list[str]:
    if error.error_type == "file_not_found":
        return [f"File not found: {error.path}"]
    if error.error_type == "json_parse":
        return ["Invalid JSON syntax"] + [
            f"  Line {d.get('line', '?')}, Column {d.get('column', '?')}: "
            f"{d.get('message', 'Unknown error')}"
            for d in error.details
        ]
    if error.error_type == "validation":
        return [
            f"{d.get('path', 'unknown')}: {d.get('message', 'Unknown error')}"
            for d in error.details
        ]
    return [error.message]


def _warning_lines(result: ValidationResult) -> list[str]:
    lines: list[str] = []
    for warning in result.warnings:
        lines.append(f"{warning.path}: {warning.message}")
        if warning.suggestion:
            lines.append(f"  Suggestion: {warning.suggestion}")
    return lines


def _echo_issues(title: str, lines: list[str], err: bool = False) -> None:
    typer.echo(f"{title}:", err=err)
    for line in lines:
        typer.echo(f"  {line}", err=err)
    typer.echo()


def _echo_summary(result: ValidationResult) -> None:
    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Job file is valid.")
