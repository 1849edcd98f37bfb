"""Click CLI entry point for pandaegg."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from pandaegg import __version__
from pandaegg.dump import render_scene_yaml
from pandaegg.errors import EggError
from pandaegg.inspection import inspect_scene, render_text
from pandaegg.logging_config import setup_logging
from pandaegg.parser import parse_egg
from pandaegg.warning_policy import WarningPolicy, describe_codes


def _build_warning_policy(
    warn_as_error: str | None, suppress_warning: str | None
) -> WarningPolicy | None:
    """Parse CLI warning options into a WarningPolicy, or None if unset."""
    try:
        return WarningPolicy.from_options(warn_as_error, suppress_warning)
    except ValueError as e:
        raise click.ClickException(str(e)) from e


_warn_as_error_option = click.option(
    "--warn-as-error",
    "warn_as_error",
    type=str,
    default=None,
    help=f"Comma-separated W-codes to treat as errors. {describe_codes()}.",
)
_suppress_warning_option = click.option(
    "--suppress-warning",
    "suppress_warning",
    type=str,
    default=None,
    help="Comma-separated W-codes to suppress (e.g. W01).",
)


@click.group()
@click.version_option(version=__version__, prog_name="pandaegg")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log pipeline progress.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write pipeline progress to this file (implies --verbose).",
)
def main(verbose: bool = False, log_file: Path | None = None) -> None:
    """pandaegg: parse Panda3D EGG documents into a typed scene graph."""
    if verbose or log_file is not None:
        setup_logging(logging.DEBUG, log_file=str(log_file) if log_file else None)


@main.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Inspection output format.",
)
@_warn_as_error_option
@_suppress_warning_option
def inspect(
    input_file: Path,
    output_format: str = "text",
    warn_as_error: str | None = None,
    suppress_warning: str | None = None,
) -> None:
    """Summarize the scene graph of an .egg file."""
    warning_policy = _build_warning_policy(warn_as_error, suppress_warning)

    try:
        scene = parse_egg(input_file, warning_policy=warning_policy)
    except EggError as e:
        raise click.ClickException(str(e)) from e

    payload = inspect_scene(scene)
    if output_format == "json":
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo(render_text(payload), nl=False)


@main.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=str,
    default="-",
    show_default=True,
    help="Write YAML to this path, or '-' for stdout.",
)
@click.option(
    "--drop-empty",
    is_flag=True,
    default=False,
    help="Omit unset optional fields from the output.",
)
@_warn_as_error_option
@_suppress_warning_option
def dump(
    input_file: Path,
    output: str = "-",
    drop_empty: bool = False,
    warn_as_error: str | None = None,
    suppress_warning: str | None = None,
) -> None:
    """Write the full scene graph of an .egg file as YAML."""
    warning_policy = _build_warning_policy(warn_as_error, suppress_warning)

    try:
        scene = parse_egg(input_file, warning_policy=warning_policy)
    except EggError as e:
        raise click.ClickException(str(e)) from e

    text = render_scene_yaml(scene, exclude_none=drop_empty)
    if output == "-":
        click.echo(text, nl=False)
        return

    output_path = Path(output)
    try:
        output_path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"Cannot write YAML to {output_path}: {e}") from e
    click.echo(f"Wrote: {output_path}")
