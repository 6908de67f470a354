"""Click-based CLI for inspecting and scaffolding force-feedback configuration."""

import json
import sys
from pathlib import Path
from typing import Any

import click

from . import __version__
from .config.loader import ConfigLoader
from .config.models import (
    FeedbackConfig,
    ForcedMarkerMode,
    RandomCorruptionMode,
    get_default_config,
)
from .errors import ConfigurationError
from .feedback_logging import LOG_FORMATS, setup_logging


def common_options(f: Any) -> Any:
    """Options shared by every command."""
    f = click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")(f)
    f = click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")(
        f
    )
    f = click.option(
        "--log-format",
        type=click.Choice(LOG_FORMATS),
        default="text",
        show_default=True,
        help="Log file format",
    )(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Write debug logs to a rotating file",
    )(f)
    f = click.option(
        "--project",
        "-p",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Project directory (defaults to the current directory)",
    )(f)
    return f


def describe_friction(config: FeedbackConfig) -> list[str]:
    """Render one line per tier, lowest threshold first."""
    lines = []
    for tier in config.tiers:
        mode = tier.friction
        if isinstance(mode, ForcedMarkerMode):
            effect = (
                f"insert {mode.marker_glyph!r} every {mode.noise_distance} "
                "contiguous keystrokes"
            )
        elif isinstance(mode, RandomCorruptionMode):
            effect = (
                f"insert {mode.count_per_keystroke} of "
                f"{''.join(mode.alphabet)!r} per keystroke"
            )
        else:
            effect = "highlight only"
        lines.append(f">= {tier.line_threshold:>4} lines  {tier.color:<10}  {effect}")
    return lines


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """force-feedback: friction for overly long methods."""


@cli.command()
@common_options
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file path",
)
@click.option("--json", "as_json", is_flag=True, help="Print the resolved config as JSON")
def tiers(
    project: Path | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
    log_format: str,
    config_path: Path | None,
    as_json: bool,
) -> None:
    """Show the resolved limit tiers."""
    setup_logging(
        quiet=quiet, verbose=verbose, log_file=log_file, log_format=log_format
    )
    try:
        config = ConfigLoader(project).load(config_path)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(config.to_dict(), indent=2, ensure_ascii=False))
        return

    if not config.tiers:
        click.echo("No tiers configured")
        return
    for line in describe_friction(config):
        click.echo(line)


@cli.command()
@common_options
@click.option("--force", is_flag=True, help="Overwrite an existing configuration")
def init(
    project: Path | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
    log_format: str,
    force: bool,
) -> None:
    """Write the default configuration into the project."""
    setup_logging(
        quiet=quiet, verbose=verbose, log_file=log_file, log_format=log_format
    )
    loader = ConfigLoader(project)
    target = loader.project_config_path
    if target.exists() and not force:
        click.echo(f"Configuration already exists: {target} (use --force)", err=True)
        sys.exit(1)

    path = loader.save(get_default_config())
    if not quiet:
        click.echo(f"Wrote {path}")


if __name__ == "__main__":
    cli()
