"""CLI module for the terminal video transcoder."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from tvt import __version__
from tvt.cli.context import CLIContext
from tvt.cli.exit_codes import ExitCode
from tvt.cli.output import error_exit
from tvt.config.loader import get_config
from tvt.exceptions import ConfigError
from tvt.logging import configure_logging
from tvt.security.policy import SecurityPolicy

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(__version__, prog_name="tvt")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.tvt/config.toml or TVT_CONFIG_PATH)",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Log level (overrides config)",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write logs to this file (overrides config)",
)
@click.option("--log-json", is_flag=True, help="Emit logs as JSON lines")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show ffmpeg's own output instead of a progress bar",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress the progress bar and status messages",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Inspect, convert and extract audio from media files with ffmpeg."""
    if verbose and quiet:
        raise click.UsageError("--verbose and --quiet cannot be used together")

    try:
        config = get_config(
            config_path=config_path,
            log_level=log_level.lower() if log_level else None,
            log_file=log_file,
            log_format="json" if log_json else None,
            strict=config_path is not None,
        )
    except ConfigError as e:
        error_exit(e.message, ExitCode.CONFIG_ERROR)

    configure_logging(config.logging)
    logger.debug("tvt %s starting with config %s", __version__, config)

    ctx.obj = CLIContext(
        config=config,
        policy=SecurityPolicy.from_config(config.security),
        verbose=verbose,
        quiet=quiet,
    )


# Defer import to avoid circular dependency
def _register_commands() -> None:
    from tvt.cli.convert import convert_command
    from tvt.cli.doctor import doctor_command
    from tvt.cli.extract import extract_command
    from tvt.cli.info import info_command

    main.add_command(info_command)
    main.add_command(convert_command)
    main.add_command(extract_command)
    main.add_command(doctor_command)


_register_commands()
