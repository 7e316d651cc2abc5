"""CLI info command."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from tvt.cli.context import CLIContext
from tvt.cli.exit_codes import ExitCode
from tvt.cli.output import error_exit, fail, status
from tvt.exceptions import TranscoderError, ValidationError
from tvt.introspector.formatters import format_human, format_json
from tvt.security.validation import validate_file_path
from tvt.services.inspect import inspect_media

logger = logging.getLogger(__name__)


@click.command("info")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.option(
    "--detailed",
    "-d",
    is_flag=True,
    help="Include per-stream details and a technical summary",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write the report to a file instead of stdout",
)
@click.pass_obj
def info_command(
    obj: CLIContext,
    file: Path,
    output_format: str,
    detailed: bool,
    output: Path | None,
) -> None:
    """Show information about a media file.

    FILE is the path to the media file to inspect.
    """
    json_output = output_format == "json"

    if output is not None:
        try:
            validate_file_path(obj.policy, output)
        except ValidationError as e:
            error_exit(
                e.with_field("output path").message,
                ExitCode.VALIDATION_ERROR,
                json_output,
            )

    try:
        info = inspect_media(file, obj.policy, obj.make_probe())
    except TranscoderError as e:
        fail(e, json_output)

    if json_output:
        report = format_json(info)
    else:
        report = format_human(info, detailed=detailed)

    if output is None:
        click.echo(report)
        return

    try:
        output.write_text(report + "\n", encoding="utf-8")
    except OSError as e:
        error_exit(f"Cannot write {output}: {e}", ExitCode.GENERAL_ERROR, json_output)
    logger.info("Wrote media report to %s", output)
    status(f"Information saved to: {output}", obj.quiet or json_output)
