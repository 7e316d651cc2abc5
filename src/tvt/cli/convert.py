"""CLI convert command."""

from __future__ import annotations

import shlex
from pathlib import Path

import click
from click.core import ParameterSource

from tvt.cli.context import CLIContext
from tvt.cli.exit_codes import ExitCode
from tvt.cli.output import CLIResult, error_exit, fail, status, success_output
from tvt.domain.enums import Preset
from tvt.domain.models import CustomParameters
from tvt.exceptions import TranscoderError
from tvt.security.validation import validate_preset
from tvt.services.convert import ConvertRequest, convert_video


@click.command("convert")
@click.argument("input_file", metavar="INPUT", type=click.Path(path_type=Path))
@click.argument("output_file", metavar="OUTPUT", type=click.Path(path_type=Path))
@click.option(
    "--preset",
    "-p",
    type=click.Choice(Preset.names()),
    default=None,
    help="Quality preset (default: from config, normally medium). "
    "Giving a preset forces re-encoding.",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing output")
@click.option("--video-codec", default=None, help="Video encoder (e.g., libx264)")
@click.option("--audio-codec", default=None, help="Audio encoder (e.g., aac)")
@click.option("--video-bitrate", default=None, help="Video bitrate (e.g., 2M)")
@click.option("--audio-bitrate", default=None, help="Audio bitrate (e.g., 192k)")
@click.option("--resolution", default=None, help="Output size WIDTHxHEIGHT")
@click.option("--framerate", default=None, help="Output frame rate (e.g., 30)")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Kill ffmpeg after this many seconds",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the ffmpeg command without running it",
)
@click.option("--json", "json_output", is_flag=True, help="Output result as JSON")
@click.pass_context
def convert_command(
    ctx: click.Context,
    input_file: Path,
    output_file: Path,
    preset: str | None,
    force: bool,
    video_codec: str | None,
    audio_codec: str | None,
    video_bitrate: str | None,
    audio_bitrate: str | None,
    resolution: str | None,
    framerate: str | None,
    timeout: float | None,
    dry_run: bool,
    json_output: bool,
) -> None:
    """Convert a video file to another container format.

    INPUT is the source media file; OUTPUT's extension (mp4, avi, mkv,
    webm, mov) selects the target container. When the input's codecs fit
    the target and no preset or custom parameter is given, streams are
    copied without re-encoding.
    """
    obj: CLIContext = ctx.obj
    quiet = obj.quiet or json_output

    if output_file.exists() and not force and not dry_run:
        error_exit(
            f"Output file already exists: {output_file} (use --force to overwrite)",
            ExitCode.OUTPUT_EXISTS,
            json_output,
        )

    preset_explicit = (
        ctx.get_parameter_source("preset") is ParameterSource.COMMANDLINE
    )
    params = CustomParameters(
        video_codec=video_codec,
        audio_codec=audio_codec,
        video_bitrate=video_bitrate,
        audio_bitrate=audio_bitrate,
        resolution=resolution,
        framerate=framerate,
    )

    renderer = obj.make_renderer(json_output)
    status(f"Converting {input_file} to {output_file}...", quiet)
    try:
        request = ConvertRequest(
            input_path=input_file,
            output_path=output_file,
            preset=validate_preset(preset or obj.config.transcode.default_preset),
            preset_explicit=preset_explicit,
            params=params,
        )
        result = convert_video(
            request,
            policy=obj.policy,
            probe=obj.make_probe(),
            runner=obj.make_runner(timeout),
            mode=obj.run_mode,
            renderer=renderer,
            dry_run=dry_run,
        )
    except TranscoderError as e:
        fail(e, json_output)
    except KeyboardInterrupt:
        renderer.finish()
        error_exit("Interrupted", ExitCode.INTERRUPTED, json_output)

    selection = result.selection
    data = {
        "input": str(input_file),
        "output": str(output_file),
        "video_codec": selection.video_codec,
        "audio_codec": selection.audio_codec,
        "stream_copy": selection.stream_copy,
        "args": result.args,
    }

    if dry_run:
        if json_output:
            success_output(CLIResult(True, "Dry run", data), json_output=True)
        else:
            click.echo(shlex.join(["ffmpeg", *result.args]))
        return

    assert result.run is not None
    data["elapsed_seconds"] = round(result.run.elapsed_seconds, 3)

    if selection.stream_copy:
        status("Stream copy: codecs already fit the target container", quiet)
    else:
        status(
            f"Encoded with video={selection.video_codec} "
            f"audio={selection.audio_codec}",
            quiet,
        )
    message = f"Conversion completed successfully!\nOutput saved to: {output_file}"
    if json_output:
        success_output(CLIResult(True, "Conversion completed", data), True)
    elif not obj.quiet:
        click.echo(message)
