"""CLI extract command."""

from __future__ import annotations

import shlex
from pathlib import Path

import click

from tvt.cli.context import CLIContext
from tvt.cli.exit_codes import ExitCode
from tvt.cli.output import CLIResult, error_exit, fail, status, success_output
from tvt.domain.enums import Preset
from tvt.domain.models import AudioExtractionParameters
from tvt.exceptions import TranscoderError
from tvt.security.validation import validate_preset
from tvt.services.extract import ExtractRequest, extract_audio


@click.command("extract")
@click.argument("input_file", metavar="INPUT", type=click.Path(path_type=Path))
@click.argument("output_file", metavar="OUTPUT", type=click.Path(path_type=Path))
@click.option(
    "--quality",
    type=click.Choice(Preset.names()),
    default=None,
    help="Audio quality (low=128k, medium=192k, high=320k)",
)
@click.option("--bitrate", "-b", default=None, help="Audio bitrate (e.g., 192k)")
@click.option("--codec", "-c", default=None, help="Audio encoder (e.g., libmp3lame)")
@click.option("--sample-rate", "-s", default=None, help="Sample rate in Hz")
@click.option("--channels", default=None, help="Channel count (1, 2, 6 or 8)")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing output")
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
@click.pass_obj
def extract_command(
    obj: CLIContext,
    input_file: Path,
    output_file: Path,
    quality: str | None,
    bitrate: str | None,
    codec: str | None,
    sample_rate: str | None,
    channels: str | None,
    force: bool,
    timeout: float | None,
    dry_run: bool,
    json_output: bool,
) -> None:
    """Extract the audio track of a media file.

    OUTPUT's extension (mp3, wav, aac, flac, ogg, m4a) selects the audio
    encoder unless --codec is given.
    """
    quiet = obj.quiet or json_output

    if output_file.exists() and not force and not dry_run:
        error_exit(
            f"Output file already exists: {output_file} (use --force to overwrite)",
            ExitCode.OUTPUT_EXISTS,
            json_output,
        )

    params = AudioExtractionParameters(
        codec=codec, bitrate=bitrate, sample_rate=sample_rate, channels=channels
    )
    renderer = obj.make_renderer(json_output)
    status(f"Extracting audio from {input_file} to {output_file}...", quiet)
    try:
        request = ExtractRequest(
            input_path=input_file,
            output_path=output_file,
            quality=validate_preset(
                quality or obj.config.transcode.default_audio_quality
            ),
            params=params,
        )
        result = extract_audio(
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

    plan = result.plan
    data = {
        "input": str(input_file),
        "output": str(output_file),
        "codec": plan.codec,
        "bitrate": plan.bitrate,
        "sample_rate": plan.sample_rate,
        "channels": plan.channels,
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
    if json_output:
        success_output(CLIResult(True, "Audio extraction completed", data), True)
    elif not obj.quiet:
        click.echo(
            f"Audio extracted successfully!\nOutput saved to: {output_file}"
        )
