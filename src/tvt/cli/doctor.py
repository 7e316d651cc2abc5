"""tvt doctor command for checking external tool health."""

from __future__ import annotations

import json
import sys

import click

from tvt.cli.context import CLIContext
from tvt.cli.exit_codes import ExitCode
from tvt.tools.discovery import ToolInfo, detect_tool


INSTALL_HINT = "Install ffmpeg: https://ffmpeg.org/download.html"


def _format_status(available: bool) -> str:
    return "✓" if available else "✗"


def _tool_dict(info: ToolInfo) -> dict[str, object]:
    return {
        "available": info.is_available,
        "path": str(info.path) if info.path else None,
        "version": info.version,
    }


@click.command("doctor")
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
@click.pass_obj
def doctor_command(obj: CLIContext, json_output: bool) -> None:
    """Check that ffmpeg and ffprobe are installed.

    Exit codes:
      0 - Both tools available
      30 - At least one tool is missing
    """
    tools = [
        detect_tool("ffprobe", obj.config.tools.ffprobe),
        detect_tool("ffmpeg", obj.config.tools.ffmpeg),
    ]
    missing = [t.name for t in tools if not t.is_available]

    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "failed" if missing else "completed",
                    "tools": {t.name: _tool_dict(t) for t in tools},
                },
                indent=2,
            )
        )
    else:
        click.echo("External Tool Health Check")
        click.echo("=" * 40)
        for tool in tools:
            version = tool.version or ("unknown version" if tool.path else "not found")
            path_info = f" ({tool.path})" if tool.path and obj.verbose else ""
            click.echo(
                f"  {_format_status(tool.is_available)} {tool.name:<8} "
                f"{version}{path_info}"
            )
            if not tool.is_available:
                click.echo(f"    └─ {INSTALL_HINT}")
        click.echo()
        if missing:
            click.echo(f"Missing: {', '.join(missing)}")
        else:
            click.echo("All tools available.")

    if missing:
        sys.exit(ExitCode.TOOL_NOT_AVAILABLE)
