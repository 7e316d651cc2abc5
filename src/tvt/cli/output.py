"""Unified CLI output formatting for JSON and human-readable output."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from typing import Any, NoReturn

import click

from tvt.cli.exit_codes import ExitCode, exit_code_for
from tvt.exceptions import ExecutionError, TranscoderError


@dataclass
class CLIResult:
    """Result object for CLI operations.

    Provides consistent JSON serialization for command results.
    """

    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> str:
        output: dict[str, Any] = {
            "status": "completed" if self.success else "failed",
            "message": self.message,
        }
        output.update(self.data)
        return json.dumps(output, indent=2)


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
    details: list[str] | None = None,
) -> NoReturn:
    """Exit with formatted error message.

    Args:
        message: Error message to display.
        code: Exit code to use (ExitCode enum or int).
        json_output: Whether to format output as JSON.
        details: Extra lines (e.g., ffmpeg diagnostics) shown after the
            message, or included as "details" in JSON.

    Note:
        This function never returns; it always calls sys.exit().
    """
    if isinstance(code, ExitCode):
        code_name = code.name
        exit_value = int(code)
    else:
        code_name = "UNKNOWN_ERROR"
        exit_value = code

    if json_output:
        error: dict[str, Any] = {"code": code_name, "message": message}
        if details:
            error["details"] = details
        click.echo(json.dumps({"status": "failed", "error": error}), err=True)
    else:
        click.echo(f"Error: {message}", err=True)
        if details:
            click.echo("ffmpeg output:", err=True)
            for line in details:
                click.echo(f"  {line}", err=True)

    sys.exit(exit_value)


def fail(error: TranscoderError, json_output: bool = False) -> NoReturn:
    """Report an operation error and exit with its mapped code."""
    details = error.diagnostics if isinstance(error, ExecutionError) else None
    error_exit(error.message, exit_code_for(error), json_output, details)


def success_output(result: CLIResult, json_output: bool = False) -> None:
    if json_output:
        click.echo(result.to_json())
    else:
        click.echo(result.message)


def status(message: str, quiet: bool = False) -> None:
    """Print a progress banner unless output is suppressed."""
    if not quiet:
        click.echo(message)
