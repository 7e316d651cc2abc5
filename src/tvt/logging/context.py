"""Operation context for log records.

While an operation runs, every log record carries the operation name and
the input file, so interleaved messages from the probe, the builder and the
runner can be attributed. Propagated with contextvars.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)
_input_file: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "input_file", default=None
)


@contextmanager
def operation_context(
    operation: str, input_file: Path | str | None = None
) -> Generator[None, None, None]:
    """Tag log records emitted inside the block.

    Example:
        with operation_context("convert", "clip.mp4"):
            logger.info("Starting")  # "[convert:clip.mp4] ..."
    """
    op_token = _operation.set(operation)
    file_token = _input_file.set(str(input_file) if input_file is not None else None)
    try:
        yield
    finally:
        _operation.reset(op_token)
        _input_file.reset(file_token)


def get_operation_context() -> tuple[str | None, str | None]:
    """Return (operation, input_file); either may be None."""
    return _operation.get(), _input_file.get()


class OperationContextFilter(logging.Filter):
    """Logging filter that injects the operation context into records.

    Adds operation and input_file attributes for JSON output, and op_tag
    ("[convert:clip.mp4] " or "") for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        operation, input_file = get_operation_context()
        record.operation = operation
        record.input_file = input_file

        if operation:
            name = Path(input_file).name if input_file else ""
            record.op_tag = f"[{operation}:{name}] " if name else f"[{operation}] "
        else:
            record.op_tag = ""

        return True  # Never filter out records
