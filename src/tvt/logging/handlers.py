"""JSON log output.

One JSON object per line. Attributes passed with extra={...} end up under
"context"; the operation tag set by OperationContextFilter is promoted to
top-level "operation" and "input_file" keys.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Everything a bare LogRecord carries, plus what Formatter and our filter add
_RESERVED = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "operation", "input_file", "op_tag"}


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Return the attributes a caller attached with extra={...}."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """Format log records as JSON objects.

    Keys: timestamp (ISO-8601 UTC), level, logger, message, then when
    present operation, input_file, context and exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        operation = getattr(record, "operation", None)
        if operation:
            entry["operation"] = operation
            input_file = getattr(record, "input_file", None)
            if input_file:
                entry["input_file"] = input_file

        extras = record_extras(record)
        if extras:
            entry["context"] = extras

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        elif record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)
