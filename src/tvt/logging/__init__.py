"""Logging setup and operation context."""

from tvt.logging.config import configure_logging
from tvt.logging.context import (
    OperationContextFilter,
    get_operation_context,
    operation_context,
)
from tvt.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "OperationContextFilter",
    "configure_logging",
    "get_operation_context",
    "operation_context",
]
