r"""Utility helpers for logging and response handling."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_ids",
    "correlation_scope",
    "extract_error_message",
    "get_correlation_ids",
    "log_structured",
    "parse_payload",
    "set_correlation_ids",
]

from erpsync.utils.response import extract_error_message, parse_payload
from erpsync.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_ids,
    correlation_scope,
    get_correlation_ids,
    log_structured,
    set_correlation_ids,
)
