r"""Structured logging utilities for machine-readable log output.

This module provides a JSON formatter, context-scoped correlation ids
and a helper to attach structured fields to log records. The retry
orchestrator emits every record through ``log_structured`` so any
structured-log consumer can rebuild the retry timeline of a call.

Example:
    Enable structured logging for erpsync:

    ```python
    import logging
    from erpsync.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("erpsync")
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    ```

    Use correlation ids to track related calls:

    ```python
    from erpsync.utils.structured_logging import correlation_scope

    with correlation_scope(userId="user-1", entityId="product-9"):
        gateway.request("GET", "product_list")
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_ids",
    "correlation_scope",
    "get_correlation_ids",
    "log_structured",
    "set_correlation_ids",
]

import contextvars
import json
import logging
import time
from contextlib import contextmanager
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

_EMPTY: Mapping[str, str] = MappingProxyType({})

# Context variable for correlation ids (thread-safe and async-safe)
_correlation_ids: contextvars.ContextVar[Mapping[str, str]] = contextvars.ContextVar(
    "correlation_ids", default=_EMPTY
)

_RESERVED_ATTRIBUTES = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "msecs",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "sinfo",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    }
)


def get_correlation_ids() -> Mapping[str, str]:
    """Get the correlation ids of the current context.

    Returns:
        A read-only mapping of correlation ids. It is empty if none
        were set.

    Example:
        ```pycon
        >>> from erpsync.utils.structured_logging import (
        ...     clear_correlation_ids,
        ...     get_correlation_ids,
        ...     set_correlation_ids,
        ... )
        >>> clear_correlation_ids()
        >>> dict(get_correlation_ids())
        {}
        >>> set_correlation_ids(userId="u-1")
        >>> dict(get_correlation_ids())
        {'userId': 'u-1'}
        >>> clear_correlation_ids()

        ```
    """
    return _correlation_ids.get()


def set_correlation_ids(**ids: str) -> None:
    """Set the correlation ids for the current context.

    The ids replace any previously set ids. They are stored in a
    context variable, so concurrent threads and tasks do not see each
    other's ids.

    Args:
        **ids: The correlation ids, e.g. ``userId="u-1"``.
    """
    _correlation_ids.set(MappingProxyType(dict(ids)))


def clear_correlation_ids() -> None:
    """Clear the correlation ids of the current context."""
    _correlation_ids.set(_EMPTY)


@contextmanager
def correlation_scope(**ids: str) -> Generator[Mapping[str, str], None, None]:
    """Add correlation ids to the current context for the duration of a
    block.

    The ids are merged over the ids already set, and the previous ids
    are restored on exit.

    Args:
        **ids: The correlation ids to add.

    Yields:
        The merged correlation ids.

    Example:
        ```pycon
        >>> from erpsync.utils.structured_logging import (
        ...     clear_correlation_ids,
        ...     correlation_scope,
        ...     get_correlation_ids,
        ... )
        >>> clear_correlation_ids()
        >>> with correlation_scope(userId="u-1"):
        ...     dict(get_correlation_ids())
        ...
        {'userId': 'u-1'}
        >>> dict(get_correlation_ids())
        {}

        ```
    """
    merged = MappingProxyType({**_correlation_ids.get(), **ids})
    token = _correlation_ids.set(merged)
    try:
        yield merged
    finally:
        _correlation_ids.reset(token)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp
        - level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        - logger: Logger name
        - message: Log message
        - correlation_ids: Correlation ids of the current context, if any
        - module, function, line: Where the record originated
        - thread, process: Where the record was emitted

    Any additional fields added via the ``extra`` parameter of logging
    calls are included in the JSON output. Values that are not JSON
    serializable are rendered with ``str``.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from erpsync.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doctest_structured_formatter")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Product synced", extra={"category": "sync"})
        >>> '"category": "sync"' in stream.getvalue()
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.threadName,
            "process": record.process,
        }

        correlation_ids = get_correlation_ids()
        if correlation_ids:
            log_data["correlation_ids"] = dict(correlation_ids)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def formatTime(  # noqa: N802
        self, record: logging.LogRecord, datefmt: str | None = None  # noqa: ARG002
    ) -> str:
        """Format timestamp as ISO 8601 with millisecond precision."""
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured data.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.INFO).
        message: Log message.
        **extra: Additional structured fields to include in the log.

    Example:
        ```pycon
        >>> import logging
        >>> from erpsync.utils.structured_logging import log_structured
        >>> logger = logging.getLogger("doctest_log_structured")
        >>> log_structured(logger, logging.INFO, "Retrying", attempt_number=2, max_retries=3)

        ```
    """
    logger.log(level, message, extra=extra)
