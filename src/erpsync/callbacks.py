r"""Callback types and data structures for observability.

This module lets users hook into the retry lifecycle for metrics,
alerting or persistence of failures, in addition to the log records the
orchestrator always emits.

The callback system provides three lifecycle hooks:
- on_retry: Called before each retry, before the backoff delay
- on_success: Called when an operation succeeds
- on_failure: Called when the orchestrator gives up

Example:
    ```pycon
    >>> from erpsync.callbacks import RetryInfo
    >>> from erpsync.retry import CallbackConfig
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"{info.operation}: attempt {info.attempt}/{info.max_retries + 1}")
    ...
    >>> callbacks = CallbackConfig(on_retry=log_retry)

    ```
"""

from __future__ import annotations

__all__ = [
    "FailureInfo",
    "RetryInfo",
    "SuccessInfo",
    "invoke_on_failure",
    "invoke_on_retry",
    "invoke_on_success",
]

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from erpsync.exceptions import ClassifiedError


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        operation: The name of the orchestrated operation.
        attempt: The upcoming attempt number (1-indexed). First retry is attempt 2.
        max_retries: Maximum number of retry attempts configured.
        wait_time: The sleep time in seconds before this retry.
        error: The classified error that triggered the retry.
    """

    operation: str
    attempt: int
    max_retries: int
    wait_time: float
    error: ClassifiedError


@dataclass
class SuccessInfo:
    """Information passed to on_success callback.

    Attributes:
        operation: The name of the orchestrated operation.
        attempt: The attempt number that succeeded (1-indexed).
        max_retries: Maximum number of retry attempts configured.
        value: The value returned by the operation.
        total_time: Total time spent on all attempts including backoff (seconds).
    """

    operation: str
    attempt: int
    max_retries: int
    value: Any
    total_time: float


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        operation: The name of the orchestrated operation.
        attempt: The final attempt number (1-indexed).
        max_retries: Maximum number of retry attempts configured.
        error: The final classified error.
        total_time: Total time spent on all attempts including backoff (seconds).
    """

    operation: str
    attempt: int
    max_retries: int
    error: ClassifiedError
    total_time: float


def invoke_on_retry(
    on_retry: Callable[[RetryInfo], None] | None,
    *,
    operation: str,
    attempt: int,
    max_retries: int,
    sleep_time: float,
    error: ClassifiedError,
) -> None:
    """Invoke on_retry callback if provided.

    Args:
        on_retry: Optional callback to invoke before each retry.
        operation: The name of the orchestrated operation.
        attempt: The failed attempt number (0-indexed internally). The
            callback receives the next attempt number as a 1-indexed
            value, so after the first failed attempt it receives 2.
        max_retries: Maximum number of retry attempts.
        sleep_time: The sleep time in seconds before this retry.
        error: The classified error that triggered the retry.
    """
    if on_retry is not None:
        on_retry(
            RetryInfo(
                operation=operation,
                attempt=attempt + 2,
                max_retries=max_retries,
                wait_time=sleep_time,
                error=error,
            )
        )


def invoke_on_success(
    on_success: Callable[[SuccessInfo], None] | None,
    *,
    operation: str,
    attempt: int,
    max_retries: int,
    value: Any,
    start_time: float,
) -> None:
    """Invoke on_success callback if provided.

    Args:
        on_success: Optional callback to invoke when the operation succeeds.
        operation: The name of the orchestrated operation.
        attempt: The attempt number that succeeded (0-indexed internally).
        max_retries: Maximum number of retry attempts.
        value: The value returned by the operation.
        start_time: The timestamp when the orchestration started.
    """
    if on_success is not None:
        on_success(
            SuccessInfo(
                operation=operation,
                attempt=attempt + 1,
                max_retries=max_retries,
                value=value,
                total_time=time.time() - start_time,
            )
        )


def invoke_on_failure(
    on_failure: Callable[[FailureInfo], None] | None,
    *,
    operation: str,
    attempt: int,
    max_retries: int,
    error: ClassifiedError,
    start_time: float,
) -> None:
    """Invoke on_failure callback if provided.

    Args:
        on_failure: Optional callback to invoke when the orchestrator gives up.
        operation: The name of the orchestrated operation.
        attempt: The final attempt number (0-indexed internally).
        max_retries: Maximum number of retry attempts.
        error: The final classified error.
        start_time: The timestamp when the orchestration started.
    """
    if on_failure is not None:
        on_failure(
            FailureInfo(
                operation=operation,
                attempt=attempt + 1,
                max_retries=max_retries,
                error=error,
                total_time=time.time() - start_time,
            )
        )
