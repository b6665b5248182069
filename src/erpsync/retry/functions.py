r"""Functional entry points of the retry orchestrator."""

from __future__ import annotations

__all__ = ["execute_with_retry", "execute_with_retry_async"]

from typing import TYPE_CHECKING, TypeVar

from erpsync.retry.executor import RetryExecutor
from erpsync.retry.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from erpsync.retry.config import CallbackConfig, OperationContext, RetryConfig

T = TypeVar("T")


def execute_with_retry(
    operation: Callable[[], T],
    context: OperationContext | None = None,
    config: RetryConfig | None = None,
    callbacks: CallbackConfig | None = None,
) -> T:
    r"""Run an operation until it succeeds, exhausts the retry budget, or
    fails with a non-retryable error kind.

    Args:
        operation: The zero-argument operation.
        context: The context attached to every log record.
        config: Retry configuration. Defaults to ``RetryConfig()``.
        callbacks: Optional lifecycle callbacks.

    Returns:
        The value produced by the first successful attempt.

    Raises:
        ClassifiedError: The last classified error, if no attempt
            succeeded.

    Example:
        ```pycon
        >>> from erpsync.retry import OperationContext, execute_with_retry
        >>> execute_with_retry(lambda: 42, OperationContext("answer"))
        42

        ```
    """
    return RetryExecutor(config, callbacks).execute(operation, context)


async def execute_with_retry_async(
    operation: Callable[[], Awaitable[T]],
    context: OperationContext | None = None,
    config: RetryConfig | None = None,
    callbacks: CallbackConfig | None = None,
) -> T:
    r"""Asynchronous counterpart of ``execute_with_retry``.

    Args:
        operation: The zero-argument operation returning an awaitable.
        context: The context attached to every log record.
        config: Retry configuration. Defaults to ``RetryConfig()``.
        callbacks: Optional lifecycle callbacks.

    Returns:
        The value produced by the first successful attempt.

    Raises:
        ClassifiedError: The last classified error, if no attempt
            succeeded.
    """
    return await AsyncRetryExecutor(config, callbacks).execute(operation, context)
