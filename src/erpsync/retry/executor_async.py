r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that runs an
asynchronous operation through the bounded-attempt retry state machine.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import asyncio
import logging
import time
from typing import TYPE_CHECKING, TypeVar

from erpsync.backoff.policy import backoff_from_config
from erpsync.retry.config import CallbackConfig, OperationContext, RetryConfig
from erpsync.retry.decider import RetryDecider
from erpsync.retry.executor import default_context
from erpsync.retry.manager import CallbackManager
from erpsync.retry.outcome import run_attempt_async
from erpsync.utils.structured_logging import correlation_scope

if TYPE_CHECKING:
    import random
    from collections.abc import Awaitable, Callable

    from erpsync.backoff.base import BaseBackoffStrategy

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncRetryExecutor:
    """Executes asynchronous operations with automatic retry logic.

    The backoff wait uses ``asyncio.sleep``, so other tasks keep running
    while an orchestration waits, and an outer ``asyncio.timeout`` or
    task cancellation interrupts the wait. On cancellation no further
    attempt is made.

    Args:
        config: Retry configuration. Defaults to ``RetryConfig()``.
        callbacks: Callback configuration. Defaults to no callbacks.
        rng: Optional random number generator used for the jitter.

    Example:
        ```pycon
        >>> import asyncio
        >>> from erpsync.retry import AsyncRetryExecutor, OperationContext
        >>> async def fetch() -> str:
        ...     return "done"
        ...
        >>> asyncio.run(AsyncRetryExecutor().execute(fetch, OperationContext("fetch")))
        'done'

        ```
    """

    def __init__(
        self,
        config: RetryConfig | None = None,
        callbacks: CallbackConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config: RetryConfig = config if config is not None else RetryConfig()
        self.callbacks: CallbackConfig = callbacks if callbacks is not None else CallbackConfig()
        self.decider: RetryDecider = RetryDecider(self.config)
        self.backoff: BaseBackoffStrategy = backoff_from_config(self.config, rng=rng)

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        context: OperationContext | None = None,
    ) -> T:
        """Execute an asynchronous operation with automatic retry logic.

        Args:
            operation: The zero-argument operation returning an
                awaitable. The awaited value may be a plain value or a
                ``Success``/``Failure`` outcome.
            context: The context attached to every log record. Defaults
                to a context named after the operation.

        Returns:
            The value produced by the first successful attempt.

        Raises:
            ClassifiedError: The last classified error, if no attempt
                succeeded.
            asyncio.CancelledError: If the orchestration is cancelled.
        """
        context = context if context is not None else default_context(operation)
        manager = CallbackManager(context, self.callbacks)
        max_retries = self.config.max_retries
        start_time = time.time()

        with correlation_scope(**context.correlation_ids):
            attempt = 0
            while True:
                outcome = await run_attempt_async(operation)
                if outcome.ok:
                    manager.on_success(outcome.value, attempt, max_retries, start_time)
                    return outcome.value

                error = outcome.error
                should_retry, reason = self.decider.should_retry(error, attempt)
                manager.on_attempt_failed(error, attempt, max_retries, will_retry=should_retry)
                if not should_retry:
                    logger.debug(f"{context.operation_name}: giving up ({reason})")
                    manager.on_failure(error, attempt, max_retries, start_time)
                    raise error from error.cause

                sleep_time = self.backoff.calculate(attempt)
                manager.on_retry(error, attempt, max_retries, sleep_time)
                await asyncio.sleep(sleep_time)
                attempt += 1
