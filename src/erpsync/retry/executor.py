r"""Synchronous retry executor.

This module provides the RetryExecutor class that runs an operation
through the bounded-attempt retry state machine.
"""

from __future__ import annotations

__all__ = ["RetryExecutor", "default_context"]

import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

from erpsync.backoff.policy import backoff_from_config
from erpsync.retry.config import CallbackConfig, OperationContext, RetryConfig
from erpsync.retry.decider import RetryDecider
from erpsync.retry.manager import CallbackManager
from erpsync.retry.outcome import run_attempt
from erpsync.utils.structured_logging import correlation_scope

if TYPE_CHECKING:
    import random
    from collections.abc import Callable

    from erpsync.backoff.base import BaseBackoffStrategy

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


def default_context(operation: Callable[..., Any]) -> OperationContext:
    """Create a context named after the operation.

    Args:
        operation: The orchestrated operation.

    Returns:
        A context without correlation ids.
    """
    return OperationContext(getattr(operation, "__qualname__", None) or type(operation).__name__)


class RetryExecutor:
    """Executes operations with automatic retry logic.

    The executor holds only immutable configuration. The attempt counter
    and the last error are local to each ``execute`` call, so a single
    executor can be shared between threads.

    The executor orchestrates the following components:
    - BaseBackoffStrategy: Calculates backoff delays between retries
    - RetryDecider: Determines whether a classified failure is retried
    - CallbackManager: Emits log records and invokes user callbacks

    Args:
        config: Retry configuration. Defaults to ``RetryConfig()``.
        callbacks: Callback configuration. Defaults to no callbacks.
        rng: Optional random number generator used for the jitter.

    Example:
        ```pycon
        >>> from erpsync.retry import OperationContext, RetryConfig, RetryExecutor
        >>> executor = RetryExecutor(RetryConfig(max_retries=2))
        >>> executor.execute(lambda: "done", OperationContext("noop"))
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

    def execute(self, operation: Callable[[], T], context: OperationContext | None = None) -> T:
        """Execute an operation with automatic retry logic.

        Invokes the operation up to ``max_retries + 1`` times. Each
        attempt is folded into a success or a classified failure. A
        failure is logged, then either retried after the backoff delay
        or raised when the budget is exhausted or the error kind is not
        retryable.

        Args:
            operation: The zero-argument operation. It may return a
                value, return a ``Success``/``Failure`` outcome, or raise.
            context: The context attached to every log record. Defaults
                to a context named after the operation.

        Returns:
            The value produced by the first successful attempt.

        Raises:
            ClassifiedError: The last classified error, if no attempt
                succeeded.
        """
        context = context if context is not None else default_context(operation)
        manager = CallbackManager(context, self.callbacks)
        max_retries = self.config.max_retries
        start_time = time.time()

        with correlation_scope(**context.correlation_ids):
            attempt = 0
            while True:
                outcome = run_attempt(operation)
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
                time.sleep(sleep_time)
                attempt += 1
