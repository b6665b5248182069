r"""Retry orchestrator.

This package runs operations through a bounded-attempt retry state
machine, using composition of a backoff strategy, a retry decider and a
lifecycle manager.

Public API:
    - RetryConfig: Immutable configuration for retry behavior
    - OperationContext: Read-only context attached to log records
    - CallbackConfig: Configuration for callbacks
    - Success / Failure: Discriminated outcome of one attempt
    - RetryDecider: Logic for deciding whether to retry
    - CallbackManager: Log records and callback invocations
    - RetryExecutor / AsyncRetryExecutor: Retry executors
    - execute_with_retry / execute_with_retry_async: Functional entry points
    - with_retry: Decorator form
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "AttemptOutcome",
    "CallbackConfig",
    "CallbackManager",
    "Failure",
    "OperationContext",
    "RetryConfig",
    "RetryDecider",
    "RetryExecutor",
    "Success",
    "execute_with_retry",
    "execute_with_retry_async",
    "with_retry",
]

from erpsync.retry.config import CallbackConfig, OperationContext, RetryConfig
from erpsync.retry.decider import RetryDecider
from erpsync.retry.executor import RetryExecutor
from erpsync.retry.executor_async import AsyncRetryExecutor
from erpsync.retry.functions import execute_with_retry, execute_with_retry_async
from erpsync.retry.manager import CallbackManager
from erpsync.retry.outcome import AttemptOutcome, Failure, Success
from erpsync.retry.wrapper import with_retry
