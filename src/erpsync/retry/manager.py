r"""Lifecycle manager emitting log records and invoking callbacks.

This module provides the CallbackManager class that handles the
structured log records and the user-defined callbacks at the various
points of the retry lifecycle.
"""

from __future__ import annotations

__all__ = ["LOG_CATEGORY", "CallbackManager"]

import logging
from typing import TYPE_CHECKING, Any

from erpsync.callbacks import invoke_on_failure, invoke_on_retry, invoke_on_success
from erpsync.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from erpsync.exceptions import ClassifiedError
    from erpsync.retry.config import CallbackConfig, OperationContext

logger: logging.Logger = logging.getLogger(__name__)

LOG_CATEGORY = "retry"


class CallbackManager:
    """Manages log records and callback invocations during one
    orchestration.

    Every record carries the category, the operation name and the
    correlation ids of the context.

    Attributes:
        context: The context of the orchestrated call.
        callbacks: Configuration containing callback functions for lifecycle events.
    """

    def __init__(self, context: OperationContext, callbacks: CallbackConfig) -> None:
        self.context = context
        self.callbacks = callbacks

    def _log(self, level: int, message: str, **fields: Any) -> None:
        log_structured(
            logger, level, message, category=LOG_CATEGORY, **self.context.log_fields(), **fields
        )

    def on_attempt_failed(
        self, error: ClassifiedError, attempt: int, max_retries: int, will_retry: bool
    ) -> None:
        """Log a failed attempt.

        Args:
            error: The classified error of the attempt.
            attempt: The failed attempt number (0-indexed).
            max_retries: Maximum number of retries.
            will_retry: Whether a retry follows.
        """
        self._log(
            logging.ERROR,
            f"{self.context.operation_name} failed on attempt {attempt + 1}/{max_retries + 1} "
            f"({error.kind.name}): {error.message}",
            attempt_number=attempt + 1,
            max_retries=max_retries,
            classified_kind=error.kind.name,
            status_code=error.status_code,
            will_retry=will_retry,
        )

    def on_retry(
        self, error: ClassifiedError, attempt: int, max_retries: int, sleep_time: float
    ) -> None:
        """Log the upcoming retry and invoke on_retry callback.

        Args:
            error: The classified error that triggered the retry.
            attempt: The failed attempt number (0-indexed).
            max_retries: Maximum number of retries.
            sleep_time: Sleep time before the retry.
        """
        self._log(
            logging.INFO,
            f"Retrying {self.context.operation_name} (attempt {attempt + 2}/{max_retries + 1}) "
            f"in {sleep_time:.2f}s",
            attempt_number=attempt + 2,
            max_retries=max_retries,
            classified_kind=error.kind.name,
            delay=sleep_time,
            will_retry=True,
        )
        invoke_on_retry(
            self.callbacks.on_retry,
            operation=self.context.operation_name,
            attempt=attempt,
            max_retries=max_retries,
            sleep_time=sleep_time,
            error=error,
        )

    def on_success(self, value: Any, attempt: int, max_retries: int, start_time: float) -> None:
        """Log the success and invoke on_success callback.

        Args:
            value: The value returned by the operation.
            attempt: Attempt number that succeeded (0-indexed).
            max_retries: Maximum number of retries.
            start_time: Timestamp when the orchestration started.
        """
        if attempt > 0:
            self._log(
                logging.INFO,
                f"{self.context.operation_name} succeeded on attempt {attempt + 1}",
                attempt_number=attempt + 1,
                max_retries=max_retries,
            )
        invoke_on_success(
            self.callbacks.on_success,
            operation=self.context.operation_name,
            attempt=attempt,
            max_retries=max_retries,
            value=value,
            start_time=start_time,
        )

    def on_failure(
        self, error: ClassifiedError, attempt: int, max_retries: int, start_time: float
    ) -> None:
        """Invoke on_failure callback.

        Args:
            error: The terminal classified error.
            attempt: Final attempt number (0-indexed).
            max_retries: Maximum number of retries.
            start_time: Timestamp when the orchestration started.
        """
        invoke_on_failure(
            self.callbacks.on_failure,
            operation=self.context.operation_name,
            attempt=attempt,
            max_retries=max_retries,
            error=error,
            start_time=start_time,
        )
