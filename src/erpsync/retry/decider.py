r"""Retry decision logic for classified failures.

This module provides the RetryDecider class that decides whether a
failed attempt is followed by a retry or is terminal.
"""

from __future__ import annotations

__all__ = ["RetryDecider"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from erpsync.exceptions import ClassifiedError
    from erpsync.retry.config import RetryConfig


class RetryDecider:
    """Decides whether a failed attempt should be retried.

    Args:
        config: The retry configuration.

    Example:
        ```pycon
        >>> from erpsync.exceptions import ClassifiedError, ErrorKind
        >>> from erpsync.retry import RetryConfig, RetryDecider
        >>> decider = RetryDecider(RetryConfig(max_retries=2))
        >>> decider.should_retry(ClassifiedError("down", ErrorKind.SERVER), attempt=0)
        (True, 'retryable kind SERVER')
        >>> decider.should_retry(ClassifiedError("denied", ErrorKind.AUTH), attempt=0)
        (False, 'non-retryable kind AUTH')
        >>> decider.should_retry(ClassifiedError("down", ErrorKind.SERVER), attempt=2)
        (False, 'max retries exhausted')

        ```
    """

    def __init__(self, config: RetryConfig) -> None:
        self.config = config

    def should_retry(self, error: ClassifiedError, attempt: int) -> tuple[bool, str]:
        """Determine if a failed attempt should trigger a retry.

        Args:
            error: The classified error of the failed attempt.
            attempt: The failed attempt number (0-indexed).

        Returns:
            Tuple of (should_retry, reason).
        """
        if not self.config.is_retryable(error.kind):
            return (False, f"non-retryable kind {error.kind.name}")
        if attempt >= self.config.max_retries:
            return (False, "max retries exhausted")
        return (True, f"retryable kind {error.kind.name}")
