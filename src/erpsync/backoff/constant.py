r"""Constant backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from erpsync.backoff.base import BaseBackoffStrategy, check_attempt


class ConstantBackoff(BaseBackoffStrategy):
    """Constant/fixed backoff strategy.

    Returns the same delay for every retry attempt, regardless of the
    attempt number. This is the policy used when exponential backoff is
    disabled in the retry configuration.

    Args:
        delay: The fixed delay in seconds to use for all retry attempts (default: 1.0).

    Example:
        ```pycon
        >>> from erpsync.backoff import ConstantBackoff
        >>> backoff = ConstantBackoff(delay=2.5)
        >>> backoff.calculate(0)  # First retry
        2.5
        >>> backoff.calculate(10)  # Eleventh retry
        2.5

        ```
    """

    def __init__(self, delay: float = 1.0) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)

        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, attempt: int) -> float:
        """Calculate constant backoff delay.

        Args:
            attempt: The current attempt number (0-indexed, only validated).

        Returns:
            The fixed delay value.

        Raises:
            ValueError: If attempt is negative.
        """
        check_attempt(attempt)
        return self.delay
