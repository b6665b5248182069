r"""Backoff policy derived from a retry configuration."""

from __future__ import annotations

__all__ = ["backoff_from_config", "compute_delay"]

import logging
from typing import TYPE_CHECKING

from erpsync.backoff.constant import ConstantBackoff
from erpsync.backoff.exponential import ExponentialJitterBackoff

if TYPE_CHECKING:
    import random

    from erpsync.backoff.base import BaseBackoffStrategy
    from erpsync.retry.config import RetryConfig

logger: logging.Logger = logging.getLogger(__name__)


def backoff_from_config(
    config: RetryConfig, rng: random.Random | None = None
) -> BaseBackoffStrategy:
    """Create the backoff strategy described by a retry configuration.

    Args:
        config: The retry configuration.
        rng: Optional random number generator used for the jitter.

    Returns:
        ``ExponentialJitterBackoff`` if exponential backoff is enabled,
        otherwise ``ConstantBackoff`` with the base delay.

    Example:
        ```pycon
        >>> from erpsync.backoff.policy import backoff_from_config
        >>> from erpsync.retry import RetryConfig
        >>> backoff_from_config(RetryConfig(use_exponential_backoff=False))
        ConstantBackoff(delay=1.0)
        >>> backoff_from_config(RetryConfig())
        ExponentialJitterBackoff(base_delay=1.0, max_delay=10.0)

        ```
    """
    if config.use_exponential_backoff:
        return ExponentialJitterBackoff(
            base_delay=config.base_delay, max_delay=config.max_delay, rng=rng
        )
    return ConstantBackoff(delay=config.base_delay)


def compute_delay(attempt: int, config: RetryConfig, rng: random.Random | None = None) -> float:
    """Compute the delay to wait before the next retry.

    Args:
        attempt: The 0-based index of the failed attempt. 0 is the
            delay before the first retry.
        config: The retry configuration.
        rng: Optional random number generator used for the jitter.

    Returns:
        The delay in seconds.

    Raises:
        ValueError: If attempt is negative.

    Example:
        ```pycon
        >>> from erpsync.backoff import compute_delay
        >>> from erpsync.retry import RetryConfig
        >>> compute_delay(3, RetryConfig(base_delay=0.5, use_exponential_backoff=False))
        0.5
        >>> 2.0 <= compute_delay(2, RetryConfig(base_delay=1.0)) <= 4.0
        True

        ```
    """
    delay = backoff_from_config(config, rng=rng).calculate(attempt)
    logger.debug(f"Computed backoff delay {delay:.3f}s for attempt {attempt}")
    return delay
