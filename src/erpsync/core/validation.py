r"""Parameter validation utilities for retry configuration.

This module provides validation functions to ensure retry parameters
meet the required constraints before being used by the orchestrator.
"""

from __future__ import annotations

__all__ = ["validate_retry_params", "validate_timeout"]

from typing import TYPE_CHECKING

from erpsync.exceptions import ErrorKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    import httpx


def validate_timeout(timeout: float | httpx.Timeout) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from erpsync.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_retry_params(
    max_retries: int,
    base_delay: float,
    max_delay: float,
    retryable_kinds: Iterable[object] = (),
) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Maximum number of retry attempts. Must be an integer
            >= 0.
            A value of 0 means no retries (only the initial attempt).
        base_delay: Delay in seconds before the first retry. Must be >= 0.
        max_delay: Upper bound for a single backoff delay. Must be
            >= base_delay.
        retryable_kinds: Error kinds allowed to trigger a retry. Every
            item must be an ``ErrorKind``.

    Raises:
        TypeError: If max_retries is not an integer.
        ValueError: If any parameter violates its constraint.

    Example:
        ```pycon
        >>> from erpsync.core.validation import validate_retry_params
        >>> validate_retry_params(max_retries=3, base_delay=1.0, max_delay=10.0)
        >>> validate_retry_params(max_retries=-1, base_delay=1.0, max_delay=10.0)
        Traceback (most recent call last):
        ...
        ValueError: max_retries must be >= 0, got -1

        ```
    """
    if isinstance(max_retries, bool) or not isinstance(max_retries, int):
        msg = f"max_retries must be an integer, got {max_retries!r}"
        raise TypeError(msg)
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    if base_delay < 0:
        msg = f"base_delay must be >= 0, got {base_delay}"
        raise ValueError(msg)
    if max_delay < base_delay:
        msg = f"max_delay must be >= base_delay ({base_delay}), got {max_delay}"
        raise ValueError(msg)
    for kind in retryable_kinds:
        if not isinstance(kind, ErrorKind):
            msg = f"retryable_kinds must only contain ErrorKind members, got {kind!r}"
            raise ValueError(msg)
