r"""Exponential backoff strategy with multiplicative jitter."""

from __future__ import annotations

__all__ = ["JITTER_MAX", "JITTER_MIN", "ExponentialJitterBackoff"]

import math
import random

from erpsync.backoff.base import BaseBackoffStrategy, check_attempt

# Bounds of the multiplicative jitter applied to the exponential delay
JITTER_MIN = 0.5
JITTER_MAX = 1.0


class ExponentialJitterBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy with mandatory jitter.

    Calculates delay as: min(base_delay * (2 ** attempt) * jitter, max_delay)
    where jitter is drawn uniformly from [0.5, 1.0]. The jitter
    desynchronizes concurrent callers retrying against the same service,
    so it cannot be disabled. The cap is applied after the jitter.

    Args:
        base_delay: The base delay in seconds (default: 1.0).
        max_delay: Maximum delay cap in seconds (default: 10.0).
            Must be >= base_delay.
        rng: Optional random number generator. If ``None``, the
            module-level functions of ``random`` are used, which are
            safe to share between threads.

    Example:
        ```pycon
        >>> import random
        >>> from erpsync.backoff import ExponentialJitterBackoff
        >>> backoff = ExponentialJitterBackoff(base_delay=1.0, max_delay=10.0)
        >>> 0.5 <= backoff.calculate(0) <= 1.0
        True
        >>> 2.0 <= backoff.calculate(2) <= 4.0
        True
        >>> backoff.calculate(10) <= 10.0
        True

        ```
    """

    def __init__(
        self,
        base_delay: float = 1.0,
        max_delay: float = 10.0,
        rng: random.Random | None = None,
    ) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if max_delay < base_delay:
            msg = f"max_delay must be >= base_delay ({base_delay}), got {max_delay}"
            raise ValueError(msg)

        self.base_delay = base_delay
        self.max_delay = max_delay
        self._rng = rng

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"max_delay={self.max_delay})"
        )

    def _jitter(self) -> float:
        uniform = self._rng.uniform if self._rng is not None else random.uniform
        return uniform(JITTER_MIN, JITTER_MAX)  # noqa: S311

    def calculate(self, attempt: int) -> float:
        """Calculate exponential backoff delay with jitter.

        Args:
            attempt: The current attempt number (0-indexed).

        Returns:
            The calculated delay: base_delay * (2 ** attempt) * jitter,
            capped at max_delay.

        Raises:
            ValueError: If attempt is negative.
        """
        check_attempt(attempt)
        if self.base_delay == 0:
            return 0.0
        # Past this exponent even the lowest jitter reaches the cap
        if attempt >= math.log2(self.max_delay / (self.base_delay * JITTER_MIN)):
            return self.max_delay
        delay = math.ldexp(self.base_delay, attempt)
        return min(delay * self._jitter(), self.max_delay)
