r"""Unit tests for the backoff policy."""

from __future__ import annotations

import random

import pytest

from erpsync.backoff import (
    ConstantBackoff,
    ExponentialJitterBackoff,
    backoff_from_config,
    compute_delay,
)
from erpsync.retry import RetryConfig

########################################
#     Tests for backoff_from_config    #
########################################


def test_backoff_from_config_exponential() -> None:
    backoff = backoff_from_config(RetryConfig(base_delay=0.5, max_delay=4.0))
    assert isinstance(backoff, ExponentialJitterBackoff)
    assert backoff.base_delay == 0.5
    assert backoff.max_delay == 4.0


def test_backoff_from_config_constant() -> None:
    backoff = backoff_from_config(RetryConfig(base_delay=0.5, use_exponential_backoff=False))
    assert isinstance(backoff, ConstantBackoff)
    assert backoff.delay == 0.5


###################################
#     Tests for compute_delay     #
###################################


@pytest.mark.parametrize("attempt", [0, 1, 5])
def test_compute_delay_constant(attempt: int) -> None:
    """Test that disabling exponential backoff returns the base delay."""
    config = RetryConfig(base_delay=2.0, use_exponential_backoff=False)
    assert compute_delay(attempt, config) == 2.0


def test_compute_delay_exponential_range() -> None:
    """Test the default policy bounds for the first retries."""
    config = RetryConfig()
    for _ in range(50):
        assert 0.5 <= compute_delay(0, config) <= 1.0
        assert 1.0 <= compute_delay(1, config) <= 2.0
        assert 2.0 <= compute_delay(2, config) <= 4.0
        assert compute_delay(6, config) <= 10.0


def test_compute_delay_with_seeded_rng_is_reproducible() -> None:
    config = RetryConfig()
    first = [compute_delay(n, config, rng=random.Random(7)) for n in range(4)]
    second = [compute_delay(n, config, rng=random.Random(7)) for n in range(4)]
    assert first == second


def test_compute_delay_negative_attempt() -> None:
    with pytest.raises(ValueError, match=r"attempt must be >= 0"):
        compute_delay(-1, RetryConfig())


def test_compute_delay_large_attempt_within_cap() -> None:
    assert compute_delay(1024, RetryConfig()) <= 10.0
