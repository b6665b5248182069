r"""Unit tests for ConstantBackoff strategy."""

from __future__ import annotations

import pytest

from erpsync.backoff import ConstantBackoff


def test_constant_backoff_basic() -> None:
    """Test that the delay does not depend on the attempt."""
    backoff = ConstantBackoff(delay=2.5)
    assert backoff.calculate(0) == 2.5
    assert backoff.calculate(1) == 2.5
    assert backoff.calculate(10) == 2.5


def test_constant_backoff_default_delay() -> None:
    assert ConstantBackoff().calculate(0) == 1.0


def test_constant_backoff_zero_delay() -> None:
    assert ConstantBackoff(delay=0.0).calculate(3) == 0.0


def test_constant_backoff_repr() -> None:
    assert repr(ConstantBackoff(delay=0.5)) == "ConstantBackoff(delay=0.5)"


def test_constant_backoff_invalid_delay() -> None:
    """Test that negative delay raises ValueError."""
    with pytest.raises(ValueError, match=r"delay must be non-negative"):
        ConstantBackoff(delay=-1.0)


def test_constant_backoff_negative_attempt() -> None:
    with pytest.raises(ValueError, match=r"attempt must be >= 0, got -1"):
        ConstantBackoff().calculate(-1)
