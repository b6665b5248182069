r"""Unit tests for parameter validation."""

from __future__ import annotations

import httpx
import pytest

from erpsync.core.validation import validate_retry_params, validate_timeout
from erpsync.exceptions import ErrorKind

#####################################
#     Tests for validate_timeout    #
#####################################


@pytest.mark.parametrize("timeout", [0.1, 10, 30.0, httpx.Timeout(5.0)])
def test_validate_timeout_valid(timeout: float | httpx.Timeout) -> None:
    validate_timeout(timeout)


@pytest.mark.parametrize("timeout", [0, 0.0, -1.0])
def test_validate_timeout_invalid(timeout: float) -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        validate_timeout(timeout)


##########################################
#     Tests for validate_retry_params    #
##########################################


def test_validate_retry_params_valid() -> None:
    validate_retry_params(
        max_retries=0,
        base_delay=0.0,
        max_delay=0.0,
        retryable_kinds={ErrorKind.SERVER},
    )


def test_validate_retry_params_negative_max_retries() -> None:
    with pytest.raises(ValueError, match=r"max_retries must be >= 0, got -1"):
        validate_retry_params(max_retries=-1, base_delay=1.0, max_delay=10.0)


def test_validate_retry_params_negative_base_delay() -> None:
    with pytest.raises(ValueError, match=r"base_delay must be >= 0, got -0.5"):
        validate_retry_params(max_retries=3, base_delay=-0.5, max_delay=10.0)


def test_validate_retry_params_max_delay_below_base_delay() -> None:
    with pytest.raises(ValueError, match=r"max_delay must be >= base_delay \(2.0\), got 1.0"):
        validate_retry_params(max_retries=3, base_delay=2.0, max_delay=1.0)


def test_validate_retry_params_invalid_kind() -> None:
    with pytest.raises(ValueError, match=r"retryable_kinds must only contain ErrorKind members"):
        validate_retry_params(
            max_retries=3, base_delay=1.0, max_delay=10.0, retryable_kinds={"server"}
        )


@pytest.mark.parametrize("max_retries", [2.5, 3.0, True, False, "3", None])
def test_validate_retry_params_max_retries_not_integer(max_retries: object) -> None:
    """Test that max_retries must be an int, and not a bool."""
    with pytest.raises(TypeError, match=r"max_retries must be an integer"):
        validate_retry_params(max_retries=max_retries, base_delay=1.0, max_delay=10.0)
