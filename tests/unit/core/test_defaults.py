r"""Unit tests for the default configuration constants."""

from __future__ import annotations

from erpsync.core import config
from erpsync.exceptions import ErrorKind


def test_default_retry_values() -> None:
    assert config.DEFAULT_MAX_RETRIES == 3
    assert config.DEFAULT_BASE_DELAY == 1.0
    assert config.DEFAULT_MAX_DELAY == 10.0
    assert config.DEFAULT_USE_EXPONENTIAL_BACKOFF is True


def test_default_retryable_kinds() -> None:
    """Test that only transient kinds are retried by default."""
    assert config.DEFAULT_RETRYABLE_KINDS == frozenset({ErrorKind.NETWORK, ErrorKind.SERVER})


def test_auth_param_names() -> None:
    assert config.AUTH_PARAM_SECRET_KEY == "secret_key"
    assert config.AUTH_PARAM_COMPANY_ID == "company_id"


def test_mutating_methods() -> None:
    assert config.MUTATING_METHODS == frozenset({"POST", "PUT", "PATCH"})
