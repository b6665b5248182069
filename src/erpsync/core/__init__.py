r"""Core configuration and validation shared by the retry and gateway
packages."""

from __future__ import annotations

__all__ = [
    "AUTH_PARAM_COMPANY_ID",
    "AUTH_PARAM_SECRET_KEY",
    "DEFAULT_API_ENDPOINT",
    "DEFAULT_BASE_DELAY",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRYABLE_KINDS",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USE_EXPONENTIAL_BACKOFF",
    "MUTATING_METHODS",
    "validate_retry_params",
    "validate_timeout",
]

from erpsync.core.config import (
    AUTH_PARAM_COMPANY_ID,
    AUTH_PARAM_SECRET_KEY,
    DEFAULT_API_ENDPOINT,
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRYABLE_KINDS,
    DEFAULT_TIMEOUT,
    DEFAULT_USE_EXPONENTIAL_BACKOFF,
    MUTATING_METHODS,
)
from erpsync.core.validation import validate_retry_params, validate_timeout
