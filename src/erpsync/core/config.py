r"""Default configuration values for resilient ERP calls.

This module gathers the constants used as defaults by the retry
orchestrator and the remote call gateway. All durations are expressed in
seconds.
"""

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
]

from erpsync.exceptions import ErrorKind

# Default timeout in seconds for a single remote call
DEFAULT_TIMEOUT = 10.0

# Default maximum number of retry attempts
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 3

# Default base delay before the first retry
# With exponential backoff: 1st retry waits ~1s, 2nd ~2s, 3rd ~4s (before jitter)
DEFAULT_BASE_DELAY = 1.0

# Upper bound for a single backoff delay
DEFAULT_MAX_DELAY = 10.0

DEFAULT_USE_EXPONENTIAL_BACKOFF = True

# Error kinds that are transient and worth retrying
# NETWORK: connection refused, DNS failure, timeout before any response
# SERVER: 5xx responses
DEFAULT_RETRYABLE_KINDS: frozenset[ErrorKind] = frozenset({ErrorKind.NETWORK, ErrorKind.SERVER})

DEFAULT_API_ENDPOINT = "https://main.metakocka.si/rest/eshop/v1/json/"

# Names of the query parameters carrying the credentials on every call
AUTH_PARAM_SECRET_KEY = "secret_key"
AUTH_PARAM_COMPANY_ID = "company_id"

# HTTP methods that carry a JSON body
MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH"})
